"""
Blog post services.

Services sit between the API views and the post store. They resolve the
configured store, run the operation and record what happened, so views and
management commands share the same entry points.
"""

import logging
from collections.abc import Mapping
from typing import Any

from .records import Post
from .store import PostStore, get_post_store

logger = logging.getLogger(__name__)


def list_posts(*, store: PostStore | None = None) -> list[Post]:
    """Returns every stored post in insertion order."""
    store = store or get_post_store()
    return store.find_all()


def get_post(post_id: str, *, store: PostStore | None = None) -> Post:
    """Returns a single post or raises `NotFound`."""
    store = store or get_post_store()
    return store.find_by_id(post_id)


def create_post(
    *, author: str, title: str, content: str = "", store: PostStore | None = None
) -> Post:
    """
    Creates a new post.

    Args:
        author: The name of the post's author.
        title: The title of the post.
        content: The body of the post, possibly empty.
        store: The store to write to; defaults to the configured one.

    Returns:
        The stored Post, including its generated id and creation time.
    """
    store = store or get_post_store()
    post = store.insert({"author": author, "title": title, "content": content})
    logger.info("Blog post created.", extra={"post_id": post.id})
    return post


def update_post(
    post_id: str, changes: Mapping[str, Any], *, store: PostStore | None = None
) -> Post:
    """
    Applies a partial update to an existing post.

    Only `author`, `title` and `content` are changed; `id` and `created`
    are ignored if present.
    """
    store = store or get_post_store()
    post = store.update(post_id, changes)
    logger.info(
        "Blog post updated.",
        extra={"post_id": post_id, "fields": sorted(changes)},
    )
    return post


def delete_post(post_id: str, *, store: PostStore | None = None) -> bool:
    """Deletes a post, returning whether one was actually removed."""
    store = store or get_post_store()
    deleted = store.delete_by_id(post_id)
    if deleted:
        logger.info("Blog post deleted.", extra={"post_id": post_id})
    else:
        logger.warning("Delete requested for missing blog post.", extra={"post_id": post_id})
    return deleted
