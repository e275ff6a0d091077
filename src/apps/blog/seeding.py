"""
Synthetic blog post data for seeding a store.

Used by the ``seed_posts`` management command and by the test suite, which
wraps `seed_blog_posts` in a fixture so every test starts from a known set of
posts and ends with an empty store.
"""

import logging
from collections.abc import Callable

from faker import Faker

from .records import Post
from .store import PostStore

logger = logging.getLogger(__name__)

DEFAULT_SEED_COUNT = 10


def generate_fake_post(fake: Faker | None = None) -> dict[str, str]:
    """Returns a draft with a fake author, title and content."""
    fake = fake or Faker()
    return {
        "author": fake.name(),
        "title": fake.sentence(nb_words=6).rstrip("."),
        "content": fake.paragraph(nb_sentences=4),
    }


def seed_blog_posts(
    store: PostStore, count: int = DEFAULT_SEED_COUNT, fake: Faker | None = None
) -> tuple[list[Post], Callable[[], int]]:
    """
    Inserts `count` synthetic posts into `store`.

    Returns:
        The inserted posts and a teardown callable that drops every post in
        the store, returning how many were removed.
    """
    fake = fake or Faker()
    logger.info(f"Seeding {count} blog posts")
    posts = [store.insert(generate_fake_post(fake)) for _ in range(count)]

    def teardown() -> int:
        logger.warning("Deleting all blog posts")
        return store.delete_all()

    return posts, teardown
