"""
Post store: durable CRUD over blog post records.

The store owns id allocation, creation timestamps and field validation, so
every caller (API views, management commands, tests) gets the same rules.
Two backends share the `PostStore` contract:

- `DjangoPostStore` persists rows through the Django ORM.
- `InMemoryPostStore` keeps posts in a dict and is used as a fake in tests
  and for throwaway local runs.

Failures come back as typed exceptions from `.exceptions` rather than
``None`` so the API layer can map them to status codes deterministically.
"""

import logging
import threading
from abc import ABC, abstractmethod
from collections.abc import Iterator, Mapping
from contextlib import contextmanager
from dataclasses import replace
from functools import lru_cache
from typing import Any

from django.conf import settings
from django.db import DatabaseError, transaction
from django.db.models import Max
from django.utils import timezone
from django.utils.module_loading import import_string

from .exceptions import NotFound, StoreError, ValidationError
from .ids import IdGenerator, ObjectIdGenerator
from .models import BlogPost
from .records import Post

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("author", "title")
UPDATABLE_FIELDS = ("author", "title", "content")

DEFAULT_STORE = "src.apps.blog.store.DjangoPostStore"
DEFAULT_ID_GENERATOR = "src.apps.blog.ids.ObjectIdGenerator"


def clean_fields(fields: Mapping[str, Any], *, partial: bool = False) -> dict[str, str]:
    """
    Validate caller supplied post fields and return the ones to persist.

    Only `author`, `title` and `content` are picked up; anything else,
    including `id` and `created`, is dropped. `author` and `title` are
    trimmed and must stay non-empty. With ``partial=False`` (inserts) both
    are required and a missing `content` defaults to an empty string.

    Raises:
        ValidationError: if a field is missing, blank or not a string.
    """
    if not isinstance(fields, Mapping):
        raise ValidationError("Blog post fields must be an object.")

    cleaned: dict[str, str] = {}
    for name in UPDATABLE_FIELDS:
        if name not in fields:
            if name in REQUIRED_FIELDS and not partial:
                raise ValidationError(f"Missing `{name}` in request body")
            continue

        value = fields[name]
        if name == "content" and value is None:
            value = ""
        if not isinstance(value, str):
            raise ValidationError(f"`{name}` must be a string")
        if name in REQUIRED_FIELDS:
            value = value.strip()
            if not value:
                raise ValidationError(f"`{name}` must not be empty")
        cleaned[name] = value

    if not partial:
        cleaned.setdefault("content", "")
    return cleaned


class PostStore(ABC):
    """Contract shared by every blog post storage backend."""

    def __init__(self, id_generator: IdGenerator | None = None) -> None:
        self.id_generator = id_generator or ObjectIdGenerator()

    @abstractmethod
    def insert(self, draft: Mapping[str, Any]) -> Post:
        """Persist a new post built from `draft` and return it."""

    @abstractmethod
    def find_all(self) -> list[Post]:
        """Return every stored post in insertion order."""

    @abstractmethod
    def find_by_id(self, post_id: str) -> Post:
        """Return the post with `post_id` or raise `NotFound`."""

    @abstractmethod
    def update(self, post_id: str, fields: Mapping[str, Any]) -> Post:
        """Apply the updatable keys of `fields` and return the stored post."""

    @abstractmethod
    def delete_by_id(self, post_id: str) -> bool:
        """Remove the post, returning whether anything was removed."""

    @abstractmethod
    def count(self) -> int:
        """Return the number of stored posts."""

    @abstractmethod
    def delete_all(self) -> int:
        """Remove every post and return how many were removed."""

    @staticmethod
    def not_found(post_id: str) -> NotFound:
        return NotFound(f"No blog post with id `{post_id}`")


@contextmanager
def _storage_errors(action: str) -> Iterator[None]:
    """Re-raise database failures as `StoreError` without leaking details."""
    try:
        yield
    except DatabaseError as exc:
        logger.exception(f"Post store failed to {action}")
        raise StoreError() from exc


class DjangoPostStore(PostStore):
    """Post store persisting `BlogPost` rows through the Django ORM."""

    def insert(self, draft: Mapping[str, Any]) -> Post:
        fields = clean_fields(draft)
        with _storage_errors("insert a post"), transaction.atomic():
            last = BlogPost.objects.aggregate(last=Max("sequence"))["last"] or 0
            row = BlogPost.objects.create(
                id=self.id_generator(),
                created=timezone.now(),
                sequence=last + 1,
                **fields,
            )
        return row.to_post()

    def find_all(self) -> list[Post]:
        with _storage_errors("list posts"):
            return [row.to_post() for row in BlogPost.objects.all()]

    def find_by_id(self, post_id: str) -> Post:
        with _storage_errors("fetch a post"):
            row = BlogPost.objects.filter(pk=post_id).first()
        if row is None:
            raise self.not_found(post_id)
        return row.to_post()

    def update(self, post_id: str, fields: Mapping[str, Any]) -> Post:
        changes = clean_fields(fields, partial=True)
        with _storage_errors("update a post"):
            rows = BlogPost.objects.filter(pk=post_id)
            if changes and rows.update(**changes) == 0:
                raise self.not_found(post_id)
            row = rows.first()
        if row is None:
            raise self.not_found(post_id)
        return row.to_post()

    def delete_by_id(self, post_id: str) -> bool:
        with _storage_errors("delete a post"):
            deleted, _ = BlogPost.objects.filter(pk=post_id).delete()
        return deleted > 0

    def count(self) -> int:
        with _storage_errors("count posts"):
            return BlogPost.objects.count()

    def delete_all(self) -> int:
        with _storage_errors("delete all posts"):
            deleted, _ = BlogPost.objects.all().delete()
        return deleted


class InMemoryPostStore(PostStore):
    """
    Dict backed post store with the same behaviour as `DjangoPostStore`.

    Every id ever issued is remembered, so a generator that repeats itself
    is reported as a `StoreError` instead of silently reusing an id that
    belonged to a deleted post.
    """

    def __init__(self, id_generator: IdGenerator | None = None) -> None:
        super().__init__(id_generator)
        self._posts: dict[str, Post] = {}
        self._issued_ids: set[str] = set()
        self._lock = threading.Lock()

    def insert(self, draft: Mapping[str, Any]) -> Post:
        fields = clean_fields(draft)
        with self._lock:
            post_id = self.id_generator()
            if not post_id or post_id in self._issued_ids:
                logger.error(f"Id generator produced an unusable id: {post_id!r}")
                raise StoreError()
            self._issued_ids.add(post_id)
            post = Post(id=post_id, created=timezone.now(), **fields)
            self._posts[post_id] = post
        return post

    def find_all(self) -> list[Post]:
        with self._lock:
            return list(self._posts.values())

    def find_by_id(self, post_id: str) -> Post:
        with self._lock:
            post = self._posts.get(post_id)
        if post is None:
            raise self.not_found(post_id)
        return post

    def update(self, post_id: str, fields: Mapping[str, Any]) -> Post:
        changes = clean_fields(fields, partial=True)
        with self._lock:
            if post_id not in self._posts:
                raise self.not_found(post_id)
            post = replace(self._posts[post_id], **changes)
            self._posts[post_id] = post
        return post

    def delete_by_id(self, post_id: str) -> bool:
        with self._lock:
            return self._posts.pop(post_id, None) is not None

    def count(self) -> int:
        with self._lock:
            return len(self._posts)

    def delete_all(self) -> int:
        with self._lock:
            deleted = len(self._posts)
            self._posts.clear()
        return deleted


@lru_cache(maxsize=None)
def _build_post_store(store_path: str, id_generator_path: str) -> PostStore:
    store_class = import_string(store_path)
    id_generator = import_string(id_generator_path)()
    logger.debug(f"Using {store_class.__name__} with {type(id_generator).__name__}")
    return store_class(id_generator=id_generator)


def get_post_store() -> PostStore:
    """
    Return the post store configured by the ``BLOG_POSTS`` setting.

    One instance is built per (store, id generator) pair and reused, so an
    in-memory store keeps its contents across requests.
    """
    options = getattr(settings, "BLOG_POSTS", {})
    return _build_post_store(
        options.get("STORE", DEFAULT_STORE),
        options.get("ID_GENERATOR", DEFAULT_ID_GENERATOR),
    )


def reset_post_store() -> None:
    """Forget cached store instances (used when settings change in tests)."""
    _build_post_store.cache_clear()
