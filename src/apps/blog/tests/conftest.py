"""Fixtures for the blog post tests."""

from typing import Any, Iterator

import pytest
from faker import Faker

from src.apps.blog.ids import SequentialIdGenerator
from src.apps.blog.records import Post
from src.apps.blog.seeding import seed_blog_posts
from src.apps.blog.store import (
    DjangoPostStore,
    InMemoryPostStore,
    PostStore,
    get_post_store,
)

SEED_COUNT = 10


@pytest.fixture
def fake() -> Faker:
    """Seeded Faker instance so failures are reproducible."""
    faker = Faker()
    faker.seed_instance(1234)
    return faker


@pytest.fixture
def draft(fake: Faker) -> dict[str, str]:
    """A valid post draft."""
    return {"author": fake.name(), "title": fake.sentence(), "content": fake.paragraph()}


@pytest.fixture(params=["django", "memory"])
def store(request: Any) -> PostStore:
    """Each store backend in turn, so both honour the same contract."""
    if request.param == "django":
        return DjangoPostStore()
    return InMemoryPostStore()


@pytest.fixture
def memory_store() -> InMemoryPostStore:
    return InMemoryPostStore(id_generator=SequentialIdGenerator())


@pytest.fixture
def seeded_posts(fake: Faker) -> Iterator[list[Post]]:
    """
    Seed the configured store with synthetic posts around a test.

    The teardown runs in ``finally`` so the store is emptied even when the
    test body raises.
    """
    posts, teardown = seed_blog_posts(get_post_store(), SEED_COUNT, fake)
    try:
        yield posts
    finally:
        teardown()
