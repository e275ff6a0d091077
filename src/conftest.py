"""
Pytest configuration and global fixtures.

Defines common fixtures and settings for the entire test suite.
"""

from typing import Any, Iterator

import pytest
from rest_framework.test import APIClient


@pytest.fixture
def api_client() -> APIClient:
    """DRF API test client."""
    return APIClient()


@pytest.fixture(autouse=True)
def enable_db_access_for_all_tests(db: Any) -> None:
    """Enable database access for all tests by default."""
    pass


@pytest.fixture(autouse=True)
def fresh_post_store() -> Iterator[None]:
    """Drop cached store instances so settings overrides take effect."""
    from src.apps.blog.store import reset_post_store

    reset_post_store()
    yield
    reset_post_store()
