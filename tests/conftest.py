"""Shared fixtures for media catalog tests."""

import pytest

from media_catalog.api import CatalogApi
from media_catalog.infrastructure.repositories import in_memory_repositories


@pytest.fixture
def repositories():
    """An empty in-memory catalog."""
    return in_memory_repositories()


@pytest.fixture
def api(repositories):
    """Controllers wired to the in-memory catalog."""
    return CatalogApi(repositories)
