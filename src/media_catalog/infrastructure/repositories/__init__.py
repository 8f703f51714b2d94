"""
Repository Implementations - Infrastructure Layer

In-memory and JSON file implementations of the catalog's persistence port.
"""

from .catalog_repository import (
    InMemoryEntityRepository,
    InMemoryBookRepository,
    InMemoryAlbumRepository,
    InMemorySongRepository,
    InMemoryReviewRepository,
    InMemoryAlbumReviewRepository,
    InMemorySongReviewRepository,
    in_memory_repositories,
)
from .file_based_repository import JsonFileStoreMixin, json_file_repositories

__all__ = [
    # In-memory repositories
    "InMemoryEntityRepository",
    "InMemoryBookRepository",
    "InMemoryAlbumRepository",
    "InMemorySongRepository",
    "InMemoryReviewRepository",
    "InMemoryAlbumReviewRepository",
    "InMemorySongReviewRepository",
    "in_memory_repositories",
    # File-based repositories
    "JsonFileStoreMixin",
    "json_file_repositories",
]
