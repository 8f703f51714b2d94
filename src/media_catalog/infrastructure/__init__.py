"""
Infrastructure layer for Media Catalog.

Concrete implementations of the persistence port.
"""

from .repositories import in_memory_repositories, json_file_repositories

__all__ = [
    "in_memory_repositories",
    "json_file_repositories",
]
