"""
File-based Repository Implementations.

Each entity kind is kept in its own JSON file inside a storage directory.
The whole file is loaded once on construction and rewritten after every
change, using the same raw object layout as the JSON export.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict

from ...codec import get_codec
from ...domain.catalog.repositories import CatalogRepositories
from ...domain.result import FormatError
from ...exceptions import StorageError
from .catalog_repository import (
    InMemoryAlbumRepository,
    InMemoryAlbumReviewRepository,
    InMemoryBookRepository,
    InMemoryReviewRepository,
    InMemorySongRepository,
    InMemorySongReviewRepository,
)

logger = logging.getLogger(__name__)


class JsonFileStoreMixin:
    """Persists an in-memory repository to ``<storage_dir>/<kind>.json``."""

    def __init__(self, storage_dir: Path):
        super().__init__()
        self.storage_dir = Path(storage_dir)
        self.storage_dir.mkdir(parents=True, exist_ok=True)
        self._file = self.storage_dir / f"{self.kind.value}s.json"
        self._codec = get_codec(self.kind)
        self._load_data()

    def _load_data(self) -> None:
        """Load all records of this kind from disk."""
        if not self._file.exists():
            return

        try:
            with open(self._file, 'r', encoding='utf-8') as f:
                data: Dict[str, Any] = json.load(f)
            for raw in data.get("items", []):
                self._put(self._codec.from_raw(raw))
        except (OSError, json.JSONDecodeError, FormatError) as e:
            raise StorageError(f"Cannot read {self._file}: {e}") from e

        self._next_id = max(self._next_id, data.get("next_id", 1))
        logger.debug(f"Loaded {len(self._entities)} {self.kind.value} records from {self._file}")

    def _after_write(self) -> None:
        data = {
            "next_id": self._next_id,
            "items": [self._codec.to_raw(entity) for entity in self._entities.values()],
        }
        try:
            with open(self._file, 'w', encoding='utf-8') as f:
                json.dump(data, f, indent=2, ensure_ascii=False)
        except OSError as e:
            raise StorageError(f"Cannot write {self._file}: {e}") from e


class JsonFileBookRepository(JsonFileStoreMixin, InMemoryBookRepository):
    """Book store backed by ``books.json``."""


class JsonFileAlbumRepository(JsonFileStoreMixin, InMemoryAlbumRepository):
    """Album store backed by ``albums.json``."""


class JsonFileSongRepository(JsonFileStoreMixin, InMemorySongRepository):
    """Song store backed by ``songs.json``."""


class JsonFileReviewRepository(JsonFileStoreMixin, InMemoryReviewRepository):
    """Book review store backed by ``reviews.json``."""


class JsonFileAlbumReviewRepository(JsonFileStoreMixin, InMemoryAlbumReviewRepository):
    """Album review store backed by ``album_reviews.json``."""


class JsonFileSongReviewRepository(JsonFileStoreMixin, InMemorySongReviewRepository):
    """Song review store backed by ``song_reviews.json``."""


def json_file_repositories(storage_dir: Path) -> CatalogRepositories:
    """Open (or create) the JSON file stores in ``storage_dir``."""
    return CatalogRepositories(
        books=JsonFileBookRepository(storage_dir),
        albums=JsonFileAlbumRepository(storage_dir),
        songs=JsonFileSongRepository(storage_dir),
        reviews=JsonFileReviewRepository(storage_dir),
        album_reviews=JsonFileAlbumReviewRepository(storage_dir),
        song_reviews=JsonFileSongReviewRepository(storage_dir),
    )
