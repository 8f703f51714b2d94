"""
Catalog Repository Implementations.

In-memory implementations of the catalog's persistence port, used by
tests and as the base of the JSON file stores.
"""

import logging
from typing import Any, Dict, List, Optional, TypeVar

from ...domain.catalog.entities import (
    ID_FIELDS,
    Album,
    AlbumReview,
    Book,
    EntityKind,
    Review,
    Song,
    SongReview,
)
from ...domain.catalog.repositories import (
    AlbumRepository,
    AlbumReviewRepository,
    BookRepository,
    CatalogRepositories,
    EntityRepository,
    ReviewRepository,
    SongRepository,
    SongReviewRepository,
)
from ...exceptions import StorageError

logger = logging.getLogger(__name__)

T = TypeVar("T")
K = TypeVar("K")


class InMemoryEntityRepository(EntityRepository[T, K]):
    """Dictionary-backed store keyed by the entity's identifier.

    Integer identifiers are generated from a counter that starts at 1 and
    always stays above the largest id stored so far.
    """

    kind: EntityKind

    def __init__(self):
        self._entities: Dict[Any, T] = {}
        self._next_id = 1
        self._id_field = ID_FIELDS[self.kind]

    def _after_write(self) -> None:
        """Hook for stores that persist their contents."""
        pass

    def _identifier(self, entity: T) -> Any:
        return getattr(entity, self._id_field)

    def _check_storable(self, entity: T) -> None:
        if self.kind == EntityKind.BOOK and self._identifier(entity) is None:
            raise StorageError("A book cannot be saved without an isbn")

    def _assign_identifier(self, entity: T) -> Any:
        self._check_storable(entity)
        entity_id = self._identifier(entity)
        if entity_id is None:
            entity_id = self._next_id
            setattr(entity, self._id_field, entity_id)
        if isinstance(entity_id, int) and entity_id >= self._next_id:
            self._next_id = entity_id + 1
        return entity_id

    def _put(self, entity: T) -> T:
        entity_id = self._assign_identifier(entity)
        self._entities[entity_id] = entity
        logger.debug(f"Stored {self.kind.value} {entity_id}")
        return entity

    def _find_by(self, attribute: str, value: Any) -> List[T]:
        return [e for e in self._entities.values() if getattr(e, attribute) == value]

    def save(self, entity: T) -> T:
        """Save an entity, generating an identifier when it has none."""
        saved = self._put(entity)
        self._after_write()
        return saved

    def save_all(self, entities) -> List[T]:
        """Save entities in order and write the store once.

        Every entity is checked before any is stored, so a rejected batch
        leaves the store unchanged.
        """
        entities = list(entities)
        for entity in entities:
            self._check_storable(entity)
        saved = [self._put(entity) for entity in entities]
        self._after_write()
        return saved

    def find_by_id(self, entity_id: K) -> Optional[T]:
        return self._entities.get(entity_id)

    def find_all(self) -> List[T]:
        return list(self._entities.values())

    def delete_by_id(self, entity_id: K) -> None:
        if self._entities.pop(entity_id, None) is not None:
            self._after_write()

    def exists_by_id(self, entity_id: K) -> bool:
        return entity_id in self._entities

    def count(self) -> int:
        return len(self._entities)


class InMemoryBookRepository(InMemoryEntityRepository[Book, str], BookRepository):
    """In-memory implementation of BookRepository."""

    kind = EntityKind.BOOK

    def get_by_title(self, title: str) -> List[Book]:
        return self._find_by("title", title)

    def get_by_author(self, author: str) -> List[Book]:
        return self._find_by("author", author)

    def get_by_publisher(self, publisher: str) -> List[Book]:
        return self._find_by("publisher", publisher)

    def get_by_isbn(self, isbn: str) -> List[Book]:
        return self._find_by("isbn", isbn)

    def get_by_genre(self, genre: str) -> List[Book]:
        return self._find_by("genre", genre)

    def get_by_price(self, price: float) -> List[Book]:
        return self._find_by("price", price)


class InMemoryAlbumRepository(InMemoryEntityRepository[Album, int], AlbumRepository):
    """In-memory implementation of AlbumRepository."""

    kind = EntityKind.ALBUM

    def get_by_title(self, title: str) -> List[Album]:
        return self._find_by("title", title)

    def get_by_artist(self, artist: str) -> List[Album]:
        return self._find_by("artist", artist)

    def get_by_genre(self, genre: str) -> List[Album]:
        return self._find_by("genre", genre)


class InMemorySongRepository(InMemoryEntityRepository[Song, int], SongRepository):
    """In-memory implementation of SongRepository."""

    kind = EntityKind.SONG

    def get_by_id(self, song_id: int) -> List[Song]:
        return self._find_by("id", song_id)

    def get_by_title(self, title: str) -> List[Song]:
        return self._find_by("title", title)

    def get_by_artist(self, artist: str) -> List[Song]:
        return self._find_by("artist", artist)

    def get_by_label(self, label: str) -> List[Song]:
        return self._find_by("label", label)

    def get_by_genre(self, genre: str) -> List[Song]:
        return self._find_by("genre", genre)

    def get_by_length(self, length: int) -> List[Song]:
        return self._find_by("length", length)


class InMemoryReviewRepository(InMemoryEntityRepository[Review, int], ReviewRepository):
    """In-memory implementation of ReviewRepository."""

    kind = EntityKind.REVIEW

    def find_by_book_id(self, book_id: int) -> List[Review]:
        return self._find_by("book_id", book_id)

    def get_by_rating(self, rating: float) -> List[Review]:
        return self._find_by("rating", rating)


class InMemoryAlbumReviewRepository(InMemoryEntityRepository[AlbumReview, int], AlbumReviewRepository):
    """In-memory implementation of AlbumReviewRepository."""

    kind = EntityKind.ALBUM_REVIEW

    def find_by_album_id(self, album_id: int) -> List[AlbumReview]:
        return self._find_by("album_id", album_id)

    def get_by_rating(self, rating: float) -> List[AlbumReview]:
        return self._find_by("rating", rating)


class InMemorySongReviewRepository(InMemoryEntityRepository[SongReview, int], SongReviewRepository):
    """In-memory implementation of SongReviewRepository."""

    kind = EntityKind.SONG_REVIEW

    def find_by_song_id(self, song_id: int) -> List[SongReview]:
        return self._find_by("song_id", song_id)

    def get_by_rating(self, rating: float) -> List[SongReview]:
        return self._find_by("rating", rating)


def in_memory_repositories() -> CatalogRepositories:
    """Create an empty in-memory store for every entity kind."""
    return CatalogRepositories(
        books=InMemoryBookRepository(),
        albums=InMemoryAlbumRepository(),
        songs=InMemorySongRepository(),
        reviews=InMemoryReviewRepository(),
        album_reviews=InMemoryAlbumReviewRepository(),
        song_reviews=InMemorySongReviewRepository(),
    )
