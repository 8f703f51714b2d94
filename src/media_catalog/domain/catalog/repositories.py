"""Catalog Context Repository Interfaces.

This module defines the persistence port the catalog core depends on.
Every repository offers identifier-based CRUD plus one exact-match lookup
per filterable field of its entity kind.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Generic, Iterable, List, Optional, TypeVar

from .entities import Album, AlbumReview, Book, EntityKind, Review, Song, SongReview

T = TypeVar("T")
K = TypeVar("K")


class EntityRepository(ABC, Generic[T, K]):
    """CRUD operations shared by every entity store."""

    @abstractmethod
    def save(self, entity: T) -> T:
        """Save an entity, assigning an identifier if it has none."""
        pass

    def save_all(self, entities: Iterable[T]) -> List[T]:
        """Save several entities in order."""
        return [self.save(entity) for entity in entities]

    @abstractmethod
    def find_by_id(self, entity_id: K) -> Optional[T]:
        """Find an entity by its identifier."""
        pass

    @abstractmethod
    def find_all(self) -> List[T]:
        """Return every stored entity in insertion order."""
        pass

    @abstractmethod
    def delete_by_id(self, entity_id: K) -> None:
        """Delete an entity. Unknown identifiers are ignored."""
        pass

    def exists_by_id(self, entity_id: K) -> bool:
        """Check whether an entity with this identifier is stored."""
        return self.find_by_id(entity_id) is not None

    def count(self) -> int:
        """Get total count of entities."""
        return len(self.find_all())


class BookRepository(EntityRepository[Book, str]):
    """Repository for Book entities, keyed by ISBN."""

    @abstractmethod
    def get_by_title(self, title: str) -> List[Book]:
        pass

    @abstractmethod
    def get_by_author(self, author: str) -> List[Book]:
        pass

    @abstractmethod
    def get_by_publisher(self, publisher: str) -> List[Book]:
        pass

    @abstractmethod
    def get_by_isbn(self, isbn: str) -> List[Book]:
        pass

    @abstractmethod
    def get_by_genre(self, genre: str) -> List[Book]:
        pass

    @abstractmethod
    def get_by_price(self, price: float) -> List[Book]:
        """Find books of exactly this price."""
        pass


class AlbumRepository(EntityRepository[Album, int]):
    """Repository for Album entities."""

    @abstractmethod
    def get_by_title(self, title: str) -> List[Album]:
        pass

    @abstractmethod
    def get_by_artist(self, artist: str) -> List[Album]:
        pass

    @abstractmethod
    def get_by_genre(self, genre: str) -> List[Album]:
        pass


class SongRepository(EntityRepository[Song, int]):
    """Repository for Song entities."""

    @abstractmethod
    def get_by_id(self, song_id: int) -> List[Song]:
        """Find songs with this id, as a list for filter dispatch."""
        pass

    @abstractmethod
    def get_by_title(self, title: str) -> List[Song]:
        pass

    @abstractmethod
    def get_by_artist(self, artist: str) -> List[Song]:
        pass

    @abstractmethod
    def get_by_label(self, label: str) -> List[Song]:
        pass

    @abstractmethod
    def get_by_genre(self, genre: str) -> List[Song]:
        pass

    @abstractmethod
    def get_by_length(self, length: int) -> List[Song]:
        pass


class ReviewRepository(EntityRepository[Review, int]):
    """Repository for book reviews."""

    @abstractmethod
    def find_by_book_id(self, book_id: int) -> List[Review]:
        pass

    @abstractmethod
    def get_by_rating(self, rating: float) -> List[Review]:
        pass


class AlbumReviewRepository(EntityRepository[AlbumReview, int]):
    """Repository for album reviews."""

    @abstractmethod
    def find_by_album_id(self, album_id: int) -> List[AlbumReview]:
        pass

    @abstractmethod
    def get_by_rating(self, rating: float) -> List[AlbumReview]:
        pass


class SongReviewRepository(EntityRepository[SongReview, int]):
    """Repository for song reviews."""

    @abstractmethod
    def find_by_song_id(self, song_id: int) -> List[SongReview]:
        pass

    @abstractmethod
    def get_by_rating(self, rating: float) -> List[SongReview]:
        pass


@dataclass
class CatalogRepositories:
    """The full set of stores the catalog works against."""

    books: BookRepository
    albums: AlbumRepository
    songs: SongRepository
    reviews: ReviewRepository
    album_reviews: AlbumReviewRepository
    song_reviews: SongReviewRepository

    def for_kind(self, kind: EntityKind) -> EntityRepository:
        """Return the repository holding entities of ``kind``."""
        return {
            EntityKind.BOOK: self.books,
            EntityKind.ALBUM: self.albums,
            EntityKind.SONG: self.songs,
            EntityKind.REVIEW: self.reviews,
            EntityKind.ALBUM_REVIEW: self.album_reviews,
            EntityKind.SONG_REVIEW: self.song_reviews,
        }[kind]

    def reviews_of(self, kind: EntityKind, parent_id: Optional[int]) -> List:
        """Reviews of one book, album or song.

        ``None`` or a parent id below 1 selects every review of the kind.
        """
        if kind == EntityKind.REVIEW:
            repo, lookup = self.reviews, self.reviews.find_by_book_id
        elif kind == EntityKind.ALBUM_REVIEW:
            repo, lookup = self.album_reviews, self.album_reviews.find_by_album_id
        elif kind == EntityKind.SONG_REVIEW:
            repo, lookup = self.song_reviews, self.song_reviews.find_by_song_id
        else:
            raise ValueError(f"{kind.value} is not a review kind")

        if parent_id is None or parent_id < 1:
            return repo.find_all()
        return lookup(parent_id)
