"""Catalog Context Entities.

Plain records for the six entity kinds held by the catalog. Identifiers
generated by the store are ``None`` until the first save; a Book is keyed
by its ISBN instead.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import List, Optional, Union


class EntityKind(Enum):
    """The record shapes the catalog stores."""
    BOOK = "book"
    ALBUM = "album"
    SONG = "song"
    REVIEW = "review"
    ALBUM_REVIEW = "album_review"
    SONG_REVIEW = "song_review"

    @classmethod
    def parse(cls, name: str) -> "EntityKind":
        """Resolve a kind from its value, accepting plurals and dashes."""
        key = name.strip().lower().replace("-", "_")
        if key.endswith("s"):
            key = key[:-1]
        try:
            return cls(key)
        except ValueError:
            raise ValueError(f"Unknown entity kind: {name}") from None

    @property
    def is_review(self) -> bool:
        return self in (EntityKind.REVIEW, EntityKind.ALBUM_REVIEW, EntityKind.SONG_REVIEW)


@dataclass
class Book:
    """A book, identified by its ISBN."""

    title: Optional[str] = None
    author: Optional[str] = None
    isbn: Optional[str] = None
    publisher: Optional[str] = None
    genre: Optional[str] = None
    price: float = 0.0

    @property
    def identifier(self) -> Optional[str]:
        return self.isbn


@dataclass
class Album:
    """
    A music album.

    ``song_ids`` is an ordered list of Song identifiers. It may hold the same
    id more than once and is never checked against the Song store.
    """

    id: Optional[int] = None
    title: Optional[str] = None
    artist: Optional[str] = None
    genre: Optional[str] = None
    release_date: Optional[date] = None
    song_ids: List[int] = field(default_factory=list)

    @property
    def identifier(self) -> Optional[int]:
        return self.id

    def add_song(self, song_id: int) -> None:
        """Append a song id to the album."""
        self.song_ids.append(song_id)

    def remove_song(self, song_id: int) -> bool:
        """Remove the first occurrence of a song id. Returns False if absent."""
        try:
            self.song_ids.remove(song_id)
        except ValueError:
            return False
        return True


@dataclass
class Song:
    """A song; ``length`` is in whole seconds."""

    id: Optional[int] = None
    title: Optional[str] = None
    artist: Optional[str] = None
    label: Optional[str] = None
    genre: Optional[str] = None
    length: int = 0

    @property
    def identifier(self) -> Optional[int]:
        return self.id


@dataclass
class Review:
    """A review of a book."""

    review_id: Optional[int] = None
    book_id: int = 0
    rating: float = 0.0
    comment: Optional[str] = None
    date: Optional[date] = None

    @property
    def identifier(self) -> Optional[int]:
        return self.review_id

    @property
    def parent_id(self) -> int:
        return self.book_id


@dataclass
class AlbumReview:
    """A review of an album."""

    review_id: Optional[int] = None
    album_id: int = 0
    rating: float = 0.0
    comment: Optional[str] = None
    date: Optional[date] = None

    @property
    def identifier(self) -> Optional[int]:
        return self.review_id

    @property
    def parent_id(self) -> int:
        return self.album_id


@dataclass
class SongReview:
    """A review of a song."""

    review_id: Optional[int] = None
    song_id: int = 0
    rating: float = 0.0
    comment: Optional[str] = None
    date: Optional[date] = None

    @property
    def identifier(self) -> Optional[int]:
        return self.review_id

    @property
    def parent_id(self) -> int:
        return self.song_id


AnyReview = Union[Review, AlbumReview, SongReview]
Entity = Union[Book, Album, Song, Review, AlbumReview, SongReview]

ENTITY_TYPES = {
    EntityKind.BOOK: Book,
    EntityKind.ALBUM: Album,
    EntityKind.SONG: Song,
    EntityKind.REVIEW: Review,
    EntityKind.ALBUM_REVIEW: AlbumReview,
    EntityKind.SONG_REVIEW: SongReview,
}

# Name of the identifier attribute on each record type.
ID_FIELDS = {
    EntityKind.BOOK: "isbn",
    EntityKind.ALBUM: "id",
    EntityKind.SONG: "id",
    EntityKind.REVIEW: "review_id",
    EntityKind.ALBUM_REVIEW: "review_id",
    EntityKind.SONG_REVIEW: "review_id",
}

# Name of the parent reference on each review type.
PARENT_FIELDS = {
    EntityKind.REVIEW: "book_id",
    EntityKind.ALBUM_REVIEW: "album_id",
    EntityKind.SONG_REVIEW: "song_id",
}
