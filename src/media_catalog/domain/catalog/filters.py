"""Property filters.

Maps a ``(property, value)`` request onto the matching repository lookup.
Each entity kind has a closed set of filterable properties, declared as an
``Enum``; a name outside that set is reported as ``UnknownPropertyError``
rather than as an empty match.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, List, Type

from ..result import FormatError, Result, UnknownPropertyError, failure, success, try_catch
from .entities import EntityKind
from .repositories import CatalogRepositories

logger = logging.getLogger(__name__)


class BookProperty(Enum):
    TITLE = "title"
    AUTHOR = "author"
    PUBLISHER = "publisher"
    ISBN = "isbn"
    GENRE = "genre"
    PRICE = "price"


class AlbumProperty(Enum):
    TITLE = "title"
    ARTIST = "artist"
    GENRE = "genre"


class SongProperty(Enum):
    ID = "id"
    TITLE = "title"
    ARTIST = "artist"
    LABEL = "label"
    GENRE = "genre"
    LENGTH = "length"


class ReviewProperty(Enum):
    BOOK_ID = "bookId"
    RATING = "rating"


class AlbumReviewProperty(Enum):
    ALBUM_ID = "albumId"
    RATING = "rating"


class SongReviewProperty(Enum):
    SONG_ID = "songId"
    RATING = "rating"


def _text(value: str) -> str:
    return value


def _number(value: str) -> float:
    try:
        return float(value)
    except ValueError as e:
        raise FormatError(f"Expected a number, got {value!r}") from e


def _integer(value: str) -> int:
    try:
        return int(value)
    except ValueError as e:
        raise FormatError(f"Expected an integer, got {value!r}") from e


@dataclass(frozen=True)
class FilterRule:
    """How one property is looked up: value coercion, then repository call."""

    lookup: Callable[[CatalogRepositories], Callable[[Any], List[Any]]]
    coerce: Callable[[str], Any] = _text


PROPERTY_ENUMS: Dict[EntityKind, Type[Enum]] = {
    EntityKind.BOOK: BookProperty,
    EntityKind.ALBUM: AlbumProperty,
    EntityKind.SONG: SongProperty,
    EntityKind.REVIEW: ReviewProperty,
    EntityKind.ALBUM_REVIEW: AlbumReviewProperty,
    EntityKind.SONG_REVIEW: SongReviewProperty,
}

FILTER_RULES: Dict[Enum, FilterRule] = {
    BookProperty.TITLE: FilterRule(lambda r: r.books.get_by_title),
    BookProperty.AUTHOR: FilterRule(lambda r: r.books.get_by_author),
    BookProperty.PUBLISHER: FilterRule(lambda r: r.books.get_by_publisher),
    BookProperty.ISBN: FilterRule(lambda r: r.books.get_by_isbn),
    BookProperty.GENRE: FilterRule(lambda r: r.books.get_by_genre),
    BookProperty.PRICE: FilterRule(lambda r: r.books.get_by_price, _number),

    AlbumProperty.TITLE: FilterRule(lambda r: r.albums.get_by_title),
    AlbumProperty.ARTIST: FilterRule(lambda r: r.albums.get_by_artist),
    AlbumProperty.GENRE: FilterRule(lambda r: r.albums.get_by_genre),

    SongProperty.ID: FilterRule(lambda r: r.songs.get_by_id, _integer),
    SongProperty.TITLE: FilterRule(lambda r: r.songs.get_by_title),
    SongProperty.ARTIST: FilterRule(lambda r: r.songs.get_by_artist),
    SongProperty.LABEL: FilterRule(lambda r: r.songs.get_by_label),
    SongProperty.GENRE: FilterRule(lambda r: r.songs.get_by_genre),
    SongProperty.LENGTH: FilterRule(lambda r: r.songs.get_by_length, _integer),

    ReviewProperty.BOOK_ID: FilterRule(lambda r: r.reviews.find_by_book_id, _integer),
    ReviewProperty.RATING: FilterRule(lambda r: r.reviews.get_by_rating, _number),
    AlbumReviewProperty.ALBUM_ID: FilterRule(lambda r: r.album_reviews.find_by_album_id, _integer),
    AlbumReviewProperty.RATING: FilterRule(lambda r: r.album_reviews.get_by_rating, _number),
    SongReviewProperty.SONG_ID: FilterRule(lambda r: r.song_reviews.find_by_song_id, _integer),
    SongReviewProperty.RATING: FilterRule(lambda r: r.song_reviews.get_by_rating, _number),
}


def parse_property(kind: EntityKind, name: str) -> Result[Enum, UnknownPropertyError]:
    """Resolve a property name against the kind's filterable properties."""
    try:
        return success(PROPERTY_ENUMS[kind](name))
    except ValueError:
        return failure(UnknownPropertyError(kind.value, name))


class PropertyFilter:
    """Dispatches property/value filter requests to repository lookups."""

    def __init__(self, repositories: CatalogRepositories):
        self.repositories = repositories

    def apply(self, kind: EntityKind, name: str, value: str) -> Result[List[Any], Exception]:
        """Find entities of ``kind`` whose ``name`` property equals ``value``.

        Returns:
            Success with the (possibly empty) list of matches, or a Failure
            holding ``UnknownPropertyError`` for a name the kind does not
            expose, or ``FormatError`` when a numeric value does not parse.
        """
        parsed = parse_property(kind, name)
        if parsed.is_failure():
            logger.debug(f"Rejected filter on {kind.value}: {parsed.error()}")
            return parsed

        rule = FILTER_RULES[parsed.value()]
        lookup = rule.lookup(self.repositories)
        result = try_catch(lambda: rule.coerce(value), FormatError).map(lambda coerced: list(lookup(coerced)))
        if result.is_success():
            logger.debug(f"Filter {kind.value}.{name}={value!r} matched {len(result.value())}")
        return result
