"""Per-kind codecs.

Each entity kind gets one ``Codec`` value holding the pure functions that
move it in and out of CSV rows and JSON objects. The records themselves
know nothing about text formats.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterable, List, Sequence

from ..domain.catalog.entities import (
    ENTITY_TYPES,
    PARENT_FIELDS,
    Album,
    AnyReview,
    Book,
    Entity,
    EntityKind,
    Song,
)
from ..domain.result import FormatError
from . import csv_format as csvf
from . import json_format as jsonf

logger = logging.getLogger(__name__)


def _accept_any_row(fields: Sequence[str]) -> bool:
    return True


@dataclass(frozen=True)
class Codec:
    """Encoding and decoding functions for one entity kind."""

    kind: EntityKind
    header: str
    encode_row: Callable[[Any], str]
    decode_row: Callable[[List[str]], Any]
    to_raw: Callable[[Any], Dict[str, Any]]
    from_raw: Callable[[Dict[str, Any]], Any]
    accepts_row: Callable[[Sequence[str]], bool] = _accept_any_row

    def encode_csv(self, entity: Entity) -> str:
        """Encode a single entity as one CSV line, without terminator."""
        return self.encode_row(entity)

    def encode_csv_document(self, entities: Iterable[Entity]) -> str:
        """Encode entities as CSV text with the header line first."""
        lines = [self.header]
        lines.extend(self.encode_row(entity) for entity in entities)
        return "\n".join(lines) + "\n"

    def decode_csv_row(self, fields: List[str]) -> Entity:
        """Decode one split CSV row. Raises FormatError on bad values."""
        try:
            return self.decode_row(fields)
        except IndexError as e:
            raise FormatError(
                f"{self.kind.value} row has too few fields: {len(fields)}"
            ) from e

    def decode_csv(self, text: str) -> List[Entity]:
        """Decode CSV text, skipping the header line and blank lines."""
        entities = []
        lines = csvf.split_lines(text)
        for line_number, line in enumerate(lines[1:], start=2):
            if not line.strip():
                continue
            fields = csvf.split_row(line)
            if not self.accepts_row(fields):
                logger.warning(
                    f"Dropping {self.kind.value} CSV line {line_number}: "
                    f"unexpected field count {len(fields)}"
                )
                continue
            entities.append(self.decode_csv_row(fields))
        return entities

    def encode_json(self, entity: Entity) -> str:
        """Encode a single entity as a JSON object."""
        return jsonf.render_object(self.to_raw(entity))

    def encode_json_document(self, entities: Iterable[Entity]) -> str:
        """Encode entities as a JSON array."""
        return jsonf.render_array(self.to_raw(entity) for entity in entities)

    def decode_json(self, text: str) -> List[Entity]:
        """Decode a JSON array of entity objects."""
        return [self.from_raw(raw) for raw in jsonf.parse_array(text)]


# Book

def _book_row(book: Book) -> str:
    return ",".join([
        csvf.plain(book.title),
        csvf.plain(book.author),
        csvf.plain(book.isbn),
        csvf.plain(book.publisher),
        csvf.plain(book.genre),
        csvf.plain(book.price),
    ])


def _book_from_row(fields: List[str]) -> Book:
    return Book(
        title=csvf.optional_text(fields[0]),
        author=csvf.optional_text(fields[1]),
        isbn=csvf.optional_text(fields[2]),
        publisher=csvf.optional_text(fields[3]),
        genre=csvf.optional_text(fields[4]),
        price=csvf.parse_float(fields[5]),
    )


def _book_to_raw(book: Book) -> Dict[str, Any]:
    return {
        "title": book.title,
        "author": book.author,
        "publisher": book.publisher,
        "isbn": book.isbn,
        "genre": book.genre,
        "price": book.price,
    }


def _book_from_raw(raw: Dict[str, Any]) -> Book:
    return Book(
        title=jsonf.get_str(raw, "title"),
        author=jsonf.get_str(raw, "author"),
        publisher=jsonf.get_str(raw, "publisher"),
        isbn=jsonf.get_str(raw, "isbn"),
        genre=jsonf.get_str(raw, "genre"),
        price=jsonf.get_float(raw, "price"),
    )


def _book_row_width_ok(fields: Sequence[str]) -> bool:
    # Six columns as exported, or seven as in files with a trailing column.
    return len(fields) in (6, 7)


# Album

def _album_row(album: Album) -> str:
    return ",".join([
        csvf.plain(album.id),
        csvf.plain(album.title),
        csvf.plain(album.artist),
        csvf.plain(album.genre),
        csvf.format_date(album.release_date),
    ])


def _album_from_row(fields: List[str]) -> Album:
    return Album(
        id=csvf.parse_optional_int(fields[0]),
        title=csvf.optional_text(fields[1]),
        artist=csvf.optional_text(fields[2]),
        genre=csvf.optional_text(fields[3]),
        release_date=csvf.parse_optional_date(fields[4]),
    )


def _album_to_raw(album: Album) -> Dict[str, Any]:
    return {
        "id": album.id,
        "title": album.title,
        "artist": album.artist,
        "genre": album.genre,
        "releaseDate": jsonf.date_value(album.release_date),
        "songIds": list(album.song_ids),
    }


def _album_from_raw(raw: Dict[str, Any]) -> Album:
    return Album(
        id=jsonf.get_int(raw, "id", default=None),
        title=jsonf.get_str(raw, "title"),
        artist=jsonf.get_str(raw, "artist"),
        genre=jsonf.get_str(raw, "genre"),
        release_date=jsonf.get_date(raw, "releaseDate"),
        song_ids=jsonf.get_int_list(raw, "songIds"),
    )


# Song

def _song_row(song: Song) -> str:
    return ",".join([
        csvf.plain(song.id),
        csvf.plain(song.title),
        csvf.plain(song.artist),
        csvf.plain(song.label),
        csvf.plain(song.genre),
        csvf.plain(song.length),
    ])


def _song_from_row(fields: List[str]) -> Song:
    return Song(
        id=csvf.parse_optional_int(fields[0]),
        title=csvf.optional_text(fields[1]),
        artist=csvf.optional_text(fields[2]),
        label=csvf.optional_text(fields[3]),
        genre=csvf.optional_text(fields[4]),
        length=csvf.parse_int(fields[5]),
    )


def _song_to_raw(song: Song) -> Dict[str, Any]:
    return {
        "id": song.id,
        "title": song.title,
        "artist": song.artist,
        "label": song.label,
        "genre": song.genre,
        "length": song.length,
    }


def _song_from_raw(raw: Dict[str, Any]) -> Song:
    return Song(
        id=jsonf.get_int(raw, "id", default=None),
        title=jsonf.get_str(raw, "title"),
        artist=jsonf.get_str(raw, "artist"),
        label=jsonf.get_str(raw, "label"),
        genre=jsonf.get_str(raw, "genre"),
        length=jsonf.get_int(raw, "length"),
    )


# Reviews share one layout; only the parent column differs.

def _review_codec(kind: EntityKind, parent_key: str) -> Codec:
    review_type = ENTITY_TYPES[kind]
    parent_field = PARENT_FIELDS[kind]

    def encode_row(review: AnyReview) -> str:
        return ",".join([
            csvf.plain(review.review_id),
            csvf.plain(getattr(review, parent_field)),
            csvf.plain(review.rating),
            csvf.quote(review.comment),
            csvf.format_date(review.date),
        ])

    def decode_row(fields: List[str]) -> AnyReview:
        # Exported rows lead with the review id; hand-written import rows
        # start at the parent id.
        if len(fields) >= 5:
            review_id = csvf.parse_optional_int(fields[0])
            fields = fields[1:]
        else:
            review_id = None
        return review_type(**{
            "review_id": review_id,
            parent_field: csvf.parse_int(fields[0]),
            "rating": csvf.parse_float(fields[1]),
            "comment": csvf.optional_text(fields[2]),
            "date": csvf.parse_optional_date(fields[3]),
        })

    def to_raw(review: AnyReview) -> Dict[str, Any]:
        return {
            "reviewId": review.review_id,
            parent_key: getattr(review, parent_field),
            "rating": review.rating,
            "comment": review.comment,
            "reviewDate": jsonf.date_value(review.date),
        }

    def from_raw(raw: Dict[str, Any]) -> AnyReview:
        return review_type(**{
            "review_id": jsonf.get_int(raw, "reviewId", default=None),
            parent_field: jsonf.get_int(raw, parent_key),
            "rating": jsonf.get_float(raw, "rating"),
            "comment": jsonf.get_str(raw, "comment"),
            "date": jsonf.get_date(raw, "reviewDate", "date"),
        })

    return Codec(
        kind=kind,
        header=f"reviewId,{parent_key},rating,comment,reviewDate",
        encode_row=encode_row,
        decode_row=decode_row,
        to_raw=to_raw,
        from_raw=from_raw,
    )


CODECS: Dict[EntityKind, Codec] = {
    EntityKind.BOOK: Codec(
        kind=EntityKind.BOOK,
        header="title,author,isbn,publisher,genre,price",
        encode_row=_book_row,
        decode_row=_book_from_row,
        to_raw=_book_to_raw,
        from_raw=_book_from_raw,
        accepts_row=_book_row_width_ok,
    ),
    EntityKind.ALBUM: Codec(
        kind=EntityKind.ALBUM,
        header="id,title,artist,genre,releaseDate",
        encode_row=_album_row,
        decode_row=_album_from_row,
        to_raw=_album_to_raw,
        from_raw=_album_from_raw,
    ),
    EntityKind.SONG: Codec(
        kind=EntityKind.SONG,
        header="id,title,artist,label,genre,length",
        encode_row=_song_row,
        decode_row=_song_from_row,
        to_raw=_song_to_raw,
        from_raw=_song_from_raw,
    ),
    EntityKind.REVIEW: _review_codec(EntityKind.REVIEW, "bookId"),
    EntityKind.ALBUM_REVIEW: _review_codec(EntityKind.ALBUM_REVIEW, "albumId"),
    EntityKind.SONG_REVIEW: _review_codec(EntityKind.SONG_REVIEW, "songId"),
}


def get_codec(kind: EntityKind) -> Codec:
    """Look up the codec for an entity kind."""
    return CODECS[kind]
