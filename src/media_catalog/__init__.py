"""Media Catalog

A catalog of books, albums, songs and their reviews with property filtering,
rating aggregation and bulk CSV/JSON import and export.
"""

__version__ = "0.1.0"

from .domain.catalog.entities import (
    Album,
    AlbumReview,
    Book,
    EntityKind,
    Review,
    Song,
    SongReview,
)
from .domain.result import (
    DomainError,
    FormatError,
    MissingReferenceError,
    NoDataError,
    NotFoundError,
    UnknownPropertyError,
)

__all__ = [
    # Entities
    "Book",
    "Album",
    "Song",
    "Review",
    "AlbumReview",
    "SongReview",
    "EntityKind",

    # Errors
    "DomainError",
    "FormatError",
    "MissingReferenceError",
    "NoDataError",
    "NotFoundError",
    "UnknownPropertyError",
]
