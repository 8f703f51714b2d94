"""
Catalog Context - books, albums, songs and their reviews.

This bounded context is responsible for:
- The entity records and their persistence port
- Filtering entities by a named property
- Aggregating review ratings
- CRUD rules for each entity kind
"""

from .entities import (
    Album,
    AlbumReview,
    Book,
    EntityKind,
    Review,
    Song,
    SongReview,
)
from .repositories import (
    AlbumRepository,
    AlbumReviewRepository,
    BookRepository,
    CatalogRepositories,
    EntityRepository,
    ReviewRepository,
    SongRepository,
    SongReviewRepository,
)
from .filters import PropertyFilter
from .ratings import RatingAggregator, average_rating
from .services import AlbumService, CatalogServices, EntityService, ReviewService

__all__ = [
    # Entities
    "Book",
    "Album",
    "Song",
    "Review",
    "AlbumReview",
    "SongReview",
    "EntityKind",
    # Repositories
    "EntityRepository",
    "BookRepository",
    "AlbumRepository",
    "SongRepository",
    "ReviewRepository",
    "AlbumReviewRepository",
    "SongReviewRepository",
    "CatalogRepositories",
    # Services
    "PropertyFilter",
    "RatingAggregator",
    "average_rating",
    "EntityService",
    "AlbumService",
    "ReviewService",
    "CatalogServices",
]
