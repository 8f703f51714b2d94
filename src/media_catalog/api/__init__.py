"""Request/response adapter over the catalog."""

from .controllers import (
    AlbumController,
    CatalogApi,
    EntityController,
    Response,
    ReviewController,
)

__all__ = [
    "AlbumController",
    "CatalogApi",
    "EntityController",
    "Response",
    "ReviewController",
]
