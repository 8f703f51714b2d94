"""Transport adapter.

Turns calls into the catalog core into ``Response`` values carrying an HTTP
status and a body, the way a web framework's route handlers would. Any web
framework can sit on top; the command line uses it directly.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from http import HTTPStatus
from typing import Any, Optional

from ..application.pipeline import ImportExportPipeline
from ..domain.catalog.entities import Entity, EntityKind
from ..domain.catalog.filters import PropertyFilter
from ..domain.catalog.ratings import RatingAggregator
from ..domain.catalog.repositories import CatalogRepositories
from ..domain.catalog.services import AlbumService, CatalogServices, EntityService, ReviewService
from ..domain.result import FormatError, MissingReferenceError
from ..exceptions import StorageError

logger = logging.getLogger(__name__)

# Which review kind rates which entity kind.
RATED_BY = {
    EntityKind.BOOK: EntityKind.REVIEW,
    EntityKind.ALBUM: EntityKind.ALBUM_REVIEW,
    EntityKind.SONG: EntityKind.SONG_REVIEW,
}


@dataclass(frozen=True)
class Response:
    """A status code and an optional body."""

    status: HTTPStatus
    body: Any = None

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300


def _bad_request(error: Exception) -> Response:
    logger.warning(f"Rejected request: {error}")
    return Response(HTTPStatus.BAD_REQUEST, str(error))


class EntityController:
    """Routes for one entity kind."""

    def __init__(self, kind: EntityKind, service: EntityService, filters: PropertyFilter,
                 pipeline: ImportExportPipeline, ratings: RatingAggregator):
        self.kind = kind
        self.service = service
        self.filters = filters
        self.pipeline = pipeline
        self.ratings = ratings

    def create(self, entity: Entity) -> Response:
        try:
            return Response(HTTPStatus.CREATED, self.service.create(entity))
        except StorageError as e:
            return _bad_request(e)

    def get(self, entity_id: Any) -> Response:
        return self.service.get(entity_id).match(
            success=lambda entity: Response(HTTPStatus.OK, entity),
            failure=lambda error: Response(HTTPStatus.NOT_FOUND, str(error)),
        )

    def update(self, entity_id: Any, entity: Entity) -> Response:
        return self.service.update(entity_id, entity).match(
            success=lambda saved: Response(HTTPStatus.OK, saved),
            failure=lambda error: Response(HTTPStatus.NOT_FOUND, str(error)),
        )

    def delete(self, entity_id: Any) -> Response:
        if self.service.delete(entity_id):
            return Response(HTTPStatus.NO_CONTENT)
        return Response(HTTPStatus.NOT_FOUND)

    def list(self, property: Optional[str] = None, value: Optional[str] = None) -> Response:
        """List everything, or the entities whose ``property`` equals ``value``."""
        if property is None:
            return Response(HTTPStatus.OK, self.service.list_all())
        if value is None:
            return Response(HTTPStatus.BAD_REQUEST, f"Filter on {property!r} needs a value")

        result = self.filters.apply(self.kind, property, value)
        if result.is_failure():
            return _bad_request(result.error())
        return Response(HTTPStatus.OK, result.value())

    def import_csv(self, text: str) -> Response:
        try:
            return Response(HTTPStatus.CREATED, self.pipeline.import_csv(self.kind, text))
        except (FormatError, StorageError) as e:
            return _bad_request(e)

    def import_json(self, text: str) -> Response:
        try:
            return Response(HTTPStatus.CREATED, self.pipeline.import_json(self.kind, text))
        except (FormatError, StorageError) as e:
            return _bad_request(e)

    def export_csv(self, parent_id: Optional[int] = None) -> Response:
        return Response(HTTPStatus.OK, self.pipeline.export_csv(self.kind, parent_id=parent_id))

    def export_json(self, parent_id: Optional[int] = None) -> Response:
        try:
            return Response(HTTPStatus.OK, self.pipeline.export_json(self.kind, parent_id=parent_id))
        except MissingReferenceError as e:
            logger.warning(f"Export of {self.kind.value} failed: {e}")
            return Response(HTTPStatus.CONFLICT, str(e))

    def rating(self, entity_id: int) -> Response:
        """Average rating of a book, album or song."""
        if self.kind not in RATED_BY:
            return Response(HTTPStatus.BAD_REQUEST, f"{self.kind.value} has no ratings")
        # Books report a missing average as not found, albums and songs as
        # an empty response.
        empty = HTTPStatus.NOT_FOUND if self.kind == EntityKind.BOOK else HTTPStatus.NO_CONTENT
        return self.ratings.average(RATED_BY[self.kind], entity_id).match(
            success=lambda mean: Response(HTTPStatus.OK, mean),
            failure=lambda error: Response(empty),
        )


class AlbumController(EntityController):
    """Album routes, including song membership."""

    service: AlbumService

    def add_song(self, album_id: int, song_id: int) -> Response:
        return self.service.add_song(album_id, song_id).match(
            success=lambda album: Response(HTTPStatus.OK, album),
            failure=lambda error: Response(HTTPStatus.NOT_FOUND, str(error)),
        )

    def remove_song(self, album_id: int, song_id: int) -> Response:
        return self.service.remove_song(album_id, song_id).match(
            success=lambda album: Response(HTTPStatus.NO_CONTENT),
            failure=lambda error: Response(HTTPStatus.NOT_FOUND, str(error)),
        )


class ReviewController(EntityController):
    """Review routes; listings can be narrowed to one reviewed entity."""

    service: ReviewService

    def list_for_parent(self, parent_id: Optional[int] = None) -> Response:
        """Reviews of one parent, or all reviews. No reviews is not found."""
        reviews = self.service.list_for_parent(parent_id)
        if not reviews:
            return Response(HTTPStatus.NOT_FOUND)
        return Response(HTTPStatus.OK, reviews)

    def average_rating(self, parent_id: int) -> Response:
        return self.ratings.average(self.kind, parent_id).match(
            success=lambda mean: Response(HTTPStatus.OK, mean),
            failure=lambda error: Response(HTTPStatus.NOT_FOUND),
        )


class CatalogApi:
    """All controllers, wired to one set of repositories."""

    def __init__(self, repositories: CatalogRepositories):
        services = CatalogServices(repositories)
        filters = PropertyFilter(repositories)
        pipeline = ImportExportPipeline(repositories)
        ratings = RatingAggregator(repositories)

        def wire(controller_type, kind: EntityKind):
            return controller_type(kind, services.for_kind(kind), filters, pipeline, ratings)

        self.books = wire(EntityController, EntityKind.BOOK)
        self.albums = wire(AlbumController, EntityKind.ALBUM)
        self.songs = wire(EntityController, EntityKind.SONG)
        self.reviews = wire(ReviewController, EntityKind.REVIEW)
        self.album_reviews = wire(ReviewController, EntityKind.ALBUM_REVIEW)
        self.song_reviews = wire(ReviewController, EntityKind.SONG_REVIEW)

    def for_kind(self, kind: EntityKind) -> EntityController:
        return {
            EntityKind.BOOK: self.books,
            EntityKind.ALBUM: self.albums,
            EntityKind.SONG: self.songs,
            EntityKind.REVIEW: self.reviews,
            EntityKind.ALBUM_REVIEW: self.album_reviews,
            EntityKind.SONG_REVIEW: self.song_reviews,
        }[kind]
