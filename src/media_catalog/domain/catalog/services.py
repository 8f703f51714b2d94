"""Catalog Context Domain Services.

CRUD services over the persistence port. These are thin: they apply the
catalog's update and membership rules and report missing entities as
``NotFoundError`` results.
"""

from __future__ import annotations

import dataclasses
import logging
from typing import Any, Generic, List, Optional, TypeVar

from ..result import NotFoundError, Result, failure, success
from .entities import ID_FIELDS, Album, EntityKind
from .repositories import (
    AlbumRepository,
    CatalogRepositories,
    EntityRepository,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")


class EntityService(Generic[T]):
    """Create, read, update and delete entities of one kind."""

    def __init__(self, kind: EntityKind, repository: EntityRepository, upsert_on_update: bool = False):
        self.kind = kind
        self.repository = repository
        # Books and songs are written under the path id whether or not they
        # exist yet; the other kinds refuse to update an unknown id.
        self.upsert_on_update = upsert_on_update
        self._id_field = ID_FIELDS[kind]

    def _not_found(self, entity_id: Any) -> NotFoundError:
        return NotFoundError(f"No {self.kind.value} with id {entity_id}")

    def create(self, entity: T) -> T:
        """Save a new entity and return it with its identifier."""
        saved = self.repository.save(entity)
        logger.info(f"Created {self.kind.value} {getattr(saved, self._id_field)}")
        return saved

    def get(self, entity_id: Any) -> Result[T, NotFoundError]:
        entity = self.repository.find_by_id(entity_id)
        if entity is None:
            return failure(self._not_found(entity_id))
        return success(entity)

    def list_all(self) -> List[T]:
        return self.repository.find_all()

    def update(self, entity_id: Any, incoming: T) -> Result[T, NotFoundError]:
        """Replace every field of the stored entity with ``incoming``'s.

        For kinds that upsert, the incoming identifier is forced to
        ``entity_id``. Otherwise the incoming identifier wins, which moves
        the record when it differs; an absent one keeps ``entity_id``.
        """
        replacement = dataclasses.replace(incoming)

        if self.upsert_on_update:
            setattr(replacement, self._id_field, entity_id)
        else:
            if not self.repository.exists_by_id(entity_id):
                return failure(self._not_found(entity_id))
            new_id = getattr(replacement, self._id_field)
            if new_id is None:
                setattr(replacement, self._id_field, entity_id)
            elif new_id != entity_id:
                logger.info(f"Moving {self.kind.value} {entity_id} to id {new_id}")
                self.repository.delete_by_id(entity_id)

        saved = self.repository.save(replacement)
        logger.info(f"Updated {self.kind.value} {getattr(saved, self._id_field)}")
        return success(saved)

    def delete(self, entity_id: Any) -> bool:
        """Delete an entity. Returns False if it did not exist."""
        if not self.repository.exists_by_id(entity_id):
            return False
        self.repository.delete_by_id(entity_id)
        logger.info(f"Deleted {self.kind.value} {entity_id}")
        return True


class AlbumService(EntityService[Album]):
    """Album CRUD plus song membership."""

    def __init__(self, repository: AlbumRepository):
        super().__init__(EntityKind.ALBUM, repository)

    def add_song(self, album_id: int, song_id: int) -> Result[Album, NotFoundError]:
        """Append a song id to an album. The song itself is not checked."""
        album = self.repository.find_by_id(album_id)
        if album is None:
            return failure(self._not_found(album_id))
        album.add_song(song_id)
        return success(self.repository.save(album))

    def remove_song(self, album_id: int, song_id: int) -> Result[Album, NotFoundError]:
        """Remove the first occurrence of a song id from an album."""
        album = self.repository.find_by_id(album_id)
        if album is None:
            return failure(self._not_found(album_id))
        if not album.remove_song(song_id):
            logger.debug(f"Album {album_id} does not list song {song_id}")
        return success(self.repository.save(album))


class ReviewService(EntityService[T]):
    """CRUD for one review kind plus listing by reviewed entity."""

    def __init__(self, kind: EntityKind, repositories: CatalogRepositories):
        super().__init__(kind, repositories.for_kind(kind))
        self.repositories = repositories

    def list_for_parent(self, parent_id: Optional[int]) -> List[T]:
        """Reviews of one parent; ``None`` or an id below 1 lists all."""
        return self.repositories.reviews_of(self.kind, parent_id)


class CatalogServices:
    """One service per entity kind over a shared set of repositories."""

    def __init__(self, repositories: CatalogRepositories):
        self.books = EntityService(EntityKind.BOOK, repositories.books, upsert_on_update=True)
        self.albums = AlbumService(repositories.albums)
        self.songs = EntityService(EntityKind.SONG, repositories.songs, upsert_on_update=True)
        self.reviews = ReviewService(EntityKind.REVIEW, repositories)
        self.album_reviews = ReviewService(EntityKind.ALBUM_REVIEW, repositories)
        self.song_reviews = ReviewService(EntityKind.SONG_REVIEW, repositories)

    def for_kind(self, kind: EntityKind) -> EntityService:
        return {
            EntityKind.BOOK: self.books,
            EntityKind.ALBUM: self.albums,
            EntityKind.SONG: self.songs,
            EntityKind.REVIEW: self.reviews,
            EntityKind.ALBUM_REVIEW: self.album_reviews,
            EntityKind.SONG_REVIEW: self.song_reviews,
        }[kind]
