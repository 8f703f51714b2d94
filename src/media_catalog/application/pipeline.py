"""Bulk import and export of catalog entities.

Imports decode the whole text before anything is saved, so a malformed
row rejects the call without touching the store. Exports build the full
text in memory and return it only when every entity encoded cleanly.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, List, Optional

from ..codec import get_codec
from ..codec.json_format import render_array
from ..domain.catalog.entities import Album, Entity, EntityKind
from ..domain.catalog.repositories import CatalogRepositories
from ..domain.result import MissingReferenceError

logger = logging.getLogger(__name__)


class ImportExportPipeline:
    """Moves entities between CSV/JSON text and the persistence port."""

    def __init__(self, repositories: CatalogRepositories):
        self.repositories = repositories

    def _save_all(self, kind: EntityKind, entities: List[Entity]) -> List[Entity]:
        saved = self.repositories.for_kind(kind).save_all(entities)
        logger.info(f"Imported {len(saved)} {kind.value} records")
        return saved

    def import_csv(self, kind: EntityKind, text: str) -> List[Entity]:
        """Decode CSV text and save every record.

        Raises:
            FormatError: If any row has a bad number or date. Nothing is saved.
        """
        entities = get_codec(kind).decode_csv(text)
        return self._save_all(kind, entities)

    def import_json(self, kind: EntityKind, text: str) -> List[Entity]:
        """Decode a JSON array and save every record.

        Raises:
            FormatError: If the text is not an array of valid objects.
        """
        entities = get_codec(kind).decode_json(text)
        return self._save_all(kind, entities)

    def _select(self, kind: EntityKind, entities: Optional[Iterable[Entity]],
                parent_id: Optional[int]) -> List[Entity]:
        if entities is not None:
            return list(entities)
        if kind.is_review:
            return self.repositories.reviews_of(kind, parent_id)
        return self.repositories.for_kind(kind).find_all()

    def export_csv(self, kind: EntityKind, entities: Optional[Iterable[Entity]] = None,
                   parent_id: Optional[int] = None) -> str:
        """Encode entities as CSV with a header line.

        Without ``entities`` every stored record of the kind is exported;
        for review kinds ``parent_id`` narrows that to one parent.
        """
        selected = self._select(kind, entities, parent_id)
        logger.info(f"Exporting {len(selected)} {kind.value} records as CSV")
        return get_codec(kind).encode_csv_document(selected)

    def export_json(self, kind: EntityKind, entities: Optional[Iterable[Entity]] = None,
                    parent_id: Optional[int] = None) -> str:
        """Encode entities as a JSON array.

        Album objects also carry ``songs``, the titles of their songs in
        ``songIds`` order.

        Raises:
            MissingReferenceError: If an album lists a song id that is not
                stored. No partial output is returned.
        """
        selected = self._select(kind, entities, parent_id)
        logger.info(f"Exporting {len(selected)} {kind.value} records as JSON")

        if kind == EntityKind.ALBUM:
            return render_array(self._album_with_songs(album) for album in selected)
        return get_codec(kind).encode_json_document(selected)

    def _album_with_songs(self, album: Album) -> Dict[str, Any]:
        raw = get_codec(EntityKind.ALBUM).to_raw(album)
        raw["songs"] = [self._song_title(album, song_id) for song_id in album.song_ids]
        return raw

    def _song_title(self, album: Album, song_id: int) -> Optional[str]:
        song = self.repositories.songs.find_by_id(song_id)
        if song is None:
            logger.error(f"Album {album.id} lists missing song {song_id}")
            raise MissingReferenceError(album.id, song_id)
        return song.title
