"""Tests for bulk import and export."""

import json
from datetime import date

import pytest

from media_catalog.application import ImportExportPipeline
from media_catalog.domain.catalog.entities import Album, Book, EntityKind, Review, Song
from media_catalog.domain.result import FormatError, MissingReferenceError
from media_catalog.exceptions import StorageError
from media_catalog.infrastructure.repositories import in_memory_repositories, json_file_repositories

DUNE_CSV = "title,author,isbn,publisher,genre,price\nDune,Herbert,111,Ace,SciFi,9.99\n"


@pytest.fixture
def pipeline(repositories):
    return ImportExportPipeline(repositories)


class TestImport:
    """Test importing CSV and JSON text."""

    def test_import_csv_then_export(self, pipeline, repositories):
        """An imported book exports back to the same text."""
        books = pipeline.import_csv(EntityKind.BOOK, DUNE_CSV)
        assert books[0].price == 9.99
        assert repositories.books.count() == 1
        assert pipeline.export_csv(EntityKind.BOOK) == DUNE_CSV

    def test_bad_row_saves_nothing(self, pipeline, repositories):
        """A malformed row rejects the whole import."""
        text = DUNE_CSV + "Emma,Austen,222,Penguin,Classic,cheap\n"
        with pytest.raises(FormatError):
            pipeline.import_csv(EntityKind.BOOK, text)
        assert repositories.books.count() == 0

    def test_import_json_assigns_ids(self, pipeline, repositories):
        songs = pipeline.import_json(EntityKind.SONG, '[{"title": "River"}, {"title": "Carey"}]')
        assert [s.id for s in songs] == [1, 2]
        assert repositories.songs.find_by_id(2).title == "Carey"

    def test_bad_json_saves_nothing(self, pipeline, repositories):
        with pytest.raises(FormatError):
            pipeline.import_json(EntityKind.SONG, '[{"title": "River"}, 3]')
        assert repositories.songs.count() == 0

    def test_book_without_isbn_saves_nothing(self, pipeline, repositories):
        """A row that cannot be stored rejects the rows before it too."""
        text = DUNE_CSV + "Emma,Austen,,Penguin,Classic,5.0\n"
        with pytest.raises(StorageError, match="isbn"):
            pipeline.import_csv(EntityKind.BOOK, text)
        assert repositories.books.count() == 0

    def test_rejected_json_import_leaves_file_store_unchanged(self, tmp_path):
        """Memory and disk agree after a rejected import."""
        pipeline = ImportExportPipeline(json_file_repositories(tmp_path))
        with pytest.raises(StorageError):
            pipeline.import_json(EntityKind.BOOK, '[{"isbn": "1"}, {"title": "B"}]')
        assert pipeline.repositories.books.count() == 0
        assert json_file_repositories(tmp_path).books.count() == 0

    def test_import_reviews_csv(self, pipeline):
        text = 'reviewId,bookId,rating,comment,reviewDate\n,7,4.0,"Good, really",2024-01-01\n'
        reviews = pipeline.import_csv(EntityKind.REVIEW, text)
        assert reviews == [Review(1, 7, 4.0, "Good, really", date(2024, 1, 1))]


class TestExport:
    """Test exporting stored records."""

    def test_export_empty_csv_is_header_only(self, pipeline):
        assert pipeline.export_csv(EntityKind.SONG) == "id,title,artist,label,genre,length\n"

    def test_export_given_entities(self, pipeline):
        text = pipeline.export_csv(EntityKind.BOOK, entities=[Book("Dune", "Herbert", "111", "Ace", "SciFi", 9.99)])
        assert text == DUNE_CSV

    def test_export_reviews_of_parent(self, pipeline, repositories):
        repositories.reviews.save_all([Review(book_id=7, rating=3), Review(book_id=8, rating=5)])
        exported = json.loads(pipeline.export_json(EntityKind.REVIEW, parent_id=8))
        assert [r["bookId"] for r in exported] == [8]
        assert len(json.loads(pipeline.export_json(EntityKind.REVIEW))) == 2

    def test_album_json_lists_song_titles(self, pipeline, repositories):
        """Album objects carry the titles of their songs in order."""
        repositories.songs.save_all([Song(title="River"), Song(title="Carey")])
        repositories.albums.save(Album(title="Blue", song_ids=[2, 1]))
        exported = json.loads(pipeline.export_json(EntityKind.ALBUM))
        assert exported[0]["songIds"] == [2, 1]
        assert exported[0]["songs"] == ["Carey", "River"]

    def test_album_json_with_missing_song(self, pipeline, repositories):
        """A dangling song id fails the whole export."""
        repositories.albums.save(Album(title="Blue", song_ids=[99]))
        with pytest.raises(MissingReferenceError) as excinfo:
            pipeline.export_json(EntityKind.ALBUM)
        assert excinfo.value.song_id == 99

    def test_album_json_round_trip_ignores_song_titles(self, pipeline, repositories):
        repositories.songs.save(Song(title="River"))
        repositories.albums.save(Album(title="Blue", song_ids=[1]))
        text = pipeline.export_json(EntityKind.ALBUM)

        other = ImportExportPipeline(in_memory_repositories())
        albums = other.import_json(EntityKind.ALBUM, text)
        assert albums[0].song_ids == [1]
