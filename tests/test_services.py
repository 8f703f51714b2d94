"""Tests for the catalog CRUD services."""

from datetime import date

import pytest

from media_catalog.domain.catalog.entities import Album, AlbumReview, Book, EntityKind, Review, Song
from media_catalog.domain.catalog.services import CatalogServices
from media_catalog.domain.result import NotFoundError


@pytest.fixture
def services(repositories):
    return CatalogServices(repositories)


class TestEntityService:
    """Test create, get, list and delete."""

    def test_create_assigns_id(self, services):
        song = services.songs.create(Song(title="River"))
        assert song.id == 1
        assert services.songs.get(1).value() is song

    def test_get_missing(self, services):
        result = services.albums.get(42)
        assert isinstance(result.error(), NotFoundError)

    def test_list_all(self, services):
        services.books.create(Book(title="Dune", isbn="111"))
        services.books.create(Book(title="Emma", isbn="222"))
        assert [b.title for b in services.books.list_all()] == ["Dune", "Emma"]

    def test_delete(self, services):
        services.books.create(Book(title="Dune", isbn="111"))
        assert services.books.delete("111") is True
        assert services.books.delete("111") is False

    def test_for_kind(self, services):
        assert services.for_kind(EntityKind.ALBUM) is services.albums
        assert services.for_kind(EntityKind.ALBUM_REVIEW) is services.album_reviews


class TestUpdate:
    """Test the update rules of each kind."""

    def test_book_update_forces_path_isbn(self, services):
        """Books are written under the path isbn."""
        services.books.create(Book(title="Dune", isbn="111"))
        updated = services.books.update("111", Book(title="Dune (2nd ed.)", isbn="999")).value()
        assert updated.isbn == "111"
        assert services.books.get("111").value().title == "Dune (2nd ed.)"
        assert services.books.get("999").is_failure()

    def test_book_update_creates_missing(self, services):
        """Books and songs are upserted."""
        assert services.books.update("555", Book(title="New")).is_success()
        assert services.books.get("555").value().title == "New"

    def test_song_update_forces_path_id(self, services):
        services.songs.create(Song(title="River"))
        updated = services.songs.update(1, Song(id=7, title="Carey")).value()
        assert updated.id == 1
        assert services.songs.get(7).is_failure()

    def test_album_update_missing(self, services):
        """Albums and reviews refuse to update an unknown id."""
        result = services.albums.update(3, Album(title="Blue"))
        assert isinstance(result.error(), NotFoundError)

    def test_album_update_keeps_path_id(self, services):
        services.albums.create(Album(title="Blue"))
        updated = services.albums.update(1, Album(title="Court and Spark")).value()
        assert updated.id == 1
        assert services.albums.get(1).value().title == "Court and Spark"

    def test_review_update_with_new_id_moves(self, services):
        """An explicit different id moves the record."""
        services.reviews.create(Review(book_id=7, rating=3.0))
        moved = services.reviews.update(1, Review(review_id=5, book_id=7, rating=4.0)).value()
        assert moved.review_id == 5
        assert services.reviews.get(1).is_failure()
        assert services.reviews.get(5).value().rating == 4.0

    def test_update_does_not_alias_input(self, services):
        services.albums.create(Album(title="Blue"))
        incoming = Album(title="Hejira")
        services.albums.update(1, incoming)
        assert incoming.id is None


class TestAlbumSongs:
    """Test album song membership."""

    def test_add_and_remove(self, services):
        services.albums.create(Album(title="Blue"))
        assert services.albums.add_song(1, 4).value().song_ids == [4]
        assert services.albums.add_song(1, 4).value().song_ids == [4, 4]
        assert services.albums.remove_song(1, 4).value().song_ids == [4]

    def test_unknown_album(self, services):
        assert isinstance(services.albums.add_song(9, 1).error(), NotFoundError)
        assert isinstance(services.albums.remove_song(9, 1).error(), NotFoundError)

    def test_remove_absent_song_is_not_an_error(self, services):
        services.albums.create(Album(title="Blue", song_ids=[1]))
        assert services.albums.remove_song(1, 2).value().song_ids == [1]


class TestReviewService:
    """Test listing reviews by parent."""

    def test_list_for_parent(self, services):
        services.album_reviews.create(AlbumReview(album_id=1, rating=5, date=date(2024, 1, 1)))
        services.album_reviews.create(AlbumReview(album_id=2, rating=3))
        assert [r.rating for r in services.album_reviews.list_for_parent(1)] == [5]
        assert len(services.album_reviews.list_for_parent(None)) == 2
        assert len(services.album_reviews.list_for_parent(0)) == 2
