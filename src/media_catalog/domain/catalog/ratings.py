"""Rating aggregation over reviews."""

from __future__ import annotations

from typing import Iterable, Optional, Protocol

from ..result import NoDataError, Result, failure, success
from .entities import EntityKind
from .repositories import CatalogRepositories


class Rated(Protocol):
    rating: float


def average_rating(reviews: Iterable[Rated]) -> Optional[float]:
    """Arithmetic mean of the ratings, or ``None`` when there are none."""
    ratings = [review.rating for review in reviews]
    if not ratings:
        return None
    return sum(ratings) / len(ratings)


class RatingAggregator:
    """Computes average ratings of books, albums and songs from their reviews."""

    def __init__(self, repositories: CatalogRepositories):
        self.repositories = repositories

    def average(self, kind: EntityKind, parent_id: int) -> Result[float, NoDataError]:
        """Average rating of one parent's reviews."""
        mean = average_rating(self.repositories.reviews_of(kind, parent_id))
        if mean is None:
            return failure(NoDataError(f"No {kind.value} ratings for {parent_id}"))
        return success(mean)

    def for_book(self, book_id: int) -> Result[float, NoDataError]:
        return self.average(EntityKind.REVIEW, book_id)

    def for_album(self, album_id: int) -> Result[float, NoDataError]:
        return self.average(EntityKind.ALBUM_REVIEW, album_id)

    def for_song(self, song_id: int) -> Result[float, NoDataError]:
        return self.average(EntityKind.SONG_REVIEW, song_id)
