"""
services/aggregation_service.py
--------------------------------
Read-only rating aggregates: place listings, place details, top-rated,
per-place and per-user statistics.

Aggregates are recomputed by the store on every call and passed through
the shared NULL policy in utils.result_mapper, so a place or user with
no ratings reports zeros rather than nulls.
"""

from typing import Optional

from config import TOP_RATED_DEFAULT_LIMIT
from db.connection import Database, get_database
from repositories.place_repo import PlaceRepository
from repositories.rating_repo import RatingRepository
from utils import result_mapper
from utils.errors import NotFoundError
from utils.logger import get_logger
from utils.validation import require_id, require_int_range

logger = get_logger(__name__)

MAX_TOP_RATED_LIMIT = 100


class AggregationService:
    """Place and user statistics over the ratings table."""

    def __init__(
        self,
        database: Optional[Database] = None,
        top_rated_limit: int = TOP_RATED_DEFAULT_LIMIT,
    ):
        database = database or get_database()
        self.place_repo = PlaceRepository(database)
        self.rating_repo = RatingRepository(database)
        self.top_rated_limit = top_rated_limit

    def list_places(self) -> list[dict]:
        """Every place with avg_rating and review_count, ordered by place_id."""
        return [result_mapper.place(row) for row in self.place_repo.list_with_ratings()]

    def get_place(self, place_id: int) -> dict:
        """
        One place with its aggregates and reviews (newest first).

        Raises:
            NotFoundError: If no place has this id.
        """
        require_id(place_id, "place_id")
        row = self.place_repo.get_with_ratings(place_id)
        if row is None:
            raise NotFoundError("Place not found", {"place_id": place_id})
        record = result_mapper.place(row)
        record["reviews"] = self.place_reviews(place_id)
        return record

    def place_reviews(self, place_id: int) -> list[dict]:
        """Reviews of a place with reviewer usernames, newest first."""
        require_id(place_id, "place_id")
        return [result_mapper.review(r) for r in self.rating_repo.reviews_for_place(place_id)]

    def top_rated(self, limit: Optional[int] = None) -> list[dict]:
        """
        Rated places, highest average first; ties go to the larger review count.
        Places without ratings never appear.
        """
        if limit is None:
            limit = self.top_rated_limit
        require_int_range(limit, "limit", 1, MAX_TOP_RATED_LIMIT)
        return [result_mapper.top_rated(row) for row in self.rating_repo.top_rated(limit)]

    def rating_statistics(self) -> list[dict]:
        """Per-place totals, average, min, max, sum and 5-/1-star counts."""
        return [result_mapper.rating_statistics(row) for row in self.rating_repo.statistics()]

    def user_statistics(self) -> list[dict]:
        """Per-user activity; `last_rating_at` only for users who have rated."""
        return [result_mapper.user_statistics(row) for row in self.rating_repo.user_statistics()]

    def reviewed_places(self, user_id: int) -> list[dict]:
        """Places the user rated, newest rating first."""
        require_id(user_id, "user_id")
        return [result_mapper.reviewed_place(row) for row in self.rating_repo.reviewed_places(user_id)]
