"""
services/rating_service.py
---------------------------
Business logic for submitting ratings.
Enforces one rating per (user, place): a resubmission overwrites the
earlier stars and comment instead of adding a row.
"""

from typing import Optional

from db.connection import Database, get_database
from models.rating import MAX_STARS, MIN_STARS, OUTCOME_CREATED, OUTCOME_UPDATED, Rating
from repositories.rating_repo import RatingRepository
from utils.errors import ValidationError
from utils.logger import get_logger
from utils.validation import optional_text, require_id, require_int_range

logger = get_logger(__name__)


class RatingService:
    """Creates or updates a user's rating of a place."""

    def __init__(self, database: Optional[Database] = None):
        self.repo = RatingRepository(database or get_database())

    def submit_rating(
        self, user_id: int, place_id: int, stars: int, comment: Optional[str] = None
    ) -> dict:
        """
        Create the user's rating of a place, or overwrite the existing one.

        Last writer wins; no conflict is ever reported. A missing comment is
        stored as "" on both insert and update.

        Returns:
            {'outcome': 'created' | 'updated', 'ratingId': int}

        Raises:
            ValidationError: Bad ids or stars outside [1, 5]; nothing is written.
            ForeignKeyError: The user or place does not exist.
            ConnectivityError: The store is unreachable.
        """
        try:
            require_id(user_id, "user_id")
            require_id(place_id, "place_id")
            require_int_range(stars, "stars", MIN_STARS, MAX_STARS)
            comment = optional_text(comment, "comment")
        except ValidationError as e:
            logger.warning(f"Rejected rating submission: {e.message}")
            raise

        rating, created = self.repo.upsert(
            Rating(user_id=user_id, place_id=place_id, stars=stars, comment=comment)
        )
        return {
            "outcome": OUTCOME_CREATED if created else OUTCOME_UPDATED,
            "ratingId": rating.rating_id,
        }
