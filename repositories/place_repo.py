"""
repositories/place_repo.py
---------------------------
Data access layer for places and their per-place rating aggregates.
"""

from typing import Optional

from db.connection import Database
from models.place import Place
from utils.logger import get_logger

logger = get_logger(__name__)

# Place columns plus AVG/COUNT over its ratings; the LEFT JOIN keeps
# unrated places with a NULL average and a zero count.
_PLACES_WITH_RATINGS = """
    SELECT p.place_id, p.name, p.description, p.image_url, p.category,
           p.latitude, p.longitude,
           AVG(r.stars) AS avg_rating,
           COUNT(r.rating_id) AS review_count
    FROM places p
    LEFT JOIN ratings r ON r.place_id = p.place_id
"""


class PlaceRepository:
    """Repository for operations on the places table."""

    def __init__(self, database: Database):
        self.db = database

    def add(self, place: Place) -> Place:
        """
        Insert a new place.

        Returns:
            The same Place with its `place_id` and `created_at` populated.
        """
        sql = """
            INSERT INTO places (name, description, image_url, category, latitude, longitude)
            VALUES (%s, %s, %s, %s, %s, %s)
            RETURNING place_id, created_at;
        """
        result = self.db.execute(sql, (
            place.name, place.description, place.image_url,
            place.category, place.latitude, place.longitude,
        ))
        place.place_id = result.row["place_id"]
        place.created_at = result.row["created_at"]
        logger.info(f"Added place #{place.place_id}: {place}")
        return place

    def get_with_ratings(self, place_id: int) -> Optional[dict]:
        """
        Fetch one place with its avg_rating and review_count.

        Returns:
            Row dict or None if the place does not exist.
        """
        sql = _PLACES_WITH_RATINGS + """
            WHERE p.place_id = %s
            GROUP BY p.place_id;
        """
        return self.db.query_one(sql, (place_id,))

    def list_with_ratings(self) -> list[dict]:
        """Fetch every place with its avg_rating and review_count, by place_id."""
        sql = _PLACES_WITH_RATINGS + """
            GROUP BY p.place_id
            ORDER BY p.place_id;
        """
        return self.db.query(sql)
