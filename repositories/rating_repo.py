"""
repositories/rating_repo.py
----------------------------
Data access layer for ratings.
The upsert and every aggregate over the `ratings` table live here.
"""

from db.connection import Database
from models.rating import Rating
from utils.logger import get_logger

logger = get_logger(__name__)

class RatingRepository:
    """Repository for operations on the ratings table."""

    def __init__(self, database: Database):
        self.db = database

    # ── WRITE ─────────────────────────────────────────────

    def upsert(self, rating: Rating) -> tuple[Rating, bool]:
        """
        Insert a rating, or overwrite stars and comment of the existing one.

        A single statement guarded by UNIQUE(user_id, place_id), so two
        concurrent submissions for the same pair can neither create two rows
        nor lose a write: the later one to commit wins.

        Returns:
            (rating, created): the rating with `rating_id` and the original
            `created_at` populated, and True if a new row was inserted.

        Raises:
            ForeignKeyError: If the user or place does not exist.
        """
        sql = """
            INSERT INTO ratings (user_id, place_id, stars, comment)
            VALUES (%s, %s, %s, %s)
            ON CONFLICT (user_id, place_id)
            DO UPDATE SET stars = EXCLUDED.stars, comment = EXCLUDED.comment
            RETURNING rating_id, created_at, (xmax = 0) AS inserted;
        """
        result = self.db.execute(sql, (
            rating.user_id, rating.place_id, rating.stars, rating.comment,
        ))
        rating.rating_id = result.row["rating_id"]
        rating.created_at = result.row["created_at"]
        created = bool(result.row["inserted"])
        logger.info(
            f"{'Created' if created else 'Updated'} rating #{rating.rating_id} "
            f"(user {rating.user_id}, place {rating.place_id}, {rating.stars} stars)"
        )
        return rating, created

    # ── READ ──────────────────────────────────────────────

    def reviews_for_place(self, place_id: int) -> list[dict]:
        """Reviews of a place with the reviewer's username, newest first."""
        sql = """
            SELECT r.rating_id, r.user_id, u.username, r.stars, r.comment, r.created_at
            FROM ratings r
            JOIN users u ON u.user_id = r.user_id
            WHERE r.place_id = %s
            ORDER BY r.created_at DESC, r.rating_id DESC;
        """
        return self.db.query(sql, (place_id,))

    def top_rated(self, limit: int) -> list[dict]:
        """
        Rated places by average stars, then review count, both descending.
        The inner join drops places without ratings.
        """
        sql = """
            SELECT p.place_id, p.name, p.description, p.latitude, p.longitude,
                   AVG(r.stars) AS average_rating,
                   COUNT(r.rating_id) AS review_count
            FROM places p
            JOIN ratings r ON r.place_id = p.place_id
            GROUP BY p.place_id
            ORDER BY average_rating DESC, review_count DESC, p.place_id
            LIMIT %s;
        """
        return self.db.query(sql, (limit,))

    def statistics(self) -> list[dict]:
        """Per-place aggregates in one grouped pass over places LEFT JOIN ratings."""
        sql = """
            SELECT p.place_id, p.name,
                   COUNT(r.rating_id) AS total_reviews,
                   AVG(r.stars) AS average_rating,
                   MIN(r.stars) AS lowest_rating,
                   MAX(r.stars) AS highest_rating,
                   SUM(r.stars) AS sum_of_ratings,
                   COUNT(r.rating_id) FILTER (WHERE r.stars = 5) AS five_star_count,
                   COUNT(r.rating_id) FILTER (WHERE r.stars = 1) AS one_star_count
            FROM places p
            LEFT JOIN ratings r ON r.place_id = p.place_id
            GROUP BY p.place_id
            ORDER BY average_rating DESC NULLS LAST, p.place_id;
        """
        return self.db.query(sql)

    def user_statistics(self) -> list[dict]:
        """Per-user rating activity; users who never rated have NULL last_rating_at."""
        sql = """
            SELECT u.user_id, u.username,
                   COUNT(r.rating_id) AS total_reviews,
                   AVG(r.stars) AS average_rating_given,
                   COUNT(DISTINCT r.place_id) AS places_rated,
                   MAX(r.created_at) AS last_rating_at
            FROM users u
            LEFT JOIN ratings r ON r.user_id = u.user_id
            GROUP BY u.user_id
            ORDER BY total_reviews DESC, u.user_id;
        """
        return self.db.query(sql)

    def reviewed_places(self, user_id: int) -> list[dict]:
        """
        Places the user rated, with the user's own rating and the place totals.
        The place totals include the user's own rating.
        """
        sql = """
            SELECT p.place_id, p.name, p.description, p.image_url, p.category,
                   p.latitude, p.longitude,
                   ur.stars AS user_rating,
                   ur.comment AS user_comment,
                   AVG(r.stars) AS avg_rating,
                   COUNT(r.rating_id) AS review_count
            FROM places p
            JOIN ratings ur ON ur.place_id = p.place_id AND ur.user_id = %s
            LEFT JOIN ratings r ON r.place_id = p.place_id
            GROUP BY p.place_id, ur.rating_id
            ORDER BY ur.created_at DESC, ur.rating_id DESC;
        """
        return self.db.query(sql, (user_id,))
