"""
models/rating.py
----------------
Domain model for a user's rating of a place.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

MIN_STARS = 1
MAX_STARS = 5

OUTCOME_CREATED = "created"
OUTCOME_UPDATED = "updated"


@dataclass
class Rating:
    """
    One user's rating of one place. At most one exists per (user_id, place_id);
    resubmitting overwrites stars and comment, keeping rating_id and created_at.

    Attributes:
        user_id: The rating user.
        place_id: The rated place.
        stars: Integer in [MIN_STARS, MAX_STARS].
        comment: Free text, stored as "" when absent.
        rating_id: Database primary key (None for new records).
        created_at: Timestamp of the first submission.
    """
    user_id: int
    place_id: int
    stars: int
    comment: str = ""
    rating_id: Optional[int] = None
    created_at: Optional[datetime] = None
