"""
utils/result_mapper.py
----------------------
The single NULL policy applied to every aggregate the engines return.

    AVG                     -> 0.0
    MIN / MAX / SUM / COUNT -> 0
    optional text           -> ""
    nullable timestamp      -> key omitted

Rows come in as dicts (RealDictCursor) and leave as plain result records.
"""

from decimal import Decimal
from typing import Any, Optional

PLACE_FIELDS = (
    "place_id", "name", "description", "image_url", "category", "latitude", "longitude",
)


def average(value: Optional[Any]) -> float:
    """AVG over zero rows is NULL; report it as 0.0."""
    if value is None:
        return 0.0
    return float(value)


def whole(value: Optional[Any]) -> int:
    """MIN, MAX, SUM and COUNT over zero rows report 0."""
    if value is None:
        return 0
    return int(value)


def text(value: Optional[str]) -> str:
    return value if value is not None else ""


def coordinate(value: Any) -> float:
    # NUMERIC columns arrive as Decimal
    return float(value) if isinstance(value, Decimal) else value


def put_timestamp(record: dict, key: str, value) -> dict:
    """Set ``record[key]`` only when the timestamp exists."""
    if value is not None:
        record[key] = value
    return record


# ── Row mappers ───────────────────────────────────────────

def place(row: dict, include_ratings: bool = True) -> dict:
    """Place fields, optionally followed by avg_rating and review_count."""
    record = {
        "place_id": row["place_id"],
        "name": row["name"],
        "description": text(row.get("description")),
        "image_url": text(row.get("image_url")),
        "category": text(row.get("category")),
        "latitude": coordinate(row["latitude"]),
        "longitude": coordinate(row["longitude"]),
    }
    if include_ratings:
        record["avg_rating"] = average(row.get("avg_rating"))
        record["review_count"] = whole(row.get("review_count"))
    return record


def review(row: dict) -> dict:
    return {
        "rating_id": row["rating_id"],
        "user_id": row["user_id"],
        "username": row["username"],
        "stars": whole(row["stars"]),
        "comment": text(row.get("comment")),
        "created_at": row["created_at"],
    }


def top_rated(row: dict) -> dict:
    return {
        "place_id": row["place_id"],
        "name": row["name"],
        "description": text(row.get("description")),
        "latitude": coordinate(row["latitude"]),
        "longitude": coordinate(row["longitude"]),
        "average_rating": average(row.get("average_rating")),
        "review_count": whole(row.get("review_count")),
    }


def rating_statistics(row: dict) -> dict:
    return {
        "place_id": row["place_id"],
        "name": row["name"],
        "total_reviews": whole(row.get("total_reviews")),
        "average_rating": average(row.get("average_rating")),
        "lowest_rating": whole(row.get("lowest_rating")),
        "highest_rating": whole(row.get("highest_rating")),
        "sum_of_ratings": whole(row.get("sum_of_ratings")),
        "five_star_count": whole(row.get("five_star_count")),
        "one_star_count": whole(row.get("one_star_count")),
    }


def user_statistics(row: dict) -> dict:
    record = {
        "user_id": row["user_id"],
        "username": row["username"],
        "total_reviews": whole(row.get("total_reviews")),
        "average_rating_given": average(row.get("average_rating_given")),
        "places_rated": whole(row.get("places_rated")),
    }
    return put_timestamp(record, "last_rating_at", row.get("last_rating_at"))


def reviewed_place(row: dict) -> dict:
    """
    A place the user rated, with their own rating and the place totals.

    The user's rating always contributes to the place totals, so an empty
    aggregate means the user's rating is the only one: fall back to it.
    """
    record = place(row, include_ratings=False)
    user_rating = whole(row["user_rating"])
    record["user_rating"] = user_rating
    record["user_comment"] = text(row.get("user_comment"))
    if row.get("avg_rating") is None:
        record["avg_rating"] = float(user_rating)
        record["review_count"] = max(whole(row.get("review_count")), 1)
    else:
        record["avg_rating"] = average(row["avg_rating"])
        record["review_count"] = whole(row.get("review_count"))
    return record
