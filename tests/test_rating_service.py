from datetime import datetime, timezone

import pytest

from db.connection import ExecuteResult
from services.rating_service import RatingService
from utils.errors import ConnectivityError, ForeignKeyError, ValidationError

CREATED_AT = datetime(2025, 5, 1, 12, 0, tzinfo=timezone.utc)


def _upsert_returns(fake_db, rating_id, inserted):
    fake_db.on_execute(
        "INSERT INTO ratings",
        ExecuteResult(
            rowcount=1,
            row={"rating_id": rating_id, "created_at": CREATED_AT, "inserted": inserted},
        ),
    )


def test_first_submission_is_created(fake_db):
    _upsert_returns(fake_db, 7, True)
    result = RatingService(fake_db).submit_rating(1, 2, 5, "great")
    assert result == {"outcome": "created", "ratingId": 7}


def test_resubmission_is_updated(fake_db):
    _upsert_returns(fake_db, 7, False)
    result = RatingService(fake_db).submit_rating(1, 2, 3, "meh")
    assert result == {"outcome": "updated", "ratingId": 7}


def test_upsert_is_a_single_statement(fake_db):
    _upsert_returns(fake_db, 7, True)
    RatingService(fake_db).submit_rating(1, 2, 4)

    assert len(fake_db.calls) == 1
    sql, params = fake_db.calls[0]
    assert "ON CONFLICT (user_id, place_id)" in sql
    assert "DO UPDATE SET stars = EXCLUDED.stars, comment = EXCLUDED.comment" in sql
    assert params == (1, 2, 4, "")


def test_missing_comment_is_stored_as_empty_string(fake_db):
    _upsert_returns(fake_db, 3, False)
    RatingService(fake_db).submit_rating(1, 2, 2, None)
    _, params = fake_db.calls[0]
    assert params[3] == ""


@pytest.mark.parametrize("stars", [0, 6, -1, 2.5, "4", True, None])
def test_invalid_stars_rejected_before_store_access(fake_db, stars):
    with pytest.raises(ValidationError) as exc_info:
        RatingService(fake_db).submit_rating(1, 2, stars)
    assert exc_info.value.details == {"field": "stars"}
    assert fake_db.calls == []


@pytest.mark.parametrize("user_id, place_id", [(0, 1), (1, 0), ("1", 1), (1, None)])
def test_invalid_ids_rejected(fake_db, user_id, place_id):
    with pytest.raises(ValidationError):
        RatingService(fake_db).submit_rating(user_id, place_id, 3)
    assert fake_db.calls == []


def test_non_string_comment_rejected(fake_db):
    with pytest.raises(ValidationError):
        RatingService(fake_db).submit_rating(1, 2, 3, 42)


def test_unknown_place_surfaces_foreign_key_error(fake_db):
    fake_db.on_execute("INSERT INTO ratings", ForeignKeyError("Referenced user or place does not exist"))
    with pytest.raises(ForeignKeyError):
        RatingService(fake_db).submit_rating(1, 999, 3)


def test_connectivity_error_propagates(fake_db):
    fake_db.on_execute("INSERT INTO ratings", ConnectivityError("Database is unreachable"))
    with pytest.raises(ConnectivityError):
        RatingService(fake_db).submit_rating(1, 2, 3)
