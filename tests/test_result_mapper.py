from datetime import datetime, timezone
from decimal import Decimal

import pytest

from utils import result_mapper
from utils.errors import NotFoundError, ValidationError, failure_result


def test_numeric_aggregates_default_to_zero():
    assert result_mapper.average(None) == 0.0
    assert isinstance(result_mapper.average(None), float)
    assert result_mapper.average(Decimal("3.6666666666666667")) == pytest.approx(11 / 3)
    assert result_mapper.whole(None) == 0
    assert result_mapper.whole(Decimal("12")) == 12


def test_text_defaults_to_empty_string():
    assert result_mapper.text(None) == ""
    assert result_mapper.text("park") == "park"


def test_timestamp_omitted_when_missing():
    assert result_mapper.put_timestamp({}, "last_rating_at", None) == {}
    ts = datetime(2025, 1, 1, tzinfo=timezone.utc)
    assert result_mapper.put_timestamp({}, "last_rating_at", ts) == {"last_rating_at": ts}


def test_place_keeps_field_order():
    row = {
        "place_id": 1, "name": "A", "description": None, "image_url": None,
        "category": None, "latitude": Decimal("1.5"), "longitude": 2.0,
        "avg_rating": None, "review_count": 0,
    }
    record = result_mapper.place(row)
    assert list(record) == list(result_mapper.PLACE_FIELDS) + ["avg_rating", "review_count"]
    assert record["latitude"] == 1.5


def test_failure_result_for_taxonomy_errors():
    assert failure_result(ValidationError("stars must be an integer between 1 and 5", {"field": "stars"})) == {
        "success": False,
        "kind": "validation_error",
        "message": "stars must be an integer between 1 and 5",
        "details": {"field": "stars"},
    }
    assert failure_result(NotFoundError("Place not found"))["kind"] == "not_found"


def test_failure_result_hides_unexpected_errors():
    result = failure_result(RuntimeError("stack trace with secrets"))
    assert result == {"success": False, "kind": "internal_error", "message": "Internal error"}
