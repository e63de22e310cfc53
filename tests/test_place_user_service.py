from datetime import datetime, timezone

import pytest

from db.connection import ExecuteResult
from services.place_service import PlaceService
from services.user_service import UserService
from utils.errors import DuplicateError, InvalidCredentialsError, ValidationError

NOW = datetime(2025, 6, 1, tzinfo=timezone.utc)


def test_add_place_defaults_optional_text(fake_db):
    fake_db.on_execute("INSERT INTO places", ExecuteResult(1, {"place_id": 11, "created_at": NOW}))

    result = PlaceService(fake_db).add_place("Jonker Street", 2.1953, 102.2467)

    assert result == {"place_id": 11}
    _, params = fake_db.calls[0]
    assert params == ("Jonker Street", "", "", "", 2.1953, 102.2467)


def test_add_place_keeps_given_fields(fake_db):
    fake_db.on_execute("INSERT INTO places", ExecuteResult(1, {"place_id": 12, "created_at": NOW}))
    PlaceService(fake_db).add_place(
        "A Famosa", 2.1916, 102.2505,
        description="fort", image_url="http://img/a.jpg", category="history",
    )
    _, params = fake_db.calls[0]
    assert params == ("A Famosa", "fort", "http://img/a.jpg", "history", 2.1916, 102.2505)


@pytest.mark.parametrize("name, lat, lon", [
    ("", 1.0, 1.0),
    ("   ", 1.0, 1.0),
    (None, 1.0, 1.0),
    ("X", 95.0, 1.0),
    ("X", 1.0, 200.0),
    ("X", None, 1.0),
])
def test_add_place_validation(fake_db, name, lat, lon):
    with pytest.raises(ValidationError):
        PlaceService(fake_db).add_place(name, lat, lon)
    assert fake_db.calls == []


def test_register_returns_user_id(fake_db):
    fake_db.on_execute("INSERT INTO users", ExecuteResult(1, {"user_id": 3, "created_at": NOW}))
    assert UserService(fake_db).register("ana", "ana@example.com", "pw") == {"user_id": 3}
    assert fake_db.calls[0][1] == ("ana", "ana@example.com", "pw")


def test_register_duplicate_email(fake_db):
    fake_db.on_execute("INSERT INTO users", DuplicateError("Record already exists"))
    with pytest.raises(DuplicateError) as exc_info:
        UserService(fake_db).register("ana", "ana@example.com", "pw")
    assert exc_info.value.message == "Email already registered"


@pytest.mark.parametrize("username, email, password", [
    ("", "a@b.c", "pw"),
    ("ana", "", "pw"),
    ("ana", "a@b.c", ""),
    ("ana", None, "pw"),
])
def test_register_requires_all_fields(fake_db, username, email, password):
    with pytest.raises(ValidationError):
        UserService(fake_db).register(username, email, password)
    assert fake_db.calls == []


def test_login_success(fake_db):
    fake_db.on_query("FROM users", [{
        "user_id": 3, "username": "ana", "email": "ana@example.com",
        "password": "pw", "created_at": NOW,
    }])
    result = UserService(fake_db).login("ana@example.com", "pw")
    assert result == {"user_id": 3, "username": "ana", "email": "ana@example.com"}
    assert fake_db.calls[0][1] == ("ana@example.com", "pw")


def test_login_failure(fake_db):
    with pytest.raises(InvalidCredentialsError) as exc_info:
        UserService(fake_db).login("ana@example.com", "wrong")
    assert exc_info.value.to_dict() == {
        "success": False, "kind": "invalid_credentials", "message": "Invalid credentials",
    }
