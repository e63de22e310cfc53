"""
repositories/user_repo.py
--------------------------
Data access layer for user records.
"""

from typing import Optional

from db.connection import Database
from models.user import User
from utils.logger import get_logger

logger = get_logger(__name__)


class UserRepository:
    """Repository for operations on the users table."""

    def __init__(self, database: Database):
        self.db = database

    def add(self, user: User) -> User:
        """
        Insert a new user.

        Returns:
            The same User with its `user_id` and `created_at` populated.

        Raises:
            DuplicateError: If the email is already registered.
        """
        sql = """
            INSERT INTO users (username, email, password)
            VALUES (%s, %s, %s)
            RETURNING user_id, created_at;
        """
        result = self.db.execute(sql, (user.username, user.email, user.password))
        user.user_id = result.row["user_id"]
        user.created_at = result.row["created_at"]
        logger.info(f"Registered user #{user.user_id}")
        return user

    def find_by_credentials(self, email: str, password: str) -> Optional[User]:
        """
        Fetch the user whose email and password both match.

        Returns:
            User or None.
        """
        sql = """
            SELECT user_id, username, email, password, created_at
            FROM users
            WHERE email = %s AND password = %s;
        """
        row = self.db.query_one(sql, (email, password))
        return self._row_to_user(row) if row else None

    @staticmethod
    def _row_to_user(row: dict) -> User:
        return User(
            user_id=row["user_id"],
            username=row["username"],
            email=row["email"],
            password=row["password"],
            created_at=row["created_at"],
        )
