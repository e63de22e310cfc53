"""
services/user_service.py
-------------------------
Registration and login.

Passwords are compared as stored plaintext. Replace with a salted hash
comparison before exposing this to real users.
"""

from typing import Optional

from db.connection import Database, get_database
from models.user import User
from repositories.user_repo import UserRepository
from utils.errors import DuplicateError, InvalidCredentialsError
from utils.logger import get_logger
from utils.validation import require_text

logger = get_logger(__name__)


class UserService:
    """Account registration and credential checks."""

    def __init__(self, database: Optional[Database] = None):
        self.repo = UserRepository(database or get_database())

    def register(self, username: str, email: str, password: str) -> dict:
        """
        Create an account.

        Returns:
            {'user_id': int}

        Raises:
            ValidationError: A field is missing or blank.
            DuplicateError: The email is already registered.
        """
        user = User(
            username=require_text(username, "username").strip(),
            email=require_text(email, "email").strip(),
            password=require_text(password, "password"),
        )
        try:
            saved = self.repo.add(user)
        except DuplicateError as e:
            raise DuplicateError("Email already registered", {"field": "email"}) from e
        return {"user_id": saved.user_id}

    def login(self, email: str, password: str) -> dict:
        """
        Check credentials.

        Returns:
            {'user_id', 'username', 'email'}

        Raises:
            ValidationError: Email or password missing.
            InvalidCredentialsError: No user matches both.
        """
        email = require_text(email, "email").strip()
        password = require_text(password, "password")
        user = self.repo.find_by_credentials(email, password)
        if user is None:
            logger.warning("Failed login attempt")
            raise InvalidCredentialsError("Invalid credentials")
        return {"user_id": user.user_id, "username": user.username, "email": user.email}
