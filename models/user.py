"""
models/user.py
--------------
Domain model for registered users.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass
class User:
    """
    Represents a registered account.

    Attributes:
        username: Display name shown next to reviews.
        email: Login identifier, unique across users.
        password: Opaque comparison value (stored as given).
        user_id: Database primary key (None for new records).
        created_at: Timestamp when the record was created.
    """
    username: str
    email: str
    password: str
    user_id: Optional[int] = None
    created_at: Optional[datetime] = None

    def __repr__(self) -> str:
        # keep the password out of logs
        return f"User(user_id={self.user_id!r}, username={self.username!r}, email={self.email!r})"
