"""
utils/errors.py
---------------
Error taxonomy shared by every layer.

Each error carries a machine-readable ``kind`` and a human-readable
``message`` that is safe to show to a client. Raw driver text never goes
into ``message``; it is logged where the failure is translated.
"""

from typing import Optional


class PlaceRatingError(Exception):
    """Base class for every failure an engine operation can report."""

    kind = "error"

    def __init__(self, message: str, details: Optional[dict] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def to_dict(self) -> dict:
        """Structured failure result for the calling layer to serialize."""
        result = {"success": False, "kind": self.kind, "message": self.message}
        if self.details:
            result["details"] = self.details
        return result


class ValidationError(PlaceRatingError):
    """Malformed, missing or out-of-range input. Raised before any store access."""

    kind = "validation_error"


class NotFoundError(PlaceRatingError):
    kind = "not_found"


class InvalidCredentialsError(PlaceRatingError):
    kind = "invalid_credentials"


class DatabaseError(PlaceRatingError):
    """Any store-reported failure without a more specific translation."""

    kind = "database_error"


class ForeignKeyError(DatabaseError):
    """A write referenced a user or place that does not exist."""

    kind = "foreign_key_error"


class DuplicateError(DatabaseError):
    kind = "duplicate"


class ConnectivityError(DatabaseError):
    """The store could not be reached, or the pool had nothing to hand out."""

    kind = "connectivity_error"


def failure_result(exc: Exception) -> dict:
    """
    Map any exception to a structured failure result.

    Taxonomy errors keep their kind and message; anything else becomes a
    generic ``internal_error`` so no internals leak to the client.
    """
    if isinstance(exc, PlaceRatingError):
        return exc.to_dict()
    return {"success": False, "kind": "internal_error", "message": "Internal error"}
