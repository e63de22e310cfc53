"""
utils/validation.py
-------------------
Input checks run by the services before any store access.
Each helper returns the normalized value or raises ValidationError.
"""

import math
from typing import Any, Optional

from utils.errors import ValidationError


def require_id(value: Any, field: str) -> int:
    """A surrogate key: a positive integer (bools rejected)."""
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        raise ValidationError(f"{field} must be a positive integer", {"field": field})
    return value


def require_int_range(value: Any, field: str, low: int, high: int) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or not low <= value <= high:
        raise ValidationError(
            f"{field} must be an integer between {low} and {high}", {"field": field}
        )
    return value


def require_number(
    value: Any, field: str, low: Optional[float] = None, high: Optional[float] = None
) -> float:
    """A finite int or float, optionally bounded (inclusive)."""
    if isinstance(value, bool) or not isinstance(value, (int, float)) or not math.isfinite(value):
        raise ValidationError(f"{field} must be a number", {"field": field})
    if (low is not None and value < low) or (high is not None and value > high):
        raise ValidationError(
            f"{field} must be between {low} and {high}", {"field": field}
        )
    return float(value)


def require_text(value: Any, field: str) -> str:
    """A non-blank string."""
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"{field} is required", {"field": field})
    return value


def optional_text(value: Any, field: str) -> str:
    """None becomes ""; anything else must already be a string."""
    if value is None:
        return ""
    if not isinstance(value, str):
        raise ValidationError(f"{field} must be a string", {"field": field})
    return value
