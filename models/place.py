"""
models/place.py
---------------
Domain model for places.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass
class Place:
    """
    A location that can be rated.

    Attributes:
        name: Place name.
        latitude: Decimal degrees, WGS84.
        longitude: Decimal degrees, WGS84.
        description: Free text, stored as "" when absent.
        image_url: Optional picture URL, stored as "" when absent.
        category: Optional category label, stored as "" when absent.
        place_id: Database primary key (None for new records).
        created_at: Timestamp when the record was created.
    """
    name: str
    latitude: float
    longitude: float
    description: str = ""
    image_url: str = ""
    category: str = ""
    place_id: Optional[int] = None
    created_at: Optional[datetime] = None

    def __str__(self) -> str:
        return f"{self.name} ({self.latitude:.5f}, {self.longitude:.5f})"
