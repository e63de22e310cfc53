"""
services/place_service.py
--------------------------
Business logic for adding places.
"""

from typing import Optional

from db.connection import Database, get_database
from models.place import Place
from repositories.place_repo import PlaceRepository
from utils.validation import optional_text, require_number, require_text


class PlaceService:
    """Creates places. Places are not edited or removed afterwards."""

    def __init__(self, database: Optional[Database] = None):
        self.repo = PlaceRepository(database or get_database())

    def add_place(
        self,
        name: str,
        latitude: float,
        longitude: float,
        description: Optional[str] = None,
        image_url: Optional[str] = None,
        category: Optional[str] = None,
    ) -> dict:
        """
        Store a new place. Missing optional texts are stored as "".

        Returns:
            {'place_id': int}

        Raises:
            ValidationError: Blank name or coordinates out of range.
        """
        place = Place(
            name=require_text(name, "name").strip(),
            latitude=require_number(latitude, "latitude", -90.0, 90.0),
            longitude=require_number(longitude, "longitude", -180.0, 180.0),
            description=optional_text(description, "description"),
            image_url=optional_text(image_url, "image_url"),
            category=optional_text(category, "category"),
        )
        saved = self.repo.add(place)
        return {"place_id": saved.place_id}
