"""
services/geo_service.py
------------------------
Proximity search: places within a radius of a point, closest first.
"""

from typing import Optional

from config import EARTH_RADIUS_KM, NEARBY_INCLUDE_RATINGS
from db.connection import Database, get_database
from repositories.place_repo import PlaceRepository
from utils import result_mapper
from utils.geo import great_circle_km
from utils.logger import get_logger
from utils.validation import require_number

logger = get_logger(__name__)


class GeoService:
    """
    Radius search over all places.

    Args:
        database: Store gateway; the process default when omitted.
        include_ratings: Add avg_rating and review_count to each result.
    """

    def __init__(
        self,
        database: Optional[Database] = None,
        include_ratings: bool = NEARBY_INCLUDE_RATINGS,
    ):
        self.place_repo = PlaceRepository(database or get_database())
        self.include_ratings = include_ratings

    def nearby(self, latitude: float, longitude: float, radius_km: float) -> list[dict]:
        """
        Places strictly closer than `radius_km` to the point, ascending by
        distance (ties by place_id). A radius of zero or less matches nothing.

        Returns:
            Place records, each with `distanceKm`.
        """
        latitude = require_number(latitude, "latitude", -90.0, 90.0)
        longitude = require_number(longitude, "longitude", -180.0, 180.0)
        radius_km = require_number(radius_km, "radius_km")
        if radius_km <= 0:
            return []

        matches = []
        for row in self.place_repo.list_with_ratings():
            distance = great_circle_km(
                latitude, longitude,
                float(row["latitude"]), float(row["longitude"]),
                EARTH_RADIUS_KM,
            )
            if distance < radius_km:
                matches.append((distance, row))

        matches.sort(key=lambda m: (m[0], m[1]["place_id"]))
        logger.debug(
            f"{len(matches)} places within {radius_km} km of ({latitude}, {longitude})"
        )

        results = []
        for distance, row in matches:
            record = result_mapper.place(row, include_ratings=self.include_ratings)
            record["distanceKm"] = distance
            results.append(record)
        return results
