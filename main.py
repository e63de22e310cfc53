"""
main.py
-------
Entry point for the place-rating engine.

Responsibilities:
    - Initialize the database connection pool and schema.
    - Wire every service to one shared store gateway for the request layer.
"""

from dataclasses import dataclass
from typing import Optional

from config import NEARBY_INCLUDE_RATINGS, TOP_RATED_DEFAULT_LIMIT
from db.connection import Database, close_pool, init_pool
from db.init_db import create_tables
from services.aggregation_service import AggregationService
from services.geo_service import GeoService
from services.place_service import PlaceService
from services.rating_service import RatingService
from services.user_service import UserService
from utils.logger import get_logger

logger = get_logger(__name__)


@dataclass
class Services:
    """Every operation the request layer may call, grouped by service."""
    users: UserService
    places: PlaceService
    ratings: RatingService
    aggregates: AggregationService
    geo: GeoService


def build_services(
    database: Database,
    nearby_include_ratings: Optional[bool] = None,
    top_rated_limit: Optional[int] = None,
) -> Services:
    """Construct all services over the given gateway."""
    if nearby_include_ratings is None:
        nearby_include_ratings = NEARBY_INCLUDE_RATINGS
    if top_rated_limit is None:
        top_rated_limit = TOP_RATED_DEFAULT_LIMIT
    return Services(
        users=UserService(database),
        places=PlaceService(database),
        ratings=RatingService(database),
        aggregates=AggregationService(database, top_rated_limit=top_rated_limit),
        geo=GeoService(database, include_ratings=nearby_include_ratings),
    )


def main() -> None:
    """Bootstrap the store and report its contents."""

    # ── 1. Database setup ─────────────────────────────────
    logger.info("Initializing database...")
    database = init_pool()
    try:
        create_tables(database)

        # ── 2. Wire services ──────────────────────────────
        services = build_services(database)
        places = services.aggregates.list_places()
        logger.info(
            f"Place-rating engine ready: {len(places)} places, "
            f"nearby enrichment {'on' if services.geo.include_ratings else 'off'}."
        )
    finally:
        # ── 3. Cleanup ────────────────────────────────────
        close_pool()


if __name__ == "__main__":
    main()
