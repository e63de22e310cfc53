"""
db/init_db.py
-------------
Creates the database schema (tables) if they do not already exist.
Run this module directly to initialize a fresh database:
    python -m db.init_db
"""

from typing import Optional

from db.connection import Database, get_database
from utils.logger import get_logger

logger = get_logger(__name__)

SCHEMA_SQL = """
-- Users table: registered accounts
CREATE TABLE IF NOT EXISTS users (
    user_id         SERIAL PRIMARY KEY,
    username        VARCHAR(50) NOT NULL,
    email           VARCHAR(100) NOT NULL UNIQUE,
    password        VARCHAR(100) NOT NULL,
    created_at      TIMESTAMPTZ DEFAULT NOW()
);

-- Places table: locations users can browse and rate
CREATE TABLE IF NOT EXISTS places (
    place_id        SERIAL PRIMARY KEY,
    name            VARCHAR(100) NOT NULL,
    description     TEXT,
    image_url       VARCHAR(255),
    category        VARCHAR(50),
    latitude        DOUBLE PRECISION NOT NULL,
    longitude       DOUBLE PRECISION NOT NULL,
    created_at      TIMESTAMPTZ DEFAULT NOW()
);

-- Ratings table: at most one rating per (user, place)
CREATE TABLE IF NOT EXISTS ratings (
    rating_id       SERIAL PRIMARY KEY,
    user_id         INT NOT NULL REFERENCES users(user_id),
    place_id        INT NOT NULL REFERENCES places(place_id),
    stars           INT NOT NULL CHECK (stars BETWEEN 1 AND 5),
    comment         TEXT,
    created_at      TIMESTAMPTZ DEFAULT NOW(),
    UNIQUE(user_id, place_id)
);

-- Indexes for faster aggregation
CREATE INDEX IF NOT EXISTS idx_ratings_place ON ratings(place_id);
CREATE INDEX IF NOT EXISTS idx_ratings_user_created ON ratings(user_id, created_at);
"""


def create_tables(database: Optional[Database] = None) -> None:
    """
    Execute the schema SQL to create all tables.
    Safe to call multiple times (uses IF NOT EXISTS).
    """
    database = database or get_database()
    try:
        database.execute_script(SCHEMA_SQL)
    except Exception as e:
        logger.error(f"Failed to initialize schema: {e}")
        raise
    logger.info("Database schema initialized successfully.")


if __name__ == "__main__":
    from db.connection import init_pool
    create_tables(init_pool())
    print("Database schema created successfully.")
