#!/usr/bin/env python
"""
Database initialization script for the movie catalog.

Creates the movies table and, unless told otherwise, inserts the sample
movies when the table is empty.

Usage:
    # Create the table and seed sample movies
    python scripts/init_database.py

    # Drop and recreate the table first
    python scripts/init_database.py --reset

    # Create the table only
    python scripts/init_database.py --no-seed
"""

import sys
import argparse
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from app.api.config import get_database_url, get_log_level
from app.database import init_database, verify_schema, seed_sample_movies
from app.utils.logging_config import setup_logging, get_logger

logger = get_logger(__name__)


def main():
    parser = argparse.ArgumentParser(description="Initialize the movie catalog database")
    parser.add_argument("--database-url", default=None,
                        help="SQLAlchemy URL (default: DATABASE_URL or data/catalog.db)")
    parser.add_argument("--reset", action="store_true",
                        help="Drop existing tables before creating them")
    parser.add_argument("--no-seed", action="store_true",
                        help="Do not insert sample movies")
    args = parser.parse_args()

    setup_logging(level=get_log_level())

    database_url = args.database_url or get_database_url()
    logger.info("Initializing database at %s", database_url)
    db_manager = init_database(database_url=database_url, reset=args.reset)

    if not verify_schema(db_manager):
        logger.error("Database initialization failed")
        return 1

    if not args.no_seed:
        inserted = seed_sample_movies(db_manager)
        if not inserted:
            logger.info("Table already has movies; sample data skipped")

    logger.info("Database initialization successful")
    return 0


if __name__ == "__main__":
    sys.exit(main())
