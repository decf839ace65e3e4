"""
Database initialization and schema creation.

This module provides functions to initialize the database schema and
populate it with the sample catalog.
"""

import logging
from typing import Optional

from sqlalchemy import inspect

from app.database.connection import DatabaseManager, get_db_manager
from app.database import crud

logger = logging.getLogger(__name__)

EXPECTED_TABLES = {'movies'}

SAMPLE_MOVIES = [
    {
        'title': 'The Shawshank Redemption',
        'director': 'Frank Darabont',
        'year': 1994,
        'genre': 'Drama',
        'rating': 9.3,
        'image': 'https://images.unsplash.com/photo-1598899134739-24c46f58b8c0?w=400&h=300&fit=crop',
    },
    {
        'title': 'The Godfather',
        'director': 'Francis Ford Coppola',
        'year': 1972,
        'genre': 'Crime',
        'rating': 9.2,
        'image': 'https://images.unsplash.com/photo-1489599849927-2ee91cede3ba?w=400&h=300&fit=crop',
    },
    {
        'title': 'The Dark Knight',
        'director': 'Christopher Nolan',
        'year': 2008,
        'genre': 'Action',
        'rating': 9.0,
        'image': 'https://images.unsplash.com/photo-1524985069026-dd778a71c7b4?w=400&h=300&fit=crop',
    },
    {
        'title': 'Pulp Fiction',
        'director': 'Quentin Tarantino',
        'year': 1994,
        'genre': 'Crime',
        'rating': 8.9,
        'image': 'https://images.unsplash.com/photo-1440404653325-ab127d49abc1?w=400&h=300&fit=crop',
    },
]


def init_database(database_url: Optional[str] = None, reset: bool = False) -> DatabaseManager:
    """
    Initialize the database and create all tables.

    Args:
        database_url: SQLAlchemy URL (defaults to the SQLite catalog file)
        reset: If True, drop existing tables before creating new ones

    Returns:
        DatabaseManager instance
    """
    db_manager = get_db_manager(database_url=database_url)

    if reset:
        logger.warning("Resetting database (dropping all tables)")
        db_manager.reset_database()
    else:
        db_manager.create_tables()
    logger.info("Movies table ready")

    return db_manager


def verify_schema(db_manager: DatabaseManager) -> bool:
    """
    Verify that all tables exist in the database.

    Args:
        db_manager: DatabaseManager instance

    Returns:
        True if all tables exist, False otherwise
    """
    inspector = inspect(db_manager.engine)
    existing_tables = set(inspector.get_table_names())

    missing_tables = EXPECTED_TABLES - existing_tables
    if missing_tables:
        logger.error("Missing tables: %s", sorted(missing_tables))
        return False

    return True


def seed_sample_movies(db_manager: DatabaseManager) -> int:
    """
    Insert the sample movies if the table is empty.

    Args:
        db_manager: DatabaseManager instance

    Returns:
        Number of movies inserted (0 when the table already had rows)
    """
    with db_manager.session_scope() as session:
        if crud.get_movie_count(session) > 0:
            return 0
        inserted = crud.create_movies(session, SAMPLE_MOVIES)
    logger.info("Sample movies added to database: %d", inserted)
    return inserted
