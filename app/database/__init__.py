"""
Database module for the movie catalog.

This module provides the database model, connection management, and CRUD
operations using SQLAlchemy ORM.
"""

from app.database.models import Base, Movie
from app.database.connection import DatabaseManager, get_db_manager
from app.database.init_db import init_database, verify_schema, seed_sample_movies
from app.database import crud

__all__ = [
    # Models
    'Base',
    'Movie',
    # Connection
    'DatabaseManager',
    'get_db_manager',
    # Initialization
    'init_database',
    'verify_schema',
    'seed_sample_movies',
    # CRUD module
    'crud',
]
