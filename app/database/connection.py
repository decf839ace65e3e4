"""
Database connection management using SQLAlchemy.

This module handles engine creation, session management, and provides
utilities for database operations. SQLite is the default backend; any
SQLAlchemy URL may be supplied instead.
"""

import os
from contextlib import contextmanager
from pathlib import Path
from typing import Generator, Optional
from sqlalchemy import create_engine
from sqlalchemy.engine import make_url
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import StaticPool

from app.database.models import Base


# Default database file, under the project root
DEFAULT_DB_PATH = str(Path(__file__).resolve().parents[2] / "data" / "catalog.db")


def get_database_url(db_path: str = DEFAULT_DB_PATH) -> str:
    """
    Get SQLite database URL for a file path.

    Args:
        db_path: Path to SQLite database file

    Returns:
        SQLAlchemy database URL
    """
    # Ensure directory exists
    db_dir = os.path.dirname(db_path)
    if db_dir:
        os.makedirs(db_dir, exist_ok=True)

    abs_path = os.path.abspath(db_path)
    return f"sqlite:///{abs_path}"


class DatabaseManager:
    """
    Database connection manager.

    Handles engine creation, session management, and table creation.
    """

    def __init__(self, database_url: Optional[str] = None, echo: bool = False):
        """
        Initialize database manager.

        Args:
            database_url: SQLAlchemy URL; defaults to the SQLite file at DEFAULT_DB_PATH
            echo: If True, log all SQL statements (useful for debugging)
        """
        self.database_url = database_url or get_database_url(DEFAULT_DB_PATH)

        engine_kwargs = {"echo": echo}
        url = make_url(self.database_url)
        if url.get_backend_name() == "sqlite":
            if url.database and url.database != ":memory:":
                os.makedirs(os.path.dirname(os.path.abspath(url.database)), exist_ok=True)
            # Use StaticPool for SQLite to avoid threading issues
            engine_kwargs["connect_args"] = {"check_same_thread": False}
            engine_kwargs["poolclass"] = StaticPool
        else:
            engine_kwargs["pool_pre_ping"] = True

        self.engine = create_engine(self.database_url, **engine_kwargs)

        self.SessionLocal = sessionmaker(
            autocommit=False,
            autoflush=False,
            bind=self.engine
        )

    def create_tables(self):
        """
        Create all tables defined in the models.

        This creates tables if they don't exist. Existing tables are not modified.
        """
        Base.metadata.create_all(bind=self.engine)

    def drop_tables(self):
        """
        Drop all tables defined in the models.

        WARNING: This will delete all data in the database!
        """
        Base.metadata.drop_all(bind=self.engine)

    def reset_database(self):
        """
        Drop and recreate all tables.

        WARNING: This will delete all data in the database!
        """
        self.drop_tables()
        self.create_tables()

    def get_session(self) -> Session:
        """
        Get a new database session.

        Returns:
            SQLAlchemy Session object. The caller is responsible for closing it.
        """
        return self.SessionLocal()

    @contextmanager
    def session_scope(self) -> Generator[Session, None, None]:
        """
        Context manager for database sessions.

        Automatically commits on success and rolls back on failure.

        Usage:
            with db_manager.session_scope() as session:
                crud.list_movies(session)

        Yields:
            SQLAlchemy Session object
        """
        session = self.SessionLocal()
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    def close(self):
        """Close the database engine and all connections."""
        self.engine.dispose()


# Global database manager instance (singleton pattern)
_db_manager = None


def get_db_manager(database_url: Optional[str] = None, echo: bool = False) -> DatabaseManager:
    """
    Get or create the global database manager instance.

    Args:
        database_url: SQLAlchemy URL used when the manager is first created
        echo: If True, log all SQL statements

    Returns:
        DatabaseManager instance
    """
    global _db_manager
    if _db_manager is None:
        _db_manager = DatabaseManager(database_url=database_url, echo=echo)
    return _db_manager


def reset_db_manager() -> None:
    """Dispose of the global database manager so the next call recreates it."""
    global _db_manager
    if _db_manager is not None:
        _db_manager.close()
    _db_manager = None
