"""
Shared fixtures: in-memory SQLite database, temporary image store and a
TestClient wired to both through dependency overrides.
"""

import os
import tempfile

# Point the static mount at a scratch directory before the app is imported
os.environ.setdefault("UPLOAD_DIR", tempfile.mkdtemp(prefix="catalog-uploads-"))
os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")

import pytest
from fastapi.testclient import TestClient

from app.api.config import get_upload_dir
from app.api.dependencies import get_db, get_image_store
from app.api.main import app
from app.core.catalog import CatalogService
from app.core.uploads import ImageStore
from app.database.connection import DatabaseManager


@pytest.fixture
def db_manager():
    """Database manager over a fresh in-memory SQLite database."""
    manager = DatabaseManager("sqlite:///:memory:")
    manager.create_tables()
    yield manager
    manager.close()


@pytest.fixture
def session(db_manager):
    """Create a new database session for testing."""
    session = db_manager.get_session()
    yield session
    session.close()


@pytest.fixture
def image_store(tmp_path):
    """Image store in a per-test temporary directory."""
    return ImageStore(tmp_path / "uploads")


@pytest.fixture
def service(session, image_store):
    return CatalogService(session, image_store)


@pytest.fixture
def client(db_manager):
    """TestClient using the test database and the configured upload directory."""
    def override_get_db():
        with db_manager.session_scope() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_image_store] = lambda: ImageStore(get_upload_dir())
    yield TestClient(app)
    app.dependency_overrides.clear()
