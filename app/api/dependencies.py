"""
FastAPI dependency injection for database session, image store and catalog service.
"""

from typing import Generator

from fastapi import Depends
from sqlalchemy.orm import Session

from app.api.config import get_database_url, get_upload_dir
from app.core.catalog import CatalogService
from app.core.uploads import ImageStore
from app.database.connection import get_db_manager


def get_db() -> Generator[Session, None, None]:
    """Yield database session for FastAPI Depends()."""
    db_manager = get_db_manager(database_url=get_database_url())
    with db_manager.session_scope() as session:
        yield session


def get_image_store() -> ImageStore:
    """Image store rooted at the configured upload directory."""
    return ImageStore(get_upload_dir())


def get_catalog_service(
    db: Session = Depends(get_db),
    image_store: ImageStore = Depends(get_image_store),
) -> CatalogService:
    """Catalog service bound to this request's session."""
    return CatalogService(db, image_store)
