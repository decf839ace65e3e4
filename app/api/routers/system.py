"""
System API endpoints (health).
"""

import logging

from fastapi import APIRouter, Depends
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.api.dependencies import get_db
from app.database import crud

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["system"])


@router.get("/health")
def health_check(db: Session = Depends(get_db)):
    """Health check: database reachable and movie count."""
    try:
        movie_count = crud.get_movie_count(db)
    except SQLAlchemyError:
        logger.exception("Health check could not reach the database")
        return {"status": "unhealthy", "database": "unavailable"}
    return {
        "status": "healthy",
        "database": "connected",
        "movies": movie_count,
    }
