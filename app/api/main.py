"""
FastAPI application entry point for the Movie Catalog API.

Run: uvicorn app.api.main:app --host 0.0.0.0 --port 3001
"""

import logging
import os
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from app.api.config import (
    get_api_host,
    get_api_port,
    get_auto_create_schema,
    get_database_url,
    get_log_file,
    get_log_level,
    get_seed_sample_data,
    get_upload_dir,
)
from app.api.routers import movies, system
from app.core.exceptions import CatalogError
from app.core.uploads import DEFAULT_URL_PREFIX
from app.database.connection import get_db_manager, reset_db_manager
from app.database.init_db import init_database, seed_sample_movies, verify_schema
from app.utils.logging_config import configure_api_logging

logger = logging.getLogger(__name__)


def prepare_storage() -> None:
    """
    Make sure the movies table and the upload directory exist.

    Raises:
        RuntimeError: If the movies table is missing after setup
    """
    database_url = get_database_url()
    if get_auto_create_schema():
        db_manager = init_database(database_url=database_url)
    else:
        db_manager = get_db_manager(database_url=database_url)

    if not verify_schema(db_manager):
        raise RuntimeError("Movies table does not exist; run scripts/init_database.py")

    if get_seed_sample_data():
        seed_sample_movies(db_manager)

    os.makedirs(get_upload_dir(), exist_ok=True)
    logger.info("Connected to database, uploads in %s", get_upload_dir())


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_api_logging(level=get_log_level(), log_file=get_log_file())
    prepare_storage()
    yield
    reset_db_manager()
    logger.info("Database connection closed")


app = FastAPI(
    title="Movie Catalog API",
    description="REST API for managing a movie collection with poster uploads",
    version="1.0.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(CatalogError)
async def catalog_error_handler(request: Request, exc: CatalogError):
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


app.include_router(movies.router)
app.include_router(system.router)

app.mount(
    DEFAULT_URL_PREFIX,
    StaticFiles(directory=get_upload_dir(), check_dir=False),
    name="uploads",
)


@app.get("/")
def root():
    """Root endpoint."""
    return {
        "message": "Movie Catalog API",
        "api": "/api/movies",
        "docs": "/docs",
        "health": "/api/health",
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host=get_api_host(), port=get_api_port())
