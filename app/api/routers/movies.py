"""
Movie API endpoints.
"""

import json

from fastapi import APIRouter, Depends, Request, status
from starlette.concurrency import run_in_threadpool
from starlette.datastructures import UploadFile

from app.api.config import get_max_upload_bytes
from app.api.dependencies import get_catalog_service
from app.api.models.movie import ErrorResponse, MessageResponse, MovieInput, MovieResponse
from app.core.catalog import CatalogService, parse_movie_input
from app.core.exceptions import InvalidInput
from app.core.uploads import ImageUpload, read_upload

router = APIRouter(prefix="/api/movies", tags=["movies"])

FORM_CONTENT_TYPES = ("multipart/form-data", "application/x-www-form-urlencoded")
NOT_FOUND_RESPONSE = {404: {"model": ErrorResponse, "description": "The movie was not found"}}


async def read_movie_body(request: Request) -> tuple[MovieInput, ImageUpload | None]:
    """
    Parse a multipart/form or JSON body into movie fields and an optional upload.

    A file part named ``image`` is the upload; a plain ``image`` value is the
    URL or previous path.
    """
    content_type = request.headers.get("content-type", "")
    upload = None

    if content_type.startswith(FORM_CONTENT_TYPES):
        data = {}
        async with request.form() as form:
            for key, value in form.multi_items():
                if isinstance(value, UploadFile):
                    if key == "image":
                        upload = await read_upload(value, get_max_upload_bytes())
                else:
                    data[key] = value
    else:
        body = await request.body()
        try:
            data = json.loads(body) if body.strip() else {}
        except ValueError as exc:
            raise InvalidInput("Malformed JSON body") from exc
        if not isinstance(data, dict):
            raise InvalidInput("Request body must be an object")

    return parse_movie_input(data), upload


@router.get("", response_model=list[MovieResponse])
def list_movies(service: CatalogService = Depends(get_catalog_service)):
    """List all movies, newest first."""
    return service.list_movies()


@router.get("/{movie_id}", response_model=MovieResponse, responses=NOT_FOUND_RESPONSE)
def get_movie(movie_id: str, service: CatalogService = Depends(get_catalog_service)):
    """Get movie details by ID."""
    return service.get_movie(movie_id)


@router.post(
    "",
    response_model=MovieResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse, "description": "Missing field or image"}},
)
async def create_movie(request: Request, service: CatalogService = Depends(get_catalog_service)):
    """Add a movie from form fields plus an uploaded image or an image URL."""
    fields, upload = await read_movie_body(request)
    return await run_in_threadpool(service.create_movie, fields, upload)


@router.put("/{movie_id}", response_model=MovieResponse, responses=NOT_FOUND_RESPONSE)
async def update_movie(
    movie_id: str,
    request: Request,
    service: CatalogService = Depends(get_catalog_service),
):
    """Replace a movie's fields; a new upload overrides the image string."""
    fields, upload = await read_movie_body(request)
    return await run_in_threadpool(service.update_movie, movie_id, fields, upload)


@router.delete("/{movie_id}", response_model=MessageResponse, responses=NOT_FOUND_RESPONSE)
def delete_movie(movie_id: str, service: CatalogService = Depends(get_catalog_service)):
    """Delete a movie. Its uploaded image file is kept."""
    return service.delete_movie(movie_id)
