"""
Catalog service: list, get, create, update and delete movie records.

The service is built per request around a database session and the image
store. It owns request validation, image resolution and the translation of
database errors into the catalog error taxonomy.
"""

import logging
from contextlib import contextmanager
from typing import Any, Iterator, Mapping

from pydantic import ValidationError
from sqlalchemy.exc import OperationalError, SQLAlchemyError
from sqlalchemy.orm import Session

from app.api.models.movie import MovieInput, MovieResponse
from app.core.exceptions import InvalidInput, NotFound, ServiceUnavailable, StorageFailure
from app.core.uploads import ImageStore, ImageUpload
from app.database import crud
from app.database.models import Movie

logger = logging.getLogger(__name__)

MOVIE_NOT_FOUND = "Movie not found"


def parse_movie_input(data: Mapping[str, Any]) -> MovieInput:
    """
    Build the explicit input structure from a raw request body.

    Raises:
        InvalidInput: If a value cannot be read as its field's type
    """
    try:
        return MovieInput.model_validate(dict(data))
    except ValidationError as exc:
        field = exc.errors()[0]["loc"][0] if exc.errors()[0]["loc"] else "body"
        raise InvalidInput(f"Invalid value for {field}") from exc


class CatalogService:
    """Stateless CRUD operations over the movies table."""

    def __init__(self, session: Session, image_store: ImageStore):
        self.session = session
        self.image_store = image_store

    @contextmanager
    def _store_errors(self, message: str) -> Iterator[None]:
        """Log database errors in full and re-raise them with a generic message."""
        try:
            yield
        except OperationalError as exc:
            logger.exception("%s: database unavailable", message)
            self.session.rollback()
            raise ServiceUnavailable(message) from exc
        except SQLAlchemyError as exc:
            logger.exception(message)
            self.session.rollback()
            raise StorageFailure(message) from exc

    def _store_image(self, fields: MovieInput, upload: ImageUpload | None) -> str | None:
        # A new upload takes precedence over the image string
        if upload is not None:
            return self.image_store.save(upload)
        return fields.image

    def list_movies(self) -> list[Movie]:
        """All movies, newest first."""
        with self._store_errors("Failed to fetch movies"):
            movies = crud.list_movies(self.session)
        logger.info("A list of movies was requested, %d entries found", len(movies))
        return movies

    def get_movie(self, movie_id: int | str) -> Movie:
        """
        Get one movie.

        Raises:
            NotFound: If no row has that id (including non-numeric ids)
        """
        with self._store_errors("Failed to fetch movie"):
            movie = crud.get_movie(self.session, movie_id)
        if movie is None:
            logger.warning("A non-existent movie ID was requested: %s", movie_id)
            raise NotFound(MOVIE_NOT_FOUND)
        return movie

    def create_movie(self, fields: MovieInput, upload: ImageUpload | None = None) -> Movie:
        """
        Validate and insert a new movie.

        An uploaded image is written to the content store before the row is
        inserted. If the write fails no row is inserted; if the insert fails
        the written file is removed again.

        Raises:
            InvalidInput: If a required field or the image is missing
            StorageFailure: If the image write or the insert fails
        """
        if fields.missing_fields():
            raise InvalidInput("All fields are required")
        if upload is None and not fields.image:
            raise InvalidInput("Image is required")

        image = self._store_image(fields, upload)
        try:
            with self._store_errors("Failed to add movie"):
                movie = crud.create_movie(self.session, **fields.column_values(image))
        except StorageFailure:
            if upload is not None:
                self.image_store.discard(image)
            raise

        logger.info("A new movie has been added: ID %d, %s", movie.id, movie.title)
        return movie

    def update_movie(
        self,
        movie_id: int | str,
        fields: MovieInput,
        upload: ImageUpload | None = None,
    ) -> MovieResponse:
        """
        Replace every editable field of a movie.

        Field presence is not checked here; the response echoes the caller's
        values rather than re-reading the row.

        Raises:
            NotFound: If no row has that id
            StorageFailure: If the image write or the update fails
        """
        image = self._store_image(fields, upload)
        try:
            with self._store_errors("Failed to update movie"):
                count = crud.update_movie(self.session, movie_id, **fields.column_values(image))
        except StorageFailure:
            if upload is not None:
                self.image_store.discard(image)
            raise

        if count == 0:
            if upload is not None:
                self.image_store.discard(image)
            logger.warning("Attempt to update a non-existent movie ID %s", movie_id)
            raise NotFound(MOVIE_NOT_FOUND)

        logger.info("Updated movie ID %s: %s", movie_id, fields.title)
        return MovieResponse(id=crud.parse_movie_id(movie_id), **fields.column_values(image))

    def delete_movie(self, movie_id: int | str) -> dict:
        """
        Hard-delete a movie. Its image file, if uploaded, stays on disk.

        Raises:
            NotFound: If no row has that id
        """
        with self._store_errors("Failed to delete movie"):
            count = crud.delete_movie(self.session, movie_id)
        if count == 0:
            logger.warning("Attempt to delete a non-existent movie ID %s", movie_id)
            raise NotFound(MOVIE_NOT_FOUND)
        logger.info("Deleted movie ID %s", movie_id)
        return {"message": "Movie deleted successfully"}
