"""
Pydantic schemas for Movie API.
"""

from datetime import datetime

from pydantic import BaseModel, field_validator


REQUIRED_FIELDS = ("title", "director", "year", "genre", "rating")


class MovieInput(BaseModel):
    """
    Request body for creating or updating a movie.

    Every field is optional at the schema level; create checks presence,
    update does not. ``image`` is the URL or previous path, used when no
    file is uploaded.
    """

    title: str | None = None
    director: str | None = None
    year: int | None = None
    genre: str | None = None
    rating: float | None = None
    image: str | None = None

    @field_validator("year", "rating", mode="before")
    @classmethod
    def blank_as_missing(cls, value):
        # HTML forms send empty strings for untouched numeric inputs
        if isinstance(value, str) and not value.strip():
            return None
        return value

    def missing_fields(self) -> list[str]:
        """Names of required fields that are absent or empty."""
        return [name for name in REQUIRED_FIELDS if getattr(self, name) in (None, "")]

    def column_values(self, image: str | None) -> dict:
        """Values for every editable column, with the resolved image."""
        return {
            "title": self.title,
            "director": self.director,
            "year": self.year,
            "genre": self.genre,
            "rating": self.rating,
            "image": image,
        }


class MovieResponse(BaseModel):
    """Response model for a single movie."""

    id: int
    title: str
    director: str
    year: int
    genre: str
    rating: float
    image: str
    created_at: datetime | None = None

    class Config:
        from_attributes = True


class MessageResponse(BaseModel):
    """Acknowledgment body."""

    message: str


class ErrorResponse(BaseModel):
    """Error body returned for every failed request."""

    error: str
