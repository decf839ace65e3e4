"""
Pydantic schemas for API request/response validation.
"""

from app.api.models.movie import MovieInput, MovieResponse, MessageResponse, ErrorResponse

__all__ = [
    "MovieInput",
    "MovieResponse",
    "MessageResponse",
    "ErrorResponse",
]
