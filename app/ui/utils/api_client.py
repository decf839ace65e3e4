"""
FastAPI client wrapper for Streamlit UI.
"""

import os
import requests

MOVIE_FIELDS = ("title", "director", "year", "genre", "rating")


def get_api_base_url() -> str:
    """Get API base URL from env or default."""
    return os.getenv("API_BASE_URL", "http://localhost:3001").rstrip("/")


def resolve_image_url(image: str) -> str:
    """Absolute URL for a poster; uploaded images are served by the API."""
    if image.startswith("/"):
        return f"{get_api_base_url()}{image}"
    return image


def get_error_message(exc: requests.RequestException) -> str:
    """Message from an API error body, falling back to the exception text."""
    response = getattr(exc, "response", None)
    if response is not None:
        try:
            return response.json().get("error") or str(exc)
        except ValueError:
            pass
    return str(exc)


def _movie_payload(fields: dict, image: str | None) -> dict:
    payload = {name: fields[name] for name in MOVIE_FIELDS if fields.get(name) is not None}
    if image:
        payload["image"] = image
    return payload


def _image_files(image_file: tuple | None) -> dict | None:
    # image_file is (filename, bytes, mime type)
    return {"image": image_file} if image_file else None


def list_movies() -> list[dict]:
    """Get all movies, newest first."""
    r = requests.get(f"{get_api_base_url()}/api/movies", timeout=10)
    r.raise_for_status()
    return r.json()


def get_movie(movie_id: int) -> dict:
    """Get one movie."""
    r = requests.get(f"{get_api_base_url()}/api/movies/{movie_id}", timeout=10)
    r.raise_for_status()
    return r.json()


def create_movie(fields: dict, image: str | None = None, image_file: tuple | None = None) -> dict:
    """Add a movie with either an image URL or an uploaded file."""
    r = requests.post(
        f"{get_api_base_url()}/api/movies",
        data=_movie_payload(fields, image),
        files=_image_files(image_file),
        timeout=30,
    )
    r.raise_for_status()
    return r.json()


def update_movie(
    movie_id: int,
    fields: dict,
    image: str | None = None,
    image_file: tuple | None = None,
) -> dict:
    """Update a movie. Pass the current image path as ``image`` to keep it."""
    r = requests.put(
        f"{get_api_base_url()}/api/movies/{movie_id}",
        data=_movie_payload(fields, image),
        files=_image_files(image_file),
        timeout=30,
    )
    r.raise_for_status()
    return r.json()


def delete_movie(movie_id: int) -> dict:
    """Delete a movie."""
    r = requests.delete(f"{get_api_base_url()}/api/movies/{movie_id}", timeout=10)
    r.raise_for_status()
    return r.json()


def health_check() -> dict:
    """Check API health."""
    r = requests.get(f"{get_api_base_url()}/api/health", timeout=5)
    r.raise_for_status()
    return r.json()
