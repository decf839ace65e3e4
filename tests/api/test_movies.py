"""
API tests for movie endpoints.

Uses FastAPI TestClient with the database and image store overridden by
the fixtures in conftest.py.
"""

import asyncio

import pytest
from sqlalchemy.exc import SQLAlchemyError

from app.core.catalog import CatalogService
from app.database import crud

PNG_BYTES = b"\x89PNG\r\n\x1a\nposter"

MOVIE = {
    "title": "X",
    "director": "Y",
    "year": 2020,
    "genre": "Drama",
    "rating": 7.5,
    "image": "http://a/b.jpg",
}


def form_fields(**overrides) -> dict:
    data = {key: str(value) for key, value in MOVIE.items()}
    data.update(overrides)
    return data


class TestListAndGet:
    """Tests for GET /api/movies and GET /api/movies/{movie_id}."""

    def test_list_empty(self, client):
        r = client.get("/api/movies")
        assert r.status_code == 200
        assert r.json() == []

    def test_list_newest_first(self, client):
        ids = [client.post("/api/movies", json={**MOVIE, "title": f"M{i}"}).json()["id"] for i in range(3)]

        r = client.get("/api/movies")

        assert r.status_code == 200
        assert [m["id"] for m in r.json()] == list(reversed(ids))
        assert r.json()[0]["title"] == "M2"

    def test_get_movie(self, client):
        movie_id = client.post("/api/movies", json=MOVIE).json()["id"]

        r = client.get(f"/api/movies/{movie_id}")

        assert r.status_code == 200
        data = r.json()
        for key, value in MOVIE.items():
            assert data[key] == value
        assert data["created_at"] is not None

    @pytest.mark.parametrize("movie_id", ["999999", "abc"])
    def test_get_movie_not_found(self, client, movie_id):
        r = client.get(f"/api/movies/{movie_id}")
        assert r.status_code == 404
        assert r.json() == {"error": "Movie not found"}


class TestUnmatchableIds:
    """Ids that cannot name a row answer 404 on every id route."""

    @pytest.mark.parametrize("method", ["get", "put", "delete"])
    @pytest.mark.parametrize("movie_id", ["99999999999999999999", "-99999999999999999999", "abc"])
    def test_not_found(self, client, method, movie_id):
        client.post("/api/movies", json=MOVIE)
        kwargs = {"json": MOVIE} if method == "put" else {}

        r = client.request(method.upper(), f"/api/movies/{movie_id}", **kwargs)

        assert r.status_code == 404
        assert r.json() == {"error": "Movie not found"}
        assert len(client.get("/api/movies").json()) == 1


class TestCreateMovie:
    """Tests for POST /api/movies."""

    def test_create_with_image_url(self, client):
        r = client.post("/api/movies", json=MOVIE)

        assert r.status_code == 201
        data = r.json()
        assert isinstance(data["id"], int)
        assert data["year"] == 2020
        assert data["rating"] == 7.5
        assert data["image"] == "http://a/b.jpg"

    def test_create_from_form_fields(self, client):
        r = client.post("/api/movies", data=form_fields())

        assert r.status_code == 201
        assert r.json()["year"] == 2020
        assert r.json()["rating"] == 7.5

    def test_create_with_upload(self, client):
        r = client.post(
            "/api/movies",
            data=form_fields(image=""),
            files={"image": ("poster.png", PNG_BYTES, "image/png")},
        )

        assert r.status_code == 201
        image = r.json()["image"]
        assert image.startswith("/uploads/")

        served = client.get(image)
        assert served.status_code == 200
        assert served.content == PNG_BYTES

    @pytest.mark.parametrize("field", ["title", "director", "year", "genre", "rating"])
    def test_missing_field(self, client, field):
        payload = {k: v for k, v in MOVIE.items() if k != field}

        r = client.post("/api/movies", json=payload)

        assert r.status_code == 400
        assert r.json() == {"error": "All fields are required"}
        assert client.get("/api/movies").json() == []

    def test_missing_image(self, client):
        r = client.post("/api/movies", data=form_fields(image=""))

        assert r.status_code == 400
        assert r.json() == {"error": "Image is required"}
        assert client.get("/api/movies").json() == []

    def test_non_image_upload_rejected(self, client):
        r = client.post(
            "/api/movies",
            data=form_fields(),
            files={"image": ("notes.txt", b"hello", "text/plain")},
        )

        assert r.status_code == 400
        assert r.json() == {"error": "Only image files are allowed!"}
        assert client.get("/api/movies").json() == []

    def test_oversize_upload_rejected(self, client, monkeypatch):
        monkeypatch.setenv("MAX_UPLOAD_BYTES", "4")

        r = client.post(
            "/api/movies",
            data=form_fields(),
            files={"image": ("poster.png", PNG_BYTES, "image/png")},
        )

        assert r.status_code == 413
        assert client.get("/api/movies").json() == []

    def test_invalid_year(self, client):
        r = client.post("/api/movies", json={**MOVIE, "year": "next year"})

        assert r.status_code == 400
        assert r.json() == {"error": "Invalid value for year"}

    def test_malformed_json(self, client):
        r = client.post(
            "/api/movies",
            content=b"{not json",
            headers={"content-type": "application/json"},
        )
        assert r.status_code == 400

    def test_empty_body(self, client):
        r = client.post("/api/movies")
        assert r.status_code == 400
        assert r.json() == {"error": "All fields are required"}


class TestUpdateMovie:
    """Tests for PUT /api/movies/{movie_id}."""

    def test_update_rating_only(self, client):
        created = client.post("/api/movies", json=MOVIE).json()

        r = client.put(
            f"/api/movies/{created['id']}",
            data=form_fields(rating="8.0", image=created["image"]),
        )

        assert r.status_code == 200
        assert r.json()["rating"] == 8.0
        stored = client.get(f"/api/movies/{created['id']}").json()
        assert stored["rating"] == 8.0
        for key in ("title", "director", "year", "genre", "image"):
            assert stored[key] == created[key]

    def test_update_with_new_upload(self, client):
        created = client.post("/api/movies", json=MOVIE).json()

        r = client.put(
            f"/api/movies/{created['id']}",
            data=form_fields(),
            files={"image": ("new.png", PNG_BYTES, "image/png")},
        )

        assert r.status_code == 200
        assert r.json()["image"].startswith("/uploads/")
        assert client.get(f"/api/movies/{created['id']}").json()["image"] == r.json()["image"]

    def test_update_not_found(self, client):
        client.post("/api/movies", json=MOVIE)

        r = client.put("/api/movies/999999", json={**MOVIE, "title": "Changed"})

        assert r.status_code == 404
        assert r.json() == {"error": "Movie not found"}
        assert [m["title"] for m in client.get("/api/movies").json()] == ["X"]


class TestDeleteMovie:
    """Tests for DELETE /api/movies/{movie_id}."""

    def test_delete_movie(self, client):
        keep = client.post("/api/movies", json={**MOVIE, "title": "Keep"}).json()
        remove = client.post("/api/movies", json={**MOVIE, "title": "Remove"}).json()

        r = client.delete(f"/api/movies/{remove['id']}")

        assert r.status_code == 200
        assert r.json() == {"message": "Movie deleted successfully"}
        assert [m["id"] for m in client.get("/api/movies").json()] == [keep["id"]]

    def test_delete_not_found(self, client):
        r = client.delete("/api/movies/999999")
        assert r.status_code == 404
        assert r.json() == {"error": "Movie not found"}


class TestSystemEndpoints:

    def test_health(self, client):
        client.post("/api/movies", json=MOVIE)

        r = client.get("/api/health")

        assert r.status_code == 200
        assert r.json() == {"status": "healthy", "database": "connected", "movies": 1}

    def test_root(self, client):
        r = client.get("/")
        assert r.status_code == 200
        assert r.json()["api"] == "/api/movies"


class TestStorageFailures:
    """Database errors answer 500 with a generic message and no detail."""

    def test_list_failure_hides_detail(self, client, monkeypatch):
        def broken_list(session):
            raise SQLAlchemyError("secret detail")

        monkeypatch.setattr(crud, "list_movies", broken_list)

        r = client.get("/api/movies")

        assert r.status_code == 500
        assert r.json() == {"error": "Failed to fetch movies"}
        assert "secret detail" not in r.text

    def test_health_failure_hides_detail(self, client, monkeypatch):
        def broken_count(session):
            raise SQLAlchemyError("secret detail")

        monkeypatch.setattr(crud, "get_movie_count", broken_count)

        r = client.get("/api/health")

        assert r.status_code == 200
        assert r.json() == {"status": "unhealthy", "database": "unavailable"}
        assert "secret detail" not in r.text


class TestBlockingWork:
    """Create and update run their database and file work off the event loop."""

    @pytest.mark.parametrize("operation", ["create_movie", "update_movie"])
    def test_runs_in_worker_thread(self, client, monkeypatch, operation):
        created = client.post("/api/movies", json=MOVIE).json()
        original = getattr(CatalogService, operation)
        loop_running = []

        def recording(self, *args, **kwargs):
            try:
                asyncio.get_running_loop()
                loop_running.append(True)
            except RuntimeError:
                loop_running.append(False)
            return original(self, *args, **kwargs)

        monkeypatch.setattr(CatalogService, operation, recording)

        if operation == "create_movie":
            r = client.post("/api/movies", json=MOVIE)
        else:
            r = client.put(f"/api/movies/{created['id']}", json=MOVIE)

        assert r.status_code in (200, 201)
        assert loop_running == [False]
