"""
CRUD operations for the Movie model.

This module provides Create, Read, Update, Delete operations for the
catalog table. Every value reaches the database through parameter binding.
"""

import re
from typing import List, Optional, Dict, Any, Iterable, Union
from sqlalchemy import func
from sqlalchemy.orm import Session

from app.database.models import Movie


_INTEGER_LITERAL = re.compile(r"^[+-]?\d+$")

# Signed 64-bit range of INTEGER primary keys
MIN_MOVIE_ID = -2 ** 63
MAX_MOVIE_ID = 2 ** 63 - 1


def parse_movie_id(movie_id: Union[int, str, None]) -> Optional[int]:
    """
    Interpret a request-supplied id as a primary key value.

    Returns None for anything that is not an integer literal in the key
    range, so such ids simply never match a row.
    """
    if isinstance(movie_id, bool):
        return None
    if isinstance(movie_id, int):
        key = movie_id
    elif isinstance(movie_id, str) and _INTEGER_LITERAL.match(movie_id.strip()):
        key = int(movie_id)
    else:
        return None
    if key < MIN_MOVIE_ID or key > MAX_MOVIE_ID:
        return None
    return key


def create_movie(
    session: Session,
    title: str,
    director: str,
    year: int,
    genre: str,
    rating: float,
    image: str
) -> Movie:
    """
    Create a new movie.

    Args:
        session: Database session
        title: Movie title
        director: Director name
        year: Release year
        genre: Genre label
        rating: Rating value
        image: Poster URL or uploaded image path

    Returns:
        Created Movie object with id and created_at populated
    """
    movie = Movie(
        title=title,
        director=director,
        year=year,
        genre=genre,
        rating=rating,
        image=image
    )
    session.add(movie)
    session.commit()
    session.refresh(movie)
    return movie


def create_movies(session: Session, rows: Iterable[Dict[str, Any]]) -> int:
    """
    Bulk insert movies. Used for seeding sample data.

    Args:
        session: Database session
        rows: Dicts with title, director, year, genre, rating and image keys

    Returns:
        Number of movies inserted
    """
    movies = [Movie(**row) for row in rows]
    session.add_all(movies)
    session.commit()
    return len(movies)


def get_movie(session: Session, movie_id: Union[int, str]) -> Optional[Movie]:
    """
    Get a movie by ID.

    Args:
        session: Database session
        movie_id: Movie ID, as an int or the raw request string

    Returns:
        Movie object or None if not found
    """
    key = parse_movie_id(movie_id)
    if key is None:
        return None
    return session.query(Movie).filter(Movie.id == key).first()


def list_movies(session: Session) -> List[Movie]:
    """
    Get all movies, newest id first.

    Args:
        session: Database session

    Returns:
        List of Movie objects ordered by id descending
    """
    return session.query(Movie).order_by(Movie.id.desc()).all()


def get_movie_count(session: Session) -> int:
    """
    Get total count of movies.

    Args:
        session: Database session

    Returns:
        Total number of movies
    """
    return session.query(func.count(Movie.id)).scalar()


def update_movie(
    session: Session,
    movie_id: Union[int, str],
    **fields
) -> int:
    """
    Replace the editable columns of a movie in place.

    Args:
        session: Database session
        movie_id: Movie ID, as an int or the raw request string
        **fields: Columns to set (title, director, year, genre, rating, image)

    Returns:
        Number of rows affected (0 if not found)
    """
    key = parse_movie_id(movie_id)
    if key is None:
        return 0
    values = {name: value for name, value in fields.items() if name in Movie.__table__.columns}
    values.pop('id', None)
    values.pop('created_at', None)
    count = session.query(Movie).filter(Movie.id == key).update(
        values, synchronize_session=False
    )
    session.commit()
    return count


def delete_movie(session: Session, movie_id: Union[int, str]) -> int:
    """
    Delete a movie.

    Args:
        session: Database session
        movie_id: Movie ID, as an int or the raw request string

    Returns:
        Number of rows deleted (0 if not found)
    """
    key = parse_movie_id(movie_id)
    if key is None:
        return 0
    count = session.query(Movie).filter(Movie.id == key).delete(synchronize_session=False)
    session.commit()
    return count
