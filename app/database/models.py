"""
SQLAlchemy ORM models for the movie catalog database.

This module defines the single ``movies`` table backing the catalog.
"""

from datetime import datetime
from sqlalchemy import Integer, String, Numeric, Text, Index, TIMESTAMP
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column
from sqlalchemy.sql import func


class Base(DeclarativeBase):
    """Base class for all ORM models."""
    pass


class Movie(Base):
    """
    Movie table storing catalog entries.

    Attributes:
        id: Primary key, auto-incremented
        title: Movie title (required)
        director: Director name (required)
        year: Release year
        genre: Genre label
        rating: Rating with one fractional digit (1.0 to 10.0, checked by the UI)
        image: Absolute URL or server-relative path of the poster image
        created_at: Timestamp when record was created
    """
    __tablename__ = 'movies'

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    director: Mapped[str] = mapped_column(String(255), nullable=False)
    year: Mapped[int] = mapped_column(Integer, nullable=False)
    genre: Mapped[str] = mapped_column(String(100), nullable=False)
    rating: Mapped[float] = mapped_column(Numeric(3, 1, asdecimal=False), nullable=False)
    image: Mapped[str] = mapped_column(Text, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        TIMESTAMP,
        nullable=False,
        server_default=func.current_timestamp()
    )

    __table_args__ = (
        Index('idx_movies_title', 'title'),
    )

    def __repr__(self) -> str:
        return f"<Movie(id={self.id}, title='{self.title}', year={self.year})>"
