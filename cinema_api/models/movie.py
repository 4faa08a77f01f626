import uuid
from typing import Optional
from sqlalchemy import ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column
from cinema_api.db.base import Base
from .mixins.timestamp import CreatedAtMixin


class Movie(Base, CreatedAtMixin):
    __tablename__ = "movies"
    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    poster_url: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)


class MovieGenre(Base):
    __tablename__ = "movie_genres"
    movie_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("movies.id", ondelete="CASCADE"), primary_key=True)
    genre_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("genres.id"), primary_key=True, index=True)
