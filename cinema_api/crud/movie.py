import logging
import uuid
from datetime import datetime, timezone
from typing import Dict, Iterable, List, Optional
from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from cinema_api.core.exceptions import ConflictError, InvalidReferenceError, NotFoundError, StorageError, ValidationError
from cinema_api.db.errors import is_foreign_key_violation
from cinema_api.models import Genre, Movie, MovieGenre
from cinema_api.schemas.genre import GenreResponse
from cinema_api.schemas.movie import MovieCreate, MovieResponse


def normalize_genre_ids(genre_ids: Optional[Iterable[str]]) -> List[str]:
    """
    De-duplicated genre ids in first-seen order, exactly as the client sent them.
    Every entry must parse as a UUID; two spellings of the same UUID count once.
    """
    seen: Dict[uuid.UUID, str] = {}
    for raw in genre_ids or []:
        try:
            key = uuid.UUID(raw)
        except (TypeError, ValueError, AttributeError):
            raise ValidationError("one or more genreIds are not valid UUIDs")
        seen.setdefault(key, raw)
    return list(seen.values())


def group_movie_rows(rows) -> List[MovieResponse]:
    """
    Fold flat movie x genre join rows into one MovieResponse per movie.
    Rows must arrive in the order movies should be returned; a movie keeps the
    position of its first row.
    """
    movies: Dict[str, MovieResponse] = {}
    for row in rows:
        movie = movies.get(row.id)
        if movie is None:
            movie = MovieResponse(
                id=row.id,
                title=row.title,
                description=row.description,
                poster_url=row.poster_url,
                created_at=row.created_at,
                genres=[],
            )
            movies[row.id] = movie
        if row.genre_id is not None:
            movie.genres.append(GenreResponse(id=row.genre_id, name=row.genre_name))
    return list(movies.values())


class CRUDMovie:
    async def create_movie(self, db: AsyncSession, data: MovieCreate) -> MovieResponse:
        title = (data.title or "").strip()
        description = (data.description or "").strip()
        if not title or not description:
            raise ValidationError("title and description are required")
        genre_ids = normalize_genre_ids(data.genre_ids)
        poster_url = (data.poster_url or "").strip() or None

        movie = Movie(
            id=str(uuid.uuid4()),
            title=title,
            description=description,
            poster_url=poster_url,
            created_at=datetime.now(timezone.utc),
        )
        try:
            async with db.begin():
                db.add(movie)
                await db.flush()
                if genre_ids:
                    db.add_all([MovieGenre(movie_id=movie.id, genre_id=gid) for gid in genre_ids])
                    await db.flush()
        except IntegrityError as e:
            if is_foreign_key_violation(e):
                logging.warning(f"rejected movie with unknown genres {genre_ids}")
                raise InvalidReferenceError("one or more genreIds do not exist")
            logging.error(f"Failed to create movie: {e}", exc_info=True)
            raise StorageError("failed to insert movie")
        except SQLAlchemyError as e:
            logging.error(f"Failed to create movie: {e}", exc_info=True)
            raise StorageError("failed to insert movie")

        return MovieResponse(
            id=movie.id,
            title=movie.title,
            description=movie.description,
            poster_url=movie.poster_url,
            created_at=movie.created_at,
        )

    async def list_movies(self, db: AsyncSession) -> List[MovieResponse]:
        stmt = (
            select(
                Movie.id,
                Movie.title,
                Movie.description,
                Movie.poster_url,
                Movie.created_at,
                Genre.id.label("genre_id"),
                Genre.name.label("genre_name"),
            )
            .select_from(Movie)
            .outerjoin(MovieGenre, MovieGenre.movie_id == Movie.id)
            .outerjoin(Genre, Genre.id == MovieGenre.genre_id)
            .order_by(Movie.created_at.desc(), Movie.id, Genre.name)
        )
        try:
            result = await db.execute(stmt)
            return group_movie_rows(result.all())
        except SQLAlchemyError as e:
            logging.error(f"Failed to list movies: {e}", exc_info=True)
            raise StorageError("db error")

    async def delete_movie(self, db: AsyncSession, movie_id: str) -> None:
        movie_id = (movie_id or "").strip()
        if not movie_id:
            raise ValidationError("missing movie id")
        try:
            async with db.begin():
                result = await db.execute(
                    delete(Movie).where(Movie.id == movie_id).execution_options(synchronize_session=False))
        except IntegrityError as e:
            if is_foreign_key_violation(e):
                logging.info(f"movie {movie_id} still has dependent records")
                raise ConflictError(
                    "cannot delete movie: there are dependent records (showtimes/reservations). Please remove them first.")
            logging.error(f"Failed to delete movie: {e}", exc_info=True)
            raise StorageError("internal server error")
        except SQLAlchemyError as e:
            logging.error(f"Failed to delete movie: {e}", exc_info=True)
            raise StorageError("internal server error")

        if result.rowcount == 0:
            raise NotFoundError("movie not found")


crud_movie = CRUDMovie()
