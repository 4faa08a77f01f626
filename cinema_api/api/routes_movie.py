from typing import List
from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from cinema_api.crud.movie import crud_movie
from cinema_api.db.core import get_db_session
from cinema_api.schemas.movie import MovieCreate, MovieResponse

router = APIRouter(
    prefix="/movies", tags=["movies"]
)


@router.post("", status_code=status.HTTP_201_CREATED, response_model=MovieResponse,
             response_model_exclude_none=True)
async def create_movie(movie: MovieCreate, db_session: AsyncSession = Depends(get_db_session)):
    return await crud_movie.create_movie(db_session, movie)


@router.get("", response_model=List[MovieResponse], response_model_exclude_none=True)
async def list_movies(db_session: AsyncSession = Depends(get_db_session)):
    return await crud_movie.list_movies(db_session)


@router.delete("/{movie_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_movie(movie_id: str, db_session: AsyncSession = Depends(get_db_session)):
    await crud_movie.delete_movie(db_session, movie_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
