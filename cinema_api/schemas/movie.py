from datetime import datetime
from typing import List, Optional

from . import CamelModel
from .genre import GenreResponse


class MovieCreate(CamelModel):
    title: str
    description: str
    poster_url: Optional[str] = None
    genre_ids: Optional[List[str]] = None


class MovieResponse(CamelModel):
    id: str
    title: str
    description: str
    poster_url: Optional[str] = None
    # left unset on create, always a list when listing
    genres: Optional[List[GenreResponse]] = None
    created_at: datetime
