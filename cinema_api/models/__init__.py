from .genre import Genre as Genre
from .movie import Movie as Movie, MovieGenre as MovieGenre

__all__ = ["Genre", "Movie", "MovieGenre"]
