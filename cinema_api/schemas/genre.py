from . import CamelModel


class GenreResponse(CamelModel):
    id: str
    name: str
