from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column
from cinema_api.db.base import Base


class Genre(Base):
    __tablename__ = "genres"
    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    name: Mapped[str] = mapped_column(String(100), unique=True, nullable=False)
