import logging
from typing import AsyncGenerator
from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from cinema_api.core.config import settings
from cinema_api.db.base import Base
from cinema_api.models import Genre, Movie, MovieGenre  # noqa: F401


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    # sqlite ignores REFERENCES clauses unless this is set on every connection
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def build_engine(url: str, echo: bool = False) -> AsyncEngine:
    if url.startswith("sqlite"):
        engine = create_async_engine(url, echo=echo)
        event.listen(engine.sync_engine, "connect", _enable_sqlite_foreign_keys)
        return engine
    return create_async_engine(url,
                               echo=echo,
                               # Pool settings
                               pool_size=10,
                               max_overflow=20,
                               pool_timeout=30,
                               pool_recycle=3600,
                               pool_pre_ping=True
                               )


engine = build_engine(settings.DATABASE_URL, echo=settings.DB_ECHO)

async_session_factory = async_sessionmaker(
    bind=engine,
    autoflush=False,
    expire_on_commit=False)


async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency that provides an async DB session
    and rolls back anything left open once the request is done.
    """
    async with async_session_factory() as session:
        yield session
        await session.rollback()


async def init_db(bind: AsyncEngine = engine) -> None:
    """
    Create all tables based on models.
    Only used in development; the schema is otherwise managed outside the service.
    """
    async with bind.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logging.info("created all tables")
