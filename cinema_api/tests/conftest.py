import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy import text
from sqlalchemy.ext.asyncio import async_sessionmaker

from cinema_api.db.core import build_engine, get_db_session, init_db
from cinema_api.scripts.seed_data import GENRE_NAMES, genre_id, seed_genres


@pytest.fixture
async def db_engine(tmp_path):
    """SQLite engine on a throwaway file, with foreign keys enforced.

    Function-scoped so it lives in the same event loop as the test.
    """
    engine = build_engine(f"sqlite+aiosqlite:///{tmp_path / 'cinema_test.db'}")
    await init_db(engine)
    yield engine
    await engine.dispose()


@pytest.fixture
def db_session_factory(db_engine):
    return async_sessionmaker(
        bind=db_engine,
        autoflush=False,
        expire_on_commit=False
    )


@pytest.fixture
async def seeded_genres(db_session_factory):
    """Seed the reference genres and return {name: id}."""
    await seed_genres(db_session_factory)
    return {name: genre_id(name) for name in GENRE_NAMES}


@pytest.fixture
async def showtimes_table(db_engine):
    """A dependent table owned by another service that references movies without cascading."""
    async with db_engine.begin() as conn:
        await conn.execute(text(
            "CREATE TABLE showtimes ("
            " id INTEGER PRIMARY KEY,"
            " movie_id VARCHAR(36) NOT NULL REFERENCES movies(id),"
            " starts_at VARCHAR(32) NOT NULL)"
        ))

    async def add_showtime(movie_id: str, starts_at: str = "2026-10-19 20:00"):
        async with db_engine.begin() as conn:
            await conn.execute(
                text("INSERT INTO showtimes (movie_id, starts_at) VALUES (:movie_id, :starts_at)"),
                {"movie_id": movie_id, "starts_at": starts_at},
            )
    return add_showtime


@pytest.fixture
async def client(db_session_factory):
    from cinema_api.app import app

    async def override_db_session():
        async with db_session_factory() as session:
            yield session
            await session.rollback()

    app.dependency_overrides[get_db_session] = override_db_session
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as http_client:
        yield http_client
    app.dependency_overrides.clear()
