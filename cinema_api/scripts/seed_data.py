import asyncio
import logging
import uuid
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from cinema_api.models import Genre

GENRE_NAMESPACE = uuid.UUID("6f1c1d0e-3c7a-4b8e-9a59-1f0e8b7c2d11")

GENRE_NAMES = [
    "Action",
    "Comedy",
    "Drama",
    "Horror",
    "Sci-Fi",
    "Animation",
    "Thriller",
    "Documentary",
]


def genre_id(name: str) -> str:
    """Stable id for a seeded genre, the same on every database."""
    return str(uuid.uuid5(GENRE_NAMESPACE, name))


async def seed_genres(session_factory: async_sessionmaker[AsyncSession]) -> int:
    """Insert the reference genres that are missing. Returns how many were added."""
    async with session_factory() as session:
        async with session.begin():
            result = await session.execute(select(Genre.id))
            existing = set(result.scalars().all())
            missing = [Genre(id=genre_id(name), name=name)
                       for name in GENRE_NAMES if genre_id(name) not in existing]
            session.add_all(missing)
    logging.info(f"seeded {len(missing)} genres")
    return len(missing)


async def main():
    from cinema_api.core.logger import setup_logging
    from cinema_api.db.core import async_session_factory, engine, init_db

    setup_logging()
    await init_db()
    await seed_genres(async_session_factory)
    await engine.dispose()


if __name__ == "__main__":
    asyncio.run(main())
