from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from cinema_api.db.core import get_db_session

router = APIRouter()


@router.get("/health", summary="Basic health check endpoint")
async def health_check():
    return {"status": "ok"}


@router.get("/health/db", summary="Database connectivity check")
async def db_health_check(db_session: AsyncSession = Depends(get_db_session)):
    await db_session.execute(text("SELECT 1"))
    return {"status": "ok"}
