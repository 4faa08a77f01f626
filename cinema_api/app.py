import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from cinema_api.api import routes_hall, routes_health, routes_movie
from cinema_api.core.config import settings
from cinema_api.core.exceptions import CinemaError
from cinema_api.core.logger import LoggingMiddleware, setup_logging
from cinema_api.db import core as db_core
from cinema_api.scripts import seed_data


@asynccontextmanager
async def lifespan(app: FastAPI):
    logging.info(f"starting {settings.APP_NAME} ({settings.ENV})")
    if settings.ENV == "development":
        await db_core.init_db()
        await seed_data.seed_genres(db_core.async_session_factory)
    yield
    await db_core.engine.dispose()
    logging.info("shut down")


def create_app() -> FastAPI:
    setup_logging(settings.LOG_LEVEL)
    app = FastAPI(
        title=settings.APP_NAME,
        version=settings.APP_VERSION,
        description="Movie catalog and hall diagram API for the cinema demo",
        lifespan=lifespan
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(LoggingMiddleware)

    app.include_router(routes_health.router)
    app.include_router(routes_movie.router)
    app.include_router(routes_hall.router)

    @app.exception_handler(CinemaError)
    async def cinema_error_handler(request: Request, ex: CinemaError):
        return JSONResponse(status_code=ex.status_code, content={"error": ex.message})

    @app.exception_handler(RequestValidationError)
    async def request_validation_error_handler(request: Request, ex: RequestValidationError):
        logging.info(f"invalid request to {request.url.path}: {ex.errors()}")
        return JSONResponse(status_code=400, content={"error": "invalid request body"})

    return app


app = create_app()
