"""FastAPI application factory."""

import logging
from contextlib import asynccontextmanager
from collections.abc import AsyncIterator
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from recipe_api.config import get_settings
from recipe_api.infrastructure.database import Base, engine
from recipe_api.infrastructure.database.seed import reload_test_data
from recipe_api.infrastructure.database.session import async_session_factory
from recipe_api.infrastructure.dependencies import get_recipe_notifier
from recipe_api.infrastructure.logging.log_config import setup_logging
from recipe_api.presentation.api.router import router as api_router
from recipe_api.presentation.graphql.schema import router as graphql_router

logger = logging.getLogger(__name__)


async def _populate_test_data() -> None:
    """Reload the test recipes into an emptied ``recipes`` table."""
    async with async_session_factory() as session:
        total = await reload_test_data(session)
        await session.commit()
    logger.warning("Database populated with %d test recipes", total)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan: create tables, load test data, flush notifications."""
    settings = get_settings()
    setup_logging()

    # 1. Create all database tables
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    # 2. Optionally replace the data with the test recipes
    if settings.db_populate:
        await _populate_test_data()

    # 3. Ensure upload directory exists
    Path(settings.upload_dir).mkdir(parents=True, exist_ok=True)

    if not settings.notifications_enabled:
        logger.info("Creation mails are disabled")

    yield

    # Shutdown
    await get_recipe_notifier().drain()
    await engine.dispose()


async def _database_error_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    logger.exception("Database error on %s %s", request.method, request.url.path)
    return JSONResponse({"detail": "Internal Server Error"}, status_code=500)


def create_app() -> FastAPI:
    """Factory function that builds and configures the FastAPI application."""
    settings = get_settings()

    app = FastAPI(
        title=settings.app_title,
        version=settings.app_version,
        lifespan=lifespan,
    )

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["ETag", "Location"],
    )

    app.add_exception_handler(SQLAlchemyError, _database_error_handler)

    # Mount API routes
    app.include_router(api_router)
    app.include_router(graphql_router, prefix="/graphql")

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "recipe_api.main:app",
        host="0.0.0.0",
        port=8020,
        reload=True,
    )
