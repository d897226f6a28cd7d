"""Health check endpoint: reports the service and its database connection."""

import logging

from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from recipe_api.config import get_settings
from recipe_api.infrastructure.database.session import get_db_session

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])


@router.get("/health")
async def health_check(session: AsyncSession = Depends(get_db_session)) -> dict:
    """Returns the current application health status."""
    settings = get_settings()
    try:
        await session.execute(text("SELECT 1"))
        database = "up"
    except SQLAlchemyError:
        logger.warning("Health check could not reach the database", exc_info=True)
        database = "down"

    return {
        "status": "healthy" if database == "up" else "degraded",
        "version": settings.app_version,
        "environment": settings.app_env,
        "database": database,
    }
