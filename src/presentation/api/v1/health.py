"""Health check endpoint for service monitoring."""

import structlog
from fastapi import APIRouter
from pydantic import BaseModel
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from src import __version__
from src.core.config import settings
from src.infrastructure.database import db_manager

logger = structlog.get_logger(__name__)

health_router = APIRouter()


class HealthResponse(BaseModel):
    status: str = "healthy"
    service: str
    version: str
    database: str = "not_configured"


async def _database_status() -> str:
    if not db_manager.is_initialized:
        return "not_configured"

    try:
        async with db_manager.session() as session:
            await session.execute(text("SELECT 1"))
    except SQLAlchemyError as e:
        logger.warning("health_database_unreachable", error=str(e))
        return "unavailable"
    return "ok"


@health_router.get(
    "/health",
    response_model=HealthResponse,
    summary="Health Check",
    description="Returns the service status and whether the database answers.",
)
async def health_check() -> HealthResponse:
    database = await _database_status()
    return HealthResponse(
        status="degraded" if database == "unavailable" else "healthy",
        service=settings.app_name,
        version=__version__,
        database=database,
    )
