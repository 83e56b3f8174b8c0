"""
Card Advisor - Main Application Entry Point

A credit card recommendation service that ranks cards per spending
category by expected net annual benefit.
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

import structlog
from fastapi import FastAPI, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import RedirectResponse

from src import __version__
from src.core.config import settings
from src.core.logging import setup_logging
from src.core.metrics import get_metrics, get_metrics_content_type
from src.infrastructure.database import db_manager
from src.presentation.api import api_router
from src.presentation.middleware import (
    LoggingMiddleware,
    RequestContextMiddleware,
    error_handler_middleware,
)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Configure logging, open the database pool (creating tables when
    DB_CREATE_TABLES is set) and dispose of it on shutdown.
    """
    setup_logging()
    logger = structlog.get_logger(__name__)

    db_manager.init()
    if settings.db_create_tables:
        await db_manager.create_tables()
        logger.info("database_tables_ensured")

    logger.info(
        "application_started",
        version=__version__,
        metrics_enabled=settings.metrics_enabled,
    )

    yield

    await db_manager.close()
    logger.info("application_stopped")


def create_app() -> FastAPI:
    """Build the FastAPI application with middleware, handlers and routes."""
    application = FastAPI(
        title="Card Advisor",
        description="Credit card recommendations per spending category",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    # Added last runs first: request id is bound before the request is logged
    application.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allow_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    application.add_middleware(LoggingMiddleware)
    application.add_middleware(RequestContextMiddleware)

    error_handler_middleware(application)
    application.include_router(api_router)

    if settings.metrics_enabled:
        @application.get("/metrics", include_in_schema=False)
        async def metrics() -> Response:
            """Prometheus metrics endpoint."""
            return Response(content=get_metrics(), media_type=get_metrics_content_type())

    @application.get("/", include_in_schema=False)
    async def root():
        return RedirectResponse(url="/docs")

    return application


app = create_app()
