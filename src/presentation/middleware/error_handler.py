"""Error handling middleware and exception handlers."""

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
import structlog

from src.domain.exceptions import (
    DomainException,
    DependencyException,
    InvalidRecommendationRequestException,
    PersistenceException,
)
from .request_context import RequestContextMiddleware, get_request_id

logger = structlog.get_logger(__name__)


def _request_id(request: Request) -> str | None:
    # The catch-all handler runs outside RequestContextMiddleware
    return (
        get_request_id()
        or getattr(request.state, "request_id", None)
        or request.headers.get(RequestContextMiddleware.HEADER_NAME)
    )


def _error_response(
    request: Request,
    status_code: int,
    code: str,
    message: str,
) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={
            "error": code,
            "message": message,
            "request_id": _request_id(request),
        },
    )


def error_handler_middleware(app: FastAPI) -> None:
    """
    Register exception handlers with the FastAPI app.

    Maps domain exceptions to appropriate HTTP responses.
    """

    @app.exception_handler(InvalidRecommendationRequestException)
    async def invalid_request_handler(
        request: Request,
        exc: InvalidRecommendationRequestException,
    ) -> JSONResponse:
        """Handle invalid request errors."""
        return _error_response(request, 400, exc.code, exc.message)

    @app.exception_handler(DependencyException)
    async def dependency_error_handler(
        request: Request,
        exc: DependencyException,
    ) -> JSONResponse:
        """Handle unavailable spending/catalog stores."""
        logger.error(
            "dependency_unavailable",
            request_id=get_request_id(),
            store=exc.store,
            message=exc.message,
        )
        return _error_response(
            request,
            503,
            exc.code,
            "Recommendations could not be generated. Please try again later.",
        )

    @app.exception_handler(PersistenceException)
    async def persistence_error_handler(
        request: Request,
        exc: PersistenceException,
    ) -> JSONResponse:
        """Handle a rolled-back replace transaction."""
        logger.error(
            "recommendation_persistence_failed",
            request_id=get_request_id(),
            user_id=exc.user_id,
            message=exc.message,
        )
        return _error_response(
            request,
            500,
            exc.code,
            "Recommendations were computed but could not be saved. "
            "Previously saved recommendations are unchanged.",
        )

    @app.exception_handler(DomainException)
    async def domain_exception_handler(
        request: Request,
        exc: DomainException,
    ) -> JSONResponse:
        """Handle generic domain exceptions."""
        logger.warning(
            "domain_exception",
            request_id=get_request_id(),
            code=exc.code,
            message=exc.message,
        )
        return _error_response(request, 400, exc.code, exc.message)

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(
        request: Request,
        exc: Exception,
    ) -> JSONResponse:
        """Handle unexpected exceptions."""
        logger.exception(
            "unhandled_exception",
            request_id=_request_id(request),
            error=str(exc),
            error_type=type(exc).__name__,
        )
        return _error_response(request, 500, "INTERNAL_ERROR", "An unexpected error occurred.")
