"""
FastAPI Application Entry Point
===============================

Bulk upload API with request logging, error mapping and health check.
"""

import time
from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator
from uuid import uuid4

import structlog
from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from dispatch_ingestion import __version__
from dispatch_ingestion.config import settings
from dispatch_ingestion.db import base as db
from dispatch_ingestion.errors.exceptions import DataIngestionError

logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Log startup and release the connection pool on shutdown."""
    logger.info(
        "service_starting",
        version=__version__,
        environment=settings.environment,
    )

    yield

    logger.info("service_shutting_down")
    try:
        await db.engine.dispose()
    except Exception as e:
        logger.error("engine_dispose_failed", error=str(e))


def create_app() -> FastAPI:
    """
    FastAPI application factory.

    Returns:
        Configured FastAPI application instance
    """
    app = FastAPI(
        title="Dispatch Ingestion API",
        description=(
            "Bulk upload of dispatch records from CSV and Excel files, with a "
            "strict template mode and a smart multi-sheet mode."
        ),
        version=__version__,
        docs_url="/docs" if settings.is_development else None,
        redoc_url="/redoc" if settings.is_development else None,
        openapi_url="/openapi.json" if settings.is_development else None,
        lifespan=lifespan,
    )

    # -------------------------------------------------------------------------
    # Request Logging Middleware
    # -------------------------------------------------------------------------
    @app.middleware("http")
    async def log_requests(request: Request, call_next: Any) -> Any:
        """Log each request with timing and a correlation ID."""
        request_id = str(uuid4())
        start_time = time.perf_counter()

        logger.info(
            "request_received",
            request_id=request_id,
            method=request.method,
            path=str(request.url.path),
            client_ip=request.client.host if request.client else None,
        )

        response = await call_next(request)
        process_time = time.perf_counter() - start_time

        response.headers["X-Request-ID"] = request_id
        response.headers["X-Process-Time"] = f"{process_time:.4f}"

        logger.info(
            "request_completed",
            request_id=request_id,
            method=request.method,
            path=str(request.url.path),
            status_code=response.status_code,
            duration_ms=round(process_time * 1000, 2),
        )
        return response

    # -------------------------------------------------------------------------
    # Exception Handlers
    # -------------------------------------------------------------------------
    @app.exception_handler(DataIngestionError)
    async def ingestion_error_handler(
        request: Request, exc: DataIngestionError
    ) -> JSONResponse:
        """Upload problems the caller can fix: bad file, bad layout."""
        logger.warning(
            "ingestion_error",
            error_type=type(exc).__name__,
            message=exc.message,
            details=exc.details,
            path=str(request.url.path),
        )
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={
                "error": type(exc).__name__,
                "message": exc.message,
                "details": exc.details,
            },
        )

    @app.exception_handler(Exception)
    async def generic_exception_handler(
        request: Request, exc: Exception
    ) -> JSONResponse:
        logger.exception(
            "unexpected_error",
            error_type=type(exc).__name__,
            message=str(exc),
            path=str(request.url.path),
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "error": "InternalServerError",
                "message": "An unexpected error occurred",
            },
        )

    # -------------------------------------------------------------------------
    # Health Check Endpoint
    # -------------------------------------------------------------------------
    @app.get(
        "/health",
        tags=["Health"],
        summary="Health check endpoint",
        response_model=dict[str, Any],
    )
    async def health_check() -> dict[str, Any]:
        health_status: dict[str, Any] = {
            "status": "healthy",
            "version": __version__,
            "service": "dispatch-ingestion",
            "checks": {},
        }

        db_status = await db.health_check()
        health_status["checks"]["database"] = db_status
        if db_status.get("status") != "healthy":
            health_status["status"] = "degraded"

        return health_status

    # -------------------------------------------------------------------------
    # Register Routers
    # -------------------------------------------------------------------------
    from dispatch_ingestion.api.routes import uploads_router

    app.include_router(uploads_router)

    return app


app = create_app()
