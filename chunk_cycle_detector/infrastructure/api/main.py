"""
FastAPI application entry point.

Implements the API layer of the Infrastructure following Clean Architecture.
This module sets up the FastAPI app, registers routes, middleware, and exception handlers.
"""

import uuid
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException

from chunk_cycle_detector import __version__
from chunk_cycle_detector.infrastructure.api.middleware import (
    ErrorHandlerMiddleware,
    LoggingMiddleware,
    MetricsMiddleware,
)
from chunk_cycle_detector.infrastructure.api.middleware.error_handler import (
    get_status_text,
    problem_response,
)
from chunk_cycle_detector.infrastructure.api.routes import cycles, health
from chunk_cycle_detector.infrastructure.api.schemas.error_schema import ProblemDetails
from chunk_cycle_detector.infrastructure.config import get_settings
from chunk_cycle_detector.infrastructure.observability import (
    configure_logging,
    instrument_fastapi_app,
    setup_tracing,
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan context manager for startup events.

    Startup:
    - Configure observability (logging, tracing)
    - Instrument FastAPI with OpenTelemetry
    """
    configure_logging()
    setup_tracing()
    instrument_fastapi_app(app)

    yield


def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns:
        FastAPI: Configured FastAPI application instance
    """
    app = FastAPI(
        title="Chunk Cycle Detector API",
        description=(
            "Detects circular dependencies between bundle chunks and cycles "
            "in arbitrary directed graphs."
        ),
        version=__version__,
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=False,  # Cannot use credentials with wildcard origins
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Order matters: last added = first executed
    app.add_middleware(ErrorHandlerMiddleware)
    app.add_middleware(MetricsMiddleware)
    app.add_middleware(LoggingMiddleware)

    app.include_router(health.router, prefix="/api/v1")
    app.include_router(cycles.router, prefix="/api/v1", tags=["Cycle Detection"])

    @app.exception_handler(HTTPException)
    async def http_exception_handler(request, exc: HTTPException):
        """Convert HTTPException to RFC 7807 Problem Details."""
        correlation_id = getattr(request.state, "correlation_id", None) or str(uuid.uuid4())

        return problem_response(
            ProblemDetails(
                type="about:blank",
                title=get_status_text(exc.status_code),
                status=exc.status_code,
                detail=exc.detail if isinstance(exc.detail, str) else str(exc.detail),
                instance=request.url.path,
                correlation_id=correlation_id,
            )
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request, exc: RequestValidationError):
        """Convert Pydantic validation errors to RFC 7807 Problem Details."""
        correlation_id = getattr(request.state, "correlation_id", None) or str(uuid.uuid4())

        return problem_response(
            ProblemDetails(
                type="about:blank",
                title="Unprocessable Entity",
                status=422,
                detail=f"Validation failed: {exc.errors()}",
                instance=request.url.path,
                correlation_id=correlation_id,
            )
        )

    @app.get("/", status_code=status.HTTP_200_OK)
    async def root():
        """Root endpoint - API information."""
        return {
            "name": "Chunk Cycle Detector API",
            "version": __version__,
            "status": "operational",
            "docs": "/docs",
        }

    return app


# Create app instance
app = create_app()


def run() -> None:
    """Serve the API with uvicorn on the configured host and port."""
    settings = get_settings()
    uvicorn.run(app, host=settings.api.host, port=settings.api.port)
