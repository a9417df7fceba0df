"""
Health check endpoints.

Provides a liveness check and the Prometheus metrics endpoint.
"""

from fastapi import APIRouter, Response, status

from chunk_cycle_detector import __version__
from chunk_cycle_detector.infrastructure.observability.metrics import get_metrics_content

router = APIRouter()


@router.get(
    "/health",
    status_code=status.HTTP_200_OK,
    summary="Liveness check",
    description="Check if the service is alive",
    tags=["Health"],
)
async def liveness() -> dict:
    """
    Liveness check - check if the process is running.

    The detector keeps no external dependencies, so liveness is also readiness.
    """
    return {
        "status": "healthy",
        "service": "chunk-cycle-detector",
        "version": __version__,
    }


@router.get(
    "/metrics",
    status_code=status.HTTP_200_OK,
    summary="Prometheus metrics",
    description="Export Prometheus metrics in exposition format",
    tags=["Observability"],
    response_class=Response,
)
async def metrics() -> Response:
    """
    Prometheus metrics endpoint.

    Metrics include:
    - HTTP request counts and durations
    - Cycle detection runs, durations and cycles found
    """
    metrics_bytes, content_type = get_metrics_content()

    return Response(
        content=metrics_bytes,
        media_type=content_type,
    )
