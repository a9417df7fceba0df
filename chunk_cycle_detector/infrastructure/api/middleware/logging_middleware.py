"""Request logging middleware.

Binds the method and path of each request into the structlog context, so
the cycle report lines logged by the use cases carry them, and logs one
event when the response leaves.
"""

import time
from typing import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from chunk_cycle_detector.infrastructure.observability.logging import (
    bind_request_context,
    clear_request_context,
    get_logger,
)

logger = get_logger(__name__)


class LoggingMiddleware(BaseHTTPMiddleware):
    """Log each request with its status, duration and correlation id.

    Runs outside ErrorHandlerMiddleware, so detection failures arrive here as
    problem responses and the correlation id is read from the response header.
    """

    async def dispatch(
        self, request: Request, call_next: Callable
    ) -> Response:
        clear_request_context()
        bind_request_context(method=request.method, path=request.url.path)

        start_time = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception:
            logger.exception(
                "Request aborted",
                duration_ms=_elapsed_ms(start_time),
            )
            raise

        log = logger.warning if response.status_code >= 400 else logger.info
        log(
            "Request handled",
            status_code=response.status_code,
            duration_ms=_elapsed_ms(start_time),
            correlation_id=response.headers.get("X-Correlation-ID"),
            content_length=request.headers.get("Content-Length"),
        )
        return response


def _elapsed_ms(start_time: float) -> float:
    return round((time.perf_counter() - start_time) * 1000, 2)
