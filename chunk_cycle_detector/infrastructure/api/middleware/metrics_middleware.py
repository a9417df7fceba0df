"""Metrics middleware for recording HTTP request metrics.

Records Prometheus metrics for all HTTP requests including duration,
status codes, and endpoints.
"""

import time
from typing import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from chunk_cycle_detector.infrastructure.observability.metrics import (
    record_http_request,
)


class MetricsMiddleware(BaseHTTPMiddleware):
    """Middleware to record HTTP request metrics.

    Records:
    - Total request count per endpoint
    - Request duration histogram
    - Status code distribution

    Labels: method, endpoint, status_code
    """

    async def dispatch(
        self, request: Request, call_next: Callable
    ) -> Response:
        """Process request and record metrics.

        Args:
            request: Incoming HTTP request
            call_next: Next middleware/handler in chain

        Returns:
            HTTP response
        """
        start_time = time.perf_counter()

        response = await call_next(request)

        duration = time.perf_counter() - start_time

        record_http_request(
            method=request.method,
            endpoint=self._normalize_endpoint(request),
            status_code=response.status_code,
            duration=duration,
        )

        return response

    def _normalize_endpoint(self, request: Request) -> str:
        """Use the matched route template when there is one.

        Unmatched paths (404s) are grouped under a single label to keep
        cardinality bounded.

        Args:
            request: HTTP request

        Returns:
            Route path template, or "unmatched"
        """
        route = request.scope.get("route")
        if route is not None and hasattr(route, "path"):
            return route.path
        return "unmatched"
