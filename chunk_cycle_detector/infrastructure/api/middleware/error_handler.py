"""Global error handling middleware.

Converts all exceptions to RFC 7807 Problem Details format for consistent error responses.
Includes correlation IDs for request tracing.
"""

import logging
import uuid

from fastapi import Request, status
from fastapi.exceptions import HTTPException
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from chunk_cycle_detector.application.use_cases.detect_chunk_cycles import (
    CircularChunkDependencyError,
)
from chunk_cycle_detector.infrastructure.api.schemas.error_schema import (
    ProblemDetails,
    ProblemDiagnostic,
)
from chunk_cycle_detector.infrastructure.observability.logging import (
    bind_request_context,
)

logger = logging.getLogger(__name__)

CIRCULAR_DEPENDENCY_PROBLEM_TYPE = (
    "https://chunk-cycles.dev/errors/circular-chunk-dependency"
)

STATUS_TEXTS = {
    400: "Bad Request",
    404: "Not Found",
    405: "Method Not Allowed",
    409: "Conflict",
    422: "Unprocessable Entity",
    500: "Internal Server Error",
    503: "Service Unavailable",
}


def get_status_text(status_code: int) -> str:
    """Get human-readable status text for HTTP status code.

    Args:
        status_code: HTTP status code

    Returns:
        Status text (e.g., "Conflict" for 409)
    """
    return STATUS_TEXTS.get(status_code, "Error")


def problem_response(problem: ProblemDetails) -> JSONResponse:
    """Create JSONResponse from ProblemDetails.

    Args:
        problem: Problem Details object

    Returns:
        JSONResponse with appropriate status code and headers
    """
    return JSONResponse(
        status_code=problem.status,
        content=problem.model_dump(exclude_none=True),
        headers={
            "Content-Type": "application/problem+json",
            "X-Correlation-ID": problem.correlation_id or "",
        },
    )


class ErrorHandlerMiddleware(BaseHTTPMiddleware):
    """Middleware to handle all exceptions and return RFC 7807 Problem Details."""

    async def dispatch(self, request: Request, call_next):
        """Catch all exceptions and convert to Problem Details format.

        Args:
            request: Incoming HTTP request
            call_next: Next middleware/handler in chain

        Returns:
            Response with Problem Details format on error
        """
        # Generate correlation ID for request tracing
        correlation_id = str(uuid.uuid4())
        request.state.correlation_id = correlation_id
        bind_request_context(correlation_id=correlation_id)

        try:
            response = await call_next(request)
            # Add correlation ID to successful responses
            response.headers["X-Correlation-ID"] = correlation_id
            return response

        except CircularChunkDependencyError as exc:
            # Abort policy outcome, logged without traceback
            logger.warning(
                f"Bundle rejected with correlation_id={correlation_id}: {exc}",
                extra={"correlation_id": correlation_id, "path": request.url.path},
            )
            return problem_response(
                self._exception_to_problem(exc, request, correlation_id)
            )

        except Exception as exc:
            # Log exception with correlation ID
            logger.error(
                f"Request failed with correlation_id={correlation_id}",
                exc_info=exc,
                extra={
                    "correlation_id": correlation_id,
                    "path": request.url.path,
                    "method": request.method,
                },
            )

            return problem_response(
                self._exception_to_problem(exc, request, correlation_id)
            )

    def _exception_to_problem(
        self, exc: Exception, request: Request, correlation_id: str
    ) -> ProblemDetails:
        """Convert exception to RFC 7807 Problem Details.

        Args:
            exc: Exception that was raised
            request: Request that caused the exception
            correlation_id: Correlation ID for tracing

        Returns:
            ProblemDetails object
        """
        if isinstance(exc, CircularChunkDependencyError):
            return ProblemDetails(
                type=CIRCULAR_DEPENDENCY_PROBLEM_TYPE,
                title="Circular Chunk Dependency",
                status=status.HTTP_409_CONFLICT,
                detail=str(exc),
                instance=request.url.path,
                correlation_id=correlation_id,
                cycles=[[str(node) for node in cycle.path] for cycle in exc.cycles],
                diagnostics=[
                    ProblemDiagnostic(severity=event.severity.value, message=event.message)
                    for event in exc.report
                ],
            )

        if isinstance(exc, HTTPException):
            return ProblemDetails(
                type="about:blank",  # Standard for simple errors
                title=get_status_text(exc.status_code),
                status=exc.status_code,
                detail=exc.detail if isinstance(exc.detail, str) else str(exc.detail),
                instance=request.url.path,
                correlation_id=correlation_id,
            )

        if isinstance(exc, ValueError):
            return ProblemDetails(
                type="https://httpstatuses.com/400",
                title="Bad Request",
                status=status.HTTP_400_BAD_REQUEST,
                detail=str(exc),
                instance=request.url.path,
                correlation_id=correlation_id,
            )

        # Default to 500 Internal Server Error
        return ProblemDetails(
            type="https://httpstatuses.com/500",
            title="Internal Server Error",
            status=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="An unexpected error occurred",
            instance=request.url.path,
            correlation_id=correlation_id,
        )
