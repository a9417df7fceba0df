"""API middleware components.

This module contains middleware for error handling, request logging and
request metrics.
"""

from .error_handler import ErrorHandlerMiddleware
from .logging_middleware import LoggingMiddleware
from .metrics_middleware import MetricsMiddleware

__all__ = [
    "ErrorHandlerMiddleware",
    "LoggingMiddleware",
    "MetricsMiddleware",
]
