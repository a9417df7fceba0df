"""Observability infrastructure module.

Provides OpenTelemetry tracing, structured logging, and Prometheus metrics.
"""

from chunk_cycle_detector.infrastructure.observability.logging import (
    bind_request_context,
    clear_request_context,
    configure_logging,
    get_logger,
)
from chunk_cycle_detector.infrastructure.observability.metrics import (
    get_metrics_content,
    record_cycle_detection,
    record_http_request,
)
from chunk_cycle_detector.infrastructure.observability.tracing import (
    get_tracer,
    instrument_fastapi_app,
    setup_tracing,
    trace_detection,
)

__all__ = [
    # Logging
    "configure_logging",
    "get_logger",
    "bind_request_context",
    "clear_request_context",
    # Tracing
    "setup_tracing",
    "instrument_fastapi_app",
    "get_tracer",
    "trace_detection",
    # Metrics
    "get_metrics_content",
    "record_http_request",
    "record_cycle_detection",
]
