"""Prometheus metrics instrumentation.

Defines and exports Prometheus metrics for monitoring the application.
Avoids high cardinality by omitting chunk and node ids from labels.
"""

from prometheus_client import Counter, Histogram
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST

# HTTP Request Metrics
http_requests_total = Counter(
    name="chunk_cycles_http_requests_total",
    documentation="Total number of HTTP requests",
    labelnames=["method", "endpoint", "status_code"],
)

http_request_duration_seconds = Histogram(
    name="chunk_cycles_http_request_duration_seconds",
    documentation="HTTP request duration in seconds",
    labelnames=["method", "endpoint", "status_code"],
    buckets=(
        0.005,  # 5ms
        0.01,  # 10ms
        0.025,  # 25ms
        0.05,  # 50ms
        0.1,  # 100ms
        0.25,  # 250ms
        0.5,  # 500ms
        1.0,  # 1s
        2.5,  # 2.5s
        5.0,  # 5s
        10.0,  # 10s
    ),
)

# Cycle Detection Metrics
cycle_detection_runs_total = Counter(
    name="chunk_cycles_detection_runs_total",
    documentation="Total number of cycle detection runs",
    labelnames=["graph_kind", "outcome"],  # graph|bundle, acyclic|cyclic
)

cycle_detection_duration_seconds = Histogram(
    name="chunk_cycles_detection_duration_seconds",
    documentation="Cycle detection duration in seconds",
    labelnames=["graph_kind"],
    buckets=(
        0.0005,  # 0.5ms
        0.001,  # 1ms
        0.005,  # 5ms
        0.01,  # 10ms
        0.025,  # 25ms
        0.05,  # 50ms
        0.1,  # 100ms
        0.25,  # 250ms
        0.5,  # 500ms
        1.0,  # 1s
    ),
)

cycles_detected_total = Counter(
    name="chunk_cycles_cycles_detected_total",
    documentation="Total number of cycles detected",
    labelnames=["graph_kind"],
)


def get_metrics_content() -> tuple[bytes, str]:
    """Generate Prometheus metrics in exposition format.

    Returns:
        Tuple of (metrics_bytes, content_type)
    """
    return generate_latest(), CONTENT_TYPE_LATEST


def record_http_request(
    method: str,
    endpoint: str,
    status_code: int,
    duration: float,
) -> None:
    """Record HTTP request metrics.

    Args:
        method: HTTP method (GET, POST, etc.)
        endpoint: API endpoint path
        status_code: HTTP status code
        duration: Request duration in seconds
    """
    http_requests_total.labels(
        method=method,
        endpoint=endpoint,
        status_code=str(status_code),
    ).inc()

    http_request_duration_seconds.labels(
        method=method,
        endpoint=endpoint,
        status_code=str(status_code),
    ).observe(duration)


def record_cycle_detection(
    graph_kind: str,
    cycles: int,
    duration: float,
) -> None:
    """Record cycle detection metrics.

    Args:
        graph_kind: What was analysed (graph or bundle)
        cycles: Number of cycles found
        duration: Detection duration in seconds
    """
    outcome = "cyclic" if cycles else "acyclic"
    cycle_detection_runs_total.labels(graph_kind=graph_kind, outcome=outcome).inc()
    cycle_detection_duration_seconds.labels(graph_kind=graph_kind).observe(duration)
    if cycles:
        cycles_detected_total.labels(graph_kind=graph_kind).inc(cycles)
