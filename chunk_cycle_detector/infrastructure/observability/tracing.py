"""OpenTelemetry tracing for cycle detection runs.

Every detection run gets one span named ``detect_<kind>_cycles``, where kind
is ``graph`` for raw graphs and ``bundle`` for bundle chunks. Span attributes
are prefixed with the kind: ``graph.nodes``, ``graph.edges``,
``bundle.chunks``, ``bundle.modules`` and ``<kind>.cycles``.
"""

import logging
import time
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass

from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor
from opentelemetry.sdk.trace.sampling import TraceIdRatioBased

from chunk_cycle_detector import __version__
from chunk_cycle_detector.infrastructure.config import get_settings
from chunk_cycle_detector.infrastructure.observability.metrics import (
    record_cycle_detection,
)

logger = logging.getLogger(__name__)

# Health checks and scrapes are not worth a trace each
_UNTRACED_URLS = "api/v1/health,api/v1/metrics"


def setup_tracing() -> TracerProvider:
    """Install the global tracer provider.

    Spans are sampled at OTEL_TRACE_SAMPLE_RATE and exported over OTLP gRPC.
    If the exporter cannot be created the provider is still installed, so
    detection spans keep working but nothing leaves the process.
    """
    settings = get_settings()
    otel = settings.observability

    provider = TracerProvider(
        resource=Resource.create(
            {
                "service.name": otel.service_name,
                "service.version": __version__,
                "deployment.environment": settings.environment,
            }
        ),
        sampler=TraceIdRatioBased(otel.trace_sample_rate),
    )

    try:
        exporter = OTLPSpanExporter(endpoint=otel.exporter_otlp_endpoint, insecure=True)
    except Exception as e:
        logger.warning(f"OTLP exporter unavailable, spans stay local: {e}")
    else:
        provider.add_span_processor(BatchSpanProcessor(exporter))
        logger.info(
            f"Exporting detection spans to {otel.exporter_otlp_endpoint} "
            f"(sample rate {otel.trace_sample_rate})"
        )

    trace.set_tracer_provider(provider)
    return provider


def instrument_fastapi_app(app) -> None:
    """Add server spans for the API routes, skipping health and metrics."""
    try:
        FastAPIInstrumentor.instrument_app(app, excluded_urls=_UNTRACED_URLS)
    except Exception as e:
        logger.warning(f"FastAPI instrumentation failed: {e}")


def get_tracer(name: str) -> trace.Tracer:
    """Get a tracer for manual spans."""
    return trace.get_tracer(name)


_tracer = get_tracer(__name__)


@dataclass
class DetectionRun:
    """Outcome of one traced detection run.

    The caller sets ``cycles`` once the detector has answered.
    """

    graph_kind: str
    span: trace.Span
    cycles: int = 0


@contextmanager
def trace_detection(graph_kind: str, **sizes: int) -> Iterator[DetectionRun]:
    """Trace one detection run and record its metrics.

    Each keyword in ``sizes`` becomes a ``<graph_kind>.<name>`` span attribute.
    When the block exits, also by an exception, the cycle count set on the
    run is written to ``<graph_kind>.cycles`` and passed to
    record_cycle_detection() with the elapsed time.

    Args:
        graph_kind: What is analysed (graph or bundle)
        **sizes: Input sizes, e.g. nodes=4, edges=5

    Yields:
        DetectionRun whose ``cycles`` the caller fills in

    Example:
        >>> with trace_detection("graph", nodes=3, edges=3) as run:
        ...     run.cycles = len(detect_cycles(nodes, edges))
    """
    start_time = time.perf_counter()

    with _tracer.start_as_current_span(f"detect_{graph_kind}_cycles") as span:
        for name, value in sizes.items():
            span.set_attribute(f"{graph_kind}.{name}", value)

        run = DetectionRun(graph_kind=graph_kind, span=span)
        try:
            yield run
        finally:
            span.set_attribute(f"{graph_kind}.cycles", run.cycles)
            record_cycle_detection(
                graph_kind=graph_kind,
                cycles=run.cycles,
                duration=time.perf_counter() - start_time,
            )
