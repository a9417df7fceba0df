"""Structured logging for the detector service.

structlog events and plain stdlib records (the use cases log through
``logging.getLogger``) go through one processor chain and one stdout
handler. Request fields bound with bind_request_context() appear on every
event logged while that request is handled, including the cycle report
lines written by the use cases.
"""

import logging
import sys
from typing import Any

import structlog
from opentelemetry import trace

from chunk_cycle_detector.infrastructure.config import get_settings

# Cycle lists in log events are cut down to this many entries
MAX_LOGGED_ITEMS = 20

_HANDLER_NAME = "chunk-cycle-detector"


def configure_logging() -> None:
    """Route structlog and stdlib logging to stdout.

    Safe to call more than once: the handler installed by a previous call is
    replaced, and handlers added by others (pytest's caplog) are left alone.
    """
    otel = get_settings().observability
    shared = _shared_processors()

    structlog.configure(
        processors=[
            *shared,
            structlog.dev.set_exc_info,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.set_name(_HANDLER_NAME)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=shared,
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                *_renderers(otel.log_json_format),
            ],
        )
    )

    root = logging.getLogger()
    for existing in list(root.handlers):
        if existing.get_name() == _HANDLER_NAME:
            root.removeHandler(existing)
    root.addHandler(handler)
    root.setLevel(otel.log_level.upper())


def _shared_processors() -> list:
    """Processors applied to structlog events and stdlib records alike."""
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        _add_trace_context,
        _add_service_context,
        _truncate_collections,
        structlog.processors.StackInfoRenderer(),
    ]


def _renderers(json_format: bool) -> list:
    if json_format:
        return [
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    return [structlog.dev.ConsoleRenderer()]


def bind_request_context(**fields: Any) -> None:
    """Attach fields to every event logged in the current request."""
    structlog.contextvars.bind_contextvars(**fields)


def clear_request_context() -> None:
    structlog.contextvars.clear_contextvars()


def _add_trace_context(
    logger: logging.Logger,
    method_name: str,
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    """Add trace_id and span_id of the active span, if any.

    Inside a detection run this is the ``detect_<kind>_cycles`` span, so
    report lines can be matched to their trace.
    """
    span_context = trace.get_current_span().get_span_context()
    if span_context.is_valid:
        event_dict["trace_id"] = format(span_context.trace_id, "032x")
        event_dict["span_id"] = format(span_context.span_id, "016x")
    return event_dict


def _add_service_context(
    logger: logging.Logger,
    method_name: str,
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    settings = get_settings()
    event_dict.setdefault("service", settings.observability.service_name)
    event_dict.setdefault("environment", settings.environment)
    return event_dict


def _truncate_collections(
    logger: logging.Logger,
    method_name: str,
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    """Truncate list values (cycle paths, node lists) in log events.

    Large bundles can produce hundreds of cycles; only the first
    MAX_LOGGED_ITEMS entries are kept and the number of omitted ones is noted.
    """
    for key, value in list(event_dict.items()):
        if isinstance(value, (list, tuple)) and len(value) > MAX_LOGGED_ITEMS:
            omitted = len(value) - MAX_LOGGED_ITEMS
            event_dict[key] = list(value[:MAX_LOGGED_ITEMS]) + [f"... {omitted} more"]
    return event_dict


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a structlog logger.

    Example:
        >>> logger = get_logger(__name__)
        >>> logger.info("Bundle analysed", chunks=12, cycles=1)
    """
    return structlog.get_logger(name)
