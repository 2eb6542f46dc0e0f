"""Observability: structured logging, metrics and tracing."""

from bookmark_search.observability.logging import JsonFormatter, configure_logging
from bookmark_search.observability.metrics import (
    DECODE_FAILURES,
    RECORD_COUNT,
    SEARCH_LATENCY,
    SEARCH_RESULTS,
    MetricBridge,
    get_metrics,
    get_metrics_content_type,
    track_latency,
)
from bookmark_search.observability.tracing import create_span, get_tracer, init_tracing


__all__ = [
    "DECODE_FAILURES",
    "RECORD_COUNT",
    "SEARCH_LATENCY",
    "SEARCH_RESULTS",
    "JsonFormatter",
    "MetricBridge",
    "configure_logging",
    "create_span",
    "get_metrics",
    "get_metrics_content_type",
    "get_tracer",
    "init_tracing",
    "track_latency",
]
