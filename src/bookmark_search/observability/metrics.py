"""Prometheus metrics for the search engine, mirrored to OpenTelemetry instruments."""

from __future__ import annotations

from contextlib import contextmanager
import time
from typing import TYPE_CHECKING, Any

from opentelemetry import metrics as otel_metrics
from prometheus_client import CONTENT_TYPE_LATEST, Counter, Gauge, Histogram, generate_latest


if TYPE_CHECKING:
    from collections.abc import Generator


def _get_meter() -> Any:
    # Resolved lazily so a provider installed after import is picked up
    return otel_metrics.get_meter(__name__)


class _BoundMetric:
    def __init__(self, wrapper: MetricBridge, labels: dict[str, str]) -> None:
        self._wrapper = wrapper
        self._labels = labels

    def inc(self, amount: float = 1.0) -> None:
        self._wrapper.inc(self._labels, amount)

    def observe(self, value: float) -> None:
        self._wrapper.observe(self._labels, value)

    def set(self, value: float) -> None:
        self._wrapper.set(self._labels, value)


class MetricBridge:
    """Record to a Prometheus metric and its OTel counterpart in one call."""

    def __init__(
        self,
        prom_metric: Counter | Histogram | Gauge,
        *,
        otel_name: str,
        otel_description: str,
        otel_kind: str,
    ) -> None:
        self._prom_metric = prom_metric
        self._otel_name = otel_name
        self._otel_description = otel_description
        self._otel_kind = otel_kind
        self._otel_instrument = None
        self._last_values: dict[tuple[tuple[str, str], ...], float] = {}

    def labels(self, **labels: str) -> _BoundMetric:
        return _BoundMetric(self, labels)

    def _instrument(self):
        if self._otel_instrument is not None:
            return self._otel_instrument
        meter = _get_meter()
        if self._otel_kind == "counter":
            self._otel_instrument = meter.create_counter(self._otel_name, description=self._otel_description)
        elif self._otel_kind == "histogram":
            self._otel_instrument = meter.create_histogram(self._otel_name, description=self._otel_description)
        elif self._otel_kind == "gauge":
            self._otel_instrument = meter.create_up_down_counter(self._otel_name, description=self._otel_description)
        else:
            raise ValueError(f"Unknown metric kind: {self._otel_kind}")
        return self._otel_instrument

    def _prom(self, labels: dict[str, str]):
        return self._prom_metric.labels(**labels) if labels else self._prom_metric

    def inc(self, labels: dict[str, str], amount: float) -> None:
        self._prom(labels).inc(amount)
        self._instrument().add(amount, labels)

    def observe(self, labels: dict[str, str], value: float) -> None:
        self._prom(labels).observe(value)
        self._instrument().record(value, labels)

    def set(self, labels: dict[str, str], value: float) -> None:
        # OTel has no synchronous gauge here, so feed the up-down counter deltas
        self._prom(labels).set(value)
        key = tuple(sorted(labels.items()))
        delta = value - self._last_values.get(key, 0.0)
        if delta:
            self._instrument().add(delta, labels)
        self._last_values[key] = value


_SEARCH_LATENCY_PROM = Histogram(
    "bookmark_search_latency_seconds",
    "Search query latency",
    buckets=(0.0005, 0.001, 0.0025, 0.005, 0.01, 0.025, 0.05, 0.1),
)

_SEARCH_RESULTS_PROM = Histogram(
    "bookmark_search_results",
    "Results surviving the relevance cutoff per query",
    buckets=(0, 1, 5, 10, 25, 50, 100, 250),
)

_DECODE_FAILURES_PROM = Counter(
    "bookmark_search_decode_failures_total",
    "Buffers rejected because they were not valid UTF-8",
    ["operation"],
)

_RECORD_COUNT_PROM = Gauge(
    "bookmark_search_records",
    "Records currently held by the engine",
)

SEARCH_LATENCY = MetricBridge(
    _SEARCH_LATENCY_PROM,
    otel_name="bookmark_search_latency_seconds",
    otel_description="Search query latency",
    otel_kind="histogram",
)

SEARCH_RESULTS = MetricBridge(
    _SEARCH_RESULTS_PROM,
    otel_name="bookmark_search_results",
    otel_description="Results surviving the relevance cutoff per query",
    otel_kind="histogram",
)

DECODE_FAILURES = MetricBridge(
    _DECODE_FAILURES_PROM,
    otel_name="bookmark_search_decode_failures_total",
    otel_description="Buffers rejected because they were not valid UTF-8",
    otel_kind="counter",
)

RECORD_COUNT = MetricBridge(
    _RECORD_COUNT_PROM,
    otel_name="bookmark_search_records",
    otel_description="Records currently held by the engine",
    otel_kind="gauge",
)


@contextmanager
def track_latency(histogram: MetricBridge, **labels: str) -> Generator[None, None, None]:
    """Context manager to track operation latency."""
    start = time.perf_counter()
    try:
        yield
    finally:
        histogram.labels(**labels).observe(time.perf_counter() - start)


def get_metrics() -> bytes:
    """Generate Prometheus metrics output."""
    return generate_latest()


def get_metrics_content_type() -> str:
    return CONTENT_TYPE_LATEST
