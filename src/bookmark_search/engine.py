"""Search engine façade consumed by the host.

Owns one record store and one fuzzy matcher and exposes the four host
operations. Everything crossing this boundary is a byte buffer or a plain
string, and no failure propagates to the host: a buffer that cannot be
decoded leaves the store untouched and is reported to the diagnostic sink.
"""

from __future__ import annotations

from collections.abc import Callable
import logging

from bookmark_search.config import MatchConfig, Settings
from bookmark_search.domain.model import Bookmark
from bookmark_search.notifications import DiagnosticSink, LoggingSink
from bookmark_search.observability import (
    DECODE_FAILURES,
    RECORD_COUNT,
    SEARCH_LATENCY,
    SEARCH_RESULTS,
    create_span,
    track_latency,
)
from bookmark_search.search.codec import DecodeError, decode_records, encode_results
from bookmark_search.search.matcher import FuzzyMatcher, MatchResult
from bookmark_search.search.store import RecordStore
from bookmark_search.search.weights import REFERENCE_WEIGHTS, FieldWeightScheme


logger = logging.getLogger(__name__)

RELEVANCE_CUTOFF = 0.5


class SearchEngine:
    """Fuzzy bookmark search over an in-memory record store.

    Not thread-safe: the host must issue one call at a time.
    """

    def __init__(
        self,
        config: MatchConfig | None = None,
        weights: FieldWeightScheme | None = None,
        *,
        sink: DiagnosticSink | None = None,
        relevance_cutoff: float = RELEVANCE_CUTOFF,
    ):
        self.sink = sink if sink is not None else LoggingSink()
        self.sink.notify("info", "building search engine")
        self.config = config if config is not None else MatchConfig()
        self.weights = weights if weights is not None else REFERENCE_WEIGHTS
        self.relevance_cutoff = relevance_cutoff
        self.matcher = FuzzyMatcher(self.config, self.weights)
        self.store = RecordStore()

    @classmethod
    def from_settings(cls, settings: Settings, *, sink: DiagnosticSink | None = None) -> SearchEngine:
        return cls(
            settings.match_config(),
            settings.weight_scheme(),
            sink=sink,
            relevance_cutoff=settings.relevance_cutoff,
        )

    def __len__(self) -> int:
        return len(self.store)

    def load_dataset(self, buffer: bytes) -> None:
        """Replace every record with those decoded from ``buffer``."""
        self._apply("load_dataset", buffer, self.store.replace)

    def add_entries(self, buffer: bytes) -> None:
        """Append the records decoded from ``buffer``; duplicates are kept."""
        self._apply("add_entries", buffer, self.store.append)

    def remove_entry(self, record_id: str) -> None:
        """Remove every record with ``record_id``. Unknown ids are a no-op."""
        with create_span("bookmark_search.remove_entry"):
            removed = self.store.remove_by_id(record_id)
        RECORD_COUNT.labels().set(len(self.store))
        logger.debug("Removed %d record(s) with id %r", removed, record_id)

    def search(self, query: str) -> bytes:
        """Return ``url\\0title`` lines for records scoring under the relevance cutoff."""
        with create_span("bookmark_search.search", attributes={"query.length": len(query)}) as span:
            with track_latency(SEARCH_LATENCY):
                hits = self.rank(query)
            span.set_attribute("search.results", len(hits))
        SEARCH_RESULTS.labels().observe(len(hits))
        return encode_results((record.url, record.title) for record, _ in hits)

    def rank(self, query: str) -> list[tuple[Bookmark, MatchResult]]:
        """Records surviving the relevance cutoff, best first, with their match results."""
        snapshot = self.store.snapshot()
        return [
            (snapshot[result.index], result)
            for result in self.matcher.rank(query, snapshot)
            if result.score < self.relevance_cutoff
        ]

    def _apply(self, operation: str, buffer: bytes, mutate: Callable[[list[Bookmark]], None]) -> None:
        with create_span(f"bookmark_search.{operation}", attributes={"buffer.size": len(buffer)}):
            try:
                records = decode_records(buffer)
            except DecodeError as exc:
                DECODE_FAILURES.labels(operation=operation).inc()
                self.sink.notify("error", f"{operation} failed at turning bytes into string", error=str(exc))
                return
            mutate(records)
        RECORD_COUNT.labels().set(len(self.store))
        logger.debug("%s decoded %d record(s); store now holds %d", operation, len(records), len(self.store))
