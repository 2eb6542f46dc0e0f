"""Fuzzy ranking of searchable records.

Each record field is scored independently with the bitap matcher, the field
scores are combined with the field weights, and records are ordered best
first. Every record gets a result; cutting off irrelevant ones is left to
the caller.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
import logging
from statistics import fmean

from bookmark_search.config import MatchConfig
from bookmark_search.domain.model import Searchable
from bookmark_search.search.bitap import NO_MATCH_SCORE, Pattern, bitap_search
from bookmark_search.search.weights import FieldWeightScheme


logger = logging.getLogger(__name__)


Ranges = tuple[tuple[int, int], ...]


@dataclass(frozen=True)
class FieldMatch:
    field_name: str
    score: float
    ranges: Ranges = ()


@dataclass(frozen=True)
class MatchResult:
    """Score of one record, addressed by its position in the ranked snapshot."""

    index: int
    score: float
    field_matches: tuple[FieldMatch, ...] = ()

    @property
    def field_scores(self) -> tuple[float, ...]:
        return tuple(match.score for match in self.field_matches)


def merge_ranges(ranges: Iterable[tuple[int, int]]) -> Ranges:
    """Sort inclusive ranges and join the ones that overlap or touch."""
    merged: list[tuple[int, int]] = []
    for start, end in sorted(ranges):
        if merged and start <= merged[-1][1] + 1:
            merged[-1] = (merged[-1][0], max(merged[-1][1], end))
        else:
            merged.append((start, end))
    return tuple(merged)


class FuzzyMatcher:
    """Scores and ranks records against a query.

    Args:
        config: Matching tolerances.
        weights: Field weights applied to every record. When omitted, each
            record's own ``weighted_fields()`` is used.
    """

    def __init__(self, config: MatchConfig | None = None, weights: FieldWeightScheme | None = None):
        self.config = config if config is not None else MatchConfig()
        self.weights = weights
        self._record_schemes: dict[tuple[tuple[str, float], ...], FieldWeightScheme] = {}

    def compile_query(self, query: str) -> list[Pattern]:
        """Normalize, split and truncate ``query`` into bitap patterns.

        Returns an empty list for a query with nothing to match.
        """
        if not self.config.case_sensitive:
            query = query.lower()
        limit = self.config.max_pattern_length
        if self.config.tokenize:
            return [Pattern.compile(token[:limit]) for token in query.split()]
        if not query:
            return []
        return [Pattern.compile(query[:limit])]

    def match_text(self, text: str, patterns: Sequence[Pattern]) -> tuple[float, Ranges]:
        """Score one field's text and collect the ranges of matching tokens.

        Token scores are averaged when tokenizing; ranges of every token that
        matched are merged.
        """
        if not patterns:
            return NO_MATCH_SCORE, ()
        if not self.config.case_sensitive:
            text = text.lower()
        results = [
            bitap_search(
                text,
                pattern,
                location=self.config.location,
                distance=self.config.distance,
                threshold=self.config.threshold,
            )
            for pattern in patterns
        ]
        ranges = merge_ranges(span for result in results if result.is_match for span in result.ranges)
        return fmean(result.score for result in results), ranges

    def score_text(self, text: str, patterns: Sequence[Pattern]) -> float:
        return self.match_text(text, patterns)[0]

    def scheme_for(self, record: Searchable) -> FieldWeightScheme:
        if self.weights is not None:
            return self.weights
        pairs = tuple(record.weighted_fields())
        scheme = self._record_schemes.get(pairs)
        if scheme is None:
            scheme = FieldWeightScheme.from_pairs(pairs)
            self._record_schemes[pairs] = scheme
        return scheme

    def score_record(self, record: Searchable, patterns: Sequence[Pattern]) -> tuple[float, tuple[FieldMatch, ...]]:
        """Return the weighted aggregate score and the per-field matches."""
        scheme = self.scheme_for(record)
        field_matches = tuple(
            FieldMatch(name, *self.match_text(record.field_value(name), patterns)) for name in scheme.field_names
        )
        return scheme.combine([match.score for match in field_matches]), field_matches

    def rank(self, query: str, records: Sequence[Searchable]) -> list[MatchResult]:
        """Score every record and order them best first.

        The sort is stable, so records with equal scores keep their
        insertion order.
        """
        patterns = self.compile_query(query)
        if not patterns:
            logger.debug("Empty query, every record scores %.1f", NO_MATCH_SCORE)

        results = []
        for index, record in enumerate(records):
            score, field_matches = self.score_record(record, patterns)
            results.append(MatchResult(index=index, score=score, field_matches=field_matches))

        results.sort(key=lambda result: result.score)
        return results


def rank(
    query: str,
    config: MatchConfig,
    weights: FieldWeightScheme | None,
    records: Sequence[Searchable],
) -> list[MatchResult]:
    """Rank ``records`` against ``query``; see `FuzzyMatcher.rank`."""
    return FuzzyMatcher(config, weights).rank(query, records)
