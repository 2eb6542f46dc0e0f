"""Embeddable fuzzy search over in-memory bookmark records."""

from bookmark_search.config import MatchConfig, Settings
from bookmark_search.domain import Bookmark, Searchable
from bookmark_search.engine import SearchEngine
from bookmark_search.search.weights import FieldWeightScheme


__all__ = ["Bookmark", "FieldWeightScheme", "MatchConfig", "SearchEngine", "Searchable", "Settings"]
