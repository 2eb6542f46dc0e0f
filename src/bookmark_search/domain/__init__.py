"""Domain layer - the records the engine stores and scores."""

from bookmark_search.domain.model import Bookmark, Searchable


__all__ = ["Bookmark", "Searchable"]
