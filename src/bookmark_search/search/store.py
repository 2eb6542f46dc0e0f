"""In-memory record store.

Insertion order is the only addressing scheme: positions are compact and
survivors keep their relative order after removals.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator

from bookmark_search.domain.model import Bookmark


class RecordStore:
    """Ordered, mutable collection of bookmarks owned by one engine."""

    def __init__(self, records: Iterable[Bookmark] = ()):
        self._records: list[Bookmark] = list(records)

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[Bookmark]:
        return iter(self.snapshot())

    def replace(self, records: Iterable[Bookmark]) -> None:
        """Discard the current records and install ``records``."""
        self._records = list(records)

    def append(self, records: Iterable[Bookmark]) -> None:
        """Add ``records`` after the current end. Duplicate ids are kept."""
        self._records.extend(records)

    def remove_by_id(self, record_id: str) -> int:
        """Remove every record whose id is ``record_id``.

        Returns:
            Number of records removed; 0 when nothing matched.
        """
        survivors = [record for record in self._records if record.id != record_id]
        removed = len(self._records) - len(survivors)
        self._records = survivors
        return removed

    def snapshot(self) -> tuple[Bookmark, ...]:
        """Immutable view of the current records, unaffected by later mutations."""
        return tuple(self._records)
