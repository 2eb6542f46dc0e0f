"""Domain model - the searchable bookmark record.

Records are plain value objects with no infrastructure dependencies:
- `Bookmark` is immutable; the store owns the only sequence of them
- Identifiers are caller-supplied and deliberately not unique
- The matcher never looks fields up by reflection, it goes through
  the `Searchable` protocol instead
"""

from collections.abc import Sequence
from typing import ClassVar, Protocol, runtime_checkable

from pydantic.dataclasses import dataclass


@runtime_checkable
class Searchable(Protocol):
    """Anything the fuzzy matcher can score.

    Implementations declare which fields take part in scoring and how much
    each contributes, and hand back the text for a field by name.
    """

    def weighted_fields(self) -> Sequence[tuple[str, float]]: ...

    def field_value(self, field_name: str) -> str: ...


@dataclass(frozen=True)
class Bookmark:
    """Value object for one bookmark: identifier plus title and URL.

    Equality is structural, so two bookmarks with the same id but
    different titles are different records.
    """

    id: str
    title: str
    url: str

    WEIGHTED_FIELDS: ClassVar[tuple[tuple[str, float], ...]] = (("title", 0.6), ("url", 0.4))

    def weighted_fields(self) -> Sequence[tuple[str, float]]:
        return self.WEIGHTED_FIELDS

    def field_value(self, field_name: str) -> str:
        """Return the text of ``field_name``.

        Raises:
            KeyError: if the record has no such field.
        """
        if field_name == "title":
            return self.title
        if field_name == "url":
            return self.url
        if field_name == "id":
            return self.id
        raise KeyError(field_name)
