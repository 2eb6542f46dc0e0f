"""Message-based adapter for hosts that talk to the engine through a queue.

Messages from the app carry a ``type`` discriminator:
- ``BUILD_INDEX``: replace the dataset with ``data``
- ``ADD_BOOKMARKS``: append the records in ``data``
- ``REMOVE_BOOKMARKS``: drop every record with ``id``
- ``QUERY_SEARCH``: answered with ``SEARCH_RESULTS``

The worker announces itself with ``WORKER_READY``.
"""

from __future__ import annotations

from collections.abc import Mapping
import logging
from typing import Annotated, Any, Literal

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter

from bookmark_search.engine import SearchEngine


logger = logging.getLogger(__name__)


class _Message(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")


class QueryMessage(_Message):
    type: Literal["QUERY_SEARCH"] = "QUERY_SEARCH"
    query: str


class BuildIndexMessage(_Message):
    type: Literal["BUILD_INDEX"] = "BUILD_INDEX"
    data: bytes


class AddBookmarksMessage(_Message):
    type: Literal["ADD_BOOKMARKS"] = "ADD_BOOKMARKS"
    data: bytes


class RemoveBookmarksMessage(_Message):
    type: Literal["REMOVE_BOOKMARKS"] = "REMOVE_BOOKMARKS"
    id: str


class WorkerReadyMessage(_Message):
    type: Literal["WORKER_READY"] = "WORKER_READY"


class SearchResultsMessage(_Message):
    type: Literal["SEARCH_RESULTS"] = "SEARCH_RESULTS"
    results: bytes


FromAppMessage = Annotated[
    QueryMessage | BuildIndexMessage | AddBookmarksMessage | RemoveBookmarksMessage,
    Field(discriminator="type"),
]
FromWorkerMessage = WorkerReadyMessage | SearchResultsMessage

_from_app_adapter: TypeAdapter[Any] = TypeAdapter(FromAppMessage)


def parse_message(message: Mapping[str, Any] | BaseModel) -> Any:
    """Validate a raw app message.

    Raises:
        pydantic.ValidationError: for unknown types or missing fields.
    """
    if isinstance(message, BaseModel):
        message = message.model_dump()
    return _from_app_adapter.validate_python(message)


class SearchWorker:
    """Dispatch app messages to a `SearchEngine`."""

    def __init__(self, engine: SearchEngine | None = None):
        self.engine = engine if engine is not None else SearchEngine()

    def ready(self) -> WorkerReadyMessage:
        logger.info("Search worker ready")
        return WorkerReadyMessage()

    def handle(self, message: Mapping[str, Any] | BaseModel) -> SearchResultsMessage | None:
        """Apply one message; only queries produce a reply."""
        parsed = parse_message(message)
        if isinstance(parsed, QueryMessage):
            return SearchResultsMessage(results=self.engine.search(parsed.query))
        if isinstance(parsed, BuildIndexMessage):
            self.engine.load_dataset(parsed.data)
        elif isinstance(parsed, AddBookmarksMessage):
            self.engine.add_entries(parsed.data)
        elif isinstance(parsed, RemoveBookmarksMessage):
            self.engine.remove_entry(parsed.id)
        return None
