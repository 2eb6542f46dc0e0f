"""Wire codec for the host byte-buffer boundary.

Formats (UTF-8):
- Records: ``id\\0title\\0url`` per line, lines joined by ``\\n``
- Results: ``url\\0title`` per line, lines joined by ``\\n``, no trailing newline

A buffer that is not valid UTF-8 is the only hard failure. Record lines with
fewer than three fields are dropped without a trace.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from bookmark_search.domain.model import Bookmark


FIELD_SEPARATOR = "\0"
LINE_SEPARATOR = "\n"
ENCODING = "utf-8"


class DecodeError(ValueError):
    """Raised when a buffer cannot be decoded as UTF-8 text."""


@dataclass(frozen=True)
class ResultLine:
    """One decoded search result."""

    url: str
    title: str


def _decode_text(buffer: bytes) -> str:
    try:
        return bytes(buffer).decode(ENCODING)
    except UnicodeDecodeError as exc:
        raise DecodeError(f"Buffer is not valid {ENCODING} text: {exc.reason} at byte {exc.start}") from exc


def decode_records(buffer: bytes) -> list[Bookmark]:
    """Decode a record buffer.

    Raises:
        DecodeError: if ``buffer`` is not valid UTF-8.
    """
    records = []
    for line in _decode_text(buffer).split(LINE_SEPARATOR):
        components = line.removesuffix("\r").split(FIELD_SEPARATOR)
        if len(components) < 3:
            continue
        record_id, title, url = components[:3]
        records.append(Bookmark(id=record_id, title=title, url=url))
    return records


def encode_records(records: Iterable[Bookmark]) -> bytes:
    return LINE_SEPARATOR.join(
        FIELD_SEPARATOR.join((record.id, record.title, record.url)) for record in records
    ).encode(ENCODING)


def encode_results(pairs: Iterable[tuple[str, str]]) -> bytes:
    """Encode ``(url, title)`` pairs; an empty iterable gives ``b""``."""
    return LINE_SEPARATOR.join(f"{url}{FIELD_SEPARATOR}{title}" for url, title in pairs).encode(ENCODING)


def decode_results(buffer: bytes) -> list[ResultLine]:
    """Decode a result buffer produced by `encode_results`."""
    if not buffer:
        return []
    results = []
    for line in _decode_text(buffer).split(LINE_SEPARATOR):
        url, _, title = line.partition(FIELD_SEPARATOR)
        results.append(ResultLine(url=url, title=title))
    return results
