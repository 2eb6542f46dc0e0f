"""One-way diagnostic notifications from the engine to its host."""

from __future__ import annotations

import logging
from typing import Any, Literal, Protocol


Level = Literal["debug", "info", "warning", "error"]


class DiagnosticSink(Protocol):
    """Receives engine diagnostics. Fire-and-forget: the engine ignores any return value."""

    def notify(self, level: Level, message: str, **context: Any) -> None: ...


class LoggingSink:
    """Forward diagnostics to a standard library logger."""

    def __init__(self, logger: logging.Logger | None = None):
        self.logger = logger if logger is not None else logging.getLogger("bookmark_search.engine")

    def notify(self, level: Level, message: str, **context: Any) -> None:
        self.logger.log(getattr(logging, level.upper()), message, extra=context or None)


class RecordingSink:
    """Keep diagnostics in memory, for hosts that poll instead of log."""

    def __init__(self) -> None:
        self.notifications: list[tuple[Level, str, dict[str, Any]]] = []

    def notify(self, level: Level, message: str, **context: Any) -> None:
        self.notifications.append((level, message, context))

    def messages(self, level: Level | None = None) -> list[str]:
        return [message for entry_level, message, _ in self.notifications if level is None or entry_level == level]
