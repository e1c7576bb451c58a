"""Append-only progress log shared between a run and its observers."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import TYPE_CHECKING

from animesync.domain.model import LogLevel

if TYPE_CHECKING:
    from collections.abc import Callable

log = logging.getLogger(__name__)

_STDLIB_LEVELS: dict[LogLevel, int] = {
    LogLevel.INFO: logging.INFO,
    LogLevel.WARNING: logging.WARNING,
    LogLevel.ERROR: logging.ERROR,
}


def _utcnow() -> datetime:
    return datetime.now(UTC)


@dataclass(frozen=True, slots=True)
class ProgressEvent:
    message: str
    level: LogLevel
    timestamp: datetime

    def as_dict(self) -> dict[str, str]:
        return {
            "message": self.message,
            "level": self.level.value,
            "timestamp": self.timestamp.isoformat(),
        }


class ProgressLog:
    """Time-ordered event buffer.

    Entries are only ever appended, so a reader holding a position never sees
    an earlier entry change. Each append is mirrored to the module logger.
    """

    def __init__(
        self,
        *,
        clock: Callable[[], datetime] = _utcnow,
        logger: logging.Logger | None = None,
    ) -> None:
        self._events: list[ProgressEvent] = []
        self._clock = clock
        self._logger = logger or log

    def __len__(self) -> int:
        return len(self._events)

    def append(self, message: str, level: LogLevel = LogLevel.INFO) -> ProgressEvent:
        event = ProgressEvent(message=message, level=level, timestamp=self._clock())
        self._events.append(event)
        self._logger.log(_STDLIB_LEVELS[level], message)
        return event

    def info(self, message: str) -> ProgressEvent:
        return self.append(message, LogLevel.INFO)

    def warning(self, message: str) -> ProgressEvent:
        return self.append(message, LogLevel.WARNING)

    def error(self, message: str) -> ProgressEvent:
        return self.append(message, LogLevel.ERROR)

    def snapshot(self) -> tuple[ProgressEvent, ...]:
        return tuple(self._events)

    def since(self, position: int) -> tuple[ProgressEvent, ...]:
        if position < 0:
            raise ValueError("Position must be non-negative")
        return tuple(self._events[position:])

    def cursor(self) -> LogCursor:
        return LogCursor(self)


class LogCursor:
    """Per-consumer read position over a :class:`ProgressLog`."""

    def __init__(self, progress: ProgressLog) -> None:
        self._progress = progress
        self._position = 0

    @property
    def position(self) -> int:
        return self._position

    def read(self) -> tuple[ProgressEvent, ...]:
        """Return the events appended since the previous read."""

        events = self._progress.since(self._position)
        self._position += len(events)
        return events
