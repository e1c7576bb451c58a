"""Domain enums (pure, dependency-light)."""

from __future__ import annotations

from enum import StrEnum


class AnimeStatus(StrEnum):
    ONGOING = "ongoing"
    RELEASED = "released"
    OTHER = "other"

    @classmethod
    def parse(cls, value: str | None) -> AnimeStatus:
        if value is None:
            return cls.OTHER
        try:
            return cls(value.strip().lower())
        except ValueError:
            return cls.OTHER


class LogLevel(StrEnum):
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class RecordOutcome(StrEnum):
    """Per-record result of a reconciliation pass."""

    UPDATED = "updated"
    FAILED = "failed"
    NOT_FOUND = "not_found"


class UpsertOutcome(StrEnum):
    APPLIED = "applied"
    MISSING = "missing"
