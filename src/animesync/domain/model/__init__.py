"""Domain model for catalog reconciliation."""

from __future__ import annotations

from .catalog import LocalRecord, candidate_titles
from .enums import AnimeStatus, LogLevel, RecordOutcome, UpsertOutcome
from .metadata import ExternalDetail, ExternalIdentity
from .primitives import ExternalId, ExternalLink, Genre, RecordKey

__all__ = [
    "AnimeStatus",
    "ExternalDetail",
    "ExternalId",
    "ExternalIdentity",
    "ExternalLink",
    "Genre",
    "LocalRecord",
    "LogLevel",
    "RecordKey",
    "RecordOutcome",
    "UpsertOutcome",
    "candidate_titles",
]
