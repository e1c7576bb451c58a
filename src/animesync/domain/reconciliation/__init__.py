"""Catalog reconciliation against an external metadata service."""

from __future__ import annotations

from .delay import DelayPolicy, FixedDelay, Sleeper
from .details import DetailFetcher
from .job import (
    AlreadyRunningError,
    JobRun,
    JobSlot,
    JobStats,
    ReconciliationController,
    ReconciliationReport,
)
from .matching import TitleMatch, TitleMatcher, is_exact_match, normalize_title, pick_match
from .progress import LogCursor, ProgressEvent, ProgressLog
from .streaming import follow_progress

__all__ = [
    "AlreadyRunningError",
    "DelayPolicy",
    "DetailFetcher",
    "FixedDelay",
    "JobRun",
    "JobSlot",
    "JobStats",
    "LogCursor",
    "ProgressEvent",
    "ProgressLog",
    "ReconciliationController",
    "ReconciliationReport",
    "Sleeper",
    "TitleMatch",
    "TitleMatcher",
    "follow_progress",
    "is_exact_match",
    "normalize_title",
    "pick_match",
]
