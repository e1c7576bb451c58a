"""SQLAlchemy adapter package for animesync."""

from __future__ import annotations

from .lifecycle import (
    StartupError,
    configured_engine,
    is_started,
    record_store,
    shutdown,
    startup,
)
from .mappings import anime_record_table, metadata
from .repositories import SqlAlchemyRecordStore

__all__ = [
    "SqlAlchemyRecordStore",
    "StartupError",
    "anime_record_table",
    "configured_engine",
    "is_started",
    "metadata",
    "record_store",
    "shutdown",
    "startup",
]
