"""Domain port definitions for adapters."""

from __future__ import annotations

from .catalog import RecordStore, StoreUnavailableError
from .metadata import DetailSource, MetadataService, MetadataTransportError, TitleSearcher

__all__ = [
    "DetailSource",
    "MetadataService",
    "MetadataTransportError",
    "RecordStore",
    "StoreUnavailableError",
    "TitleSearcher",
]
