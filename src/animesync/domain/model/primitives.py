"""Domain primitives: scalar aliases + small value objects."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TypeAlias
from uuid import UUID

RecordKey: TypeAlias = UUID
ExternalId: TypeAlias = str


@dataclass(frozen=True, slots=True)
class Genre:
    name: str
    localized_name: str | None = None


@dataclass(frozen=True, slots=True)
class ExternalLink:
    kind: str
    url: str | None = None
