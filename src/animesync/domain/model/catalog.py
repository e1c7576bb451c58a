"""Local catalog records."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from datetime import datetime

    from .enums import AnimeStatus
    from .primitives import ExternalLink, Genre, RecordKey


@dataclass(frozen=True, slots=True)
class LocalRecord:
    """Snapshot of one catalog entry as enumerated at the start of a run.

    ``titles`` is ordered by search preference (primary language first). The
    reconciled fields stay ``None`` until the first successful pass.
    """

    key: RecordKey
    titles: tuple[str, ...] = ()
    score: float | None = None
    episodes: int | None = None
    status: AnimeStatus | None = None
    url: str | None = None
    genres: tuple[Genre, ...] = field(default_factory=tuple)
    studios: tuple[str, ...] = field(default_factory=tuple)
    external_links: tuple[ExternalLink, ...] = field(default_factory=tuple)
    updated_at: datetime | None = None

    @property
    def display_title(self) -> str:
        if self.titles:
            return self.titles[0]
        return str(self.key)

    @property
    def has_titles(self) -> bool:
        return bool(self.titles)


def candidate_titles(*values: str | None) -> tuple[str, ...]:
    """Return the non-blank titles in the given preference order."""

    return tuple(value for value in values if value is not None and value.strip())
