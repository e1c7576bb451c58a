"""Values returned by the external metadata service."""

from __future__ import annotations

from dataclasses import dataclass, field

from .enums import AnimeStatus
from .primitives import ExternalId, ExternalLink, Genre


@dataclass(frozen=True, slots=True)
class ExternalIdentity:
    """A search hit: remote identifier plus its display names."""

    id: ExternalId
    name: str | None = None
    localized_name: str | None = None

    @property
    def display_name(self) -> str:
        return self.localized_name or self.name or self.id

    def names(self) -> tuple[str, ...]:
        return tuple(value for value in (self.name, self.localized_name) if value)


@dataclass(frozen=True, slots=True)
class ExternalDetail:
    """Authoritative attribute bundle fetched for one identity."""

    id: ExternalId
    score: float | None = None
    episodes: int | None = None
    status: AnimeStatus = AnimeStatus.OTHER
    url: str = ""
    genres: tuple[Genre, ...] = field(default_factory=tuple)
    studios: tuple[str, ...] = field(default_factory=tuple)
    external_links: tuple[ExternalLink, ...] = field(default_factory=tuple)

    def canonical_url(self, site_url: str) -> str:
        """Resolve the relative ``url`` against the service's site root."""

        if not self.url or not self.url.startswith("/"):
            return self.url
        return f"{site_url.rstrip('/')}{self.url}"
