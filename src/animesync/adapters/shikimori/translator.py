"""Translate Shikimori payloads into domain values."""

from __future__ import annotations

from typing import TYPE_CHECKING

from animesync.domain.model import (
    AnimeStatus,
    ExternalDetail,
    ExternalIdentity,
    ExternalLink,
    Genre,
)

if TYPE_CHECKING:
    from .schema import AnimeDetailPayload, AnimeSearchHit


def translate_search_hit(hit: AnimeSearchHit) -> ExternalIdentity:
    return ExternalIdentity(id=hit.id, name=hit.name, localized_name=hit.russian)


def translate_detail(payload: AnimeDetailPayload) -> ExternalDetail:
    return ExternalDetail(
        id=payload.id,
        score=payload.score,
        episodes=payload.episodes,
        status=AnimeStatus.parse(payload.status),
        url=payload.url or "",
        genres=tuple(
            Genre(name=genre.name, localized_name=genre.russian) for genre in payload.genres
        ),
        studios=tuple(studio.name for studio in payload.studios),
        external_links=tuple(
            ExternalLink(kind=link.kind, url=link.url) for link in payload.external_links
        ),
    )
