"""Public interface for the Shikimori adapter."""

from __future__ import annotations

from .client import DETAIL_QUERY, SEARCH_QUERY, ShikimoriAPIError, ShikimoriClient
from .schema import AnimeDetailPayload, AnimeDetailResponse, AnimeSearchHit, AnimeSearchResponse
from .translator import translate_detail, translate_search_hit

__all__ = [
    "DETAIL_QUERY",
    "SEARCH_QUERY",
    "AnimeDetailPayload",
    "AnimeDetailResponse",
    "AnimeSearchHit",
    "AnimeSearchResponse",
    "ShikimoriAPIError",
    "ShikimoriClient",
    "translate_detail",
    "translate_search_hit",
]
