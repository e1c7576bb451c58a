"""Canned Shikimori GraphQL payloads."""

from __future__ import annotations

DETAIL_PAYLOAD: dict[str, object] = {
    "id": "457",
    "score": 8.63,
    "episodes": 26,
    "status": "released",
    "url": "/animes/457-mushishi",
    "genres": [
        {"name": "Adventure", "russian": "Приключения"},
        {"name": "Mystery", "russian": None},
    ],
    "studios": [{"name": "Artland"}],
    "externalLinks": [
        {"kind": "myanimelist", "url": "https://myanimelist.net/anime/457"},
        {"kind": "wikipedia", "url": None},
    ],
}
