from __future__ import annotations

import logging

import pytest

from animesync.adapters.shikimori import (
    AnimeDetailPayload,
    AnimeSearchResponse,
    translate_detail,
)
from animesync.domain.model import AnimeStatus, ExternalLink
from tests.helpers.shikimori import DETAIL_PAYLOAD


def test_detail_payload_accepts_nulls_for_lists() -> None:
    payload = AnimeDetailPayload.model_validate(
        {"id": 1, "score": None, "genres": None, "studios": None, "externalLinks": None}
    )

    detail = translate_detail(payload)

    assert detail.id == "1"
    assert detail.genres == ()
    assert detail.studios == ()
    assert detail.external_links == ()
    assert detail.status is AnimeStatus.OTHER
    assert detail.url == ""


def test_translate_detail_keeps_link_order() -> None:
    detail = translate_detail(AnimeDetailPayload.model_validate(DETAIL_PAYLOAD))

    assert detail.external_links == (
        ExternalLink(kind="myanimelist", url="https://myanimelist.net/anime/457"),
        ExternalLink(kind="wikipedia", url=None),
    )


def test_graphql_errors_are_joined() -> None:
    response = AnimeSearchResponse.model_validate(
        {"errors": [{"message": "first"}, {"message": "second"}]}
    )
    assert response.error_message() == "first; second"
    assert AnimeSearchResponse.model_validate({"data": {"animes": []}}).error_message() is None


def test_unmodeled_keys_are_logged_once(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.WARNING, logger="animesync.adapters.shikimori.schema"):
        AnimeDetailPayload.model_validate({"id": "1", "franchiseMarker": "mushishi"})
        AnimeDetailPayload.model_validate({"id": "2", "franchiseMarker": "other"})

    warnings = [record for record in caplog.records if "franchiseMarker" in record.getMessage()]
    assert len(warnings) == 1
