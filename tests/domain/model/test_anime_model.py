from __future__ import annotations

from uuid import uuid4

import pytest

from animesync.domain.model import (
    AnimeStatus,
    ExternalDetail,
    ExternalIdentity,
    LocalRecord,
    candidate_titles,
)


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("ongoing", AnimeStatus.ONGOING),
        ("Released", AnimeStatus.RELEASED),
        ("anons", AnimeStatus.OTHER),
        (None, AnimeStatus.OTHER),
    ],
)
def test_status_parse(raw: str | None, expected: AnimeStatus) -> None:
    assert AnimeStatus.parse(raw) is expected


def test_candidate_titles_skip_blanks_and_keep_order() -> None:
    assert candidate_titles("Мононоке", None, "  ", "Mononoke") == ("Мононоке", "Mononoke")


def test_display_title_falls_back_to_key() -> None:
    key = uuid4()
    assert LocalRecord(key=key).display_title == str(key)
    assert not LocalRecord(key=key).has_titles
    assert LocalRecord(key=key, titles=("Mushishi",)).display_title == "Mushishi"


def test_canonical_url_prefixes_relative_paths_only() -> None:
    relative = ExternalDetail(id="457", url="/animes/457-mushishi")
    absolute = ExternalDetail(id="457", url="https://example.org/a")

    assert relative.canonical_url("https://shikimori.one/") == (
        "https://shikimori.one/animes/457-mushishi"
    )
    assert absolute.canonical_url("https://shikimori.one") == "https://example.org/a"
    assert ExternalDetail(id="1").canonical_url("https://shikimori.one") == ""


def test_identity_names_skip_missing_values() -> None:
    identity = ExternalIdentity(id="1", name=None, localized_name="Мушиши")
    assert identity.names() == ("Мушиши",)
    assert identity.display_name == "Мушиши"
