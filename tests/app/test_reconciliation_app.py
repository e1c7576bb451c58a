from __future__ import annotations

import asyncio
import json
from typing import TYPE_CHECKING

import pytest

from animesync import app as app_module
from animesync.adapters.sqlalchemy import record_store
from animesync.app import build_reconciliation, import_records, run_reconciliation
from animesync.config import ReconciliationConfig
from animesync.config.http_resilience import ResilienceConfig
from animesync.config.shikimori import ShikimoriConfig
from tests.helpers.catalog import InMemoryRecordStore, make_record

if TYPE_CHECKING:
    from pathlib import Path


def _shikimori_config() -> ShikimoriConfig:
    return ShikimoriConfig(
        site_url="https://shikimori.example",
        resilience=ResilienceConfig(name="shikimori", base_url="https://shikimori.example"),
    )


def test_build_reconciliation_wires_configured_delays() -> None:
    store = InMemoryRecordStore()
    settings = ReconciliationConfig(title_delay_seconds=0.0, record_delay_seconds=0.25)

    service = build_reconciliation(
        shikimori_config=_shikimori_config(),
        reconciliation_config=settings,
        store=store,
    )

    assert service.config is settings
    assert not service.controller.is_running
    asyncio.run(service.aclose())


def test_run_reconciliation_on_empty_catalog() -> None:
    service = build_reconciliation(
        shikimori_config=_shikimori_config(),
        reconciliation_config=ReconciliationConfig(),
        store=InMemoryRecordStore(),
    )

    report = asyncio.run(run_reconciliation(service))

    assert report.message == "Update completed"
    assert report.stats.total == 0


def test_run_reconciliation_closes_a_service_it_built(monkeypatch: pytest.MonkeyPatch) -> None:
    closed: list[bool] = []
    service = build_reconciliation(
        shikimori_config=_shikimori_config(),
        reconciliation_config=ReconciliationConfig(),
        store=InMemoryRecordStore([make_record(None)]),
    )

    async def fake_aclose() -> None:
        closed.append(True)

    monkeypatch.setattr(service.client, "aclose", fake_aclose)
    monkeypatch.setattr(app_module, "build_reconciliation", lambda: service)

    report = asyncio.run(run_reconciliation())

    assert report.stats.not_found == 1
    assert closed == [True]


@pytest.mark.usefixtures("started_adapter")
def test_import_records_seeds_the_started_store(tmp_path: Path) -> None:
    path = tmp_path / "catalog.json"
    path.write_text(json.dumps([{"title": "Mushishi"}, {"title_eng": "Trigun"}]))

    assert import_records(path) == 2
    store = record_store(site_url="https://shikimori.one")
    titles = {record.titles for record in store.enumerate_all()}
    assert titles == {("Mushishi",), ("Trigun",)}
