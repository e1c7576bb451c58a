"""Application orchestration entry points."""

from __future__ import annotations

from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING

from animesync.adapters.catalog_import import load_catalog_file
from animesync.adapters.shikimori import ShikimoriClient
from animesync.adapters.sqlalchemy import is_started, record_store, startup
from animesync.config import (
    get_reconciliation_config,
    get_shikimori_config,
    get_shikimori_site_url,
)
from animesync.domain.reconciliation import DelayPolicy, ReconciliationController

if TYPE_CHECKING:
    from pathlib import Path

    from animesync.adapters.sqlalchemy import SqlAlchemyRecordStore
    from animesync.config import ReconciliationConfig, ShikimoriConfig
    from animesync.domain.ports.catalog import RecordStore
    from animesync.domain.reconciliation import ReconciliationReport

log = getLogger(__name__)


@dataclass(slots=True)
class ReconciliationService:
    """A wired controller plus the resources it owns."""

    controller: ReconciliationController
    client: ShikimoriClient
    config: ReconciliationConfig

    async def aclose(self) -> None:
        await self.client.aclose()


def _ensure_started() -> None:
    if not is_started():
        startup()


def build_reconciliation(
    *,
    shikimori_config: ShikimoriConfig | None = None,
    reconciliation_config: ReconciliationConfig | None = None,
    store: RecordStore | None = None,
) -> ReconciliationService:
    """Wire the reconciliation controller from environment configuration."""

    shikimori = shikimori_config or get_shikimori_config()
    settings = reconciliation_config or get_reconciliation_config()
    if store is None:
        _ensure_started()
        store = record_store(site_url=shikimori.site_url)

    client = ShikimoriClient(config=shikimori)
    controller = ReconciliationController(
        store=store,
        searcher=client,
        details=client,
        delays=DelayPolicy.fixed(
            title_seconds=settings.title_delay_seconds,
            record_seconds=settings.record_delay_seconds,
        ),
    )
    return ReconciliationService(controller=controller, client=client, config=settings)


async def run_reconciliation(service: ReconciliationService | None = None) -> ReconciliationReport:
    """Run one reconciliation to completion using the configured adapters."""

    owned = service is None
    effective = service or build_reconciliation()
    log.info("Starting reconciliation against Shikimori")
    try:
        report = await effective.controller.start()
    finally:
        if owned:
            await effective.aclose()
    stats = report.stats
    log.info(
        f"Finished reconciliation: total={stats.total}, updated={stats.updated}, "
        f"failed={stats.failed}, not_found={stats.not_found}, stopped={report.stopped}"
    )
    return report


def import_records(path: Path, *, store: SqlAlchemyRecordStore | None = None) -> int:
    """Seed the catalog from a JSON file and return the number of new records."""

    records = load_catalog_file(path)
    if store is None:
        _ensure_started()
        store = record_store(site_url=get_shikimori_site_url())
    imported = store.add_all(records)
    log.info("Imported %s records from %s", imported, path)
    return imported
