"""Reconciliation job lifecycle: single-run slot, run loop and report."""

from __future__ import annotations

import asyncio
import threading
from contextlib import contextmanager
from dataclasses import dataclass, field, replace
from datetime import UTC, datetime
from logging import getLogger
from typing import TYPE_CHECKING

from animesync.domain.model import RecordOutcome, UpsertOutcome
from animesync.domain.ports.catalog import StoreUnavailableError

from .details import DetailFetcher
from .matching import TitleMatcher
from .progress import ProgressLog

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator

    from animesync.domain.model import LocalRecord
    from animesync.domain.ports.catalog import RecordStore
    from animesync.domain.ports.metadata import DetailSource, TitleSearcher

    from .delay import DelayPolicy

log = getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(UTC)


class AlreadyRunningError(RuntimeError):
    """Raised when a start is requested while a run is active."""


@dataclass(slots=True)
class JobStats:
    total: int = 0
    updated: int = 0
    failed: int = 0
    not_found: int = 0

    @property
    def processed(self) -> int:
        return self.updated + self.failed + self.not_found

    def record(self, outcome: RecordOutcome) -> None:
        if outcome is RecordOutcome.UPDATED:
            self.updated += 1
        elif outcome is RecordOutcome.FAILED:
            self.failed += 1
        else:
            self.not_found += 1

    def as_dict(self) -> dict[str, int]:
        return {
            "total": self.total,
            "updated": self.updated,
            "failed": self.failed,
            "notFound": self.not_found,
        }


def _percent(part: int, total: int) -> int:
    if total == 0:
        return 0
    return round(part / total * 100)


@dataclass(frozen=True, slots=True)
class ReconciliationReport:
    message: str
    stats: JobStats
    stopped: bool

    def as_dict(self) -> dict[str, object]:
        return {"message": self.message, "stats": self.stats.as_dict(), "stopped": self.stopped}

    def summary(self) -> str:
        stats = self.stats
        return "\n".join(
            (
                f"=== {self.message.upper()} ===",
                f"Processed: {stats.processed} of {stats.total}",
                f"Updated: {stats.updated} ({_percent(stats.updated, stats.total)}%)",
                f"Not found: {stats.not_found} ({_percent(stats.not_found, stats.total)}%)",
                f"Failed: {stats.failed} ({_percent(stats.failed, stats.total)}%)",
            )
        )


@dataclass(slots=True, eq=False)
class JobRun:
    """State of one reconciliation execution."""

    started_at: datetime
    log: ProgressLog = field(default_factory=ProgressLog)
    stats: JobStats = field(default_factory=JobStats)
    running: bool = True
    stop_requested: bool = False

    def request_stop(self) -> None:
        if self.running:
            self.stop_requested = True


class JobSlot:
    """Single-slot registry holding the latest run; at most one may be running."""

    def __init__(self, *, clock: Callable[[], datetime] = _utcnow) -> None:
        self._lock = threading.Lock()
        self._clock = clock
        self._current: JobRun | None = None

    @property
    def current(self) -> JobRun | None:
        """The latest run, finished or not; its log stays readable until the next claim."""
        return self._current

    @property
    def active(self) -> JobRun | None:
        run = self._current
        if run is None or not run.running:
            return None
        return run

    def claim(self) -> JobRun:
        with self._lock:
            if self.active is not None:
                raise AlreadyRunningError("Update already in progress")
            run = JobRun(started_at=self._clock(), log=ProgressLog(clock=self._clock))
            self._current = run
            return run

    def release(self, run: JobRun) -> None:
        with self._lock:
            if not run.running:
                return
            run.running = False

    @contextmanager
    def occupied(self, run: JobRun) -> Iterator[JobRun]:
        try:
            yield run
        finally:
            self.release(run)

    def request_stop(self) -> bool:
        run = self.active
        if run is None:
            return False
        run.request_stop()
        return True


class ReconciliationController:
    """Drive one reconciliation run at a time over the whole catalog.

    Records are processed strictly one after another. A stop request is
    honoured at the next record boundary; calls already in flight complete.
    Store calls run in a worker thread so the loop keeps serving stop
    requests and log readers meanwhile.
    """

    def __init__(
        self,
        *,
        store: RecordStore,
        searcher: TitleSearcher,
        details: DetailSource,
        delays: DelayPolicy,
        slot: JobSlot | None = None,
    ) -> None:
        self._store = store
        self._searcher = searcher
        self._details = details
        self._delays = delays
        self._slot = slot or JobSlot()

    @property
    def slot(self) -> JobSlot:
        return self._slot

    @property
    def current_run(self) -> JobRun | None:
        return self._slot.current

    @property
    def is_running(self) -> bool:
        return self._slot.active is not None

    async def start(self) -> ReconciliationReport:
        """Run to completion (or stop) and return the report."""

        run = self._slot.claim()
        return await self._execute(run)

    def launch(self) -> asyncio.Task[ReconciliationReport]:
        """Claim the slot now and run in a background task on the current loop."""

        run = self._slot.claim()
        task = asyncio.get_running_loop().create_task(self._execute(run))
        # a task cancelled before its first step never reaches the finally block
        task.add_done_callback(lambda _task: self._slot.release(run))
        return task

    def request_stop(self) -> bool:
        stopped = self._slot.request_stop()
        if stopped:
            log.info("Stop requested for the running reconciliation")
        return stopped

    async def _execute(self, run: JobRun) -> ReconciliationReport:
        with self._slot.occupied(run):
            try:
                return await self._run(run)
            except Exception as exc:
                run.log.error(f"Reconciliation aborted: {exc}")
                raise

    async def _run(self, run: JobRun) -> ReconciliationReport:
        progress = run.log
        progress.info("Fetching records from the catalog")
        records = tuple(await asyncio.to_thread(self._store.enumerate_all))
        total = len(records)
        run.stats.total = total
        progress.info(f"Found {total} records in the catalog")

        matcher = TitleMatcher(
            self._searcher,
            delay=self._delays.between_titles,
            progress=progress,
        )
        fetcher = DetailFetcher(self._details, progress=progress)

        stopped = False
        for index, record in enumerate(records):
            if run.stop_requested:
                stopped = True
                progress.warning(f"Stop requested, {total - index} records left unprocessed")
                break

            outcome = await self._reconcile(
                record,
                position=f"[{index + 1}/{total}]",
                matcher=matcher,
                fetcher=fetcher,
                progress=progress,
            )
            run.stats.record(outcome)

            if index < total - 1:
                await self._delays.between_records.wait()

        report = ReconciliationReport(
            message="Update stopped" if stopped else "Update completed",
            stats=replace(run.stats),
            stopped=stopped,
        )
        progress.info(report.summary())
        return report

    async def _reconcile(
        self,
        record: LocalRecord,
        *,
        position: str,
        matcher: TitleMatcher,
        fetcher: DetailFetcher,
        progress: ProgressLog,
    ) -> RecordOutcome:
        title = record.display_title
        if not record.has_titles:
            progress.warning(f"{position} No title for record {record.key}, skipping")
            return RecordOutcome.NOT_FOUND

        match = await matcher.resolve(record.titles)
        if match is None:
            progress.warning(f"{position} Not found on the metadata service: {title}")
            return RecordOutcome.NOT_FOUND

        external_id = match.identity.id
        detail = await fetcher.fetch(external_id)
        if detail is None:
            progress.error(f"{position} Failed to get data for: {title} (ID: {external_id})")
            return RecordOutcome.FAILED

        try:
            outcome = await asyncio.to_thread(self._store.upsert, record.key, detail)
        except StoreUnavailableError as exc:
            progress.error(f"{position} Failed to save {title}: {exc}")
            return RecordOutcome.FAILED

        if outcome is UpsertOutcome.MISSING:
            progress.error(f"{position} Record {record.key} no longer exists: {title}")
            return RecordOutcome.FAILED

        progress.info(f"{position} Updated: {title}, score={detail.score}")
        return RecordOutcome.UPDATED
