"""HTTP control surface for the reconciliation job."""

from __future__ import annotations

import asyncio
import json
from contextlib import asynccontextmanager
from datetime import UTC, datetime
from logging import getLogger
from typing import TYPE_CHECKING

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.cron import CronTrigger
from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse, StreamingResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from animesync.app import build_reconciliation
from animesync.domain.ports.catalog import StoreUnavailableError
from animesync.domain.reconciliation import AlreadyRunningError, follow_progress

if TYPE_CHECKING:
    from collections.abc import AsyncIterator, Callable

    from animesync.app import ReconciliationService
    from animesync.domain.reconciliation import ReconciliationController, ReconciliationReport

log = getLogger(__name__)

SCHEDULED_JOB_ID = "scheduled_reconciliation"


def _service(request: Request) -> ReconciliationService:
    return request.app.state.service


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def _started_at(controller: ReconciliationController) -> str | None:
    run = controller.current_run
    return run.started_at.isoformat() if run is not None else None


async def run_scheduled(controller: ReconciliationController) -> None:
    """Cron tick: start a run unless one is already in progress."""

    if controller.is_running:
        log.warning("Scheduled reconciliation skipped, a run is already in progress")
        return
    try:
        report = await controller.start()
    except AlreadyRunningError:
        log.warning("Scheduled reconciliation skipped, a run is already in progress")
        return
    log.info("Scheduled reconciliation finished: %s", report.message)


def build_scheduler(controller: ReconciliationController, cron: str) -> AsyncIOScheduler:
    """Return a configured but not yet started scheduler."""

    scheduler = AsyncIOScheduler(timezone=UTC)
    scheduler.add_job(
        run_scheduled,
        trigger=CronTrigger.from_crontab(cron, timezone=UTC),
        args=(controller,),
        id=SCHEDULED_JOB_ID,
        name="Scheduled catalog reconciliation",
        max_instances=1,
        coalesce=True,
        replace_existing=True,
    )
    return scheduler


def _log_background_failure(task: asyncio.Task[ReconciliationReport]) -> None:
    if task.cancelled():
        log.warning("Background reconciliation was cancelled")
        return
    exc = task.exception()
    if exc is not None:
        log.error("Background reconciliation failed: %s", exc, exc_info=exc)


def create_app(
    service_factory: Callable[[], ReconciliationService] = build_reconciliation,
    *,
    enable_scheduler: bool = True,
) -> FastAPI:
    """Create the FastAPI application around one reconciliation service."""

    @asynccontextmanager
    async def lifespan(application: FastAPI) -> AsyncIterator[None]:
        service = service_factory()
        application.state.service = service
        application.state.background = set()

        scheduler: AsyncIOScheduler | None = None
        cron = service.config.schedule_cron
        if enable_scheduler and cron:
            scheduler = build_scheduler(service.controller, cron)
            scheduler.start()
            log.info("Scheduler started, reconciliation cron: %s", cron)
        try:
            yield
        finally:
            if scheduler is not None:
                scheduler.shutdown(wait=False)
                log.info("Scheduler shut down")
            await service.aclose()

    application = FastAPI(title="animesync", lifespan=lifespan)

    @application.exception_handler(StarletteHTTPException)
    async def _http_error(_request: Request, exc: StarletteHTTPException) -> JSONResponse:
        response = _error(exc.status_code, str(exc.detail))
        if exc.headers:
            response.headers.update(exc.headers)
        return response

    @application.exception_handler(AlreadyRunningError)
    async def _already_running(_request: Request, exc: AlreadyRunningError) -> JSONResponse:
        return _error(status.HTTP_409_CONFLICT, str(exc))

    @application.exception_handler(StoreUnavailableError)
    async def _store_unavailable(_request: Request, exc: StoreUnavailableError) -> JSONResponse:
        log.error("Record store unavailable: %s", exc)
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, str(exc))

    @application.exception_handler(Exception)
    async def _unexpected(_request: Request, exc: Exception) -> JSONResponse:
        log.exception("Unhandled error while serving a request", exc_info=exc)
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, str(exc))

    @application.api_route("/update-ratings", methods=["GET", "POST"])
    async def update_ratings(request: Request, mode: str | None = None) -> JSONResponse:
        controller = _service(request).controller
        if mode == "background":
            task = controller.launch()
            background: set[asyncio.Task[ReconciliationReport]] = request.app.state.background
            background.add(task)
            task.add_done_callback(background.discard)
            task.add_done_callback(_log_background_failure)
            return JSONResponse(
                status_code=status.HTTP_202_ACCEPTED,
                content={
                    "message": "Update started",
                    "running": True,
                    "startedAt": _started_at(controller),
                },
            )

        report = await controller.start()
        return JSONResponse(content=report.as_dict())

    @application.api_route("/update-ratings/stop", methods=["GET", "POST"])
    async def stop_update(request: Request) -> dict[str, str | bool]:
        stopped = _service(request).controller.request_stop()
        return {"message": "Stop signal sent", "running": stopped}

    @application.get("/update-ratings/logs")
    async def stream_logs(request: Request, incremental: bool = False) -> StreamingResponse:
        service = _service(request)

        async def events() -> AsyncIterator[str]:
            async for batch in follow_progress(
                service.controller.current_run,
                interval=service.config.log_stream_interval_seconds,
                incremental=incremental,
            ):
                payload = json.dumps([event.as_dict() for event in batch], ensure_ascii=False)
                yield f"data: {payload}\n\n"

        return StreamingResponse(
            events(),
            media_type="text/event-stream",
            headers={"Cache-Control": "no-cache", "Connection": "keep-alive"},
        )

    @application.get("/health")
    async def health() -> dict[str, str]:
        return {
            "status": "ok",
            "timestamp": datetime.now(UTC).isoformat(),
            "message": "Server is running",
        }

    return application
