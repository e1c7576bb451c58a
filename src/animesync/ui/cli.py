from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from functools import partial
from pathlib import Path
from signal import SIGINT
from typing import TYPE_CHECKING

import uvicorn
from dotenv import load_dotenv

from animesync.app import build_reconciliation, import_records, run_reconciliation
from animesync.config import configure_logging
from animesync.ui.api import create_app

if TYPE_CHECKING:
    from collections.abc import Sequence

    from animesync.app import ReconciliationService
    from animesync.domain.reconciliation import ReconciliationReport

log = logging.getLogger(__name__)


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Reconcile the anime catalog with Shikimori")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("run", help="Run one reconciliation and print the report")

    serve = subparsers.add_parser("serve", help="Serve the HTTP control API")
    serve.add_argument("--host", type=str, default="127.0.0.1", help="Bind address")
    serve.add_argument("--port", type=int, default=8000, help="Bind port")
    serve.add_argument(
        "--no-scheduler",
        action="store_true",
        help="Do not start the cron-scheduled reconciliation",
    )

    import_ = subparsers.add_parser("import", help="Seed the catalog from a JSON file")
    import_.add_argument("path", type=Path, help="JSON array of {title, title_eng, title_alt}")

    return parser.parse_args(list(argv))


def _request_stop(service: ReconciliationService, loop: asyncio.AbstractEventLoop) -> None:
    """First Ctrl+C stops at the next record; a second one interrupts."""

    if service.controller.request_stop():
        log.info("Closed by user (Ctrl+C), finishing the current record")
    loop.remove_signal_handler(SIGINT)


async def _run_once() -> ReconciliationReport:
    service = build_reconciliation()
    loop = asyncio.get_running_loop()
    try:
        loop.add_signal_handler(SIGINT, partial(_request_stop, service, loop))
    except (NotImplementedError, RuntimeError):
        log.debug("Ctrl+C stop requests unavailable here")
    try:
        return await run_reconciliation(service)
    finally:
        await service.aclose()


def _serve(args: argparse.Namespace) -> None:
    application = create_app(enable_scheduler=not args.no_scheduler)
    uvicorn.run(application, host=args.host, port=args.port, log_config=None)


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    configure_logging()
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    parsed_args = _parse_args(args_list)

    try:
        if parsed_args.command == "run":
            report = asyncio.run(_run_once())
            log.info("Report: %s", report.as_dict())
        elif parsed_args.command == "serve":
            _serve(parsed_args)
        elif parsed_args.command == "import":
            imported = import_records(parsed_args.path)
            log.info("Imported %s records", imported)
        else:
            raise ValueError(f"Unsupported command: {parsed_args.command}")  # noqa: TRY301

    except Exception:
        log.exception("Fatal error")
        sys.exit(1)


def entrypoint() -> None:
    load_dotenv()
    main()


if __name__ == "__main__":
    entrypoint()
