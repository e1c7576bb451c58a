"""Reconciliation job settings."""

from __future__ import annotations

import os
from dataclasses import dataclass

from .env import float_env_var

DEFAULT_TITLE_DELAY_SECONDS = 0.5
DEFAULT_RECORD_DELAY_SECONDS = 1.0
DEFAULT_LOG_STREAM_INTERVAL_SECONDS = 1.0
DEFAULT_SCHEDULE_CRON = "0 0 * * *"


@dataclass(frozen=True, slots=True)
class ReconciliationConfig:
    """Delay intervals and scheduling for the reconciliation job."""

    title_delay_seconds: float = DEFAULT_TITLE_DELAY_SECONDS
    record_delay_seconds: float = DEFAULT_RECORD_DELAY_SECONDS
    log_stream_interval_seconds: float = DEFAULT_LOG_STREAM_INTERVAL_SECONDS
    schedule_cron: str | None = DEFAULT_SCHEDULE_CRON


def get_reconciliation_config() -> ReconciliationConfig:
    return ReconciliationConfig(
        title_delay_seconds=float_env_var(
            "ANIMESYNC_TITLE_DELAY_SECONDS", DEFAULT_TITLE_DELAY_SECONDS
        ),
        record_delay_seconds=float_env_var(
            "ANIMESYNC_RECORD_DELAY_SECONDS", DEFAULT_RECORD_DELAY_SECONDS
        ),
        log_stream_interval_seconds=float_env_var(
            "ANIMESYNC_LOG_STREAM_INTERVAL_SECONDS", DEFAULT_LOG_STREAM_INTERVAL_SECONDS
        ),
        schedule_cron=_schedule_cron(),
    )


def _schedule_cron() -> str | None:
    raw = os.getenv("ANIMESYNC_SCHEDULE_CRON")
    if raw is None:
        return DEFAULT_SCHEDULE_CRON
    # set but blank disables scheduled runs
    return raw.strip() or None
