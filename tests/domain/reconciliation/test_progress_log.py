from __future__ import annotations

import logging

import pytest

from animesync.domain.model import LogLevel
from animesync.domain.reconciliation import ProgressLog
from tests.helpers.catalog import FIXED_NOW, fixed_clock


def test_entries_keep_append_order_and_serialise() -> None:
    progress = ProgressLog(clock=fixed_clock)
    progress.info("first")
    progress.warning("second")
    progress.error("third")

    assert [event.level for event in progress.snapshot()] == [
        LogLevel.INFO,
        LogLevel.WARNING,
        LogLevel.ERROR,
    ]
    assert progress.snapshot()[1].as_dict() == {
        "message": "second",
        "level": "warning",
        "timestamp": FIXED_NOW.isoformat(),
    }


def test_snapshot_is_not_affected_by_later_appends() -> None:
    progress = ProgressLog()
    progress.info("one")
    snapshot = progress.snapshot()
    progress.info("two")

    assert len(snapshot) == 1
    assert len(progress) == 2


def test_cursors_read_independently() -> None:
    progress = ProgressLog()
    fast = progress.cursor()
    slow = progress.cursor()

    progress.info("a")
    assert [event.message for event in fast.read()] == ["a"]
    progress.info("b")
    assert [event.message for event in fast.read()] == ["b"]
    assert fast.read() == ()

    assert [event.message for event in slow.read()] == ["a", "b"]
    assert slow.position == 2


def test_since_rejects_negative_positions() -> None:
    with pytest.raises(ValueError, match="non-negative"):
        ProgressLog().since(-1)


def test_appends_are_mirrored_to_the_logger(caplog: pytest.LogCaptureFixture) -> None:
    progress = ProgressLog()

    with caplog.at_level(logging.INFO, logger="animesync.domain.reconciliation.progress"):
        progress.warning("No results")

    assert caplog.records[-1].levelno == logging.WARNING
    assert caplog.records[-1].getMessage() == "No results"
