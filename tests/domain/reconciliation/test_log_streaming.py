from __future__ import annotations

import asyncio

from animesync.domain.reconciliation import JobRun, JobSlot, ProgressEvent, follow_progress


async def _collect(run: JobRun | None, *, sleep, incremental: bool = False) -> list[list[str]]:
    batches: list[list[str]] = []
    async for batch in follow_progress(run, interval=1.0, incremental=incremental, sleep=sleep):
        batches.append([event.message for event in batch])
    return batches


def _script(slot: JobSlot, run: JobRun, steps: list[str | None]):
    """Sleeper that appends one message per tick; ``None`` finishes the run."""

    async def sleep(seconds: float) -> None:
        assert seconds == 1.0
        step = steps.pop(0)
        if step is None:
            slot.release(run)
        else:
            run.log.info(step)

    return sleep


def test_without_a_run_pushes_once_and_ends() -> None:
    ticks: list[float] = []

    async def sleep(seconds: float) -> None:
        ticks.append(seconds)

    assert asyncio.run(_collect(None, sleep=sleep)) == [[]]
    assert ticks == [1.0]


def test_full_snapshots_until_the_run_finishes() -> None:
    slot = JobSlot()
    run = slot.claim()
    sleep = _script(slot, run, ["a", "b", None])

    batches = asyncio.run(_collect(run, sleep=sleep))

    assert batches == [["a"], ["a", "b"], ["a", "b"]]


def test_incremental_pushes_only_new_entries() -> None:
    slot = JobSlot()
    run = slot.claim()
    run.log.info("before")
    sleep = _script(slot, run, ["a", "b", None])

    batches = asyncio.run(_collect(run, sleep=sleep, incremental=True))

    assert batches == [["before", "a"], ["b"]]


def test_finished_run_is_streamed_once() -> None:
    slot = JobSlot()
    run = slot.claim()
    run.log.info("done")
    slot.release(run)

    async def sleep(_seconds: float) -> None:
        return None

    batches = asyncio.run(_collect(run, sleep=sleep))

    assert batches == [["done"]]
    assert isinstance(run.log.snapshot()[0], ProgressEvent)
