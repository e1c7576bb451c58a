"""Follow a run's progress log until the run finishes."""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

    from .delay import Sleeper
    from .job import JobRun
    from .progress import ProgressEvent


async def follow_progress(
    run: JobRun | None,
    *,
    interval: float,
    incremental: bool = False,
    sleep: Sleeper = asyncio.sleep,
) -> AsyncIterator[tuple[ProgressEvent, ...]]:
    """Yield the run's log every ``interval`` seconds until it stops running.

    By default every push is the full snapshot. With ``incremental`` each push
    holds only the events appended since the previous one, and empty pushes
    are skipped. The push that observes the finished run is the last one.
    """

    if run is None:
        await sleep(interval)
        yield ()
        return

    cursor = run.log.cursor()
    while True:
        await sleep(interval)
        finished = not run.running
        if incremental:
            batch = cursor.read()
            if batch:
                yield batch
        else:
            yield run.log.snapshot()
        if finished:
            return
