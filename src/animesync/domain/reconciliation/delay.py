"""Fixed-interval delays between outbound calls."""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from typing import TypeAlias

Sleeper: TypeAlias = Callable[[float], Awaitable[None]]


@dataclass(frozen=True, slots=True)
class FixedDelay:
    """Suspend the caller for a constant interval. No backoff, no jitter."""

    seconds: float
    sleep: Sleeper = field(default=asyncio.sleep, repr=False)

    def __post_init__(self) -> None:
        if self.seconds < 0:
            raise ValueError("Delay must be non-negative")

    async def wait(self) -> None:
        await self.sleep(self.seconds)


@dataclass(frozen=True, slots=True)
class DelayPolicy:
    """The two interval classes used during a run.

    ``between_titles`` spaces the searches for one record's candidate titles,
    ``between_records`` separates one finished record from the next.
    """

    between_titles: FixedDelay
    between_records: FixedDelay

    @classmethod
    def fixed(
        cls,
        *,
        title_seconds: float,
        record_seconds: float,
        sleep: Sleeper = asyncio.sleep,
    ) -> DelayPolicy:
        return cls(
            between_titles=FixedDelay(title_seconds, sleep),
            between_records=FixedDelay(record_seconds, sleep),
        )
