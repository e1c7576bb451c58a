from __future__ import annotations

import asyncio

import pytest

from animesync.domain.reconciliation import DelayPolicy, FixedDelay
from tests.helpers.catalog import RecordingSleeper


def test_fixed_delay_always_waits_the_same_interval() -> None:
    sleeper = RecordingSleeper()
    delay = FixedDelay(0.5, sleeper)

    async def twice() -> None:
        await delay.wait()
        await delay.wait()

    asyncio.run(twice())

    assert sleeper.calls == [0.5, 0.5]


def test_negative_delay_is_rejected() -> None:
    with pytest.raises(ValueError, match="non-negative"):
        FixedDelay(-0.1)


def test_policy_builds_both_interval_classes() -> None:
    sleeper = RecordingSleeper()
    policy = DelayPolicy.fixed(title_seconds=0.5, record_seconds=1.0, sleep=sleeper)

    asyncio.run(policy.between_records.wait())
    asyncio.run(policy.between_titles.wait())

    assert sleeper.calls == [1.0, 0.5]
