"""Shared fixtures for Shikimori adapter tests."""

from __future__ import annotations

from typing import TYPE_CHECKING, TypeAlias

import httpx
import pytest

from animesync.adapters.http_resilience import ResilientClient
from animesync.adapters.shikimori import ShikimoriClient
from animesync.config.http_resilience import ResilienceConfig
from animesync.config.shikimori import ShikimoriConfig

if TYPE_CHECKING:
    from collections.abc import Callable

Handler: TypeAlias = "Callable[[httpx.Request], httpx.Response]"


@pytest.fixture
def shikimori_config() -> ShikimoriConfig:
    return ShikimoriConfig(
        site_url="https://shikimori.example",
        resilience=ResilienceConfig(
            name="shikimori",
            base_url="https://shikimori.example",
            retry=None,
            default_headers={"User-Agent": "animesync-tests"},
        ),
    )


@pytest.fixture
def make_client(shikimori_config: ShikimoriConfig) -> Callable[[Handler], ShikimoriClient]:
    def factory(handler: Handler) -> ShikimoriClient:
        return ShikimoriClient(
            config=shikimori_config,
            client_factory=lambda resilience: ResilientClient(
                resilience, transport=httpx.MockTransport(handler)
            ),
        )

    return factory
