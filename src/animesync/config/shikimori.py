"""Shikimori configuration values."""

from __future__ import annotations

from dataclasses import dataclass

from .env import optional_env_var, require_env_vars
from .http_resilience import RateLimit, ResilienceConfig, RetryPolicy

DEFAULT_SHIKIMORI_BASE_URL = "https://shikimori.one"
SHIKIMORI_GRAPHQL_PATH = "/api/graphql"
SHIKIMORI_TIMEOUT_SECONDS = 20.0


@dataclass(frozen=True, slots=True)
class ShikimoriConfig:
    site_url: str
    resilience: ResilienceConfig

    @property
    def graphql_path(self) -> str:
        return SHIKIMORI_GRAPHQL_PATH


def get_shikimori_site_url() -> str:
    """Site root used to absolutise stored URLs; needs no credentials."""

    return (optional_env_var("SHIKIMORI_BASE_URL") or DEFAULT_SHIKIMORI_BASE_URL).rstrip("/")


def get_shikimori_config(*, resilience: ResilienceConfig | None = None) -> ShikimoriConfig:
    values = require_env_vars(("SHIKIMORI_APP_NAME",))
    site_url = get_shikimori_site_url()
    token = optional_env_var("SHIKIMORI_TOKEN")

    headers = {
        "User-Agent": values["SHIKIMORI_APP_NAME"],
        "Content-Type": "application/json",
    }
    if token is not None:
        headers["Authorization"] = f"Bearer {token}"

    return ShikimoriConfig(
        site_url=site_url,
        resilience=resilience
        or ResilienceConfig(
            name="shikimori",
            base_url=site_url,
            timeout_seconds=SHIKIMORI_TIMEOUT_SECONDS,
            # documented limit: 5 requests per second, 90 per minute
            ratelimit=RateLimit(max_calls=5, per_seconds=1.0),
            retry=RetryPolicy(total=2),
            default_headers=headers,
        ),
    )
