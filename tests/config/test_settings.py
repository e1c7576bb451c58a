from __future__ import annotations

from pathlib import Path

import pytest

from animesync.config import (
    MissingConfigurationError,
    ReconciliationConfig,
    get_database_config,
    get_reconciliation_config,
    get_shikimori_config,
    get_storage_config,
)


def test_shikimori_config_requires_app_name(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("SHIKIMORI_APP_NAME", raising=False)

    with pytest.raises(MissingConfigurationError):
        get_shikimori_config()


def test_shikimori_config_builds_headers_and_limits(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SHIKIMORI_APP_NAME", "animesync-tests")
    monkeypatch.setenv("SHIKIMORI_TOKEN", "secret")
    monkeypatch.setenv("SHIKIMORI_BASE_URL", "https://shikimori.example/")

    config = get_shikimori_config()

    assert config.site_url == "https://shikimori.example"
    assert config.graphql_path == "/api/graphql"
    headers = config.resilience.default_headers
    assert headers is not None
    assert headers["User-Agent"] == "animesync-tests"
    assert headers["Authorization"] == "Bearer secret"
    assert config.resilience.ratelimit is not None
    assert config.resilience.ratelimit.max_calls == 5


def test_shikimori_config_without_token(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SHIKIMORI_APP_NAME", "animesync-tests")
    monkeypatch.delenv("SHIKIMORI_TOKEN", raising=False)
    monkeypatch.delenv("SHIKIMORI_BASE_URL", raising=False)

    config = get_shikimori_config()

    assert config.site_url == "https://shikimori.one"
    assert config.resilience.default_headers is not None
    assert "Authorization" not in config.resilience.default_headers


def test_reconciliation_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in (
        "ANIMESYNC_TITLE_DELAY_SECONDS",
        "ANIMESYNC_RECORD_DELAY_SECONDS",
        "ANIMESYNC_LOG_STREAM_INTERVAL_SECONDS",
        "ANIMESYNC_SCHEDULE_CRON",
    ):
        monkeypatch.delenv(name, raising=False)

    assert get_reconciliation_config() == ReconciliationConfig()
    assert ReconciliationConfig().schedule_cron == "0 0 * * *"


def test_reconciliation_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ANIMESYNC_TITLE_DELAY_SECONDS", "0")
    monkeypatch.setenv("ANIMESYNC_RECORD_DELAY_SECONDS", "2.5")
    monkeypatch.setenv("ANIMESYNC_SCHEDULE_CRON", "")

    config = get_reconciliation_config()

    assert config.title_delay_seconds == 0.0
    assert config.record_delay_seconds == 2.5
    assert config.schedule_cron is None


def test_database_uri_prefers_environment(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path
) -> None:
    monkeypatch.setenv("DATABASE_URI", "sqlite+pysqlite:///:memory:")
    assert get_database_config().uri == "sqlite+pysqlite:///:memory:"

    monkeypatch.delenv("DATABASE_URI")
    monkeypatch.setenv("ANIMESYNC_DATA_DIR", str(tmp_path))
    assert get_storage_config().data_dir == tmp_path
    assert get_database_config().uri == f"sqlite+pysqlite:///{tmp_path.resolve() / 'animesync.db'}"
