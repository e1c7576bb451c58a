from __future__ import annotations

from typing import TYPE_CHECKING

import pytest
from sqlalchemy import create_engine, inspect

from animesync.adapters.sqlalchemy import (
    StartupError,
    configured_engine,
    is_started,
    record_store,
    shutdown,
    startup,
)

if TYPE_CHECKING:
    from collections.abc import Iterator


@pytest.fixture(autouse=True)
def reset_adapter_state() -> Iterator[None]:
    shutdown()
    yield
    shutdown()


def test_record_store_requires_startup() -> None:
    with pytest.raises(StartupError):
        record_store(site_url="https://shikimori.one")


def test_startup_requires_force_for_reconfiguration() -> None:
    engine_a = create_engine("sqlite+pysqlite:///:memory:")
    engine_b = create_engine("sqlite+pysqlite:///:memory:")

    startup(engine=engine_a)

    with pytest.raises(StartupError):
        startup(engine=engine_b)

    startup(engine=engine_b, force=True)
    assert configured_engine() is engine_b


def test_startup_applies_migrations() -> None:
    engine = create_engine("sqlite+pysqlite:///:memory:")

    startup(engine=engine)

    assert is_started()
    assert "anime_record" in inspect(engine).get_table_names()
    assert record_store(site_url="https://shikimori.one").enumerate_all() == ()


def test_shutdown_resets_state() -> None:
    startup(engine=create_engine("sqlite+pysqlite:///:memory:"))
    shutdown()

    assert configured_engine() is None
    assert not is_started()
