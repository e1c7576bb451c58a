from __future__ import annotations

import os
from typing import TYPE_CHECKING

import pytest
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine  # noqa: TC002
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from animesync.adapters.sqlalchemy import SqlAlchemyRecordStore, shutdown, startup
from animesync.adapters.sqlalchemy.migrations import upgrade_head
from tests.helpers.catalog import fixed_clock

os.environ.setdefault("DATABASE_URI", "sqlite+pysqlite:///:memory:")

if TYPE_CHECKING:
    from collections.abc import Iterator

SITE_URL = "https://shikimori.one"


@pytest.fixture
def sqlite_engine() -> Iterator[Engine]:
    # one shared connection, so worker threads see the same in-memory database
    engine = create_engine(
        "sqlite+pysqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    upgrade_head(engine=engine)
    try:
        yield engine
    finally:
        engine.dispose()


@pytest.fixture
def sqlite_session_factory(sqlite_engine: Engine) -> sessionmaker[Session]:
    return sessionmaker(bind=sqlite_engine, expire_on_commit=False)


@pytest.fixture
def sqlite_record_store(sqlite_session_factory: sessionmaker[Session]) -> SqlAlchemyRecordStore:
    return SqlAlchemyRecordStore(sqlite_session_factory, site_url=SITE_URL, clock=fixed_clock)


@pytest.fixture
def started_adapter(sqlite_engine: Engine) -> Iterator[Engine]:
    startup(engine=sqlite_engine, force=True)
    try:
        yield sqlite_engine
    finally:
        shutdown()
