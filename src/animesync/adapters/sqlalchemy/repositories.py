"""Record store backed by SQLAlchemy sessions."""

from __future__ import annotations

import logging
from datetime import UTC, datetime
from typing import TYPE_CHECKING, cast

from sqlalchemy import insert, select, update
from sqlalchemy.exc import SQLAlchemyError

from animesync.adapters.sqlalchemy.mappings import (
    anime_record_table,
    dump_external_links,
    dump_genres,
    load_external_links,
    load_genres,
    load_studios,
)
from animesync.domain.model import AnimeStatus, LocalRecord, UpsertOutcome, candidate_titles
from animesync.domain.ports.catalog import StoreUnavailableError

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable, Sequence

    from sqlalchemy.engine import CursorResult, Row
    from sqlalchemy.orm import Session, sessionmaker

    from animesync.domain.model import ExternalDetail, RecordKey

log = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(UTC)


class SqlAlchemyRecordStore:
    """``RecordStore`` over the ``anime_record`` table.

    Every call runs in its own short transaction, so a failed upsert never
    poisons the next one.
    """

    def __init__(
        self,
        session_factory: sessionmaker[Session],
        *,
        site_url: str,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self.session_factory = session_factory
        self._site_url = site_url
        self._clock = clock

    def enumerate_all(self) -> Sequence[LocalRecord]:
        stmt = select(anime_record_table).order_by(
            anime_record_table.c.title, anime_record_table.c.id
        )
        try:
            with self.session_factory() as session:
                rows = session.execute(stmt).all()
        except SQLAlchemyError as exc:
            raise StoreUnavailableError(f"Cannot read the catalog: {exc}") from exc
        return tuple(_to_record(row) for row in rows)

    def upsert(self, key: RecordKey, detail: ExternalDetail) -> UpsertOutcome:
        stmt = (
            update(anime_record_table)
            .where(anime_record_table.c.id == key)
            .values(
                score=detail.score,
                episodes=detail.episodes,
                status=detail.status,
                url=detail.canonical_url(self._site_url),
                genres=dump_genres(detail.genres),
                studios=list(detail.studios),
                external_links=dump_external_links(detail.external_links),
                updated_at=self._clock(),
            )
        )
        try:
            with self.session_factory() as session, session.begin():
                result = cast("CursorResult[tuple[()]]", session.execute(stmt))
                matched = result.rowcount
        except SQLAlchemyError as exc:
            raise StoreUnavailableError(f"Cannot update record {key}: {exc}") from exc

        if matched == 0:
            log.warning("Record %s vanished before it could be updated", key)
            return UpsertOutcome.MISSING
        return UpsertOutcome.APPLIED

    def add_all(self, records: Iterable[LocalRecord]) -> int:
        """Insert new catalog records and return how many were written."""

        values = [_to_row(record) for record in records]
        if not values:
            return 0
        try:
            with self.session_factory() as session, session.begin():
                session.execute(insert(anime_record_table), values)
        except SQLAlchemyError as exc:
            raise StoreUnavailableError(f"Cannot import records: {exc}") from exc
        return len(values)


def _to_record(row: Row[tuple[object, ...]]) -> LocalRecord:
    data = row._mapping  # noqa: SLF001
    status = data["status"]
    return LocalRecord(
        key=data["id"],
        titles=candidate_titles(data["title"], data["title_eng"], data["title_alt"]),
        score=data["score"],
        episodes=data["episodes"],
        status=AnimeStatus(status) if status is not None else None,
        url=data["url"],
        genres=load_genres(data["genres"]),
        studios=load_studios(data["studios"]),
        external_links=load_external_links(data["external_links"]),
        updated_at=data["updated_at"],
    )


def _to_row(record: LocalRecord) -> dict[str, object]:
    titles = [*record.titles, None, None, None]
    return {
        "id": record.key,
        "title": titles[0],
        "title_eng": titles[1],
        "title_alt": titles[2],
        "score": record.score,
        "episodes": record.episodes,
        "status": record.status,
        "url": record.url,
        "genres": dump_genres(record.genres),
        "studios": list(record.studios),
        "external_links": dump_external_links(record.external_links),
        "updated_at": record.updated_at,
    }
