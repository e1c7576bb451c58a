"""SQLAlchemy table metadata for the anime catalog."""

from __future__ import annotations

import uuid
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any, cast

from sqlalchemy import (
    JSON,
    Column,
    DateTime,
    Dialect,
    Enum,
    Float,
    Integer,
    MetaData,
    String,
    Table,
    TypeDecorator,
    Uuid,
)

from animesync.domain.model import AnimeStatus, ExternalLink, Genre

if TYPE_CHECKING:
    from collections.abc import Iterable

UUIDColumnType = Uuid[uuid.UUID]


class UTCDateTime(TypeDecorator[datetime]):
    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(self, value: datetime | None, dialect: Dialect) -> datetime | None:
        _ = dialect
        if value is None:
            return None
        if value.tzinfo is None:
            value = value.replace(tzinfo=UTC)
        return value.astimezone(UTC)

    def process_result_value(self, value: datetime | None, dialect: Dialect) -> datetime | None:
        _ = dialect
        if value is None:
            return None
        return value if value.tzinfo else value.replace(tzinfo=UTC)


metadata = MetaData(
    naming_convention={
        "ix": "ix_%(column_0_label)s",
        "uq": "uq_%(table_name)s_%(column_0_label)s",
        "ck": "ck_%(table_name)s_%(constraint_name)s",
        "fk": "fk_%(table_name)s_%(column_0_label)s_%(referred_table_name)s",
        "pk": "pk_%(table_name)s",
    }
)

anime_record_table = Table(
    "anime_record",
    metadata,
    Column("id", UUIDColumnType, primary_key=True, default=uuid.uuid4),
    Column("title", String, nullable=True),
    Column("title_eng", String, nullable=True),
    Column("title_alt", String, nullable=True),
    Column("score", Float, nullable=True),
    Column("episodes", Integer, nullable=True),
    Column("status", Enum(AnimeStatus, native_enum=False), nullable=True),
    Column("url", String, nullable=True),
    Column("genres", JSON, nullable=True),
    Column("studios", JSON, nullable=True),
    Column("external_links", JSON, nullable=True),
    Column("updated_at", UTCDateTime(), nullable=True),
)


# JSON column codecs ----------------------------------------------------------


def dump_genres(genres: Iterable[Genre]) -> list[dict[str, str | None]]:
    return [{"name": genre.name, "localized_name": genre.localized_name} for genre in genres]


def load_genres(value: object) -> tuple[Genre, ...]:
    if not isinstance(value, list):
        return ()
    genres: list[Genre] = []
    for item in cast(list[Any], value):
        if isinstance(item, dict) and item.get("name"):
            entry = cast(dict[str, Any], item)
            genres.append(
                Genre(name=str(entry["name"]), localized_name=entry.get("localized_name"))
            )
    return tuple(genres)


def load_studios(value: object) -> tuple[str, ...]:
    if not isinstance(value, list):
        return ()
    return tuple(str(item) for item in cast(list[Any], value) if item)


def dump_external_links(links: Iterable[ExternalLink]) -> list[dict[str, str | None]]:
    return [{"kind": link.kind, "url": link.url} for link in links]


def load_external_links(value: object) -> tuple[ExternalLink, ...]:
    if not isinstance(value, list):
        return ()
    links: list[ExternalLink] = []
    for item in cast(list[Any], value):
        if isinstance(item, dict) and item.get("kind"):
            entry = cast(dict[str, Any], item)
            links.append(ExternalLink(kind=str(entry["kind"]), url=entry.get("url")))
    return tuple(links)
