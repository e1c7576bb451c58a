"""JSON catalog files used to seed the record store."""

from __future__ import annotations

import uuid
from logging import getLogger
from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError

from animesync.domain.model import LocalRecord, candidate_titles

if TYPE_CHECKING:
    from pathlib import Path

log = getLogger(__name__)


class CatalogImportError(RuntimeError):
    """Raised when a catalog file cannot be read or parsed."""


class CatalogEntry(BaseModel):
    """One record of a catalog file; only the titles are required."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    id: uuid.UUID = Field(default_factory=uuid.uuid4)
    title: str | None = None
    title_eng: str | None = Field(default=None, alias="titleEng")
    title_alt: str | None = Field(default=None, alias="titleAlt")

    def to_record(self) -> LocalRecord:
        return LocalRecord(
            key=self.id,
            titles=candidate_titles(self.title, self.title_eng, self.title_alt),
        )


_ENTRIES = TypeAdapter(list[CatalogEntry])


def load_catalog_file(path: Path) -> list[LocalRecord]:
    """Parse a JSON array of catalog entries into fresh local records."""

    try:
        raw = path.read_bytes()
    except OSError as exc:
        raise CatalogImportError(f"Cannot read {path}: {exc}") from exc
    try:
        entries = _ENTRIES.validate_json(raw)
    except ValidationError as exc:
        raise CatalogImportError(f"Invalid catalog file {path}: {exc}") from exc

    records = [entry.to_record() for entry in entries]
    untitled = sum(1 for record in records if not record.has_titles)
    if untitled:
        log.warning("%s of %s catalog entries in %s have no title", untitled, len(records), path)
    return records
