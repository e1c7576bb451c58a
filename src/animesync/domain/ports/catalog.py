"""Ports for reading and updating the local catalog."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Sequence

    from animesync.domain.model import ExternalDetail, LocalRecord, RecordKey, UpsertOutcome


class StoreUnavailableError(RuntimeError):
    """Raised when the record store cannot be reached."""


@runtime_checkable
class RecordStore(Protocol):
    """Catalog persistence contract used by the reconciliation job."""

    def enumerate_all(self) -> Sequence[LocalRecord]:
        """Return an immutable snapshot of every record, in a stable order."""
        ...

    def upsert(self, key: RecordKey, detail: ExternalDetail) -> UpsertOutcome:
        """Overwrite the reconciled fields of ``key`` and stamp the update time.

        Returns ``UpsertOutcome.MISSING`` when the key no longer exists.
        """
        ...
