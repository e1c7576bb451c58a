"""Ports for the external metadata service."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Sequence

    from animesync.domain.model import ExternalDetail, ExternalId, ExternalIdentity


class MetadataTransportError(RuntimeError):
    """Raised when a call to the metadata service fails in transit."""


@runtime_checkable
class TitleSearcher(Protocol):
    async def search(self, title: str) -> Sequence[ExternalIdentity]:
        """Return the hits for ``title`` in service order; may be empty."""
        ...


@runtime_checkable
class DetailSource(Protocol):
    async def fetch_detail(self, external_id: ExternalId) -> ExternalDetail | None:
        """Return the detail bundle, or ``None`` when the service has none."""
        ...


@runtime_checkable
class MetadataService(TitleSearcher, DetailSource, Protocol):
    """Both halves of the metadata service, as exposed by a single adapter."""
