"""Fetch the attribute bundle for a resolved identity."""

from __future__ import annotations

from typing import TYPE_CHECKING

from animesync.domain.ports.metadata import MetadataTransportError

if TYPE_CHECKING:
    from animesync.domain.model import ExternalDetail, ExternalId
    from animesync.domain.ports.metadata import DetailSource

    from .progress import ProgressLog


class DetailFetcher:
    """Wrap a :class:`DetailSource` so every failure reads as "no detail".

    An identifier that no longer resolves and a transport error are reported
    the same way; neither is retried within a run.
    """

    def __init__(self, source: DetailSource, *, progress: ProgressLog) -> None:
        self._source = source
        self._progress = progress

    async def fetch(self, external_id: ExternalId) -> ExternalDetail | None:
        self._progress.info(f"Fetching details for ID: {external_id}")
        try:
            detail = await self._source.fetch_detail(external_id)
        except MetadataTransportError as exc:
            self._progress.error(f"Detail request failed for ID {external_id}: {exc}")
            return None

        if detail is None:
            self._progress.error(f"No data returned for ID: {external_id}")
            return None

        self._progress.info(
            f"Fetched ID {external_id}: score={detail.score}, episodes={detail.episodes}"
        )
        return detail
