"""Shikimori GraphQL client."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING, TypeVar

import httpx
from pydantic import ValidationError

from animesync.adapters.http_resilience import ResilientClient
from animesync.domain.ports.metadata import MetadataTransportError

from .schema import AnimeDetailResponse, AnimeSearchResponse, GraphQLResponse
from .translator import translate_detail, translate_search_hit

if TYPE_CHECKING:
    from collections.abc import Callable
    from types import TracebackType

    from animesync.config.http_resilience import ResilienceConfig
    from animesync.config.shikimori import ShikimoriConfig
    from animesync.domain.model import ExternalDetail, ExternalId, ExternalIdentity

log = getLogger(__name__)

TResponse = TypeVar("TResponse", bound=GraphQLResponse)

SEARCH_QUERY = """
query ($search: String) {
  animes(search: $search, limit: 5) {
    id
    name
    russian
  }
}
"""

DETAIL_QUERY = """
query ($ids: String) {
  animes(ids: $ids, limit: 1) {
    id
    score
    episodes
    status
    url
    genres { name russian }
    studios { name }
    externalLinks { kind url }
  }
}
"""


class ShikimoriAPIError(MetadataTransportError):
    """Raised when Shikimori cannot be reached or answers with an error."""


class ShikimoriClient:
    """Search and detail lookups over Shikimori's single GraphQL endpoint.

    One underlying HTTP client (and so one rate limiter) is shared by every
    call until :meth:`aclose`.
    """

    def __init__(
        self,
        *,
        config: ShikimoriConfig,
        client_factory: Callable[[ResilienceConfig], ResilientClient] | None = None,
    ) -> None:
        self._config = config
        self._client_factory = client_factory or ResilientClient
        self._client: ResilientClient | None = None

    async def __aenter__(self) -> ShikimoriClient:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def search(self, title: str) -> list[ExternalIdentity]:
        response = await self._execute(
            SEARCH_QUERY,
            {"search": title},
            AnimeSearchResponse,
        )
        if response.data is None or response.data.animes is None:
            raise ShikimoriAPIError(f'Search for "{title}" returned no data')
        return [translate_search_hit(hit) for hit in response.data.animes]

    async def fetch_detail(self, external_id: ExternalId) -> ExternalDetail | None:
        response = await self._execute(DETAIL_QUERY, {"ids": external_id}, AnimeDetailResponse)
        animes = response.data.animes if response.data is not None else None
        if not animes:
            log.debug("Shikimori returned no anime for ID %s", external_id)
            return None
        return translate_detail(animes[0])

    async def _execute(
        self,
        query: str,
        variables: dict[str, object],
        response_model: type[TResponse],
    ) -> TResponse:
        client = self._http()
        try:
            response = await client.post(
                self._config.graphql_path,
                json={"query": query, "variables": variables},
            )
            response.raise_for_status()
            payload = response.json()
        except httpx.HTTPError as exc:
            raise ShikimoriAPIError(f"Shikimori request failed: {exc}") from exc
        except ValueError as exc:
            raise ShikimoriAPIError("Shikimori returned a non-JSON response") from exc

        if not isinstance(payload, dict):
            raise ShikimoriAPIError("Unexpected Shikimori response payload")

        try:
            parsed = response_model.model_validate(payload)
        except ValidationError as exc:
            raise ShikimoriAPIError(f"Malformed Shikimori response: {exc}") from exc

        message = parsed.error_message()
        if message is not None:
            raise ShikimoriAPIError(f"Shikimori GraphQL error: {message}")
        return parsed

    def _http(self) -> ResilientClient:
        if self._client is None:
            self._client = self._client_factory(self._config.resilience)
        return self._client
