"""Shikimori GraphQL response schemas."""

from __future__ import annotations

import logging
from typing import ClassVar

from pydantic import BaseModel, ConfigDict, Field, field_validator

log = logging.getLogger(__name__)


class ShikimoriBaseModel(BaseModel):
    model_config = ConfigDict(extra="allow", populate_by_name=True)
    _logged_extra_keys: ClassVar[set[str]] = set()

    def model_post_init(self, _context: object, /) -> None:
        extras = self.__pydantic_extra__
        if not extras:
            return
        new_keys = set(extras).difference(self._logged_extra_keys)
        if not new_keys:
            return
        self._logged_extra_keys.update(new_keys)
        log.warning(
            "Shikimori %s: unmodeled keys: %s",
            type(self).__name__,
            ", ".join(sorted(new_keys)),
        )


class _IdentifiedModel(ShikimoriBaseModel):
    id: str

    @field_validator("id", mode="before")
    @classmethod
    def _coerce_id(cls, value: object) -> object:
        if isinstance(value, int):
            return str(value)
        return value


class AnimeSearchHit(_IdentifiedModel):
    name: str | None = None
    russian: str | None = None


class GenrePayload(ShikimoriBaseModel):
    name: str
    russian: str | None = None


class StudioPayload(ShikimoriBaseModel):
    name: str


class ExternalLinkPayload(ShikimoriBaseModel):
    kind: str
    url: str | None = None


class AnimeDetailPayload(_IdentifiedModel):
    score: float | None = None
    episodes: int | None = None
    status: str | None = None
    url: str | None = None
    genres: list[GenrePayload] = Field(default_factory=list["GenrePayload"])
    studios: list[StudioPayload] = Field(default_factory=list["StudioPayload"])
    external_links: list[ExternalLinkPayload] = Field(
        default_factory=list["ExternalLinkPayload"], alias="externalLinks"
    )

    @field_validator("genres", "studios", "external_links", mode="before")
    @classmethod
    def _null_as_empty(cls, value: object) -> object:
        return [] if value is None else value


class GraphQLErrorPayload(ShikimoriBaseModel):
    message: str


class AnimeSearchData(ShikimoriBaseModel):
    animes: list[AnimeSearchHit] | None = None


class AnimeDetailData(ShikimoriBaseModel):
    animes: list[AnimeDetailPayload] | None = None


class GraphQLResponse(ShikimoriBaseModel):
    errors: list[GraphQLErrorPayload] = Field(default_factory=list["GraphQLErrorPayload"])

    def error_message(self) -> str | None:
        if not self.errors:
            return None
        return "; ".join(error.message for error in self.errors)


class AnimeSearchResponse(GraphQLResponse):
    data: AnimeSearchData | None = None


class AnimeDetailResponse(GraphQLResponse):
    data: AnimeDetailData | None = None
