"""Resolve a catalog record to a remote identity by title."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from animesync.domain.ports.metadata import MetadataTransportError

if TYPE_CHECKING:
    from collections.abc import Sequence

    from animesync.domain.model import ExternalIdentity
    from animesync.domain.ports.metadata import TitleSearcher

    from .delay import FixedDelay
    from .progress import ProgressLog


@dataclass(frozen=True, slots=True)
class TitleMatch:
    identity: ExternalIdentity
    title: str
    exact: bool


def normalize_title(value: str) -> str:
    return value.casefold()


def is_exact_match(identity: ExternalIdentity, title: str) -> bool:
    wanted = normalize_title(title)
    return any(normalize_title(name) == wanted for name in identity.names())


def pick_match(title: str, results: Sequence[ExternalIdentity]) -> TitleMatch | None:
    """Choose within one result set: first exact hit, else the first hit."""

    if not results:
        return None
    for identity in results:
        if is_exact_match(identity, title):
            return TitleMatch(identity=identity, title=title, exact=True)
    return TitleMatch(identity=results[0], title=title, exact=False)


class TitleMatcher:
    """Search candidate titles in preference order until one yields results.

    The first title whose search returns anything decides the match, exact or
    not. A later title that would have matched exactly is never searched.
    """

    def __init__(
        self,
        searcher: TitleSearcher,
        *,
        delay: FixedDelay,
        progress: ProgressLog,
    ) -> None:
        self._searcher = searcher
        self._delay = delay
        self._progress = progress

    async def resolve(self, titles: Sequence[str]) -> TitleMatch | None:
        for index, title in enumerate(titles):
            if index:
                await self._delay.wait()

            self._progress.info(f'Searching for "{title}"')
            try:
                results = await self._searcher.search(title)
            except MetadataTransportError as exc:
                self._progress.warning(f'Search failed for "{title}": {exc}')
                continue

            match = pick_match(title, results)
            if match is None:
                self._progress.warning(f'No results for "{title}"')
                continue

            identity = match.identity
            if match.exact:
                self._progress.info(f'Exact match for "{title}" with ID: {identity.id}')
            else:
                self._progress.info(
                    f'No exact match for "{title}", using best guess: '
                    f"{identity.display_name} (ID: {identity.id})"
                )
            return match

        return None
