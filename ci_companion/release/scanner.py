from __future__ import annotations

import dataclasses
import typing

from ci_companion.github import api


if typing.TYPE_CHECKING:
    from collections import abc

    import httpx


# GitHub's /releases/latest ignores prereleases, so the list has to be scanned
DEFAULT_MAX_PAGES = 3
DEFAULT_PER_PAGE = 30

T = typing.TypeVar("T")


@dataclasses.dataclass(frozen=True)
class ReleaseEntry:
    tag_name: str
    draft: bool
    index: int


async def afirst(
    iterable: abc.AsyncIterable[T],
    predicate: abc.Callable[[T], bool],
) -> T | None:
    async for item in iterable:
        if predicate(item):
            return item
    return None


async def iter_releases(
    client: httpx.AsyncClient,
    repository: str,
    *,
    max_pages: int,
    per_page: int = DEFAULT_PER_PAGE,
) -> abc.AsyncIterator[ReleaseEntry]:
    """Yield releases newest first, as delivered by GitHub, fetching at most `max_pages` pages."""
    if max_pages < 1:
        msg = f"max_pages must be a positive integer, got {max_pages}"
        raise ValueError(msg)

    index = 0
    for page in range(1, max_pages + 1):
        releases = await api.list_releases(
            client,
            repository,
            page=page,
            per_page=per_page,
        )
        if not releases:
            return
        for release in releases:
            yield ReleaseEntry(
                tag_name=release.tag_name,
                draft=release.draft,
                index=index,
            )
            index += 1


async def latest_published(
    client: httpx.AsyncClient,
    repository: str,
    *,
    max_pages: int = DEFAULT_MAX_PAGES,
    per_page: int = DEFAULT_PER_PAGE,
) -> ReleaseEntry | None:
    releases = iter_releases(
        client,
        repository,
        max_pages=max_pages,
        per_page=per_page,
    )
    try:
        return await afirst(releases, lambda release: not release.draft)
    finally:
        await releases.aclose()
