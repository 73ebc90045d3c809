from __future__ import annotations

import typing

from ci_companion.github import api


if typing.TYPE_CHECKING:
    import httpx


async def has_label(
    client: httpx.AsyncClient,
    repository: str,
    pr_number: int,
    label: str,
) -> bool:
    pull = await api.get_pull_request(client, repository, pr_number)
    return any(pr_label.name == label for pr_label in pull.labels)
