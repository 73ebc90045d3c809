from __future__ import annotations

import re
import typing

import pydantic

from ci_companion import console
from ci_companion.companion import extract as extract_mod
from ci_companion.github import api


if typing.TYPE_CHECKING:
    import httpx


DEFAULT_GITHUB_URL = "https://github.com"

REPOSITORY_PATTERN = r"^[\w.-]+/[\w.-]+$"


class PullRequestRef(pydantic.BaseModel):
    model_config = pydantic.ConfigDict(frozen=True)

    repository: typing.Annotated[str, pydantic.Field(pattern=REPOSITORY_PATTERN)]
    number: pydantic.PositiveInt

    def __str__(self) -> str:
        return f"{self.repository}#{self.number}"


def companion_rules(
    companion_repo: str,
    github_url: str = DEFAULT_GITHUB_URL,
) -> list[extract_mod.ExtractionRule]:
    repo = re.escape(companion_repo)
    pull_url = rf"{re.escape(github_url.rstrip('/'))}/{repo}/pull/"
    return [
        # companion: owner/repo#123, companion: https://github.com/owner/repo/pull/123
        extract_mod.ExtractionRule(
            pattern=re.compile(rf"[Cc]ompanion:\s*(?:{repo}#|{pull_url})([0-9]+)"),
            priority=0,
        ),
        extract_mod.ExtractionRule(
            pattern=re.compile(rf"{pull_url}([0-9]+)"),
            priority=1,
        ),
    ]


async def resolve(
    client: httpx.AsyncClient,
    origin_repo: str,
    pr_number: int,
    companion_repo: str,
    github_url: str = DEFAULT_GITHUB_URL,
) -> PullRequestRef | None:
    pull = await api.get_pull_request(client, origin_repo, pr_number)

    number = extract_mod.extract(
        pull.body or "",
        companion_rules(companion_repo, github_url),
    )
    if number is None:
        console.log(
            f"no companion pull request found for {origin_repo}#{pr_number} in {companion_repo}",
        )
        return None

    ref = PullRequestRef(repository=companion_repo, number=int(number))
    console.log(
        f"companion pull request found for {origin_repo}#{pr_number}: [b]{ref}[/]",
    )
    return ref
