from __future__ import annotations

import enum
import typing

import pydantic

from ci_companion import console
from ci_companion import github_types
from ci_companion import utils
from ci_companion.github import api


if typing.TYPE_CHECKING:
    import httpx


class TagVerification(enum.Enum):
    VERIFIED = 0
    UNVERIFIED = 1
    NOT_FOUND = 2

    @property
    def exit_code(self) -> int:
        return self.value


async def _resolve_tag(
    client: httpx.AsyncClient,
    repository: str,
    tag: str,
) -> github_types.GitObject | None:
    try:
        data = await api.get_tag_ref(client, repository, tag)
    except utils.NetworkError as e:
        if e.status == 404:
            return None
        raise

    # A list means no exact match, only refs starting with the tag name
    if not isinstance(data, dict):
        return None

    try:
        return github_types.GitRef.model_validate(data).object
    except pydantic.ValidationError:
        return None


async def verify_tag(
    client: httpx.AsyncClient,
    repository: str,
    tag: str,
) -> TagVerification:
    git_object = await _resolve_tag(client, repository, tag)
    if git_object is None:
        console.log(f"tag {tag} not found in {repository}")
        return TagVerification.NOT_FOUND

    # NOTE: the object URL differs for annotated (git/tags) and lightweight
    # (git/commits) tags, always use the one GitHub gives us
    signed = await api.get_git_object(client, git_object.url)
    if signed.verification is not None and signed.verification.verified:
        console.log(
            f"tag {tag} of {repository} is verified ({git_object.type} {git_object.sha})",
        )
        return TagVerification.VERIFIED

    reason = signed.verification.reason if signed.verification else "unsigned"
    console.log(f"tag {tag} of {repository} is not verified: {reason}")
    return TagVerification.UNVERIFIED
