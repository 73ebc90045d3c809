from __future__ import annotations

import typing

from ci_companion import console
from ci_companion import utils


if typing.TYPE_CHECKING:
    from ci_companion.companion import resolver


def local_branch(ref: resolver.PullRequestRef) -> str:
    return f"pr/{ref.number}"


async def checkout(ref: resolver.PullRequestRef, remote: str = "origin") -> str:
    """Fetch the head of the companion pull request and check it out.

    `remote` must point to the companion repository. Returns the local branch name.
    """
    branch = local_branch(ref)
    console.log(f"fetching {ref} head from {remote} into {branch}")
    await utils.git(
        "fetch",
        "--depth",
        "1",
        remote,
        f"refs/pull/{ref.number}/head:{branch}",
    )
    await utils.git("checkout", branch)
    return branch
