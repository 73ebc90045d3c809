from __future__ import annotations

import re

from ci_companion import utils


PULL_REQUEST_REFERENCE_RE = re.compile(r"\(#[0-9]+\)")

DEFAULT_RUNTIME_PREFIXES = ("frame/", "primitives/")


async def sanitised_git_logs(from_ref: str, to_ref: str) -> list[str]:
    """Commit subjects between two refs that reference a pull request, as a markdown list."""
    output = await utils.git(
        "--no-pager",
        "log",
        "--pretty=format:%s",
        f"{from_ref}...{to_ref}",
    )
    return [
        f"* {line.removeprefix('* ')}"
        for line in output.splitlines()
        if PULL_REQUEST_REFERENCE_RE.search(line)
    ]


async def has_changes(
    from_ref: str,
    to_ref: str,
    prefixes: tuple[str, ...] = DEFAULT_RUNTIME_PREFIXES,
) -> bool:
    output = await utils.git("diff", "--name-only", f"{from_ref}...{to_ref}")
    return any(path.startswith(prefixes) for path in output.splitlines())
