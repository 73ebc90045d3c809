from __future__ import annotations

import sys

import click

from ci_companion import console
from ci_companion import options
from ci_companion import utils
from ci_companion.pulls import labels


@click.group(name="pr", help="Pull request checks")
@options.github_options
@click.pass_context
def pr(
    ctx: click.Context,
    *,
    github_server: str,
    token: str | None,
) -> None:
    ctx.ensure_object(dict)
    ctx.obj["github_server"] = github_server
    ctx.obj["token"] = token


@pr.command(
    name="has-label",
    help="Exit with 0 when the pull request has the label, 1 otherwise",
)
@click.argument("repository")
@click.argument("pull_request", type=click.IntRange(min=1))
@click.argument("label")
@click.pass_context
@utils.run_with_asyncio
async def has_label(
    ctx: click.Context,
    *,
    repository: str,
    pull_request: int,
    label: str,
) -> None:
    async with utils.get_github_http_client(
        ctx.obj["github_server"],
        ctx.obj["token"],
    ) as client:
        try:
            found = await labels.has_label(client, repository, pull_request, label)
        except utils.NetworkError as e:
            console.print(
                f"failed to fetch {repository}#{pull_request}: {e}",
                style="red",
            )
            sys.exit(utils.NETWORK_ERROR_EXIT_CODE)

    if found:
        console.log(f"{repository}#{pull_request} has label {label}")
        sys.exit(0)

    console.log(f"{repository}#{pull_request} does not have label {label}")
    sys.exit(1)
