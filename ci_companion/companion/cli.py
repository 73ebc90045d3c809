from __future__ import annotations

import os
import sys

import click
import pydantic
from rich import markup

from ci_companion import console
from ci_companion import options
from ci_companion import utils
from ci_companion.companion import checkout as checkout_mod
from ci_companion.companion import resolver


def get_pull_request_number_from_ref_name() -> int | None:
    # GitLab mirrors of GitHub pull requests are pushed as branches named
    # after the pull request number
    ref_name = os.getenv("CI_COMMIT_REF_NAME", "")
    if ref_name.isdigit() and int(ref_name) > 0:
        return int(ref_name)
    return None


@click.group(help="Resolve companion pull requests")
@options.github_options
@click.pass_context
def companion(
    ctx: click.Context,
    *,
    github_server: str,
    token: str | None,
) -> None:
    ctx.ensure_object(dict)
    ctx.obj["github_server"] = github_server
    ctx.obj["token"] = token


def _pull_request_option(func: options.F) -> options.F:
    return click.option(
        "--pull-request",
        "-p",
        help="Pull request number in the origin repository",
        type=click.IntRange(min=1),
        default=get_pull_request_number_from_ref_name,
    )(func)


def _github_url_option(func: options.F) -> options.F:
    return click.option(
        "--github-url",
        help="Web URL of the GitHub server, used to match pull request links",
        envvar="GITHUB_SERVER_URL",
        default=resolver.DEFAULT_GITHUB_URL,
        show_default=True,
    )(func)


async def _resolve(
    ctx: click.Context,
    origin_repo: str,
    pull_request: int | None,
    companion_repo: str,
    github_url: str,
) -> resolver.PullRequestRef | None:
    if pull_request is None:
        console.log(
            f"this is not a pull request, no companion pull request to look for in {companion_repo}",
        )
        return None

    console.log(f"this is pull request {origin_repo}#{pull_request}")
    async with utils.get_github_http_client(
        ctx.obj["github_server"],
        ctx.obj["token"],
    ) as client:
        try:
            return await resolver.resolve(
                client,
                origin_repo,
                pull_request,
                companion_repo,
                github_url,
            )
        except utils.NetworkError as e:
            console.print(
                f"failed to fetch {origin_repo}#{pull_request}, companion status is unknown: {e}",
                style="red",
            )
            sys.exit(utils.NETWORK_ERROR_EXIT_CODE)
        except pydantic.ValidationError as e:
            console.print(
                f"invalid companion pull request reference in {origin_repo}#{pull_request}: {markup.escape(str(e))}",
                style="red",
            )
            sys.exit(1)


@companion.command(help="Print the companion pull request referenced by a pull request")
@click.argument("origin_repo")
@click.argument("companion_repo")
@_pull_request_option
@_github_url_option
@click.pass_context
@utils.run_with_asyncio
async def resolve(
    ctx: click.Context,
    *,
    origin_repo: str,
    companion_repo: str,
    pull_request: int | None,
    github_url: str,
) -> None:
    ref = await _resolve(ctx, origin_repo, pull_request, companion_repo, github_url)
    if ref is not None:
        click.echo(str(ref))


@companion.command(
    help="Check out the companion pull request referenced by a pull request, if any",
)
@click.argument("origin_repo")
@click.argument("companion_repo")
@_pull_request_option
@_github_url_option
@click.option(
    "--remote",
    help="Git remote of the companion repository",
    default="origin",
    show_default=True,
)
@click.pass_context
@utils.run_with_asyncio
async def checkout(  # noqa: PLR0913
    ctx: click.Context,
    *,
    origin_repo: str,
    companion_repo: str,
    pull_request: int | None,
    github_url: str,
    remote: str,
) -> None:
    ref = await _resolve(ctx, origin_repo, pull_request, companion_repo, github_url)
    if ref is None:
        console.log(f"building {companion_repo} default branch")
        return

    try:
        branch = await checkout_mod.checkout(ref, remote)
    except utils.CommandError as e:
        console.print(f"error: can't check out {ref}: {e}", style="red")
        sys.exit(1)

    console.log(f"checked out {ref} as {branch}")
    click.echo(str(ref))
