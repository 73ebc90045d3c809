from __future__ import annotations

import sys

import click

from ci_companion import console
from ci_companion import options
from ci_companion import utils
from ci_companion.release import changelog
from ci_companion.release import scanner
from ci_companion.release import verify


@click.group(help="Release governance checks")
@options.github_options
@click.pass_context
def release(
    ctx: click.Context,
    *,
    github_server: str,
    token: str | None,
) -> None:
    ctx.ensure_object(dict)
    ctx.obj["github_server"] = github_server
    ctx.obj["token"] = token


@release.command(help="Print the tag of the latest published (non-draft) release")
@click.argument("repository")
@click.option(
    "--max-pages",
    help="Maximum number of release pages to scan",
    type=click.IntRange(min=1),
    default=scanner.DEFAULT_MAX_PAGES,
    show_default=True,
)
@click.pass_context
@utils.run_with_asyncio
async def latest(ctx: click.Context, *, repository: str, max_pages: int) -> None:
    async with utils.get_github_http_client(
        ctx.obj["github_server"],
        ctx.obj["token"],
    ) as client:
        try:
            entry = await scanner.latest_published(
                client,
                repository,
                max_pages=max_pages,
            )
        except utils.NetworkError as e:
            console.print(f"failed to fetch releases of {repository}: {e}", style="red")
            sys.exit(utils.NETWORK_ERROR_EXIT_CODE)

    if entry is None:
        console.log(
            f"no published release found in the first {max_pages} page(s) of {repository} releases",
        )
        return

    console.log(f"latest published release of {repository}: {entry.tag_name}")
    click.echo(entry.tag_name)


@release.command(
    name="verify-tag",
    help="Check that a tag points to a verified signed object. "
    "Exits with 0 when verified, 1 when not verified and 2 when the tag does not exist",
)
@click.argument("repository")
@click.argument("tag")
@click.pass_context
@utils.run_with_asyncio
async def verify_tag(ctx: click.Context, *, repository: str, tag: str) -> None:
    async with utils.get_github_http_client(
        ctx.obj["github_server"],
        ctx.obj["token"],
    ) as client:
        try:
            result = await verify.verify_tag(client, repository, tag)
        except utils.NetworkError as e:
            console.print(f"failed to fetch tag {tag} of {repository}: {e}", style="red")
            sys.exit(utils.NETWORK_ERROR_EXIT_CODE)

    sys.exit(result.exit_code)


@release.command(
    name="changelog",
    help="Print commit subjects referencing a pull request between two refs",
)
@click.argument("from_ref")
@click.argument("to_ref")
@utils.run_with_asyncio
async def changelog_cmd(*, from_ref: str, to_ref: str) -> None:
    try:
        lines = await changelog.sanitised_git_logs(from_ref, to_ref)
    except utils.CommandError as e:
        console.print(f"error: {e}", style="red")
        sys.exit(1)

    for line in lines:
        click.echo(line)


@release.command(
    name="has-changes",
    help="Exit with 0 when files under one of the prefixes changed between two refs, 1 otherwise",
)
@click.argument("from_ref")
@click.argument("to_ref")
@click.option(
    "--prefix",
    "prefixes",
    multiple=True,
    default=changelog.DEFAULT_RUNTIME_PREFIXES,
    show_default=True,
    help="Path prefix to look for (repeatable)",
)
@utils.run_with_asyncio
async def has_changes(*, from_ref: str, to_ref: str, prefixes: tuple[str, ...]) -> None:
    try:
        changed = await changelog.has_changes(from_ref, to_ref, prefixes)
    except utils.CommandError as e:
        console.print(f"error: {e}", style="red")
        sys.exit(1)

    if changed:
        console.log(f"changes found under {', '.join(prefixes)}")
        sys.exit(0)

    console.log(f"no changes under {', '.join(prefixes)}")
    sys.exit(1)
