from __future__ import annotations

import typing

import click


F = typing.TypeVar("F", bound=typing.Callable[..., typing.Any])

DEFAULT_GITHUB_SERVER = "https://api.github.com"

# Release jobs get a dedicated token, pull request jobs another one
TOKEN_ENVVARS = ["GITHUB_RELEASE_TOKEN", "GITHUB_PR_TOKEN", "GITHUB_TOKEN"]


def github_options(func: F) -> F:
    func = click.option(
        "--token",
        "-t",
        help="GitHub token, anonymous requests are used when unset",
        envvar=TOKEN_ENVVARS,
        default=None,
    )(func)
    return click.option(
        "--github-server",
        help="URL of the GitHub API",
        envvar="GITHUB_API_URL",
        default=DEFAULT_GITHUB_SERVER,
        show_default=True,
    )(func)
