from __future__ import annotations

import typing
from urllib import parse

import httpx
import pydantic

from ci_companion import github_types
from ci_companion import utils


T = typing.TypeVar("T")

_RELEASES = pydantic.TypeAdapter(list[github_types.Release])


async def _get(
    client: httpx.AsyncClient,
    url: str,
    params: dict[str, typing.Any] | None = None,
) -> httpx.Response:
    try:
        return await client.get(url, params=params)
    except httpx.RequestError as e:
        raise utils.NetworkError(
            status=None,
            url=str(client.base_url.join(url)),
            message=str(e),
        ) from e


def _parse(
    response: httpx.Response,
    validate: typing.Callable[[typing.Any], T],
) -> T:
    # A proxy or captive portal may answer 200 with anything
    try:
        data = response.json()
    except ValueError as e:
        raise utils.NetworkError(
            status=response.status_code,
            url=utils.redact_url(response.request.url),
            message="response is not JSON",
        ) from e

    try:
        return validate(data)
    except pydantic.ValidationError as e:
        raise utils.NetworkError(
            status=response.status_code,
            url=utils.redact_url(response.request.url),
            message=f"unexpected payload ({e.error_count()} validation errors)",
        ) from e


def _raw(data: typing.Any) -> typing.Any:  # noqa: ANN401
    return data


async def get_pull_request(
    client: httpx.AsyncClient,
    repository: str,
    number: int,
) -> github_types.PullRequest:
    response = await _get(client, f"/repos/{repository}/pulls/{number}")
    return _parse(response, github_types.PullRequest.model_validate)


async def list_releases(
    client: httpx.AsyncClient,
    repository: str,
    *,
    page: int,
    per_page: int,
) -> list[github_types.Release]:
    response = await _get(
        client,
        f"/repos/{repository}/releases",
        params={"per_page": per_page, "page": page},
    )
    return _parse(response, _RELEASES.validate_python)


async def get_tag_ref(
    client: httpx.AsyncClient,
    repository: str,
    tag: str,
) -> typing.Any:  # noqa: ANN401
    # NOTE: returns the raw payload, GitHub answers with a list of refs
    # starting with `tag` when no exact ref exists
    response = await _get(
        client,
        f"/repos/{repository}/git/refs/tags/{parse.quote(tag, safe='/')}",
    )
    return _parse(response, _raw)


async def get_git_object(
    client: httpx.AsyncClient,
    url: str,
) -> github_types.SignedGitObject:
    response = await _get(client, url)
    return _parse(response, github_types.SignedGitObject.model_validate)
