#
#  Copyright © 2021-2024 Mergify SAS
#
# Licensed under the Apache License, Version 2.0 (the "License"); you may
# not use this file except in compliance with the License. You may obtain
# a copy of the License at
#
#      http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS, WITHOUT
# WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied. See the
# License for the specific language governing permissions and limitations
# under the License.
from __future__ import annotations

import pathlib

import httpx
import pytest
import respx

from ci_companion import utils
from ci_companion.github import api


GITHUB_SERVER = "https://api.github.com"


def test_github_http_client_headers_with_token() -> None:
    client = utils.get_github_http_client(GITHUB_SERVER, "secret")

    assert client.headers["Accept"] == "application/vnd.github.v3+json"
    assert client.headers["Authorization"] == "token secret"
    assert client.headers["User-Agent"].startswith("ci_companion/")


@pytest.mark.parametrize("token", [None, ""])
def test_github_http_client_headers_without_token(token: str | None) -> None:
    client = utils.get_github_http_client(GITHUB_SERVER, token)

    assert client.headers["Accept"] == "application/vnd.github.v3+json"
    assert "Authorization" not in client.headers


def test_http_client_debug_hooks() -> None:
    client = utils.get_http_client(GITHUB_SERVER)
    assert client.event_hooks["request"] == []
    assert client.event_hooks["response"] == [utils.check_for_status]

    utils.set_debug(True)
    client = utils.get_http_client(GITHUB_SERVER)
    assert client.event_hooks["request"] == [utils.log_httpx_request]
    assert client.event_hooks["response"] == [
        utils.log_httpx_response,
        utils.check_for_status,
    ]


async def test_network_error_on_client_error(respx_mock: respx.MockRouter) -> None:
    respx_mock.get(f"{GITHUB_SERVER}/repos/org/repo/pulls/1").respond(
        422,
        json={
            "message": "Validation Failed",
            "errors": [{"message": "invalid"}, "other"],
        },
    )

    async with utils.get_github_http_client(GITHUB_SERVER, None) as client:
        with pytest.raises(utils.NetworkError) as exc_info:
            await client.get("/repos/org/repo/pulls/1")

    assert exc_info.value == utils.NetworkError(
        status=422,
        url=f"{GITHUB_SERVER}/repos/org/repo/pulls/1",
        message="Validation Failed (invalid, other)",
    )
    assert str(exc_info.value) == (
        f"HTTP 422 on {GITHUB_SERVER}/repos/org/repo/pulls/1: "
        "Validation Failed (invalid, other)"
    )


async def test_redirects_are_followed(respx_mock: respx.MockRouter) -> None:
    respx_mock.get(f"{GITHUB_SERVER}/repos/org/old/pulls/1").respond(
        301,
        headers={"Location": f"{GITHUB_SERVER}/repos/org/new/pulls/1"},
    )
    respx_mock.get(f"{GITHUB_SERVER}/repos/org/new/pulls/1").respond(
        200,
        json={"number": 1, "body": "hello"},
    )

    async with utils.get_github_http_client(GITHUB_SERVER, None) as client:
        pull = await api.get_pull_request(client, "org/old", 1)

    assert pull.number == 1
    assert pull.body == "hello"


async def test_transport_error_is_network_error(respx_mock: respx.MockRouter) -> None:
    respx_mock.get(f"{GITHUB_SERVER}/repos/org/repo/pulls/1").mock(
        side_effect=httpx.ConnectTimeout("timed out"),
    )

    async with utils.get_github_http_client(GITHUB_SERVER, None) as client:
        with pytest.raises(utils.NetworkError) as exc_info:
            await api.get_pull_request(client, "org/repo", 1)

    assert exc_info.value.status is None
    assert exc_info.value.url == f"{GITHUB_SERVER}/repos/org/repo/pulls/1"
    assert str(exc_info.value).startswith("transport error on ")


@pytest.mark.parametrize(
    "error",
    [
        pytest.param(
            httpx.TooManyRedirects("Exceeded maximum allowed redirects."),
            id="redirects",
        ),
        pytest.param(httpx.DecodingError("invalid gzip"), id="decoding"),
    ],
)
async def test_request_error_is_network_error(
    error: httpx.RequestError,
    respx_mock: respx.MockRouter,
) -> None:
    respx_mock.get(f"{GITHUB_SERVER}/repos/org/repo/pulls/1").mock(side_effect=error)

    async with utils.get_github_http_client(GITHUB_SERVER, None) as client:
        with pytest.raises(utils.NetworkError) as exc_info:
            await api.get_pull_request(client, "org/repo", 1)

    assert exc_info.value.status is None


async def test_non_json_response_is_network_error(
    respx_mock: respx.MockRouter,
) -> None:
    respx_mock.get(f"{GITHUB_SERVER}/repos/org/repo/pulls/1").respond(
        200,
        text="<html>proxy</html>",
    )

    async with utils.get_github_http_client(GITHUB_SERVER, None) as client:
        with pytest.raises(utils.NetworkError) as exc_info:
            await api.get_pull_request(client, "org/repo", 1)

    assert exc_info.value.status == 200
    assert exc_info.value.url == f"{GITHUB_SERVER}/repos/org/repo/pulls/1"
    assert exc_info.value.message == "response is not JSON"


async def test_unexpected_payload_is_network_error(
    respx_mock: respx.MockRouter,
) -> None:
    respx_mock.get(f"{GITHUB_SERVER}/repos/org/repo/releases").respond(
        200,
        json={"message": "not a list"},
    )

    async with utils.get_github_http_client(GITHUB_SERVER, None) as client:
        with pytest.raises(utils.NetworkError) as exc_info:
            await api.list_releases(client, "org/repo", page=1, per_page=30)

    assert exc_info.value.status == 200
    assert exc_info.value.message.startswith("unexpected payload")


def test_redact_url() -> None:
    url = httpx.URL("https://matrix.example.org/send?access_token=secret&x=1")
    assert utils.redact_url(url) == "https://matrix.example.org/send?x=1"


async def test_git_command_error(tmp_path: pathlib.Path) -> None:
    with pytest.raises(utils.CommandError) as exc_info:
        await utils.git("-C", str(tmp_path), "rev-parse", "--abbrev-ref", "HEAD")

    assert exc_info.value.command_args[:2] == ("git", "-C")
    assert exc_info.value.returncode != 0
