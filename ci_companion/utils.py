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

import asyncio
import dataclasses
import functools
import typing

import httpx

from ci_companion import VERSION
from ci_companion import console


_DEBUG = False

GITHUB_API_MEDIA_TYPE = "application/vnd.github.v3+json"

NETWORK_ERROR_EXIT_CODE = 3


def set_debug(debug: bool) -> None:
    global _DEBUG  # noqa: PLW0603
    _DEBUG = debug


def is_debug() -> bool:
    return _DEBUG


@dataclasses.dataclass
class NetworkError(Exception):
    status: int | None
    url: str
    message: str = ""

    def __str__(self) -> str:
        status = "transport error" if self.status is None else f"HTTP {self.status}"
        if self.message:
            return f"{status} on {self.url}: {self.message}"
        return f"{status} on {self.url}"


def redact_url(url: httpx.URL) -> str:
    return str(url.copy_remove_param("access_token"))


def _error_message(response: httpx.Response) -> str:
    try:
        data = response.json()
    except ValueError:
        return response.text

    if not isinstance(data, dict):
        return response.text

    message = str(data.get("message") or data.get("error") or "")
    if "errors" in data:
        errors = ", ".join(
            str(e.get("message") or e) if isinstance(e, dict) else str(e)
            for e in data["errors"]
        )
        message = f"{message} ({errors})" if message else errors
    return message


async def check_for_status(response: httpx.Response) -> None:
    # Redirects are followed by the client, the hook sees every hop
    if response.is_success or response.is_redirect:
        return

    await response.aread()
    raise NetworkError(
        status=response.status_code,
        url=redact_url(response.request.url),
        message=_error_message(response),
    )


@dataclasses.dataclass
class CommandError(Exception):
    command_args: tuple[str, ...]
    returncode: int | None
    stdout: bytes

    def __str__(self) -> str:
        return f"failed to run `{' '.join(self.command_args)}`: {self.stdout.decode()}"


async def run_command(*args: str) -> str:
    if is_debug():
        console.print(f"[purple]DEBUG: running: {' '.join(args)} [/]")
    proc = await asyncio.create_subprocess_exec(
        *args,
        stdout=asyncio.subprocess.PIPE,
        stderr=asyncio.subprocess.STDOUT,
    )
    stdout, _ = await proc.communicate()
    if proc.returncode != 0:
        raise CommandError(args, proc.returncode, stdout)
    return stdout.decode().strip()


async def git(*args: str) -> str:
    return await run_command("git", *args)


# NOTE: must be async for httpx
async def log_httpx_request(request: httpx.Request) -> None:  # noqa: RUF029
    console.print(
        f"[purple]DEBUG: request: {request.method} {redact_url(request.url)} - Waiting for response[/]",
    )


# NOTE: must be async for httpx
async def log_httpx_response(response: httpx.Response) -> None:
    request = response.request
    await response.aread()
    elapsed = response.elapsed.total_seconds()
    console.print(
        f"[purple]DEBUG: response: {request.method} {redact_url(request.url)} - Status {response.status_code} - Elasped {elapsed} s[/]",
    )


def get_http_client(
    server: str,
    headers: dict[str, str] | None = None,
) -> httpx.AsyncClient:
    event_hooks: typing.Mapping[str, list[typing.Callable[..., typing.Any]]] = {
        "request": [],
        "response": [check_for_status],
    }
    if is_debug():
        event_hooks["request"].insert(0, log_httpx_request)
        event_hooks["response"].insert(0, log_httpx_response)

    return httpx.AsyncClient(
        base_url=server,
        headers={
            "User-Agent": f"ci_companion/{VERSION}",
            **(headers or {}),
        },
        event_hooks=event_hooks,
        follow_redirects=True,
        timeout=5.0,
    )


def get_github_http_client(
    github_server: str,
    token: str | None,
) -> httpx.AsyncClient:
    headers = {"Accept": GITHUB_API_MEDIA_TYPE}
    # Anonymous calls work for public repositories, only rate limited
    if token:
        headers["Authorization"] = f"token {token}"
    return get_http_client(github_server, headers)


P = typing.ParamSpec("P")
R = typing.TypeVar("R")


def run_with_asyncio(
    func: typing.Callable[
        P,
        typing.Coroutine[typing.Any, typing.Any, R],
    ],
) -> functools._Wrapped[
    P,
    typing.Coroutine[typing.Any, typing.Any, R],
    P,
    R,
]:
    @functools.wraps(func)
    def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
        result = func(*args, **kwargs)
        return asyncio.run(result)

    return wrapper
