from __future__ import annotations

import typing
from urllib import parse

import httpx

from ci_companion import utils


DEFAULT_HOMESERVER = "https://matrix.parity.io"

HTML_FORMAT = "org.matrix.custom.html"


class Message(typing.TypedDict):
    msgtype: str
    body: str
    format: typing.NotRequired[str]
    formatted_body: typing.NotRequired[str]


def structure_message(body: str, formatted_body: str | None = None) -> Message:
    message: Message = {"msgtype": "m.text", "body": body}
    if formatted_body:
        message["format"] = HTML_FORMAT
        message["formatted_body"] = formatted_body
    return message


async def send_message(
    client: httpx.AsyncClient,
    room_id: str,
    access_token: str,
    message: Message,
) -> str:
    """Post `message` to the room and return the event id."""
    url = f"/_matrix/client/r0/rooms/{parse.quote(room_id, safe='')}/send/m.room.message"
    try:
        response = await client.post(
            url,
            params={"access_token": access_token},
            json=message,
        )
    except httpx.RequestError as e:
        # NOTE: the access token is part of the URL, do not leak it
        raise utils.NetworkError(
            status=None,
            url=str(client.base_url.join(url)),
            message=str(e),
        ) from e

    try:
        data = response.json()
    except ValueError as e:
        raise utils.NetworkError(
            status=response.status_code,
            url=utils.redact_url(response.request.url),
            message="response is not JSON",
        ) from e
    if not isinstance(data, dict):
        return ""
    return str(data.get("event_id", ""))
