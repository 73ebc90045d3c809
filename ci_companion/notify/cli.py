from __future__ import annotations

import sys

import click

from ci_companion import console
from ci_companion import utils
from ci_companion.notify import matrix


notify = click.Group("notify", help="Chat notifications")


@notify.command(help="Post a message to a Matrix room")
@click.argument("room_id")
@click.argument("message")
@click.option(
    "--formatted",
    "formatted_message",
    help="HTML formatted version of the message",
    default=None,
)
@click.option(
    "--homeserver",
    help="URL of the Matrix homeserver",
    envvar="MATRIX_HOMESERVER",
    default=matrix.DEFAULT_HOMESERVER,
    show_default=True,
)
@click.option(
    "--access-token",
    help="Matrix access token",
    envvar="MATRIX_ACCESS_TOKEN",
    required=True,
)
@utils.run_with_asyncio
async def send(
    *,
    room_id: str,
    message: str,
    formatted_message: str | None,
    homeserver: str,
    access_token: str,
) -> None:
    payload = matrix.structure_message(message, formatted_message)
    async with utils.get_http_client(homeserver) as client:
        try:
            event_id = await matrix.send_message(
                client,
                room_id,
                access_token,
                payload,
            )
        except utils.NetworkError as e:
            console.print(f"failed to send message to {room_id}: {e}", style="red")
            sys.exit(utils.NETWORK_ERROR_EXIT_CODE)

    console.log(f"message sent to {room_id} ({event_id})")
