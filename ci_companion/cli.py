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

import click

from ci_companion import VERSION
from ci_companion import utils
from ci_companion.companion import cli as companion_cli_mod
from ci_companion.notify import cli as notify_cli_mod
from ci_companion.pulls import cli as pulls_cli_mod
from ci_companion.release import cli as release_cli_mod


@click.group()
@click.option("--debug", is_flag=True, default=False, help="debug mode")
@click.version_option(VERSION)
@click.pass_context
def cli(
    ctx: click.Context,
    debug: bool,
) -> None:
    utils.set_debug(debug)
    ctx.obj = {"debug": debug}


cli.add_command(companion_cli_mod.companion)
cli.add_command(release_cli_mod.release)
cli.add_command(pulls_cli_mod.pr)
cli.add_command(notify_cli_mod.notify)


def main() -> None:
    cli()
