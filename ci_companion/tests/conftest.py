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
import pathlib
import typing
from unittest import mock

import pytest

import ci_companion
from ci_companion import options
from ci_companion import utils
from ci_companion.tests import utils as test_utils


@pytest.fixture(autouse=True)
def _unset_ci_environment(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    for envvar in (
        *options.TOKEN_ENVVARS,
        "GITHUB_API_URL",
        "GITHUB_SERVER_URL",
        "CI_COMMIT_REF_NAME",
        "MATRIX_HOMESERVER",
        "MATRIX_ACCESS_TOKEN",
    ):
        monkeypatch.delenv(envvar, raising=False)


@pytest.fixture(autouse=True)
def _wide_console(monkeypatch: pytest.MonkeyPatch) -> None:
    # Avoid line wrapping in assertions on log lines
    monkeypatch.setattr(ci_companion.console, "width", 200)


@pytest.fixture(autouse=True)
def _reset_debug() -> typing.Generator[None, None, None]:
    yield
    utils.set_debug(False)


@pytest.fixture(autouse=True)
def _change_working_directory(
    monkeypatch: pytest.MonkeyPatch,
    tmp_path: pathlib.Path,
) -> None:
    # Change working directory to avoid doing git commands in the current
    # repository
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def git_mock() -> typing.Generator[test_utils.GitMock, None, None]:
    git_mock_object = test_utils.GitMock()
    with mock.patch("ci_companion.utils.git", git_mock_object):
        yield git_mock_object
