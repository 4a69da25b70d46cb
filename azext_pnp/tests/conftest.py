# coding=utf-8
# ----------------------------------------------------------------------------------------------
# Copyright (c) Microsoft Corporation. All rights reserved.
# Licensed under the MIT License. See License file in the project root for license information.
# ----------------------------------------------------------------------------------------------

import pytest
import responses


@pytest.fixture
def mocked_config(request, tmp_path):
    class Stub:
        pass

    values = getattr(request, "param", {}) or {}
    config = Stub()
    config.config_dir = str(tmp_path)
    config.values = dict(values)

    def _get(section, option, fallback=None):
        return config.values.get(f"{section}.{option}", fallback)

    config.get = _get
    yield config


@pytest.fixture
def mocked_cmd(mocker, mocked_config):
    az_cli_mock = mocker.patch("azure.cli.core.AzCli", autospec=True, **{"data": {"command": "az"}})
    az_cli_mock.config = mocked_config
    config = {"cli_ctx": az_cli_mock}
    patched = mocker.patch("azure.cli.core.commands.AzCliCommand", autospec=True, **config)
    yield patched


@pytest.fixture
def mocked_responses():
    with responses.RequestsMock() as rsps:
        yield rsps


@pytest.fixture
def mocked_confirm(mocker):
    mock = mocker.patch(
        "rich.prompt.Confirm",
    )
    mock.ask.return_value = True
    yield mock
