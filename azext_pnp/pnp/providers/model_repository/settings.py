# coding=utf-8
# ----------------------------------------------------------------------------------------------
# Copyright (c) Microsoft Corporation. All rights reserved.
# Licensed under the MIT License. See License file in the project root for license information.
# ----------------------------------------------------------------------------------------------

import os
from typing import NamedTuple, Optional

from knack.log import get_logger

from ...common import (
    CONFIG_API_VERSION,
    CONFIG_PUBLIC_REPOSITORY_URL,
    CONFIG_ROOT_LABEL,
    DEFAULT_API_VERSION,
    DEFAULT_PUBLIC_REPOSITORY_URL,
    SESSION_FILE_NAME,
    SESSION_KEY_CONNECTION_STRING,
)
from .connection import ConnectionString, parse_connection_string

logger = get_logger(__name__)


class RepositorySettings(NamedTuple):
    public_repository_url: str
    api_version: str
    connection_string: Optional[ConnectionString] = None


def load_settings(cli_ctx, login: Optional[str] = None) -> RepositorySettings:
    """
    Resolves the model repository settings for a single command invocation.

    An explicit login connection string takes precedence over the stored one.
    """
    public_repository_url = cli_ctx.config.get(
        CONFIG_ROOT_LABEL, CONFIG_PUBLIC_REPOSITORY_URL, fallback=DEFAULT_PUBLIC_REPOSITORY_URL
    )
    api_version = cli_ctx.config.get(CONFIG_ROOT_LABEL, CONFIG_API_VERSION, fallback=DEFAULT_API_VERSION)

    raw_connection_string = login or get_stored_connection_string(cli_ctx)
    connection_string = parse_connection_string(raw_connection_string) if raw_connection_string else None
    return RepositorySettings(
        public_repository_url=public_repository_url,
        api_version=api_version,
        connection_string=connection_string,
    )


class ConnectionStore:
    def __init__(self, cli_ctx):
        from azure.cli.core._session import Session

        self.session = Session(encoding="utf8")
        self.session.load(os.path.join(cli_ctx.config.config_dir, SESSION_FILE_NAME))

    def get(self) -> Optional[str]:
        return self.session.get(SESSION_KEY_CONNECTION_STRING)

    def set(self, connection_string: str):
        self.session[SESSION_KEY_CONNECTION_STRING] = connection_string

    def clear(self) -> bool:
        if SESSION_KEY_CONNECTION_STRING not in self.session:
            return False
        del self.session[SESSION_KEY_CONNECTION_STRING]
        return True


def get_stored_connection_string(cli_ctx) -> Optional[str]:
    return ConnectionStore(cli_ctx).get()
