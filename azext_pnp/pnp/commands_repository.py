# coding=utf-8
# ----------------------------------------------------------------------------------------------
# Copyright (c) Microsoft Corporation. All rights reserved.
# Licensed under the MIT License. See License file in the project root for license information.
# ----------------------------------------------------------------------------------------------

from typing import Optional

from knack.log import get_logger

from .providers.model_repository import (
    ConnectionStore,
    ModelRepositoryManager,
    RepositorySettings,
    load_settings,
    parse_connection_string,
)
from .util import should_continue_prompt

logger = get_logger(__name__)


def configure_repository(cmd, connection_string: str) -> dict:
    parsed = parse_connection_string(connection_string)
    current = load_settings(cmd.cli_ctx)
    manager = ModelRepositoryManager.from_settings(
        RepositorySettings(
            public_repository_url=current.public_repository_url,
            api_version=current.api_version,
            connection_string=parsed,
        )
    )
    try:
        target = manager.test_connection()
    finally:
        manager.close()

    ConnectionStore(cmd.cli_ctx).set(connection_string)
    logger.info("Connection to %s verified and stored.", target.display_name)
    return parsed.redacted()


def show_repository(cmd) -> dict:
    settings = load_settings(cmd.cli_ctx)
    return {
        "publicRepositoryUrl": settings.public_repository_url,
        "apiVersion": settings.api_version,
        "companyRepository": settings.connection_string.redacted() if settings.connection_string else None,
    }


def clear_repository(cmd, confirm_yes: Optional[bool] = None):
    store = ConnectionStore(cmd.cli_ctx)
    if not store.get():
        logger.warning("No company repository connection string is configured.")
        return

    if not should_continue_prompt(confirm_yes=confirm_yes, context="Clear"):
        return
    store.clear()
