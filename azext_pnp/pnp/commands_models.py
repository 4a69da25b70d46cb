# coding=utf-8
# ----------------------------------------------------------------------------------------------
# Copyright (c) Microsoft Corporation. All rights reserved.
# Licensed under the MIT License. See License file in the project root for license information.
# ----------------------------------------------------------------------------------------------

from typing import List, Optional, Tuple

from azure.cli.core.azclierror import (
    HTTPError,
    InvalidArgumentValueError,
    RequiredArgumentMissingError,
)
from knack.log import get_logger

from .common import DEFAULT_PAGE_SIZE, DTDL_ID_KEY, ModelType
from .providers.model_repository import (
    ModelRepositoryClient,
    ModelRepositoryManager,
    load_settings,
)
from .providers.model_repository.manager import CONNECTION_STRING_NOT_FOUND_MSG, get_model_type
from .util import read_model_file, should_continue_prompt

logger = get_logger(__name__)


def show_model(
    cmd,
    model_id: str,
    model_type: str = ModelType.interface.value,
    repo_id: Optional[str] = None,
    expand: Optional[bool] = None,
    login: Optional[str] = None,
) -> dict:
    kind = ModelType.from_value(model_type)
    client, repository_id = _get_client(cmd, login=login, repo_id=repo_id)
    with client:
        return client.get_model_with_fallback(kind, model_id, repository_id=repository_id, expand=expand).to_dict()


def search_models(
    cmd,
    keyword: Optional[str] = None,
    model_type: str = ModelType.interface.value,
    top: Optional[int] = None,
    page_size: int = DEFAULT_PAGE_SIZE,
    continuation_token: Optional[str] = None,
    repo_id: Optional[str] = None,
    login: Optional[str] = None,
) -> List[dict]:
    kind = ModelType.from_value(model_type)
    manager = _get_manager(cmd, login=login, repo_id=repo_id)
    try:
        results = manager.search_all(
            kind, query=keyword, top=top, page_size=page_size, continuation_token=continuation_token
        )
    finally:
        manager.close()
    return [summary.to_dict() for summary in results]


def create_model(
    cmd,
    model_file: str,
    repo_id: Optional[str] = None,
    login: Optional[str] = None,
) -> dict:
    content, document = read_model_file(model_file)
    kind = _get_kind(document)
    model_id = document.get(DTDL_ID_KEY)

    client, repository_id = _get_client(cmd, login=login, repo_id=repo_id, require_company=True)
    with client:
        if model_id and _get_existing(client, kind, model_id, repository_id):
            raise InvalidArgumentValueError(
                f"Model {model_id} already exists. Use 'az iot pnp model update' to change it."
            )
        return client.create_or_update(kind, content, repository_id=repository_id).to_dict()


def update_model(
    cmd,
    model_file: str,
    etag: Optional[str] = None,
    repo_id: Optional[str] = None,
    login: Optional[str] = None,
) -> dict:
    content, document = read_model_file(model_file)
    kind = _get_kind(document)
    model_id = document.get(DTDL_ID_KEY)
    if not model_id:
        raise InvalidArgumentValueError(f"{model_file} does not declare {DTDL_ID_KEY}.")

    client, repository_id = _get_client(cmd, login=login, repo_id=repo_id, require_company=True)
    with client:
        existing = _get_existing(client, kind, model_id, repository_id)
        if not existing:
            raise InvalidArgumentValueError(
                f"Model {model_id} does not exist. Use 'az iot pnp model create' to add it."
            )
        if existing.published:
            raise InvalidArgumentValueError(f"Model {model_id} is published and can not be updated.")
        return client.create_or_update(
            kind, content, etag=etag or existing.etag, repository_id=repository_id
        ).to_dict()


def delete_model(
    cmd,
    model_id: str,
    model_type: str = ModelType.interface.value,
    repo_id: Optional[str] = None,
    confirm_yes: Optional[bool] = None,
    login: Optional[str] = None,
):
    kind = ModelType.from_value(model_type)
    client, repository_id = _get_client(cmd, login=login, repo_id=repo_id, require_company=True)
    with client:
        logger.warning("Model %s will be deleted from repository '%s'.", model_id, repository_id)
        if not should_continue_prompt(confirm_yes=confirm_yes):
            return
        client.delete(kind, model_id, repository_id=repository_id)


def publish_model(
    cmd,
    model_id: str,
    model_type: str = ModelType.interface.value,
    repo_id: Optional[str] = None,
    confirm_yes: Optional[bool] = None,
    login: Optional[str] = None,
):
    kind = ModelType.from_value(model_type)
    client, repository_id = _get_client(cmd, login=login, repo_id=repo_id, require_company=True)
    with client:
        logger.warning("Published models can not be updated or deleted.")
        if not should_continue_prompt(confirm_yes=confirm_yes, context="Publish"):
            return
        client.publish(kind, model_id, repository_id=repository_id)


def download_models(
    cmd,
    model_ids: List[str],
    model_type: str = ModelType.interface.value,
    output_dir: Optional[str] = None,
    expand: Optional[bool] = None,
    from_public: Optional[bool] = None,
    login: Optional[str] = None,
) -> dict:
    kind = ModelType.from_value(model_type)
    manager = _get_manager(cmd, login=login)
    try:
        return manager.download_models(
            model_ids,
            output_dir=output_dir,
            kind=kind,
            expand=expand if expand is not None else True,
            from_public=from_public,
        )
    finally:
        manager.close()


def submit_models(
    cmd,
    model_files: List[str],
    overwrite: Optional[bool] = None,
    login: Optional[str] = None,
) -> dict:
    manager = _get_manager(cmd, login=login)
    try:
        return manager.submit_models(model_files, overwrite=overwrite)
    finally:
        manager.close()


def _get_client(
    cmd,
    login: Optional[str] = None,
    repo_id: Optional[str] = None,
    require_company: bool = False,
) -> Tuple[ModelRepositoryClient, Optional[str]]:
    settings = load_settings(cmd.cli_ctx, login=login)
    if settings.connection_string:
        client = ModelRepositoryClient.from_connection_string(
            settings.connection_string, api_version=settings.api_version
        )
        return client, repo_id or settings.connection_string.repository_id

    if require_company or repo_id:
        raise RequiredArgumentMissingError(CONNECTION_STRING_NOT_FOUND_MSG)
    return ModelRepositoryClient.public(settings.public_repository_url, api_version=settings.api_version), None


def _get_manager(cmd, login: Optional[str] = None, repo_id: Optional[str] = None) -> ModelRepositoryManager:
    settings = load_settings(cmd.cli_ctx, login=login)
    if repo_id and not settings.connection_string:
        raise RequiredArgumentMissingError(CONNECTION_STRING_NOT_FOUND_MSG)
    return ModelRepositoryManager.from_settings(settings, repository_id=repo_id)


def _get_kind(document: dict) -> ModelType:
    try:
        return get_model_type(document)
    except ValueError as e:
        raise InvalidArgumentValueError(str(e))


def _get_existing(client: ModelRepositoryClient, kind: ModelType, model_id: str, repository_id: str):
    try:
        return client.get_model(kind, model_id, repository_id=repository_id)
    except HTTPError as e:
        if getattr(e.response, "status_code", None) == 404:
            return None
        raise
