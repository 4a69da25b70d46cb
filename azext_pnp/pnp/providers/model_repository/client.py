# coding=utf-8
# ----------------------------------------------------------------------------------------------
# Copyright (c) Microsoft Corporation. All rights reserved.
# Licensed under the MIT License. See License file in the project root for license information.
# ----------------------------------------------------------------------------------------------

import json
from typing import Any, Optional, Union

import requests
from azure.cli.core.azclierror import (
    HTTPError,
    InvalidArgumentValueError,
    RequiredArgumentMissingError,
)
from knack.log import get_logger

from ....constants import USER_AGENT
from ...common import (
    DEFAULT_API_VERSION,
    DEFAULT_PAGE_SIZE,
    DEFAULT_PUBLIC_REPOSITORY_URL,
    DTDL_ID_KEY,
    DTDL_TYPE_KEY,
    HEADER_ETAG,
    HEADER_MODEL_ID,
    HEADER_MODEL_PUBLISHED,
    MODELS_PUBLISH_ROUTE,
    MODELS_ROUTE,
    MODELS_SEARCH_ROUTE,
    ModelType,
)
from .auth import SharedAccessKey
from .connection import ConnectionString, enforce_https, parse_connection_string
from .contracts import ModelContext, SearchResults
from .model_uri import ModelUri, is_path_model_id, parse_model_uri

logger = get_logger(__name__)


class ModelRepositoryClient:
    """
    Client for the IoT Plug and Play model repository REST API.

    Requests that target a repository id (company repository) are signed with a
    freshly generated shared access signature. Requests without a repository id
    go to the public repository and carry no Authorization header.
    """

    def __init__(
        self,
        endpoint: str,
        credentials: Optional[SharedAccessKey] = None,
        api_version: str = DEFAULT_API_VERSION,
        timeout: Optional[float] = None,
    ):
        if not endpoint:
            raise RequiredArgumentMissingError("The model repository endpoint is required.")
        self.endpoint = enforce_https(endpoint)
        self.credentials = credentials
        self.api_version = api_version
        self.timeout = timeout
        self.session = requests.Session()
        self.session.headers["User-Agent"] = USER_AGENT

    @classmethod
    def from_connection_string(
        cls, connection_string: Union[str, ConnectionString], **kwargs
    ) -> "ModelRepositoryClient":
        if not isinstance(connection_string, ConnectionString):
            connection_string = parse_connection_string(connection_string)
        credentials = None
        if connection_string.has_shared_access_key:
            credentials = SharedAccessKey.from_connection_string(connection_string)
        return cls(endpoint=connection_string.endpoint, credentials=credentials, **kwargs)

    @classmethod
    def public(cls, endpoint: str = DEFAULT_PUBLIC_REPOSITORY_URL, **kwargs) -> "ModelRepositoryClient":
        return cls(endpoint=endpoint, **kwargs)

    def close(self):
        self.session.close()

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.close()

    def get_model(
        self,
        kind: ModelType,
        model_id: str,
        repository_id: Optional[str] = None,
        expand: bool = False,
    ) -> ModelContext:
        if not model_id:
            raise RequiredArgumentMissingError(f"The model id is required to get the {kind.value}.")
        credentials = self._resolve_credentials(repository_id, action=f"get the {kind.value}")

        params = {"modelId": model_id}
        if expand:
            params["expand"] = "true"
        response = self._request(
            method="GET", route=MODELS_ROUTE, params=params, repository_id=repository_id, credentials=credentials
        )
        published = response.headers.get(HEADER_MODEL_PUBLISHED)
        return ModelContext(
            content=response.text,
            resource_id=response.headers.get(HEADER_MODEL_ID) or model_id,
            published=published.lower() == "true" if published is not None else None,
            etag=response.headers.get(HEADER_ETAG),
        )

    def get_model_with_fallback(
        self,
        kind: ModelType,
        model_id: str,
        repository_id: Optional[str] = None,
        expand: bool = False,
    ) -> ModelContext:
        """
        Gets a model from the company repository first when a repository id is given,
        then from the public repository.

        Any transport failure against the company repository (including 404) is logged
        and the lookup continues against the public repository without authentication.
        Failures against the public repository are raised to the caller.
        """
        if repository_id:
            try:
                return self.get_model(kind, model_id, repository_id=repository_id, expand=expand)
            except HTTPError as e:
                status_code = getattr(e.response, "status_code", None)
                if status_code == 404:
                    logger.warning("Model %s is not found in repository '%s'.", model_id, repository_id)
                else:
                    logger.warning(
                        "Unable to get model %s from repository '%s', status code: %s.",
                        model_id,
                        repository_id,
                        status_code,
                    )
            except requests.exceptions.RequestException as e:
                logger.warning("Unable to get model %s from repository '%s'. %s", model_id, repository_id, e)
            logger.warning("Trying the public repository for model %s instead.", model_id)

        return self.get_model(kind, model_id, expand=expand)

    def search(
        self,
        kind: ModelType,
        query: Optional[str] = None,
        continuation_token: Optional[str] = None,
        repository_id: Optional[str] = None,
        page_size: int = DEFAULT_PAGE_SIZE,
    ) -> SearchResults:
        if page_size is None or page_size <= 0:
            raise InvalidArgumentValueError("pageSize should be greater than 0.")
        credentials = self._resolve_credentials(repository_id, action=f"search {kind.value} models")

        body = {
            "searchString": query or "",
            "pnpModelType": kind.wire_value,
            "continuationToken": continuation_token,
            "pageSize": page_size,
        }
        response = self._request(
            method="POST",
            route=MODELS_SEARCH_ROUTE,
            repository_id=repository_id,
            credentials=credentials,
            body=body,
        )
        return SearchResults.from_dict(_load_json(response))

    def create_or_update(
        self,
        kind: ModelType,
        content: str,
        etag: Optional[str] = None,
        repository_id: Optional[str] = None,
    ) -> ModelContext:
        """
        Creates or updates a model.

        The service rejects updates of published models. Checking the published state
        before calling is the caller's responsibility; concurrent writers are arbitrated
        by the service through the etag.
        """
        document = _validate_model_content(kind, content)
        credentials = self._resolve_credentials(repository_id, action=f"submit the {kind.value}")

        response = self._request(
            method="PUT",
            route=MODELS_ROUTE,
            repository_id=repository_id,
            credentials=credentials,
            body={"etag": etag, "contents": content},
        )
        payload = _load_json(response) or {}
        if not isinstance(payload, dict):
            payload = {}
        return ModelContext(
            content=content,
            resource_id=payload.get("resourceId") or response.headers.get(HEADER_MODEL_ID) or _get_id(document),
            published=payload.get("published"),
            etag=payload.get("etag") or response.headers.get(HEADER_ETAG),
            tags=payload.get("tags"),
        )

    def delete(self, kind: ModelType, model_id: Union[str, ModelUri], repository_id: Optional[str] = None):
        model_id = _ensure_valid_model_id(model_id)
        if not repository_id:
            raise RequiredArgumentMissingError(
                f"The repository id is required to delete the {kind.value}. Public models can not be deleted."
            )
        credentials = self._resolve_credentials(repository_id, action=f"delete the {kind.value}")

        response = self._request(
            method="DELETE",
            route=MODELS_ROUTE,
            params={"modelId": model_id},
            repository_id=repository_id,
            credentials=credentials,
        )
        logger.info("Delete of %s succeeded with status %d.", model_id, response.status_code)

    def publish(self, kind: ModelType, model_id: Union[str, ModelUri], repository_id: str):
        model_id = _ensure_valid_model_id(model_id)
        if not repository_id:
            raise RequiredArgumentMissingError(f"The repository id is required to publish the {kind.value}.")
        credentials = self._resolve_credentials(repository_id, action=f"publish the {kind.value}")

        response = self._request(
            method="PATCH",
            route=MODELS_PUBLISH_ROUTE,
            params={"modelId": model_id},
            repository_id=repository_id,
            credentials=credentials,
        )
        logger.info("Publish of %s succeeded with status %d.", model_id, response.status_code)

    def _resolve_credentials(self, repository_id: Optional[str], action: str) -> Optional[SharedAccessKey]:
        if not repository_id:
            return None
        if not self.credentials:
            raise RequiredArgumentMissingError(
                f"The repository connection string is required to {action} in repository '{repository_id}'."
            )
        return self.credentials

    def _request(
        self,
        method: str,
        route: str,
        params: Optional[dict] = None,
        repository_id: Optional[str] = None,
        credentials: Optional[SharedAccessKey] = None,
        body: Optional[dict] = None,
    ) -> requests.Response:
        query = dict(params or {})
        if repository_id:
            query["repositoryId"] = repository_id
        query["api-version"] = self.api_version

        headers = {"Accept": "application/json"}
        if credentials:
            headers["Authorization"] = credentials.generate_sas_token()

        url = f"{self.endpoint}{route}"
        logger.debug("%s %s %s", method, url, {k: v for k, v in query.items() if k != "api-version"})
        response = self.session.request(
            method=method,
            url=url,
            params=query,
            json=body,
            headers=headers,
            timeout=self.timeout,
        )
        if not response.ok:
            raise HTTPError(
                f"{method} {url} failed with status code {response.status_code}: {response.text}",
                response,
            )
        return response


def _load_json(response: requests.Response) -> Any:
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        logger.debug("Response body is not JSON: %s", response.text)
        return None


def _validate_model_content(kind: ModelType, content: str) -> dict:
    if not content:
        raise RequiredArgumentMissingError(f"The {kind.value} content is required.")
    try:
        document = json.loads(content)
    except ValueError as e:
        raise InvalidArgumentValueError(f"The {kind.value} content is not a valid JSON document. {e}")
    if not isinstance(document, dict):
        raise InvalidArgumentValueError(f"The {kind.value} content must be a JSON object.")

    declared_type = document.get(DTDL_TYPE_KEY)
    if declared_type:
        declared_types = declared_type if isinstance(declared_type, list) else [declared_type]
        if kind.dtdl_type not in declared_types:
            raise InvalidArgumentValueError(
                f"The content declares @type '{declared_type}' which does not match model type '{kind.value}'."
            )
    return document


def _get_id(document: dict) -> Optional[str]:
    return document.get(DTDL_ID_KEY)


def _ensure_valid_model_id(model_id: Union[str, ModelUri]) -> str:
    if isinstance(model_id, ModelUri):
        return model_id.id
    if not model_id:
        raise RequiredArgumentMissingError("The model id is required.")
    if is_path_model_id(model_id):
        return parse_model_uri(model_id).id
    return model_id
