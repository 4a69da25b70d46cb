# coding=utf-8
# ----------------------------------------------------------------------------------------------
# Copyright (c) Microsoft Corporation. All rights reserved.
# Licensed under the MIT License. See License file in the project root for license information.
# ----------------------------------------------------------------------------------------------

from typing import Iterable, List, NamedTuple, Optional

import requests
from azure.cli.core.azclierror import (
    AzCLIError,
    HTTPError,
    RequiredArgumentMissingError,
)
from knack.log import get_logger
from rich.console import Console

from ...common import (
    DEFAULT_PAGE_SIZE,
    DTDL_ID_KEY,
    DTDL_TYPE_KEY,
    ModelType,
    RepositoryType,
)
from ...util import dedupe, dump_model_to_file, read_model_file
from .client import ModelRepositoryClient
from .contracts import ModelContext, ModelSummary
from .settings import RepositorySettings

logger = get_logger(__name__)
console = Console(stderr=True)

CONNECTION_STRING_NOT_FOUND_MSG = (
    "Company repository connection string is not found. Configure one with "
    "'az iot pnp repo configure' or provide --login."
)


class RepositoryTarget(NamedTuple):
    client: ModelRepositoryClient
    repository_type: RepositoryType
    repository_id: Optional[str] = None

    @property
    def display_name(self) -> str:
        if self.repository_id:
            return f"{self.repository_type.value} '{self.repository_id}' ({self.client.endpoint})"
        return f"{self.repository_type.value} ({self.client.endpoint})"


class ModelRepositoryManager:
    """
    Bulk model operations over the company and public repositories.

    Per-model failures are logged and reported in the result summary rather than raised,
    so one bad model does not abort the rest of the batch.
    """

    def __init__(
        self,
        public_client: ModelRepositoryClient,
        company_client: Optional[ModelRepositoryClient] = None,
        company_repository_id: Optional[str] = None,
    ):
        self.public = RepositoryTarget(client=public_client, repository_type=RepositoryType.public)
        self.company = None
        if company_client:
            self.company = RepositoryTarget(
                client=company_client,
                repository_type=RepositoryType.company,
                repository_id=company_repository_id,
            )

    @classmethod
    def from_settings(
        cls,
        settings: RepositorySettings,
        repository_id: Optional[str] = None,
        timeout: Optional[float] = None,
    ) -> "ModelRepositoryManager":
        public_client = ModelRepositoryClient.public(
            settings.public_repository_url, api_version=settings.api_version, timeout=timeout
        )
        company_client = None
        company_repository_id = None
        if settings.connection_string:
            company_client = ModelRepositoryClient.from_connection_string(
                settings.connection_string, api_version=settings.api_version, timeout=timeout
            )
            company_repository_id = repository_id or settings.connection_string.repository_id
        return cls(
            public_client=public_client,
            company_client=company_client,
            company_repository_id=company_repository_id,
        )

    def close(self):
        for target in self.list_repositories():
            target.client.close()

    def list_repositories(self) -> List[RepositoryTarget]:
        """Company repository (if configured) is prior to the public repository."""
        targets = []
        if self.company:
            targets.append(self.company)
        targets.append(self.public)
        return targets

    def get_target(self, from_public: bool = False) -> RepositoryTarget:
        if from_public:
            return self.public
        if not self.company:
            raise RequiredArgumentMissingError(CONNECTION_STRING_NOT_FOUND_MSG)
        return self.company

    def test_connection(self) -> RepositoryTarget:
        target = self.get_target()
        target.client.search(ModelType.interface, query="", repository_id=target.repository_id, page_size=1)
        return target

    def search_all(
        self,
        kind: ModelType,
        query: Optional[str] = None,
        top: Optional[int] = None,
        page_size: int = DEFAULT_PAGE_SIZE,
        continuation_token: Optional[str] = None,
        from_public: bool = False,
    ) -> List[ModelSummary]:
        """
        Searches the company repository when configured, otherwise the public one.

        Continuation tokens are passed back to the service verbatim until the results
        are exhausted or top summaries are collected.
        """
        target = self.public if from_public or not self.company else self.company
        result: List[ModelSummary] = []
        while True:
            page = target.client.search(
                kind,
                query=query,
                continuation_token=continuation_token,
                repository_id=target.repository_id,
                page_size=page_size,
            )
            result.extend(page.results)
            logger.debug("Fetched %d %s models so far from %s.", len(result), kind.value, target.display_name)
            if top and len(result) >= top:
                return result[:top]
            continuation_token = page.continuation_token
            if not continuation_token or not page.results:
                return result

    def download_models(
        self,
        model_ids: Iterable[str],
        output_dir: Optional[str] = None,
        kind: ModelType = ModelType.interface,
        expand: bool = True,
        from_public: bool = False,
    ) -> dict:
        model_ids = dedupe(model_ids)
        if not model_ids:
            raise RequiredArgumentMissingError("At least one model id is required.")

        targets = [self.public] if from_public else self.list_repositories()
        summary = {"downloaded": [], "failed": []}
        with console.status("Downloading models..."):
            for model_id in model_ids:
                model = self._get_first_available(targets, kind=kind, model_id=model_id, expand=expand)
                if not model:
                    summary["failed"].append({"modelId": model_id, "reason": "Model not found."})
                    continue
                try:
                    file_path = dump_model_to_file(
                        model_id=model.resource_id or model_id, content=model.content, output_dir=output_dir
                    )
                except OSError as e:
                    logger.error("Failed to write model %s. %s", model_id, e)
                    summary["failed"].append({"modelId": model_id, "reason": str(e)})
                    continue
                summary["downloaded"].append({"modelId": model_id, "file": str(file_path)})
        return summary

    def submit_models(self, file_paths: Iterable[str], overwrite: bool = False) -> dict:
        file_paths = dedupe(file_paths)
        if not file_paths:
            raise RequiredArgumentMissingError("At least one model file is required.")

        target = self.get_target()
        summary = {"submitted": [], "skipped": [], "failed": []}
        with console.status("Submitting models..."):
            for file_path in file_paths:
                try:
                    record = self._submit_model(target, file_path=file_path, overwrite=overwrite)
                except (AzCLIError, requests.exceptions.RequestException, ValueError) as e:
                    logger.error("Failed to submit %s. %s", file_path, e)
                    summary["failed"].append({"file": file_path, "reason": str(e)})
                    continue
                summary[record.pop("status")].append(record)
        return summary

    def delete_models(self, model_ids: Iterable[str], kind: ModelType = ModelType.interface) -> dict:
        model_ids = dedupe(model_ids)
        if not model_ids:
            raise RequiredArgumentMissingError("At least one model id is required.")

        target = self.get_target()
        summary = {"deleted": [], "failed": []}
        with console.status("Deleting models..."):
            for model_id in model_ids:
                try:
                    target.client.delete(kind, model_id, repository_id=target.repository_id)
                except (AzCLIError, requests.exceptions.RequestException) as e:
                    logger.error("Failed to delete model %s. %s", model_id, e)
                    summary["failed"].append({"modelId": model_id, "reason": str(e)})
                    continue
                summary["deleted"].append({"modelId": model_id})
        return summary

    def _get_first_available(
        self, targets: List[RepositoryTarget], kind: ModelType, model_id: str, expand: bool
    ) -> Optional[ModelContext]:
        for target in targets:
            try:
                return target.client.get_model(
                    kind, model_id, repository_id=target.repository_id, expand=expand
                )
            except HTTPError as e:
                status_code = getattr(e.response, "status_code", None)
                if status_code == 404:
                    logger.warning("Model %s is not found in %s.", model_id, target.display_name)
                else:
                    logger.error(
                        "Failed to get model %s from %s, status code: %s.", model_id, target.display_name, status_code
                    )
            except (AzCLIError, requests.exceptions.RequestException) as e:
                logger.error("Failed to get model %s from %s. %s", model_id, target.display_name, e)

    def _submit_model(self, target: RepositoryTarget, file_path: str, overwrite: bool) -> dict:
        content, document = read_model_file(file_path)
        model_id = document.get(DTDL_ID_KEY)
        if not model_id:
            raise ValueError(f"{file_path} does not declare {DTDL_ID_KEY}.")
        kind = get_model_type(document)

        existing = None
        try:
            existing = target.client.get_model(kind, model_id, repository_id=target.repository_id)
        except HTTPError as e:
            # 404 means it is a new model
            if getattr(e.response, "status_code", None) != 404:
                raise

        record = {"modelId": model_id, "file": file_path}
        if existing:
            if existing.published:
                raise ValueError(f"Model {model_id} is published and can not be updated.")
            if not overwrite:
                logger.warning("Skip overwrite of existing model %s.", model_id)
                record["status"] = "skipped"
                record["reason"] = "Model already exists."
                return record

        result = target.client.create_or_update(
            kind,
            content,
            etag=existing.etag if existing else None,
            repository_id=target.repository_id,
        )
        record["status"] = "submitted"
        record["etag"] = result.etag
        return record


def get_model_type(document: dict) -> ModelType:
    declared_type = document.get(DTDL_TYPE_KEY)
    declared_types = declared_type if isinstance(declared_type, list) else [declared_type]
    for value in declared_types:
        try:
            return ModelType.from_value(value)
        except ValueError:
            continue
    raise ValueError(f"Unable to determine the model type from {DTDL_TYPE_KEY} '{declared_type}'.")
