# coding=utf-8
# ----------------------------------------------------------------------------------------------
# Copyright (c) Microsoft Corporation. All rights reserved.
# Licensed under the MIT License. See License file in the project root for license information.
# ----------------------------------------------------------------------------------------------

import json
import os

import pytest
import requests
import responses
from azure.cli.core.azclierror import HTTPError, RequiredArgumentMissingError
from responses import matchers

from azext_pnp.pnp.common import DEFAULT_API_VERSION, ModelType, RepositoryType
from azext_pnp.pnp.providers.model_repository import (
    ModelContext,
    ModelRepositoryClient,
    ModelRepositoryManager,
    ModelSummary,
    RepositorySettings,
    SearchResults,
    parse_connection_string,
)
from azext_pnp.pnp.providers.model_repository.manager import get_model_type

from ...generators import BASE_URL, generate_connection_string, generate_model, generate_random_string

MODELS_URL = f"{BASE_URL}/Models"


def _http_error(status_code: int) -> HTTPError:
    class Stub:
        pass

    response = Stub()
    response.status_code = status_code
    return HTTPError(f"failed with status code {status_code}", response)


def _client(mocker, endpoint: str):
    client = mocker.Mock(spec=ModelRepositoryClient)
    client.endpoint = endpoint
    return client


@pytest.fixture
def public_client(mocker):
    yield _client(mocker, "https://public.contoso.com")


@pytest.fixture
def company_client(mocker):
    yield _client(mocker, BASE_URL)


@pytest.fixture
def manager(public_client, company_client):
    yield ModelRepositoryManager(
        public_client=public_client, company_client=company_client, company_repository_id="r1"
    )


def _write_model(tmp_path, model: dict) -> str:
    file_path = os.path.join(str(tmp_path), f"{generate_random_string(8)}.json")
    with open(file_path, "w", encoding="utf-8") as f:
        json.dump(model, f)
    return file_path


def test_list_repositories(public_client, company_client):
    manager = ModelRepositoryManager(public_client=public_client)
    assert [target.repository_type for target in manager.list_repositories()] == [RepositoryType.public]
    with pytest.raises(RequiredArgumentMissingError):
        manager.get_target()

    manager = ModelRepositoryManager(
        public_client=public_client, company_client=company_client, company_repository_id="r1"
    )
    targets = manager.list_repositories()
    assert [target.repository_type for target in targets] == [RepositoryType.company, RepositoryType.public]
    assert targets[0].repository_id == "r1"
    assert targets[1].repository_id is None
    assert "'r1'" in targets[0].display_name


@pytest.mark.parametrize("repository_id", [None, "override"])
def test_from_settings(repository_id):
    connection_string = parse_connection_string(generate_connection_string(repository_id="r1"))
    settings = RepositorySettings(
        public_repository_url="public.contoso.com", api_version="2020-01-01", connection_string=connection_string
    )
    manager = ModelRepositoryManager.from_settings(settings, repository_id=repository_id, timeout=5)

    assert manager.public.client.endpoint == "https://public.contoso.com"
    assert manager.public.client.credentials is None
    assert manager.company.client.endpoint == BASE_URL
    assert manager.company.client.credentials is not None
    assert manager.company.client.api_version == "2020-01-01"
    assert manager.company.client.timeout == 5
    assert manager.company.repository_id == (repository_id or "r1")
    manager.close()

    manager = ModelRepositoryManager.from_settings(settings._replace(connection_string=None))
    assert manager.company is None


def test_download_models_fallback(manager, public_client, company_client, tmp_path):
    model_id = "urn:x:Thermostat:1"
    company_client.get_model.side_effect = _http_error(404)
    public_client.get_model.return_value = ModelContext(
        content=json.dumps(generate_model(model_id=model_id)), resource_id=model_id
    )

    result = manager.download_models([model_id, model_id], output_dir=str(tmp_path))

    assert result["failed"] == []
    assert len(result["downloaded"]) == 1
    file_path = result["downloaded"][0]["file"]
    assert file_path == os.path.join(str(tmp_path), "urn_x_Thermostat_1.json")
    with open(file_path, encoding="utf-8") as f:
        assert json.load(f)["@id"] == model_id

    company_client.get_model.assert_called_once_with(
        ModelType.interface, model_id, repository_id="r1", expand=True
    )
    public_client.get_model.assert_called_once_with(ModelType.interface, model_id, repository_id=None, expand=True)


def test_download_models_continues_on_failure(manager, public_client, company_client, tmp_path):
    found_id = "urn:x:Found:1"

    def _get_model(kind, model_id, repository_id=None, expand=False):
        if model_id == found_id and repository_id is None:
            return ModelContext(content=json.dumps({"@id": found_id}), resource_id=found_id)
        if repository_id:
            raise requests.exceptions.ConnectionError("connection refused")
        raise _http_error(500)

    company_client.get_model.side_effect = _get_model
    public_client.get_model.side_effect = _get_model

    result = manager.download_models(["urn:x:Missing:1", found_id], output_dir=str(tmp_path))

    assert [record["modelId"] for record in result["failed"]] == ["urn:x:Missing:1"]
    assert [record["modelId"] for record in result["downloaded"]] == [found_id]


def test_download_models_from_public(manager, public_client, company_client, tmp_path):
    public_client.get_model.return_value = ModelContext(content="{}", resource_id="urn:x:a:1")
    result = manager.download_models(["urn:x:a:1"], output_dir=str(tmp_path), expand=False, from_public=True)

    assert len(result["downloaded"]) == 1
    company_client.get_model.assert_not_called()


def test_download_models_company_without_key(mocked_responses: responses.RequestsMock, public_client, tmp_path):
    model_id = "urn:x:Thermostat:1"
    company_client = ModelRepositoryClient.from_connection_string(
        generate_connection_string(repository_id="r1", include_key=False)
    )
    public_client.get_model.return_value = ModelContext(
        content=json.dumps(generate_model(model_id=model_id)), resource_id=model_id
    )
    manager = ModelRepositoryManager(
        public_client=public_client, company_client=company_client, company_repository_id="r1"
    )

    result = manager.download_models([model_id], output_dir=str(tmp_path))

    assert result["failed"] == []
    assert [record["modelId"] for record in result["downloaded"]] == [model_id]
    public_client.get_model.assert_called_once_with(ModelType.interface, model_id, repository_id=None, expand=True)
    assert len(mocked_responses.calls) == 0


def test_download_models_requires_ids(manager):
    with pytest.raises(RequiredArgumentMissingError):
        manager.download_models([])


def test_submit_models(manager, company_client, tmp_path):
    new_model = generate_model(model_id="urn:x:New:1")
    existing_model = generate_model(model_id="urn:x:Existing:1", model_type="CapabilityModel")
    published_model = generate_model(model_id="urn:x:Published:1")
    files = [_write_model(tmp_path, model) for model in [new_model, existing_model, published_model]]
    invalid_file = os.path.join(str(tmp_path), "invalid.json")
    with open(invalid_file, "w", encoding="utf-8") as f:
        f.write("{not json")
    files.append(invalid_file)

    def _get_model(kind, model_id, repository_id=None, expand=False):
        if model_id == existing_model["@id"]:
            return ModelContext(content="{}", resource_id=model_id, published=False, etag="e1")
        if model_id == published_model["@id"]:
            return ModelContext(content="{}", resource_id=model_id, published=True, etag="e2")
        raise _http_error(404)

    company_client.get_model.side_effect = _get_model
    company_client.create_or_update.return_value = ModelContext(content="{}", etag="new-etag")

    result = manager.submit_models(files)

    assert [record["modelId"] for record in result["submitted"]] == [new_model["@id"]]
    assert result["submitted"][0]["etag"] == "new-etag"
    assert [record["modelId"] for record in result["skipped"]] == [existing_model["@id"]]
    assert [record["file"] for record in result["failed"]] == [files[2], invalid_file]
    assert "published" in result["failed"][0]["reason"]

    company_client.create_or_update.assert_called_once()
    args, kwargs = company_client.create_or_update.call_args
    assert args[0] == ModelType.interface
    assert json.loads(args[1]) == new_model
    assert kwargs == {"etag": None, "repository_id": "r1"}


def test_submit_models_overwrite(manager, company_client, tmp_path):
    model = generate_model(model_id="urn:x:Existing:1", model_type="CapabilityModel")
    company_client.get_model.return_value = ModelContext(content="{}", published=False, etag="e1")
    company_client.create_or_update.return_value = ModelContext(content="{}", etag="e2")

    result = manager.submit_models([_write_model(tmp_path, model)], overwrite=True)

    assert len(result["submitted"]) == 1
    args, kwargs = company_client.create_or_update.call_args
    assert args[0] == ModelType.capability_model
    assert kwargs["etag"] == "e1"


def test_submit_models_requires_company(public_client, tmp_path):
    manager = ModelRepositoryManager(public_client=public_client)
    with pytest.raises(RequiredArgumentMissingError):
        manager.submit_models([_write_model(tmp_path, generate_model())])


def test_delete_models(manager, company_client):
    company_client.delete.side_effect = [_http_error(404), None]

    result = manager.delete_models(["urn:x:a:1", "urn:x:b:1"], kind=ModelType.capability_model)

    assert [record["modelId"] for record in result["failed"]] == ["urn:x:a:1"]
    assert result["deleted"] == [{"modelId": "urn:x:b:1"}]
    company_client.delete.assert_called_with(ModelType.capability_model, "urn:x:b:1", repository_id="r1")


def test_delete_models_invalid_model_id(mocked_responses: responses.RequestsMock, public_client):
    valid_id = "urn:contoso:Good:1"
    mocked_responses.add(
        method=responses.DELETE,
        url=MODELS_URL,
        status=204,
        match=[
            matchers.query_param_matcher(
                {"modelId": valid_id, "repositoryId": "r1", "api-version": DEFAULT_API_VERSION}
            )
        ],
    )
    company_client = ModelRepositoryClient.from_connection_string(generate_connection_string(repository_id="r1"))
    manager = ModelRepositoryManager(
        public_client=public_client, company_client=company_client, company_repository_id="r1"
    )

    result = manager.delete_models(["contoso/1bad/1.0.0", valid_id])

    assert [record["modelId"] for record in result["failed"]] == ["contoso/1bad/1.0.0"]
    assert "name '1bad'" in result["failed"][0]["reason"]
    assert result["deleted"] == [{"modelId": valid_id}]
    assert len(mocked_responses.calls) == 1


@pytest.mark.parametrize("top, expected_count, expected_calls", [(None, 5, 3), (3, 3, 2), (2, 2, 1)])
def test_search_all(manager, company_client, top, expected_count, expected_calls):
    pages = [
        SearchResults(results=[ModelSummary(urn_id=f"urn:x:{i}:1") for i in range(2)], continuation_token="t1=="),
        SearchResults(results=[ModelSummary(urn_id=f"urn:x:{i}:1") for i in range(2, 4)], continuation_token="t2+"),
        SearchResults(results=[ModelSummary(urn_id="urn:x:4:1")]),
    ]
    company_client.search.side_effect = pages

    result = manager.search_all(ModelType.interface, query="x", top=top, page_size=2)

    assert len(result) == expected_count
    assert company_client.search.call_count == expected_calls
    tokens = [call.kwargs["continuation_token"] for call in company_client.search.call_args_list]
    assert tokens == [None, "t1==", "t2+"][:expected_calls]


def test_search_all_public(public_client, company_client, manager):
    public_client.search.return_value = SearchResults(results=[])

    assert ModelRepositoryManager(public_client=public_client).search_all(ModelType.interface) == []
    assert manager.search_all(ModelType.interface, from_public=True) == []
    company_client.search.assert_not_called()
    assert public_client.search.call_args.kwargs["repository_id"] is None


def test_test_connection(manager, company_client):
    target = manager.test_connection()
    assert target.repository_type == RepositoryType.company
    company_client.search.assert_called_once_with(ModelType.interface, query="", repository_id="r1", page_size=1)


@pytest.mark.parametrize(
    "declared_type, expected",
    [
        ("Interface", ModelType.interface),
        ("CapabilityModel", ModelType.capability_model),
        (["Relationship", "Interface"], ModelType.interface),
        ("interface", ModelType.interface),
    ],
)
def test_get_model_type(declared_type, expected):
    assert get_model_type({"@type": declared_type}) == expected


@pytest.mark.parametrize("declared_type", [None, "Telemetry", ["Relationship"]])
def test_get_model_type_error(declared_type):
    with pytest.raises(ValueError):
        get_model_type({"@type": declared_type})
