# coding=utf-8
# ----------------------------------------------------------------------------------------------
# Copyright (c) Microsoft Corporation. All rights reserved.
# Licensed under the MIT License. See License file in the project root for license information.
# ----------------------------------------------------------------------------------------------

"""
shared: Define shared data types(enums) and constant strings.

"""

from enum import Enum


class ListableEnum(Enum):
    @classmethod
    def list(cls):
        return [c.value for c in cls]


class ModelType(ListableEnum):
    """
    Kinds of documents stored in the model repository.
    """

    interface = "interface"
    capability_model = "capabilityModel"

    @property
    def wire_value(self) -> str:
        """Value used for the pnpModelType search filter."""
        wire_map = {
            ModelType.interface: "Interface",
            ModelType.capability_model: "CapabilityModel",
        }
        return wire_map[self]

    @property
    def dtdl_type(self) -> str:
        """Value of @type in the model document."""
        return self.wire_value

    @classmethod
    def from_value(cls, value: str) -> "ModelType":
        lowered = value.lower() if isinstance(value, str) else ""
        for kind in cls:
            if lowered in (kind.value.lower(), kind.wire_value.lower()):
                return kind
        raise ValueError(f"Unknown model type '{value}'. Allowed values: {', '.join(cls.list())}.")


class RepositoryType(Enum):
    public = "Public repository"
    company = "Company repository"


# Model repository service
DEFAULT_API_VERSION = "2019-07-01-Preview"
DEFAULT_PAGE_SIZE = 20
DEFAULT_PUBLIC_REPOSITORY_URL = "https://repo.azureiotrepository.com"
SAS_TOKEN_TTL_SECONDS = 86400

MODELS_ROUTE = "/Models"
MODELS_SEARCH_ROUTE = "/Models/Search"
MODELS_PUBLISH_ROUTE = "/Models/Publish"

HEADER_ETAG = "ETag"
HEADER_MODEL_ID = "x-ms-model-id"
HEADER_MODEL_PUBLISHED = "x-ms-model-published"

# DTDL document keys
DTDL_ID_KEY = "@id"
DTDL_TYPE_KEY = "@type"

# Configuration
CONFIG_ROOT_LABEL = "iotpnp"
CONFIG_PUBLIC_REPOSITORY_URL = "public_repository_url"
CONFIG_API_VERSION = "api_version"
SESSION_FILE_NAME = "iotPnpRepository.json"
SESSION_KEY_CONNECTION_STRING = "connectionString"
