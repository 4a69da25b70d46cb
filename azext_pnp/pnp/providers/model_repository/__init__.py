# coding=utf-8
# ----------------------------------------------------------------------------------------------
# Copyright (c) Microsoft Corporation. All rights reserved.
# Licensed under the MIT License. See License file in the project root for license information.
# ----------------------------------------------------------------------------------------------

from .auth import SharedAccessKey
from .client import ModelRepositoryClient
from .connection import ConnectionString, parse_connection_string
from .contracts import ModelContext, ModelSummary, SearchResults
from .manager import ModelRepositoryManager
from .model_uri import ModelUri, parse_model_uri
from .settings import ConnectionStore, RepositorySettings, load_settings

__all__ = [
    "ConnectionStore",
    "ConnectionString",
    "ModelContext",
    "ModelRepositoryClient",
    "ModelRepositoryManager",
    "ModelSummary",
    "ModelUri",
    "RepositorySettings",
    "SearchResults",
    "SharedAccessKey",
    "load_settings",
    "parse_connection_string",
    "parse_model_uri",
]
