# coding=utf-8
# ----------------------------------------------------------------------------------------------
# Copyright (c) Microsoft Corporation. All rights reserved.
# Licensed under the MIT License. See License file in the project root for license information.
# ----------------------------------------------------------------------------------------------

import re
from typing import NamedTuple
from urllib.parse import urlparse

from azure.cli.core.azclierror import ValidationError

MODEL_ID_DELIMITER = "/"

_MODEL_ID_RE = re.compile(r"^[A-Za-z0-9\-._:/]{1,64}$")
_MODEL_NAME_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]{0,64}$")
_MODEL_VERSION_RE = re.compile(r"^\d+\.\d+\.\d+$")


class ModelUri(NamedTuple):
    id: str
    namespace: str
    name: str
    version: str


def parse_model_uri(model_id: str) -> ModelUri:
    """Parses a '/' delimited model id of the form <namespace>/<name>/<major.minor.patch>.

    :param model_id: The model id being parsed
    :type model_id: str
    :returns: ModelUri with the namespace (which may itself contain '/'), name and version.
    :raises ValidationError: naming the grammar rule the model id violates.
    """
    if not model_id:
        raise ValidationError("The model id could not be empty.")

    try:
        urlparse(model_id)
    except ValueError as e:
        raise ValidationError(f"Model id '{model_id}' is not a well-formed URI. {e}")

    if not _MODEL_ID_RE.match(model_id):
        raise ValidationError(
            f"Model id '{model_id}' is not valid. Only alphanumeric characters and '-._:/' are allowed, "
            "with at most 64 characters."
        )

    segments = model_id.split(MODEL_ID_DELIMITER)
    if len(segments) < 3:
        raise ValidationError(
            f"Model id '{model_id}' should contain a minimum of 3 parts: <namespace>/<name>/<version>."
        )
    if not all(segments[:-2]):
        raise ValidationError(f"Model id '{model_id}' namespace segments can not be empty.")

    version = segments[-1]
    if not _MODEL_VERSION_RE.match(version):
        raise ValidationError(f"Model id '{model_id}' version '{version}' is not valid, expected major.minor.patch.")

    name = segments[-2]
    if not _MODEL_NAME_RE.match(name):
        raise ValidationError(
            f"Model id '{model_id}' name '{name}' is not valid. The name must start with a letter or underscore "
            "and contain only alphanumeric characters and underscores."
        )

    namespace = model_id[: len(model_id) - (len(version) + 1 + len(name) + 1)]
    return ModelUri(id=model_id, namespace=namespace, name=name, version=version)


def is_path_model_id(model_id: str) -> bool:
    return isinstance(model_id, str) and MODEL_ID_DELIMITER in model_id
