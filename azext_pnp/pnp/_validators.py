# coding=utf-8
# ----------------------------------------------------------------------------------------------
# Copyright (c) Microsoft Corporation. All rights reserved.
# Licensed under the MIT License. See License file in the project root for license information.
# ----------------------------------------------------------------------------------------------


from argparse import Namespace
from azure.cli.core.azclierror import InvalidArgumentValueError


def validate_page_size(namespace: Namespace):
    for attr in ["page_size", "top"]:
        value = getattr(namespace, attr, None)
        if value is not None and value <= 0:
            raise InvalidArgumentValueError(
                f"Invalid value {value} for --{attr.replace('_', '-')}: must be greater than 0."
            )


def validate_model_id(namespace: Namespace):
    if hasattr(namespace, "model_id") and namespace.model_id:
        from .providers.model_repository.model_uri import is_path_model_id, parse_model_uri

        # urn style ids are validated by the service
        if is_path_model_id(namespace.model_id):
            parse_model_uri(namespace.model_id)
