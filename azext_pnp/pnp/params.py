# coding=utf-8
# ----------------------------------------------------------------------------------------------
# Copyright (c) Microsoft Corporation. All rights reserved.
# Licensed under the MIT License. See License file in the project root for license information.
# ----------------------------------------------------------------------------------------------

"""
CLI parameter definitions.
"""

from azure.cli.core.commands.parameters import (
    get_enum_type,
    get_three_state_flag,
)

from ._validators import validate_model_id, validate_page_size
from .common import ModelType


def load_iotpnp_arguments(self, _):
    """
    Load CLI Args for Knack parser
    """

    with self.argument_context("iot pnp") as context:
        context.argument(
            "confirm_yes",
            options_list=["--yes", "-y"],
            arg_type=get_three_state_flag(),
            help="Confirm [y]es without a prompt. Useful for CI and automation scenarios.",
        )
        context.argument(
            "login",
            options_list=["--login", "-l"],
            help="Company repository connection string. When provided it is used instead of the connection "
            "string stored by 'az iot pnp repo configure'.",
            arg_group="Access Control",
        )
        context.argument(
            "repo_id",
            options_list=["--repo-id", "-r"],
            help="Company repository Id. Defaults to the RepositoryId of the connection string.",
            arg_group="Access Control",
        )

    with self.argument_context("iot pnp repo") as context:
        context.argument(
            "connection_string",
            options_list=["--connection-string", "--cs"],
            help="Company repository connection string in the form "
            "HostName=<host>;RepositoryId=<id>;SharedAccessKeyName=<name>;SharedAccessKey=<key>.",
        )

    with self.argument_context("iot pnp model") as context:
        context.argument(
            "model_id",
            options_list=["--model-id", "-m"],
            help="Target model Id, either a urn id such as 'urn:contoso:Thermostat:1' "
            "or a path id such as 'contoso/Thermostat/1.0.0'.",
            validator=validate_model_id,
        )
        context.argument(
            "model_type",
            options_list=["--type", "-t"],
            help="Model type.",
            arg_type=get_enum_type(ModelType.list()),
        )
        context.argument(
            "model_file",
            options_list=["--model-file", "-f"],
            help="Path to the DTDL model file. The model type is determined from the @type of the document.",
        )
        context.argument(
            "etag",
            options_list=["--etag", "-e"],
            help="Entity tag of the model to update. Defaults to the current etag of the model.",
        )
        context.argument(
            "expand",
            options_list=["--expand"],
            arg_type=get_three_state_flag(),
            help="Expand the referenced interfaces of a capability model.",
        )

    with self.argument_context("iot pnp model search") as context:
        context.argument(
            "keyword",
            options_list=["--keyword", "-q"],
            help="Keyword to search for within model ids, display names and descriptions.",
        )
        context.argument(
            "top",
            options_list=["--top"],
            type=int,
            help="Maximum number of models to return. By default all matching models are returned.",
            validator=validate_page_size,
        )
        context.argument(
            "page_size",
            options_list=["--page-size"],
            type=int,
            help="Number of models requested per page.",
            validator=validate_page_size,
        )
        context.argument(
            "continuation_token",
            options_list=["--continuation-token", "--ct"],
            help="Continuation token returned by a previous search to resume from.",
        )

    with self.argument_context("iot pnp model download") as context:
        context.argument(
            "model_ids",
            options_list=["--model-id", "-m"],
            nargs="+",
            action="extend",
            help="Space-separated model Ids to download.",
        )
        context.argument(
            "output_dir",
            options_list=["--output-dir", "--od"],
            help="Output directory for the model files. Defaults to the current directory.",
        )
        context.argument(
            "from_public",
            options_list=["--public"],
            arg_type=get_three_state_flag(),
            help="Download from the public repository only.",
        )

    with self.argument_context("iot pnp model submit") as context:
        context.argument(
            "model_files",
            options_list=["--model-file", "-f"],
            nargs="+",
            action="extend",
            help="Space-separated paths of DTDL model files to submit.",
        )
        context.argument(
            "overwrite",
            options_list=["--overwrite"],
            arg_type=get_three_state_flag(),
            help="Overwrite models that already exist in the company repository.",
        )
