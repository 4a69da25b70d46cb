# coding=utf-8
# ----------------------------------------------------------------------------------------------
# Copyright (c) Microsoft Corporation. All rights reserved.
# Licensed under the MIT License. See License file in the project root for license information.
# ----------------------------------------------------------------------------------------------

"""
Load CLI commands
"""
from azure.cli.core.commands import CliCommandType

repository_ops = CliCommandType(operations_tmpl="azext_pnp.pnp.commands_repository#{}")
model_ops = CliCommandType(operations_tmpl="azext_pnp.pnp.commands_models#{}")


def load_iotpnp_commands(self, _):
    """
    Load CLI commands
    """
    with self.command_group(
        "iot pnp repo",
        command_type=repository_ops,
    ) as cmd_group:
        cmd_group.command("configure", "configure_repository")
        cmd_group.show_command("show", "show_repository")
        cmd_group.command("clear", "clear_repository")

    with self.command_group(
        "iot pnp model",
        command_type=model_ops,
    ) as cmd_group:
        cmd_group.show_command("show", "show_model")
        cmd_group.command("search", "search_models")
        cmd_group.command("create", "create_model")
        cmd_group.command("update", "update_model")
        cmd_group.command("delete", "delete_model")
        cmd_group.command("publish", "publish_model")
        cmd_group.command("download", "download_models", is_preview=True)
        cmd_group.command("submit", "submit_models", is_preview=True)
