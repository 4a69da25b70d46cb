# coding=utf-8
# ----------------------------------------------------------------------------------------------
# Copyright (c) Microsoft Corporation. All rights reserved.
# Licensed under the MIT License. See License file in the project root for license information.
# ----------------------------------------------------------------------------------------------

from azure.cli.core import AzCommandsLoader
from azext_pnp.constants import VERSION


class PnPExtensionCommandsLoader(AzCommandsLoader):
    def __init__(self, cli_ctx=None):
        super(PnPExtensionCommandsLoader, self).__init__(cli_ctx=cli_ctx)

    def load_command_table(self, args):
        from azext_pnp.pnp._help import load_iotpnp_help
        from azext_pnp.pnp.command_map import load_iotpnp_commands

        load_iotpnp_help()
        load_iotpnp_commands(self, args)

        return self.command_table

    def load_arguments(self, command):
        from azext_pnp.pnp.params import load_iotpnp_arguments

        load_iotpnp_arguments(self, command)


COMMAND_LOADER_CLS = PnPExtensionCommandsLoader

__version__ = VERSION
