# coding=utf-8
# ----------------------------------------------------------------------------------------------
# Copyright (c) Microsoft Corporation. All rights reserved.
# Licensed under the MIT License. See License file in the project root for license information.
# ----------------------------------------------------------------------------------------------
"""
Help content for IoT Plug and Play model repository commands.
"""

from knack.help_files import helps

from .common import (
    CONFIG_API_VERSION,
    CONFIG_PUBLIC_REPOSITORY_URL,
    CONFIG_ROOT_LABEL,
    DEFAULT_PUBLIC_REPOSITORY_URL,
)


def load_iotpnp_help():
    helps[
        "iot pnp"
    ] = """
        type: group
        short-summary: Manage IoT Plug and Play models.
    """

    helps[
        "iot pnp repo"
    ] = f"""
        type: group
        short-summary: Manage the model repository connection.
        long-summary: |
            Company repository commands are authenticated with the connection string stored by
            'az iot pnp repo configure' or the one passed through --login.

            The public repository endpoint defaults to {DEFAULT_PUBLIC_REPOSITORY_URL} and can be changed with
            'az config set {CONFIG_ROOT_LABEL}.{CONFIG_PUBLIC_REPOSITORY_URL}=<url>'. The service api version
            is read from '{CONFIG_ROOT_LABEL}.{CONFIG_API_VERSION}'.
    """

    helps[
        "iot pnp repo configure"
    ] = """
        type: command
        short-summary: Verify and store a company repository connection string.
        long-summary: The connection is verified with a single search request before it is stored.
        examples:
        - name: Configure the company repository.
          text: >
            az iot pnp repo configure --connection-string
            "HostName=repo.azureiotrepository.com;RepositoryId={repo_id};SharedAccessKeyName={key_name};SharedAccessKey={key}"
    """

    helps[
        "iot pnp repo show"
    ] = """
        type: command
        short-summary: Show the repository settings. The shared access key is redacted.
        examples:
        - name: Show the repository settings.
          text: >
            az iot pnp repo show
    """

    helps[
        "iot pnp repo clear"
    ] = """
        type: command
        short-summary: Remove the stored company repository connection string.
        examples:
        - name: Remove the stored connection string without a prompt.
          text: >
            az iot pnp repo clear -y
    """

    helps[
        "iot pnp model"
    ] = """
        type: group
        short-summary: Manage interfaces and capability models in the model repository.
    """

    helps[
        "iot pnp model show"
    ] = """
        type: command
        short-summary: Show a model.
        long-summary: |
            When a company repository is configured the model is looked up there first.
            If it can not be retrieved from the company repository, the public repository is used.
        examples:
        - name: Show an interface.
          text: >
            az iot pnp model show --model-id urn:contoso:Thermostat:1
        - name: Show a capability model with its interfaces expanded.
          text: >
            az iot pnp model show --model-id urn:contoso:Sensor:1 --type capabilityModel --expand
    """

    helps[
        "iot pnp model search"
    ] = """
        type: command
        short-summary: Search models.
        long-summary: |
            The company repository is searched when one is configured, otherwise the public repository.
            Pages are followed until all results or --top results are collected.
        examples:
        - name: Search interfaces by keyword.
          text: >
            az iot pnp model search --keyword thermostat
        - name: Search the first 10 capability models.
          text: >
            az iot pnp model search --type capabilityModel --top 10
    """

    helps[
        "iot pnp model create"
    ] = """
        type: command
        short-summary: Create a model in the company repository.
        examples:
        - name: Create a model from a DTDL file.
          text: >
            az iot pnp model create --model-file ./thermostat.json
    """

    helps[
        "iot pnp model update"
    ] = """
        type: command
        short-summary: Update an unpublished model in the company repository.
        examples:
        - name: Update a model using its current etag.
          text: >
            az iot pnp model update --model-file ./thermostat.json
        - name: Update a model only if it still matches a known etag.
          text: >
            az iot pnp model update --model-file ./thermostat.json --etag {etag}
    """

    helps[
        "iot pnp model delete"
    ] = """
        type: command
        short-summary: Delete a model from the company repository.
        examples:
        - name: Delete an interface.
          text: >
            az iot pnp model delete --model-id urn:contoso:Thermostat:1
    """

    helps[
        "iot pnp model publish"
    ] = """
        type: command
        short-summary: Publish a model of the company repository.
        long-summary: Published models can not be updated or deleted.
        examples:
        - name: Publish a capability model without a prompt.
          text: >
            az iot pnp model publish --model-id urn:contoso:Sensor:1 --type capabilityModel -y
    """

    helps[
        "iot pnp model download"
    ] = """
        type: command
        short-summary: Download models into json files.
        long-summary: |
            Each model is looked up in the company repository (if configured) and then in the public
            repository. Models which can not be found are reported as failed without stopping the download.
        examples:
        - name: Download two interfaces into the ./models directory.
          text: >
            az iot pnp model download --model-id urn:contoso:Thermostat:1 urn:contoso:Fan:1 --output-dir ./models
        - name: Download from the public repository only.
          text: >
            az iot pnp model download --model-id urn:contoso:Thermostat:1 --public
    """

    helps[
        "iot pnp model submit"
    ] = """
        type: command
        short-summary: Submit model files to the company repository.
        long-summary: |
            Existing models are skipped unless --overwrite is provided. Published models are never changed.
        examples:
        - name: Submit every model file of a directory, overwriting existing models.
          text: >
            az iot pnp model submit --model-file ./models/*.json --overwrite
    """
