# coding=utf-8
# ----------------------------------------------------------------------------------------------
# Copyright (c) Microsoft Corporation. All rights reserved.
# Licensed under the MIT License. See License file in the project root for license information.
# ----------------------------------------------------------------------------------------------

import re
from typing import Dict, NamedTuple, Optional

from azure.cli.core.azclierror import InvalidArgumentValueError
from knack.log import get_logger

logger = get_logger(__name__)

VALUE_PAIR_DELIMITER = ";"
VALUE_PAIR_SEPARATOR = "="

HOST_NAME_PROPERTY = "HostName"
REPOSITORY_ID_PROPERTY = "RepositoryId"
SHARED_ACCESS_KEY_NAME_PROPERTY = "SharedAccessKeyName"
SHARED_ACCESS_KEY_PROPERTY = "SharedAccessKey"

_HOST_NAME_RE = re.compile(r"^(https?://)?[a-zA-Z0-9_\-\.]+$")
_SHARED_ACCESS_KEY_NAME_RE = re.compile(r"^[a-zA-Z0-9_\-@\.]+$")
_SHARED_ACCESS_KEY_RE = re.compile(r"^.+$")
_URL_PROTOCOL_RE = re.compile(r"^[a-zA-Z]+://")

HTTPS_PROTOCOL = "https://"


class ConnectionString(NamedTuple):
    host_name: str
    repository_id: str
    shared_access_key_name: Optional[str] = None
    shared_access_key: Optional[str] = None

    @property
    def endpoint(self) -> str:
        return enforce_https(self.host_name)

    @property
    def has_shared_access_key(self) -> bool:
        return bool(self.shared_access_key_name and self.shared_access_key)

    def to_connection_string(self) -> str:
        pairs = [
            (HOST_NAME_PROPERTY, self.host_name),
            (REPOSITORY_ID_PROPERTY, self.repository_id),
            (SHARED_ACCESS_KEY_NAME_PROPERTY, self.shared_access_key_name),
            (SHARED_ACCESS_KEY_PROPERTY, self.shared_access_key),
        ]
        return VALUE_PAIR_DELIMITER.join(f"{key}{VALUE_PAIR_SEPARATOR}{value}" for key, value in pairs if value)

    def redacted(self) -> dict:
        return {
            "hostName": self.host_name,
            "repositoryId": self.repository_id,
            "sharedAccessKeyName": self.shared_access_key_name,
            "sharedAccessKey": "***" if self.shared_access_key else None,
        }


def parse_connection_string(connection_string: str) -> ConnectionString:
    """
    Parses a model repository connection string of the form
    HostName=<host>;RepositoryId=<id>;SharedAccessKeyName=<name>;SharedAccessKey=<secret>.

    Unknown keys are ignored. HostName and RepositoryId are required.
    """
    if not connection_string:
        raise InvalidArgumentValueError("The connection string should not be empty.")

    items: Dict[str, str] = {}
    for pair in connection_string.split(VALUE_PAIR_DELIMITER):
        key, sep, value = pair.partition(VALUE_PAIR_SEPARATOR)
        if not sep or not key or not value:
            raise InvalidArgumentValueError(f"The format of the connection string is not valid: '{pair}'.")
        items[key] = value

    host_name = items.get(HOST_NAME_PROPERTY)
    repository_id = items.get(REPOSITORY_ID_PROPERTY)
    if not host_name:
        raise InvalidArgumentValueError("Unable to find the host name in the connection string.")
    if not repository_id:
        raise InvalidArgumentValueError("Unable to find the repositoryId in the connection string.")

    result = ConnectionString(
        host_name=host_name,
        repository_id=repository_id,
        shared_access_key_name=items.get(SHARED_ACCESS_KEY_NAME_PROPERTY),
        shared_access_key=items.get(SHARED_ACCESS_KEY_PROPERTY),
    )
    _validate_format(result.host_name, HOST_NAME_PROPERTY, _HOST_NAME_RE)
    _validate_format(result.shared_access_key_name, SHARED_ACCESS_KEY_NAME_PROPERTY, _SHARED_ACCESS_KEY_NAME_RE)
    _validate_format(result.shared_access_key, SHARED_ACCESS_KEY_PROPERTY, _SHARED_ACCESS_KEY_RE)

    logger.debug("Parsed connection string for host '%s', repository '%s'.", result.host_name, result.repository_id)
    return result


def enforce_https(url: str) -> str:
    if _URL_PROTOCOL_RE.match(url):
        url = _URL_PROTOCOL_RE.sub(HTTPS_PROTOCOL, url, count=1)
    else:
        url = HTTPS_PROTOCOL + url
    return url.rstrip("/")


def _validate_format(value: Optional[str], property_name: str, pattern: re.Pattern):
    if value and not pattern.match(value):
        raise InvalidArgumentValueError(f"The connection string is invalid for property {property_name}.")
