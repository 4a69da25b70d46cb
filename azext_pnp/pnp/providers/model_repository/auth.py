# coding=utf-8
# ----------------------------------------------------------------------------------------------
# Copyright (c) Microsoft Corporation. All rights reserved.
# Licensed under the MIT License. See License file in the project root for license information.
# ----------------------------------------------------------------------------------------------

"""
auth: Shared access signature generation for the model repository.

"""

import binascii
import hmac
from base64 import b64decode, b64encode
from hashlib import sha256
from time import time
from typing import Optional
from urllib.parse import quote

from azure.cli.core.azclierror import InvalidArgumentValueError, RequiredArgumentMissingError

from ...common import SAS_TOKEN_TTL_SECONDS
from .connection import SHARED_ACCESS_KEY_PROPERTY, ConnectionString

SHARED_ACCESS_SIGNATURE = "SharedAccessSignature"

# Unreserved characters of ECMAScript encodeURIComponent, which the service canonicalizes with.
_URI_COMPONENT_SAFE = "-_.!~*'()"


def encode_uri_component(value: str) -> str:
    return quote(value, safe=_URI_COMPONENT_SAFE)


class SharedAccessKey:
    def __init__(self, audience: str, key_name: str, secret: str, repository_id: str):
        self.audience = audience
        self.key_name = key_name
        self.secret = secret
        self.repository_id = repository_id

    @classmethod
    def from_connection_string(cls, connection_string: ConnectionString) -> "SharedAccessKey":
        if not connection_string.has_shared_access_key:
            raise RequiredArgumentMissingError(
                "The connection string must contain SharedAccessKeyName and SharedAccessKey to authenticate."
            )
        return cls(
            audience=connection_string.host_name,
            key_name=connection_string.shared_access_key_name,
            secret=connection_string.shared_access_key,
            repository_id=connection_string.repository_id,
        )

    def generate_sas_token(self, expiry: Optional[int] = None) -> str:
        """
        Generates a shared access signature token.

        A fresh expiry of now + 24h is computed on every call unless one is given.
        """
        if expiry is None:
            expiry = int(time()) + SAS_TOKEN_TTL_SECONDS

        encoded_audience = encode_uri_component(self.audience)
        signature = self.sign(self.string_to_sign(expiry))
        return (
            f"{SHARED_ACCESS_SIGNATURE} sr={encoded_audience}&sig={encode_uri_component(signature)}"
            f"&se={expiry}&skn={self.key_name}&rid={self.repository_id}"
        )

    def string_to_sign(self, expiry: int) -> str:
        return "\n".join(
            [encode_uri_component(self.repository_id), encode_uri_component(self.audience), str(expiry)]
        ).lower()

    def sign(self, payload: str) -> str:
        try:
            key = b64decode(self.secret, validate=True)
        except (binascii.Error, ValueError) as e:
            raise InvalidArgumentValueError(
                f"The connection string is invalid for property {SHARED_ACCESS_KEY_PROPERTY}: "
                f"the key must be base64 encoded. {e}"
            )
        digest = hmac.new(key, payload.encode("utf-8"), sha256).digest()
        return b64encode(digest).decode("utf-8")
