# -------------------------------------------------------------------------
# Copyright (c) Microsoft Corporation. All rights reserved.
# Licensed under the MIT License. See License.txt in the project root for
# license information.
# --------------------------------------------------------------------------
"""This module contains tools for working with Connection Strings"""

from typing import Dict, Optional

__all__ = ["ConnectionString"]

CS_DELIMITER = ";"
CS_VAL_SEPARATOR = "="

HOST_NAME = "HostName"
SHARED_ACCESS_KEY_NAME = "SharedAccessKeyName"
SHARED_ACCESS_KEY = "SharedAccessKey"
DEVICE_ID = "DeviceId"
MODULE_ID = "ModuleId"
GATEWAY_HOST_NAME = "GatewayHostName"

_valid_keys = [
    HOST_NAME,
    SHARED_ACCESS_KEY_NAME,
    SHARED_ACCESS_KEY,
    DEVICE_ID,
    MODULE_ID,
    GATEWAY_HOST_NAME,
]


class ConnectionString:
    """Key/value mappings for connection details.
    Uses the same syntax as dictionary
    """

    def __init__(self, connection_string: str) -> None:
        """Initializer for ConnectionString

        :param str connection_string: String with connection details provided by Azure
        :raises: TypeError if provided connection_string is not a string
        :raises: ValueError if provided connection_string is invalid
        """
        self._dict = _parse_connection_string(connection_string)
        self._strrep = connection_string

    def __contains__(self, item: str) -> bool:
        return item in self._dict

    def __getitem__(self, key: str) -> str:
        return self._dict[key]

    def __repr__(self) -> str:
        # Do not expose the shared access key
        return CS_DELIMITER.join(
            key + CS_VAL_SEPARATOR + ("<redacted>" if key == SHARED_ACCESS_KEY else value)
            for key, value in self._dict.items()
        )

    def get(self, key: str, default: Optional[str] = None) -> Optional[str]:
        """Return the value for key if key is in the dictionary, else default

        :param str key: The key to retrieve a value for
        :param str default: The default value returned if a key is not found
        :returns: The value for the given key
        """
        try:
            return self._dict[key]
        except KeyError:
            return default

    @property
    def hostname(self) -> str:
        """The hostname to connect to. Edge leaf devices connect to their gateway"""
        return self._dict.get(GATEWAY_HOST_NAME, self._dict[HOST_NAME])


def _parse_connection_string(connection_string: str) -> Dict[str, str]:
    """Return a dictionary of values contained in a given connection string"""
    try:
        cs_args = connection_string.split(CS_DELIMITER)
    except (AttributeError, TypeError):
        raise TypeError("Connection String must be of type str")
    # Tolerate a single trailing delimiter
    if cs_args and cs_args[-1] == "":
        cs_args = cs_args[:-1]
    try:
        d = dict(arg.split(CS_VAL_SEPARATOR, 1) for arg in cs_args)
    except ValueError:
        # This occurs in an extreme edge case where a dictionary cannot be formed because there
        # is only 1 token after the split (dict requires two in order to make a key/value pair)
        raise ValueError("Invalid Connection String - Unable to parse")
    if len(cs_args) != len(d):
        # various errors related to incorrect parsing - duplicate args, bad syntax, etc.
        raise ValueError("Invalid Connection String - Unable to parse")
    if not all(key in _valid_keys for key in d.keys()):
        raise ValueError("Invalid Connection String - Invalid Key")
    _validate_keys(d)
    return d


def _validate_keys(d: Dict[str, str]) -> None:
    """Raise ValueError if incorrect combination of keys in dict d"""
    host_name = d.get(HOST_NAME)
    shared_access_key = d.get(SHARED_ACCESS_KEY)
    device_id = d.get(DEVICE_ID)

    # Only device scoped credentials can be issued, and only from a device shared access key
    if MODULE_ID in d:
        raise ValueError("Invalid Connection String - Module identities are not supported")
    if SHARED_ACCESS_KEY_NAME in d:
        raise ValueError("Invalid Connection String - Shared access policy keys are not supported")
    if not shared_access_key:
        raise ValueError("Invalid Connection String - No shared access key")

    # Validate connection details
    if not host_name or not device_id:
        raise ValueError("Invalid Connection String - Missing connection details")
