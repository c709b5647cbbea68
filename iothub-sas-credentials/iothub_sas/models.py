# -------------------------------------------------------------------------
# Copyright (c) Microsoft Corporation. All rights reserved.
# Licensed under the MIT License. See License.txt in the project root for
# license information.
# --------------------------------------------------------------------------
"""This module contains the credential model returned to the user"""

from typing import NamedTuple


class Credential(NamedTuple):
    """Username, password and transport hint for opening an authenticated connection.

    Can be unpacked: ``username, password, transport = credential``
    """

    username: str
    password: str
    transport: str

    def __repr__(self) -> str:
        # The password is a live credential, so it is not included
        return "Credential(username={!r}, password=<redacted>, transport={!r})".format(
            self.username, self.transport
        )
