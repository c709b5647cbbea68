# -------------------------------------------------------------------------
# Copyright (c) Microsoft Corporation. All rights reserved.
# Licensed under the MIT License. See License.txt in the project root for
# license information.
# --------------------------------------------------------------------------

import time
from typing import Any
from . import expiry
from .constant import DEFAULT_EXPIRES_IN_MINS
from .custom_typing import Clock


class CredentialConfig:
    """
    Class for storing the options used when generating a credential
    """

    def __init__(
        self,
        *,
        hostname: str,
        device_id: str,
        expires_in_mins: float = DEFAULT_EXPIRES_IN_MINS,
        expiry_mode: expiry.ExpiryMode = expiry.ExpiryMode.LEGACY,
        clock: Clock = time.time,
    ) -> None:
        """Initializer for CredentialConfig

        :param str hostname: Hostname of the IoT Hub the credential grants access to
        :param str device_id: The device identity the credential is issued for
        :param expires_in_mins: Validity window of the credential, in minutes. Default is 5
        :param expiry_mode: Arithmetic used to compute the expiry. Default is LEGACY
        :type expiry_mode: :class:`ExpiryMode`
        :param clock: Callable returning the current time in seconds since epoch.
            Default is time.time

        :raises: ValueError if an invalid parameter value is provided
        :raises: TypeError if a parameter of an invalid type is provided
        """
        self.hostname = _sanitize_str("hostname", hostname)
        self.device_id = _sanitize_str("device_id", device_id)

        expiry.validate_expires_in_mins(expires_in_mins)
        self.expires_in_mins = expires_in_mins

        try:
            self.expiry_mode = expiry.ExpiryMode(expiry_mode)
        except ValueError:
            raise ValueError("Invalid expiry_mode: {}".format(expiry_mode))

        if not callable(clock):
            raise TypeError("clock must be a callable returning seconds since epoch")
        self.clock = clock


def _sanitize_str(name: str, value: Any) -> str:
    if not isinstance(value, str):
        raise TypeError("{} must be of type str".format(name))
    if not value:
        raise ValueError("{} cannot be empty".format(name))
    return value
