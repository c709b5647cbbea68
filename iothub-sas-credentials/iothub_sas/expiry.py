# -------------------------------------------------------------------------
# Copyright (c) Microsoft Corporation. All rights reserved.
# Licensed under the MIT License. See License.txt in the project root for
# license information.
# --------------------------------------------------------------------------
"""This module contains the expiry time computation shared by all credential variants"""

import enum
import math
import numbers
import time
from .constant import DEFAULT_EXPIRES_IN_MINS
from .custom_typing import Clock


class ExpiryMode(enum.Enum):
    """Arithmetic used to derive the expiry field of a credential

    LEGACY reproduces the arithmetic of already deployed devices: the current time in whole epoch
    milliseconds, plus the validity window multiplied by 60. The window therefore only adds
    roughly 60ms per minute, which is very likely a unit conversion defect. It is kept as the
    default so that issued credentials stay identical to those of existing deployments.

    SECONDS uses the current time in epoch seconds, plus the validity window in seconds.
    """

    LEGACY = "legacy"
    SECONDS = "seconds"


def validate_expires_in_mins(expires_in_mins) -> None:
    """Raise an error if the validity window is not a usable number of minutes

    :raises: TypeError if expires_in_mins is not a real number
    :raises: ValueError if expires_in_mins is negative or not finite
    """
    # bool is a subclass of int, but True/False is never an intended window
    if isinstance(expires_in_mins, bool) or not isinstance(expires_in_mins, numbers.Real):
        raise TypeError("expires_in_mins must be a number of minutes")
    if not math.isfinite(expires_in_mins) or expires_in_mins < 0:
        raise ValueError("expires_in_mins must be a finite, non-negative number of minutes")


def compute_expiry(
    expires_in_mins: float = DEFAULT_EXPIRES_IN_MINS,
    mode: ExpiryMode = ExpiryMode.LEGACY,
    clock: Clock = time.time,
) -> int:
    """Compute the expiry field for a credential, rounded up to a whole number

    :param expires_in_mins: Validity window of the credential, in minutes
    :param mode: The arithmetic to use (default LEGACY)
    :type mode: :class:`ExpiryMode`
    :param clock: Callable returning the current time in seconds since epoch

    :returns: The expiry value, in the unit of the chosen mode
    :rtype: int

    :raises: TypeError if expires_in_mins is not a real number
    :raises: ValueError if expires_in_mins is negative or not finite
    :raises: ValueError if mode is not a valid ExpiryMode
    """
    validate_expires_in_mins(expires_in_mins)
    mode = ExpiryMode(mode)
    if mode is ExpiryMode.LEGACY:
        # NOTE: minutes * 60 added to a clock in whole milliseconds. See ExpiryMode.
        return math.ceil(int(clock() * 1000) + expires_in_mins * 60)
    else:
        return math.ceil(clock() + expires_in_mins * 60)
