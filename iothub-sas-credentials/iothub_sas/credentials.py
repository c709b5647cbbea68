# -------------------------------------------------------------------------
# Copyright (c) Microsoft Corporation. All rights reserved.
# Licensed under the MIT License. See License.txt in the project root for
# license information.
# --------------------------------------------------------------------------
"""This module contains the entry points for generating IoT Hub credentials from a shared key"""

import logging
import time
from typing import AnyStr, Union
from . import connection_string as cs
from . import credential_builder as cb
from . import signing_mechanism as sm
from .constant import DEFAULT_EXPIRES_IN_MINS
from .custom_typing import Clock
from .expiry import ExpiryMode
from .models import Credential

logger = logging.getLogger(__name__)


async def generate_credential(
    variant: Union[cb.CredentialVariant, str],
    hostname: str,
    device_id: str,
    key: AnyStr,
    expires_in_mins: float = DEFAULT_EXPIRES_IN_MINS,
    *,
    expiry_mode: ExpiryMode = ExpiryMode.LEGACY,
    clock: Clock = time.time,
) -> Credential:
    """Generate a credential to connect a device to IoT Hub

    :param variant: The protocol variant to generate a credential for ("v1" or "v2")
    :type variant: :class:`CredentialVariant` or str
    :param str hostname: Hostname of the IoT Hub
    :param str device_id: The device identity
    :param key: Shared Access Key of the device (base64 encoded)
    :type key: str or bytes
    :param expires_in_mins: Validity window of the credential, in minutes. Default is 5
    :param expiry_mode: Arithmetic used to compute the expiry. Default is LEGACY, which
        reproduces the (defective) arithmetic of existing deployments
    :type expiry_mode: :class:`ExpiryMode`
    :param clock: Callable returning the current time in seconds since epoch

    :returns: The username, password and transport hint
    :rtype: :class:`Credential`

    :raises: InvalidVariantError if the variant is not recognized
    :raises: KeyDecodeError if the key is not valid base64
    :raises: SigningError if the key cannot be used to sign
    :raises: ValueError or TypeError if any other parameter is invalid
    """
    variant = cb.CredentialVariant.from_value(variant)
    signing_mechanism = sm.SymmetricKeySigningMechanism(key)
    builder = cb.create_credential_builder(
        variant, signing_mechanism, expiry_mode=expiry_mode, clock=clock
    )
    credential = await builder.build(hostname, device_id, expires_in_mins)
    logger.debug("Generated {} credential for device '{}'".format(variant.name, device_id))
    return credential


async def generate_v1_credential(
    hostname: str,
    device_id: str,
    key: AnyStr,
    expires_in_mins: float = DEFAULT_EXPIRES_IN_MINS,
    **kwargs,
) -> Credential:
    """Generate a credential for the legacy (api-version 2020-09-30) protocol.

    See generate_credential() for parameters and errors.
    """
    return await generate_credential(
        cb.CredentialVariant.V1, hostname, device_id, key, expires_in_mins, **kwargs
    )


async def generate_v2_credential(
    hostname: str,
    device_id: str,
    key: AnyStr,
    expires_in_mins: float = DEFAULT_EXPIRES_IN_MINS,
    **kwargs,
) -> Credential:
    """Generate a credential for the preview (api-version 2021-06-30-preview) protocol.

    See generate_credential() for parameters and errors.
    """
    return await generate_credential(
        cb.CredentialVariant.V2, hostname, device_id, key, expires_in_mins, **kwargs
    )


async def generate_credential_from_connection_string(
    variant: Union[cb.CredentialVariant, str],
    connection_string: str,
    expires_in_mins: float = DEFAULT_EXPIRES_IN_MINS,
    **kwargs,
) -> Credential:
    """Generate a credential using an IoT Hub device connection string

    If the connection string contains a GatewayHostName, the credential is issued for the gateway.

    :param variant: The protocol variant to generate a credential for ("v1" or "v2")
    :type variant: :class:`CredentialVariant` or str
    :param str connection_string: The IoT Hub device connection string
    :param expires_in_mins: Validity window of the credential, in minutes. Default is 5

    :keyword expiry_mode: Arithmetic used to compute the expiry. Default is LEGACY
    :keyword clock: Callable returning the current time in seconds since epoch

    :raises: ValueError if the provided connection string is invalid
    :raises: See generate_credential() for all other errors
    """
    cs_obj = cs.ConnectionString(connection_string)
    return await generate_credential(
        variant,
        cs_obj.hostname,
        cs_obj[cs.DEVICE_ID],
        cs_obj[cs.SHARED_ACCESS_KEY],
        expires_in_mins,
        **kwargs,
    )
