# -------------------------------------------------------------------------
# Copyright (c) Microsoft Corporation. All rights reserved.
# Licensed under the MIT License. See License.txt in the project root for
# license information.
# --------------------------------------------------------------------------
"""This module contains the builders that assemble IoT Hub credentials for each protocol variant"""

import abc
import enum
import logging
import time
import urllib.parse
from typing import Union
from . import constant
from . import expiry
from .config import CredentialConfig
from .custom_typing import Clock
from .exceptions import InvalidVariantError
from .models import Credential
from .signing_mechanism import SigningMechanism

logger = logging.getLogger(__name__)

V1_TOKEN_FORMAT: str = "SharedAccessSignature sr={resource}&sig={signature}&se={expiry}"
V1_USERNAME_FORMAT: str = "{hostname}/{device_id}/?api-version={api_version}"
V1_RESOURCE_URI_FORMAT: str = "{hostname}/devices/{device_id}"
V2_USERNAME_FORMAT: str = (
    "av={api_version}&h={hostname}&did={device_id}&am={auth_mechanism}&se={expiry}"
)


class CredentialVariant(enum.Enum):
    V1 = "v1"
    V2 = "v2"

    @classmethod
    def from_value(cls, value: Union["CredentialVariant", str]) -> "CredentialVariant":
        """Return the CredentialVariant for an enum member or a (case-insensitive) name

        :raises: InvalidVariantError if the value does not name a known variant
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value.lower())
            except ValueError:
                pass
        raise InvalidVariantError("Unrecognized credential variant: {!r}".format(value))


class CredentialBuilder(abc.ABC):
    def __init__(
        self,
        signing_mechanism: SigningMechanism,
        *,
        expiry_mode: expiry.ExpiryMode = expiry.ExpiryMode.LEGACY,
        clock: Clock = time.time,
    ) -> None:
        """An object that builds credentials for a single protocol variant

        :param signing_mechanism: The signing mechanism that will be used to sign data
        :type signing_mechanism: :class:`SigningMechanism`
        :param expiry_mode: Arithmetic used to compute the expiry. Default is LEGACY
        :type expiry_mode: :class:`ExpiryMode`
        :param clock: Callable returning the current time in seconds since epoch
        """
        self.signing_mechanism = signing_mechanism
        self.expiry_mode = expiry.ExpiryMode(expiry_mode)
        self.clock = clock

    @property
    @abc.abstractmethod
    def variant(self) -> CredentialVariant:
        pass

    @property
    @abc.abstractmethod
    def api_version(self) -> str:
        pass

    @property
    @abc.abstractmethod
    def transport(self) -> str:
        pass

    @abc.abstractmethod
    def canonical_message(self, hostname: str, device_id: str, expiry_time: int) -> str:
        """Return the string-to-sign"""
        pass

    @abc.abstractmethod
    def format_username(self, hostname: str, device_id: str, expiry_time: int) -> str:
        pass

    @abc.abstractmethod
    def format_password(
        self, hostname: str, device_id: str, expiry_time: int, signature: str
    ) -> str:
        pass

    async def build(
        self,
        hostname: str,
        device_id: str,
        expires_in_mins: float = constant.DEFAULT_EXPIRES_IN_MINS,
    ) -> Credential:
        """Build a new Credential

        :param str hostname: Hostname of the IoT Hub
        :param str device_id: The device identity
        :param expires_in_mins: Validity window of the credential, in minutes. Default is 5

        :returns: The new credential
        :rtype: :class:`Credential`

        :raises: ValueError or TypeError if an invalid parameter is provided
        :raises: Any error raised by the signing mechanism, unmodified
        """
        config = CredentialConfig(
            hostname=hostname,
            device_id=device_id,
            expires_in_mins=expires_in_mins,
            expiry_mode=self.expiry_mode,
            clock=self.clock,
        )
        return await self.build_from_config(config)

    async def build_from_config(self, config: CredentialConfig) -> Credential:
        """Build a new Credential from a CredentialConfig

        The config's expiry mode and clock are used instead of the builder's.

        :raises: Any error raised by the signing mechanism, unmodified
        """
        expiry_time = expiry.compute_expiry(
            config.expires_in_mins, mode=config.expiry_mode, clock=config.clock
        )
        logger.debug(
            "Building {} credential for device '{}' on '{}' (se={})".format(
                self.variant.name, config.device_id, config.hostname, expiry_time
            )
        )
        message = self.canonical_message(config.hostname, config.device_id, expiry_time)
        signature = await self.signing_mechanism.sign(message)
        return Credential(
            username=self.format_username(config.hostname, config.device_id, expiry_time),
            password=self.format_password(
                config.hostname, config.device_id, expiry_time, signature
            ),
            transport=self.transport,
        )


class V1CredentialBuilder(CredentialBuilder):
    """Builds credentials for the legacy protocol.

    The password is a SAS Token string, and the signature inside of it is URI component encoded.
    """

    variant = CredentialVariant.V1
    api_version = constant.IOTHUB_API_VERSION
    transport = constant.V1_TRANSPORT

    def canonical_message(self, hostname: str, device_id: str, expiry_time: int) -> str:
        return _format_resource_uri(hostname, device_id) + "\n" + str(expiry_time)

    def format_username(self, hostname: str, device_id: str, expiry_time: int) -> str:
        return V1_USERNAME_FORMAT.format(
            hostname=hostname, device_id=device_id, api_version=self.api_version
        )

    def format_password(
        self, hostname: str, device_id: str, expiry_time: int, signature: str
    ) -> str:
        # NOTE: Only the signature is encoded. The resource is used as-is.
        return V1_TOKEN_FORMAT.format(
            resource=_format_resource_uri(hostname, device_id),
            signature=url_encode(signature),
            expiry=str(expiry_time),
        )


class V2CredentialBuilder(CredentialBuilder):
    """Builds credentials for the preview protocol.

    No field of the username is encoded, and the password is the raw signature.
    """

    variant = CredentialVariant.V2
    api_version = constant.IOTHUB_PREVIEW_API_VERSION
    transport = constant.V2_TRANSPORT

    def canonical_message(self, hostname: str, device_id: str, expiry_time: int) -> str:
        # The three empty fields are reserved by the protocol, and must remain in place
        return "{hostname}\n{device_id}\n\n\n{expiry}\n".format(
            hostname=hostname, device_id=device_id, expiry=expiry_time
        )

    def format_username(self, hostname: str, device_id: str, expiry_time: int) -> str:
        return V2_USERNAME_FORMAT.format(
            api_version=self.api_version,
            hostname=hostname,
            device_id=device_id,
            auth_mechanism=constant.V2_AUTH_MECHANISM,
            expiry=str(expiry_time),
        )

    def format_password(
        self, hostname: str, device_id: str, expiry_time: int, signature: str
    ) -> str:
        return signature


_builder_map = {
    CredentialVariant.V1: V1CredentialBuilder,
    CredentialVariant.V2: V2CredentialBuilder,
}


def create_credential_builder(
    variant: Union[CredentialVariant, str],
    signing_mechanism: SigningMechanism,
    *,
    expiry_mode: expiry.ExpiryMode = expiry.ExpiryMode.LEGACY,
    clock: Clock = time.time,
) -> CredentialBuilder:
    """Create the CredentialBuilder for a protocol variant

    :raises: InvalidVariantError if the variant is not recognized
    """
    builder_cls = _builder_map[CredentialVariant.from_value(variant)]
    return builder_cls(signing_mechanism, expiry_mode=expiry_mode, clock=clock)


def url_encode(value: str) -> str:
    """URI component encode a value (all reserved characters, including '/', are escaped)"""
    return urllib.parse.quote(value, safe=constant.URI_COMPONENT_SAFE_CHARS)


def _format_resource_uri(hostname: str, device_id: str) -> str:
    return V1_RESOURCE_URI_FORMAT.format(hostname=hostname, device_id=device_id)
