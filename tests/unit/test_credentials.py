# -------------------------------------------------------------------------
# Copyright (c) Microsoft Corporation. All rights reserved.
# Licensed under the MIT License. See License.txt in the project root for
# license information.
# --------------------------------------------------------------------------

import asyncio
import pytest
import logging
import re
from iothub_sas import credentials
from iothub_sas import credential_builder as cb
from iothub_sas.expiry import ExpiryMode
from iothub_sas.exceptions import InvalidVariantError, KeyDecodeError, SigningError

logging.basicConfig(level=logging.DEBUG)
pytestmark = pytest.mark.asyncio

FAKE_HOSTNAME = "myhub.example.net"
FAKE_DEVICE_ID = "dev1"
FAKE_KEY = "NMgJDvdKTxjLi+xBxxkDDEwDJxEvOE5u8BiT0mVgPeg="
FAKE_CONNECTION_STRING = "HostName={};DeviceId={};SharedAccessKey={}".format(
    FAKE_HOSTNAME, FAKE_DEVICE_ID, FAKE_KEY
)
V1_PASSWORD_PATTERN = re.compile(r"^SharedAccessSignature sr=.+&sig=.+&se=\d+$")


@pytest.mark.describe("generate_credential()")
class TestGenerateCredential:
    @pytest.mark.it("Generates a V1 credential when the V1 variant is selected")
    @pytest.mark.parametrize(
        "variant", [pytest.param(cb.CredentialVariant.V1, id="Enum"), pytest.param("v1", id="String")]
    )
    async def test_v1(self, fake_clock, variant):
        username, password, transport = await credentials.generate_credential(
            variant, FAKE_HOSTNAME, FAKE_DEVICE_ID, FAKE_KEY, 5, clock=fake_clock
        )
        assert username == "myhub.example.net/dev1/?api-version=2020-09-30"
        assert password == (
            "SharedAccessSignature sr=myhub.example.net/devices/dev1"
            "&sig=s4OaRB7wgva%2BslbZmKMgaE1yKgJA8UUE7es8svx7wC4%3D&se=1700000000300"
        )
        assert transport == "$iothub/websocket?iothub-no-client-cert=true"

    @pytest.mark.it("Generates a V2 credential when the V2 variant is selected")
    @pytest.mark.parametrize(
        "variant", [pytest.param(cb.CredentialVariant.V2, id="Enum"), pytest.param("v2", id="String")]
    )
    async def test_v2(self, fake_clock, variant):
        username, password, transport = await credentials.generate_credential(
            variant, FAKE_HOSTNAME, FAKE_DEVICE_ID, FAKE_KEY, 5, clock=fake_clock
        )
        assert username == (
            "av=2021-06-30-preview&h=myhub.example.net&did=dev1&am=SASb64&se=1700000000300"
        )
        assert password == "7XtEKXMGpar2uhf2RLMR8Jp2kqUp2DanJGMENuJ4KCg="
        assert transport == "mqtt"

    @pytest.mark.it("Uses a 5 minute validity window by default")
    async def test_default_window(self, fake_clock):
        credential = await credentials.generate_credential(
            "v2", FAKE_HOSTNAME, FAKE_DEVICE_ID, FAKE_KEY, clock=fake_clock
        )
        assert credential.username.endswith("&se=1700000000300")

    @pytest.mark.it("Uses the provided expiry mode")
    async def test_expiry_mode(self, fake_clock):
        credential = await credentials.generate_credential(
            "v1",
            FAKE_HOSTNAME,
            FAKE_DEVICE_ID,
            FAKE_KEY,
            5,
            expiry_mode=ExpiryMode.SECONDS,
            clock=fake_clock,
        )
        assert credential.password == (
            "SharedAccessSignature sr=myhub.example.net/devices/dev1"
            "&sig=T1upmM9a%2Fo6%2BaoaVlQuDDzv6Bk%2FEnLJYA51ourT1PkI%3D&se=1700000300"
        )

    @pytest.mark.it("Produces a V1 password with a percent-encoded signature using the system clock")
    async def test_v1_password_format(self):
        credential = await credentials.generate_credential(
            "v1", FAKE_HOSTNAME, FAKE_DEVICE_ID, FAKE_KEY
        )
        assert V1_PASSWORD_PATTERN.match(credential.password)
        sig = credential.password.split("&sig=")[1].split("&se=")[0]
        assert not any(c in sig for c in "+/=")

    @pytest.mark.it("Raises an InvalidVariantError if the variant is not recognized")
    async def test_invalid_variant(self):
        with pytest.raises(InvalidVariantError):
            await credentials.generate_credential("v3", FAKE_HOSTNAME, FAKE_DEVICE_ID, FAKE_KEY)

    @pytest.mark.it("Raises a KeyDecodeError if the key is not valid base64")
    @pytest.mark.parametrize("variant", ["v1", "v2"])
    async def test_bad_key(self, variant):
        with pytest.raises(KeyDecodeError):
            await credentials.generate_credential(
                variant, FAKE_HOSTNAME, FAKE_DEVICE_ID, "NMgJDvdKTxjLi%xBxxkDDEwDJxEvOE5u8BiT0mVgPeg="
            )

    @pytest.mark.it("Raises a SigningError if the key is empty")
    @pytest.mark.parametrize("variant", ["v1", "v2"])
    async def test_empty_key(self, variant):
        with pytest.raises(SigningError):
            await credentials.generate_credential(variant, FAKE_HOSTNAME, FAKE_DEVICE_ID, "")

    @pytest.mark.it("Raises a SigningError if the device id contains a character that does not fit in one byte")
    async def test_high_codepoint_device_id(self):
        with pytest.raises(SigningError):
            await credentials.generate_credential("v2", FAKE_HOSTNAME, "dev€", FAKE_KEY)

    @pytest.mark.it("Supports concurrent invocations")
    async def test_concurrent(self, fake_clock):
        results = await asyncio.gather(
            *[
                credentials.generate_credential(
                    variant, FAKE_HOSTNAME, FAKE_DEVICE_ID, FAKE_KEY, clock=fake_clock
                )
                for variant in ["v1", "v2", "v1", "v2"]
            ]
        )
        assert results[0] == results[2]
        assert results[1] == results[3]
        assert results[0] != results[1]


@pytest.mark.describe("generate_v1_credential() / generate_v2_credential()")
class TestGenerateVariantCredential:
    @pytest.mark.it("Generates a credential of the corresponding variant")
    @pytest.mark.parametrize(
        "fn, variant",
        [
            pytest.param(credentials.generate_v1_credential, "v1", id="V1"),
            pytest.param(credentials.generate_v2_credential, "v2", id="V2"),
        ],
    )
    async def test_variant(self, fake_clock, fn, variant):
        expected = await credentials.generate_credential(
            variant, FAKE_HOSTNAME, FAKE_DEVICE_ID, FAKE_KEY, 5, clock=fake_clock
        )
        result = await fn(FAKE_HOSTNAME, FAKE_DEVICE_ID, FAKE_KEY, 5, clock=fake_clock)
        assert result == expected

    @pytest.mark.it("Passes the validity window and options through")
    async def test_options(self, mocker):
        spy = mocker.spy(credentials, "generate_credential")
        clock = mocker.MagicMock(return_value=1700000000.0)
        await credentials.generate_v2_credential(
            FAKE_HOSTNAME, FAKE_DEVICE_ID, FAKE_KEY, 10, expiry_mode="seconds", clock=clock
        )
        assert spy.call_args == mocker.call(
            cb.CredentialVariant.V2,
            FAKE_HOSTNAME,
            FAKE_DEVICE_ID,
            FAKE_KEY,
            10,
            expiry_mode="seconds",
            clock=clock,
        )


@pytest.mark.describe("generate_credential_from_connection_string()")
class TestGenerateCredentialFromConnectionString:
    @pytest.mark.it("Generates a credential from the values in the connection string")
    @pytest.mark.parametrize("variant", ["v1", "v2"])
    async def test_from_connection_string(self, fake_clock, variant):
        expected = await credentials.generate_credential(
            variant, FAKE_HOSTNAME, FAKE_DEVICE_ID, FAKE_KEY, clock=fake_clock
        )
        result = await credentials.generate_credential_from_connection_string(
            variant, FAKE_CONNECTION_STRING, clock=fake_clock
        )
        assert result == expected

    @pytest.mark.it("Issues the credential for the GatewayHostName if one is present")
    async def test_gateway(self, fake_clock):
        connection_string = FAKE_CONNECTION_STRING + ";GatewayHostName=mygateway"
        credential = await credentials.generate_credential_from_connection_string(
            "v1", connection_string, clock=fake_clock
        )
        assert credential.username == "mygateway/dev1/?api-version=2020-09-30"

    @pytest.mark.it(
        "Raises a ValueError instead of issuing a device credential for a module or a shared access policy"
    )
    @pytest.mark.parametrize(
        "extra_details",
        [
            pytest.param(";ModuleId=my-module", id="Module identity"),
            pytest.param(";SharedAccessKeyName=iothubowner", id="Shared access policy key"),
        ],
    )
    async def test_unsupported_identity(self, extra_details):
        with pytest.raises(ValueError):
            await credentials.generate_credential_from_connection_string(
                "v1", FAKE_CONNECTION_STRING + extra_details
            )

    @pytest.mark.it("Raises a ValueError if the connection string is invalid")
    async def test_invalid_connection_string(self):
        with pytest.raises(ValueError):
            await credentials.generate_credential_from_connection_string(
                "v1", "HostName=myhub.example.net;DeviceId=dev1"
            )
