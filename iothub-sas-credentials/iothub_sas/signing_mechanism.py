# -------------------------------------------------------------------------
# Copyright (c) Microsoft Corporation. All rights reserved.
# Licensed under the MIT License. See License.txt in the project root for
# license information.
# --------------------------------------------------------------------------
"""This module defines an abstract SigningMechanism, as well as common child implementations of it
"""

import abc
import asyncio
import base64
import binascii
import hmac
import hashlib
from typing import AnyStr, Awaitable, Callable, cast
from .custom_typing import FunctionOrCoroutine
from .exceptions import KeyDecodeError, SigningError

# Each character of a str message maps to exactly one byte (code points 0-255)
MESSAGE_ENCODING = "latin-1"


class SigningMechanism(abc.ABC):
    @abc.abstractmethod
    async def sign(self, data_str: AnyStr) -> str:
        # NOTE: This is defined as a coroutine to allow for flexibility of implementation.
        # Some implementations may not require a coroutine, but others may, so we err on the side
        # of a coroutine for consistent interface.
        pass


class SymmetricKeySigningMechanism(SigningMechanism):
    def __init__(self, key: AnyStr) -> None:
        """
        A mechanism that signs data using a symmetric key

        :param key: Symmetric Key (base64 encoded)
        :type key: str or bytes

        :raises: KeyDecodeError if provided key is not valid base64
        """
        # Convert key to bytes (if not already)
        if isinstance(key, str):
            try:
                key_bytes = key.encode("ascii")
            except UnicodeEncodeError as e:
                raise KeyDecodeError("Invalid Symmetric Key") from e
        elif isinstance(key, bytes):
            key_bytes = key
        else:
            raise KeyDecodeError("Invalid Symmetric Key")

        # Derives the signing key
        try:
            self._signing_key = base64.b64decode(key_bytes, validate=True)
        except binascii.Error as e:
            raise KeyDecodeError("Invalid Symmetric Key") from e

    async def sign(self, data_str: AnyStr) -> str:
        """
        Sign a data string with symmetric key and the HMAC-SHA256 algorithm.

        :param data_str: Data string to be signed. A str is converted to bytes one character
            per byte, so it may only contain characters in the range U+0000 to U+00FF
        :type data_str: str or bytes

        :returns: The signed data (base64 encoded)
        :rtype: str

        :raises: SigningError if the signing key is empty
        :raises: SigningError if an invalid data string is provided
        """
        # NOTE: This implementation doesn't take advantage of being a coroutine.
        # See the definition of the abstract base class above.
        if not self._signing_key:
            raise SigningError("Unable to sign string using an empty symmetric key")

        data_bytes = _to_message_bytes(data_str)

        # Derive signature via HMAC-SHA256 algorithm
        try:
            hmac_digest = hmac.HMAC(
                key=self._signing_key, msg=data_bytes, digestmod=hashlib.sha256
            ).digest()
            signed_data = base64.b64encode(hmac_digest)
        except TypeError as e:
            raise SigningError("Unable to sign string using the provided symmetric key") from e
        # Convert from bytes to string
        return signed_data.decode("utf-8")


class ExternalSigningMechanism(SigningMechanism):
    def __init__(self, sign_fn: FunctionOrCoroutine) -> None:
        """
        A mechanism that signs data by invoking a provided callable, e.g. one backed by a
        hardware security module. This callable can be a function or a coroutine function.

        :param sign_fn: A callable that takes the message bytes and returns a base64 encoded
            signature string
        :type sign_fn: Function or Coroutine Function which returns a string
        """
        self.sign_fn = sign_fn

    async def sign(self, data_str: AnyStr) -> str:
        """
        Sign a data string by invoking the provided callable

        :param data_str: Data string to be signed
        :type data_str: str or bytes

        :returns: The signed data
        :rtype: str

        :raises: SigningError if the data string cannot be signed
        """
        data_bytes = _to_message_bytes(data_str)
        try:
            # NOTE: the typechecker has some problems here, so we help it with a cast.
            if asyncio.iscoroutinefunction(self.sign_fn):
                sign_coro_fn = cast(Callable[[bytes], Awaitable[str]], self.sign_fn)
                signature = await sign_coro_fn(data_bytes)
            else:
                sign_fn = cast(Callable[[bytes], str], self.sign_fn)
                signature = sign_fn(data_bytes)
        except SigningError:
            raise
        except Exception as e:
            # We don't know what error a user-provided callable might raise.
            # So we catch all of them.
            raise SigningError("Unable to sign string using the provided callable") from e
        if not isinstance(signature, str):
            raise SigningError("Provided callable did not return a signature string")
        return signature


async def sign(message: AnyStr, key: AnyStr) -> str:
    """Sign a message with a base64 encoded symmetric key and the HMAC-SHA256 algorithm

    :param message: Message to be signed
    :type message: str or bytes
    :param key: Symmetric Key (base64 encoded)
    :type key: str or bytes

    :returns: The base64 encoded signature
    :rtype: str

    :raises: KeyDecodeError if the key is not valid base64
    :raises: SigningError if the message cannot be signed with the key
    """
    return await SymmetricKeySigningMechanism(key).sign(message)


def _to_message_bytes(data_str: AnyStr) -> bytes:
    """Convert a message to bytes without applying a text encoding to bytes input"""
    if isinstance(data_str, bytes):
        return data_str
    elif isinstance(data_str, str):
        try:
            return data_str.encode(MESSAGE_ENCODING)
        except UnicodeEncodeError as e:
            raise SigningError(
                "Unable to sign string: characters must be in the range U+0000 to U+00FF"
            ) from e
    else:
        raise SigningError("Unable to sign data of type {}".format(type(data_str).__name__))
