# -------------------------------------------------------------------------
# Copyright (c) Microsoft Corporation. All rights reserved.
# Licensed under the MIT License. See License.txt in the project root for
# license information.
# --------------------------------------------------------------------------
"""Define user-facing exceptions to be shared across package"""


class CredentialError(Exception):
    """Represents a failure to issue a credential"""

    pass


class KeyDecodeError(CredentialError, ValueError):
    """Represents a shared access key that is not valid base64"""

    pass


class SigningError(CredentialError):
    """Represents a failure of the signing primitive to sign with the given key or data"""

    pass


class InvalidVariantError(CredentialError, ValueError):
    """Represents an unrecognized credential protocol variant"""

    pass
