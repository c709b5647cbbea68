""" IoT Hub SAS Credentials Library

This library generates short-lived, HMAC-SHA256 signed credentials (username, password and
transport hint) that IoT devices use to connect to Azure IoT Hub with a shared access key.
"""

from .credentials import (  # noqa: F401
    generate_credential,
    generate_v1_credential,
    generate_v2_credential,
    generate_credential_from_connection_string,
)
from .credential_builder import (  # noqa: F401
    CredentialVariant,
    CredentialBuilder,
    V1CredentialBuilder,
    V2CredentialBuilder,
    create_credential_builder,
)
from .signing_mechanism import (  # noqa: F401
    SigningMechanism,
    SymmetricKeySigningMechanism,
    ExternalSigningMechanism,
    sign,
)
from .exceptions import (  # noqa: F401
    CredentialError,
    KeyDecodeError,
    SigningError,
    InvalidVariantError,
)
from .expiry import ExpiryMode, compute_expiry  # noqa: F401
from .models import Credential  # noqa: F401
from .connection_string import ConnectionString  # noqa: F401
from .constant import VERSION as __version__  # noqa: F401
