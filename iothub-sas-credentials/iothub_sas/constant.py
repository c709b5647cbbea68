# -------------------------------------------------------------------------
# Copyright (c) Microsoft Corporation. All rights reserved.
# Licensed under the MIT License. See License.txt in the project root for
# license information.
# --------------------------------------------------------------------------
"""This module defines constants for use across the iothub-sas-credentials package
"""

VERSION = "1.0.0"

# V1 (legacy) protocol
IOTHUB_API_VERSION = "2020-09-30"
V1_TRANSPORT = "$iothub/websocket?iothub-no-client-cert=true"

# V2 (preview) protocol
IOTHUB_PREVIEW_API_VERSION = "2021-06-30-preview"
V2_AUTH_MECHANISM = "SASb64"
V2_TRANSPORT = "mqtt"

DEFAULT_EXPIRES_IN_MINS = 5

# Characters left unescaped by URI component encoding, in addition to alphanumerics and "_.-~"
URI_COMPONENT_SAFE_CHARS = "!*'()"
