# -------------------------------------------------------------------------
# Copyright (c) Microsoft Corporation. All rights reserved.
# Licensed under the MIT License. See License.txt in the project root for
# license information.
# --------------------------------------------------------------------------

import pytest

FAKE_CURRENT_TIME = 1700000000.0


@pytest.fixture
def fake_clock(mocker):
    return mocker.MagicMock(return_value=FAKE_CURRENT_TIME)


@pytest.fixture
def arbitrary_exception():
    class ArbitraryException(Exception):
        pass

    e = ArbitraryException("arbitrary description")
    return e
