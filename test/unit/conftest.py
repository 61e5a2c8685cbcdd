# dbgseq debug sequences
# Copyright (c) 2024 The dbgseq Authors
# SPDX-License-Identifier: Apache-2.0
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

import itertools
import pytest
from unittest.mock import Mock

from dbgseq.core.session import Session

from mockmemory import (MockMemory, MockPinInterface)

@pytest.fixture(scope='function')
def mock_time(monkeypatch):
    mtime = Mock()
    mtime.return_value = 0
    monkeypatch.setattr('dbgseq.utility.timeout.time', mtime)
    return mtime

@pytest.fixture(scope='function')
def mock_sleep(monkeypatch, mock_time):
    def inc_time(offset):
        mock_time.return_value += offset
    msleep = Mock()
    msleep.side_effect = inc_time
    msleep.return_value = None
    monkeypatch.setattr('dbgseq.utility.timeout.sleep', msleep)
    monkeypatch.setattr('dbgseq.sequences.sequence.sleep', msleep)
    return msleep

@pytest.fixture(scope='function')
def ticking_time(mock_time):
    """! @brief Clock that advances 10 ms every time it is read.

    Lets polls with no sleep interval time out without actually waiting.
    """
    ticks = itertools.count()
    mock_time.side_effect = lambda: next(ticks) * 0.01
    return mock_time

@pytest.fixture(scope='function')
def session():
    return Session(no_config=True)

@pytest.fixture(scope='function')
def pins():
    return MockPinInterface()

@pytest.fixture(scope='function')
def memory(pins):
    return MockMemory(pins=pins)
