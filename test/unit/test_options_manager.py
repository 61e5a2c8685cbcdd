# dbgseq debug sequences
# Copyright (c) 2017-2020 Arm Limited
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

import pytest

from dbgseq.core.options_manager import OptionsManager
from dbgseq.core.options import (OPTIONS_INFO, OptionInfo, add_option_set)

@pytest.fixture(scope='function')
def mgr():
    return OptionsManager()

@pytest.fixture(scope='function')
def layer1():
    return {
            'foo': 1,
            'bar': 2,
            'baz': 3,
            'no_config': False,
        }

@pytest.fixture(scope='function')
def layer2():
    return {
            'baz': 33,
            'dogcow': 777,
        }

class TestOptionsManager:
    def test_defaults(self, mgr):
        assert mgr.get('reset.halt_timeout') == OPTIONS_INFO['reset.halt_timeout'].default
        assert mgr['reset.halt_timeout'] == 1.0
        assert 'reset.halt_timeout' not in mgr
        assert mgr.get_default('reset.system.timeout') == 0.5
        assert mgr.get_default('reset.hardware.release_timeout') == 1.0
        assert mgr.get_default('reset.hardware.poll_interval') == 0.1
        assert mgr.get_default('reset.hardware.settle_delay') == 0.1

    def test_unknown_default(self, mgr):
        assert mgr.get('dogcow') is None

    def test_a(self, mgr, layer1):
        mgr.add_front(layer1)
        assert 'no_config' in mgr
        assert mgr.get('no_config') == False

    def test_b(self, mgr, layer1):
        mgr.add_front(layer1)
        mgr.add_front({'no_config': True})
        assert 'no_config' in mgr
        assert mgr.get('no_config') == True

    def test_c(self, mgr, layer1):
        mgr.add_front(layer1)
        mgr.add_back({'no_config': True})
        assert 'no_config' in mgr
        assert mgr.get('no_config') == False

    def test_none_value(self, mgr):
        mgr.add_back({'reset.halt_timeout': None})
        assert 'reset.halt_timeout' not in mgr
        assert mgr.get('reset.halt_timeout') == 1.0

    def test_convert_double_underscore(self, mgr):
        mgr.add_back({'reset__system__timeout': 2.0})
        assert 'reset.system.timeout' in mgr
        assert mgr.get('reset.system.timeout') == 2.0

    def test_convert_case(self, mgr):
        mgr.add_back({'Reset.Halt_Timeout': 3.0})
        assert mgr.get('reset.halt_timeout') == 3.0

    def test_set(self, mgr, layer1):
        mgr.add_front(layer1)
        mgr.set('buzz', 1234)
        assert mgr['buzz'] == 1234
        mgr.add_front({'buzz': 4321})
        assert mgr.get('buzz') == 4321

    def test_set_no_layers(self, mgr):
        mgr['reset.halt_timeout'] = 5.0
        assert mgr.get('reset.halt_timeout') == 5.0

    def test_update(self, mgr, layer1, layer2):
        mgr.add_front(layer1)
        mgr.add_front(layer2)
        mgr.update({'foo': 888, 'reset__halt_timeout': 0.25})
        assert mgr['foo'] == 888
        assert mgr['baz'] == 33
        assert mgr.get('reset.halt_timeout') == 0.25

class TestOptionSets:
    def test_add_option_set(self, mgr):
        add_option_set([OptionInfo('test.widget', int, 42, "Widget count.")])
        assert OPTIONS_INFO['test.widget'].type is int
        assert mgr.get('test.widget') == 42

    def test_family_options_registered(self, mgr):
        import dbgseq.sequences.infineon # noqa: F401
        assert mgr.get('xmc4000.dapsa_timeout') == 0.5
