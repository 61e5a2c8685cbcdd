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

import logging
import pytest

from dbgseq.core import exceptions
from dbgseq.sequences.infineon import XMC4000

STCON = 0x50004010
SCU_ID = 0x50004000
RSTCLR = 0x50004408
FLASH_RESET_VECTOR = 0x0C000004
FP_CTRL = 0xE0002000
FP_COMP0 = 0xE0002008
AIRCR = 0xE000ED0C
DHCSR = 0xE000EDF0

S_HALT = 1 << 17
S_RESET_ST = 1 << 25

# FPBv2, 6 code comparators, 2 literal comparators, enabled.
FP_CTRL_V2_ENABLED = 0x10000261
# FPBv1, disabled.
FP_CTRL_V1_DISABLED = 0x00000260

@pytest.fixture(scope='function')
def xmc(session):
    return XMC4000.create(session)

@pytest.fixture(scope='function')
def target(memory):
    memory.values.update({
            STCON: 0x00000000,
            SCU_ID: 0x101A0100,
            FLASH_RESET_VECTOR: 0x0C000100,
            FP_CTRL: FP_CTRL_V2_ENABLED,
            FP_COMP0: 0x12345679,
            })
    return memory

class TestResetCatch:
    def test_round_trip(self, xmc, target):
        xmc.reset_catch_set(target)
        assert xmc.is_halt_after_reset_pending
        assert target.writes_to(FP_CTRL) == [0x3]
        assert target.writes_to(FP_COMP0) == [0x0C000101]
        assert target.flush_count == 1

        xmc.reset_catch_clear(target)
        assert not xmc.is_halt_after_reset_pending
        assert target.writes_to(FP_CTRL) == [0x3, 0x3]
        assert target.writes_to(FP_COMP0) == [0x0C000101, 0x12345679]
        assert target.values[FP_COMP0] == 0x12345679
        assert target.flush_count == 2

    def test_round_trip_fpb_disabled(self, xmc, target):
        target.values[FP_CTRL] = 0x10000260
        target.values[FP_COMP0] = 0
        xmc.reset_catch_set(target)
        xmc.reset_catch_clear(target)
        assert target.writes_to(FP_CTRL) == [0x3, 0x2]
        assert target.values[FP_COMP0] == 0

    def test_swcon_zero_not_written(self, xmc, target):
        target.values[STCON] = 0x00000001
        xmc.reset_catch_set(target)
        assert target.writes_to(STCON) == []

    def test_swcon_cleared(self, xmc, target):
        target.values[STCON] = 0x00000301
        xmc.reset_catch_set(target)
        # HWCON is left as read.
        assert target.writes_to(STCON) == [0x00000001]

    def test_breakpoint_on_reset_handler(self, xmc, target):
        target.values[FLASH_RESET_VECTOR] = 0x0C000200
        xmc.reset_catch_set(target)
        assert target.writes_to(FP_COMP0) == [0x0C000201]

    def test_fpb_rev1(self, xmc, target):
        target.values[FP_CTRL] = FP_CTRL_V1_DISABLED
        xmc.reset_catch_set(target)
        assert target.writes_to(FP_COMP0) == [0x4C000101]
        assert target.writes_to(FP_CTRL) == [0x3]

    def test_unsupported_fpb_revision(self, xmc, target):
        target.values[FP_CTRL] = 0x20000261
        with pytest.raises(exceptions.UnsupportedHardwareRevision):
            xmc.reset_catch_set(target)
        assert target.writes_to(FP_CTRL) == []
        assert target.writes_to(FP_COMP0) == []
        assert not xmc.is_halt_after_reset_pending

    def test_erased_reset_vector(self, xmc, target, caplog):
        target.values[FLASH_RESET_VECTOR] = 0xFFFFFFFF
        with caplog.at_level(logging.WARNING, logger="dbgseq"):
            xmc.reset_catch_set(target)
        assert "erased" in caplog.text
        # Wraps around to address 0.
        assert target.writes_to(FP_COMP0) == [0x00000001]

    def test_set_twice(self, xmc, target, caplog):
        xmc.reset_catch_set(target)
        with caplog.at_level(logging.WARNING, logger="dbgseq"):
            xmc.reset_catch_set(target)
        assert "set again" in caplog.text
        assert xmc.is_halt_after_reset_pending

        # The second save captured the breakpoint from the first.
        xmc.reset_catch_clear(target)
        assert target.values[FP_COMP0] == 0x0C000101

    def test_clear_without_set(self, xmc, target, caplog):
        with caplog.at_level(logging.WARNING, logger="dbgseq"):
            xmc.reset_catch_clear(target)
        assert "without being set" in caplog.text
        assert target.writes_to(FP_CTRL) == [0x2]
        assert target.writes_to(FP_COMP0) == [0]

    def test_transfer_error_propagates(self, xmc, target):
        target.script(FP_CTRL, exceptions.TransferFaultError("read", fault_address=FP_CTRL))
        with pytest.raises(exceptions.TransferError):
            xmc.reset_catch_set(target)
        assert not xmc.is_halt_after_reset_pending

    def test_separate_instances(self, session, target):
        a = XMC4000.create(session)
        b = XMC4000.create(session)
        a.reset_catch_set(target)
        assert a.is_halt_after_reset_pending
        assert not b.is_halt_after_reset_pending

class TestResetSystem:
    def test_writes(self, xmc, target):
        xmc.reset_system(target)
        assert target.writes[:2] == [(RSTCLR, 0x1), (AIRCR, 0x05FA0004)]

    def test_no_halt_wait_without_catch(self, xmc, target):
        xmc.reset_system(target)
        # Only the S_RESET_ST check.
        assert target.read_count(DHCSR) == 1
        assert target.read_count(SCU_ID) == 1

    def test_halt_wait_with_catch(self, xmc, target):
        target.values[DHCSR] = S_HALT
        xmc.reset_catch_set(target)
        xmc.reset_system(target)
        assert target.read_count(DHCSR) == 2
        xmc.reset_catch_clear(target)

    def test_waits_for_reset(self, xmc, target):
        target.script(DHCSR, S_RESET_ST, S_RESET_ST, 0)
        xmc.reset_system(target)
        assert target.read_count(DHCSR) == 3

    def test_waits_for_dapsa(self, xmc, target):
        target.script(SCU_ID, 0, 0, 0, 0x101A0100)
        xmc.reset_system(target)
        assert target.read_count(SCU_ID) == 4

    def test_reset_timeout(self, xmc, target, ticking_time):
        target.values[DHCSR] = S_RESET_ST
        with pytest.raises(exceptions.TimeoutError):
            xmc.reset_system(target)
        assert target.read_count(SCU_ID) == 0

    def test_dapsa_timeout(self, xmc, target, ticking_time, caplog):
        target.values[SCU_ID] = 0
        xmc.reset_catch_set(target)
        with caplog.at_level(logging.ERROR, logger="dbgseq"):
            with pytest.raises(exceptions.TimeoutError):
                xmc.reset_system(target)
        assert "boot firmware" in caplog.text
        # Never got as far as waiting for halt.
        assert target.read_count(DHCSR) == 1

    def test_halt_timeout(self, xmc, target, ticking_time):
        xmc.reset_catch_set(target)
        with pytest.raises(exceptions.TimeoutError):
            xmc.reset_system(target)
        assert target.read_count(DHCSR) > 2
        # Saved state survives so it can still be restored.
        assert xmc.is_halt_after_reset_pending

    def test_dapsa_timeout_option(self, session, target, ticking_time):
        session.options.set('xmc4000.dapsa_timeout', 0.1)
        xmc = XMC4000.create(session)
        target.values[SCU_ID] = 0
        with pytest.raises(exceptions.TimeoutError):
            xmc.reset_system(target)
        short = target.read_count(SCU_ID)
        assert 0 < short < 20

class TestHardwareReset:
    def test_assert(self, xmc, pins):
        xmc.reset_hardware_assert(pins)
        # nRESET low, TMS high, TCK low.
        assert pins.calls == [(0x02, 0x83, 0)]
        assert pins.state.nreset == 0

    def test_deassert(self, xmc, memory, pins, mock_sleep):
        xmc.reset_hardware_assert(pins)
        xmc.reset_hardware_deassert(memory)
        # nRESET already reads high in the drive readback, so there is no separate read.
        assert pins.calls[1:] == [(0x82, 0x83, 0)]
        assert pins.state.nreset == 1
        assert mock_sleep.call_count == 0

    def test_deassert_slow_release(self, xmc, memory, pins, mock_sleep):
        xmc.reset_hardware_assert(pins)
        pins.low_reads = 3
        xmc.reset_hardware_deassert(memory)
        assert pins.calls[1] == (0x82, 0x83, 0)
        assert pins.calls[2:] == [(0, 0, 0)] * 3
        # One poll interval before every read.
        assert mock_sleep.call_count == 3
        assert all(c.args == (0.1,) for c in mock_sleep.call_args_list)

    def test_deassert_no_readback(self, xmc, memory, pins, mock_sleep):
        pins.can_read = False
        xmc.reset_hardware_deassert(memory)
        assert pins.calls == [(0x82, 0x83, 0)]
        mock_sleep.assert_called_once_with(0.1)

    def test_deassert_stuck_low(self, xmc, memory, pins, mock_sleep, caplog):
        pins.stuck_low = True
        with caplog.at_level(logging.ERROR, logger="dbgseq"):
            with pytest.raises(exceptions.TimeoutError):
                xmc.reset_hardware_deassert(memory)
        assert "nRESET did not go high" in caplog.text
        reads = pins.calls.count((0, 0, 0))
        assert reads > 2
        assert mock_sleep.call_count == reads
        assert all(c.args == (0.1,) for c in mock_sleep.call_args_list)

class TestFullReset:
    def test_halting_reset(self, xmc, target, pins, mock_sleep):
        target.values[DHCSR] = S_HALT
        xmc.reset_hardware_assert(pins)
        xmc.reset_hardware_deassert(target)
        xmc.reset_catch_set(target)
        xmc.reset_system(target)
        xmc.reset_catch_clear(target)
        assert target.values[FP_COMP0] == 0x12345679
        assert target.values[FP_CTRL] == 0x3
        assert not xmc.is_halt_after_reset_pending
