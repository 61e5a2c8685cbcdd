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

import logging
from time import sleep
from typing import (Optional, TYPE_CHECKING)

from ..core import exceptions
from ..core.options_manager import OptionsManager
from ..core.session import Session
from ..coresight.cortex_m import (Aircr, Demcr, Dhcsr)
from ..probe.swj import (Pins, PINS_READBACK_UNSUPPORTED)
from ..utility.timeout import poll
from .state import RetainedStateSlot

if TYPE_CHECKING:
    from ..core.memory_interface import MemoryInterface
    from ..probe.swj import SWJPinInterface

LOG = logging.getLogger(__name__)

class DebugSequence:
    """@brief Reset and halt-after-reset hooks for a family of devices.

    An external driver calls these methods around a reset, in this order:

    1. reset_hardware_assert()
    2. reset_hardware_deassert()
    3. reset_catch_set(), only for a halting reset
    4. reset_system()
    5. reset_catch_clear(), only for a halting reset

    This base class implements the standard behaviour for a Cortex-M device. Device families
    whose boot ROM or reset logic needs something different subclass it and override the
    relevant methods. One instance is created per debug session with create() and is reused for
    every reset in that session, so state can be carried from one hook to a later one.

    Every hook either completes or raises. Transfer errors from the memory or pin interfaces are
    passed through unchanged; a poll that doesn't complete raises
    @ref dbgseq.core.exceptions.TimeoutError "TimeoutError". After an exception the target's
    debug state is undefined.
    """

    ## @brief Pins driven by the default hardware reset hooks.
    RESET_PIN_SELECT = Pins.from_fields(nreset=1)

    @classmethod
    def create(cls, session: Optional[Session] = None) -> "DebugSequence":
        """@brief Create the sequence object used for the lifetime of a debug session."""
        return cls(session)

    def __init__(self, session: Optional[Session] = None) -> None:
        self._session = session
        # Whether DEMCR.VC_CORERESET was already set when reset_catch_set() ran.
        self._vector_catch: RetainedStateSlot[bool] = RetainedStateSlot()

    @property
    def session(self) -> Session:
        """@brief The session this sequence reads options from."""
        return self._session if (self._session is not None) else Session.get_current()

    @property
    def options(self) -> OptionsManager:
        return self.session.options

    def reset_hardware_assert(self, probe: "SWJPinInterface") -> None:
        """@brief Drive nRESET low."""
        LOG.debug("asserting nRESET")
        probe.swj_pins(0, self.RESET_PIN_SELECT.value, 0)

    def reset_hardware_deassert(self, memory: "MemoryInterface") -> None:
        """@brief Release nRESET and wait for it to go high."""
        LOG.debug("releasing nRESET")
        self._release_reset(memory.get_pin_interface(), self.RESET_PIN_SELECT, self.RESET_PIN_SELECT)

    def reset_catch_set(self, memory: "MemoryInterface") -> None:
        """@brief Arrange for the core to halt on the next reset, using reset vector catch.

        Whether the reset vector catch was already enabled is remembered, so that
        reset_catch_clear() leaves a catch configured by someone else alone.
        """
        demcr = Demcr.read(memory)
        previous = self._vector_catch.replace(bool(demcr.vc_corereset))
        if previous is not None:
            # VC_CORERESET now reads as set because of the earlier call, so keep the first value.
            LOG.warning("reset catch set again before being cleared")
            self._vector_catch.replace(previous)
        if not demcr.vc_corereset:
            demcr.vc_corereset = 1
            demcr.write(memory)

        # Reading DHCSR clears a sticky S_RESET_ST left over from an earlier reset.
        Dhcsr.read(memory)

    def reset_catch_clear(self, memory: "MemoryInterface") -> None:
        """@brief Undo reset_catch_set().

        DEMCR.VC_CORERESET is cleared unless it was already set before reset_catch_set().
        """
        was_set = self._vector_catch.take()
        if was_set is None:
            LOG.warning("reset catch cleared without being set; disabling reset vector catch")
        elif was_set:
            LOG.debug("leaving reset vector catch enabled")
            return

        demcr = Demcr.read(memory)
        if demcr.vc_corereset:
            demcr.vc_corereset = 0
            demcr.write(memory)

    def reset_system(self, memory: "MemoryInterface") -> None:
        """@brief Reset the system with AIRCR.SYSRESETREQ."""
        aircr = Aircr.from_fields(vectkey=Aircr.VECTKEY, sysresetreq=1)

        # Transfer errors are ignored on the AIRCR write for resets. On a few systems, the reset
        # apparently happens so quickly that we can't even finish the SWD transaction.
        try:
            aircr.write(memory)
            memory.flush()
        except exceptions.TransferError:
            LOG.debug("ignoring transfer error on AIRCR write")
            memory.flush()

        self._wait_for_reset_done(memory)

    def _release_reset(self, probe: "SWJPinInterface", output: Pins, select: Pins) -> None:
        """@brief Drive the selected pins and wait for nRESET to read back high.

        The readback returned by the drive request counts as the first sample of nRESET. If the
        probe can't read back pin state, a fixed settle delay is used instead.
        """
        readback = probe.swj_pins(output.value, select.value, 0)

        if readback == PINS_READBACK_UNSUPPORTED:
            delay = self.options.get('reset.hardware.settle_delay')
            LOG.debug("probe cannot read pins; waiting %g s after releasing nRESET", delay)
            sleep(delay)
            return

        pending_readback = [readback]

        def nreset_is_high():
            if pending_readback:
                value = pending_readback.pop()
            else:
                # Select no pins so the probe only reads them.
                value = probe.swj_pins(0, 0, 0)
            return Pins(value).nreset

        try:
            poll(nreset_is_high,
                    self.options.get('reset.hardware.release_timeout'),
                    self.options.get('reset.hardware.poll_interval'),
                    "nRESET to go high")
        except exceptions.TimeoutError:
            LOG.error("nRESET did not go high despite driving it high")
            raise

    def _wait_for_reset_done(self, memory: "MemoryInterface") -> None:
        """@brief Wait for DHCSR.S_RESET_ST to read as clear."""
        try:
            poll(lambda: not Dhcsr.read(memory).s_reset_st,
                    self.options.get('reset.system.timeout'),
                    description="DHCSR.S_RESET_ST to clear")
        except exceptions.TimeoutError:
            LOG.error("target did not reset as commanded")
            raise
        LOG.debug("detected reset via S_RESET_ST")

    def _wait_for_halt(self, memory: "MemoryInterface") -> None:
        """@brief Wait for DHCSR.S_HALT to be set."""
        try:
            poll(lambda: Dhcsr.read(memory).s_halt,
                    self.options.get('reset.halt_timeout'),
                    description="core to halt")
        except exceptions.TimeoutError:
            LOG.error("core did not halt after reset")
            raise
        LOG.debug("halted after reset")
