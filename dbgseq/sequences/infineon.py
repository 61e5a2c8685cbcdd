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
from typing import (Optional, TYPE_CHECKING)

from ..core import exceptions
from ..core.options import (OptionInfo, add_option_set)
from ..core.register import Register
from ..core.session import Session
from ..coresight.cortex_m import (Aircr, Dhcsr)
from ..coresight.fpb import (FP_COMP0, FpCtrl, breakpoint_comparator)
from ..probe.swj import Pins
from ..utility.mask import Bitfield
from ..utility.timeout import poll
from .sequence import DebugSequence
from .state import (HaltAfterResetState, RetainedStateSlot)

if TYPE_CHECKING:
    from ..core.memory_interface import MemoryInterface
    from ..probe.swj import SWJPinInterface

LOG = logging.getLogger(__name__)

TRACE = LOG.getChild("trace")
TRACE.setLevel(logging.CRITICAL)

add_option_set([
    OptionInfo('xmc4000.dapsa_timeout', float, 0.5,
        "Timeout in seconds for the XMC4000 boot firmware to re-enable debug access (SCU DAPSA) "
        "after a system reset. Default is 0.5 s."),
    ])

class Stcon(Register):
    """@brief XMC4000 SCU startup configuration register.

    HWCON is latched from the TCK and TMS pins at power-on reset (HWCON[0] = not TMS,
    HWCON[1] = TCK) and selects the boot mode for power-on resets. SWCON starts out as a copy of
    HWCON and is what the boot firmware uses for every other reset type. For both fields, zero
    selects a normal boot.
    """
    ADDRESS = 0x50004010

    hwcon = Bitfield(1, 0, read_only=True)
    swcon = Bitfield(11, 8)

class RstClr(Register):
    """@brief XMC4000 SCU reset clear register."""
    ADDRESS = 0x50004408

    rsclr = Bitfield(0)
    hibwk = Bitfield(8)
    hibrs = Bitfield(9)
    lcken = Bitfield(10)

class XMC4000(DebugSequence):
    """@brief Reset sequences for the Infineon XMC4000 family.

    Halt after a system reset is not possible with vector catch on these parts, because the
    reset vector belongs to the boot firmware (SSW) in ROM. The firmware then jumps to the
    application's reset handler as a normal branch. The only way to stop on the first application
    instruction is a breakpoint on the application's reset handler, which is what
    reset_catch_set() arranges.

    The FPB state clobbered by that breakpoint is saved by reset_catch_set() and put back by
    reset_catch_clear(). Whether a saved state is present also tells reset_system() to wait for
    the core to halt.
    """

    ## @brief SCU module ID register. Never reads as zero once debug access is enabled.
    SCU_ID = 0x50004000

    ## @brief Application reset vector at the start of flash.
    FLASH_RESET_VECTOR = 0x0C000004

    ## @brief nRESET plus the TCK and TMS pins that HWCON is latched from.
    RESET_PIN_SELECT = Pins.from_fields(nreset=1, swclk_tck=1, swdio_tms=1)

    ## @brief TCK low and TMS high latch HWCON as 0, normal boot.
    NORMAL_BOOT_PINS = Pins.from_fields(swclk_tck=0, swdio_tms=1)

    def __init__(self, session: Optional[Session] = None) -> None:
        super().__init__(session)
        self._halt_after_reset: RetainedStateSlot[HaltAfterResetState] = RetainedStateSlot()

    @property
    def is_halt_after_reset_pending(self) -> bool:
        return self._halt_after_reset.is_present()

    def reset_hardware_assert(self, probe: "SWJPinInterface") -> None:
        TRACE.debug("performing XMC4000 ResetHardwareAssert")

        # nRESET low while keeping HWCON's pins at normal boot.
        output = Pins(self.NORMAL_BOOT_PINS.value)
        output.nreset = 0
        probe.swj_pins(output.value, self.RESET_PIN_SELECT.value, 0)

    def reset_hardware_deassert(self, memory: "MemoryInterface") -> None:
        TRACE.debug("performing XMC4000 ResetHardwareDeassert")

        # Continue driving normal boot on TCK and TMS while nRESET goes high.
        output = Pins(self.NORMAL_BOOT_PINS.value)
        output.nreset = 1
        self._release_reset(memory.get_pin_interface(), output, self.RESET_PIN_SELECT)

    def reset_catch_set(self, memory: "MemoryInterface") -> None:
        TRACE.debug("performing XMC4000 ResetCatchSet")

        # Force the normal boot mode for the coming system reset. SWCON is authoritative for all
        # resets other than power-on, and HWCON can't be changed anyway.
        stcon = Stcon.read(memory)
        if stcon.swcon != 0:
            LOG.info("XMC4000 STCON.SWCON is %d; selecting normal boot", stcon.swcon)
            stcon.swcon = 0
            stcon.write(memory)

        # In normal boot mode the firmware points VTOR at flash and jumps to the reset handler
        # in the flash vector table.
        reset_handler = memory.read32(self.FLASH_RESET_VECTOR)
        if reset_handler == 0xFFFFFFFF:
            LOG.warning("XMC4000 flash reset vector is erased; halt after reset will likely fail")
        application_entry = (reset_handler + 1) & 0xFFFFFFFF

        fp_ctrl = FpCtrl.read(memory)
        fpcomp0 = memory.read32(FP_COMP0)

        # Raises for an unknown FPB revision before anything is modified.
        comparator = breakpoint_comparator(fp_ctrl.rev, application_entry)

        previous_state = self._halt_after_reset.replace(HaltAfterResetState(
                fpctrl_enabled=bool(fp_ctrl.enable),
                fpcomp0=fpcomp0,
                ))
        if previous_state is not None:
            LOG.warning("XMC4000 reset catch set again before being cleared; discarding saved FPB "
                    "state (FP_CTRL.ENABLE=%d, FP_COMP0=0x%08x)",
                    previous_state.fpctrl_enabled, previous_state.fpcomp0)

        FpCtrl.from_fields(enable=1, key=1).write(memory)
        memory.write32(FP_COMP0, comparator)
        LOG.debug("set a breakpoint at 0x%08x", application_entry)

        memory.flush()

    def reset_catch_clear(self, memory: "MemoryInterface") -> None:
        TRACE.debug("performing XMC4000 ResetCatchClear")

        original_state = self._halt_after_reset.take()
        if original_state is None:
            LOG.warning("XMC4000 reset catch cleared without being set; disabling FPB")
            original_state = HaltAfterResetState()

        FpCtrl.from_fields(enable=original_state.fpctrl_enabled, key=1).write(memory)
        memory.write32(FP_COMP0, original_state.fpcomp0)

        memory.flush()

    def reset_system(self, memory: "MemoryInterface") -> None:
        TRACE.debug("performing XMC4000 ResetSystem")

        # RSTSTAT accumulates reset causes. If the power-on cause is still set at the next system
        # reset, the boot firmware uses the HWCON boot mode instead of SWCON. The application
        # normally clears it, but don't rely on that.
        RstClr.from_fields(rsclr=1).write(memory)
        LOG.debug("cleared SCU RSTSTAT")

        Aircr.from_fields(vectkey=Aircr.VECTKEY, sysresetreq=1).write(memory)
        LOG.debug("resetting via AIRCR.SYSRESETREQ")

        self._wait_for_reset_done(memory)

        # The boot firmware runs with DAPSA clear, blocking debug access to everything but the
        # core debug registers. Blocked reads return zero, so wait for the SCU ID to read
        # nonzero.
        def dapsa_is_set():
            scu_id = memory.read32(self.SCU_ID)
            TRACE.debug("SCU ID = 0x%08x", scu_id)
            return scu_id != 0

        try:
            poll(dapsa_is_set, self.options.get('xmc4000.dapsa_timeout'),
                    description="XMC4000 DAPSA to be set")
        except exceptions.TimeoutError:
            LOG.error("timed out waiting for XMC4000 debug access, indicating the boot firmware hung")
            raise
        LOG.debug("DAPSA is set")

        if self._halt_after_reset.is_present():
            LOG.debug("waiting for XMC4000 to halt after reset")
            self._wait_for_halt(memory)
        else:
            LOG.debug("not performing a halt-after-reset")
