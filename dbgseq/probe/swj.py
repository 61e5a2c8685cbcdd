# dbgseq debug sequences
# Copyright (c) 2019-2021 Arm Limited
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

from ..core.register import BitfieldValue
from ..utility.mask import Bitfield

## @brief Pin readback value returned by probes that can't read the SWJ pins.
PINS_READBACK_UNSUPPORTED = 0xFFFFFFFF

class Pins(BitfieldValue):
    """! @brief SWJ pin state, using the CMSIS-DAP DAP_SWJ_Pins bit layout.

    The same layout is used for the pin select mask, the output values, and the readback value.
    """
    WIDTH = 8

    swclk_tck = Bitfield(0)
    swdio_tms = Bitfield(1)
    tdi = Bitfield(2)
    tdo = Bitfield(3)
    ntrst = Bitfield(5)
    nreset = Bitfield(7)

class SWJPinInterface:
    """! @brief Interface for direct control of the debug probe's SWJ pins.

    Probes that support it implement this to let debug sequences drive nRESET and the
    SWCLK/TCK and SWDIO/TMS lines directly, for instance to select a boot mode while the
    target is held in reset.
    """

    def swj_pins(self, output: int, select: int, wait: int) -> int:
        """! @brief Write and read the SWJ pins.

        Pins selected by the _select_ mask are driven to the corresponding bit in _output_. With a
        select mask of zero the pins are only read.

        @param self
        @param output Pin output values, in the @ref Pins layout.
        @param select Mask of pins to drive, in the @ref Pins layout.
        @param wait Maximum time in microseconds the probe waits for selected pins to settle.
        @return The pin readback value, or PINS_READBACK_UNSUPPORTED if the probe cannot read the pins.
        """
        raise NotImplementedError()
