# dbgseq debug sequences
# Copyright (c) 2015-2019 Arm Limited
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

from ..core import exceptions
from ..core.register import Register
from ..utility.mask import Bitfield

LOG = logging.getLogger(__name__)

## @brief Address of the first FPB comparator.
FP_COMP0 = 0xE0002008

## @brief FP_CTRL.REV value for FPBv1.
FPB_REV_V1 = 0

## @brief FP_CTRL.REV value for FPBv2.
FPB_REV_V2 = 1

class FpCtrl(Register):
    """! @brief Flash Patch and Breakpoint control register.

    The KEY bit must be set on every write or the write is ignored.
    """
    ADDRESS = 0xE0002000

    enable = Bitfield(0)
    key = Bitfield(1)
    num_code_0 = Bitfield(7, 4)
    num_lit = Bitfield(11, 8)
    num_code_1 = Bitfield(14, 12)
    rev = Bitfield(31, 28)

    @property
    def num_code(self):
        """! @brief Total number of code comparators."""
        return (self.num_code_1 << 4) | self.num_code_0

class FpRev1Comp(Register):
    """! @brief FPBv1 comparator register.

    FPBv1 can only match addresses in the code region, 0x00000000 - 0x1fffffff. The REPLACE
    field selects which halfword of the matched word triggers the breakpoint.
    """
    ADDRESS = FP_COMP0

    enable = Bitfield(0)
    comp = Bitfield(28, 2)
    replace = Bitfield(31, 30)

    ## REPLACE value for a breakpoint on the lower halfword.
    REPLACE_BP_LOWER = 0b01
    ## REPLACE value for a breakpoint on the upper halfword.
    REPLACE_BP_UPPER = 0b10

    @classmethod
    def breakpoint_configuration(cls, addr: int) -> "FpRev1Comp":
        """! @brief Build a comparator value that breaks at the given address.
        @exception TargetSupportError The address is outside the range FPBv1 can match.
        """
        if addr >= 0x20000000:
            raise exceptions.TargetSupportError("breakpoint address 0x%08x is out of range for FPBv1" % addr)
        return cls.from_fields(
                enable=1,
                comp=(addr & 0x1ffffffc) >> 2,
                replace=cls.REPLACE_BP_UPPER if (addr & 0x2) else cls.REPLACE_BP_LOWER,
                )

class FpRev2Comp(Register):
    """! @brief FPBv2 comparator register, configured as an instruction address breakpoint."""
    ADDRESS = FP_COMP0

    be = Bitfield(0)
    bpaddr = Bitfield(31, 1)

    @classmethod
    def breakpoint_configuration(cls, addr: int) -> "FpRev2Comp":
        """! @brief Build a comparator value that breaks at the given address."""
        return cls.from_fields(be=1, bpaddr=(addr & 0xffffffff) >> 1)

def breakpoint_comparator(revision: int, addr: int) -> int:
    """! @brief Compute a raw FP_COMPn value for a breakpoint.

    @param revision Value of the FP_CTRL.REV field.
    @param addr Breakpoint address. For Thumb code the low bit may be set; it is ignored.
    @return Integer comparator value.
    @exception UnsupportedHardwareRevision The revision is neither FPBv1 nor FPBv2.
    """
    if revision == FPB_REV_V1:
        comp = FpRev1Comp.breakpoint_configuration(addr)
    elif revision == FPB_REV_V2:
        comp = FpRev2Comp.breakpoint_configuration(addr)
    else:
        raise exceptions.UnsupportedHardwareRevision("unknown FPB version", revision=revision)
    LOG.debug("FPB rev %d comparator for 0x%08x is 0x%08x", revision + 1, addr, comp.value)
    return comp.value
