# dbgseq debug sequences
# Copyright (c) 2006-2020 Arm Limited
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

from ..core.register import Register
from ..utility.mask import Bitfield

class Dhcsr(Register):
    """! @brief Debug Halting Control and Status Register.

    The upper halfword reads as status bits but must be written with DBGKEY for a write to have
    any effect, so the `dbgkey` field overlaps the S_* status fields.
    """
    ADDRESS = 0xE000EDF0
    DBGKEY = 0xA05F

    c_debugen = Bitfield(0)
    c_halt = Bitfield(1)
    c_step = Bitfield(2)
    c_maskints = Bitfield(3)
    c_snapstall = Bitfield(5)
    s_regrdy = Bitfield(16)
    s_halt = Bitfield(17)
    s_sleep = Bitfield(18)
    s_lockup = Bitfield(19)
    s_retire_st = Bitfield(24)
    s_reset_st = Bitfield(25)
    dbgkey = Bitfield(31, 16)

class Aircr(Register):
    """! @brief Application Interrupt and Reset Control Register."""
    ADDRESS = 0xE000ED0C
    VECTKEY = 0x05FA

    vectreset = Bitfield(0)
    vectclractive = Bitfield(1)
    sysresetreq = Bitfield(2)
    prigroup = Bitfield(10, 8)
    endianness = Bitfield(15, read_only=True)
    vectkey = Bitfield(31, 16)

class Demcr(Register):
    """! @brief Debug Exception and Monitor Control Register."""
    ADDRESS = 0xE000EDFC

    vc_corereset = Bitfield(0)
    vc_harderr = Bitfield(10)
    trcena = Bitfield(24)
