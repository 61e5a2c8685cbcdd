# dbgseq debug sequences
# Copyright (c) 2018-2020 Arm Limited
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

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ..probe.swj import SWJPinInterface

class MemoryInterface:
    """@brief Interface for target memory and register access used by debug sequences.

    Writes may be buffered by the implementation. Call flush() to make sure all outstanding
    transfers have completed; any transfer error raised by a buffered access is reported no
    later than the flush.
    """

    def write_memory(self, addr: int, data: int, transfer_size: int = 32) -> None:
        """@brief Write a single memory location.

        By default the transfer size is a word."""
        raise NotImplementedError()

    def read_memory(self, addr: int, transfer_size: int = 32) -> int:
        """@brief Read a memory location.

        By default, a word will be read."""
        raise NotImplementedError()

    def flush(self) -> None:
        """@brief Complete all outstanding transfers."""
        pass

    def get_pin_interface(self) -> "SWJPinInterface":
        """@brief Return the pin control interface of the probe behind this memory interface."""
        raise NotImplementedError()

    def write32(self, addr: int, value: int) -> None:
        """@brief Shorthand to write a 32-bit word."""
        self.write_memory(addr, value, 32)

    def read32(self, addr: int) -> int:
        """@brief Shorthand to read a 32-bit word."""
        return self.read_memory(addr, 32)
