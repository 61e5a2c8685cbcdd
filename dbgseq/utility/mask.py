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

import operator
from functools import reduce
from typing import (Any, Optional)

def bitmask(*args) -> int:
    """! @brief Returns a mask with specified bit ranges set.

    An integer mask is generated based on the bits and bit ranges specified by the
    arguments. Any number of arguments can be provided. Each argument may be either
    a 2-tuple of integers, a list of integers, or an individual integer. The result
    is the combination of masks produced by the arguments.

    - 2-tuple: The tuple is a bit range with the first element being the MSB and the
          second element the LSB. All bits from LSB up to and included MSB are set.
    - list: Each bit position specified by the list elements is set.
    - int: The specified bit position is set.

    Example:
    @code
      >>> hex(bitmask((23,17),1))
      0xfe0002
      >>> hex(bitmask([4,0,2],(31,24))
      0xff000015
    @endcode
    """
    mask = 0

    for a in args:
        if isinstance(a, tuple):
            hi, lo = a
            mask |= ((1 << (hi - lo + 1)) - 1) << lo
        elif isinstance(a, (list, set)):
            mask |= reduce(operator.or_, ((1 << b) for b in a))
        elif isinstance(a, int):
            mask |= 1 << a

    return mask

def bfx(value: int, msb: int, lsb: int) -> int:
    """! @brief Extract a value from a bitfield."""
    mask = bitmask((msb, lsb))
    return (value & mask) >> lsb

def bfi(value: int, msb: int, lsb: int, field: int) -> int:
    """! @brief Change a bitfield value."""
    mask = bitmask((msb, lsb))
    value &= ~mask
    value |= (field << lsb) & mask
    return value

class Bitfield:
    """! @brief Represents a bitfield of a register.

    Instances may be used standalone through the get() and set() methods, or as descriptors on a
    class that holds the raw register value in a `value` attribute. In the latter case, reading
    the attribute extracts the field and assigning it performs a read-modify-write of the raw
    value.

    Field values are range checked against the field's width. Assigning a value that doesn't fit
    raises ValueError rather than silently truncating it.
    """

    def __init__(self, msb: int, lsb: Optional[int] = None, name: Optional[str] = None,
            read_only: bool = False) -> None:
        self._msb = msb
        self._lsb = lsb if (lsb is not None) else msb
        self._name = name
        self._read_only = read_only
        assert self._msb >= self._lsb

    def __set_name__(self, owner: Any, name: str) -> None:
        if self._name is None:
            self._name = name

    @property
    def name(self) -> Optional[str]:
        return self._name

    @property
    def msb(self) -> int:
        return self._msb

    @property
    def lsb(self) -> int:
        return self._lsb

    @property
    def width(self) -> int:
        return self._msb - self._lsb + 1

    @property
    def mask(self) -> int:
        return bitmask((self._msb, self._lsb))

    @property
    def is_read_only(self) -> bool:
        return self._read_only

    def get(self, value: int) -> int:
        """! @brief Extract the bitfield value from a register value.
        @param self The Bitfield object.
        @param value Integer register value.
        @return Integer value of the bitfield extracted from `value`.
        """
        return bfx(value, self._msb, self._lsb)

    def set(self, register_value: int, field_value: int) -> int:
        """! @brief Modified the bitfield in a register value.
        @param self The Bitfield object.
        @param register_value Integer register value.
        @param field_value New value for the bitfield. Must not be shifted into place already.
        @return Integer register value with the bitfield updated to `field_value`.
        @exception ValueError The field value does not fit in the field's width.
        """
        field_value = int(field_value)
        if not (0 <= field_value < (1 << self.width)):
            raise ValueError("value %#x does not fit in %d-bit field %s" % (field_value, self.width, self._name))
        return bfi(register_value, self._msb, self._lsb, field_value)

    def __get__(self, obj: Any, objtype: Any = None) -> Any:
        if obj is None:
            return self
        return self.get(obj.value)

    def __set__(self, obj: Any, field_value: int) -> None:
        if self._read_only:
            raise AttributeError("bitfield %s is read-only" % self._name)
        obj.value = self.set(obj.value, field_value)

    def __repr__(self):
        return "<{}@{:x} name={} {}:{}>".format(self.__class__.__name__, id(self), self._name, self._msb, self._lsb)
