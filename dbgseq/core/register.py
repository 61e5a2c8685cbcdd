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

from typing import (Any, ClassVar, Dict, TYPE_CHECKING)

from ..utility.mask import Bitfield

if TYPE_CHECKING:
    from .memory_interface import MemoryInterface

class BitfieldValue:
    """@brief Raw integer value with named bitfields.

    Subclasses declare their fields as class attributes holding @ref dbgseq.utility.mask.Bitfield
    "Bitfield" descriptors. Constructing an instance from a raw value decodes it; the fields can
    then be read and modified by name, and the raw value is available from the `value` attribute
    or by converting the instance to int.

    A default-constructed instance has all bits cleared, which is what should be used when a
    register must be written in full rather than read-modify-written.
    """

    ## Width in bits of the raw value.
    WIDTH: ClassVar[int] = 32

    def __init__(self, value: int = 0) -> None:
        self.value = value & ((1 << self.WIDTH) - 1)

    @classmethod
    def bitfields(cls) -> Dict[str, Bitfield]:
        """@brief Dictionary of field name to Bitfield, in LSB order."""
        result = {}
        for klass in reversed(cls.__mro__):
            for name, attr in vars(klass).items():
                if isinstance(attr, Bitfield):
                    result[name] = attr
        return dict(sorted(result.items(), key=lambda item: item[1].lsb))

    @classmethod
    def from_fields(cls, **fields: int) -> Any:
        """@brief Encode field values into a new instance.

        All bits not covered by one of the given fields are zero. Read-only fields may be set
        here, since this is building a value rather than modifying hardware.

        @exception KeyError An unknown field name was passed.
        @exception ValueError A field value doesn't fit in the field.
        """
        bitfields = cls.bitfields()
        result = cls()
        for name, field_value in fields.items():
            try:
                field = bitfields[name]
            except KeyError:
                raise KeyError("%s has no field named '%s'" % (cls.__name__, name)) from None
            result.value = field.set(result.value, field_value)
        return result

    @property
    def fields(self) -> Dict[str, int]:
        """@brief Decode all fields into a dictionary of field name to value."""
        return {name: field.get(self.value) for name, field in self.bitfields().items()}

    def __int__(self) -> int:
        return self.value

    def __index__(self) -> int:
        return self.value

    def __eq__(self, other: Any) -> bool:
        if isinstance(other, BitfieldValue):
            return type(self) is type(other) and self.value == other.value
        elif isinstance(other, int):
            return self.value == other
        return NotImplemented

    def __hash__(self) -> int:
        return hash((type(self), self.value))

    def __repr__(self) -> str:
        fields = " ".join("%s=%d" % (name, value) for name, value in self.fields.items() if value)
        return "<%s %#0*x %s>" % (self.__class__.__name__, self.WIDTH // 4 + 2, self.value, fields)

class Register(BitfieldValue):
    """@brief Memory mapped 32-bit register with a fixed address."""

    ADDRESS: ClassVar[int]

    @classmethod
    def read(cls, memory: "MemoryInterface") -> Any:
        """@brief Read the register and return the decoded value."""
        return cls(memory.read32(cls.ADDRESS))

    def write(self, memory: "MemoryInterface") -> None:
        """@brief Write this value to the register."""
        memory.write32(self.ADDRESS, self.value)
