# dbgseq debug sequences
# Copyright (c) 2019-2020 Arm Limited
# Copyright (c) 2021 Chris Reed
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
import re
from collections import namedtuple
from typing import (Optional, Type, TYPE_CHECKING)

from . import infineon
from .sequence import DebugSequence

if TYPE_CHECKING:
    from ..core.session import Session

LOG = logging.getLogger(__name__)

## @brief Container for family matching information.
FamilyInfo = namedtuple("FamilyInfo", "vendor matches klass")

## @brief Lookup table to convert from a vendor and part number to a debug sequence class.
#
# The vendor name must be an exact match. The regex must match the entire part number.
FAMILIES = [
    FamilyInfo("Infineon",              re.compile(r'XMC4[0-9]{3}.*'),      infineon.XMC4000        ),
    ]

def find_family_sequence(vendor: str, part_number: str) -> Optional[Type[DebugSequence]]:
    """@brief Return the debug sequence class for a part, or None if there isn't a special one."""
    for familyInfo in FAMILIES:
        if (vendor == familyInfo.vendor) and familyInfo.matches.fullmatch(part_number):
            return familyInfo.klass
    return None

def create_sequence(vendor: str, part_number: str, session: Optional["Session"] = None) -> DebugSequence:
    """@brief Create the debug sequence object for a part.

    Parts without a family specific sequence get the standard DebugSequence.
    """
    klass = find_family_sequence(vendor, part_number)
    if klass is None:
        klass = DebugSequence
    LOG.debug("using %s debug sequence for %s %s", klass.__name__, vendor, part_number)
    return klass.create(session)
