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

import threading
from typing import (Generic, NamedTuple, Optional, TypeVar)

from ..utility.concurrency import locked

class HaltAfterResetState(NamedTuple):
    """! @brief FPB state saved by a reset catch so it can be put back afterwards."""
    ## Whether FP_CTRL.ENABLE was set.
    fpctrl_enabled: bool = False
    ## Raw value of FP_COMP0.
    fpcomp0: int = 0

StateType = TypeVar("StateType")

class RetainedStateSlot(Generic[StateType]):
    """! @brief Lock protected holder for state that is carried between sequence calls.

    The slot is either empty or holds a single state value, such as a HaltAfterResetState. An
    empty slot means nothing was saved, for instance because no halt after reset is in progress.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._state: Optional[StateType] = None

    def lock(self) -> None:
        self._lock.acquire()

    def unlock(self) -> None:
        self._lock.release()

    @locked
    def take(self) -> Optional[StateType]:
        """! @brief Remove and return the current state, leaving the slot empty."""
        state, self._state = self._state, None
        return state

    @locked
    def replace(self, new_state: Optional[StateType]) -> Optional[StateType]:
        """! @brief Store new state and return whatever the slot held before."""
        state, self._state = self._state, new_state
        return state

    @locked
    def is_present(self) -> bool:
        return self._state is not None
