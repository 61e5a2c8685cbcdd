# dbgseq debug sequences
# Copyright (c) 2017-2020 Arm Limited
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
from time import (time, sleep)
from typing import (Callable, Optional)

from ..core import exceptions

LOG = logging.getLogger(__name__)

TRACE = LOG.getChild("trace")
TRACE.setLevel(logging.CRITICAL)

class Timeout:
    """! @brief Timeout helper context manager.

    The recommended way to use this class is demonstrated here. It uses an else block on a
    while loop to handle the timeout. The code in the while loop must use a break statement
    to exit in the successful case.

    @code
    with Timeout(5) as t_o:
        while t_o.check():
            # Perform some operation, check, etc.
            if foobar:
                break
            sleep(0.1)
        else:
            print("Timed out!")
    @endcode

    Passing a timeout of None to the constructor is allowed. In this case, check() will always return
    True and the loop must be exited via some other means.
    """

    def __init__(self, timeout: Optional[float]) -> None:
        """! @brief Constructor.
        @param self
        @param timeout The timeout in seconds. May be None to indicate no timeout.
        """
        self._timeout = timeout
        self._timed_out = False
        self._start = -1.0

    def __enter__(self) -> "Timeout":
        self.start()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        pass

    def start(self) -> None:
        """! @brief Start or restart the timeout clock."""
        self._start = time()
        self._timed_out = False

    @property
    def elapsed(self) -> float:
        """! @brief Seconds since the timeout was started."""
        return time() - self._start

    def check(self) -> bool:
        """! @brief Check for timeout.

        Once the timeout has occurred, this method keeps returning False until start() is called.

        @param self
        @retval True The timeout has _not_ occurred.
        @retval False Timeout is passed and the loop should be exited.
        """
        if (self._timeout is not None) and ((time() - self._start) > self._timeout):
            self._timed_out = True
        return not self._timed_out

def poll(
        predicate: Callable[[], bool],
        timeout: Optional[float],
        sleeptime: float = 0,
        description: Optional[str] = None
        ) -> None:
    """! @brief Wait until a predicate returns True.

    The predicate is always called at least once, before the timeout is checked. Between
    evaluations the caller sleeps for _sleeptime_, so consecutive predicate calls are always at
    least that far apart. Any exception raised by the predicate propagates immediately; there is
    no retry.

    @param predicate Callable taking no arguments. The wait ends as soon as it returns a true value.
    @param timeout Maximum number of seconds to wait, or None to wait forever.
    @param sleeptime Seconds to sleep between predicate calls. Zero polls as fast as possible.
    @param description Short description of what is being waited for, used in the timeout error.
    @exception TimeoutError The predicate didn't return True before the timeout elapsed.
    """
    with Timeout(timeout) as t_o:
        while not predicate():
            if not t_o.check():
                raise exceptions.TimeoutError("timed out after %.3f s waiting for %s"
                        % (timeout, description or "condition"))
            if sleeptime:
                sleep(sleeptime)
        TRACE.debug("poll: %s after %.3f s", description or "done", t_o.elapsed)
