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

class Error(RuntimeError):
    """! @brief Parent of all errors dbgseq can raise"""
    pass

class TimeoutError(Error):
    """! @brief Any sort of timeout"""
    pass

class TargetSupportError(Error):
    """! @brief Error related to target support"""
    pass

class UnsupportedHardwareRevision(TargetSupportError):
    """! @brief A debug component reports a revision that is not supported.

    The offending revision value is available from the `revision` attribute, and is included
    in the string form of the exception.
    """
    def __init__(self, *args, **kwargs):
        super(UnsupportedHardwareRevision, self).__init__(*args)
        self._revision = kwargs.get('revision', None)

    @property
    def revision(self):
        return self._revision

    def __str__(self):
        desc = super(UnsupportedHardwareRevision, self).__str__() or "Unsupported hardware revision"
        if self._revision is not None:
            desc += " (revision %d)" % self._revision
        return desc

class TargetError(Error):
    """! @brief An error that happens on the target"""
    pass

class DebugError(TargetError):
    """! @brief Error controlling target debug resources"""
    pass

class TransferError(DebugError):
    """! @brief Error ocurred with a transfer over SWD or JTAG"""
    pass

class TransferFaultError(TransferError):
    """! @brief A memory fault occurred.

    This exception class is extended to optionally record the start address and an optional length of the
    attempted memory access that caused the fault. The address and length, if available, will be included
    in the description of the exception when it is converted to a string.

    Positional arguments passed to the constructor are passed through to the superclass'
    constructor, and thus operate like any other standard exception class. Keyword arguments of
    'fault_address' and 'length' can optionally be passed to the constructor to initialize the fault
    start address and length. Alternatively, the corresponding property setters can be used after
    the exception is created.
    """
    def __init__(self, *args, **kwargs):
        super(TransferFaultError, self).__init__(*args)
        self._address = kwargs.get('fault_address', None)
        self._length = kwargs.get('length', None)

    @property
    def fault_address(self):
        return self._address

    @fault_address.setter
    def fault_address(self, addr):
        self._address = addr

    @property
    def fault_end_address(self):
        return (self._address + self._length - 1) if (self._length is not None) else self._address

    @property
    def fault_length(self):
        return self._length

    @fault_length.setter
    def fault_length(self, length):
        self._length = length

    def __str__(self):
        desc = "Memory transfer fault"
        if self.args:
            if len(self.args) == 1:
                desc += " (" + str(self.args[0]) + ")"
            else:
                desc += " " + str(self.args) + ""
        if self._address is not None:
            desc += " @ 0x%08x" % self._address
            if self._length is not None:
                desc += "-0x%08x" % self.fault_end_address
        return desc
