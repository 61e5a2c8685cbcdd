# dbgseq debug sequences
# Copyright (c) 2018-2020 Arm Limited
# Copyright (c) 2022 Chris Reed
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

from typing import (Any, Dict, List, NamedTuple, Tuple, Union)

class OptionInfo(NamedTuple):
    name: str
    type: Union[type, Tuple[type, ...]]
    default: Any
    help: str

## @brief Definitions of the builtin options.
BUILTIN_OPTIONS = [
    # Session options
    OptionInfo('config_file', str, None,
        "Path to custom config file."),
    OptionInfo('logging', (str, dict), None,
        "Logging configuration dictionary, or path to YAML file containing logging configuration."),
    OptionInfo('no_config', bool, False,
        "Do not use default config file."),
    OptionInfo('project_dir', str, None,
        "Path to the session's project directory. Defaults to the working directory when dbgseq was "
        "invoked."),

    # Reset sequence options
    OptionInfo('reset.halt_timeout', float, 1.0,
        "Timeout in seconds for waiting for the core to halt after a reset and halt. Default is 1.0 s."),
    OptionInfo('reset.hardware.poll_interval', float, 0.1,
        "Number of seconds between reads of the nRESET pin while waiting for it to be released. "
        "Default is 0.1 s (100 ms)."),
    OptionInfo('reset.hardware.release_timeout', float, 1.0,
        "Timeout in seconds for the nRESET pin to read back high after it is released. Only used with "
        "probes that can read pin state. Default is 1.0 s."),
    OptionInfo('reset.hardware.settle_delay', float, 0.1,
        "Number of seconds to wait after releasing nRESET when the probe cannot read back pin state. "
        "Default is 0.1 s (100 ms)."),
    OptionInfo('reset.system.timeout', float, 0.5,
        "Timeout in seconds for DHCSR.S_RESET_ST to clear after a system reset is requested. "
        "Default is 0.5 s."),
    ]

## @brief The runtime dictionary of options.
OPTIONS_INFO: Dict[str, OptionInfo] = {}

def add_option_set(options: List[OptionInfo]) -> None:
    """@brief Merge a list of OptionInfo objects into OPTIONS_INFO."""
    OPTIONS_INFO.update({oi.name: oi for oi in options})

# Start with only builtin options.
add_option_set(BUILTIN_OPTIONS)
