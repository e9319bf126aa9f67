# Copyright (c) 2026 The tickle authors
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

"""Counter-based throttling for unidirectional update loops."""

from __future__ import annotations

from tickle._config import ThrottleConfig
from tickle._driver import NO_DRIVER, DriverHandle, InactiveDriver, TickDriver
from tickle._exceptions import DriverClosed, TickleError
from tickle._runner import ThrottledRunner
from tickle._throttle import Throttle, attempt, create, gate, tick
from tickle._types import ThrottleEvent, ThrottleState

__all__ = [
    "NO_DRIVER",
    "DriverClosed",
    "DriverHandle",
    "InactiveDriver",
    "ThrottleConfig",
    "ThrottleEvent",
    "ThrottleState",
    "Throttle",
    "ThrottledRunner",
    "TickDriver",
    "TickleError",
    "attempt",
    "create",
    "gate",
    "tick",
]
