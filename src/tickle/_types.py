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

from __future__ import annotations

import enum
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, TypeVar

A = TypeVar("A")


class ThrottleState(enum.Enum):
    IDLE = "idle"
    COOLING = "cooling"


@dataclass(frozen=True)
class ThrottleEvent:
    """Structured event emitted by the runner on every observable step."""

    kind: str
    timestamp: float
    data: dict[str, Any]


Dispatch = Callable[[Any], Any]
TickCallback = Callable[[], Any]
StateChangeCallback = Callable[[ThrottleEvent], Any]
Clock = Callable[[], float]
