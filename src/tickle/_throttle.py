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

"""Counter-based throttle.

A ``Throttle`` lets an action through at most once per ``limit`` ticks of some
external driver. Every operation here is pure: it takes the current throttle
and returns a new one together with the action the caller should run now, if
any. Nothing in this module ever calls an action.
"""

from __future__ import annotations

import dataclasses
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Generic

from tickle._driver import NO_DRIVER
from tickle._types import A, ThrottleState

if TYPE_CHECKING:
    from tickle._driver import DriverHandle

_log = logging.getLogger("tickle")


@dataclass(frozen=True)
class Throttle(Generic[A]):
    """Immutable throttle state.

    ``remaining`` is the number of ticks still to pass before ``pending`` may
    be released. ``0 <= remaining <= limit`` holds for every value produced by
    the functions in this module.
    """

    limit: int
    remaining: int = 0
    pending: A | None = None

    def __post_init__(self) -> None:
        if self.limit < 0:
            raise ValueError(f"limit must be >= 0, got {self.limit}")
        if not (0 <= self.remaining <= self.limit):
            raise ValueError(
                f"remaining must be between 0 and limit ({self.limit}), got {self.remaining}"
            )

    @property
    def state(self) -> ThrottleState:
        if self.remaining == 0 and self.pending is None:
            return ThrottleState.IDLE
        return ThrottleState.COOLING

    @property
    def is_idle(self) -> bool:
        return self.state is ThrottleState.IDLE


def create(limit: int) -> Throttle[A]:
    """Build an idle throttle. Limits below zero are clamped to 0 (never throttle)."""
    if isinstance(limit, bool) or not isinstance(limit, int):
        raise TypeError(f"limit must be an int, got {type(limit).__name__}")
    if limit < 0:
        _log.debug("Clamping negative limit %d to 0", limit)
        limit = 0
    return Throttle(limit=limit)


def tick(throttle: Throttle[A]) -> tuple[Throttle[A], A | None]:
    """Advance the countdown by one tick.

    The tick that brings the counter to zero releases the pending action, if
    there is one, and restarts the cooldown. An idle throttle is returned as is.
    """
    if throttle.remaining == 0 and throttle.pending is None:
        return throttle, None

    remaining = max(throttle.remaining - 1, 0)
    if remaining > 0 or throttle.pending is None:
        return dataclasses.replace(throttle, remaining=remaining), None

    _log.debug("Releasing pending action, cooldown reset to %d", throttle.limit)
    return Throttle(limit=throttle.limit, remaining=throttle.limit), throttle.pending


def attempt(action: A, throttle: Throttle[A]) -> tuple[Throttle[A], A | None]:
    """Run ``action`` now if the cooldown is over, otherwise store it as pending.

    A stored action replaces any earlier one; only the latest attempt is ever
    released.
    """
    if throttle.remaining == 0:
        return Throttle(limit=throttle.limit, remaining=throttle.limit), action

    if throttle.pending is not None:
        _log.debug("Replacing pending action (%d ticks remaining)", throttle.remaining)
    return dataclasses.replace(throttle, pending=action), None


def gate(
    driver: DriverHandle,
    throttle: Throttle[A],
    inactive: DriverHandle = NO_DRIVER,
) -> DriverHandle:
    """Return ``driver`` while the throttle has work left, ``inactive`` once idle."""
    if throttle.remaining > 0 or throttle.pending is not None:
        return driver
    return inactive
