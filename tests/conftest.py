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

from typing import Any

import pytest

from tickle import ThrottleEvent


class Recorder:
    """Collects dispatched actions in order."""

    def __init__(self) -> None:
        self.calls: list[Any] = []

    def __call__(self, action: Any) -> None:
        self.calls.append(action)


class EventLog:
    """on_state_change callback that keeps every ThrottleEvent."""

    def __init__(self) -> None:
        self.events: list[ThrottleEvent] = []

    def __call__(self, event: ThrottleEvent) -> None:
        self.events.append(event)

    @property
    def kinds(self) -> list[str]:
        return [e.kind for e in self.events]


@pytest.fixture()
def recorder() -> Recorder:
    """Provide a dispatch callable that records actions."""
    return Recorder()


@pytest.fixture()
def event_log() -> EventLog:
    """Provide an on_state_change callback that records events."""
    return EventLog()
