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

import asyncio
import contextlib
import logging
from typing import TYPE_CHECKING

from tickle._exceptions import DriverClosed

if TYPE_CHECKING:
    from tickle._types import TickCallback

_log = logging.getLogger("tickle")


class TickDriver:
    """Recurring asyncio timer that calls ``on_tick`` once per ``interval``.

    The driver only produces ticks. Whatever ``on_tick`` does with them (for
    ``ThrottledRunner``, queueing a ``tick`` message) is up to the caller.
    """

    def __init__(self, interval: float, on_tick: TickCallback) -> None:
        if interval <= 0:
            raise ValueError(f"interval must be > 0, got {interval}")
        self._interval = interval
        self._on_tick = on_tick
        self._task: asyncio.Task[None] | None = None
        self._ticks = 0
        self._closed = False

    @property
    def interval(self) -> float:
        return self._interval

    @property
    def ticks(self) -> int:
        """Ticks fired since construction."""
        return self._ticks

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    @property
    def closed(self) -> bool:
        return self._closed

    def start(self) -> None:
        """Start firing ticks. No-op when already running."""
        if self._closed:
            raise DriverClosed()
        if self.running:
            return
        self._task = asyncio.get_running_loop().create_task(self._run())
        _log.info("Tick driver started: interval %.3fs", self._interval)

    async def stop(self) -> None:
        """Stop firing ticks. The driver may be started again afterwards."""
        task, self._task = self._task, None
        if task is None:
            return
        task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await task
        _log.info("Tick driver stopped after %d ticks", self._ticks)

    async def close(self) -> None:
        """Stop the driver for good. Later ``start()`` calls raise ``DriverClosed``."""
        self._closed = True
        await self.stop()

    async def _run(self) -> None:
        while True:
            await asyncio.sleep(self._interval)
            self._ticks += 1
            self._on_tick()


class InactiveDriver:
    """Inert stand-in for a ``TickDriver``: never runs, never ticks."""

    interval = 0.0
    ticks = 0
    running = False
    closed = False

    def start(self) -> None:
        pass

    async def stop(self) -> None:
        pass

    async def close(self) -> None:
        pass

    def __repr__(self) -> str:
        return "NO_DRIVER"


NO_DRIVER = InactiveDriver()

DriverHandle = TickDriver | InactiveDriver
