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
import inspect
import logging
import time
from typing import TYPE_CHECKING, Any

from tickle._config import ThrottleConfig
from tickle._driver import NO_DRIVER, TickDriver
from tickle._exceptions import DriverClosed
from tickle._throttle import Throttle, attempt, create, gate, tick
from tickle._types import ThrottleEvent

if TYPE_CHECKING:
    from types import TracebackType

    from tickle._driver import DriverHandle
    from tickle._types import Clock, Dispatch, StateChangeCallback

_log = logging.getLogger("tickle")

_TICK = "tick"
_ATTEMPT = "attempt"


class ThrottledRunner:
    """Single-consumer update loop around a ``Throttle``.

    Attempts (``submit``) and driver ticks are queued as messages and applied
    one at a time by a consumer task, so the throttle value only ever moves
    forward from its latest state. Actions handed back by the throttle are
    passed to ``dispatch``; the tick driver runs only while ``gate`` says the
    throttle has work left.
    """

    def __init__(
        self,
        dispatch: Dispatch,
        *,
        on_state_change: StateChangeCallback | None = None,
        **kwargs: Any,
    ) -> None:
        """Accept all ThrottleConfig fields as kwargs."""
        self._config = ThrottleConfig(**kwargs)
        self._dispatch = dispatch
        self._on_state_change = on_state_change
        self._clock: Clock = time.monotonic

        self._throttle: Throttle[Any] = create(self._config.limit)
        self._driver = TickDriver(self._config.tick_interval, self.tick)
        self._active: DriverHandle = NO_DRIVER
        self._queue: asyncio.Queue[tuple[str, Any]] = asyncio.Queue()
        self._consumer: asyncio.Task[None] | None = None
        self._closed = False

    @classmethod
    def from_dict(
        cls,
        data: dict[str, Any],
        dispatch: Dispatch,
        *,
        on_state_change: StateChangeCallback | None = None,
    ) -> ThrottledRunner:
        """Build a runner from a plain dict."""
        config = ThrottleConfig.from_dict(data)
        return cls(dispatch, on_state_change=on_state_change, **{
            f.name: getattr(config, f.name)
            for f in config.__dataclass_fields__.values()
        })

    @classmethod
    def from_env(
        cls,
        dispatch: Dispatch,
        prefix: str = "TICKLE",
        *,
        on_state_change: StateChangeCallback | None = None,
    ) -> ThrottledRunner:
        """Build a runner from environment variables."""
        config = ThrottleConfig.from_env(prefix)
        return cls(dispatch, on_state_change=on_state_change, **{
            f.name: getattr(config, f.name)
            for f in config.__dataclass_fields__.values()
        })

    @property
    def config(self) -> ThrottleConfig:
        return self._config

    @property
    def throttle(self) -> Throttle[Any]:
        """Current throttle value."""
        return self._throttle

    @property
    def driver_running(self) -> bool:
        return self._driver.running

    def snapshot(self) -> Throttle[Any]:
        """Return the current (immutable) throttle value."""
        return self._throttle

    def start(self) -> None:
        """Start the consumer task. The tick driver starts on demand."""
        if self._closed:
            raise DriverClosed("Runner")
        if self._consumer is not None and not self._consumer.done():
            return
        self._consumer = asyncio.get_running_loop().create_task(self._consume())

    def submit(self, action: Any) -> None:
        """Queue an attempt to run ``action``."""
        if self._closed:
            raise DriverClosed("Runner")
        if action is None:
            raise ValueError("action must not be None")
        self._queue.put_nowait((_ATTEMPT, action))

    def tick(self) -> None:
        """Queue one tick. Called by the internal driver; external drivers may call it too."""
        if self._closed:
            return
        self._queue.put_nowait((_TICK, None))

    async def drain(self) -> None:
        """Wait until every queued message has been applied."""
        await self._queue.join()

    async def aclose(self) -> None:
        """Stop the driver and the consumer. Queued messages are discarded."""
        if self._closed:
            return
        self._closed = True
        await self._driver.close()
        self._active = NO_DRIVER
        consumer, self._consumer = self._consumer, None
        if consumer is not None:
            consumer.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await consumer

    async def __aenter__(self) -> ThrottledRunner:
        self.start()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    async def _consume(self) -> None:
        while True:
            kind, payload = await self._queue.get()
            try:
                await self._step(kind, payload)
            except Exception:
                _log.exception("Failed to apply %s message", kind)
            finally:
                self._queue.task_done()

    async def _step(self, kind: str, payload: Any) -> None:
        """Apply one message, dispatch what it releases, then re-gate the driver."""
        if kind == _ATTEMPT:
            self._throttle, action = attempt(payload, self._throttle)
            if action is not None:
                self._emit_event("executed", {"remaining": self._throttle.remaining})
            else:
                self._emit_event("deferred", {"remaining": self._throttle.remaining})
        else:
            self._throttle, action = tick(self._throttle)
            if action is not None:
                self._emit_event("released", {"remaining": self._throttle.remaining})

        if action is not None:
            await self._run_action(action)

        await self._sync_driver()

    async def _run_action(self, action: Any) -> None:
        try:
            result = self._dispatch(action)
            if inspect.isawaitable(result):
                await result
        except Exception:
            _log.exception("Dispatched action %r failed", action)

    async def _sync_driver(self) -> None:
        """Start or stop the tick driver to match ``gate``."""
        wanted = gate(self._driver, self._throttle)
        if wanted is self._active:
            return
        if wanted is NO_DRIVER:
            await self._driver.stop()
            self._emit_event("driver_stopped", {"ticks": self._driver.ticks})
        else:
            self._driver.start()
            self._emit_event("driver_started", {"interval": self._driver.interval})
        self._active = wanted

    def _emit_event(self, kind: str, data: dict[str, Any]) -> None:
        """Emit a ThrottleEvent to the on_state_change callback."""
        if self._on_state_change is not None:
            event = ThrottleEvent(
                kind=kind,
                timestamp=self._clock(),
                data=data,
            )
            try:
                self._on_state_change(event)
            except Exception:
                _log.exception("on_state_change callback failed for %r event", kind)
