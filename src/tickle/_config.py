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

import os
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class ThrottleConfig:
    """Throttle and tick driver configuration with validation.

    ``limit`` is the number of ticks between two executions. Values below 1
    are accepted and mean "never throttle"; ``create`` clamps them to 0.
    """

    limit: int = 1
    tick_interval: float = 0.1

    def __post_init__(self) -> None:
        if isinstance(self.limit, bool) or not isinstance(self.limit, int):
            raise ValueError(f"limit must be an int, got {self.limit!r}")
        if self.tick_interval <= 0:
            raise ValueError(f"tick_interval must be > 0, got {self.tick_interval}")

    @staticmethod
    def from_dict(data: dict[str, Any]) -> ThrottleConfig:
        """Build config from a plain dict. Unknown keys are ignored."""
        kwargs: dict[str, Any] = {}
        if "limit" in data:
            kwargs["limit"] = int(data["limit"])
        if "tick_interval" in data:
            kwargs["tick_interval"] = float(data["tick_interval"])
        return ThrottleConfig(**kwargs)

    @staticmethod
    def from_env(prefix: str = "TICKLE") -> ThrottleConfig:
        """Build config from ``{prefix}_LIMIT`` and ``{prefix}_TICK_INTERVAL``."""
        kwargs: dict[str, Any] = {}

        limit = os.environ.get(f"{prefix}_LIMIT")
        if limit is not None:
            kwargs["limit"] = int(limit)

        interval = os.environ.get(f"{prefix}_TICK_INTERVAL")
        if interval is not None:
            kwargs["tick_interval"] = float(interval)

        return ThrottleConfig(**kwargs)
