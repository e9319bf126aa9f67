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


class TickleError(Exception):
    """Base exception for all tickle errors."""


class DriverClosed(TickleError):  # noqa: N818
    """Raised when a closed driver or runner is asked to do more work."""

    def __init__(self, what: str = "Driver") -> None:
        super().__init__(f"{what} is closed and no longer accepting work.")
