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

import dataclasses

import pytest

from tickle import ThrottleConfig, ThrottledRunner


class TestThrottleConfigDefaults:
    def test_defaults(self) -> None:
        cfg = ThrottleConfig()
        assert cfg.limit == 1
        assert cfg.tick_interval == 0.1

    def test_frozen(self) -> None:
        cfg = ThrottleConfig()
        with pytest.raises(dataclasses.FrozenInstanceError):
            cfg.limit = 5  # type: ignore[misc]


class TestThrottleConfigValidation:
    def test_zero_limit_accepted(self) -> None:
        assert ThrottleConfig(limit=0).limit == 0

    def test_negative_limit_accepted(self) -> None:
        assert ThrottleConfig(limit=-3).limit == -3

    def test_non_int_limit(self) -> None:
        with pytest.raises(ValueError, match="limit"):
            ThrottleConfig(limit=2.5)  # type: ignore[arg-type]

    def test_zero_tick_interval(self) -> None:
        with pytest.raises(ValueError, match="tick_interval"):
            ThrottleConfig(tick_interval=0)

    def test_negative_tick_interval(self) -> None:
        with pytest.raises(ValueError, match="tick_interval"):
            ThrottleConfig(tick_interval=-0.5)


class TestThrottleConfigFromDict:
    def test_empty_dict_gives_defaults(self) -> None:
        assert ThrottleConfig.from_dict({}) == ThrottleConfig()

    def test_coerces_strings(self) -> None:
        cfg = ThrottleConfig.from_dict({"limit": "4", "tick_interval": "0.25"})
        assert cfg.limit == 4
        assert cfg.tick_interval == 0.25

    def test_ignores_unknown_keys(self) -> None:
        cfg = ThrottleConfig.from_dict({"limit": 2, "colour": "blue"})
        assert cfg.limit == 2

    def test_validation_still_applies(self) -> None:
        with pytest.raises(ValueError, match="tick_interval"):
            ThrottleConfig.from_dict({"tick_interval": 0})


class TestThrottleConfigFromEnv:
    def test_reads_prefixed_vars(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("TICKLE_LIMIT", "7")
        monkeypatch.setenv("TICKLE_TICK_INTERVAL", "0.5")
        cfg = ThrottleConfig.from_env()
        assert cfg.limit == 7
        assert cfg.tick_interval == 0.5

    def test_custom_prefix(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("APP_LIMIT", "3")
        cfg = ThrottleConfig.from_env("APP")
        assert cfg.limit == 3
        assert cfg.tick_interval == 0.1

    def test_missing_vars_give_defaults(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("TICKLE_LIMIT", raising=False)
        monkeypatch.delenv("TICKLE_TICK_INTERVAL", raising=False)
        assert ThrottleConfig.from_env() == ThrottleConfig()

    def test_bad_value_raises(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("TICKLE_LIMIT", "many")
        with pytest.raises(ValueError):
            ThrottleConfig.from_env()


class TestRunnerFactories:
    def test_from_dict(self) -> None:
        r = ThrottledRunner.from_dict({"limit": 5, "tick_interval": 2.0}, print)
        assert r.config == ThrottleConfig(limit=5, tick_interval=2.0)
        assert r.throttle.limit == 5

    def test_from_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("TICKLE_LIMIT", "4")
        r = ThrottledRunner.from_env(print)
        assert r.throttle.limit == 4

    def test_negative_limit_clamped_in_throttle(self) -> None:
        r = ThrottledRunner(print, limit=-2)
        assert r.config.limit == -2
        assert r.throttle.limit == 0
