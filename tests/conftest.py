"""Shared fixtures: a manually driven tick timer and clock."""

from __future__ import annotations

from typing import Callable, Optional

import pytest


class FakeTimer:
    """Tick timer that only fires when a test calls ``fire``."""

    def __init__(self) -> None:
        self._callback: Optional[Callable[[], None]] = None
        self.start_count = 0
        self.stop_count = 0

    @property
    def is_active(self) -> bool:
        return self._callback is not None

    def start(self, callback: Callable[[], None]) -> None:
        self.start_count += 1
        self._callback = callback

    def stop(self) -> None:
        self.stop_count += 1
        self._callback = None

    def fire(self, times: int = 1) -> None:
        """Simulate ``times`` tick intervals passing."""
        for _ in range(times):
            if self._callback is not None:
                self._callback()


class FakeClock:
    def __init__(self, now: float = 1000.0) -> None:
        self.now = now

    def advance(self, seconds: float) -> None:
        self.now += seconds

    def __call__(self) -> float:
        return self.now


@pytest.fixture()
def timer() -> FakeTimer:
    return FakeTimer()


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()
