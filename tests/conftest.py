from __future__ import annotations

import pytest


class FakeClock:
    """Manually advanced clock, usable for both wall and monotonic time."""

    def __init__(self, now: float = 1_767_225_600.0):
        self.now = float(now)

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture(autouse=True)
def testing_env(monkeypatch):
    monkeypatch.setenv("APP_ENV", "testing")
