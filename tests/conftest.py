import logging

import pytest
import structlog

from clipboard_store import logs
from clipboard_store.store import ValueStore


class FakeClock:
    def __init__(self, now: float = 1000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def store(clock):
    s = ValueStore(ttl=60, sweep_interval=3600, clock=clock, start=False)
    yield s
    s.close()


@pytest.fixture(autouse=True)
def isolated_logging(monkeypatch):
    """Undo whatever setup_logging did to the root logger and structlog."""
    root = logging.getLogger()
    level = root.level
    monkeypatch.setattr(root, "handlers", list(root.handlers))
    monkeypatch.setattr(logs, "_configured", False)
    yield
    root.setLevel(level)
    structlog.reset_defaults()
