"""
Shared fixtures for cluster-bootstrap tests
"""

import os
import threading

import pytest

from cluster_bootstrap.core.config import Settings, reset_settings


class ScriptedClock:
    """
    Simulated clock for the heartbeat waiter

    Each wait advances virtual time by the requested timeout. The wait that
    would cross ``until`` parks on the cancel event instead, which is the
    moment the simulated startup finishes.
    """

    def __init__(self, until: float):
        self.now = 0.0
        self.until = until
        self.reached = threading.Event()
        self.waits: list[float] = []

    def wait(self, cancelled: threading.Event, timeout: float) -> bool:
        self.waits.append(timeout)
        if self.now + timeout > self.until:
            self.now = self.until
            self.reached.set()
            return cancelled.wait(5)
        self.now += timeout
        return cancelled.is_set()


@pytest.fixture(autouse=True)
def _clean_settings(monkeypatch):
    """Isolate tests from CLUSTER_* variables and the settings singleton"""
    for key in list(os.environ):
        if key.upper().startswith("CLUSTER_"):
            monkeypatch.delenv(key, raising=False)
    reset_settings()
    yield
    reset_settings()


@pytest.fixture
def make_settings(tmp_path):
    """Build Settings rooted in a temporary home"""

    def _make(**overrides) -> Settings:
        values = {
            "home": tmp_path / "home",
            "local_ip": "10.0.0.9",
        }
        values.update(overrides)
        return Settings(_env_file=None, **values)

    return _make


@pytest.fixture
def scripted_clock():
    """Factory for ScriptedClock instances"""
    return ScriptedClock
