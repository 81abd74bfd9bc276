"""
Pytest configuration and fixtures for The Watchman tests.
"""

import os
import tempfile
import threading
from pathlib import Path

# Session logging configures its file handler at import time.
os.environ.setdefault(
    "LOG_FILE_PATH",
    str(Path(tempfile.mkdtemp(prefix="watchman-tests-")) / "events.log"),
)

import pytest  # noqa: E402

from watchman.domain.catalog import ACTION_CATALOG  # noqa: E402
from watchman.services.runner import RunOutcome  # noqa: E402
from watchman.tui.session import SessionMachine  # noqa: E402


class FakeRunner:
    """Stand-in for ActionRunner that records calls instead of spawning tools."""

    def __init__(self, outcome=None, *, error=None, gate=None):
        self.outcome = outcome or RunOutcome("[Running] nmap -sn\n\nHost is up.\n", True)
        self.error = error
        self.gate = gate
        self.calls = []
        self.terminated = 0

    def invoke(self, action, target="", parameter=""):
        self.calls.append((action.id, target, parameter))
        if self.gate is not None:
            self.gate.wait(timeout=5)
        if self.error is not None:
            raise self.error
        return self.outcome

    def terminate_active(self):
        self.terminated += 1
        if self.gate is not None:
            self.gate.set()
        return True


class FakeHandle:
    def __init__(self, generation):
        self.generation = generation
        self.cancelled = False
        self.waiting = False

    def cancel(self):
        self.cancelled = True


class RecordingStarter:
    """Synchronous ``start_run`` replacement that hands back fake handles."""

    def __init__(self):
        self.calls = []
        self.handles = []
        self.error = None

    def __call__(self, action, target, parameter, generation):
        if self.error is not None:
            raise self.error
        self.calls.append((action, target, parameter, generation))
        handle = FakeHandle(generation)
        self.handles.append(handle)
        return handle


@pytest.fixture
def fake_runner():
    return FakeRunner()


@pytest.fixture
def gated_runner():
    return FakeRunner(gate=threading.Event())


@pytest.fixture
def starter():
    return RecordingStarter()


@pytest.fixture
def copies():
    return []


@pytest.fixture
def machine(starter, copies):
    def fake_copy(text):
        copies.append(text)
        return True, "✓ Copied to clipboard!"

    return SessionMachine(ACTION_CATALOG, starter, copy=fake_copy)


@pytest.fixture
def make_runner():
    return FakeRunner
