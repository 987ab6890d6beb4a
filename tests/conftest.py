"""Pytest configuration and fixtures."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import List

import pytest

PROJECT_ROOT = Path(__file__).parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from reaper.local.supervisor.errors import SignalDeliveryFailure
from reaper.local.supervisor.process_utils import Liveness, ProcessControl


class FakeHandle:
    """Stands in for a psutil.Process handle."""

    def __init__(self, pid: int):
        self.pid = pid


class FakeControl(ProcessControl):
    """Scripted ProcessControl that records every probe and stop in order.

    `states` is consumed one entry per probe; an entry may be a Liveness or an
    exception to raise. The last entry repeats once the script runs out.
    Every handle passed back to the fake is recorded in `handles`.
    """

    def __init__(self, states, stop_result: bool = True, stop_error: Exception | None = None):
        self.states = list(states)
        self.handles: List[FakeHandle] = []
        self.stop_result = stop_result
        self.stop_error = stop_error
        self.events: List[tuple] = []

    @property
    def probe_count(self) -> int:
        return sum(1 for event in self.events if event[0] == "probe")

    @property
    def stop_calls(self) -> List[tuple]:
        return [event for event in self.events if event[0] == "stop"]

    def lookup(self, pid: int) -> FakeHandle:
        return FakeHandle(pid)

    def probe(self, proc: FakeHandle) -> Liveness:
        self.handles.append(proc)
        self.events.append(("probe", proc.pid))
        state = self.states.pop(0) if len(self.states) > 1 else self.states[0]
        if isinstance(state, Exception):
            raise state
        return state

    def request_stop(self, proc: FakeHandle, force: bool = False) -> bool:
        self.handles.append(proc)
        self.events.append(("stop", proc.pid, force))
        if self.stop_error is not None:
            raise self.stop_error
        return self.stop_result


@pytest.fixture
def sleeps() -> List[float]:
    """Records sleep durations instead of sleeping."""
    return []


@pytest.fixture
def signal_failure():
    return SignalDeliveryFailure(4242, "SIGTERM", "Operation not permitted")
