# tests/conftest.py
"""
Shared fixtures for the pet simulation tests.

Time never comes from the wall clock here: every component gets a FakeClock
and a TimerCoordinator bound to it, and tests move time forward explicitly
with SimLoop.advance, which runs each due task at its own due time.
"""

from datetime import datetime

import pytest

from core.timer import TimerCoordinator
from event_dispatcher import EventDispatcher
from internal.state_persistence import MemoryStore

# a plain Wednesday morning, local time
START_TIME = datetime(2024, 6, 12, 9, 0, 0).timestamp()

class FakeClock:
    """Callable clock whose time only moves when told to."""

    def __init__(self, now: float = START_TIME):
        self.now = now

    def __call__(self) -> float:
        return self.now

class SimLoop:
    """A fake clock, a timer bound to it and a dispatcher."""

    def __init__(self, start: float = START_TIME):
        self.clock = FakeClock(start)
        self.timer = TimerCoordinator(self.clock)
        self.dispatcher = EventDispatcher()

    @property
    def now(self) -> float:
        return self.clock.now

    def advance(self, seconds: float) -> None:
        """Moves time forward, running every task that falls due on the way."""
        target = self.clock.now + seconds
        while True:
            due = self.timer.next_due()
            if due is None or due > target:
                break
            self.clock.now = max(self.clock.now, due)
            self.timer.run_pending()
        self.clock.now = target
        self.timer.run_pending()

class EventRecorder:
    """Listener that keeps every event it receives."""

    def __init__(self):
        self.events = []

    def __call__(self, event):
        self.events.append(event)

    @property
    def types(self):
        return [event.event_type for event in self.events]

    def of(self, event_type):
        return [event for event in self.events if event.event_type == event_type]

    def clear(self):
        self.events.clear()

class FixedRandom:
    """
    Deterministic stand-in for the random module.
    random() always returns value; choice() always picks index (clamped).
    """

    def __init__(self, value: float = 0.0, index: int = 0):
        self.value = value
        self.index = index

    def random(self) -> float:
        return self.value

    def choice(self, seq):
        return seq[min(self.index, len(seq) - 1)]

@pytest.fixture
def sim():
    return SimLoop()

@pytest.fixture
def recorder(sim):
    """Records every event on the shared dispatcher."""
    rec = EventRecorder()
    sim.dispatcher.add_listener("*", rec)
    return rec

@pytest.fixture
def store():
    return MemoryStore()

@pytest.fixture
def fixed_rng():
    return FixedRandom
