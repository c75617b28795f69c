"""
Shared test fixtures for the polyspiral test suite.

The driver never touches real time or a real window in tests: a FakeClock
stands in for time.monotonic and a QueuedFrameScheduler is drained by hand.
"""

import pytest

from polyspiral.config import AnimationConfig
from polyspiral.scheduling import QueuedFrameScheduler
from polyspiral.surfaces import RecordingSurface


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, start: float = 100.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


# ---------------------------------------------------------------------------
# Time and scheduling
# ---------------------------------------------------------------------------

@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def scheduler():
    return QueuedFrameScheduler()


# ---------------------------------------------------------------------------
# Surfaces
# ---------------------------------------------------------------------------

@pytest.fixture
def surface():
    return RecordingSurface()


# ---------------------------------------------------------------------------
# Configs
# ---------------------------------------------------------------------------

@pytest.fixture
def square_config():
    """1000x1000 logical area, fast-converging triangle, one polygon per tick."""
    return AnimationConfig(
        sides=3,
        anchor_ratio=0.2,
        base_width=1000.0,
        base_height=1000.0,
        initial_hue=0.25,
        shapes_per_tick=1,
    )
