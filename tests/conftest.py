"""Shared fixtures: a fake page on a fake clock, wired into the harness core."""

import pytest

from bazaar.core.artifacts import MemoryArtifactSink
from bazaar.core.interactions import Interactions
from bazaar.core.waits import Waiter

from fake_browser import FakeClock, FakePage


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def page(clock):
    return FakePage(url="https://www.sahibinden.com/", title="sahibinden.com", clock=clock)


@pytest.fixture
def waiter(page, clock):
    return Waiter(page, timeout=3.0, poll_interval=0.25, clock=clock.time, sleep=clock.sleep)


@pytest.fixture
def sink():
    return MemoryArtifactSink()


@pytest.fixture
def interactions(page, waiter, sink):
    return Interactions(page, waiter=waiter, sink=sink, action_timeout=5.0)
