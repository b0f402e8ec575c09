"""Shared fixtures for load_test tests."""

import pytest

from helpers import FakeClock
from load_test.results import TestResults


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def results(clock):
    return TestResults(clock=clock)
