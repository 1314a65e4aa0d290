"""
Pytest configuration for the airwatch tests.

Registers custom markers and provides shared fixtures.
"""

import random
from datetime import datetime, timezone

import pytest


class FakeClock:
    """Manually advanced monotonic clock for cache expiry tests."""

    def __init__(self, start=1000.0):
        self.now = start

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds


def pytest_configure(config):
    """Register custom pytest markers."""
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )


@pytest.fixture
def rng():
    """Seeded random source so synthetic output is reproducible."""
    return random.Random(20251006)


@pytest.fixture
def fixed_now():
    """A Monday morning in UTC."""
    return datetime(2025, 10, 6, 5, 0, tzinfo=timezone.utc)


@pytest.fixture
def clock():
    return FakeClock()
