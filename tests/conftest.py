"""Pytest configuration and fixtures."""

import pytest

from simpleswap.clock import FixedClock
from simpleswap.pool.simple_swap import SimpleSwap
from tests.helpers import NOW, make_pool


@pytest.fixture
def clock() -> FixedClock:
    """Clock frozen at NOW."""
    return FixedClock(NOW)


@pytest.fixture
def pool(clock: FixedClock) -> SimpleSwap:
    """Empty pool over fresh AToken/BToken ledgers."""
    return make_pool(clock=clock)
