"""Pytest configuration and fixtures."""

import pytest

from univ3.constants import MAX_TICK, MIN_TICK
from univ3.entities import Tick


@pytest.fixture
def low_tick() -> Tick:
    """Initialized tick just above MIN_TICK."""
    return Tick(index=MIN_TICK + 1, liquidity_gross=10, liquidity_net=10)


@pytest.fixture
def mid_tick() -> Tick:
    """Initialized tick at zero."""
    return Tick(index=0, liquidity_gross=5, liquidity_net=-5)


@pytest.fixture
def high_tick() -> Tick:
    """Initialized tick just below MAX_TICK."""
    return Tick(index=MAX_TICK - 1, liquidity_gross=5, liquidity_net=-5)


@pytest.fixture
def tick_list(low_tick: Tick, mid_tick: Tick, high_tick: Tick) -> list[Tick]:
    """Sorted tick list whose net liquidity sums to zero."""
    return [low_tick, mid_tick, high_tick]
