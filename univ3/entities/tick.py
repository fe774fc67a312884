"""Initialized tick data and the provider interface pools read it through."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

from univ3.errors import NoTickData


@dataclass(frozen=True)
class Tick:
    """Liquidity bookkeeping for one initialized tick."""

    index: int
    liquidity_gross: int  # total liquidity referencing this tick (uint128)
    liquidity_net: int  # liquidity added when crossed left to right (int128)


class TickDataProvider(Protocol):
    """Source of initialized tick data for a pool.

    Implementations may hold a static snapshot (TickListDataProvider) or
    load ticks lazily from elsewhere; pools only depend on these two calls.
    """

    def get_tick(self, tick: int) -> Tick:
        """Return the initialized tick at this exact index."""
        ...

    def next_initialized_tick_within_one_word(
        self, tick: int, lte: bool, tick_spacing: int
    ) -> tuple[int, bool]:
        """Return the next initialized tick, bounded by the 256-tick word.

        Args:
            tick: The current tick
            lte: Search at or below tick (True) or above it (False)
            tick_spacing: The pool's tick spacing

        Returns:
            Tuple of (tick index, whether that index is initialized)
        """
        ...


class NoTickDataProvider:
    """Provider for pools built without tick data.

    Used for counterfactual pools where only price matters; any attempt to
    swap through such a pool fails.
    """

    def get_tick(self, tick: int) -> Tick:
        raise NoTickData(f"No tick data available for tick {tick}")

    def next_initialized_tick_within_one_word(
        self, tick: int, lte: bool, tick_spacing: int
    ) -> tuple[int, bool]:
        raise NoTickData(f"No tick data available near tick {tick}")


NO_TICK_DATA_PROVIDER = NoTickDataProvider()

__all__ = ["Tick", "TickDataProvider", "NoTickDataProvider", "NO_TICK_DATA_PROVIDER"]
