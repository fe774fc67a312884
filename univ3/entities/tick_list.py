"""Array-backed tick repository.

Ticks are kept sorted by index so every lookup is a binary search. The
word-bounded search reproduces TickBitmap.nextInitializedTickWithinOneWord,
which is what makes swap results match the contract step for step.
"""

from __future__ import annotations

from bisect import bisect_right
from collections.abc import Sequence

import structlog

from univ3.errors import (
    AtOrAboveLargest,
    BelowSmallest,
    InvalidTickSpacing,
    Sorted,
    TickListEmpty,
    TickNotFound,
    ZeroNet,
    ZeroTickSpacing,
)

from .tick import Tick

logger = structlog.get_logger()


def _tick_index(tick: Tick) -> int:
    return tick.index


def validate_list(ticks: Sequence[Tick], tick_spacing: int) -> None:
    """Check a tick list can back a pool.

    Raises:
        ZeroTickSpacing: If tick_spacing is not positive
        InvalidTickSpacing: If an index is not a multiple of tick_spacing
        ZeroNet: If liquidity_net does not sum to zero
        Sorted: If indices are not in ascending order
    """
    if tick_spacing <= 0:
        raise ZeroTickSpacing(f"Tick spacing must be positive, got {tick_spacing}")

    for tick in ticks:
        if tick.index % tick_spacing != 0:
            raise InvalidTickSpacing(f"Tick {tick.index} is not a multiple of {tick_spacing}")

    if sum(tick.liquidity_net for tick in ticks) != 0:
        raise ZeroNet("Tick liquidity_net must sum to zero")

    for prev, curr in zip(ticks, ticks[1:]):
        if prev.index > curr.index:
            raise Sorted(f"Ticks out of order: {prev.index} before {curr.index}")


def is_below_smallest(ticks: Sequence[Tick], tick: int) -> bool:
    if not ticks:
        raise TickListEmpty("Tick list is empty")
    return tick < ticks[0].index


def is_at_or_above_largest(ticks: Sequence[Tick], tick: int) -> bool:
    if not ticks:
        raise TickListEmpty("Tick list is empty")
    return tick >= ticks[-1].index


def _binary_search(ticks: Sequence[Tick], tick: int) -> int:
    """Find the position of the largest tick whose index is <= tick."""
    if is_below_smallest(ticks, tick):
        raise BelowSmallest(f"Tick {tick} is below the smallest tick {ticks[0].index}")

    # Equal indices are allowed; the last of a run is returned
    return bisect_right(ticks, tick, key=_tick_index) - 1


def get_tick(ticks: Sequence[Tick], index: int) -> Tick:
    """Return the tick at exactly this index.

    Raises:
        TickNotFound: If no initialized tick has this index
    """
    tick = ticks[_binary_search(ticks, index)]
    if tick.index != index:
        raise TickNotFound(f"Tick {index} is not initialized")
    return tick


def next_initialized_tick(ticks: Sequence[Tick], tick: int, lte: bool) -> Tick:
    """Return the nearest initialized tick at/below (lte) or above tick.

    Raises:
        BelowSmallest: If lte and tick is below every initialized tick
        AtOrAboveLargest: If not lte and tick is at or above every initialized tick
    """
    if lte:
        if is_below_smallest(ticks, tick):
            raise BelowSmallest(f"No initialized tick at or below {tick}")
        if is_at_or_above_largest(ticks, tick):
            return ticks[-1]
        return ticks[_binary_search(ticks, tick)]

    if is_at_or_above_largest(ticks, tick):
        raise AtOrAboveLargest(f"No initialized tick above {tick}")
    if is_below_smallest(ticks, tick):
        return ticks[0]
    return ticks[_binary_search(ticks, tick) + 1]


def next_initialized_tick_within_one_word(
    ticks: Sequence[Tick], tick: int, lte: bool, tick_spacing: int
) -> tuple[int, bool]:
    """Return the next initialized tick, clamped to the current 256-tick word.

    Returns:
        Tuple of (tick index, initialized). When the search hits the word
        boundary before any initialized tick, the boundary is returned
        with initialized=False.
    """
    # Floor division matches the contract's rounding toward negative infinity
    compressed = tick // tick_spacing

    if lte:
        word_pos = compressed >> 8
        minimum = (word_pos << 8) * tick_spacing
        if is_below_smallest(ticks, tick):
            return minimum, False
        index = next_initialized_tick(ticks, tick, lte).index
        next_tick = max(minimum, index)
        return next_tick, next_tick == index

    word_pos = (compressed + 1) >> 8
    maximum = ((word_pos + 1) << 8) * tick_spacing - 1
    if is_at_or_above_largest(ticks, tick):
        return maximum, False
    index = next_initialized_tick(ticks, tick, lte).index
    next_tick = min(maximum, index)
    return next_tick, next_tick == index


class TickListDataProvider:
    """Tick data provider backed by an in-memory sorted tick list."""

    def __init__(self, ticks: Sequence[Tick], tick_spacing: int) -> None:
        """Validate and store a tick list.

        Args:
            ticks: Initialized ticks, sorted by index
            tick_spacing: Tick spacing of the pool the ticks belong to

        Raises:
            ValidationError subclasses from validate_list
        """
        validate_list(ticks, tick_spacing)
        self._ticks: tuple[Tick, ...] = tuple(ticks)
        logger.debug(
            "tick_list_provider_created", ticks=len(self._ticks), tick_spacing=tick_spacing
        )

    @property
    def ticks(self) -> tuple[Tick, ...]:
        return self._ticks

    def get_tick(self, tick: int) -> Tick:
        return get_tick(self._ticks, tick)

    def next_initialized_tick_within_one_word(
        self, tick: int, lte: bool, tick_spacing: int
    ) -> tuple[int, bool]:
        return next_initialized_tick_within_one_word(self._ticks, tick, lte, tick_spacing)


__all__ = [
    "validate_list",
    "is_below_smallest",
    "is_at_or_above_largest",
    "get_tick",
    "next_initialized_tick",
    "next_initialized_tick_within_one_word",
    "TickListDataProvider",
]
