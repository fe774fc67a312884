"""Tick <-> sqrt price conversion matching TickMath.sol bit for bit.

Prices are sqrt(1.0001^tick) encoded as Q64.96 fixed point. The forward
direction multiplies together precomputed Q128 powers of sqrt(1.0001);
the inverse takes a fixed-point binary logarithm and converts it to
base sqrt(1.0001).
"""

from univ3.constants import MAX_SQRT_RATIO, MAX_TICK, MAX_UINT256, MIN_SQRT_RATIO, MIN_TICK
from univ3.errors import InvalidSqrtRatio, InvalidTick, ZeroTickSpacing

from .full_math import most_significant_bit

# =============================================================================
# Constants (matching TickMath.sol exactly)
# =============================================================================

# 1 / sqrt(1.0001)^(2^i) as Q128, keyed by the |tick| bit that selects it.
# Bit 0x1 is the ladder's starting value and is handled separately.
_RATIO_TICK_BIT_1 = 0xFFFCB933BD6FAD37AA2D162D1A594001
_RATIO_ONE_X128 = 0x100000000000000000000000000000000

_RATIO_FACTORS = (
    (0x2, 0xFFF97272373D413259A46990580E213A),
    (0x4, 0xFFF2E50F5F656932EF12357CF3C7FDCC),
    (0x8, 0xFFE5CACA7E10E4E61C3624EAA0941CD0),
    (0x10, 0xFFCB9843D60F6159C9DB58835C926644),
    (0x20, 0xFF973B41FA98C081472E6896DFB254C0),
    (0x40, 0xFF2EA16466C96A3843EC78B326B52861),
    (0x80, 0xFE5DEE046A99A2A811C461F1969C3053),
    (0x100, 0xFCBE86C7900A88AEDCFFC83B479AA3A4),
    (0x200, 0xF987A7253AC413176F2B074CF7815E54),
    (0x400, 0xF3392B0822B70005940C7A398E4B70F3),
    (0x800, 0xE7159475A2C29B7443B29C7FA6E889D9),
    (0x1000, 0xD097F3BDFD2022B8845AD8F792AA5825),
    (0x2000, 0xA9F746462D870FDF8A65DC1F90E061E5),
    (0x4000, 0x70D869A156D2A1B890BB3DF62BAF32F7),
    (0x8000, 0x31BE135F97D08FD981231505542FCFA6),
    (0x10000, 0x9AA508B5B7A84E1C677DE54F3E99BC9),
    (0x20000, 0x5D6AF8DEDB81196699C329225EE604),
    (0x40000, 0x2216E584F5FA1EA926041BEDFE98),
    (0x80000, 0x48A170391F7DC42444E8FA2),
)

# log_sqrt(1.0001)(2) as Q128.64 multiplier
_LOG_SQRT10001_MAGIC = 255738958999603826347141
# Error bounds of the log approximation, Q128
_TICK_LOW_OFFSET = 3402992956809132418596140100660247210
_TICK_HIGH_OFFSET = 291339464771989622907027621153398088495


def get_sqrt_ratio_at_tick(tick: int) -> int:
    """Calculate sqrt(1.0001^tick) * 2^96.

    Args:
        tick: Tick index in [MIN_TICK, MAX_TICK]

    Returns:
        Q64.96 sqrt price, rounded up from the Q128 intermediate

    Raises:
        InvalidTick: If tick is outside the tick domain
    """
    if tick < MIN_TICK or tick > MAX_TICK:
        raise InvalidTick(f"Tick {tick} out of range [{MIN_TICK}, {MAX_TICK}]")

    abs_tick = -tick if tick < 0 else tick
    ratio = _RATIO_TICK_BIT_1 if abs_tick & 0x1 else _RATIO_ONE_X128
    for bit, factor in _RATIO_FACTORS:
        if abs_tick & bit:
            ratio = (ratio * factor) >> 128

    if tick > 0:
        ratio = MAX_UINT256 // ratio

    # Q128 -> Q96, rounding up so get_tick_at_sqrt_ratio stays consistent
    if ratio % (1 << 32) == 0:
        return ratio >> 32
    return (ratio >> 32) + 1


def get_tick_at_sqrt_ratio(sqrt_ratio_x96: int) -> int:
    """Calculate the greatest tick whose sqrt ratio is <= sqrt_ratio_x96.

    Args:
        sqrt_ratio_x96: Q64.96 sqrt price in [MIN_SQRT_RATIO, MAX_SQRT_RATIO)

    Returns:
        Tick index

    Raises:
        InvalidSqrtRatio: If the price is outside the supported range
    """
    if sqrt_ratio_x96 < MIN_SQRT_RATIO or sqrt_ratio_x96 >= MAX_SQRT_RATIO:
        raise InvalidSqrtRatio(f"Sqrt ratio {sqrt_ratio_x96} out of range")

    sqrt_ratio_x128 = sqrt_ratio_x96 << 32
    msb = most_significant_bit(sqrt_ratio_x128)

    if msb >= 128:
        r = sqrt_ratio_x128 >> (msb - 127)
    else:
        r = sqrt_ratio_x128 << (127 - msb)

    log_2 = (msb - 128) << 64
    for i in range(14):
        r = (r * r) >> 127
        f = r >> 128
        log_2 |= f << (63 - i)
        r >>= f

    log_sqrt10001 = log_2 * _LOG_SQRT10001_MAGIC

    tick_low = (log_sqrt10001 - _TICK_LOW_OFFSET) >> 128
    tick_high = (log_sqrt10001 + _TICK_HIGH_OFFSET) >> 128

    if tick_low == tick_high:
        return tick_low
    if get_sqrt_ratio_at_tick(tick_high) <= sqrt_ratio_x96:
        return tick_high
    return tick_low


def nearest_usable_tick(tick: int, tick_spacing: int) -> int:
    """Return the usable tick closest to tick for the given spacing.

    Halves round toward positive infinity, so -5 with spacing 10 rounds to 0
    while -6 rounds to -10. A result that rounds past the tick domain is
    pulled back one spacing inward.

    Raises:
        ZeroTickSpacing: If tick_spacing is not positive
        InvalidTick: If tick is outside the tick domain
    """
    if tick_spacing <= 0:
        raise ZeroTickSpacing(f"Tick spacing must be positive, got {tick_spacing}")
    if tick < MIN_TICK or tick > MAX_TICK:
        raise InvalidTick(f"Tick {tick} out of range [{MIN_TICK}, {MAX_TICK}]")

    # floor(tick / spacing + 1/2) without leaving integer arithmetic
    rounded = (2 * tick + tick_spacing) // (2 * tick_spacing) * tick_spacing
    if rounded < MIN_TICK:
        return rounded + tick_spacing
    if rounded > MAX_TICK:
        return rounded - tick_spacing
    return rounded


__all__ = [
    "get_sqrt_ratio_at_tick",
    "get_tick_at_sqrt_ratio",
    "nearest_usable_tick",
]
