"""Integer primitives shared by the tick, price and swap math.

Python ints are arbitrary precision, so full 512-bit intermediate products
come for free; these helpers only reproduce the rounding and domain checks
of the on-chain FullMath, LiquidityMath and BitMath libraries.
"""

from univ3.constants import MAX_UINT256
from univ3.errors import InvalidInput


def mul_div(a: int, b: int, denominator: int) -> int:
    """Compute floor(a * b / denominator) with full precision."""
    return a * b // denominator


def mul_div_rounding_up(a: int, b: int, denominator: int) -> int:
    """Compute ceil(a * b / denominator) with full precision.

    Used wherever the contracts round in the protocol's favor.
    """
    product = a * b
    result = product // denominator
    if product % denominator != 0:
        result += 1
    return result


def div_rounding_up(a: int, denominator: int) -> int:
    """Compute ceil(a / denominator) for non-negative a."""
    result = a // denominator
    if a % denominator != 0:
        result += 1
    return result


def add_delta(x: int, y: int) -> int:
    """Apply a signed liquidity delta to an unsigned liquidity value."""
    if y < 0:
        return x - (-y)
    return x + y


def most_significant_bit(x: int) -> int:
    """Return the index of the most significant set bit of x.

    Args:
        x: Value in (0, MAX_UINT256]

    Returns:
        Bit index in [0, 255]

    Raises:
        InvalidInput: If x is not positive or exceeds MAX_UINT256
    """
    if x <= 0 or x > MAX_UINT256:
        raise InvalidInput(f"most_significant_bit input out of range: {x}")

    msb = 0
    for power in (128, 64, 32, 16, 8, 4, 2, 1):
        if x >= 1 << power:
            x >>= power
            msb += power
    return msb


__all__ = [
    "mul_div",
    "mul_div_rounding_up",
    "div_rounding_up",
    "add_delta",
    "most_significant_bit",
]
