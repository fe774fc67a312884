"""Price ratio encoding."""

from math import isqrt


def encode_sqrt_ratio_x96(amount1: int, amount0: int) -> int:
    """Return sqrt(amount1 / amount0) as a Q64.96 value, rounded down.

    Args:
        amount1: Numerator, the token1 amount
        amount0: Denominator, the token0 amount
    """
    ratio_x192 = (amount1 << 192) // amount0
    return isqrt(ratio_x192)


__all__ = ["encode_sqrt_ratio_x96"]
