"""Token amount deltas and next-price computations (SqrtPriceMath.sol)."""

from univ3.constants import MAX_UINT160, MAX_UINT256, Q96
from univ3.errors import InvalidLiquidity, InvalidPrice, PriceOverflow

from .full_math import div_rounding_up, mul_div, mul_div_rounding_up


def _multiply_in_256(x: int, y: int) -> int:
    """Multiply with uint256 wraparound."""
    return (x * y) & MAX_UINT256


def _add_in_256(x: int, y: int) -> int:
    """Add with uint256 wraparound."""
    return (x + y) & MAX_UINT256


def get_amount0_delta(
    sqrt_ratio_a_x96: int, sqrt_ratio_b_x96: int, liquidity: int, round_up: bool
) -> int:
    """Amount of token0 between two sqrt prices at constant liquidity.

    Computes liquidity / sqrt(lower) - liquidity / sqrt(upper). The two
    prices may be given in either order.

    Args:
        sqrt_ratio_a_x96: A sqrt price boundary
        sqrt_ratio_b_x96: The other sqrt price boundary
        liquidity: Usable liquidity
        round_up: Round up for required inputs, down for available outputs

    Returns:
        Token0 amount
    """
    if sqrt_ratio_a_x96 > sqrt_ratio_b_x96:
        sqrt_ratio_a_x96, sqrt_ratio_b_x96 = sqrt_ratio_b_x96, sqrt_ratio_a_x96

    numerator1 = liquidity << 96
    numerator2 = sqrt_ratio_b_x96 - sqrt_ratio_a_x96

    if round_up:
        return div_rounding_up(
            mul_div_rounding_up(numerator1, numerator2, sqrt_ratio_b_x96), sqrt_ratio_a_x96
        )
    return mul_div(numerator1, numerator2, sqrt_ratio_b_x96) // sqrt_ratio_a_x96


def get_amount1_delta(
    sqrt_ratio_a_x96: int, sqrt_ratio_b_x96: int, liquidity: int, round_up: bool
) -> int:
    """Amount of token1 between two sqrt prices at constant liquidity.

    Computes liquidity * (sqrt(upper) - sqrt(lower)). The two prices may be
    given in either order.
    """
    if sqrt_ratio_a_x96 > sqrt_ratio_b_x96:
        sqrt_ratio_a_x96, sqrt_ratio_b_x96 = sqrt_ratio_b_x96, sqrt_ratio_a_x96

    if round_up:
        return mul_div_rounding_up(liquidity, sqrt_ratio_b_x96 - sqrt_ratio_a_x96, Q96)
    return mul_div(liquidity, sqrt_ratio_b_x96 - sqrt_ratio_a_x96, Q96)


def get_next_sqrt_price_from_input(
    sqrt_p_x96: int, liquidity: int, amount_in: int, zero_for_one: bool
) -> int:
    """Next sqrt price after adding amount_in of the input token.

    Rounds so the price never passes the exact target, whichever token
    is the input.

    Raises:
        InvalidPrice: If sqrt_p_x96 is not positive
        InvalidLiquidity: If liquidity is not positive
    """
    if sqrt_p_x96 <= 0:
        raise InvalidPrice(f"Sqrt price must be positive, got {sqrt_p_x96}")
    if liquidity <= 0:
        raise InvalidLiquidity(f"Liquidity must be positive, got {liquidity}")

    if zero_for_one:
        return _next_sqrt_price_from_amount0_rounding_up(sqrt_p_x96, liquidity, amount_in, True)
    return _next_sqrt_price_from_amount1_rounding_down(sqrt_p_x96, liquidity, amount_in, True)


def get_next_sqrt_price_from_output(
    sqrt_p_x96: int, liquidity: int, amount_out: int, zero_for_one: bool
) -> int:
    """Next sqrt price after removing amount_out of the output token.

    Raises:
        InvalidPrice: If sqrt_p_x96 is not positive
        InvalidLiquidity: If liquidity is not positive
        PriceOverflow: If the pool cannot supply amount_out
    """
    if sqrt_p_x96 <= 0:
        raise InvalidPrice(f"Sqrt price must be positive, got {sqrt_p_x96}")
    if liquidity <= 0:
        raise InvalidLiquidity(f"Liquidity must be positive, got {liquidity}")

    if zero_for_one:
        return _next_sqrt_price_from_amount1_rounding_down(sqrt_p_x96, liquidity, amount_out, False)
    return _next_sqrt_price_from_amount0_rounding_up(sqrt_p_x96, liquidity, amount_out, False)


def _next_sqrt_price_from_amount0_rounding_up(
    sqrt_p_x96: int, liquidity: int, amount: int, add: bool
) -> int:
    if amount == 0:
        return sqrt_p_x96

    numerator1 = liquidity << 96
    product = _multiply_in_256(amount, sqrt_p_x96)

    if add:
        if product // amount == sqrt_p_x96:
            denominator = _add_in_256(numerator1, product)
            if denominator >= numerator1:
                return mul_div_rounding_up(numerator1, sqrt_p_x96, denominator)
        return div_rounding_up(numerator1, numerator1 // sqrt_p_x96 + amount)

    if product // amount != sqrt_p_x96:
        raise PriceOverflow("amount * sqrt price overflows uint256")
    if numerator1 <= product:
        raise PriceOverflow("Output exceeds token0 reserves at this price")
    return mul_div_rounding_up(numerator1, sqrt_p_x96, numerator1 - product)


def _next_sqrt_price_from_amount1_rounding_down(
    sqrt_p_x96: int, liquidity: int, amount: int, add: bool
) -> int:
    if add:
        if amount <= MAX_UINT160:
            quotient = (amount << 96) // liquidity
        else:
            quotient = mul_div(amount, Q96, liquidity)
        return sqrt_p_x96 + quotient

    quotient = mul_div_rounding_up(amount, Q96, liquidity)
    if sqrt_p_x96 <= quotient:
        raise PriceOverflow("Output exceeds token1 reserves at this price")
    return sqrt_p_x96 - quotient


__all__ = [
    "get_amount0_delta",
    "get_amount1_delta",
    "get_next_sqrt_price_from_input",
    "get_next_sqrt_price_from_output",
]
