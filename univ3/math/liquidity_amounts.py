"""Maximum liquidity for given token budgets (LiquidityAmounts.sol)."""

from univ3.constants import Q96

from .full_math import mul_div


def _max_liquidity_for_amount0_imprecise(
    sqrt_ratio_a_x96: int, sqrt_ratio_b_x96: int, amount0: int
) -> int:
    # Divides by Q96 in the intermediate step, matching the periphery router
    if sqrt_ratio_a_x96 > sqrt_ratio_b_x96:
        sqrt_ratio_a_x96, sqrt_ratio_b_x96 = sqrt_ratio_b_x96, sqrt_ratio_a_x96
    intermediate = mul_div(sqrt_ratio_a_x96, sqrt_ratio_b_x96, Q96)
    return mul_div(amount0, intermediate, sqrt_ratio_b_x96 - sqrt_ratio_a_x96)


def _max_liquidity_for_amount0_precise(
    sqrt_ratio_a_x96: int, sqrt_ratio_b_x96: int, amount0: int
) -> int:
    if sqrt_ratio_a_x96 > sqrt_ratio_b_x96:
        sqrt_ratio_a_x96, sqrt_ratio_b_x96 = sqrt_ratio_b_x96, sqrt_ratio_a_x96
    numerator = amount0 * sqrt_ratio_a_x96 * sqrt_ratio_b_x96
    denominator = Q96 * (sqrt_ratio_b_x96 - sqrt_ratio_a_x96)
    return numerator // denominator


def _max_liquidity_for_amount1(sqrt_ratio_a_x96: int, sqrt_ratio_b_x96: int, amount1: int) -> int:
    if sqrt_ratio_a_x96 > sqrt_ratio_b_x96:
        sqrt_ratio_a_x96, sqrt_ratio_b_x96 = sqrt_ratio_b_x96, sqrt_ratio_a_x96
    return mul_div(amount1, Q96, sqrt_ratio_b_x96 - sqrt_ratio_a_x96)


def max_liquidity_for_amounts(
    sqrt_ratio_current_x96: int,
    sqrt_ratio_a_x96: int,
    sqrt_ratio_b_x96: int,
    amount0: int,
    amount1: int,
    use_full_precision: bool,
) -> int:
    """Compute the maximum liquidity both token budgets can support.

    Args:
        sqrt_ratio_current_x96: Current pool sqrt price
        sqrt_ratio_a_x96: Sqrt price at one range boundary
        sqrt_ratio_b_x96: Sqrt price at the other range boundary
        amount0: Token0 budget
        amount1: Token1 budget
        use_full_precision: If False, use the router's imprecise token0
            formula so the result matches what the periphery would mint

    Returns:
        Liquidity amount
    """
    if sqrt_ratio_a_x96 > sqrt_ratio_b_x96:
        sqrt_ratio_a_x96, sqrt_ratio_b_x96 = sqrt_ratio_b_x96, sqrt_ratio_a_x96

    if use_full_precision:
        for_amount0 = _max_liquidity_for_amount0_precise
    else:
        for_amount0 = _max_liquidity_for_amount0_imprecise

    if sqrt_ratio_current_x96 <= sqrt_ratio_a_x96:
        return for_amount0(sqrt_ratio_a_x96, sqrt_ratio_b_x96, amount0)
    if sqrt_ratio_current_x96 < sqrt_ratio_b_x96:
        liquidity0 = for_amount0(sqrt_ratio_current_x96, sqrt_ratio_b_x96, amount0)
        liquidity1 = _max_liquidity_for_amount1(sqrt_ratio_a_x96, sqrt_ratio_current_x96, amount1)
        return min(liquidity0, liquidity1)
    return _max_liquidity_for_amount1(sqrt_ratio_a_x96, sqrt_ratio_b_x96, amount1)


__all__ = ["max_liquidity_for_amounts"]
