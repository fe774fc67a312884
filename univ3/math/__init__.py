"""Fixed-point math reproducing the Uniswap V3 core and periphery libraries.

This package provides:
- Tick <-> sqrt price conversion (tick_math)
- Token amount deltas and next-price computation (sqrt_price_math)
- The single-range swap step (swap_math)
- Liquidity for token budgets (liquidity_amounts)
- Price encoding and tick/price conversion helpers
"""

from univ3.math.encode import encode_sqrt_ratio_x96
from univ3.math.full_math import (
    add_delta,
    div_rounding_up,
    most_significant_bit,
    mul_div,
    mul_div_rounding_up,
)
from univ3.math.liquidity_amounts import max_liquidity_for_amounts
from univ3.math.price_tick import price_to_closest_tick, tick_to_price
from univ3.math.sqrt_price_math import (
    get_amount0_delta,
    get_amount1_delta,
    get_next_sqrt_price_from_input,
    get_next_sqrt_price_from_output,
)
from univ3.math.swap_math import MAX_FEE, SwapStepResult, compute_swap_step
from univ3.math.tick_math import (
    get_sqrt_ratio_at_tick,
    get_tick_at_sqrt_ratio,
    nearest_usable_tick,
)

__all__ = [
    "encode_sqrt_ratio_x96",
    "add_delta",
    "div_rounding_up",
    "most_significant_bit",
    "mul_div",
    "mul_div_rounding_up",
    "max_liquidity_for_amounts",
    "price_to_closest_tick",
    "tick_to_price",
    "get_amount0_delta",
    "get_amount1_delta",
    "get_next_sqrt_price_from_input",
    "get_next_sqrt_price_from_output",
    "MAX_FEE",
    "SwapStepResult",
    "compute_swap_step",
    "get_sqrt_ratio_at_tick",
    "get_tick_at_sqrt_ratio",
    "nearest_usable_tick",
]
