"""Liquidity positions: token amounts for a tick range against a pool."""

from __future__ import annotations

from univ3.constants import MAX_SQRT_RATIO, MAX_TICK, MAX_UINT256, MIN_SQRT_RATIO, MIN_TICK
from univ3.errors import TickLower, TickOrder, TickUpper
from univ3.math.encode import encode_sqrt_ratio_x96
from univ3.math.liquidity_amounts import max_liquidity_for_amounts
from univ3.math.price_tick import tick_to_price
from univ3.math.sqrt_price_math import get_amount0_delta, get_amount1_delta
from univ3.math.tick_math import get_sqrt_ratio_at_tick, get_tick_at_sqrt_ratio
from univ3.models.fractions import CurrencyAmount, Fraction, Percent, Price

from .pool import Pool

_ONE = Fraction(1)


class Position:
    """Liquidity held in a tick range of a pool.

    Derived amounts are computed once at construction; a Position is never
    mutated afterwards.

    Attributes:
        pool: The pool the liquidity is in
        tick_lower: Lower tick of the range
        tick_upper: Upper tick of the range
        liquidity: Liquidity of the position
        amount0: Token0 the liquidity could be burned for at the current price
        amount1: Token1 the liquidity could be burned for at the current price
        mint_amounts: (amount0, amount1) needed to mint the liquidity, rounded up
    """

    __slots__ = (
        "pool",
        "tick_lower",
        "tick_upper",
        "liquidity",
        "amount0",
        "amount1",
        "mint_amounts",
    )

    def __init__(self, pool: Pool, liquidity: int, tick_lower: int, tick_upper: int) -> None:
        """Construct a position.

        Raises:
            TickOrder: If tick_lower >= tick_upper
            TickLower: If tick_lower is below MIN_TICK or off the tick spacing
            TickUpper: If tick_upper is above MAX_TICK or off the tick spacing
        """
        if tick_lower >= tick_upper:
            raise TickOrder(f"Lower tick {tick_lower} must be below upper tick {tick_upper}")
        if tick_lower < MIN_TICK or tick_lower % pool.tick_spacing != 0:
            raise TickLower(f"Invalid lower tick {tick_lower}")
        if tick_upper > MAX_TICK or tick_upper % pool.tick_spacing != 0:
            raise TickUpper(f"Invalid upper tick {tick_upper}")

        self.pool = pool
        self.tick_lower = tick_lower
        self.tick_upper = tick_upper
        self.liquidity = liquidity

        sqrt_ratio_lower = get_sqrt_ratio_at_tick(tick_lower)
        sqrt_ratio_upper = get_sqrt_ratio_at_tick(tick_upper)
        self.amount0, self.amount1 = self._burn_amounts(sqrt_ratio_lower, sqrt_ratio_upper)
        self.mint_amounts = self._mint_amounts(sqrt_ratio_lower, sqrt_ratio_upper)

    def __repr__(self) -> str:
        return (
            f"Position({self.pool!r}, liquidity={self.liquidity}, "
            f"ticks=[{self.tick_lower}, {self.tick_upper}])"
        )

    def _burn_amounts(
        self, sqrt_ratio_lower: int, sqrt_ratio_upper: int
    ) -> tuple[CurrencyAmount, CurrencyAmount]:
        pool = self.pool
        if pool.tick_current < self.tick_lower:
            amount0 = get_amount0_delta(sqrt_ratio_lower, sqrt_ratio_upper, self.liquidity, False)
            amount1 = 0
        elif pool.tick_current < self.tick_upper:
            amount0 = get_amount0_delta(pool.sqrt_ratio_x96, sqrt_ratio_upper, self.liquidity, True)
            amount1 = get_amount1_delta(
                sqrt_ratio_lower, pool.sqrt_ratio_x96, self.liquidity, False
            )
        else:
            amount0 = 0
            amount1 = get_amount1_delta(sqrt_ratio_lower, sqrt_ratio_upper, self.liquidity, False)
        return (
            CurrencyAmount.from_raw_amount(pool.token0, amount0),
            CurrencyAmount.from_raw_amount(pool.token1, amount1),
        )

    def _mint_amounts(self, sqrt_ratio_lower: int, sqrt_ratio_upper: int) -> tuple[int, int]:
        pool = self.pool
        if pool.tick_current < self.tick_lower:
            return get_amount0_delta(sqrt_ratio_lower, sqrt_ratio_upper, self.liquidity, True), 0
        if pool.tick_current < self.tick_upper:
            return (
                get_amount0_delta(pool.sqrt_ratio_x96, sqrt_ratio_upper, self.liquidity, True),
                get_amount1_delta(sqrt_ratio_lower, pool.sqrt_ratio_x96, self.liquidity, True),
            )
        return 0, get_amount1_delta(sqrt_ratio_lower, sqrt_ratio_upper, self.liquidity, True)

    @property
    def token0_price_lower(self) -> Price:
        """Price of token0 at the lower tick."""
        return tick_to_price(self.pool.token0, self.pool.token1, self.tick_lower)

    @property
    def token0_price_upper(self) -> Price:
        """Price of token0 at the upper tick."""
        return tick_to_price(self.pool.token0, self.pool.token1, self.tick_upper)

    def _ratios_after_slippage(self, slippage_tolerance: Percent) -> tuple[int, int]:
        """Sqrt price band the pool price may slip to, kept inside the domain."""
        token0_price = self.pool.token0_price.as_fraction
        price_lower = token0_price.multiply(_ONE.subtract(slippage_tolerance))
        price_upper = token0_price.multiply(_ONE.add(slippage_tolerance))

        sqrt_ratio_lower = encode_sqrt_ratio_x96(price_lower.numerator, price_lower.denominator)
        if sqrt_ratio_lower <= MIN_SQRT_RATIO:
            sqrt_ratio_lower = MIN_SQRT_RATIO + 1

        sqrt_ratio_upper = encode_sqrt_ratio_x96(price_upper.numerator, price_upper.denominator)
        if sqrt_ratio_upper >= MAX_SQRT_RATIO:
            sqrt_ratio_upper = MAX_SQRT_RATIO - 1

        return sqrt_ratio_lower, sqrt_ratio_upper

    def _counterfactual_pool(self, sqrt_ratio_x96: int) -> Pool:
        # Liquidity does not matter; only the price is read
        return Pool(
            self.pool.token0,
            self.pool.token1,
            self.pool.fee,
            sqrt_ratio_x96,
            0,
            get_tick_at_sqrt_ratio(sqrt_ratio_x96),
            config=self.pool.config,
        )

    def mint_amounts_with_slippage(self, slippage_tolerance: Percent) -> tuple[int, int]:
        """Minimum amounts to send so minting succeeds within the tolerance.

        Args:
            slippage_tolerance: Tolerated unfavorable move from the current price

        Returns:
            Tuple of (amount0, amount1)
        """
        sqrt_ratio_lower, sqrt_ratio_upper = self._ratios_after_slippage(slippage_tolerance)
        pool_lower = self._counterfactual_pool(sqrt_ratio_lower)
        pool_upper = self._counterfactual_pool(sqrt_ratio_upper)

        # The router is imprecise, so mint with the liquidity it would actually create
        amount0, amount1 = self.mint_amounts
        position_that_will_be_created = Position.from_amounts(
            self.pool, self.tick_lower, self.tick_upper, amount0, amount1, use_full_precision=False
        )
        liquidity = position_that_will_be_created.liquidity

        # Smallest amount0 is at the upper price, smallest amount1 at the lower
        position_upper = Position(pool_upper, liquidity, self.tick_lower, self.tick_upper)
        position_lower = Position(pool_lower, liquidity, self.tick_lower, self.tick_upper)
        return position_upper.mint_amounts[0], position_lower.mint_amounts[1]

    def burn_amounts_with_slippage(self, slippage_tolerance: Percent) -> tuple[int, int]:
        """Minimum amounts to request so burning succeeds within the tolerance.

        Args:
            slippage_tolerance: Tolerated unfavorable move from the current price

        Returns:
            Tuple of (amount0, amount1)
        """
        sqrt_ratio_lower, sqrt_ratio_upper = self._ratios_after_slippage(slippage_tolerance)
        pool_lower = self._counterfactual_pool(sqrt_ratio_lower)
        pool_upper = self._counterfactual_pool(sqrt_ratio_upper)

        position_upper = Position(pool_upper, self.liquidity, self.tick_lower, self.tick_upper)
        position_lower = Position(pool_lower, self.liquidity, self.tick_lower, self.tick_upper)
        return position_upper.amount0.quotient, position_lower.amount1.quotient

    @classmethod
    def from_amounts(
        cls,
        pool: Pool,
        tick_lower: int,
        tick_upper: int,
        amount0: int,
        amount1: int,
        use_full_precision: bool,
    ) -> Position:
        """Position with the maximum liquidity the token budgets allow.

        Args:
            pool: Pool the position is created in
            tick_lower: Lower tick
            tick_upper: Upper tick
            amount0: Token0 budget
            amount1: Token1 budget
            use_full_precision: If False, size liquidity the way the periphery
                router computes it rather than what the core could accept
        """
        sqrt_ratio_a = get_sqrt_ratio_at_tick(tick_lower)
        sqrt_ratio_b = get_sqrt_ratio_at_tick(tick_upper)
        liquidity = max_liquidity_for_amounts(
            pool.sqrt_ratio_x96, sqrt_ratio_a, sqrt_ratio_b, amount0, amount1, use_full_precision
        )
        return cls(pool, liquidity, tick_lower, tick_upper)

    @classmethod
    def from_amount0(
        cls, pool: Pool, tick_lower: int, tick_upper: int, amount0: int, use_full_precision: bool
    ) -> Position:
        """Position for a token0 budget, with token1 unconstrained."""
        return cls.from_amounts(
            pool, tick_lower, tick_upper, amount0, MAX_UINT256, use_full_precision
        )

    @classmethod
    def from_amount1(cls, pool: Pool, tick_lower: int, tick_upper: int, amount1: int) -> Position:
        """Position for a token1 budget, with token0 unconstrained.

        Always uses full precision: amount1 liquidity math has no router variant.
        """
        return cls.from_amounts(pool, tick_lower, tick_upper, MAX_UINT256, amount1, True)


__all__ = ["Position"]
