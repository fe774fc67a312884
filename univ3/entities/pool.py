"""Immutable V3 pool snapshot and the tick-crossing swap simulation."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

import structlog

from univ3.config import DEFAULT_CONFIG, SDKConfig
from univ3.constants import (
    FEE_MAX,
    MAX_SQRT_RATIO,
    MAX_TICK,
    MIN_SQRT_RATIO,
    MIN_TICK,
    Q192,
    TICK_SPACINGS,
)
from univ3.errors import (
    FeeTooHigh,
    InvalidSqrtRatioX96,
    SqrtPriceLimitX96TooHigh,
    SqrtPriceLimitX96TooLow,
    TokenNotInvolved,
    ZeroTickSpacing,
)
from univ3.math.full_math import add_delta
from univ3.math.swap_math import compute_swap_step
from univ3.math.tick_math import get_sqrt_ratio_at_tick, get_tick_at_sqrt_ratio
from univ3.models.fractions import CurrencyAmount, Price
from univ3.models.token import Token
from univ3.utils.pool_address import compute_pool_address

from .tick import NO_TICK_DATA_PROVIDER, Tick, TickDataProvider
from .tick_list import TickListDataProvider

logger = structlog.get_logger()


@dataclass(frozen=True)
class SwapState:
    """Result of running the swap loop to completion."""

    amount_calculated: int
    sqrt_ratio_x96: int
    liquidity: int
    tick_current: int


class Pool:
    """A Uniswap V3 pool at a fixed point in time.

    A pool never changes: swaps return the resulting amount together with
    a new Pool holding the post-swap price, liquidity and tick.

    Attributes:
        token0: The token with the lower address
        token1: The token with the higher address
        fee: Fee in hundredths of a bip
        sqrt_ratio_x96: Current sqrt(token1/token0) as Q64.96
        liquidity: Liquidity active at the current tick
        tick_current: Current tick
        tick_data_provider: Source of initialized tick data
        token0_price: Price of token0 in token1
        token1_price: Price of token1 in token0
        config: Deployment data used to derive the pool address
    """

    __slots__ = (
        "token0",
        "token1",
        "fee",
        "sqrt_ratio_x96",
        "liquidity",
        "tick_current",
        "tick_data_provider",
        "token0_price",
        "token1_price",
        "config",
    )

    def __init__(
        self,
        token_a: Token,
        token_b: Token,
        fee: int,
        sqrt_ratio_x96: int,
        liquidity: int,
        tick_current: int,
        ticks: TickDataProvider | Sequence[Tick] | None = None,
        config: SDKConfig = DEFAULT_CONFIG,
    ) -> None:
        """Construct a pool snapshot.

        Args:
            token_a: One of the pool tokens, in either order
            token_b: The other pool token
            fee: Fee tier in hundredths of a bip
            sqrt_ratio_x96: Current sqrt price as Q64.96
            liquidity: Current in-range liquidity
            tick_current: Current tick
            ticks: Tick data provider, or a list of ticks to wrap in a
                TickListDataProvider. None builds a pool that cannot swap.
            config: Factory address and init code hash for the pool address

        Raises:
            FeeTooHigh: If fee >= FEE_MAX
            InvalidSqrtRatioX96: If the price is outside the current tick
            SameToken: If both tokens are the same
        """
        if fee >= FEE_MAX:
            raise FeeTooHigh(f"Fee {fee} must be below {FEE_MAX}")

        tick_current_sqrt_ratio_x96 = get_sqrt_ratio_at_tick(tick_current)
        next_tick_sqrt_ratio_x96 = get_sqrt_ratio_at_tick(tick_current + 1)
        if not tick_current_sqrt_ratio_x96 <= sqrt_ratio_x96 <= next_tick_sqrt_ratio_x96:
            raise InvalidSqrtRatioX96(
                f"Sqrt ratio {sqrt_ratio_x96} is outside tick {tick_current}"
            )

        if token_a.sorts_before(token_b):
            self.token0, self.token1 = token_a, token_b
        else:
            self.token0, self.token1 = token_b, token_a

        self.fee = fee
        self.sqrt_ratio_x96 = sqrt_ratio_x96
        self.liquidity = liquidity
        self.tick_current = tick_current
        self.config = config

        if ticks is None:
            self.tick_data_provider: TickDataProvider = NO_TICK_DATA_PROVIDER
        elif isinstance(ticks, Sequence):
            self.tick_data_provider = TickListDataProvider(ticks, self.tick_spacing)
        else:
            self.tick_data_provider = ticks

        ratio_x192 = sqrt_ratio_x96 * sqrt_ratio_x96
        self.token0_price = Price(self.token0, self.token1, Q192, ratio_x192)
        self.token1_price = Price(self.token1, self.token0, ratio_x192, Q192)

    def __repr__(self) -> str:
        return (
            f"Pool({self.token0}/{self.token1}, fee={self.fee}, "
            f"sqrt_ratio_x96={self.sqrt_ratio_x96}, tick={self.tick_current})"
        )

    @staticmethod
    def get_address(
        token_a: Token,
        token_b: Token,
        fee: int,
        init_code_hash: str | None = None,
        factory_address: str | None = None,
    ) -> str:
        """Deterministic address of the pool for a token pair and fee."""
        return compute_pool_address(
            factory_address or DEFAULT_CONFIG.factory_address,
            token_a,
            token_b,
            fee,
            init_code_hash,
        )

    @property
    def address(self) -> str:
        return Pool.get_address(
            self.token0,
            self.token1,
            self.fee,
            init_code_hash=self.config.init_code_hash,
            factory_address=self.config.factory_address,
        )

    @property
    def chain_id(self) -> int:
        return self.token0.chain_id

    @property
    def tick_spacing(self) -> int:
        """Tick spacing for this pool's fee tier.

        Raises:
            ZeroTickSpacing: If the fee is not a factory-enabled tier
        """
        spacing = TICK_SPACINGS.get(self.fee)
        if spacing is None:
            raise ZeroTickSpacing(f"No tick spacing for fee {self.fee}")
        return spacing

    def involves_token(self, token: Token) -> bool:
        """Check if token is token0 or token1."""
        return token.equals(self.token0) or token.equals(self.token1)

    def price_of(self, token: Token) -> Price:
        """Return the price of token in terms of the other pool token.

        Raises:
            TokenNotInvolved: If token is not in the pool
        """
        if not self.involves_token(token):
            raise TokenNotInvolved(f"Token {token} not in pool")
        if token.equals(self.token0):
            return self.token0_price
        return self.token1_price

    def get_output_amount(
        self, input_amount: CurrencyAmount, sqrt_price_limit_x96: int | None = None
    ) -> tuple[CurrencyAmount, Pool]:
        """Quote the output for an exact input amount.

        Args:
            input_amount: Amount of token0 or token1 going in
            sqrt_price_limit_x96: Price the swap may not move past

        Returns:
            Tuple of (output amount, pool after the swap)

        Raises:
            TokenNotInvolved: If the input currency is not in the pool
        """
        if not self.involves_token(input_amount.currency):
            raise TokenNotInvolved(f"Token {input_amount.currency} not in pool")

        zero_for_one = input_amount.currency.equals(self.token0)
        state = self._swap(zero_for_one, input_amount.quotient, sqrt_price_limit_x96)
        output_token = self.token1 if zero_for_one else self.token0
        return (
            CurrencyAmount.from_raw_amount(output_token, -state.amount_calculated),
            self._after_swap(state),
        )

    def get_input_amount(
        self, output_amount: CurrencyAmount, sqrt_price_limit_x96: int | None = None
    ) -> tuple[CurrencyAmount, Pool]:
        """Quote the input required for an exact output amount.

        Args:
            output_amount: Amount of token0 or token1 wanted out
            sqrt_price_limit_x96: Price the swap may not move past

        Returns:
            Tuple of (input amount, pool after the swap)

        Raises:
            TokenNotInvolved: If the output currency is not in the pool
        """
        if not self.involves_token(output_amount.currency):
            raise TokenNotInvolved(f"Token {output_amount.currency} not in pool")

        zero_for_one = output_amount.currency.equals(self.token1)
        state = self._swap(zero_for_one, -output_amount.quotient, sqrt_price_limit_x96)
        input_token = self.token0 if zero_for_one else self.token1
        return (
            CurrencyAmount.from_raw_amount(input_token, state.amount_calculated),
            self._after_swap(state),
        )

    def _after_swap(self, state: SwapState) -> Pool:
        return Pool(
            self.token0,
            self.token1,
            self.fee,
            state.sqrt_ratio_x96,
            state.liquidity,
            state.tick_current,
            self.tick_data_provider,
            config=self.config,
        )

    def _swap(
        self, zero_for_one: bool, amount_specified: int, sqrt_price_limit_x96: int | None
    ) -> SwapState:
        """Run the swap loop, crossing initialized ticks as needed.

        Args:
            zero_for_one: True when token0 is the input
            amount_specified: Exact input (positive) or negated exact output
            sqrt_price_limit_x96: Price bound, defaults to the domain edge

        Raises:
            SqrtPriceLimitX96TooLow: If the limit is at or below the allowed bound
            SqrtPriceLimitX96TooHigh: If the limit is at or above the allowed bound
        """
        if sqrt_price_limit_x96 is None:
            sqrt_price_limit_x96 = MIN_SQRT_RATIO + 1 if zero_for_one else MAX_SQRT_RATIO - 1

        if zero_for_one:
            if sqrt_price_limit_x96 <= MIN_SQRT_RATIO:
                raise SqrtPriceLimitX96TooLow(f"Limit {sqrt_price_limit_x96} at or below minimum")
            if sqrt_price_limit_x96 >= self.sqrt_ratio_x96:
                raise SqrtPriceLimitX96TooHigh(
                    f"Limit {sqrt_price_limit_x96} not below current price {self.sqrt_ratio_x96}"
                )
        else:
            if sqrt_price_limit_x96 >= MAX_SQRT_RATIO:
                raise SqrtPriceLimitX96TooHigh(f"Limit {sqrt_price_limit_x96} at or above maximum")
            if sqrt_price_limit_x96 <= self.sqrt_ratio_x96:
                raise SqrtPriceLimitX96TooLow(
                    f"Limit {sqrt_price_limit_x96} not above current price {self.sqrt_ratio_x96}"
                )

        exact_input = amount_specified >= 0
        tick_spacing = self.tick_spacing

        amount_specified_remaining = amount_specified
        amount_calculated = 0
        sqrt_price_x96 = self.sqrt_ratio_x96
        tick = self.tick_current
        liquidity = self.liquidity
        ticks_crossed = 0

        while amount_specified_remaining != 0 and sqrt_price_x96 != sqrt_price_limit_x96:
            sqrt_price_start_x96 = sqrt_price_x96

            # Each step rounds, so stepping word by word is required to match the contract
            tick_next, initialized = self.tick_data_provider.next_initialized_tick_within_one_word(
                tick, zero_for_one, tick_spacing
            )
            tick_next = max(MIN_TICK, min(MAX_TICK, tick_next))
            sqrt_price_next_x96 = get_sqrt_ratio_at_tick(tick_next)

            if zero_for_one:
                target = max(sqrt_price_next_x96, sqrt_price_limit_x96)
            else:
                target = min(sqrt_price_next_x96, sqrt_price_limit_x96)

            step = compute_swap_step(
                sqrt_price_x96, target, liquidity, amount_specified_remaining, self.fee
            )
            sqrt_price_x96 = step.sqrt_ratio_next_x96

            if exact_input:
                amount_specified_remaining -= step.amount_in + step.fee_amount
                amount_calculated -= step.amount_out
            else:
                amount_specified_remaining += step.amount_out
                amount_calculated += step.amount_in + step.fee_amount

            if sqrt_price_x96 == sqrt_price_next_x96:
                if initialized:
                    liquidity_net = self.tick_data_provider.get_tick(tick_next).liquidity_net
                    # Moving left, liquidity_net applies with the opposite sign
                    if zero_for_one:
                        liquidity_net = -liquidity_net
                    liquidity = add_delta(liquidity, liquidity_net)
                    logger.debug("v3_tick_crossed", tick=tick_next, liquidity=liquidity)
                    ticks_crossed += 1
                tick = tick_next - 1 if zero_for_one else tick_next
            elif sqrt_price_x96 != sqrt_price_start_x96:
                # Price moved within the range without reaching a boundary
                tick = get_tick_at_sqrt_ratio(sqrt_price_x96)

        logger.debug(
            "v3_swap_simulated",
            token0=self.token0.address,
            token1=self.token1.address,
            fee=self.fee,
            zero_for_one=zero_for_one,
            amount_specified=amount_specified,
            amount_calculated=amount_calculated,
            ticks_crossed=ticks_crossed,
        )

        return SwapState(
            amount_calculated=amount_calculated,
            sqrt_ratio_x96=sqrt_price_x96,
            liquidity=liquidity,
            tick_current=tick,
        )


__all__ = ["Pool", "SwapState"]
