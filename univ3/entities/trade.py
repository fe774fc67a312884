"""Trades: one or more routed swaps executed together."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from functools import cached_property

from univ3.errors import (
    DuplicatePools,
    InputCurrencyMismatch,
    InvalidAmountForRoute,
    InvalidSlippageTolerance,
    OutputCurrencyMismatch,
    TradeHasMultipleRoutes,
    ValidationError,
)
from univ3.models.fractions import CurrencyAmount, Fraction, Percent, Price
from univ3.models.types import TradeType

from .route import Route

_ONE = Fraction(1)


@dataclass(frozen=True)
class Swap:
    """Amounts moved through one route of a trade."""

    route: Route
    input_amount: CurrencyAmount
    output_amount: CurrencyAmount


def _simulate_route(route: Route, amount: CurrencyAmount, trade_type: TradeType) -> Swap:
    """Swap amount through every pool of a route and return the resulting Swap.

    Raises:
        InvalidAmountForRoute: If amount is not in the route's input (exact
            input) or output (exact output) currency
    """
    if trade_type is TradeType.EXACT_INPUT:
        if not amount.currency.equals(route.input):
            raise InvalidAmountForRoute(
                f"Amount in {amount.currency}, route input is {route.input}"
            )
        current = CurrencyAmount.from_fractional_amount(
            route.input, amount.numerator, amount.denominator
        )
        input_amount = current
        for pool in route.pools:
            current, _ = pool.get_output_amount(current)
        output_amount = CurrencyAmount.from_fractional_amount(
            route.output, current.numerator, current.denominator
        )
    else:
        if not amount.currency.equals(route.output):
            raise InvalidAmountForRoute(
                f"Amount in {amount.currency}, route output is {route.output}"
            )
        current = CurrencyAmount.from_fractional_amount(
            route.output, amount.numerator, amount.denominator
        )
        output_amount = current
        for pool in reversed(route.pools):
            current, _ = pool.get_input_amount(current)
        input_amount = CurrencyAmount.from_fractional_amount(
            route.input, current.numerator, current.denominator
        )

    return Swap(route=route, input_amount=input_amount, output_amount=output_amount)


class Trade:
    """A trade executed across one or more routes.

    Each route carries part of the amount. Pools may not be shared between
    routes. Slippage between quoting and execution is not modeled; the
    slippage helpers only bound the amounts.

    Attributes:
        swaps: The routes and the amounts swapped through each
        trade_type: Whether the input or the output amount is exact
        input_amount: Total input across swaps, assuming no slippage
        output_amount: Total output across swaps, assuming no slippage
    """

    def __init__(self, swaps: Sequence[Swap], trade_type: TradeType) -> None:
        """Build a trade from precomputed swaps.

        Raises:
            InputCurrencyMismatch: If a swap's route input differs from the trade's
            OutputCurrencyMismatch: If a swap's route output differs from the trade's
            DuplicatePools: If a pool appears more than once across routes
        """
        if not swaps:
            raise ValidationError("Trade must have at least one swap")

        input_currency = swaps[0].input_amount.currency
        output_currency = swaps[0].output_amount.currency
        for swap in swaps:
            if not input_currency.equals(swap.route.input):
                raise InputCurrencyMismatch(
                    f"Route input {swap.route.input} does not match {input_currency}"
                )
            if not output_currency.equals(swap.route.output):
                raise OutputCurrencyMismatch(
                    f"Route output {swap.route.output} does not match {output_currency}"
                )

        num_pools = sum(len(swap.route.pools) for swap in swaps)
        pool_addresses = {pool.address for swap in swaps for pool in swap.route.pools}
        if num_pools != len(pool_addresses):
            raise DuplicatePools("Pools cannot be reused across the routes of a trade")

        self.swaps: tuple[Swap, ...] = tuple(swaps)
        self.trade_type = trade_type

        input_amount = CurrencyAmount.from_raw_amount(input_currency, 0)
        output_amount = CurrencyAmount.from_raw_amount(output_currency, 0)
        for swap in swaps:
            input_amount = input_amount.add(swap.input_amount)
            output_amount = output_amount.add(swap.output_amount)
        self.input_amount = input_amount
        self.output_amount = output_amount

    def __repr__(self) -> str:
        return (
            f"Trade({self.trade_type.value}, {self.input_amount.quotient} "
            f"{self.input_amount.currency} -> {self.output_amount.quotient} "
            f"{self.output_amount.currency}, routes={len(self.swaps)})"
        )

    @property
    def route(self) -> Route:
        """The route of a single-route trade.

        Raises:
            TradeHasMultipleRoutes: If the trade has more than one swap
        """
        if len(self.swaps) != 1:
            raise TradeHasMultipleRoutes(f"Trade has {len(self.swaps)} routes")
        return self.swaps[0].route

    @cached_property
    def execution_price(self) -> Price:
        """Output per input actually received, assuming no slippage."""
        return Price(
            self.input_amount.currency,
            self.output_amount.currency,
            self.input_amount.quotient,
            self.output_amount.quotient,
        )

    @cached_property
    def price_impact(self) -> Percent:
        """Relative shortfall of the output versus the routes' mid prices."""
        spot_output_amount = CurrencyAmount.from_raw_amount(self.output_amount.currency, 0)
        for swap in self.swaps:
            spot_output_amount = spot_output_amount.add(
                swap.route.mid_price.quote(swap.input_amount)
            )
        impact = Fraction.subtract(spot_output_amount, self.output_amount).divide(
            spot_output_amount
        )
        return Percent(impact.numerator, impact.denominator)

    def minimum_amount_out(self, slippage_tolerance: Percent) -> CurrencyAmount:
        """Least output acceptable for the given slippage tolerance.

        Exact output trades return the output amount unchanged.

        Raises:
            InvalidSlippageTolerance: If the tolerance is negative
        """
        if slippage_tolerance.less_than(0):
            raise InvalidSlippageTolerance(f"Negative slippage tolerance {slippage_tolerance!r}")
        if self.trade_type is TradeType.EXACT_OUTPUT:
            return self.output_amount
        adjusted = _ONE.add(slippage_tolerance).invert().multiply(self.output_amount).quotient
        return CurrencyAmount.from_raw_amount(self.output_amount.currency, adjusted)

    def maximum_amount_in(self, slippage_tolerance: Percent) -> CurrencyAmount:
        """Most input that may be spent for the given slippage tolerance.

        Exact input trades return the input amount unchanged.

        Raises:
            InvalidSlippageTolerance: If the tolerance is negative
        """
        if slippage_tolerance.less_than(0):
            raise InvalidSlippageTolerance(f"Negative slippage tolerance {slippage_tolerance!r}")
        if self.trade_type is TradeType.EXACT_INPUT:
            return self.input_amount
        adjusted = _ONE.add(slippage_tolerance).multiply(self.input_amount).quotient
        return CurrencyAmount.from_raw_amount(self.input_amount.currency, adjusted)

    def worst_execution_price(self, slippage_tolerance: Percent) -> Price:
        """Execution price at the slippage-adjusted amounts."""
        return Price(
            self.input_amount.currency,
            self.output_amount.currency,
            self.maximum_amount_in(slippage_tolerance).quotient,
            self.minimum_amount_out(slippage_tolerance).quotient,
        )

    # --- Constructors ---

    @classmethod
    def exact_in(cls, route: Route, amount_in: CurrencyAmount) -> Trade:
        """Exact input trade through a single route."""
        return cls.from_route(route, amount_in, TradeType.EXACT_INPUT)

    @classmethod
    def exact_out(cls, route: Route, amount_out: CurrencyAmount) -> Trade:
        """Exact output trade through a single route."""
        return cls.from_route(route, amount_out, TradeType.EXACT_OUTPUT)

    @classmethod
    def from_route(cls, route: Route, amount: CurrencyAmount, trade_type: TradeType) -> Trade:
        """Build a trade by simulating the swap through every pool of a route.

        Args:
            route: Route to swap through
            amount: Input amount for exact input, output amount for exact output
            trade_type: Which side of the trade is fixed
        """
        return cls([_simulate_route(route, amount, trade_type)], trade_type)

    @classmethod
    def from_routes(
        cls, routes: Sequence[tuple[CurrencyAmount, Route]], trade_type: TradeType
    ) -> Trade:
        """Build a trade split across several routes.

        Args:
            routes: (amount, route) pairs; each amount is what goes through that route
            trade_type: Which side of the trade is fixed
        """
        swaps = [_simulate_route(route, amount, trade_type) for amount, route in routes]
        return cls(swaps, trade_type)

    @classmethod
    def create_unchecked_trade(
        cls,
        route: Route,
        input_amount: CurrencyAmount,
        output_amount: CurrencyAmount,
        trade_type: TradeType,
    ) -> Trade:
        """Build a trade from amounts simulated elsewhere, without tick data."""
        return cls([Swap(route, input_amount, output_amount)], trade_type)

    @classmethod
    def create_unchecked_trade_with_multiple_routes(
        cls, swaps: Sequence[Swap], trade_type: TradeType
    ) -> Trade:
        """Multi-route variant of create_unchecked_trade."""
        return cls(swaps, trade_type)


__all__ = ["Swap", "Trade"]
