"""Tests for Trade construction, amounts and slippage bounds."""

import pytest

from univ3.entities import Route, Swap, Trade
from univ3.errors import (
    DuplicatePools,
    InputCurrencyMismatch,
    InvalidAmountForRoute,
    InvalidSlippageTolerance,
    OutputCurrencyMismatch,
    TradeHasMultipleRoutes,
    ValidationError,
)
from univ3.models import CurrencyAmount, Percent
from univ3.models.types import TradeType
from tests.helpers import TOKEN0, TOKEN1, TOKEN2, WETH, v2_style_pool

POOL_0_1 = v2_style_pool(TOKEN0, TOKEN1, 100_000, 100_000)
POOL_0_2 = v2_style_pool(TOKEN0, TOKEN2, 100_000, 110_000)
POOL_1_2 = v2_style_pool(TOKEN1, TOKEN2, 120_000, 100_000)
POOL_WETH_1 = v2_style_pool(TOKEN1, WETH, 100_000, 100_000)
POOL_WETH_2 = v2_style_pool(TOKEN2, WETH, 100_000, 100_000)


def amount(token, raw):
    return CurrencyAmount.from_raw_amount(token, raw)


@pytest.fixture
def exact_in_trade():
    """10000 token0 in through token0 -> token1 -> token2."""
    route = Route([POOL_0_1, POOL_1_2], TOKEN0, TOKEN2)
    return Trade.exact_in(route, amount(TOKEN0, 10_000))


@pytest.fixture
def exact_out_trade():
    """10000 token2 out through token0 -> token1 -> token2."""
    route = Route([POOL_0_1, POOL_1_2], TOKEN0, TOKEN2)
    return Trade.exact_out(route, amount(TOKEN2, 10_000))


class TestTradeConstruction:
    """Tests for Trade validation and constructors."""

    def test_from_route_exact_input(self, exact_in_trade):
        assert exact_in_trade.trade_type is TradeType.EXACT_INPUT
        assert exact_in_trade.input_amount.quotient == 10_000
        assert exact_in_trade.output_amount.quotient == 7004
        assert exact_in_trade.output_amount.currency == TOKEN2

    def test_from_route_exact_output(self, exact_out_trade):
        assert exact_out_trade.trade_type is TradeType.EXACT_OUTPUT
        assert exact_out_trade.output_amount.quotient == 10_000
        assert exact_out_trade.input_amount.quotient == 15488
        assert exact_out_trade.input_amount.currency == TOKEN0

    def test_from_route_amount_in_wrong_currency(self):
        route = Route([POOL_0_1], TOKEN0, TOKEN1)
        with pytest.raises(InvalidAmountForRoute):
            Trade.exact_in(route, amount(TOKEN1, 10_000))

    def test_from_route_amount_out_wrong_currency(self):
        route = Route([POOL_0_1], TOKEN0, TOKEN1)
        with pytest.raises(InvalidAmountForRoute):
            Trade.exact_out(route, amount(TOKEN0, 10_000))

    def test_from_routes_sums_amounts(self):
        trade = Trade.from_routes(
            [
                (amount(TOKEN0, 5_000), Route([POOL_0_2], TOKEN0, TOKEN2)),
                (amount(TOKEN0, 5_000), Route([POOL_0_1, POOL_1_2], TOKEN0, TOKEN2)),
            ],
            TradeType.EXACT_INPUT,
        )
        assert len(trade.swaps) == 2
        assert trade.input_amount.quotient == 10_000
        assert trade.output_amount.quotient == sum(
            swap.output_amount.quotient for swap in trade.swaps
        )

    def test_from_routes_input_mismatch(self):
        with pytest.raises(InputCurrencyMismatch):
            Trade.from_routes(
                [
                    (amount(TOKEN0, 1_000), Route([POOL_0_2], TOKEN0, TOKEN2)),
                    (amount(TOKEN1, 1_000), Route([POOL_1_2], TOKEN1, TOKEN2)),
                ],
                TradeType.EXACT_INPUT,
            )

    def test_from_routes_output_mismatch(self):
        with pytest.raises(OutputCurrencyMismatch):
            Trade.from_routes(
                [
                    (amount(TOKEN0, 1_000), Route([POOL_0_2], TOKEN0, TOKEN2)),
                    (amount(TOKEN0, 1_000), Route([POOL_0_1], TOKEN0, TOKEN1)),
                ],
                TradeType.EXACT_INPUT,
            )

    def test_duplicate_pools(self):
        with pytest.raises(DuplicatePools):
            Trade.from_routes(
                [
                    (amount(TOKEN0, 4_500), Route([POOL_0_1, POOL_WETH_1], TOKEN0, WETH)),
                    (
                        amount(TOKEN0, 5_500),
                        Route([POOL_0_1, POOL_1_2, POOL_WETH_2], TOKEN0, WETH),
                    ),
                ],
                TradeType.EXACT_INPUT,
            )

    def test_no_swaps(self):
        with pytest.raises(ValidationError):
            Trade([], TradeType.EXACT_INPUT)

    def test_unchecked_trade(self):
        route = Route([POOL_0_1], TOKEN0, TOKEN1)
        trade = Trade.create_unchecked_trade(
            route, amount(TOKEN0, 100), amount(TOKEN1, 69), TradeType.EXACT_INPUT
        )
        assert trade.input_amount.quotient == 100
        assert trade.output_amount.quotient == 69
        assert trade.route is route


class TestTradeRoute:
    """Tests for the single-route accessor."""

    def test_single_route(self, exact_in_trade):
        assert exact_in_trade.route.token_path == (TOKEN0, TOKEN1, TOKEN2)

    def test_multiple_routes(self):
        trade = Trade.create_unchecked_trade_with_multiple_routes(
            [
                Swap(Route([POOL_0_2], TOKEN0, TOKEN2), amount(TOKEN0, 50), amount(TOKEN2, 50)),
                Swap(
                    Route([POOL_0_1, POOL_1_2], TOKEN0, TOKEN2),
                    amount(TOKEN0, 50),
                    amount(TOKEN2, 40),
                ),
            ],
            TradeType.EXACT_INPUT,
        )
        assert trade.output_amount.quotient == 90
        with pytest.raises(TradeHasMultipleRoutes):
            _ = trade.route


class TestSlippage:
    """Tests for minimum_amount_out, maximum_amount_in and worst_execution_price."""

    def test_minimum_amount_out_exact_input(self, exact_in_trade):
        assert exact_in_trade.minimum_amount_out(Percent(0, 100)).quotient == 7004
        assert exact_in_trade.minimum_amount_out(Percent(5, 100)).quotient == 6670
        assert exact_in_trade.minimum_amount_out(Percent(200, 100)).quotient == 2334

    def test_maximum_amount_in_exact_input_is_unchanged(self, exact_in_trade):
        assert exact_in_trade.maximum_amount_in(Percent(5, 100)).quotient == 10_000

    def test_maximum_amount_in_exact_output(self, exact_out_trade):
        assert exact_out_trade.maximum_amount_in(Percent(0, 100)).quotient == 15488
        assert exact_out_trade.maximum_amount_in(Percent(5, 100)).quotient == 16262
        assert exact_out_trade.maximum_amount_in(Percent(200, 100)).quotient == 46464

    def test_minimum_amount_out_exact_output_is_unchanged(self, exact_out_trade):
        assert exact_out_trade.minimum_amount_out(Percent(5, 100)).quotient == 10_000

    def test_negative_tolerance(self, exact_in_trade, exact_out_trade):
        with pytest.raises(InvalidSlippageTolerance):
            exact_in_trade.minimum_amount_out(Percent(-1, 100))
        with pytest.raises(InvalidSlippageTolerance):
            exact_out_trade.maximum_amount_in(Percent(-1, 100))

    def test_worst_execution_price(self, exact_in_trade):
        price = exact_in_trade.worst_execution_price(Percent(5, 100))
        assert price.base_currency == TOKEN0
        assert price.quote_currency == TOKEN2
        assert price.numerator == 6670
        assert price.denominator == 10_000


class TestPrices:
    """Tests for execution_price and price_impact."""

    def test_execution_price(self, exact_in_trade):
        price = exact_in_trade.execution_price
        assert price.base_currency == TOKEN0
        assert price.quote_currency == TOKEN2
        assert price.numerator == 7004
        assert price.denominator == 10_000

    def test_price_impact_exact_input(self):
        trade = Trade.create_unchecked_trade(
            Route([POOL_0_1, POOL_1_2], TOKEN0, TOKEN2),
            amount(TOKEN0, 100),
            amount(TOKEN2, 69),
            TradeType.EXACT_INPUT,
        )
        assert trade.price_impact.to_significant(3) == "17.2"

    def test_price_impact_single_pool(self):
        trade = Trade.create_unchecked_trade(
            Route([POOL_0_1], TOKEN0, TOKEN1),
            amount(TOKEN0, 100),
            amount(TOKEN1, 69),
            TradeType.EXACT_INPUT,
        )
        assert trade.price_impact.to_significant(3) == "31"
