"""Tests for the Pool entity and its swap simulation."""

import pytest

from univ3.config import SDKConfig
from univ3.constants import MAX_TICK, MIN_SQRT_RATIO, MIN_TICK, TICK_SPACINGS, FeeAmount
from univ3.entities import Pool, Tick
from univ3.errors import (
    FeeTooHigh,
    InvalidSqrtRatioX96,
    NoTickData,
    SameToken,
    SqrtPriceLimitX96TooHigh,
    SqrtPriceLimitX96TooLow,
    SwapError,
    TokenNotInvolved,
    ZeroTickSpacing,
)
from univ3.math import encode_sqrt_ratio_x96, get_tick_at_sqrt_ratio, nearest_usable_tick
from univ3.models import CurrencyAmount
from tests.helpers import DAI, USDC, WETH

ONE_ETHER = 10**18
PRICE_ONE = encode_sqrt_ratio_x96(1, 1)


@pytest.fixture
def liquid_pool() -> Pool:
    """USDC/DAI 0.05% pool at 1:1 with full-range liquidity of 1e18."""
    spacing = TICK_SPACINGS[FeeAmount.LOW]
    ticks = [
        Tick(
            index=nearest_usable_tick(MIN_TICK, spacing),
            liquidity_gross=ONE_ETHER,
            liquidity_net=ONE_ETHER,
        ),
        Tick(
            index=nearest_usable_tick(MAX_TICK, spacing),
            liquidity_gross=ONE_ETHER,
            liquidity_net=-ONE_ETHER,
        ),
    ]
    return Pool(USDC, DAI, FeeAmount.LOW, PRICE_ONE, ONE_ETHER, 0, ticks)


class TestPoolConstruction:
    """Tests for Pool construction and validation."""

    def test_rejects_fee_at_max(self):
        with pytest.raises(FeeTooHigh):
            Pool(USDC, WETH, 1_000_000, PRICE_ONE, 0, 0)

    def test_rejects_same_token(self):
        with pytest.raises(SameToken):
            Pool(USDC, USDC, FeeAmount.MEDIUM, PRICE_ONE, 0, 0)

    def test_rejects_price_above_tick(self):
        """Price of 1 does not lie in tick 1."""
        with pytest.raises(InvalidSqrtRatioX96):
            Pool(USDC, WETH, FeeAmount.MEDIUM, PRICE_ONE, 0, 1)

    def test_rejects_price_above_next_tick(self):
        with pytest.raises(InvalidSqrtRatioX96):
            Pool(USDC, WETH, FeeAmount.MEDIUM, PRICE_ONE + 1, 0, -1)

    @pytest.mark.parametrize("fee", [FeeAmount.LOW, FeeAmount.MEDIUM, FeeAmount.HIGH])
    def test_accepts_fee_tiers(self, fee):
        pool = Pool(USDC, WETH, fee, PRICE_ONE, 0, 0)
        assert pool.fee == fee

    def test_token0_sorts_first(self):
        assert Pool(USDC, DAI, FeeAmount.LOW, PRICE_ONE, 0, 0).token0 == DAI
        assert Pool(DAI, USDC, FeeAmount.LOW, PRICE_ONE, 0, 0).token0 == DAI

    def test_token1_sorts_last(self):
        assert Pool(USDC, DAI, FeeAmount.LOW, PRICE_ONE, 0, 0).token1 == USDC
        assert Pool(DAI, USDC, FeeAmount.LOW, PRICE_ONE, 0, 0).token1 == USDC

    def test_tick_list_is_wrapped_in_provider(self, liquid_pool):
        assert len(liquid_pool.tick_data_provider.ticks) == 2


class TestPoolPrices:
    """Tests for token0_price, token1_price and price_of."""

    @pytest.fixture
    def pool_101_to_100(self):
        sqrt_ratio = encode_sqrt_ratio_x96(101 * 10**6, 100 * 10**18)
        return sqrt_ratio, get_tick_at_sqrt_ratio(sqrt_ratio)

    def test_token0_price(self, pool_101_to_100):
        sqrt_ratio, tick = pool_101_to_100
        for token_a, token_b in ((USDC, DAI), (DAI, USDC)):
            pool = Pool(token_a, token_b, FeeAmount.LOW, sqrt_ratio, 0, tick)
            assert pool.token0_price.to_significant(5) == "1.01"

    def test_token1_price(self, pool_101_to_100):
        sqrt_ratio, tick = pool_101_to_100
        for token_a, token_b in ((USDC, DAI), (DAI, USDC)):
            pool = Pool(token_a, token_b, FeeAmount.LOW, sqrt_ratio, 0, tick)
            assert pool.token1_price.to_significant(5) == "0.9901"

    def test_price_of(self):
        pool = Pool(USDC, DAI, FeeAmount.LOW, PRICE_ONE, 0, 0)
        assert pool.price_of(DAI) is pool.token0_price
        assert pool.price_of(USDC) is pool.token1_price

    def test_price_of_foreign_token(self):
        pool = Pool(USDC, DAI, FeeAmount.LOW, PRICE_ONE, 0, 0)
        with pytest.raises(TokenNotInvolved):
            pool.price_of(WETH)


class TestPoolMetadata:
    """Tests for address, chain_id, tick_spacing and involves_token."""

    def test_get_address(self):
        assert (
            Pool.get_address(USDC, DAI, FeeAmount.LOW)
            == "0x6c6Bc977E13Df9b0de53b251522280BB72383700"
        )

    def test_address_property(self):
        pool = Pool(USDC, DAI, FeeAmount.LOW, PRICE_ONE, 0, 0)
        assert pool.address == Pool.get_address(DAI, USDC, FeeAmount.LOW)

    def test_chain_id(self):
        assert Pool(USDC, DAI, FeeAmount.LOW, PRICE_ONE, 0, 0).chain_id == 1
        assert Pool(DAI, USDC, FeeAmount.LOW, PRICE_ONE, 0, 0).chain_id == 1

    def test_involves_token(self):
        pool = Pool(USDC, DAI, FeeAmount.LOW, PRICE_ONE, 0, 0)
        assert pool.involves_token(USDC)
        assert pool.involves_token(DAI)
        assert not pool.involves_token(WETH)

    def test_tick_spacing(self):
        assert Pool(USDC, DAI, FeeAmount.LOWEST, PRICE_ONE, 0, 0).tick_spacing == 1
        assert Pool(USDC, DAI, FeeAmount.MEDIUM, PRICE_ONE, 0, 0).tick_spacing == 60

    def test_unknown_fee_tier_has_no_spacing(self):
        pool = Pool(USDC, DAI, 1234, PRICE_ONE, 0, 0)
        with pytest.raises(ZeroTickSpacing):
            _ = pool.tick_spacing

    def test_address_uses_pool_config(self):
        config = SDKConfig(factory_address="0x1111111111111111111111111111111111111111")
        pool = Pool(USDC, DAI, FeeAmount.LOW, PRICE_ONE, 0, 0, config=config)
        assert pool.address == "0x90B1b09A9715CaDbFD9331b3A7652B24BfBEfD32"
        assert pool.address != Pool(USDC, DAI, FeeAmount.LOW, PRICE_ONE, 0, 0).address

    def test_swap_keeps_config(self, liquid_pool):
        config = SDKConfig(factory_address="0x1111111111111111111111111111111111111111")
        pool = Pool(
            USDC,
            DAI,
            FeeAmount.LOW,
            PRICE_ONE,
            ONE_ETHER,
            0,
            liquid_pool.tick_data_provider,
            config=config,
        )
        _, after = pool.get_output_amount(CurrencyAmount.from_raw_amount(USDC, 100))
        assert after.config is config
        assert after.address == pool.address


class TestGetOutputAmount:
    """Tests for exact input swaps."""

    def test_usdc_to_dai(self, liquid_pool):
        output, _ = liquid_pool.get_output_amount(CurrencyAmount.from_raw_amount(USDC, 100))
        assert output.currency == DAI
        assert output.quotient == 98

    def test_dai_to_usdc(self, liquid_pool):
        output, _ = liquid_pool.get_output_amount(CurrencyAmount.from_raw_amount(DAI, 100))
        assert output.currency == USDC
        assert output.quotient == 98

    def test_returns_new_pool(self, liquid_pool):
        """Swapping leaves the original pool untouched."""
        _, after = liquid_pool.get_output_amount(CurrencyAmount.from_raw_amount(USDC, 100))
        assert liquid_pool.sqrt_ratio_x96 == PRICE_ONE
        # USDC is token1, so buying DAI pushes the price up
        assert after.sqrt_ratio_x96 > PRICE_ONE
        assert after.liquidity == ONE_ETHER
        assert after.tick_data_provider is liquid_pool.tick_data_provider

    def test_foreign_token(self, liquid_pool):
        with pytest.raises(TokenNotInvolved):
            liquid_pool.get_output_amount(CurrencyAmount.from_raw_amount(WETH, 100))

    def test_limit_not_below_price(self, liquid_pool):
        with pytest.raises(SqrtPriceLimitX96TooHigh):
            liquid_pool.get_output_amount(
                CurrencyAmount.from_raw_amount(DAI, 100), liquid_pool.sqrt_ratio_x96
            )

    def test_limit_at_min(self, liquid_pool):
        with pytest.raises(SqrtPriceLimitX96TooLow):
            liquid_pool.get_output_amount(CurrencyAmount.from_raw_amount(DAI, 100), MIN_SQRT_RATIO)

    def test_limit_not_above_price(self, liquid_pool):
        with pytest.raises(SqrtPriceLimitX96TooLow):
            liquid_pool.get_output_amount(
                CurrencyAmount.from_raw_amount(USDC, 100), liquid_pool.sqrt_ratio_x96
            )

    def test_limit_errors_are_swap_errors(self, liquid_pool):
        with pytest.raises(SwapError):
            liquid_pool.get_output_amount(
                CurrencyAmount.from_raw_amount(USDC, 100), liquid_pool.sqrt_ratio_x96
            )

    def test_price_limit_stops_swap(self, liquid_pool):
        """A reachable limit caps the amount swapped."""
        limit = encode_sqrt_ratio_x96(1, 2)
        output, after = liquid_pool.get_output_amount(
            CurrencyAmount.from_raw_amount(DAI, 10 * ONE_ETHER), limit
        )
        assert after.sqrt_ratio_x96 == limit
        assert output.quotient < ONE_ETHER

    def test_no_tick_data(self):
        pool = Pool(USDC, DAI, FeeAmount.LOW, PRICE_ONE, ONE_ETHER, 0)
        with pytest.raises(NoTickData):
            pool.get_output_amount(CurrencyAmount.from_raw_amount(USDC, 100))


class TestGetInputAmount:
    """Tests for exact output swaps."""

    def test_usdc_to_dai(self, liquid_pool):
        input_amount, _ = liquid_pool.get_input_amount(CurrencyAmount.from_raw_amount(DAI, 98))
        assert input_amount.currency == USDC
        assert input_amount.quotient == 100

    def test_dai_to_usdc(self, liquid_pool):
        input_amount, _ = liquid_pool.get_input_amount(CurrencyAmount.from_raw_amount(USDC, 98))
        assert input_amount.currency == DAI
        assert input_amount.quotient == 100

    def test_foreign_token(self, liquid_pool):
        with pytest.raises(TokenNotInvolved):
            liquid_pool.get_input_amount(CurrencyAmount.from_raw_amount(WETH, 100))

    def test_round_trip_is_consistent(self, liquid_pool):
        """Buying what an exact input sold never costs less than that input."""
        amount_in = CurrencyAmount.from_raw_amount(USDC, 10**12)
        output, _ = liquid_pool.get_output_amount(amount_in)
        required, _ = liquid_pool.get_input_amount(output)
        assert required.quotient <= amount_in.quotient
        assert amount_in.quotient - required.quotient < 10


class TestTickCrossing:
    """Tests for swaps that cross initialized ticks inside the range."""

    @pytest.fixture
    def stepped_pool(self) -> Pool:
        """1:1 DAI/USDC pool whose liquidity doubles above tick 100."""
        ticks = [
            Tick(index=-887270, liquidity_gross=ONE_ETHER, liquidity_net=ONE_ETHER),
            Tick(index=100, liquidity_gross=ONE_ETHER, liquidity_net=ONE_ETHER),
            Tick(index=887270, liquidity_gross=2 * ONE_ETHER, liquidity_net=-2 * ONE_ETHER),
        ]
        return Pool(USDC, DAI, FeeAmount.LOW, PRICE_ONE, ONE_ETHER, 0, ticks)

    def test_crossing_up_adds_liquidity_net(self, stepped_pool):
        _, after = stepped_pool.get_output_amount(
            CurrencyAmount.from_raw_amount(USDC, 10**16)
        )
        assert after.tick_current >= 100
        assert after.liquidity == 2 * ONE_ETHER

    def test_crossing_down_subtracts_liquidity_net(self, stepped_pool):
        _, above = stepped_pool.get_output_amount(
            CurrencyAmount.from_raw_amount(USDC, 10**16)
        )
        _, below = above.get_output_amount(CurrencyAmount.from_raw_amount(DAI, 10**16))
        assert below.tick_current < 100
        assert below.liquidity == ONE_ETHER

    def test_exact_output_crosses_tick(self, stepped_pool):
        """Buying enough DAI moves the price past tick 100."""
        amount_in, after = stepped_pool.get_input_amount(
            CurrencyAmount.from_raw_amount(DAI, 9 * 10**15)
        )
        assert amount_in.currency == USDC
        assert after.tick_current >= 100
        assert after.liquidity == 2 * ONE_ETHER
