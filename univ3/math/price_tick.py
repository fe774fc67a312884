"""Conversions between ticks and token prices."""

from univ3.constants import Q192
from univ3.models.fractions import Price
from univ3.models.token import Token

from .encode import encode_sqrt_ratio_x96
from .tick_math import get_sqrt_ratio_at_tick, get_tick_at_sqrt_ratio


def tick_to_price(base_token: Token, quote_token: Token, tick: int) -> Price:
    """Return the price of base_token in quote_token at a tick.

    Tokens are required (not bare addresses) because their sort order
    decides which way the tick's ratio is read.
    """
    sqrt_ratio_x96 = get_sqrt_ratio_at_tick(tick)
    ratio_x192 = sqrt_ratio_x96 * sqrt_ratio_x96

    if base_token.sorts_before(quote_token):
        return Price(base_token, quote_token, Q192, ratio_x192)
    return Price(base_token, quote_token, ratio_x192, Q192)


def price_to_closest_tick(price: Price) -> int:
    """Return the greatest tick whose price is <= the given price.

    Args:
        price: Price of base_currency in quote_currency

    Returns:
        Tick index
    """
    base_token = price.base_currency
    quote_token = price.quote_currency
    sorted_ = base_token.sorts_before(quote_token)

    if sorted_:
        sqrt_ratio_x96 = encode_sqrt_ratio_x96(price.numerator, price.denominator)
    else:
        sqrt_ratio_x96 = encode_sqrt_ratio_x96(price.denominator, price.numerator)

    tick = get_tick_at_sqrt_ratio(sqrt_ratio_x96)
    next_tick_price = tick_to_price(base_token, quote_token, tick + 1)
    if sorted_:
        if not price.less_than(next_tick_price):
            tick += 1
    elif not price.greater_than(next_tick_price):
        tick += 1
    return tick


__all__ = ["tick_to_price", "price_to_closest_tick"]
