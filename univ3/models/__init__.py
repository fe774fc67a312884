"""Value types: tokens, exact fractions, currency amounts and prices."""

from univ3.models.fractions import CurrencyAmount, Fraction, Percent, Price, Rounding
from univ3.models.token import Token
from univ3.models.types import Address, TradeType, normalize_address

__all__ = [
    "Address",
    "CurrencyAmount",
    "Fraction",
    "Percent",
    "Price",
    "Rounding",
    "Token",
    "TradeType",
    "normalize_address",
]
