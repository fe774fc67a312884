"""Exact rational values: fractions, percentages, currency amounts and prices.

All values are kept as unreduced integer numerator/denominator pairs so
that arithmetic reproduces the integer results of the on-chain math.
Decimal formatting is only used for display.
"""

from __future__ import annotations

import decimal
from decimal import Decimal
from enum import Enum
from typing import Union

from univ3.constants import MAX_UINT256
from univ3.errors import AmountOverflow, CurrencyMismatch

from .token import Token


class Rounding(Enum):
    """Rounding modes for display formatting."""

    ROUND_DOWN = decimal.ROUND_DOWN
    ROUND_HALF_UP = decimal.ROUND_HALF_UP
    ROUND_UP = decimal.ROUND_UP


def _div_round(numerator: int, denominator: int, rounding: Rounding) -> int:
    """Integer division of numerator / denominator with the given rounding."""
    negative = (numerator < 0) != (denominator < 0)
    n, d = abs(numerator), abs(denominator)
    q, r = divmod(n, d)
    if rounding is Rounding.ROUND_UP and r:
        q += 1
    elif rounding is Rounding.ROUND_HALF_UP and 2 * r >= d:
        q += 1
    return -q if negative else q


FractionLike = Union["Fraction", int]


class Fraction:
    """Rational number with integer numerator and denominator."""

    __slots__ = ("numerator", "denominator")

    def __init__(self, numerator: int, denominator: int = 1) -> None:
        if denominator == 0:
            raise ZeroDivisionError("Fraction denominator must not be zero")
        self.numerator = numerator
        self.denominator = denominator

    @staticmethod
    def _parse(other: FractionLike) -> Fraction:
        if isinstance(other, Fraction):
            return other
        if isinstance(other, int):
            return Fraction(other)
        raise TypeError(f"Cannot convert {type(other).__name__} to Fraction")

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.numerator}, {self.denominator})"

    @property
    def quotient(self) -> int:
        """Floor of numerator / denominator."""
        return self.numerator // self.denominator

    @property
    def remainder(self) -> Fraction:
        """Remainder after floor division."""
        return Fraction(self.numerator % self.denominator, self.denominator)

    @property
    def as_fraction(self) -> Fraction:
        """This value as a plain Fraction."""
        return Fraction(self.numerator, self.denominator)

    def invert(self) -> Fraction:
        return Fraction(self.denominator, self.numerator)

    def add(self, other: FractionLike) -> Fraction:
        other = self._parse(other)
        if self.denominator == other.denominator:
            return Fraction(self.numerator + other.numerator, self.denominator)
        return Fraction(
            self.numerator * other.denominator + other.numerator * self.denominator,
            self.denominator * other.denominator,
        )

    def subtract(self, other: FractionLike) -> Fraction:
        other = self._parse(other)
        if self.denominator == other.denominator:
            return Fraction(self.numerator - other.numerator, self.denominator)
        return Fraction(
            self.numerator * other.denominator - other.numerator * self.denominator,
            self.denominator * other.denominator,
        )

    def multiply(self, other: FractionLike) -> Fraction:
        other = self._parse(other)
        return Fraction(self.numerator * other.numerator, self.denominator * other.denominator)

    def divide(self, other: FractionLike) -> Fraction:
        other = self._parse(other)
        return Fraction(self.numerator * other.denominator, self.denominator * other.numerator)

    def less_than(self, other: FractionLike) -> bool:
        other = self._parse(other)
        return self.numerator * other.denominator < other.numerator * self.denominator

    def equal_to(self, other: FractionLike) -> bool:
        other = self._parse(other)
        return self.numerator * other.denominator == other.numerator * self.denominator

    def greater_than(self, other: FractionLike) -> bool:
        other = self._parse(other)
        return self.numerator * other.denominator > other.numerator * self.denominator

    def to_significant(
        self, significant_digits: int, rounding: Rounding = Rounding.ROUND_HALF_UP
    ) -> str:
        """Format to a number of significant digits, trailing zeros stripped.

        Decimal division is correctly rounded, so the quotient is rounded
        exactly once, straight to the requested digits.
        """
        if significant_digits <= 0:
            raise ValueError(f"significant_digits must be positive, got {significant_digits}")

        with decimal.localcontext() as ctx:
            ctx.prec = significant_digits
            ctx.rounding = rounding.value
            ctx.Emax = decimal.MAX_EMAX
            ctx.Emin = decimal.MIN_EMIN
            value = Decimal(self.numerator) / Decimal(self.denominator)
        if value == 0:
            return "0"
        return format(value.normalize(), "f")

    def to_fixed(self, decimal_places: int, rounding: Rounding = Rounding.ROUND_HALF_UP) -> str:
        """Format with exactly decimal_places digits after the point."""
        if decimal_places < 0:
            raise ValueError(f"decimal_places must be non-negative, got {decimal_places}")

        scaled = _div_round(self.numerator * 10**decimal_places, self.denominator, rounding)
        sign = "-" if scaled < 0 else ""
        digits = str(abs(scaled)).rjust(decimal_places + 1, "0")
        if decimal_places == 0:
            return sign + digits
        return f"{sign}{digits[:-decimal_places]}.{digits[-decimal_places:]}"


_ONE_HUNDRED = Fraction(100)


class Percent(Fraction):
    """A fraction displayed as a percentage."""

    __slots__ = ()

    @staticmethod
    def _from(fraction: Fraction) -> Percent:
        return Percent(fraction.numerator, fraction.denominator)

    def add(self, other: FractionLike) -> Percent:
        return self._from(super().add(other))

    def subtract(self, other: FractionLike) -> Percent:
        return self._from(super().subtract(other))

    def multiply(self, other: FractionLike) -> Percent:
        return self._from(super().multiply(other))

    def divide(self, other: FractionLike) -> Percent:
        return self._from(super().divide(other))

    def to_significant(
        self, significant_digits: int = 5, rounding: Rounding = Rounding.ROUND_HALF_UP
    ) -> str:
        return Fraction.multiply(self, _ONE_HUNDRED).to_significant(significant_digits, rounding)

    def to_fixed(self, decimal_places: int = 2, rounding: Rounding = Rounding.ROUND_HALF_UP) -> str:
        return Fraction.multiply(self, _ONE_HUNDRED).to_fixed(decimal_places, rounding)


class CurrencyAmount(Fraction):
    """An amount of a token, in its smallest unit.

    Raises:
        AmountOverflow: If the amount does not fit in uint256
    """

    __slots__ = ("currency",)

    def __init__(self, currency: Token, numerator: int, denominator: int = 1) -> None:
        super().__init__(numerator, denominator)
        if self.quotient > MAX_UINT256:
            raise AmountOverflow(f"Amount {self.quotient} exceeds uint256")
        self.currency = currency

    @classmethod
    def from_raw_amount(cls, currency: Token, raw_amount: int) -> CurrencyAmount:
        """Build an amount from an integer number of base units."""
        return cls(currency, raw_amount)

    @classmethod
    def from_fractional_amount(
        cls, currency: Token, numerator: int, denominator: int
    ) -> CurrencyAmount:
        """Build an amount from a numerator/denominator pair of base units."""
        return cls(currency, numerator, denominator)

    def __repr__(self) -> str:
        return f"CurrencyAmount({self.currency}, {self.numerator}, {self.denominator})"

    @property
    def decimal_scale(self) -> int:
        return 10**self.currency.decimals

    def _check_currency(self, other: CurrencyAmount) -> None:
        if not self.currency.equals(other.currency):
            raise CurrencyMismatch(f"Cannot combine {self.currency} and {other.currency} amounts")

    def add(self, other: CurrencyAmount) -> CurrencyAmount:  # type: ignore[override]
        self._check_currency(other)
        added = Fraction.add(self, other)
        return CurrencyAmount(self.currency, added.numerator, added.denominator)

    def subtract(self, other: CurrencyAmount) -> CurrencyAmount:  # type: ignore[override]
        self._check_currency(other)
        subtracted = Fraction.subtract(self, other)
        return CurrencyAmount(self.currency, subtracted.numerator, subtracted.denominator)

    def multiply(self, other: FractionLike) -> CurrencyAmount:
        multiplied = Fraction.multiply(self, other)
        return CurrencyAmount(self.currency, multiplied.numerator, multiplied.denominator)

    def divide(self, other: FractionLike) -> CurrencyAmount:
        divided = Fraction.divide(self, other)
        return CurrencyAmount(self.currency, divided.numerator, divided.denominator)

    def to_significant(
        self, significant_digits: int = 6, rounding: Rounding = Rounding.ROUND_DOWN
    ) -> str:
        return Fraction.divide(self, self.decimal_scale).to_significant(
            significant_digits, rounding
        )

    def to_fixed(
        self, decimal_places: int | None = None, rounding: Rounding = Rounding.ROUND_DOWN
    ) -> str:
        if decimal_places is None:
            decimal_places = self.currency.decimals
        if decimal_places > self.currency.decimals:
            raise ValueError(
                f"{decimal_places} decimal places exceeds token decimals {self.currency.decimals}"
            )
        return Fraction.divide(self, self.decimal_scale).to_fixed(decimal_places, rounding)

    def to_exact(self) -> str:
        """Exact amount in whole token units."""
        value = Decimal(self.quotient).scaleb(-self.currency.decimals)
        if value == 0:
            return "0"
        return format(value.normalize(), "f")


class Price(Fraction):
    """Exchange rate of quote currency per unit of base currency.

    The raw fraction is in base units; display methods adjust for the two
    tokens' decimals.
    """

    __slots__ = ("base_currency", "quote_currency", "scalar")

    def __init__(
        self, base_currency: Token, quote_currency: Token, denominator: int, numerator: int
    ) -> None:
        super().__init__(numerator, denominator)
        self.base_currency = base_currency
        self.quote_currency = quote_currency
        self.scalar = Fraction(10**base_currency.decimals, 10**quote_currency.decimals)

    def __repr__(self) -> str:
        return (
            f"Price({self.base_currency}/{self.quote_currency}, "
            f"{self.numerator}, {self.denominator})"
        )

    def invert(self) -> Price:
        return Price(self.quote_currency, self.base_currency, self.numerator, self.denominator)

    def multiply(self, other: Price) -> Price:  # type: ignore[override]
        """Chain two prices: (A per B) * (B per C) = A per C.

        Raises:
            CurrencyMismatch: If other's base is not this price's quote
        """
        if not self.quote_currency.equals(other.base_currency):
            raise CurrencyMismatch(
                f"Cannot chain {self.quote_currency} quote with {other.base_currency} base"
            )
        fraction = Fraction.multiply(self, other)
        return Price(
            self.base_currency, other.quote_currency, fraction.denominator, fraction.numerator
        )

    def quote(self, currency_amount: CurrencyAmount) -> CurrencyAmount:
        """Convert an amount of the base currency into the quote currency.

        Raises:
            CurrencyMismatch: If the amount is not in the base currency
        """
        if not currency_amount.currency.equals(self.base_currency):
            raise CurrencyMismatch(
                f"Cannot quote {currency_amount.currency} with a {self.base_currency} price"
            )
        result = Fraction.multiply(self, currency_amount)
        return CurrencyAmount.from_fractional_amount(
            self.quote_currency, result.numerator, result.denominator
        )

    @property
    def adjusted_for_decimals(self) -> Fraction:
        return Fraction.multiply(self, self.scalar)

    def to_significant(
        self, significant_digits: int = 6, rounding: Rounding = Rounding.ROUND_HALF_UP
    ) -> str:
        return self.adjusted_for_decimals.to_significant(significant_digits, rounding)

    def to_fixed(self, decimal_places: int = 4, rounding: Rounding = Rounding.ROUND_HALF_UP) -> str:
        return self.adjusted_for_decimals.to_fixed(decimal_places, rounding)


__all__ = ["Rounding", "Fraction", "Percent", "CurrencyAmount", "Price"]
