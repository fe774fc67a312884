"""Tests for the integer rounding primitives."""

import pytest

from univ3.constants import MAX_UINT256, Q96
from univ3.errors import InvalidInput
from univ3.math import (
    add_delta,
    div_rounding_up,
    most_significant_bit,
    mul_div,
    mul_div_rounding_up,
)


class TestMulDiv:
    """Tests for mul_div and mul_div_rounding_up."""

    def test_exact(self):
        assert mul_div(Q96, 3, Q96) == 3
        assert mul_div_rounding_up(Q96, 3, Q96) == 3

    def test_rounds_down(self):
        assert mul_div(7, 1, 2) == 3

    def test_rounds_up(self):
        assert mul_div_rounding_up(7, 1, 2) == 4

    def test_intermediate_exceeds_uint256(self):
        """Products wider than 256 bits are handled without loss."""
        assert mul_div(MAX_UINT256, MAX_UINT256, MAX_UINT256) == MAX_UINT256
        assert mul_div_rounding_up(MAX_UINT256, MAX_UINT256, MAX_UINT256) == MAX_UINT256


class TestDivRoundingUp:
    """Tests for div_rounding_up."""

    def test_exact(self):
        assert div_rounding_up(10, 5) == 2

    def test_remainder(self):
        assert div_rounding_up(11, 5) == 3

    def test_zero(self):
        assert div_rounding_up(0, 5) == 0


class TestAddDelta:
    """Tests for add_delta."""

    def test_positive(self):
        assert add_delta(1, 2) == 3

    def test_negative(self):
        assert add_delta(5, -2) == 3

    def test_to_zero(self):
        assert add_delta(5, -5) == 0


class TestMostSignificantBit:
    """Tests for most_significant_bit."""

    def test_rejects_zero(self):
        with pytest.raises(InvalidInput):
            most_significant_bit(0)

    def test_rejects_above_uint256(self):
        with pytest.raises(InvalidInput):
            most_significant_bit(MAX_UINT256 + 1)

    def test_one(self):
        assert most_significant_bit(1) == 0

    def test_two(self):
        assert most_significant_bit(2) == 1

    @pytest.mark.parametrize("power", [0, 1, 7, 64, 127, 128, 200, 255])
    def test_powers_of_two(self, power):
        assert most_significant_bit(2**power) == power

    def test_max_uint256(self):
        assert most_significant_bit(MAX_UINT256) == 255

    def test_all_bits_below_power(self):
        assert most_significant_bit(2**100 - 1) == 99
