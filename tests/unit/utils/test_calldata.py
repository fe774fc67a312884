"""Tests for hex encoding of call parameters."""

import pytest

from univ3.utils import MethodParameters, to_hex


class TestToHex:
    """Tests for to_hex."""

    def test_zero(self):
        assert to_hex(0) == "0x00"

    def test_pads_to_even_length(self):
        assert to_hex(1) == "0x01"
        assert to_hex(0x123) == "0x0123"

    def test_even_length_unchanged(self):
        assert to_hex(0xABCD) == "0xabcd"

    def test_negative(self):
        with pytest.raises(ValueError):
            to_hex(-1)


class TestMethodParameters:
    """Tests for MethodParameters."""

    def test_defaults_to_zero_value(self):
        params = MethodParameters(calldata=b"\x12\x34")
        assert params.value == 0
        assert params.value_hex == "0x00"
        assert params.calldata_hex == "0x1234"

    def test_value_hex(self):
        assert MethodParameters(calldata=b"", value=10**18).value_hex == "0x0de0b6b3a7640000"
