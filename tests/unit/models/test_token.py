"""Tests for the Token model."""

import pydantic
import pytest

from univ3.errors import ChainMismatch, SameToken
from univ3.models import Token
from tests.helpers import TOKEN0, TOKEN0_OTHER_CHAIN, TOKEN1, USDC


class TestToken:
    """Tests for Token validation and identity."""

    def test_address_normalized_to_lowercase(self):
        token = Token(chain_id=1, address="0xA0B86991C6218B36C1D19D4A2E9EB0CE3606EB48", decimals=6)
        assert token.address == "0xa0b86991c6218b36c1d19d4a2e9eb0ce3606eb48"

    def test_equality_ignores_metadata(self):
        token = Token(
            chain_id=1,
            address="0xa0b86991c6218b36c1d19d4a2e9eb0ce3606eb48",
            decimals=6,
            symbol="OTHER",
        )
        assert token.equals(USDC)
        assert token == USDC
        assert hash(token) == hash(USDC)

    def test_different_chain_not_equal(self):
        assert not TOKEN0.equals(TOKEN0_OTHER_CHAIN)

    def test_not_equal_to_other_types(self):
        assert not TOKEN0.equals(TOKEN0.address)

    def test_invalid_address(self):
        with pytest.raises(pydantic.ValidationError):
            Token(chain_id=1, address="0x1234", decimals=18)

    def test_invalid_decimals(self):
        with pytest.raises(pydantic.ValidationError):
            Token(chain_id=1, address="0x" + "11" * 20, decimals=256)

    def test_invalid_chain_id(self):
        with pytest.raises(pydantic.ValidationError):
            Token(chain_id=0, address="0x" + "11" * 20, decimals=18)

    def test_frozen(self):
        with pytest.raises(pydantic.ValidationError):
            TOKEN0.decimals = 6

    def test_str_prefers_symbol(self):
        assert str(USDC) == "USDC"
        assert str(Token(chain_id=1, address="0x" + "11" * 20, decimals=18)) == "0x" + "11" * 20


class TestSortsBefore:
    """Tests for Token.sorts_before."""

    def test_numeric_order(self):
        assert TOKEN0.sorts_before(TOKEN1)
        assert not TOKEN1.sorts_before(TOKEN0)

    def test_case_insensitive(self):
        lower = Token(chain_id=1, address="0x" + "aa" * 20, decimals=18)
        upper = Token(chain_id=1, address="0x" + "BB" * 20, decimals=18)
        assert lower.sorts_before(upper)

    def test_chain_mismatch(self):
        with pytest.raises(ChainMismatch):
            TOKEN0.sorts_before(TOKEN0_OTHER_CHAIN.model_copy(update={"address": TOKEN1.address}))

    def test_same_token(self):
        with pytest.raises(SameToken):
            TOKEN0.sorts_before(TOKEN0)
