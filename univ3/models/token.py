"""ERC-20 token model."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from univ3.errors import ChainMismatch, SameToken

from .types import Address


class Token(BaseModel):
    """An ERC-20 token on a specific chain.

    Two tokens are equal when they share chain and address; symbol, name
    and decimals are descriptive only.
    """

    model_config = ConfigDict(frozen=True)

    chain_id: int = Field(ge=1)
    address: Address
    # Stored as uint8 on-chain
    decimals: int = Field(ge=0, le=255)
    symbol: str | None = None
    name: str | None = None

    def equals(self, other: object) -> bool:
        """Check whether other is the same token on the same chain."""
        if not isinstance(other, Token):
            return False
        return self.chain_id == other.chain_id and self.address == other.address

    def __eq__(self, other: object) -> bool:
        return self.equals(other)

    def __hash__(self) -> int:
        return hash((self.chain_id, self.address))

    def sorts_before(self, other: Token) -> bool:
        """Return True if this token's address sorts before the other's.

        Raises:
            ChainMismatch: If the tokens are on different chains
            SameToken: If both tokens have the same address
        """
        if self.chain_id != other.chain_id:
            raise ChainMismatch(f"Tokens on chains {self.chain_id} and {other.chain_id}")
        if self.address == other.address:
            raise SameToken(f"Token {self.address} compared with itself")
        return int(self.address, 16) < int(other.address, 16)

    def __str__(self) -> str:
        return self.symbol or self.address


__all__ = ["Token"]
