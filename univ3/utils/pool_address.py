"""Deterministic CREATE2 pool address derivation."""

from __future__ import annotations

from typing import TYPE_CHECKING

from eth_abi import encode  # type: ignore[attr-defined]
from web3 import Web3

from univ3.config import DEFAULT_CONFIG

if TYPE_CHECKING:
    from univ3.models.token import Token


def _hex_to_bytes(value: str) -> bytes:
    if value.startswith(("0x", "0X")):
        value = value[2:]
    return bytes.fromhex(value)


def compute_pool_salt(token0: Token, token1: Token, fee: int) -> bytes:
    """keccak256(abi.encode(token0, token1, fee)) for already-sorted tokens."""
    encoded = encode(["address", "address", "uint24"], [token0.address, token1.address, int(fee)])
    return bytes(Web3.keccak(encoded))


def compute_pool_address(
    factory_address: str,
    token_a: Token,
    token_b: Token,
    fee: int,
    init_code_hash: str | None = None,
) -> str:
    """Compute the address a V3 factory deploys a pool to.

    Args:
        factory_address: V3 factory address
        token_a: One pool token, in either order
        token_b: The other pool token
        fee: Fee tier of the pool
        init_code_hash: Pool init code hash override (mainnet hash if None)

    Returns:
        EIP-55 checksummed pool address
    """
    if token_a.sorts_before(token_b):
        token0, token1 = token_a, token_b
    else:
        token0, token1 = token_b, token_a

    salt = compute_pool_salt(token0, token1, fee)
    code_hash = init_code_hash or DEFAULT_CONFIG.init_code_hash
    digest = Web3.keccak(
        b"\xff" + _hex_to_bytes(factory_address) + salt + _hex_to_bytes(code_hash)
    )
    return Web3.to_checksum_address("0x" + bytes(digest)[12:].hex())


__all__ = ["compute_pool_salt", "compute_pool_address"]
