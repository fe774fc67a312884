"""Shared type definitions for tokens, amounts and trades."""

from enum import Enum
from typing import Annotated, Any

from pydantic import BeforeValidator, Field


def normalize_address(address: Any) -> Any:
    """Normalize an Ethereum address to lowercase with a 0x prefix.

    Non-string values are returned unchanged so pydantic reports the type error.
    """
    if not isinstance(address, str):
        return address
    addr = address.lower()
    if not addr.startswith("0x"):
        addr = "0x" + addr
    return addr


# Ethereum address (40 hex chars after 0x prefix), normalized to lowercase
Address = Annotated[
    str,
    BeforeValidator(normalize_address),
    Field(pattern=r"^0x[a-f0-9]{40}$"),
]


class TradeType(str, Enum):
    """Which side of a trade is fixed."""

    EXACT_INPUT = "exact_input"
    EXACT_OUTPUT = "exact_output"


__all__ = ["Address", "TradeType", "normalize_address"]
