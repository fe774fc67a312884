"""Shape of the transaction parameters built from pools, positions and trades."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class MethodParameters:
    """Calldata and native value for a contract call.

    Produced by calldata builders from Position and Trade values; this
    package only defines the shape.
    """

    calldata: bytes
    value: int = 0

    @property
    def value_hex(self) -> str:
        return to_hex(self.value)

    @property
    def calldata_hex(self) -> str:
        return "0x" + self.calldata.hex()


def to_hex(value: int) -> str:
    """Encode a non-negative integer as an even-length 0x-prefixed hex string."""
    if value < 0:
        raise ValueError(f"Cannot hex-encode negative value {value}")
    digits = format(value, "x")
    if len(digits) % 2:
        digits = "0" + digits
    return "0x" + digits


__all__ = ["MethodParameters", "to_hex"]
