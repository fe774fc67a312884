"""Pool address derivation and call parameter helpers."""

from univ3.utils.calldata import MethodParameters, to_hex
from univ3.utils.pool_address import compute_pool_address, compute_pool_salt

__all__ = ["MethodParameters", "to_hex", "compute_pool_address", "compute_pool_salt"]
