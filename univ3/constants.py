"""Uniswap V3 protocol constants: numeric domain bounds, fee tiers and deployment data."""

from enum import IntEnum

# =============================================================================
# Fixed-point and integer bounds (matching the Solidity contracts exactly)
# =============================================================================

Q96 = 2**96
Q192 = Q96**2

MAX_UINT160 = 2**160 - 1
MAX_UINT256 = 2**256 - 1

# Tick domain, log base 1.0001 of 2**-128 and 2**128
MIN_TICK = -887272
MAX_TICK = -MIN_TICK

# get_sqrt_ratio_at_tick(MIN_TICK) and get_sqrt_ratio_at_tick(MAX_TICK)
MIN_SQRT_RATIO = 4295128739
MAX_SQRT_RATIO = 1461446703485210103287273052203988822378723970342


# =============================================================================
# Fee tiers
# =============================================================================


class FeeAmount(IntEnum):
    """Factory-enabled fee tiers, in hundredths of a basis point."""

    LOWEST = 100  # 0.01%
    LOW = 500  # 0.05%
    MEDIUM = 3000  # 0.30%
    HIGH = 10000  # 1.00%


# Exclusive upper bound for any pool fee (100%)
FEE_MAX = 1_000_000

# Tick spacing per fee tier (factory defaults)
TICK_SPACINGS: dict[int, int] = {
    FeeAmount.LOWEST: 1,
    FeeAmount.LOW: 10,
    FeeAmount.MEDIUM: 60,
    FeeAmount.HIGH: 200,
}


# =============================================================================
# Deployment data (used only for deterministic pool addresses)
# =============================================================================

FACTORY_ADDRESS = "0x1F98431c8aD98523631AE4a59f267346ea31F984"
POOL_INIT_CODE_HASH = "0xe34f199b19b2b4f47f68442619d555527d244f78a3297ea89325f843f87b8b54"
POOL_INIT_CODE_HASH_OPTIMISM = (
    "0x0c231002d0970d2126e7e00ce88c3b0e5ec8e48dac71478d56245c34ea2f9447"
)

__all__ = [
    "Q96",
    "Q192",
    "MAX_UINT160",
    "MAX_UINT256",
    "MIN_TICK",
    "MAX_TICK",
    "MIN_SQRT_RATIO",
    "MAX_SQRT_RATIO",
    "FeeAmount",
    "FEE_MAX",
    "TICK_SPACINGS",
    "FACTORY_ADDRESS",
    "POOL_INIT_CODE_HASH",
    "POOL_INIT_CODE_HASH_OPTIMISM",
]
