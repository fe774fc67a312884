"""Runtime configuration for pool address derivation and best-trade search."""

import os
from dataclasses import dataclass

from univ3.constants import FACTORY_ADDRESS, POOL_INIT_CODE_HASH


@dataclass(frozen=True)
class SDKConfig:
    """Centralized configuration for values callers may need to override.

    Numeric protocol constants are fixed in univ3.constants; this only holds
    deployment data and search defaults that differ between environments.

    Attributes:
        factory_address: V3 factory used in CREATE2 pool address derivation
        init_code_hash: Pool init code hash (mainnet by default, see
            POOL_INIT_CODE_HASH_OPTIMISM for the L2 deployment)
        max_num_results: Default size of the best-trade result buffer
        max_hops: Default maximum number of pools in a best-trade route
    """

    factory_address: str = FACTORY_ADDRESS
    init_code_hash: str = POOL_INIT_CODE_HASH

    # Best-trade search defaults
    max_num_results: int = 3
    max_hops: int = 3


def load_config_from_env() -> SDKConfig:
    """Build a config from environment variables with defaults.

    Configuration via environment variables:
    - UNIV3_FACTORY_ADDRESS: Factory address (default: mainnet factory)
    - UNIV3_INIT_CODE_HASH: Pool init code hash (default: mainnet hash)
    - UNIV3_MAX_NUM_RESULTS: Best-trade result count (default: 3)
    - UNIV3_MAX_HOPS: Best-trade hop limit (default: 3)
    """
    return SDKConfig(
        factory_address=os.environ.get("UNIV3_FACTORY_ADDRESS", FACTORY_ADDRESS),
        init_code_hash=os.environ.get("UNIV3_INIT_CODE_HASH", POOL_INIT_CODE_HASH),
        max_num_results=int(os.environ.get("UNIV3_MAX_NUM_RESULTS", "3")),
        max_hops=int(os.environ.get("UNIV3_MAX_HOPS", "3")),
    )


# Default configuration instance
DEFAULT_CONFIG = SDKConfig()

__all__ = ["SDKConfig", "DEFAULT_CONFIG", "load_config_from_env"]
