"""Test helpers module for shared test utilities.

This module consolidates common test utilities to reduce duplication:
- constants: Token fixtures
- factories: Pool factory functions
"""

from tests.helpers.constants import (
    DAI,
    TOKEN0,
    TOKEN0_OTHER_CHAIN,
    TOKEN1,
    TOKEN2,
    TOKEN3,
    USDC,
    WETH,
)
from tests.helpers.factories import make_pool, v2_style_pool

__all__ = [
    # Constants
    "DAI",
    "USDC",
    "WETH",
    "TOKEN0",
    "TOKEN1",
    "TOKEN2",
    "TOKEN3",
    "TOKEN0_OTHER_CHAIN",
    # Factories
    "make_pool",
    "v2_style_pool",
]
