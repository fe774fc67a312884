"""Type definitions for the best-trade search."""

from __future__ import annotations

from dataclasses import dataclass

from univ3.config import DEFAULT_CONFIG, SDKConfig


@dataclass(frozen=True)
class BestTradeOptions:
    """Bounds for the best-trade search.

    Attributes:
        max_num_results: How many trades to keep
        max_hops: Maximum number of pools in a returned route
    """

    max_num_results: int = 3
    max_hops: int = 3

    @classmethod
    def from_config(cls, config: SDKConfig = DEFAULT_CONFIG) -> BestTradeOptions:
        return cls(max_num_results=config.max_num_results, max_hops=config.max_hops)

    def with_one_less_hop(self) -> BestTradeOptions:
        return BestTradeOptions(max_num_results=self.max_num_results, max_hops=self.max_hops - 1)


__all__ = ["BestTradeOptions"]
