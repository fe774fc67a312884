"""Best-trade search over a set of pools."""

from univ3.routing.best_trade import (
    best_trade_exact_in,
    best_trade_exact_out,
    sorted_insert,
    trade_comparator,
)
from univ3.routing.types import BestTradeOptions

__all__ = [
    "BestTradeOptions",
    "best_trade_exact_in",
    "best_trade_exact_out",
    "sorted_insert",
    "trade_comparator",
]
