"""Pool, position, route and trade entities.

Module structure:
- tick.py: Tick and the TickDataProvider protocol
- tick_list.py: Sorted tick list queries and TickListDataProvider
- pool.py: Pool snapshot and swap simulation
- position.py: Liquidity positions and mint/burn amounts
- route.py: Chains of pools between two tokens
- trade.py: Single and multi-route trades
"""

from univ3.entities.pool import Pool, SwapState
from univ3.entities.position import Position
from univ3.entities.route import Route
from univ3.entities.tick import NO_TICK_DATA_PROVIDER, NoTickDataProvider, Tick, TickDataProvider
from univ3.entities.tick_list import TickListDataProvider
from univ3.entities.trade import Swap, Trade

__all__ = [
    "NO_TICK_DATA_PROVIDER",
    "NoTickDataProvider",
    "Pool",
    "Position",
    "Route",
    "Swap",
    "SwapState",
    "Tick",
    "TickDataProvider",
    "TickListDataProvider",
    "Trade",
]
