"""Uniswap V3 SDK - off-chain pool, position and trade modeling."""

from univ3.config import DEFAULT_CONFIG, SDKConfig, load_config_from_env
from univ3.constants import FeeAmount
from univ3.entities import Pool, Position, Route, Tick, TickListDataProvider, Trade
from univ3.models import CurrencyAmount, Fraction, Percent, Price, Token, TradeType
from univ3.routing import BestTradeOptions, best_trade_exact_in, best_trade_exact_out

__version__ = "0.1.0"
__all__ = [
    "BestTradeOptions",
    "CurrencyAmount",
    "DEFAULT_CONFIG",
    "FeeAmount",
    "Fraction",
    "Percent",
    "Pool",
    "Position",
    "Price",
    "Route",
    "SDKConfig",
    "Tick",
    "TickListDataProvider",
    "Token",
    "Trade",
    "TradeType",
    "best_trade_exact_in",
    "best_trade_exact_out",
    "load_config_from_env",
    "__version__",
]
