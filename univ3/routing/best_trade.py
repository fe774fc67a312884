"""Bounded depth-first search for the best single-route trades.

Given a set of pools, the search walks every chain of pools (up to a hop
limit) that connects the input token to the output token, simulates the
swap through it, and keeps the best few trades in a sorted buffer.

Routes are linear: splitting an amount across routes is not considered,
so a better aggregate execution may exist.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence

import structlog

from univ3.entities.pool import Pool
from univ3.entities.route import Route
from univ3.entities.trade import Trade
from univ3.errors import (
    InputCurrencyMismatch,
    InvalidMaxHops,
    InvalidMaxSize,
    InvalidRecursion,
    MaxSizeExceeded,
    NoPools,
    OutputCurrencyMismatch,
    SwapError,
)
from univ3.models.fractions import CurrencyAmount
from univ3.models.token import Token
from univ3.models.types import TradeType

from .types import BestTradeOptions

logger = structlog.get_logger()

TradeComparator = Callable[[Trade, Trade], int]


def trade_comparator(a: Trade, b: Trade) -> int:
    """Order two trades between the same currencies, best first.

    More output ranks first; at equal output, less input; at equal amounts,
    fewer tokens along the routes, since each hop costs gas.

    Raises:
        InputCurrencyMismatch: If the trades spend different currencies
        OutputCurrencyMismatch: If the trades buy different currencies
    """
    if not a.input_amount.currency.equals(b.input_amount.currency):
        raise InputCurrencyMismatch("Cannot compare trades with different input currencies")
    if not a.output_amount.currency.equals(b.output_amount.currency):
        raise OutputCurrencyMismatch("Cannot compare trades with different output currencies")

    if a.output_amount.equal_to(b.output_amount):
        if a.input_amount.equal_to(b.input_amount):
            a_hops = sum(len(swap.route.token_path) for swap in a.swaps)
            b_hops = sum(len(swap.route.token_path) for swap in b.swaps)
            return a_hops - b_hops
        return -1 if a.input_amount.less_than(b.input_amount) else 1
    return 1 if a.output_amount.less_than(b.output_amount) else -1


def sorted_insert(
    items: Sequence[Trade],
    add: Trade,
    max_size: int,
    comparator: TradeComparator = trade_comparator,
) -> list[Trade]:
    """Insert a trade into a sorted buffer of at most max_size trades.

    Returns a new list; items is not modified. When the buffer is full the
    worst trade is evicted, or the buffer is returned unchanged if add does
    not beat it.

    Raises:
        InvalidMaxSize: If max_size is not positive
        MaxSizeExceeded: If items already holds more than max_size trades
    """
    if max_size <= 0:
        raise InvalidMaxSize(f"max_size must be positive, got {max_size}")
    if len(items) > max_size:
        raise MaxSizeExceeded(f"{len(items)} items exceed max_size {max_size}")

    is_full = len(items) == max_size
    if is_full and comparator(items[-1], add) <= 0:
        return list(items)

    # Insert after every item that is not worse than add
    index = len(items)
    for i, item in enumerate(items):
        if comparator(item, add) > 0:
            index = i
            break

    result = [*items[:index], add, *items[index:]]
    return result[:max_size]


def best_trade_exact_in(
    pools: Sequence[Pool],
    currency_amount_in: CurrencyAmount,
    token_in: Token,
    token_out: Token,
    options: BestTradeOptions | None = None,
    current_pools: Sequence[Pool] = (),
    next_amount_in: CurrencyAmount | None = None,
    best_trades: Sequence[Trade] = (),
) -> list[Trade]:
    """Find the best exact input trades from token_in to token_out.

    Args:
        pools: Candidate pools
        currency_amount_in: Exact amount of token_in to spend
        token_in: Token being sold
        token_out: Token being bought
        options: Result count and hop limit (defaults to DEFAULT_CONFIG values)
        current_pools: Pools already on the path when continuing a search
        next_amount_in: Amount arriving at the end of current_pools
        best_trades: Trades already found, sorted best first

    Returns:
        Up to options.max_num_results trades, best first

    Raises:
        NoPools: If pools is empty
        InvalidMaxHops: If options.max_hops is not positive
        InvalidRecursion: If next_amount_in differs from currency_amount_in
            without any current_pools
    """
    options = _check_search_args(pools, options)
    if next_amount_in is None:
        next_amount_in = currency_amount_in
    if not (currency_amount_in.equal_to(next_amount_in) or current_pools):
        raise InvalidRecursion("next_amount_in given without current_pools")

    trades = _search_exact_in(
        pools,
        frozenset(),
        currency_amount_in,
        token_in,
        token_out,
        options,
        tuple(current_pools),
        next_amount_in,
        list(best_trades),
    )
    logger.debug(
        "best_trade_search_complete",
        trade_type=TradeType.EXACT_INPUT.value,
        token_in=token_in.address,
        token_out=token_out.address,
        num_pools=len(pools),
        num_trades=len(trades),
    )
    return trades


def best_trade_exact_out(
    pools: Sequence[Pool],
    token_in: Token,
    currency_amount_out: CurrencyAmount,
    token_out: Token,
    options: BestTradeOptions | None = None,
    current_pools: Sequence[Pool] = (),
    next_amount_out: CurrencyAmount | None = None,
    best_trades: Sequence[Trade] = (),
) -> list[Trade]:
    """Find the best exact output trades from token_in to token_out.

    The search starts from the output side and walks backwards, so
    current_pools holds the tail of the route.

    Args:
        pools: Candidate pools
        token_in: Token being sold
        currency_amount_out: Exact amount of token_out to receive
        token_out: Token being bought
        options: Result count and hop limit (defaults to DEFAULT_CONFIG values)
        current_pools: Pools already at the end of the path when continuing a search
        next_amount_out: Amount required at the start of current_pools
        best_trades: Trades already found, sorted best first

    Returns:
        Up to options.max_num_results trades, best first

    Raises:
        NoPools: If pools is empty
        InvalidMaxHops: If options.max_hops is not positive
        InvalidRecursion: If next_amount_out differs from currency_amount_out
            without any current_pools
    """
    options = _check_search_args(pools, options)
    if next_amount_out is None:
        next_amount_out = currency_amount_out
    if not (currency_amount_out.equal_to(next_amount_out) or current_pools):
        raise InvalidRecursion("next_amount_out given without current_pools")

    trades = _search_exact_out(
        pools,
        frozenset(),
        token_in,
        currency_amount_out,
        token_out,
        options,
        tuple(current_pools),
        next_amount_out,
        list(best_trades),
    )
    logger.debug(
        "best_trade_search_complete",
        trade_type=TradeType.EXACT_OUTPUT.value,
        token_in=token_in.address,
        token_out=token_out.address,
        num_pools=len(pools),
        num_trades=len(trades),
    )
    return trades


def _check_search_args(
    pools: Sequence[Pool], options: BestTradeOptions | None
) -> BestTradeOptions:
    if not pools:
        raise NoPools("No pools to search")
    if options is None:
        options = BestTradeOptions.from_config()
    if options.max_hops <= 0:
        raise InvalidMaxHops(f"max_hops must be positive, got {options.max_hops}")
    return options


def _search_exact_in(
    pools: Sequence[Pool],
    excluded: frozenset[int],
    currency_amount_in: CurrencyAmount,
    token_in: Token,
    token_out: Token,
    options: BestTradeOptions,
    current_pools: tuple[Pool, ...],
    amount_in: CurrencyAmount,
    best_trades: list[Trade],
) -> list[Trade]:
    remaining = len(pools) - len(excluded)

    for i, pool in enumerate(pools):
        if i in excluded or not pool.involves_token(amount_in.currency):
            continue

        try:
            amount_out, _ = pool.get_output_amount(amount_in)
        except SwapError as err:
            logger.debug("best_trade_pool_skipped", pool=repr(pool), error=str(err))
            continue

        if amount_out.currency.equals(token_out):
            route = Route([*current_pools, pool], token_in, token_out)
            trade = Trade.from_route(route, currency_amount_in, TradeType.EXACT_INPUT)
            logger.debug(
                "best_trade_candidate",
                hops=len(route.pools),
                amount_out=trade.output_amount.quotient,
            )
            best_trades = sorted_insert(best_trades, trade, options.max_num_results)
        elif options.max_hops > 1 and remaining > 1:
            best_trades = _search_exact_in(
                pools,
                excluded | {i},
                currency_amount_in,
                token_in,
                token_out,
                options.with_one_less_hop(),
                (*current_pools, pool),
                amount_out,
                best_trades,
            )

    return best_trades


def _search_exact_out(
    pools: Sequence[Pool],
    excluded: frozenset[int],
    token_in: Token,
    currency_amount_out: CurrencyAmount,
    token_out: Token,
    options: BestTradeOptions,
    current_pools: tuple[Pool, ...],
    amount_out: CurrencyAmount,
    best_trades: list[Trade],
) -> list[Trade]:
    remaining = len(pools) - len(excluded)

    for i, pool in enumerate(pools):
        if i in excluded or not pool.involves_token(amount_out.currency):
            continue

        try:
            amount_in, _ = pool.get_input_amount(amount_out)
        except SwapError as err:
            logger.debug("best_trade_pool_skipped", pool=repr(pool), error=str(err))
            continue

        if amount_in.currency.equals(token_in):
            route = Route([pool, *current_pools], token_in, token_out)
            trade = Trade.from_route(route, currency_amount_out, TradeType.EXACT_OUTPUT)
            logger.debug(
                "best_trade_candidate",
                hops=len(route.pools),
                amount_in=trade.input_amount.quotient,
            )
            best_trades = sorted_insert(best_trades, trade, options.max_num_results)
        elif options.max_hops > 1 and remaining > 1:
            best_trades = _search_exact_out(
                pools,
                excluded | {i},
                token_in,
                currency_amount_out,
                token_out,
                options.with_one_less_hop(),
                (pool, *current_pools),
                amount_in,
                best_trades,
            )

    return best_trades


__all__ = [
    "TradeComparator",
    "trade_comparator",
    "sorted_insert",
    "best_trade_exact_in",
    "best_trade_exact_out",
]
