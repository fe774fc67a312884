"""Error classes for the Uniswap V3 model.

Every error is a deterministic local validation failure. Nothing here is
retryable; callers get the error as soon as an invariant is violated.
"""


class UniswapV3Error(Exception):
    """Base error for all Uniswap V3 model operations."""

    pass


# =============================================================================
# Numeric domain errors
# =============================================================================


class MathError(UniswapV3Error, ArithmeticError):
    """A fixed-point math primitive received an out-of-domain value."""

    pass


class InvalidTick(MathError):
    """Tick is outside [MIN_TICK, MAX_TICK]."""

    pass


class InvalidSqrtRatio(MathError):
    """Sqrt ratio is outside [MIN_SQRT_RATIO, MAX_SQRT_RATIO)."""

    pass


class InvalidInput(MathError):
    """Input must be in (0, MAX_UINT256]."""

    pass


class SqrtPriceMathError(MathError):
    """Base error for next-sqrt-price computations."""

    pass


class InvalidPrice(SqrtPriceMathError):
    """Sqrt price must be positive."""

    pass


class InvalidLiquidity(SqrtPriceMathError):
    """Liquidity must be positive."""

    pass


class PriceOverflow(SqrtPriceMathError):
    """The next sqrt price would not fit the uint160 domain."""

    pass


# =============================================================================
# Construction validation errors
# =============================================================================


class ValidationError(UniswapV3Error, ValueError):
    """An entity was constructed from inconsistent arguments."""

    pass


class FeeTooHigh(ValidationError):
    """Pool fee must be below FEE_MAX."""

    pass


class InvalidSqrtRatioX96(ValidationError):
    """Pool sqrt price is not within the bracket of its current tick."""

    pass


class SameToken(ValidationError):
    """Both pool tokens are the same token."""

    pass


class ChainMismatch(ValidationError):
    """Tokens live on different chains."""

    pass


class TickOrder(ValidationError):
    """Position lower tick must be below its upper tick."""

    pass


class TickLower(ValidationError):
    """Position lower tick is out of range or not a multiple of the tick spacing."""

    pass


class TickUpper(ValidationError):
    """Position upper tick is out of range or not a multiple of the tick spacing."""

    pass


class ZeroTickSpacing(ValidationError):
    """Tick spacing must be greater than zero."""

    pass


class InvalidTickSpacing(ValidationError):
    """A tick index is not a multiple of the tick spacing."""

    pass


class ZeroNet(ValidationError):
    """Tick liquidity net deltas must sum to zero."""

    pass


class Sorted(ValidationError):
    """Ticks must be sorted by index."""

    pass


class RouteNoPools(ValidationError):
    """A route needs at least one pool."""

    pass


class AllOnSameChain(ValidationError):
    """All pools of a route must be on the same chain."""

    pass


class InputNotInvolved(ValidationError):
    """Route input token is not in the first pool."""

    pass


class OutputNotInvolved(ValidationError):
    """Route output token is not in the last pool."""

    pass


class PathNotContinuous(ValidationError):
    """A route hop does not share a token with the previous hop."""

    pass


class DuplicatePools(ValidationError):
    """The same pool address appears more than once in a trade."""

    pass


class InputCurrencyMismatch(ValidationError):
    """Swaps of a trade disagree on the input currency."""

    pass


class OutputCurrencyMismatch(ValidationError):
    """Swaps of a trade disagree on the output currency."""

    pass


class InvalidAmountForRoute(ValidationError):
    """Amount currency does not match the route side required by the trade type."""

    pass


class TradeHasMultipleRoutes(ValidationError):
    """A single route was requested from a multi-route trade."""

    pass


class InvalidSlippageTolerance(ValidationError):
    """Slippage tolerance must not be negative."""

    pass


class CurrencyMismatch(ValidationError):
    """Arithmetic on amounts or prices of incompatible currencies."""

    pass


class AmountOverflow(ValidationError):
    """Currency amount quotient exceeds MAX_UINT256."""

    pass


# =============================================================================
# Swap errors
# =============================================================================


class SwapError(UniswapV3Error):
    """A swap simulation could not run against the pool state."""

    pass


class SqrtPriceLimitX96TooLow(SwapError):
    """Price limit is at or below the allowed bound for the swap direction."""

    pass


class SqrtPriceLimitX96TooHigh(SwapError):
    """Price limit is at or above the allowed bound for the swap direction."""

    pass


class TokenNotInvolved(SwapError, ValueError):
    """Token is not one of the pool's two tokens."""

    pass


# =============================================================================
# Tick data errors
# =============================================================================


class TickListError(UniswapV3Error, LookupError):
    """Tick list lookup failed."""

    pass


class TickListEmpty(TickListError):
    """The tick list has no entries."""

    pass


class TickNotFound(TickListError):
    """The requested tick index is not initialized."""

    pass


class BelowSmallest(TickListError):
    """Tick is below the smallest initialized tick."""

    pass


class AtOrAboveLargest(TickListError):
    """Tick is at or above the largest initialized tick."""

    pass


class NoTickData(TickListError):
    """The pool was built without tick data."""

    pass


# =============================================================================
# Best-trade search errors
# =============================================================================


class SearchError(UniswapV3Error):
    """Best-trade search was called with invalid parameters."""

    pass


class NoPools(SearchError):
    """No pools were given to search."""

    pass


class InvalidMaxHops(SearchError):
    """max_hops must be positive."""

    pass


class InvalidRecursion(SearchError):
    """Recursive call without a current path changed the starting amount."""

    pass


class InvalidMaxSize(SearchError):
    """Result buffer capacity must be positive."""

    pass


class MaxSizeExceeded(SearchError):
    """Result buffer holds more entries than its capacity."""

    pass


__all__ = [
    "UniswapV3Error",
    # Math
    "MathError",
    "InvalidTick",
    "InvalidSqrtRatio",
    "InvalidInput",
    "SqrtPriceMathError",
    "InvalidPrice",
    "InvalidLiquidity",
    "PriceOverflow",
    # Validation
    "ValidationError",
    "FeeTooHigh",
    "InvalidSqrtRatioX96",
    "SameToken",
    "ChainMismatch",
    "TickOrder",
    "TickLower",
    "TickUpper",
    "ZeroTickSpacing",
    "InvalidTickSpacing",
    "ZeroNet",
    "Sorted",
    "RouteNoPools",
    "AllOnSameChain",
    "InputNotInvolved",
    "OutputNotInvolved",
    "PathNotContinuous",
    "DuplicatePools",
    "InputCurrencyMismatch",
    "OutputCurrencyMismatch",
    "InvalidAmountForRoute",
    "TradeHasMultipleRoutes",
    "InvalidSlippageTolerance",
    "CurrencyMismatch",
    "AmountOverflow",
    # Swap
    "SwapError",
    "SqrtPriceLimitX96TooLow",
    "SqrtPriceLimitX96TooHigh",
    "TokenNotInvolved",
    # Tick data
    "TickListError",
    "TickListEmpty",
    "TickNotFound",
    "BelowSmallest",
    "AtOrAboveLargest",
    "NoTickData",
    # Search
    "SearchError",
    "NoPools",
    "InvalidMaxHops",
    "InvalidRecursion",
    "InvalidMaxSize",
    "MaxSizeExceeded",
]
