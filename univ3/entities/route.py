"""Routes: ordered chains of pools from an input token to an output token."""

from __future__ import annotations

from collections.abc import Sequence

from univ3.errors import (
    AllOnSameChain,
    InputNotInvolved,
    OutputNotInvolved,
    PathNotContinuous,
    RouteNoPools,
)
from univ3.models.fractions import Price
from univ3.models.token import Token

from .pool import Pool


class Route:
    """A list of pools a swap passes through, in order.

    Attributes:
        pools: Pools in swap order
        token_path: Input token followed by the token received from each pool
        input: Input token
        output: Output token
        mid_price: Spot price of the route, output per input
    """

    __slots__ = ("pools", "token_path", "input", "output", "mid_price")

    def __init__(self, pools: Sequence[Pool], input: Token, output: Token | None = None) -> None:
        """Create a route.

        Args:
            pools: Pools ordered the way the swap will traverse them
            input: Input token
            output: Output token (defaults to the end of the token path)

        Raises:
            RouteNoPools: If pools is empty
            AllOnSameChain: If pools span multiple chains
            InputNotInvolved: If input is not in the first pool
            OutputNotInvolved: If output is not in the last pool
            PathNotContinuous: If consecutive pools do not share a token
        """
        if not pools:
            raise RouteNoPools("Route must have at least one pool")

        chain_id = pools[0].chain_id
        if any(pool.chain_id != chain_id for pool in pools):
            raise AllOnSameChain("All pools must be on the same chain")

        if not pools[0].involves_token(input):
            raise InputNotInvolved(f"Input {input} not in first pool")
        if output is not None and not pools[-1].involves_token(output):
            raise OutputNotInvolved(f"Output {output} not in last pool")

        token_path = [input]
        for pool in pools:
            current = token_path[-1]
            if current.equals(pool.token0):
                token_path.append(pool.token1)
            elif current.equals(pool.token1):
                token_path.append(pool.token0)
            else:
                raise PathNotContinuous(f"Token {current} not in pool {pool!r}")

        self.pools: tuple[Pool, ...] = tuple(pools)
        self.token_path: tuple[Token, ...] = tuple(token_path)
        self.input = input
        self.output = output if output is not None else token_path[-1]
        self.mid_price = self._compute_mid_price()

    def __repr__(self) -> str:
        path = " -> ".join(str(token) for token in self.token_path)
        return f"Route({path})"

    @property
    def chain_id(self) -> int:
        return self.pools[0].chain_id

    def _compute_mid_price(self) -> Price:
        first = self.pools[0]
        if first.token0.equals(self.input):
            next_input, price = first.token1, first.token0_price
        else:
            next_input, price = first.token0, first.token1_price

        for pool in self.pools[1:]:
            if next_input.equals(pool.token0):
                next_input, price = pool.token1, price.multiply(pool.token0_price)
            else:
                next_input, price = pool.token0, price.multiply(pool.token1_price)

        return Price(self.input, self.output, price.denominator, price.numerator)


__all__ = ["Route"]
