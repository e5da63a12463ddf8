"""Read-only pricing views.

Nothing in this module mutates pool state; repeated calls with the same
inputs return the same result.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

from simpleswap.errors import ZeroReserve
from simpleswap.pool.guards import ensure_uint256
from simpleswap.safe_int import S

if TYPE_CHECKING:
    from simpleswap.pool.simple_swap import SimpleSwap

logger = structlog.get_logger()


class PriceOracle:
    """Constant-product quotes for a fee-less two-asset pool.

    Formula: amount_out = amount_in * reserve_out / (reserve_in + amount_in)
    """

    def get_amount_out(self, amount_in: int, reserve_in: int, reserve_out: int) -> int:
        """Calculate output amount for an exact input.

        Rounds down, so (reserve_in + amount_in) * (reserve_out - amount_out)
        is never below reserve_in * reserve_out.

        Args:
            amount_in: Input token amount
            reserve_in: Reserve of input token in pool
            reserve_out: Reserve of output token in pool

        Returns:
            Output token amount (0 for a zero input)

        Raises:
            ZeroReserve: If reserve_in is zero
            InvalidAmount: If any argument is not a uint256
        """
        ensure_uint256(amount_in, "amount_in")
        ensure_uint256(reserve_in, "reserve_in")
        ensure_uint256(reserve_out, "reserve_out")

        if amount_in == 0:
            return 0
        if reserve_in == 0:
            raise ZeroReserve("Input reserve cannot be zero")

        numerator = S(amount_in) * S(reserve_out)
        denominator = S(reserve_in) + S(amount_in)
        return (numerator // denominator).value

    def get_price(self, pool: SimpleSwap, token_a: str, token_b: str) -> int:
        """Price of token_a in units of token_b, scaled by the pool's price_scale.

        price = reserve(token_b) * price_scale / reserve(token_a)

        Raises:
            UnknownAsset: If either token is not in the pool
            ZeroReserve: If token_a's reserve is zero
        """
        side_a, side_b = pool.pair.resolve(token_a, token_b)
        reserve_a = pool.state.reserve(side_a)
        reserve_b = pool.state.reserve(side_b)
        if reserve_a == 0:
            raise ZeroReserve("Token A reserve is zero for price calculation")

        price = (S(reserve_b) * S(pool.config.price_scale) // S(reserve_a)).value
        logger.debug(
            "price_quoted",
            token_a=pool.pair.address_of(side_a),
            token_b=pool.pair.address_of(side_b),
            price=price,
        )
        return price


# Module-level instance
price_oracle = PriceOracle()
