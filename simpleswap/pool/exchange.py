"""Exact-input exchange of one pool asset for the other."""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING

import structlog

from simpleswap.constants import SWAP_PATH_LENGTH
from simpleswap.errors import (
    InsufficientLiquidity,
    InsufficientOutputAmount,
    InvalidPath,
    InvariantViolation,
)
from simpleswap.models.events import Swap
from simpleswap.models.types import normalize_address
from simpleswap.pool.guards import ensure_address, ensure_deadline, ensure_non_zero, ensure_uint256
from simpleswap.pool.oracle import price_oracle
from simpleswap.pool.state import Side

if TYPE_CHECKING:
    from simpleswap.pool.simple_swap import SimpleSwap

logger = structlog.get_logger()


class ExchangeEngine:
    """Constant-product swaps on a SimpleSwap pool.

    Quotes come from the pool's tracked reserves, never from live ledger
    balances, so unsolicited transfers into the pool cannot move the price.
    """

    def swap_exact_tokens_for_tokens(
        self,
        pool: SimpleSwap,
        amount_in: int,
        amount_out_min: int,
        path: Sequence[str],
        to: str,
        deadline: int,
        *,
        sender: str,
    ) -> int:
        """Sell exactly `amount_in` of path[0] and send the proceeds in path[1] to `to`.

        Args:
            pool: The pool to trade against
            amount_in: Exact input amount (> 0)
            amount_out_min: Minimum acceptable output (slippage protection)
            path: [input_asset, output_asset]
            to: Recipient of the output asset
            deadline: Unix timestamp after which the call is rejected
            sender: Caller whose input asset is pulled

        Returns:
            Output amount delivered to `to`

        Raises:
            InvalidPath: If path is not two distinct pool assets
            ValidationError: If any other precondition or the slippage check fails
            InsufficientLiquidity: If either reserve is empty or the output is zero
            ExternalDependencyError: If a transfer fails (fully rolled back)
        """
        ensure_uint256(amount_in, "amount_in")
        ensure_uint256(amount_out_min, "amount_out_min")
        sender = ensure_address(sender, "sender")
        to = ensure_address(to, "recipient")
        side_in, side_out = self._resolve_path(pool, path)
        ensure_deadline(pool.clock, deadline)
        ensure_non_zero("Amount in cannot be zero", amount_in)

        reserve_in = pool.state.reserve(side_in)
        reserve_out = pool.state.reserve(side_out)
        if reserve_in == 0 or reserve_out == 0:
            raise InsufficientLiquidity("Insufficient liquidity for swap")

        amount_out = price_oracle.get_amount_out(amount_in, reserve_in, reserve_out)
        logger.debug(
            "swap_quoted",
            pool=pool.address,
            reserve_in=reserve_in,
            reserve_out=reserve_out,
            amount_in=amount_in,
            amount_out=amount_out,
        )
        if amount_out < amount_out_min:
            raise InsufficientOutputAmount(
                f"Insufficient output amount ({amount_out} < {amount_out_min})"
            )
        if amount_out == 0:
            raise InsufficientLiquidity("Insufficient output amount: swap would deliver nothing")

        with pool.transition("swap_exact_tokens_for_tokens") as state:
            k_before = state.product

            pool.pull(side_in, sender, amount_in)
            state.credit(side_in, amount_in)
            state.debit(side_out, amount_out)
            pool.push(side_out, to, amount_out)

            if state.product < k_before:
                raise InvariantViolation(
                    f"Constant product decreased: {k_before} -> {state.product}"
                )

        pool.emit(
            Swap(
                swapper=sender,
                token_in=pool.pair.address_of(side_in),
                token_out=pool.pair.address_of(side_out),
                amount_in=amount_in,
                amount_out=amount_out,
            )
        )
        return amount_out

    def _resolve_path(self, pool: SimpleSwap, path: Sequence[str]) -> tuple[Side, Side]:
        if isinstance(path, str) or len(path) != SWAP_PATH_LENGTH:
            raise InvalidPath(f"Invalid path length: expected {SWAP_PATH_LENGTH} assets")
        token_in, token_out = path
        if isinstance(token_in, str) and isinstance(token_out, str):
            if normalize_address(token_in) == normalize_address(token_out):
                raise InvalidPath(f"Identical assets in path: {token_in}")
        return pool.pair.resolve(token_in, token_out)


# Module-level instance
exchange_engine = ExchangeEngine()
