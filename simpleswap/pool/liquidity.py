"""Liquidity management: deposit and withdrawal against a pool.

Claim tokens minted for a deposit:
    first deposit:      isqrt(amount_a * amount_b)
    later deposits:     min(amount_a * supply / reserve_a,
                            amount_b * supply / reserve_b)

Assets returned for burning `liquidity` claim tokens:
    amount_x = reserve_x * liquidity / supply

All divisions round down, in the pool's favour.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

from simpleswap.errors import InsufficientLiquidity, InsufficientOutputAmount
from simpleswap.math.isqrt import isqrt
from simpleswap.models.events import LiquidityAdded, LiquidityRemoved
from simpleswap.pool.guards import (
    ensure_address,
    ensure_deadline,
    ensure_minimum,
    ensure_non_zero,
    ensure_uint256,
)
from simpleswap.pool.state import Side
from simpleswap.safe_int import S

if TYPE_CHECKING:
    from simpleswap.pool.simple_swap import SimpleSwap

logger = structlog.get_logger()


def compute_liquidity_minted(
    amount_a: int,
    amount_b: int,
    reserve_a: int,
    reserve_b: int,
    claim_supply: int,
) -> int:
    """Claim tokens owed for depositing (amount_a, amount_b).

    The first deposit mints the geometric mean of the two amounts, which
    makes the initial implied price amount_b / amount_a. Later deposits mint
    pro rata on the worse-priced side, so an imbalanced deposit never dilutes
    existing holders.

    Args:
        amount_a: Deposited amount of asset A
        amount_b: Deposited amount of asset B
        reserve_a: Reserve of asset A before the deposit
        reserve_b: Reserve of asset B before the deposit
        claim_supply: Claim supply before the deposit

    Returns:
        Claim tokens to mint (may be zero for dust deposits)

    Raises:
        InsufficientLiquidity: If a reserve is zero while claims are outstanding
    """
    if claim_supply == 0:
        return isqrt((S(amount_a) * S(amount_b)).value)

    if reserve_a == 0 or reserve_b == 0:
        raise InsufficientLiquidity(
            f"Zero reserve with outstanding claims: reserves=({reserve_a}, {reserve_b}), "
            f"supply={claim_supply}"
        )

    liquidity_a = S(amount_a) * S(claim_supply) // S(reserve_a)
    liquidity_b = S(amount_b) * S(claim_supply) // S(reserve_b)
    return liquidity_a.min(liquidity_b).value


def compute_liquidity_burned(
    liquidity: int,
    reserve_a: int,
    reserve_b: int,
    claim_supply: int,
) -> tuple[int, int]:
    """Asset amounts owed for burning `liquidity` claim tokens.

    Multiplies before dividing to keep the rounding loss below one unit.

    Returns:
        Tuple of (amount_a, amount_b)

    Raises:
        DivisionByZero: If claim_supply is zero
    """
    amount_a = S(reserve_a) * S(liquidity) // S(claim_supply)
    amount_b = S(reserve_b) * S(liquidity) // S(claim_supply)
    return amount_a.value, amount_b.value


class LiquidityEngine:
    """Deposit and withdrawal transitions on a SimpleSwap pool."""

    def add_liquidity(
        self,
        pool: SimpleSwap,
        token_a: str,
        token_b: str,
        amount_a_desired: int,
        amount_b_desired: int,
        amount_a_min: int,
        amount_b_min: int,
        to: str,
        deadline: int,
        *,
        sender: str,
    ) -> tuple[int, int, int]:
        """Deposit both assets and mint claim tokens to `to`.

        token_a/token_b may be given in either order; amounts and return
        values follow the order the caller used. Desired amounts are taken
        in full (no partial fills).

        Args:
            pool: The pool to deposit into
            token_a: First asset identity
            token_b: Second asset identity
            amount_a_desired: Amount of token_a to deposit (non-zero)
            amount_b_desired: Amount of token_b to deposit (non-zero)
            amount_a_min: Minimum acceptable amount of token_a (<= desired)
            amount_b_min: Minimum acceptable amount of token_b (<= desired)
            to: Recipient of the minted claim tokens
            deadline: Unix timestamp after which the call is rejected
            sender: Caller whose balances are pulled

        Returns:
            Tuple of (amount_a, amount_b, liquidity_minted)

        Raises:
            ValidationError: If any precondition fails (no state change)
            InsufficientLiquidity: If the deposit is too small to mint a claim
            ExternalDependencyError: If either pull fails (fully rolled back)
        """
        for value, name in (
            (amount_a_desired, "amount_a_desired"),
            (amount_b_desired, "amount_b_desired"),
            (amount_a_min, "amount_a_min"),
            (amount_b_min, "amount_b_min"),
        ):
            ensure_uint256(value, name)
        sender = ensure_address(sender, "sender")
        to = ensure_address(to, "recipient")
        ensure_deadline(pool.clock, deadline)
        ensure_non_zero("Amounts cannot be zero", amount_a_desired, amount_b_desired)
        ensure_minimum(amount_a_desired, amount_a_min, "token_a")
        ensure_minimum(amount_b_desired, amount_b_min, "token_b")
        side_a, side_b = pool.pair.resolve(token_a, token_b)

        # Desired amounts are the actual amounts
        amount_a, amount_b = amount_a_desired, amount_b_desired
        by_side = {side_a: amount_a, side_b: amount_b}

        with pool.transition("add_liquidity") as state:
            pool.pull(side_a, sender, amount_a)
            pool.pull(side_b, sender, amount_b)

            minted = compute_liquidity_minted(
                by_side[Side.A],
                by_side[Side.B],
                state.reserve_a,
                state.reserve_b,
                state.claim_supply,
            )
            logger.debug(
                "liquidity_mint_computed",
                pool=pool.address,
                first_deposit=state.is_empty,
                amount_a=by_side[Side.A],
                amount_b=by_side[Side.B],
                minted=minted,
            )
            if minted == 0:
                raise InsufficientLiquidity("Insufficient liquidity minted")

            state.credit(Side.A, by_side[Side.A])
            state.credit(Side.B, by_side[Side.B])
            state.claim_supply = (S(state.claim_supply) + minted).to_uint256()

            pool.claim_token.mint(to, minted, operator=pool.address)

        pool.emit(
            LiquidityAdded(
                provider=sender,
                token_a=pool.pair.address_of(side_a),
                token_b=pool.pair.address_of(side_b),
                amount_a_added=amount_a,
                amount_b_added=amount_b,
                lp_tokens_minted=minted,
            )
        )
        return amount_a, amount_b, minted

    def remove_liquidity(
        self,
        pool: SimpleSwap,
        token_a: str,
        token_b: str,
        liquidity: int,
        amount_a_min: int,
        amount_b_min: int,
        to: str,
        deadline: int,
        *,
        sender: str,
    ) -> tuple[int, int]:
        """Burn `sender`'s claim tokens and send the proportional reserves to `to`.

        Args:
            pool: The pool to withdraw from
            token_a: First asset identity
            token_b: Second asset identity
            liquidity: Claim tokens to burn (> 0, at most sender's balance)
            amount_a_min: Minimum acceptable amount of token_a
            amount_b_min: Minimum acceptable amount of token_b
            to: Recipient of the withdrawn assets
            deadline: Unix timestamp after which the call is rejected
            sender: Holder whose claim tokens are burned

        Returns:
            Tuple of (amount_a, amount_b) in the caller's token order

        Raises:
            ValidationError: If a precondition or slippage minimum fails
            InsufficientLiquidity: If the pool is empty or the burn returns nothing
            ExternalDependencyError: If the burn or a transfer fails
        """
        ensure_uint256(liquidity, "liquidity")
        ensure_uint256(amount_a_min, "amount_a_min")
        ensure_uint256(amount_b_min, "amount_b_min")
        sender = ensure_address(sender, "sender")
        to = ensure_address(to, "recipient")
        ensure_deadline(pool.clock, deadline)
        ensure_non_zero("Liquidity should not be zero", liquidity)
        side_a, side_b = pool.pair.resolve(token_a, token_b)

        if pool.state.claim_supply == 0:
            raise InsufficientLiquidity("No liquidity in pool")
        if liquidity > pool.state.claim_supply:
            raise InsufficientLiquidity(
                f"Cannot burn more than claim supply: {liquidity} > {pool.state.claim_supply}"
            )

        with pool.transition("remove_liquidity") as state:
            out_a, out_b = compute_liquidity_burned(
                liquidity, state.reserve_a, state.reserve_b, state.claim_supply
            )
            by_side = {Side.A: out_a, Side.B: out_b}

            # Commit before any outbound call
            state.debit(Side.A, out_a)
            state.debit(Side.B, out_b)
            state.claim_supply = (S(state.claim_supply) - liquidity).value

            amount_a, amount_b = by_side[side_a], by_side[side_b]
            if amount_a < amount_a_min:
                raise InsufficientOutputAmount(
                    f"Insufficient token_a amount ({amount_a} < {amount_a_min})"
                )
            if amount_b < amount_b_min:
                raise InsufficientOutputAmount(
                    f"Insufficient token_b amount ({amount_b} < {amount_b_min})"
                )
            if out_a == 0 or out_b == 0:
                raise InsufficientLiquidity("Insufficient liquidity burned")

            pool.claim_token.burn(sender, liquidity, operator=pool.address)
            pool.push(side_a, to, amount_a)
            pool.push(side_b, to, amount_b)

        pool.emit(
            LiquidityRemoved(
                provider=sender,
                token_a=pool.pair.address_of(side_a),
                token_b=pool.pair.address_of(side_b),
                amount_a_received=amount_a,
                amount_b_received=amount_b,
                lp_tokens_burned=liquidity,
            )
        )
        return amount_a, amount_b


# Module-level instance
liquidity_engine = LiquidityEngine()
