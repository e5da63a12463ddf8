"""The pool instance.

SimpleSwap owns one PoolState, holds the injected ledgers, clock and
configuration, and exposes the public operations. Mutating operations are
delegated to the liquidity and exchange engines, which run inside
transition(): a reentrancy-locked, all-or-nothing scope.

Every mutating operation follows the same ordering:
    checks -> pull inputs -> commit PoolState -> outbound calls
    (mint / burn / transfer) -> invariant check -> event
"""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from contextlib import contextmanager
from typing import Any

import structlog

from simpleswap.clock import Clock, SystemClock
from simpleswap.config import DEFAULT_POOL_CONFIG, PoolConfig
from simpleswap.constants import CLAIM_TOKEN_DECIMALS, CLAIM_TOKEN_SYMBOL
from simpleswap.errors import InvariantViolation, ReentrancyError, TransferFailed
from simpleswap.ledger.base import AssetLedger, ClaimLedger, Journaled
from simpleswap.ledger.token import Token
from simpleswap.models.events import EventLog, PoolEvent
from simpleswap.pool.exchange import exchange_engine
from simpleswap.pool.guards import ensure_address
from simpleswap.pool.liquidity import liquidity_engine
from simpleswap.pool.oracle import price_oracle
from simpleswap.pool.state import AssetPair, PoolState, Side

logger = structlog.get_logger()


class SimpleSwap:
    """A two-asset constant-product pool.

    The claim token defaults to an in-memory ledger living at the pool's own
    address with the pool as its sole minter. All three ledgers must be
    Journaled; construction raises TypeError otherwise.
    """

    def __init__(
        self,
        token_a: AssetLedger,
        token_b: AssetLedger,
        *,
        address: str,
        claim_token: ClaimLedger | None = None,
        clock: Clock | None = None,
        config: PoolConfig = DEFAULT_POOL_CONFIG,
    ) -> None:
        self.address = ensure_address(address, "pool")
        self.pair = AssetPair(token_a.address, token_b.address)
        self.token_a = token_a
        self.token_b = token_b
        self.claim_token: ClaimLedger = claim_token or Token(
            self.address,
            symbol=CLAIM_TOKEN_SYMBOL,
            decimals=CLAIM_TOKEN_DECIMALS,
            minter=self.address,
        )
        for ledger in (self.token_a, self.token_b, self.claim_token):
            if not isinstance(ledger, Journaled):
                raise TypeError(
                    f"Ledger {getattr(ledger, 'address', ledger)} must implement snapshot/restore/commit "
                    "so failed operations can be rolled back"
                )
        self.clock: Clock = clock or SystemClock()
        self.config = config
        self.events = EventLog()
        self._state = PoolState()

    def __repr__(self) -> str:
        return (
            f"SimpleSwap({self.address}, reserve_a={self._state.reserve_a}, "
            f"reserve_b={self._state.reserve_b}, claim_supply={self._state.claim_supply})"
        )

    # --- Public operations ---

    def add_liquidity(
        self,
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
        """Deposit both assets; returns (amount_a, amount_b, liquidity_minted)."""
        return liquidity_engine.add_liquidity(
            self,
            token_a,
            token_b,
            amount_a_desired,
            amount_b_desired,
            amount_a_min,
            amount_b_min,
            to,
            deadline,
            sender=sender,
        )

    def remove_liquidity(
        self,
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
        """Burn claim tokens; returns (amount_a, amount_b) sent to `to`."""
        return liquidity_engine.remove_liquidity(
            self,
            token_a,
            token_b,
            liquidity,
            amount_a_min,
            amount_b_min,
            to,
            deadline,
            sender=sender,
        )

    def swap_exact_tokens_for_tokens(
        self,
        amount_in: int,
        amount_out_min: int,
        path: Sequence[str],
        to: str,
        deadline: int,
        *,
        sender: str,
    ) -> int:
        """Sell exactly `amount_in` of path[0] for path[1]; returns amount_out."""
        return exchange_engine.swap_exact_tokens_for_tokens(
            self,
            amount_in,
            amount_out_min,
            path,
            to,
            deadline,
            sender=sender,
        )

    def get_price(self, token_a: str, token_b: str) -> int:
        return price_oracle.get_price(self, token_a, token_b)

    def get_amount_out(self, amount_in: int, reserve_in: int, reserve_out: int) -> int:
        return price_oracle.get_amount_out(amount_in, reserve_in, reserve_out)

    # --- Views ---

    @property
    def state(self) -> PoolState:
        return self._state

    @property
    def reserve_a(self) -> int:
        return self._state.reserve_a

    @property
    def reserve_b(self) -> int:
        return self._state.reserve_b

    def get_reserves(self) -> tuple[int, int]:
        return self._state.reserve_a, self._state.reserve_b

    def total_supply(self) -> int:
        return self._state.claim_supply

    def balance_of(self, account: str) -> int:
        """Claim-token balance of `account`."""
        return self.claim_token.balance_of(account)

    def ledger(self, side: Side) -> AssetLedger:
        return self.token_a if side is Side.A else self.token_b

    # --- Engine support ---

    @contextmanager
    def transition(self, operation: str) -> Iterator[PoolState]:
        """Run a mutating operation atomically under the reentrancy lock.

        On any exception the pool state and every ledger are restored to their
        values at entry, and the exception is re-raised. On success the
        ledger snapshots are committed.

        Raises:
            ReentrancyError: If another operation on this pool is in progress
        """
        if self._state.locked:
            logger.warning("reentrant_call_rejected", pool=self.address, operation=operation)
            raise ReentrancyError(f"Reentrant call to {operation}")

        self._state.locked = True
        saved_state = self._state.snapshot()
        saved_ledgers = [(ledger, ledger.snapshot()) for ledger in self._ledgers()]
        try:
            yield self._state
            if self.config.check_invariants:
                self.check_invariants()
        except Exception as err:
            self._state.restore(saved_state)
            for ledger, snapshot in reversed(saved_ledgers):
                ledger.restore(snapshot)
            logger.warning(
                "operation_reverted",
                pool=self.address,
                operation=operation,
                error=type(err).__name__,
                reason=str(err),
            )
            raise
        else:
            for ledger, snapshot in saved_ledgers:
                ledger.commit(snapshot)
        finally:
            self._state.locked = False

    def pull(self, side: Side, owner: str, amount: int) -> None:
        """Move `amount` of one pool asset from `owner` into the pool."""
        ledger = self.ledger(side)
        if not ledger.transfer_from(self.address, owner, self.address, amount):
            raise TransferFailed(f"Transfer of {amount} {ledger.address} from {owner} failed")

    def push(self, side: Side, to: str, amount: int) -> None:
        """Move `amount` of one pool asset from the pool to `to`."""
        ledger = self.ledger(side)
        if not ledger.transfer(self.address, to, amount):
            raise TransferFailed(f"Transfer of {amount} {ledger.address} to {to} failed")

    def emit(self, event: PoolEvent) -> None:
        self.events.append(event)
        logger.info(
            "pool_event",
            pool=self.address,
            event_name=event.event_name(),
            **event.model_dump(),
        )

    def check_invariants(self) -> None:
        """Verify the pool's accounting against itself and its ledgers.

        Unsolicited transfers into the pool are not counted as reserves, so
        only a reserve larger than the backing balance is a violation.

        Raises:
            InvariantViolation: If the pool is partially empty, a reserve is
                not backed by the pool's ledger balance, or the tracked claim
                supply differs from the claim ledger's total supply
        """
        self._state.check_consistency()
        for side in Side:
            reserve = self._state.reserve(side)
            balance = self.ledger(side).balance_of(self.address)
            if reserve > balance:
                raise InvariantViolation(
                    f"Reserve {side.value} ({reserve}) exceeds pool balance ({balance})"
                )
        supply = self.claim_token.total_supply()
        if supply != self._state.claim_supply:
            raise InvariantViolation(
                f"Claim supply ({self._state.claim_supply}) does not match claim ledger ({supply})"
            )

    def _ledgers(self) -> list[Any]:
        """The distinct ledgers this pool calls out to."""
        seen: set[int] = set()
        ledgers: list[Any] = []
        for ledger in (self.token_a, self.token_b, self.claim_token):
            if id(ledger) in seen:
                continue
            seen.add(id(ledger))
            ledgers.append(ledger)
        return ledgers
