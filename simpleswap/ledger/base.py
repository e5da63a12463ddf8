"""Capability protocols for the ledgers the pool depends on.

The pool never moves balances itself. It calls out to one asset ledger per
pool asset and to the claim-token ledger through these narrow interfaces,
so the engine's ordering of "commit state, then call out" can be exercised
against any implementation, including hostile test doubles.
"""

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class AssetLedger(Protocol):
    """Fungible asset ledger (ERC-20 style).

    A False return from transfer/transfer_from, or any exception raised by
    them, is fatal to the enclosing pool operation.
    """

    @property
    def address(self) -> str:
        """Identity of the asset this ledger tracks."""
        ...

    def transfer(self, sender: str, to: str, amount: int) -> bool:
        """Move `amount` from `sender` to `to`."""
        ...

    def transfer_from(self, spender: str, owner: str, to: str, amount: int) -> bool:
        """Move `amount` from `owner` to `to` using `spender`'s allowance."""
        ...

    def balance_of(self, account: str) -> int:
        ...


@runtime_checkable
class ClaimLedger(Protocol):
    """Ledger of the pool's claim token.

    Only the authorized operator (the pool) may mint and burn.
    """

    @property
    def address(self) -> str:
        ...

    def mint(self, to: str, amount: int, *, operator: str | None = None) -> None:
        ...

    def burn(self, owner: str, amount: int, *, operator: str | None = None) -> None:
        ...

    def balance_of(self, account: str) -> int:
        ...

    def total_supply(self) -> int:
        ...


@runtime_checkable
class Journaled(Protocol):
    """Ledger whose writes can be rolled back.

    The pool requires every ledger it is built over to be journaled. It opens
    a snapshot on each ledger before a mutating operation, restores them if
    the operation fails and commits them if it succeeds, so a failed
    operation never leaves a half-completed pull or push behind. A plain
    transfer interface cannot take back tokens already sent, so it cannot
    give that guarantee.
    """

    def snapshot(self) -> Any:
        """Open a snapshot and return a handle for restore() or commit()."""
        ...

    def restore(self, snapshot: Any) -> None:
        """Undo every write since `snapshot` and close it."""
        ...

    def commit(self, snapshot: Any) -> None:
        """Keep every write since `snapshot` and close it."""
        ...
