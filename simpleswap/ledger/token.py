"""In-memory fungible token ledger.

Implements both the AssetLedger and ClaimLedger protocols:
- Asset tokens are created without a minter, so anyone may mint (like the
  faucet-style test tokens a pool is usually exercised with).
- The claim token is created with the pool as its minter; only the pool
  may then mint and burn it.

Holders move balances with transfer, approve and transfer_from exactly as
on an ERC-20 ledger.

While a snapshot is open, every write records the value it replaces, so
restore() undoes only what changed since snapshot() and costs O(writes)
rather than O(holders).
"""

from __future__ import annotations

from dataclasses import dataclass

import structlog

from simpleswap.errors import (
    InsufficientAllowance,
    InsufficientBalance,
    InvalidAmount,
    Unauthorized,
)
from simpleswap.models.types import normalize_address
from simpleswap.safe_int import S, UINT256_MAX

logger = structlog.get_logger()

_BALANCE = "balance"
_ALLOWANCE = "allowance"
_SUPPLY = "supply"


@dataclass(frozen=True)
class Checkpoint:
    """Position in a Token's write journal, returned by Token.snapshot()."""

    position: int


class Token:
    """ERC-20 style ledger keyed by lowercase addresses."""

    def __init__(
        self,
        address: str,
        symbol: str = "",
        decimals: int = 18,
        minter: str | None = None,
    ) -> None:
        """Create an empty ledger.

        Args:
            address: Identity of the token
            symbol: Display symbol
            decimals: Display decimals (amounts are always raw integers)
            minter: If set, the only operator allowed to mint and burn.
                    If None, minting is open and only holders burn their own balance.
        """
        self._address = normalize_address(address, validate=True)
        self.symbol = symbol
        self.decimals = decimals
        self.minter = normalize_address(minter) if minter is not None else None
        self._balances: dict[str, int] = {}
        self._allowances: dict[tuple[str, str], int] = {}
        self._total_supply = 0
        # (table, key, previous value); None means the key was absent
        self._journal: list[tuple[str, object, int | None]] = []
        self._open_snapshots = 0

    def __repr__(self) -> str:
        return f"Token({self.symbol or self._address}, supply={self._total_supply})"

    @property
    def address(self) -> str:
        return self._address

    # --- Views ---

    def balance_of(self, account: str) -> int:
        return self._balances.get(normalize_address(account), 0)

    def total_supply(self) -> int:
        return self._total_supply

    def allowance(self, owner: str, spender: str) -> int:
        return self._allowances.get((normalize_address(owner), normalize_address(spender)), 0)

    # --- Holder operations ---

    def approve(self, owner: str, spender: str, amount: int) -> bool:
        """Set `spender`'s allowance over `owner`'s balance."""
        _check_amount(amount)
        self._set_allowance((normalize_address(owner), normalize_address(spender)), amount)
        return True

    def transfer(self, sender: str, to: str, amount: int) -> bool:
        """Move `amount` from `sender` to `to`.

        Raises:
            InsufficientBalance: If sender holds less than amount
        """
        _check_amount(amount)
        self._move(normalize_address(sender), normalize_address(to), amount)
        return True

    def transfer_from(self, spender: str, owner: str, to: str, amount: int) -> bool:
        """Move `amount` from `owner` to `to`, spending `spender`'s allowance.

        Raises:
            InsufficientAllowance: If the allowance is below amount
            InsufficientBalance: If owner holds less than amount
        """
        _check_amount(amount)
        owner_key = normalize_address(owner)
        key = (owner_key, normalize_address(spender))
        allowed = self._allowances.get(key, 0)
        if allowed < amount:
            raise InsufficientAllowance(
                f"{self.symbol or self._address}: insufficient allowance ({allowed} < {amount})"
            )
        self._move(owner_key, normalize_address(to), amount)
        # Max allowance is treated as infinite
        if allowed != UINT256_MAX:
            self._set_allowance(key, allowed - amount)
        return True

    # --- Supply operations ---

    def mint(self, to: str, amount: int, *, operator: str | None = None) -> None:
        """Create `amount` new tokens for `to`.

        Raises:
            Unauthorized: If the ledger has a minter and operator is not it
        """
        _check_amount(amount)
        self._check_operator(operator, "mint")
        new_supply = S(self._total_supply) + amount
        if not new_supply.is_uint256():
            raise InvalidAmount(f"{self.symbol or self._address}: total supply would exceed uint256")
        to_key = normalize_address(to)
        self._set_balance(to_key, self._balances.get(to_key, 0) + amount)
        self._set_supply(new_supply.value)
        logger.debug("token_minted", token=self._address, to=to_key, amount=amount)

    def burn(self, owner: str, amount: int, *, operator: str | None = None) -> None:
        """Destroy `amount` tokens held by `owner`.

        On an open ledger the operator must be the owner; on a minter ledger
        it must be the minter.

        Raises:
            Unauthorized: If operator may not burn owner's tokens
            InsufficientBalance: If owner holds less than amount
        """
        _check_amount(amount)
        owner_key = normalize_address(owner)
        if self.minter is None:
            if operator is None or normalize_address(operator) != owner_key:
                raise Unauthorized(f"{self.symbol or self._address}: only the holder may burn")
        else:
            self._check_operator(operator, "burn")
        balance = self._balances.get(owner_key, 0)
        if balance < amount:
            raise InsufficientBalance(
                f"{self.symbol or self._address}: burn amount exceeds balance ({balance} < {amount})"
            )
        self._set_balance(owner_key, balance - amount)
        self._set_supply(self._total_supply - amount)
        logger.debug("token_burned", token=self._address, owner=owner_key, amount=amount)

    # --- Journaling ---

    def snapshot(self) -> Checkpoint:
        """Open a snapshot; writes are journaled until it is restored or committed."""
        self._open_snapshots += 1
        return Checkpoint(len(self._journal))

    def restore(self, checkpoint: Checkpoint) -> None:
        """Undo every write made since `checkpoint` and close it."""
        while len(self._journal) > checkpoint.position:
            table, key, previous = self._journal.pop()
            if table == _SUPPLY:
                self._total_supply = previous or 0
                continue
            store: dict = self._balances if table == _BALANCE else self._allowances
            if previous is None:
                store.pop(key, None)
            else:
                store[key] = previous
        self._close_snapshot()

    def commit(self, checkpoint: Checkpoint) -> None:
        """Keep the writes made since `checkpoint` and close it."""
        self._close_snapshot()

    # --- Internals ---

    def _close_snapshot(self) -> None:
        self._open_snapshots = max(self._open_snapshots - 1, 0)
        # An enclosing snapshot may still need the entries
        if self._open_snapshots == 0:
            self._journal.clear()

    def _set_balance(self, account: str, value: int) -> None:
        if self._open_snapshots:
            self._journal.append((_BALANCE, account, self._balances.get(account)))
        self._balances[account] = value

    def _set_allowance(self, key: tuple[str, str], value: int) -> None:
        if self._open_snapshots:
            self._journal.append((_ALLOWANCE, key, self._allowances.get(key)))
        self._allowances[key] = value

    def _set_supply(self, value: int) -> None:
        if self._open_snapshots:
            self._journal.append((_SUPPLY, None, self._total_supply))
        self._total_supply = value

    def _move(self, sender: str, to: str, amount: int) -> None:
        balance = self._balances.get(sender, 0)
        if balance < amount:
            raise InsufficientBalance(
                f"{self.symbol or self._address}: transfer amount exceeds balance ({balance} < {amount})"
            )
        self._set_balance(sender, balance - amount)
        self._set_balance(to, self._balances.get(to, 0) + amount)

    def _check_operator(self, operator: str | None, action: str) -> None:
        if self.minter is None:
            return
        if operator is None or normalize_address(operator) != self.minter:
            raise Unauthorized(f"{self.symbol or self._address}: {action} restricted to {self.minter}")


def _check_amount(amount: int) -> None:
    if not isinstance(amount, int) or isinstance(amount, bool):
        raise InvalidAmount(f"Amount must be an int, got {type(amount).__name__}")
    if not 0 <= amount <= UINT256_MAX:
        raise InvalidAmount(f"Amount out of uint256 range: {amount}")
