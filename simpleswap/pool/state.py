"""Pool state: the reserves and claim supply of one pool instance.

PoolState is owned by exactly one SimpleSwap instance and mutated only by
the liquidity and exchange engines while that instance holds its
reentrancy lock.

Invariants after every completed transition:
- reserve_a == 0 <=> reserve_b == 0 <=> claim_supply == 0
- reserves equal the pool's balances on the asset ledgers
- claim_supply equals the claim ledger's total supply
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from simpleswap.errors import InvalidAddress, InvariantViolation, UnknownAsset, ValidationError
from simpleswap.models.types import is_valid_address, normalize_address
from simpleswap.safe_int import S


class Side(str, Enum):
    """Named reserve counter of the pool."""

    A = "a"
    B = "b"


@dataclass(frozen=True)
class PoolStateSnapshot:
    reserve_a: int
    reserve_b: int
    claim_supply: int


@dataclass
class PoolState:
    """Mutable ledger of a pool: two reserves and the claim supply.

    `locked` is transient: it marks an operation in progress and is not part
    of the accounting captured by snapshot().
    """

    reserve_a: int = 0
    reserve_b: int = 0
    claim_supply: int = 0
    locked: bool = False

    def reserve(self, side: Side) -> int:
        return self.reserve_a if side is Side.A else self.reserve_b

    def credit(self, side: Side, amount: int) -> None:
        """Increase one reserve."""
        if side is Side.A:
            self.reserve_a = (S(self.reserve_a) + amount).to_uint256()
        else:
            self.reserve_b = (S(self.reserve_b) + amount).to_uint256()

    def debit(self, side: Side, amount: int) -> None:
        """Decrease one reserve. Raises Underflow if amount exceeds it."""
        if side is Side.A:
            self.reserve_a = (S(self.reserve_a) - amount).value
        else:
            self.reserve_b = (S(self.reserve_b) - amount).value

    @property
    def is_empty(self) -> bool:
        return self.claim_supply == 0

    @property
    def product(self) -> int:
        """reserve_a * reserve_b, the constant-product invariant."""
        return self.reserve_a * self.reserve_b

    def snapshot(self) -> PoolStateSnapshot:
        return PoolStateSnapshot(self.reserve_a, self.reserve_b, self.claim_supply)

    def restore(self, snapshot: PoolStateSnapshot) -> None:
        self.reserve_a = snapshot.reserve_a
        self.reserve_b = snapshot.reserve_b
        self.claim_supply = snapshot.claim_supply

    def check_consistency(self) -> None:
        """Verify the pool is either fully empty or fully funded.

        Raises:
            InvariantViolation: If exactly one or two of the counters are zero,
                or a counter is outside the uint256 range
        """
        for name in ("reserve_a", "reserve_b", "claim_supply"):
            if not S(getattr(self, name)).is_uint256():
                raise InvariantViolation(f"{name} out of uint256 range: {getattr(self, name)}")
        zeros = (self.reserve_a == 0, self.reserve_b == 0, self.claim_supply == 0)
        if any(zeros) and not all(zeros):
            raise InvariantViolation(
                "Pool must be fully empty or fully funded: "
                f"reserve_a={self.reserve_a}, reserve_b={self.reserve_b}, "
                f"claim_supply={self.claim_supply}"
            )


@dataclass(frozen=True)
class AssetPair:
    """The pool's two assets and the explicit mapping to reserve sides.

    Every asset identity a caller supplies goes through side_of(); there is
    no positional correspondence between caller arguments and reserves.
    """

    token_a: str
    token_b: str

    def __post_init__(self) -> None:
        token_a = _checked_address(self.token_a, "token_a")
        token_b = _checked_address(self.token_b, "token_b")
        if token_a == token_b:
            raise ValidationError(f"Pool assets must differ: {token_a}")
        object.__setattr__(self, "token_a", token_a)
        object.__setattr__(self, "token_b", token_b)

    def side_of(self, asset: str) -> Side:
        """Map an asset identity to its reserve side.

        Raises:
            UnknownAsset: If the asset is neither of the pool's assets
        """
        addr = normalize_address(asset) if isinstance(asset, str) else None
        if addr == self.token_a:
            return Side.A
        if addr == self.token_b:
            return Side.B
        raise UnknownAsset(f"Token {asset} not in pool")

    def address_of(self, side: Side) -> str:
        return self.token_a if side is Side.A else self.token_b

    def resolve(self, first: str, second: str) -> tuple[Side, Side]:
        """Map an ordered pair of identities to (side, other side).

        Raises:
            UnknownAsset: If either asset is not in the pool
            ValidationError: If both identities name the same asset
        """
        first_side = self.side_of(first)
        second_side = self.side_of(second)
        if first_side is second_side:
            raise ValidationError(f"Identical assets: {first}, {second}")
        return first_side, second_side


def _checked_address(value: str, name: str) -> str:
    if not isinstance(value, str) or not is_valid_address(normalize_address(value)):
        raise InvalidAddress(f"Invalid {name} address: {value}")
    return normalize_address(value)
