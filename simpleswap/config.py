"""Pool configuration."""

from dataclasses import dataclass

from simpleswap.constants import PRICE_SCALE


@dataclass(frozen=True)
class PoolConfig:
    """Centralized configuration for a pool instance.

    Attributes:
        price_scale: Fixed-point scale of get_price results (default: 1e18)
        check_invariants: If True, every mutating operation verifies that
            reserves are all-zero or all-positive together with the claim
            supply, that reserves are backed by the pool's ledger balances,
            and that the tracked claim supply matches the claim ledger.
            A failed check rolls the operation back.
    """

    price_scale: int = PRICE_SCALE
    check_invariants: bool = True


# Default configuration instance
DEFAULT_POOL_CONFIG = PoolConfig()
