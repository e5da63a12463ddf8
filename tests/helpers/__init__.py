"""Test helpers module for shared test utilities.

- constants: Pool/asset/account identities and times
- factories: Pool construction and funding helpers
"""

from tests.helpers.constants import (
    ALICE,
    BOB,
    CAROL,
    DEADLINE,
    NOW,
    ONE,
    PAST_DEADLINE,
    POOL,
    STRANGER_TOKEN,
    TOKEN_A,
    TOKEN_B,
)
from tests.helpers.factories import force_state, fund, make_pool, seed_pool

__all__ = [
    # Constants
    "TOKEN_A",
    "TOKEN_B",
    "POOL",
    "STRANGER_TOKEN",
    "ALICE",
    "BOB",
    "CAROL",
    "NOW",
    "DEADLINE",
    "PAST_DEADLINE",
    "ONE",
    # Factories
    "make_pool",
    "fund",
    "seed_pool",
    "force_state",
]
