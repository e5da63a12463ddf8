"""Shared identities and times for tests.

All addresses are lowercase for consistency with normalize_address().

Usage:
    from tests.helpers import TOKEN_A, ALICE
    # or
    from tests.helpers.constants import TOKEN_A, ALICE
"""

# =============================================================================
# Pool and assets
# =============================================================================

TOKEN_A = "0x" + "aa" * 20  # AToken
TOKEN_B = "0x" + "bb" * 20  # BToken
POOL = "0x" + "50" * 20  # Pool address (also the claim token's address)
STRANGER_TOKEN = "0x" + "cc" * 20  # Not part of the pool

# =============================================================================
# Accounts
# =============================================================================

ALICE = "0x" + "a1" * 20
BOB = "0x" + "b0" * 20
CAROL = "0x" + "ca" * 20

# =============================================================================
# Time
# =============================================================================

NOW = 1_700_000_000
DEADLINE = NOW + 300
PAST_DEADLINE = NOW - 1

# 1 token with 18 decimals
ONE = 10**18
