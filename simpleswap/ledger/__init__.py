"""Ledgers the pool moves balances through."""

from simpleswap.ledger.base import AssetLedger, ClaimLedger, Journaled
from simpleswap.ledger.token import Checkpoint, Token

__all__ = [
    # Protocols
    "AssetLedger",
    "ClaimLedger",
    "Journaled",
    # In-memory implementation
    "Token",
    "Checkpoint",
]
