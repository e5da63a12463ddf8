"""Precondition checks shared by the engines.

Every check here runs before any state mutation or ledger call.
"""

from __future__ import annotations

from simpleswap.clock import Clock
from simpleswap.errors import (
    DeadlineExceeded,
    InvalidAddress,
    InvalidAmount,
    InvalidMinimum,
    ZeroAmount,
)
from simpleswap.models.types import is_valid_address, normalize_address
from simpleswap.safe_int import UINT256_MAX


def ensure_deadline(clock: Clock, deadline: int) -> None:
    """Reject operations submitted after their deadline (now <= deadline passes)."""
    ensure_uint256(deadline, "deadline")
    if clock.now() > deadline:
        raise DeadlineExceeded("Deadline exceeded")


def ensure_uint256(amount: int, name: str) -> int:
    if not isinstance(amount, int) or isinstance(amount, bool):
        raise InvalidAmount(f"{name} must be an int, got {type(amount).__name__}")
    if not 0 <= amount <= UINT256_MAX:
        raise InvalidAmount(f"{name} out of uint256 range: {amount}")
    return amount


def ensure_non_zero(message: str, *amounts: int) -> None:
    if any(amount == 0 for amount in amounts):
        raise ZeroAmount(message)


def ensure_minimum(desired: int, minimum: int, name: str) -> None:
    if minimum > desired:
        raise InvalidMinimum(f"{name} minimum exceeds desired amount ({minimum} > {desired})")


def ensure_address(value: str, name: str) -> str:
    """Validate an account identity and return it lowercased."""
    if not isinstance(value, str) or not is_valid_address(normalize_address(value)):
        raise InvalidAddress(f"Invalid {name} address: {value}")
    return normalize_address(value)
