"""Pydantic models for pool events and the HTTP API."""

from simpleswap.models.events import (
    EventLog,
    LiquidityAdded,
    LiquidityRemoved,
    PoolEvent,
    Swap,
)
from simpleswap.models.types import Address, Uint256, is_valid_address, normalize_address

__all__ = [
    "Address",
    "Uint256",
    "is_valid_address",
    "normalize_address",
    "PoolEvent",
    "LiquidityAdded",
    "LiquidityRemoved",
    "Swap",
    "EventLog",
]
