"""Observability events emitted by the pool.

Each successful deposit, withdrawal and swap appends one event to the
pool's EventLog. Events are meant for external indexers: they mirror the
EVM log layout of a deployed pool, so every event knows its canonical
signature and can produce the ABI-encoded data payload an indexer would
read from chain.
"""

from __future__ import annotations

from collections.abc import Iterator
from typing import Any, ClassVar, TypeVar

from eth_abi import encode  # type: ignore[attr-defined]
from pydantic import BaseModel, Field

from simpleswap.models.types import Address, Uint256

E = TypeVar("E", bound="PoolEvent")


class PoolEvent(BaseModel):
    """Base class for pool events.

    Subclasses declare `signature` and the ordered `abi_fields` that make up
    the encoded payload.
    """

    signature: ClassVar[str]
    abi_fields: ClassVar[tuple[str, ...]]

    model_config = {"populate_by_name": True, "frozen": True}

    @classmethod
    def event_name(cls) -> str:
        """Event name as it appears in the signature."""
        return cls.signature.split("(", 1)[0]

    @classmethod
    def abi_types(cls) -> list[str]:
        """ABI types in payload order, parsed from the signature."""
        inner = cls.signature[cls.signature.index("(") + 1 : -1]
        return inner.split(",")

    def abi_values(self) -> list[Any]:
        return [getattr(self, name) for name in self.abi_fields]

    def encode_data(self) -> bytes:
        """ABI-encode the event payload."""
        return encode(self.abi_types(), self.abi_values())


class LiquidityAdded(PoolEvent):
    """A provider deposited both assets and received claim tokens."""

    signature: ClassVar[str] = "LiquidityAdded(address,address,address,uint256,uint256,uint256)"
    abi_fields: ClassVar[tuple[str, ...]] = (
        "provider",
        "token_a",
        "token_b",
        "amount_a_added",
        "amount_b_added",
        "lp_tokens_minted",
    )

    provider: Address
    token_a: Address = Field(alias="tokenA")
    token_b: Address = Field(alias="tokenB")
    amount_a_added: Uint256 = Field(alias="amountAAdded")
    amount_b_added: Uint256 = Field(alias="amountBAdded")
    lp_tokens_minted: Uint256 = Field(alias="lpTokensMinted")


class LiquidityRemoved(PoolEvent):
    """A provider burned claim tokens for a share of both reserves."""

    signature: ClassVar[str] = "LiquidityRemoved(address,address,address,uint256,uint256,uint256)"
    abi_fields: ClassVar[tuple[str, ...]] = (
        "provider",
        "token_a",
        "token_b",
        "amount_a_received",
        "amount_b_received",
        "lp_tokens_burned",
    )

    provider: Address
    token_a: Address = Field(alias="tokenA")
    token_b: Address = Field(alias="tokenB")
    amount_a_received: Uint256 = Field(alias="amountAReceived")
    amount_b_received: Uint256 = Field(alias="amountBReceived")
    lp_tokens_burned: Uint256 = Field(alias="lpTokensBurned")


class Swap(PoolEvent):
    """An exact-input exchange of one pool asset for the other."""

    signature: ClassVar[str] = "Swap(address,address,address,uint256,uint256)"
    abi_fields: ClassVar[tuple[str, ...]] = (
        "swapper",
        "token_in",
        "token_out",
        "amount_in",
        "amount_out",
    )

    swapper: Address
    token_in: Address = Field(alias="tokenIn")
    token_out: Address = Field(alias="tokenOut")
    amount_in: Uint256 = Field(alias="amountIn")
    amount_out: Uint256 = Field(alias="amountOut")


class EventLog:
    """Append-only record of emitted pool events."""

    def __init__(self) -> None:
        self._events: list[PoolEvent] = []

    def append(self, event: PoolEvent) -> None:
        self._events.append(event)

    def __iter__(self) -> Iterator[PoolEvent]:
        return iter(tuple(self._events))

    def __len__(self) -> int:
        return len(self._events)

    def of_type(self, event_type: type[E]) -> list[E]:
        """All events of one type, oldest first."""
        return [e for e in self._events if isinstance(e, event_type)]

    def last(self) -> PoolEvent | None:
        return self._events[-1] if self._events else None
