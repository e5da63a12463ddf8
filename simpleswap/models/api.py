"""Pydantic request and response models for the HTTP API.

Field names are camelCase on the wire and snake_case in Python. Amounts
accept ints or decimal strings and are returned as decimal strings.
"""

from typing import Any

from pydantic import BaseModel, Field

from simpleswap.models.types import Address, Uint256


class _Model(BaseModel):
    model_config = {"populate_by_name": True}


class AddLiquidityRequest(_Model):
    """Deposit both pool assets."""

    sender: Address = Field(description="Account whose balances are pulled")
    token_a: Address = Field(alias="tokenA")
    token_b: Address = Field(alias="tokenB")
    amount_a_desired: Uint256 = Field(alias="amountADesired")
    amount_b_desired: Uint256 = Field(alias="amountBDesired")
    amount_a_min: Uint256 = Field(alias="amountAMin")
    amount_b_min: Uint256 = Field(alias="amountBMin")
    to: Address
    deadline: Uint256


class AddLiquidityResponse(_Model):
    amount_a: Uint256 = Field(alias="amountA")
    amount_b: Uint256 = Field(alias="amountB")
    liquidity: Uint256


class RemoveLiquidityRequest(_Model):
    """Burn claim tokens for a share of both reserves."""

    sender: Address
    token_a: Address = Field(alias="tokenA")
    token_b: Address = Field(alias="tokenB")
    liquidity: Uint256
    amount_a_min: Uint256 = Field(alias="amountAMin")
    amount_b_min: Uint256 = Field(alias="amountBMin")
    to: Address
    deadline: Uint256


class RemoveLiquidityResponse(_Model):
    amount_a: Uint256 = Field(alias="amountA")
    amount_b: Uint256 = Field(alias="amountB")


class SwapRequest(_Model):
    """Exact-input swap along [input, output]."""

    sender: Address
    amount_in: Uint256 = Field(alias="amountIn")
    amount_out_min: Uint256 = Field(alias="amountOutMin")
    path: list[Address]
    to: Address
    deadline: Uint256


class SwapResponse(_Model):
    amount_out: Uint256 = Field(alias="amountOut")


class PriceResponse(_Model):
    token_a: Address = Field(alias="tokenA")
    token_b: Address = Field(alias="tokenB")
    price: Uint256


class AmountOutResponse(_Model):
    amount_out: Uint256 = Field(alias="amountOut")


class PoolResponse(_Model):
    """Current pool accounting."""

    address: Address
    token_a: Address = Field(alias="tokenA")
    token_b: Address = Field(alias="tokenB")
    reserve_a: Uint256 = Field(alias="reserveA")
    reserve_b: Uint256 = Field(alias="reserveB")
    total_supply: Uint256 = Field(alias="totalSupply")


class MintRequest(_Model):
    to: Address
    amount: Uint256


class ApproveRequest(_Model):
    owner: Address
    spender: Address
    amount: Uint256


class BalanceResponse(_Model):
    token: Address
    account: Address
    balance: Uint256


class EventRecord(_Model):
    """One pool event, with its payload and ABI-encoded data."""

    name: str
    signature: str
    args: dict[str, Any]
    data: str = Field(description="0x-prefixed ABI encoding of the event payload")


class EventsResponse(_Model):
    events: list[EventRecord] = Field(default_factory=list)
