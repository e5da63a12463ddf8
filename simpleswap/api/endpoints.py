"""API endpoints for a SimpleSwap pool.

Endpoints are async and never await while touching the pool, so requests
are applied to the pool one at a time on the event loop.

This is a simulation surface with no authentication: `sender` and `owner`
in a request body are trusted as given, so any client can act for any
account. Keep the server bound to loopback (the default).
"""

import os
from functools import lru_cache

import structlog
from fastapi import APIRouter, Depends, HTTPException, Query

from simpleswap.ledger.token import Token
from simpleswap.models.api import (
    AddLiquidityRequest,
    AddLiquidityResponse,
    AmountOutResponse,
    ApproveRequest,
    BalanceResponse,
    EventRecord,
    EventsResponse,
    MintRequest,
    PoolResponse,
    PriceResponse,
    RemoveLiquidityRequest,
    RemoveLiquidityResponse,
    SwapRequest,
    SwapResponse,
)
from simpleswap.models.types import is_valid_address, normalize_address
from simpleswap.pool.simple_swap import SimpleSwap

logger = structlog.get_logger()

router = APIRouter()

# Default pool identities, configurable via environment variables
TOKEN_A_ADDRESS = os.environ.get("SIMPLESWAP_TOKEN_A", "0x" + "0a" * 20)
TOKEN_B_ADDRESS = os.environ.get("SIMPLESWAP_TOKEN_B", "0x" + "0b" * 20)
POOL_ADDRESS = os.environ.get("SIMPLESWAP_POOL_ADDRESS", "0x" + "5a" * 20)


@lru_cache(maxsize=1)
def get_default_pool() -> SimpleSwap:
    """Process-wide pool backed by in-memory AToken/BToken ledgers."""
    pool = SimpleSwap(
        Token(TOKEN_A_ADDRESS, symbol="ATK"),
        Token(TOKEN_B_ADDRESS, symbol="BTK"),
        address=POOL_ADDRESS,
    )
    logger.info(
        "pool_created",
        pool=pool.address,
        token_a=pool.pair.token_a,
        token_b=pool.pair.token_b,
    )
    return pool


def get_pool() -> SimpleSwap:
    """Dependency provider for the pool instance.

    Override this in tests to inject a fresh pool:
        app.dependency_overrides[get_pool] = lambda: pool
    """
    return get_default_pool()


def _token_ledger(pool: SimpleSwap, token: str) -> Token:
    """Find the in-memory ledger for an asset or the claim token."""
    addr = normalize_address(token)
    for ledger in (pool.token_a, pool.token_b, pool.claim_token):
        if ledger.address == addr:
            if not isinstance(ledger, Token):
                raise HTTPException(status_code=501, detail="Ledger does not support this operation")
            return ledger
    raise HTTPException(status_code=404, detail=f"Unknown token: {token}")


@router.get("/pool")
async def pool_state(pool: SimpleSwap = Depends(get_pool)) -> PoolResponse:
    """Current reserves and claim supply."""
    return PoolResponse(
        address=pool.address,
        token_a=pool.pair.token_a,
        token_b=pool.pair.token_b,
        reserve_a=pool.reserve_a,
        reserve_b=pool.reserve_b,
        total_supply=pool.total_supply(),
    )


@router.post("/liquidity/add")
async def add_liquidity(
    request: AddLiquidityRequest,
    pool: SimpleSwap = Depends(get_pool),
) -> AddLiquidityResponse:
    """Deposit both assets and mint claim tokens to `to`.

    `sender` is trusted as given; its balances are pulled without any check
    that the client controls it.
    """
    amount_a, amount_b, liquidity = pool.add_liquidity(
        request.token_a,
        request.token_b,
        request.amount_a_desired,
        request.amount_b_desired,
        request.amount_a_min,
        request.amount_b_min,
        request.to,
        request.deadline,
        sender=request.sender,
    )
    return AddLiquidityResponse(amount_a=amount_a, amount_b=amount_b, liquidity=liquidity)


@router.post("/liquidity/remove")
async def remove_liquidity(
    request: RemoveLiquidityRequest,
    pool: SimpleSwap = Depends(get_pool),
) -> RemoveLiquidityResponse:
    """Burn the sender's claim tokens and send both assets to `to`.

    `sender` is trusted as given, so a client can redeem any holder's claims.
    """
    amount_a, amount_b = pool.remove_liquidity(
        request.token_a,
        request.token_b,
        request.liquidity,
        request.amount_a_min,
        request.amount_b_min,
        request.to,
        request.deadline,
        sender=request.sender,
    )
    return RemoveLiquidityResponse(amount_a=amount_a, amount_b=amount_b)


@router.post("/swap")
async def swap(request: SwapRequest, pool: SimpleSwap = Depends(get_pool)) -> SwapResponse:
    """Exact-input swap along request.path, paid from the unverified `sender`."""
    amount_out = pool.swap_exact_tokens_for_tokens(
        request.amount_in,
        request.amount_out_min,
        request.path,
        request.to,
        request.deadline,
        sender=request.sender,
    )
    return SwapResponse(amount_out=amount_out)


@router.get("/price")
async def price(
    token_a: str = Query(alias="tokenA"),
    token_b: str = Query(alias="tokenB"),
    pool: SimpleSwap = Depends(get_pool),
) -> PriceResponse:
    """Price of tokenA in tokenB, scaled by 1e18."""
    value = pool.get_price(token_a, token_b)
    return PriceResponse(token_a=token_a, token_b=token_b, price=value)


@router.get("/amount-out")
async def amount_out(
    amount_in: int = Query(alias="amountIn", ge=0),
    reserve_in: int = Query(alias="reserveIn", ge=0),
    reserve_out: int = Query(alias="reserveOut", ge=0),
    pool: SimpleSwap = Depends(get_pool),
) -> AmountOutResponse:
    """Constant-product quote for arbitrary reserves."""
    return AmountOutResponse(amount_out=pool.get_amount_out(amount_in, reserve_in, reserve_out))


@router.post("/tokens/{token}/mint")
async def mint(token: str, request: MintRequest, pool: SimpleSwap = Depends(get_pool)) -> BalanceResponse:
    """Faucet mint on an asset ledger. The claim token refuses (403)."""
    ledger = _token_ledger(pool, token)
    ledger.mint(request.to, request.amount)
    return BalanceResponse(token=ledger.address, account=request.to, balance=ledger.balance_of(request.to))


@router.post("/tokens/{token}/approve")
async def approve(token: str, request: ApproveRequest, pool: SimpleSwap = Depends(get_pool)) -> dict[str, bool]:
    """Grant `spender` (usually the pool) an allowance over `owner`'s balance.

    `owner` is trusted as given; this is a faucet-style simulation endpoint.
    """
    ledger = _token_ledger(pool, token)
    return {"success": ledger.approve(request.owner, request.spender, request.amount)}


@router.get("/tokens/{token}/balance/{account}")
async def balance(token: str, account: str, pool: SimpleSwap = Depends(get_pool)) -> BalanceResponse:
    if not is_valid_address(normalize_address(account)):
        raise HTTPException(status_code=400, detail=f"Invalid account address: {account}")
    ledger = _token_ledger(pool, token)
    return BalanceResponse(token=ledger.address, account=account, balance=ledger.balance_of(account))


@router.get("/events")
async def events(pool: SimpleSwap = Depends(get_pool)) -> EventsResponse:
    """Every event the pool has emitted, oldest first."""
    return EventsResponse(
        events=[
            EventRecord(
                name=event.event_name(),
                signature=event.signature,
                args=event.model_dump(mode="json", by_alias=True),
                data="0x" + event.encode_data().hex(),
            )
            for event in pool.events
        ]
    )
