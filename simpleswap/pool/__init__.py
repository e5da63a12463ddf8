"""Pool accounting engine: state, engines and the pool instance."""

from simpleswap.pool.exchange import ExchangeEngine, exchange_engine
from simpleswap.pool.liquidity import (
    LiquidityEngine,
    compute_liquidity_burned,
    compute_liquidity_minted,
    liquidity_engine,
)
from simpleswap.pool.oracle import PriceOracle, price_oracle
from simpleswap.pool.simple_swap import SimpleSwap
from simpleswap.pool.state import AssetPair, PoolState, PoolStateSnapshot, Side

__all__ = [
    # State
    "PoolState",
    "PoolStateSnapshot",
    "AssetPair",
    "Side",
    # Engines
    "LiquidityEngine",
    "liquidity_engine",
    "compute_liquidity_minted",
    "compute_liquidity_burned",
    "ExchangeEngine",
    "exchange_engine",
    "PriceOracle",
    "price_oracle",
    # Pool instance
    "SimpleSwap",
]
