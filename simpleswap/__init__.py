"""SimpleSwap - a two-asset constant-product liquidity pool."""

from simpleswap.pool.simple_swap import SimpleSwap

__version__ = "0.1.0"
__all__ = ["SimpleSwap", "__version__"]
