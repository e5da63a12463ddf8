"""Integer math primitives for pool accounting.

- isqrt: floor square root by integer Newton-Raphson, used to size the
  first claim-token mint
"""

from simpleswap.math.isqrt import isqrt

__all__ = ["isqrt"]
