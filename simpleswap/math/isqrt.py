"""Integer square root.

Used once per pool lifetime: the first deposit mints
floor(sqrt(amount_a * amount_b)) claim tokens, which fixes the initial
claim-to-asset exchange rate at the geometric mean of the deposit.
"""

from __future__ import annotations

from simpleswap.errors import InvalidAmount


def isqrt(x: int) -> int:
    """Return floor(sqrt(x)) using Newton-Raphson over integers.

    Starts from z = x and guess = (x + 1) // 2, then repeatedly replaces z
    with the guess while the guess keeps shrinking. Every division rounds
    toward zero, so the sequence is strictly decreasing until it reaches
    floor(sqrt(x)), which makes the loop terminate in O(log x) steps.

    For x in {0, 1} the first guess is not smaller than z, so the loop body
    never runs and x itself is returned.

    Args:
        x: Non-negative integer (typically a product of two uint256 amounts)

    Returns:
        The largest integer z such that z * z <= x

    Raises:
        InvalidAmount: If x is negative or not an integer
    """
    if not isinstance(x, int) or isinstance(x, bool):
        raise InvalidAmount(f"isqrt requires an int, got {type(x).__name__}")
    if x < 0:
        raise InvalidAmount(f"isqrt of negative value: {x}")

    z = x
    guess = (x + 1) // 2
    while guess < z:
        z = guess
        guess = (z + x // z) // 2
    return z
