"""Pool error classes.

Every failure carries a human-readable reason string. The hierarchy
separates caller mistakes (ValidationError), degenerate pool state
(StateConsistencyError) and failures of the injected ledgers
(ExternalDependencyError). All of them abort the enclosing operation
with no side effect.
"""


class SimpleSwapError(Exception):
    """Base error for pool operations."""

    @property
    def reason(self) -> str:
        """The failure reason, as reported to callers."""
        return str(self.args[0]) if self.args else self.__class__.__name__


# --- Validation ---


class ValidationError(SimpleSwapError):
    """Caller input rejected before any state change."""

    pass


class DeadlineExceeded(ValidationError):
    """The operation was submitted after its deadline."""

    pass


class ZeroAmount(ValidationError):
    """A required amount is zero."""

    pass


class InvalidAmount(ValidationError):
    """An amount is negative, not an integer, or exceeds uint256."""

    pass


class InvalidMinimum(ValidationError):
    """A minimum amount exceeds the corresponding desired amount."""

    pass


class InvalidPath(ValidationError):
    """Swap path is not exactly [input, output] of two distinct assets."""

    pass


class UnknownAsset(ValidationError):
    """Asset identity is not one of the pool's two assets."""

    pass


class InvalidAddress(ValidationError):
    """An account or asset identity is not a 0x-prefixed 20-byte hex address."""

    pass


class ZeroReserve(ValidationError):
    """A reserve used as a denominator is zero."""

    pass


class InsufficientOutputAmount(ValidationError):
    """Slippage check failed: received amount is below the caller's minimum."""

    pass


# --- State consistency ---


class StateConsistencyError(SimpleSwapError):
    """Pool state is degenerate or inconsistent for the requested operation."""

    pass


class InsufficientLiquidity(StateConsistencyError):
    """Pool is empty, or the operation would mint or deliver nothing."""

    pass


class InvariantViolation(StateConsistencyError):
    """A pool invariant does not hold after a transition."""

    pass


# --- External dependencies ---


class ExternalDependencyError(SimpleSwapError):
    """An injected ledger refused or failed a call."""

    pass


class TransferFailed(ExternalDependencyError):
    """An asset ledger reported an unsuccessful transfer."""

    pass


class InsufficientBalance(ExternalDependencyError):
    """Account balance is too low for the requested debit."""

    pass


class InsufficientAllowance(ExternalDependencyError):
    """Spender allowance is too low for the requested transferFrom."""

    pass


class Unauthorized(ExternalDependencyError):
    """Caller may not mint or burn on this ledger."""

    pass


# --- Concurrency ---


class ReentrancyError(SimpleSwapError):
    """A mutating call re-entered the pool while another was in progress."""

    pass
