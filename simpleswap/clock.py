"""Clocks for deadline checks.

Deadlines are unix timestamps in whole seconds. An operation is accepted
while now() <= deadline.
"""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Protocol, runtime_checkable


@runtime_checkable
class Clock(Protocol):
    def now(self) -> int:
        """Current time as unix seconds."""
        ...


class SystemClock:
    """Wall-clock time."""

    def now(self) -> int:
        return int(time.time())


@dataclass
class FixedClock:
    """Manually driven clock for tests and simulations."""

    timestamp: int = 0

    def now(self) -> int:
        return self.timestamp

    def advance(self, seconds: int) -> None:
        self.timestamp += seconds

    def set(self, timestamp: int) -> None:
        self.timestamp = timestamp
