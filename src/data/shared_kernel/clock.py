"""Clock port used by every TTL-aware repository.

Repositories never read the wall clock directly. They receive a Clock so
that expiry arithmetic can be driven deterministically in tests.
"""

from __future__ import annotations

import time
from typing import Protocol, runtime_checkable


@runtime_checkable
class Clock(Protocol):
    """Source of the current time in epoch milliseconds."""

    def now_millis(self) -> int:
        """Return the current time as milliseconds since the Unix epoch."""
        ...


class SystemClock:
    """Clock backed by the system wall clock."""

    def now_millis(self) -> int:
        """Return the current time as milliseconds since the Unix epoch."""
        return time.time_ns() // 1_000_000
