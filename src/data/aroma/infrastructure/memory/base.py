"""Shared plumbing for the in-memory repositories.

TTL is modelled by stamping each row with the instant it expires and
ignoring expired rows on every read. Expired rows are never evicted
eagerly; they are dropped lazily when a read or write touches them.
"""

from __future__ import annotations

import copy
import threading
from dataclasses import dataclass
from typing import TYPE_CHECKING, Generic, TypeVar

from aroma.ports.assertions import check_lifetime
from infrastructure.settings import DataLayerDefaults, get_data_layer_defaults
from shared_kernel.clock import Clock, SystemClock

if TYPE_CHECKING:
    from aroma.domain.value_objects import LengthOfTime

T = TypeVar("T")


@dataclass
class Expiring(Generic[T]):
    """A stored value and the epoch millis at which it stops being visible."""

    value: T
    expires_at: int | None = None


class InMemoryRepository:
    """Base class for the dictionary-backed repositories.

    Stored entities are deep copies, so callers mutating an entity after
    saving it (or after reading it) never change what is stored.
    """

    def __init__(
        self,
        defaults: DataLayerDefaults | None = None,
        clock: Clock | None = None,
    ) -> None:
        self._lock = threading.RLock()
        self._defaults = defaults or get_data_layer_defaults()
        self._clock = clock or SystemClock()

    @staticmethod
    def _copy(value: T) -> T:
        return copy.deepcopy(value)

    def _expires_at(self, lifetime: LengthOfTime | None, default: LengthOfTime) -> int:
        """Expiry instant for a caller lifetime, or the default when None.

        Lifetimes are rounded up to whole seconds, as a store TTL would be.

        Raises:
            InvalidArgumentError: If the lifetime is not positive
        """
        if lifetime is None:
            lifetime = default
        check_lifetime(lifetime)
        return self._clock.now_millis() + lifetime.to_seconds() * 1000

    def _is_live(self, entry: Expiring) -> bool:
        return entry.expires_at is None or self._clock.now_millis() < entry.expires_at

    def _live(self, entries: dict[str, Expiring[T]]) -> dict[str, T]:
        """Drop expired entries in place and return the remaining values."""
        for key in [key for key, entry in entries.items() if not self._is_live(entry)]:
            del entries[key]
        return {key: entry.value for key, entry in entries.items()}
