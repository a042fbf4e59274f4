"""Probes and observation context shared by every store adapter.

Store adapters report lifecycle events through a probe object instead of
calling the logger directly, so tests can assert on domain events.
"""

from infrastructure.observability.context import ObservationContext
from infrastructure.observability.probes import (
    ConnectionProbe,
    DefaultConnectionProbe,
)

__all__ = [
    "ConnectionProbe",
    "DefaultConnectionProbe",
    "ObservationContext",
]
