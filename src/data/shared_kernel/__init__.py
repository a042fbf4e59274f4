"""Shared Kernel module.

This module contains foundational components that are explicitly shared across
the bounded context and the infrastructure packages. Changes to this module
affect every repository implementation and should be carefully coordinated.
"""

from shared_kernel.clock import Clock, SystemClock

__all__ = [
    "Clock",
    "SystemClock",
]
