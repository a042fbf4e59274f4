"""Domain probes for store session observability.

Domain probes provide a high-level instrumentation API oriented around
domain semantics, keeping infrastructure code clean and testable.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from infrastructure.observability.context import ObservationContext


class ConnectionProbe(Protocol):
    """Domain probe for store connection observability.

    Captures the lifecycle of the process-wide store sessions: the
    wide-column cluster session and the relational engine.
    """

    def connection_established(self, store: str, hosts: list[str], name: str) -> None:
        """Record that a session to a store was successfully established."""
        ...

    def connection_failed(
        self, store: str, hosts: list[str], name: str, error: Exception
    ) -> None:
        """Record that a session could not be established."""
        ...

    def connection_closed(self, store: str) -> None:
        """Record that a session was shut down."""
        ...

    def schema_applied(self, store: str, statement_count: int) -> None:
        """Record that development schema statements were executed."""
        ...

    def with_context(self, context: ObservationContext) -> ConnectionProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultConnectionProbe:
    """Default implementation of ConnectionProbe using structlog.

    Supports observation context for including request-scoped metadata
    with all log events.
    """

    def __init__(
        self,
        logger: structlog.stdlib.BoundLogger | None = None,
        context: ObservationContext | None = None,
    ):
        self._logger = logger or structlog.get_logger()
        self._context = context

    def _get_context_kwargs(self) -> dict[str, Any]:
        """Get context metadata as kwargs for logging."""
        if self._context is None:
            return {}
        return self._context.as_dict()

    def with_context(self, context: ObservationContext) -> DefaultConnectionProbe:
        """Create a new probe with observation context bound."""
        return DefaultConnectionProbe(logger=self._logger, context=context)

    def connection_established(self, store: str, hosts: list[str], name: str) -> None:
        """Record that a session to a store was successfully established."""
        self._logger.info(
            "store_connection_established",
            store=store,
            hosts=hosts,
            name=name,
            **self._get_context_kwargs(),
        )

    def connection_failed(
        self, store: str, hosts: list[str], name: str, error: Exception
    ) -> None:
        """Record that a session could not be established."""
        self._logger.error(
            "store_connection_failed",
            store=store,
            hosts=hosts,
            name=name,
            error=str(error),
            **self._get_context_kwargs(),
        )

    def connection_closed(self, store: str) -> None:
        """Record that a session was shut down."""
        self._logger.info(
            "store_connection_closed",
            store=store,
            **self._get_context_kwargs(),
        )

    def schema_applied(self, store: str, statement_count: int) -> None:
        """Record that development schema statements were executed."""
        self._logger.info(
            "store_schema_applied",
            store=store,
            statement_count=statement_count,
            **self._get_context_kwargs(),
        )
