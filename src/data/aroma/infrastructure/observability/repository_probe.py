"""Domain probe for Aroma repository operations.

Following Domain-Oriented Observability patterns, this probe captures
domain-significant events of every repository. One probe instance is bound
to an entity name ("application", "message", ...) so every event it emits
is tagged with the entity it concerns.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from infrastructure.observability.context import ObservationContext


class RepositoryProbe(Protocol):
    """Domain probe for repository operations."""

    def entity_saved(self, entity_id: str, **details: Any) -> None:
        """Record that an entity was written."""
        ...

    def entity_retrieved(self, entity_id: str) -> None:
        """Record that an entity was read."""
        ...

    def entity_not_found(self, entity_id: str) -> None:
        """Record that a requested entity was absent."""
        ...

    def entity_deleted(self, entity_id: str, **details: Any) -> None:
        """Record that an entity was removed."""
        ...

    def entities_listed(self, query: str, key: str, count: int) -> None:
        """Record the result size of a list query."""
        ...

    def invalid_argument(self, operation: str, reason: str) -> None:
        """Record that a call was rejected before reaching the store."""
        ...

    def operation_failed(self, operation: str, error: Exception, **details: Any) -> None:
        """Record that the store failed an operation."""
        ...

    def with_context(self, context: ObservationContext) -> RepositoryProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultRepositoryProbe:
    """Default implementation of RepositoryProbe using structlog."""

    def __init__(
        self,
        entity: str,
        logger: structlog.stdlib.BoundLogger | None = None,
        context: ObservationContext | None = None,
    ):
        self._entity = entity
        self._logger = logger or structlog.get_logger()
        self._context = context

    def _get_context_kwargs(self) -> dict[str, Any]:
        """Get context metadata as kwargs for logging."""
        if self._context is None:
            return {}
        return self._context.as_dict()

    def with_context(self, context: ObservationContext) -> DefaultRepositoryProbe:
        """Create a new probe with observation context bound."""
        return DefaultRepositoryProbe(
            entity=self._entity, logger=self._logger, context=context
        )

    def entity_saved(self, entity_id: str, **details: Any) -> None:
        """Record that an entity was written."""
        self._logger.info(
            f"{self._entity}_saved",
            entity_id=entity_id,
            **details,
            **self._get_context_kwargs(),
        )

    def entity_retrieved(self, entity_id: str) -> None:
        """Record that an entity was read."""
        self._logger.debug(
            f"{self._entity}_retrieved",
            entity_id=entity_id,
            **self._get_context_kwargs(),
        )

    def entity_not_found(self, entity_id: str) -> None:
        """Record that a requested entity was absent."""
        self._logger.debug(
            f"{self._entity}_not_found",
            entity_id=entity_id,
            **self._get_context_kwargs(),
        )

    def entity_deleted(self, entity_id: str, **details: Any) -> None:
        """Record that an entity was removed."""
        self._logger.info(
            f"{self._entity}_deleted",
            entity_id=entity_id,
            **details,
            **self._get_context_kwargs(),
        )

    def entities_listed(self, query: str, key: str, count: int) -> None:
        """Record the result size of a list query."""
        self._logger.debug(
            f"{self._entity}_listed",
            query=query,
            key=key,
            count=count,
            **self._get_context_kwargs(),
        )

    def invalid_argument(self, operation: str, reason: str) -> None:
        """Record that a call was rejected before reaching the store."""
        self._logger.warning(
            f"{self._entity}_invalid_argument",
            operation=operation,
            reason=reason,
            **self._get_context_kwargs(),
        )

    def operation_failed(self, operation: str, error: Exception, **details: Any) -> None:
        """Record that the store failed an operation."""
        self._logger.error(
            f"{self._entity}_operation_failed",
            operation=operation,
            error=str(error),
            error_type=type(error).__name__,
            **details,
            **self._get_context_kwargs(),
        )
