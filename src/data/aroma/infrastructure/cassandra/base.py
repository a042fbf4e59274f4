"""Shared plumbing for the wide-column repositories.

Every repository sends statements through ``CassandraRepository._execute``,
which translates driver failures into OperationFailedError after reporting
them through the repository probe. Typed failures raised by the
repositories themselves pass through untouched.
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from typing import TYPE_CHECKING, Any

from cassandra import DriverException, OperationTimedOut
from cassandra.cluster import NoHostAvailable
from cassandra.query import BatchStatement, BatchType, SimpleStatement

from aroma.infrastructure.cassandra.statements import CqlBatch, CqlStatement
from aroma.infrastructure.observability import DefaultRepositoryProbe, RepositoryProbe
from aroma.ports.assertions import check_lifetime
from aroma.ports.exceptions import InvalidArgumentError, OperationFailedError
from infrastructure.settings import DataLayerDefaults, get_data_layer_defaults
from shared_kernel.clock import Clock, SystemClock

if TYPE_CHECKING:
    from cassandra.cluster import Session

    from aroma.domain.value_objects import LengthOfTime

STORE_ERRORS: tuple[type[Exception], ...] = (
    DriverException,
    NoHostAvailable,
    OperationTimedOut,
)

Row = dict[str, Any]


class CassandraRepository:
    """Base class for repositories backed by a Cassandra session.

    Subclasses set ``entity`` to the name their probe events are tagged with.
    """

    entity = "entity"

    def __init__(
        self,
        session: Session,
        probe: RepositoryProbe | None = None,
        defaults: DataLayerDefaults | None = None,
        clock: Clock | None = None,
    ) -> None:
        """Initialize repository with the shared session.

        Args:
            session: Open session whose row factory returns dicts
            probe: Optional domain probe for observability
            defaults: Service-wide lifetimes and bounds
            clock: Time source for expiry arithmetic
        """
        self._session = session
        self._probe = probe or DefaultRepositoryProbe(self.entity)
        self._defaults = defaults or get_data_layer_defaults()
        self._clock = clock or SystemClock()

    @contextmanager
    def _validating(self, operation: str) -> Iterator[None]:
        """Report rejected arguments through the probe and re-raise."""
        try:
            yield
        except InvalidArgumentError as e:
            self._probe.invalid_argument(operation, str(e))
            raise

    def _execute(
        self, statement: CqlStatement | CqlBatch, operation: str, **details: Any
    ) -> list[Row]:
        """Send a statement or logged batch and return the rows it produced.

        Raises:
            OperationFailedError: If the driver reports any failure
        """
        if isinstance(statement, CqlBatch):
            batch = BatchStatement(batch_type=BatchType.LOGGED)
            for item in statement.statements:
                batch.add(SimpleStatement(item.query), item.parameters)
            request: tuple[Any, ...] = (batch,)
        else:
            request = (SimpleStatement(statement.query), statement.parameters)

        try:
            result = self._session.execute(*request)
        except STORE_ERRORS as e:
            self._probe.operation_failed(operation, e, **details)
            raise OperationFailedError(f"{operation} failed: {e}") from e

        if result is None:
            return []
        return list(result)

    def _one(self, statement: CqlStatement, operation: str, **details: Any) -> Row | None:
        rows = self._execute(statement, operation, **details)
        return rows[0] if rows else None

    def _count(self, statement: CqlStatement, operation: str, **details: Any) -> int:
        row = self._one(statement, operation, **details)
        if row is None:
            return 0
        return int(row.get("count") or 0)

    def _ttl_seconds(self, lifetime: LengthOfTime | None, default: LengthOfTime) -> int:
        """Whole seconds of a caller lifetime, or of the default when None.

        Raises:
            InvalidArgumentError: If the lifetime is not positive
        """
        if lifetime is None:
            lifetime = default
        check_lifetime(lifetime)
        return lifetime.to_seconds()
