"""Shared plumbing for the relational repositories."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from aroma.infrastructure.observability import DefaultRepositoryProbe, RepositoryProbe
from aroma.ports.exceptions import InvalidArgumentError, OperationFailedError


class SqlRepository:
    """Base class for repositories drawing sessions from a sessionmaker.

    Every public operation runs in its own short transaction.
    """

    entity = "entity"

    def __init__(
        self,
        session_factory: sessionmaker[Session],
        probe: RepositoryProbe | None = None,
    ) -> None:
        """Initialize repository with a session factory and probe.

        Args:
            session_factory: Factory from create_session_factory()
            probe: Optional domain probe for observability
        """
        self._session_factory = session_factory
        self._probe = probe or DefaultRepositoryProbe(self.entity)

    @contextmanager
    def _validating(self, operation: str) -> Iterator[None]:
        try:
            yield
        except InvalidArgumentError as e:
            self._probe.invalid_argument(operation, str(e))
            raise

    @contextmanager
    def _transaction(self, operation: str, **details: Any) -> Iterator[Session]:
        """Open a session, commit on success and roll back on any error.

        Raises:
            OperationFailedError: If SQLAlchemy reports a failure
        """
        try:
            with self._session_factory.begin() as session:
                yield session
        except SQLAlchemyError as e:
            self._probe.operation_failed(operation, e, **details)
            raise OperationFailedError(f"{operation} failed: {e}") from e
