"""Session lifecycle for the wide-column store.

The cluster session is process-wide: it is opened once at startup, handed
to every repository through its constructor, and closed at shutdown. The
driver owns its own connection pool, so repositories hold nothing but the
session reference.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Callable

from cassandra import DriverException
from cassandra.auth import PlainTextAuthProvider
from cassandra.cluster import Cluster, NoHostAvailable, Session
from cassandra.query import dict_factory

from infrastructure.database.exceptions import DatabaseConnectionError
from infrastructure.observability.probes import (
    ConnectionProbe,
    DefaultConnectionProbe,
)

if TYPE_CHECKING:
    from infrastructure.settings import CassandraSettings

STORE_NAME = "cassandra"


class CassandraSessionFactory:
    """Opens and closes the process-wide Cassandra session.

    Rows are returned as dictionaries keyed by column name, and every
    request honours the configured timeout.

    Example:
        with CassandraSessionFactory(get_cassandra_settings()) as session:
            repository = CassandraApplicationRepository(session)
    """

    def __init__(
        self,
        settings: CassandraSettings,
        probe: ConnectionProbe | None = None,
        cluster_factory: Callable[..., Cluster] = Cluster,
    ):
        """Initialize the factory.

        Args:
            settings: Wide-column store settings
            probe: Optional observability probe
            cluster_factory: Callable building the driver Cluster
        """
        self._settings = settings
        self._probe = probe or DefaultConnectionProbe()
        self._cluster_factory = cluster_factory
        self._cluster: Cluster | None = None
        self._session: Session | None = None

    @property
    def session(self) -> Session | None:
        """The open session, or None before connect()."""
        return self._session

    def connect(self) -> Session:
        """Connect to the cluster and the configured keyspace.

        Calling connect() again returns the already open session.

        Raises:
            DatabaseConnectionError: If no host can be reached
        """
        if self._session is not None:
            return self._session

        settings = self._settings
        try:
            self._cluster = self._cluster_factory(**self._cluster_kwargs())
            session = self._cluster.connect(settings.keyspace)
        except (NoHostAvailable, DriverException) as e:
            self._probe.connection_failed(
                store=STORE_NAME,
                hosts=settings.contact_points,
                name=settings.keyspace,
                error=e,
            )
            self._shutdown_cluster()
            raise DatabaseConnectionError(f"Failed to connect to Cassandra: {e}") from e

        session.row_factory = dict_factory
        session.default_timeout = settings.request_timeout_seconds
        self._session = session

        self._probe.connection_established(
            store=STORE_NAME,
            hosts=settings.contact_points,
            name=settings.keyspace,
        )
        return session

    def close(self) -> None:
        """Shut down the session and the cluster."""
        if self._session is not None:
            self._session.shutdown()
            self._session = None
        if self._shutdown_cluster():
            self._probe.connection_closed(store=STORE_NAME)

    def _shutdown_cluster(self) -> bool:
        if self._cluster is None:
            return False
        self._cluster.shutdown()
        self._cluster = None
        return True

    def _cluster_kwargs(self) -> dict[str, Any]:
        settings = self._settings
        kwargs: dict[str, Any] = {
            "contact_points": settings.contact_points,
            "port": settings.port,
        }
        if settings.username:
            kwargs["auth_provider"] = PlainTextAuthProvider(
                username=settings.username,
                password=settings.password.get_secret_value(),
            )
        if settings.protocol_version is not None:
            kwargs["protocol_version"] = settings.protocol_version
        return kwargs

    def __enter__(self) -> Session:
        return self.connect()

    def __exit__(self, exc_type: Any, exc: Any, tb: Any) -> None:
        self.close()
