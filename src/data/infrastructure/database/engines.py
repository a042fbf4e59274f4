"""Engine creation for the relational store.

The relational store is secondary: it holds credentials and user
preferences. Repositories are synchronous, so the engine and its
sessionmaker are the plain (non-async) SQLAlchemy variants.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import create_engine
from sqlalchemy.engine import URL, Engine, make_url
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from infrastructure.database.exceptions import DatabaseConnectionError
from infrastructure.observability.probes import (
    ConnectionProbe,
    DefaultConnectionProbe,
)

if TYPE_CHECKING:
    from infrastructure.settings import DatabaseSettings

__all__ = [
    "build_url",
    "create_engine_from_settings",
    "create_session_factory",
]


def create_engine_from_settings(
    settings: DatabaseSettings, probe: ConnectionProbe | None = None
) -> Engine:
    """Create the process-wide engine for the relational store.

    Args:
        settings: Database connection settings
        probe: Optional observability probe

    Returns:
        Configured engine with a bounded pool (SQLite URLs use the default
        pool, which does not accept sizing arguments)

    Raises:
        DatabaseConnectionError: If the URL or driver is unusable
    """
    probe = probe or DefaultConnectionProbe()
    url = build_url(settings)

    kwargs: dict[str, object] = {"echo": settings.echo, "pool_pre_ping": True}
    if url.get_backend_name() != "sqlite":
        kwargs["pool_size"] = settings.pool_min_connections
        kwargs["max_overflow"] = (
            settings.pool_max_connections - settings.pool_min_connections
        )

    try:
        engine = create_engine(url, **kwargs)
    except (SQLAlchemyError, ImportError) as e:
        probe.connection_failed(
            store="sql", hosts=[settings.host], name=settings.database, error=e
        )
        raise DatabaseConnectionError(f"Failed to create engine: {e}") from e

    probe.connection_established(
        store="sql", hosts=[url.host or "local"], name=url.database or ""
    )
    return engine


def create_session_factory(engine: Engine) -> sessionmaker[Session]:
    """Create the sessionmaker repositories draw short-lived sessions from.

    ``expire_on_commit`` is disabled so values read inside a session remain
    usable after it closes.
    """
    return sessionmaker(bind=engine, expire_on_commit=False)


def build_url(settings: DatabaseSettings) -> URL:
    """Build the database URL.

    An explicit ``url`` setting wins. Otherwise the URL is assembled with
    SQLAlchemy's URL builder so credentials are percent-encoded per RFC 3986.
    """
    if settings.url:
        return make_url(settings.url)

    return URL.create(
        drivername=settings.drivername,
        username=settings.username,
        password=settings.password.get_secret_value(),
        host=settings.host,
        port=settings.port,
        database=settings.database,
    )
