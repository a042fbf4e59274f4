"""Wiring for the Aroma repositories.

The service tier asks for one ``Repositories`` bundle at startup. Which
family backs it is chosen by ``Settings.backend``: the wide-column store
(with the relational store for credentials and preferences) or the
in-memory twin.
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from typing import TYPE_CHECKING

from aroma.infrastructure.cassandra import (
    CassandraActivityRepository,
    CassandraApplicationRepository,
    CassandraFollowerRepository,
    CassandraInboxRepository,
    CassandraMediaRepository,
    CassandraMessageRepository,
    CassandraOrganizationRepository,
    CassandraReactionRepository,
    CassandraTokenRepository,
    CassandraUserRepository,
    create_schema,
)
from aroma.infrastructure.memory import (
    InMemoryActivityRepository,
    InMemoryApplicationRepository,
    InMemoryCredentialRepository,
    InMemoryFollowerRepository,
    InMemoryInboxRepository,
    InMemoryMediaRepository,
    InMemoryMessageRepository,
    InMemoryOrganizationRepository,
    InMemoryReactionRepository,
    InMemoryTokenRepository,
    InMemoryUserPreferencesRepository,
    InMemoryUserRepository,
)
from aroma.infrastructure.sql import SqlCredentialRepository, SqlUserPreferencesRepository
from aroma.ports.repositories import (
    IActivityRepository,
    IApplicationRepository,
    ICredentialRepository,
    IFollowerRepository,
    IInboxRepository,
    IMediaRepository,
    IMessageRepository,
    IOrganizationRepository,
    IReactionRepository,
    ITokenRepository,
    IUserPreferencesRepository,
    IUserRepository,
)
from infrastructure.cassandra import CassandraSessionFactory
from infrastructure.database import (
    Base,
    create_engine_from_settings,
    create_session_factory,
)
from infrastructure.logging import configure_logging
from infrastructure.settings import DataLayerDefaults, Settings, get_settings
from shared_kernel.clock import Clock

if TYPE_CHECKING:
    from cassandra.cluster import Session
    from sqlalchemy.orm import Session as SqlSession
    from sqlalchemy.orm import sessionmaker


@dataclass(frozen=True)
class Repositories:
    """Every Aroma repository, as seen through its port."""

    applications: IApplicationRepository
    users: IUserRepository
    organizations: IOrganizationRepository
    messages: IMessageRepository
    inbox: IInboxRepository
    followers: IFollowerRepository
    tokens: ITokenRepository
    activity: IActivityRepository
    media: IMediaRepository
    reactions: IReactionRepository
    credentials: ICredentialRepository
    preferences: IUserPreferencesRepository


def create_cassandra_repositories(
    session: Session,
    session_factory: sessionmaker[SqlSession],
    defaults: DataLayerDefaults | None = None,
    clock: Clock | None = None,
) -> Repositories:
    """Build the store-backed repositories around already open sessions."""
    kwargs = {"session": session, "defaults": defaults, "clock": clock}
    return Repositories(
        applications=CassandraApplicationRepository(**kwargs),
        users=CassandraUserRepository(**kwargs),
        organizations=CassandraOrganizationRepository(**kwargs),
        messages=CassandraMessageRepository(**kwargs),
        inbox=CassandraInboxRepository(**kwargs),
        followers=CassandraFollowerRepository(**kwargs),
        tokens=CassandraTokenRepository(**kwargs),
        activity=CassandraActivityRepository(**kwargs),
        media=CassandraMediaRepository(**kwargs),
        reactions=CassandraReactionRepository(**kwargs),
        credentials=SqlCredentialRepository(session_factory),
        preferences=SqlUserPreferencesRepository(session_factory),
    )


def create_in_memory_repositories(
    defaults: DataLayerDefaults | None = None,
    clock: Clock | None = None,
) -> Repositories:
    """Build a fresh, empty in-memory twin."""
    kwargs = {"defaults": defaults, "clock": clock}
    return Repositories(
        applications=InMemoryApplicationRepository(**kwargs),
        users=InMemoryUserRepository(**kwargs),
        organizations=InMemoryOrganizationRepository(**kwargs),
        messages=InMemoryMessageRepository(**kwargs),
        inbox=InMemoryInboxRepository(**kwargs),
        followers=InMemoryFollowerRepository(**kwargs),
        tokens=InMemoryTokenRepository(**kwargs),
        activity=InMemoryActivityRepository(**kwargs),
        media=InMemoryMediaRepository(**kwargs),
        reactions=InMemoryReactionRepository(**kwargs),
        credentials=InMemoryCredentialRepository(**kwargs),
        preferences=InMemoryUserPreferencesRepository(**kwargs),
    )


def create_repositories(
    settings: Settings | None = None,
    session: Session | None = None,
    session_factory: sessionmaker[SqlSession] | None = None,
    clock: Clock | None = None,
) -> Repositories:
    """Build the repository family selected by ``settings.backend``.

    Raises:
        ValueError: If the store backend is selected without open sessions
    """
    settings = settings or get_settings()
    if settings.backend == "memory":
        return create_in_memory_repositories(settings.defaults, clock)

    if session is None or session_factory is None:
        raise ValueError("The cassandra backend needs an open session and session factory")
    return create_cassandra_repositories(session, session_factory, settings.defaults, clock)


@contextmanager
def data_layer(
    settings: Settings | None = None,
    apply_schema: bool = False,
    cassandra_session_factory: CassandraSessionFactory | None = None,
) -> Iterator[Repositories]:
    """Open the stores, yield the repositories, and close the stores on exit.

    Manages:
    - structlog configuration
    - the process-wide Cassandra session (opened once, closed on exit)
    - the relational engine and its sessionmaker

    The memory backend opens nothing.
    """
    settings = settings or get_settings()
    configure_logging(
        "DEBUG" if settings.debug else "INFO", service=settings.app_name
    )

    if settings.backend == "memory":
        yield create_in_memory_repositories(settings.defaults)
        return

    factory = cassandra_session_factory or CassandraSessionFactory(settings.cassandra)
    engine = create_engine_from_settings(settings.database)
    try:
        with factory as session:
            if apply_schema:
                create_schema(session)
                Base.metadata.create_all(engine)
            yield create_cassandra_repositories(
                session, create_session_factory(engine), settings.defaults
            )
    finally:
        engine.dispose()
