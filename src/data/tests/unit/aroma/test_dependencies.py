"""Unit tests for repository wiring."""

from unittest.mock import MagicMock, patch

import pytest
import structlog

from aroma.dependencies import (
    Repositories,
    create_cassandra_repositories,
    create_in_memory_repositories,
    create_repositories,
    data_layer,
)
from aroma.infrastructure.cassandra import CassandraApplicationRepository
from aroma.infrastructure.memory import InMemoryApplicationRepository
from aroma.infrastructure.sql import SqlCredentialRepository
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
from infrastructure.settings import Settings

PORTS = {
    "applications": IApplicationRepository,
    "users": IUserRepository,
    "organizations": IOrganizationRepository,
    "messages": IMessageRepository,
    "inbox": IInboxRepository,
    "followers": IFollowerRepository,
    "tokens": ITokenRepository,
    "activity": IActivityRepository,
    "media": IMediaRepository,
    "reactions": IReactionRepository,
    "credentials": ICredentialRepository,
    "preferences": IUserPreferencesRepository,
}


def _assert_ports(repositories: Repositories) -> None:
    for field, port in PORTS.items():
        assert isinstance(getattr(repositories, field), port), field


class TestCreateRepositories:
    """Tests for the repository factories."""

    def test_in_memory_family(self, defaults, clock):
        repositories = create_in_memory_repositories(defaults, clock)

        _assert_ports(repositories)
        assert isinstance(repositories.applications, InMemoryApplicationRepository)

    def test_in_memory_repositories_share_nothing(self, defaults, clock):
        """Each call builds an empty, independent twin."""
        first = create_in_memory_repositories(defaults, clock)
        second = create_in_memory_repositories(defaults, clock)

        assert first.applications is not second.applications

    def test_cassandra_family(self, mock_session, defaults, clock):
        repositories = create_cassandra_repositories(
            mock_session, MagicMock(), defaults, clock
        )

        _assert_ports(repositories)
        assert isinstance(repositories.applications, CassandraApplicationRepository)
        assert isinstance(repositories.credentials, SqlCredentialRepository)

    def test_backend_selected_by_settings(self, clock):
        repositories = create_repositories(Settings(backend="memory"), clock=clock)

        assert isinstance(repositories.users, IUserRepository)
        assert isinstance(repositories.applications, InMemoryApplicationRepository)

    def test_store_backend_requires_sessions(self):
        with pytest.raises(ValueError):
            create_repositories(Settings(backend="cassandra"))


class TestDataLayer:
    """Tests for the data_layer lifecycle context manager."""

    @pytest.fixture(autouse=True)
    def reset_structlog(self):
        yield
        structlog.reset_defaults()

    def test_memory_backend_opens_nothing(self):
        factory = MagicMock()

        with data_layer(
            Settings(backend="memory"), cassandra_session_factory=factory
        ) as repositories:
            assert isinstance(repositories.applications, InMemoryApplicationRepository)

        factory.__enter__.assert_not_called()

    def test_store_backend_opens_and_closes_sessions(self, mock_session):
        factory = MagicMock()
        factory.__enter__.return_value = mock_session
        engine = MagicMock()

        with patch(
            "aroma.dependencies.create_engine_from_settings", return_value=engine
        ), patch("aroma.dependencies.create_schema") as create_schema:
            with data_layer(
                Settings(backend="cassandra"), cassandra_session_factory=factory
            ) as repositories:
                assert isinstance(
                    repositories.applications, CassandraApplicationRepository
                )
                factory.__exit__.assert_not_called()

        create_schema.assert_not_called()
        factory.__exit__.assert_called_once()
        engine.dispose.assert_called_once()

    def test_schema_applied_on_request(self, mock_session):
        factory = MagicMock()
        factory.__enter__.return_value = mock_session

        with patch(
            "aroma.dependencies.create_engine_from_settings", return_value=MagicMock()
        ), patch("aroma.dependencies.create_schema") as create_schema, patch(
            "aroma.dependencies.Base"
        ) as base:
            with data_layer(
                Settings(backend="cassandra"),
                apply_schema=True,
                cassandra_session_factory=factory,
            ):
                pass

        create_schema.assert_called_once_with(mock_session)
        base.metadata.create_all.assert_called_once()

    def test_engine_disposed_when_body_raises(self, mock_session):
        factory = MagicMock()
        factory.__enter__.return_value = mock_session
        factory.__exit__.return_value = False
        engine = MagicMock()

        with patch(
            "aroma.dependencies.create_engine_from_settings", return_value=engine
        ):
            with pytest.raises(RuntimeError):
                with data_layer(
                    Settings(backend="cassandra"), cassandra_session_factory=factory
                ):
                    raise RuntimeError("boom")

        engine.dispose.assert_called_once()
