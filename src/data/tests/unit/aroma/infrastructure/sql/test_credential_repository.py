"""Unit tests for SqlCredentialRepository."""

from unittest.mock import MagicMock

import pytest
from sqlalchemy.exc import OperationalError

from aroma.infrastructure.sql import SqlCredentialRepository
from aroma.ports.exceptions import (
    InvalidArgumentError,
    InvalidCredentialsError,
    OperationFailedError,
)
from aroma.ports.repositories import ICredentialRepository
from tests.unit.ids import USER_ID


@pytest.fixture
def repository(session_factory, mock_probe):
    """Provide a repository over the in-memory database."""
    return SqlCredentialRepository(session_factory, probe=mock_probe)


class TestSqlCredentialRepository:
    """Tests for SqlCredentialRepository."""

    def test_implements_protocol(self, repository):
        assert isinstance(repository, ICredentialRepository)

    def test_save_then_get(self, repository):
        """A saved hash is returned unchanged."""
        repository.save_encrypted_password(USER_ID, "$2b$12$hash")

        assert repository.get_encrypted_password(USER_ID) == "$2b$12$hash"
        assert repository.contains_encrypted_password(USER_ID) is True

    def test_save_replaces_existing_hash(self, repository):
        """Saving twice keeps only the latest hash."""
        repository.save_encrypted_password(USER_ID, "first")
        repository.save_encrypted_password(USER_ID, "second")

        assert repository.get_encrypted_password(USER_ID) == "second"

    def test_missing_password_is_invalid_credentials(self, repository, mock_probe):
        with pytest.raises(InvalidCredentialsError):
            repository.get_encrypted_password(USER_ID)

        mock_probe.entity_not_found.assert_called_once_with(USER_ID)

    def test_delete_is_idempotent(self, repository):
        """Deleting twice leaves the User without a hash and does not fail."""
        repository.save_encrypted_password(USER_ID, "hash")

        repository.delete_encrypted_password(USER_ID)
        repository.delete_encrypted_password(USER_ID)

        assert repository.contains_encrypted_password(USER_ID) is False

    def test_rejects_empty_password(self, repository, mock_probe):
        with pytest.raises(InvalidArgumentError):
            repository.save_encrypted_password(USER_ID, "")

        mock_probe.invalid_argument.assert_called_once()

    def test_rejects_malformed_user_id(self, repository):
        with pytest.raises(InvalidArgumentError):
            repository.contains_encrypted_password("someone")

    def test_database_errors_become_operation_failed(self, mock_probe):
        """SQLAlchemy failures surface as OperationFailedError."""
        error = OperationalError("SELECT", {}, Exception("database is locked"))
        session_factory = MagicMock()
        session_factory.begin.side_effect = error
        repository = SqlCredentialRepository(session_factory, probe=mock_probe)

        with pytest.raises(OperationFailedError):
            repository.get_encrypted_password(USER_ID)

        mock_probe.operation_failed.assert_called_once_with(
            "get_encrypted_password", error, user_id=USER_ID
        )
