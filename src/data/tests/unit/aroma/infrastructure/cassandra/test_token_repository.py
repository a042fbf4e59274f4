"""Unit tests for CassandraTokenRepository."""

import uuid
from unittest.mock import patch

import pytest
from cassandra.query import BatchStatement

from aroma.domain.entities import AuthenticationToken
from aroma.infrastructure.cassandra import statements
from aroma.infrastructure.cassandra.token_repository import CassandraTokenRepository
from aroma.ports.exceptions import InvalidArgumentError, InvalidCredentialsError
from aroma.ports.repositories import ITokenRepository
from tests.unit.ids import (
    OTHER_OWNER_ID,
    OWNER_ID,
    SECOND_TOKEN_ID,
    START_MILLIS,
    TOKEN_ID,
)


def _row(token_id=TOKEN_ID, owner_id=OWNER_ID):
    return {"token_id": uuid.UUID(token_id), "owner_id": uuid.UUID(owner_id)}


@pytest.fixture
def repository(mock_session, mock_probe, defaults, clock):
    """Provide a repository over a mocked session."""
    return CassandraTokenRepository(
        session=mock_session, probe=mock_probe, defaults=defaults, clock=clock
    )


class TestSaveToken:
    """Tests for save_token."""

    def test_implements_protocol(self, repository):
        assert isinstance(repository, ITokenRepository)

    def test_ttl_is_time_remaining(self, repository, mock_probe):
        """Rows live until the token's own expiration."""
        token = AuthenticationToken(
            token_id=TOKEN_ID,
            owner_id=OWNER_ID,
            time_of_expiration=START_MILLIS + 90_500,
        )

        repository.save_token(token)

        assert mock_probe.entity_saved.call_args.kwargs["ttl"] == 91

    def test_default_lifetime_without_expiration(self, repository, mock_probe, defaults):
        repository.save_token(AuthenticationToken(token_id=TOKEN_ID, owner_id=OWNER_ID))

        ttl = mock_probe.entity_saved.call_args.kwargs["ttl"]
        assert ttl == defaults.token_lifetime.to_seconds()

    def test_expired_token_rejected(self, repository, mock_session, mock_probe):
        """A token already past its expiration cannot be stored."""
        token = AuthenticationToken(
            token_id=TOKEN_ID, owner_id=OWNER_ID, time_of_expiration=START_MILLIS
        )

        with pytest.raises(InvalidArgumentError):
            repository.save_token(token)

        mock_session.execute.assert_not_called()
        mock_probe.invalid_argument.assert_called_once()

    def test_token_without_owner_rejected(self, repository):
        with pytest.raises(InvalidArgumentError):
            repository.save_token(AuthenticationToken(token_id=TOKEN_ID))


class TestResaveWithNewOwner:
    """Tests for re-saving a token under another owner."""

    def test_old_owner_row_deleted_in_same_batch(self, repository, mock_session):
        mock_session.execute.side_effect = [[_row()], None]

        with patch.object(
            statements, "insert_token", wraps=statements.insert_token
        ) as insert:
            repository.save_token(
                AuthenticationToken(token_id=TOKEN_ID, owner_id=OTHER_OWNER_ID)
            )

        batch = statements.insert_token(*insert.call_args.args)
        assert batch.statements[0].query == (
            "DELETE FROM Tokens_By_Owner WHERE owner_id = %s AND token_id = %s"
        )
        assert batch.statements[0].parameters == (
            uuid.UUID(OWNER_ID),
            uuid.UUID(TOKEN_ID),
        )
        assert len(mock_session.execute.call_args.args[0]) == 3

    def test_same_owner_only_overwrites(self, repository, mock_session):
        mock_session.execute.side_effect = [[_row()], None]

        repository.save_token(AuthenticationToken(token_id=TOKEN_ID, owner_id=OWNER_ID))

        assert len(mock_session.execute.call_args.args[0]) == 2


class TestReadAndDelete:
    """Tests for reads and deletes."""

    def test_missing_token_is_invalid_credentials(self, repository):
        with pytest.raises(InvalidCredentialsError):
            repository.get_token(TOKEN_ID)

    def test_does_token_belong_to(self, repository, mock_session):
        mock_session.execute.return_value = [_row()]

        assert repository.does_token_belong_to(TOKEN_ID, OWNER_ID) is True

    def test_delete_token_removes_both_rows(self, repository, mock_session):
        mock_session.execute.side_effect = [[_row()], None]

        repository.delete_token(TOKEN_ID)

        assert isinstance(mock_session.execute.call_args.args[0], BatchStatement)

    def test_delete_tokens_drops_partition_then_primaries(self, repository, mock_session):
        """The owner partition is range-deleted, then each primary row."""
        mock_session.execute.side_effect = [
            [_row(), _row(SECOND_TOKEN_ID)],
            [_row()],
            [_row(SECOND_TOKEN_ID)],
            None,
            None,
        ]

        repository.delete_tokens(OWNER_ID)

        calls = mock_session.execute.call_args_list
        assert calls[3].args[0].query_string == (
            "DELETE FROM Tokens_By_Owner WHERE owner_id = %s"
        )
        assert isinstance(calls[4].args[0], BatchStatement)
        assert len(calls[4].args[0]) == 2

    def test_delete_tokens_keeps_token_now_held_by_other_owner(
        self, repository, mock_session, mock_probe
    ):
        """A listed token whose primary row names another owner survives."""
        mock_session.execute.side_effect = [
            [_row(), _row(SECOND_TOKEN_ID)],
            [_row(owner_id=OTHER_OWNER_ID)],
            [_row(SECOND_TOKEN_ID)],
            None,
            None,
        ]

        repository.delete_tokens(OWNER_ID)

        batch = mock_session.execute.call_args_list[4].args[0]
        assert len(batch) == 1
        mock_probe.entity_deleted.assert_called_once_with(OWNER_ID, tokens=1)

    def test_delete_tokens_without_tokens_skips_batch(self, repository, mock_session):
        repository.delete_tokens(OWNER_ID)

        assert mock_session.execute.call_count == 2
