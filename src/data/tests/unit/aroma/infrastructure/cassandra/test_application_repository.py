"""Unit tests for CassandraApplicationRepository."""

import uuid
from datetime import datetime
from unittest.mock import patch

import pytest
from cassandra import DriverException
from cassandra.query import BatchStatement

from aroma.infrastructure.cassandra import statements
from aroma.infrastructure.cassandra.application_repository import (
    CassandraApplicationRepository,
)
from aroma.ports.exceptions import (
    ApplicationDoesNotExistError,
    InvalidArgumentError,
    OperationFailedError,
)
from aroma.ports.repositories import IApplicationRepository
from tests.unit.ids import APP_ID, ORG_ID, OTHER_OWNER_ID, OWNER_ID, SECOND_APP_ID


def _row(name="Canary", owners=(OWNER_ID,), app_id=APP_ID):
    return {
        "app_id": uuid.UUID(app_id),
        "name": name,
        "org_id": uuid.UUID(ORG_ID),
        "owners": {uuid.UUID(owner) for owner in owners},
        "time_provisioned": datetime(2023, 11, 14, 22, 13, 20),
    }


@pytest.fixture
def repository(mock_session, mock_probe, defaults, clock):
    """Provide a repository over a mocked session."""
    return CassandraApplicationRepository(
        session=mock_session, probe=mock_probe, defaults=defaults, clock=clock
    )


class TestProtocolCompliance:
    """Tests for protocol compliance."""

    def test_implements_protocol(self, repository):
        """Repository should implement IApplicationRepository."""
        assert isinstance(repository, IApplicationRepository)


class TestSaveApplication:
    """Tests for save_application."""

    def test_reads_previous_then_writes_batch(self, repository, mock_session, application):
        """Save looks up the stored version, then sends one logged batch."""
        repository.save_application(application)

        first, second = mock_session.execute.call_args_list
        assert first.args[0].query_string.startswith("SELECT * FROM Applications")
        assert isinstance(second.args[0], BatchStatement)

    def test_passes_previous_version_to_builder(
        self, repository, mock_session, application
    ):
        """Stale projection rows are computed from the stored version."""
        mock_session.execute.side_effect = [[_row(owners=(OWNER_ID, OTHER_OWNER_ID))], None]

        with patch.object(
            statements, "insert_application", wraps=statements.insert_application
        ) as insert:
            repository.save_application(application)

        previous = insert.call_args.args[1]
        assert previous.owners == {OWNER_ID, OTHER_OWNER_ID}

    def test_probe_records_save(self, repository, mock_probe, application):
        """A first save is reported as not an update."""
        repository.save_application(application)

        mock_probe.entity_saved.assert_called_once_with(APP_ID, owners=1, updated=False)

    def test_rejects_application_without_owners(
        self, repository, mock_session, mock_probe, application
    ):
        """Validation fails before any statement is sent."""
        application.owners = set()

        with pytest.raises(InvalidArgumentError):
            repository.save_application(application)

        mock_session.execute.assert_not_called()
        mock_probe.invalid_argument.assert_called_once()

    def test_driver_failure_is_operation_failed(
        self, repository, mock_session, application
    ):
        """Store failures surface as OperationFailedError."""
        mock_session.execute.side_effect = DriverException("unavailable")

        with pytest.raises(OperationFailedError):
            repository.save_application(application)


class TestGetById:
    """Tests for get_by_id."""

    def test_maps_stored_row(self, repository, mock_session):
        """The stored row should come back as an Application."""
        mock_session.execute.return_value = [_row()]

        application = repository.get_by_id(APP_ID)

        assert application.application_id == APP_ID
        assert application.owners == {OWNER_ID}

    def test_missing_application_raises(self, repository, mock_probe):
        """An absent Application raises its typed failure."""
        with pytest.raises(ApplicationDoesNotExistError):
            repository.get_by_id(APP_ID)

        mock_probe.entity_not_found.assert_called_once_with(APP_ID)

    def test_rejects_malformed_id(self, repository, mock_session):
        """Malformed identifiers never reach the store."""
        with pytest.raises(InvalidArgumentError):
            repository.get_by_id("not-a-uuid")

        mock_session.execute.assert_not_called()


class TestDeleteApplication:
    """Tests for delete_application."""

    def test_deletes_every_projection_in_one_batch(self, repository, mock_session):
        """Delete reads the Application, then sends one batch."""
        mock_session.execute.side_effect = [[_row()], None]

        repository.delete_application(APP_ID)

        assert isinstance(mock_session.execute.call_args.args[0], BatchStatement)

    def test_missing_application_raises(self, repository, mock_session):
        """Deleting an absent Application fails without writing."""
        with pytest.raises(ApplicationDoesNotExistError):
            repository.delete_application(APP_ID)

        assert mock_session.execute.call_count == 1


class TestQueries:
    """Tests for listing and search."""

    def test_contains_reads_count(self, repository, mock_session):
        """contains_application is true when the count is positive."""
        mock_session.execute.return_value = [{"count": 1}]

        assert repository.contains_application(APP_ID) is True

    def test_contains_false_when_count_zero(self, repository, mock_session):
        mock_session.execute.return_value = [{"count": 0}]

        assert repository.contains_application(APP_ID) is False

    def test_owned_by_reads_owner_projection(self, repository, mock_session, mock_probe):
        """Owner listings are served by the owner projection."""
        mock_session.execute.return_value = [_row()]

        applications = repository.get_applications_owned_by(OWNER_ID)

        assert [a.application_id for a in applications] == [APP_ID]
        query = mock_session.execute.call_args.args[0].query_string
        assert query == "SELECT * FROM Applications_By_Owner WHERE owner_id = %s"
        mock_probe.entities_listed.assert_called_once_with("owned_by", OWNER_ID, 1)

    def test_search_is_case_insensitive_substring(self, repository, mock_session):
        """Search matches any part of the name, ignoring case."""
        mock_session.execute.return_value = [
            _row(name="Canary"),
            _row(name="Sparrow", app_id=SECOND_APP_ID),
        ]

        results = repository.search_by_name("NAR")

        assert [a.name for a in results] == ["Canary"]

    def test_search_uses_configured_bound(self, repository, mock_session, defaults):
        """Search reads at most the configured number of rows."""
        repository.search_by_name("can")

        assert mock_session.execute.call_args.args[1][-1] == defaults.search_limit

    def test_search_rejects_empty_term(self, repository):
        with pytest.raises(InvalidArgumentError):
            repository.search_by_name("")

    def test_recently_created_uses_configured_limit(
        self, repository, mock_session, defaults
    ):
        """The recent listing is bounded by its configured limit."""
        repository.get_recently_created()

        assert mock_session.execute.call_args.args[1][-1] == defaults.recently_created_limit
