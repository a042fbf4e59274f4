"""Unit tests for SqlOrganizationRepository."""

import pytest
from sqlalchemy import select

from aroma.domain.entities import Organization, User
from aroma.domain.value_objects import Industry, Role, Tier
from aroma.infrastructure.sql import (
    OrganizationMemberModel,
    OrganizationOwnerModel,
    SqlOrganizationRepository,
)
from aroma.ports.exceptions import InvalidArgumentError, OrganizationDoesNotExistError
from aroma.ports.repositories import IOrganizationRepository
from tests.unit.ids import MISSING_ID, ORG_ID, OTHER_ID, OWNER_ID, SECOND_ID, USER_ID


@pytest.fixture
def repository(session_factory, mock_probe, defaults):
    """Provide a repository over the in-memory database."""
    return SqlOrganizationRepository(session_factory, probe=mock_probe, defaults=defaults)


@pytest.fixture
def organization():
    return Organization(
        organization_id=ORG_ID,
        organization_name="Red Roma",
        owners={OWNER_ID},
        industry=Industry.BANKING,
        tier=Tier.FREE,
        website="https://redroma.tech",
    )


@pytest.fixture
def member():
    return User(
        user_id=USER_ID,
        email="ada@example.com",
        first_name="Ada",
        roles={Role.DEVELOPER, Role.QA},
        birthday=0,
    )


class TestSqlOrganizationRepository:
    """Tests for SqlOrganizationRepository."""

    def test_implements_protocol(self, repository):
        assert isinstance(repository, IOrganizationRepository)

    def test_save_then_get(self, repository, organization):
        repository.save_organization(organization)

        assert repository.get_organization(ORG_ID) == organization
        assert repository.contains_organization(ORG_ID) is True

    def test_get_missing_raises(self, repository, mock_probe):
        with pytest.raises(OrganizationDoesNotExistError):
            repository.get_organization(MISSING_ID)

        mock_probe.entity_not_found.assert_called_once_with(MISSING_ID)

    def test_save_rejects_organization_without_name(self, repository, organization):
        organization.organization_name = ""

        with pytest.raises(InvalidArgumentError):
            repository.save_organization(organization)

        assert repository.contains_organization(ORG_ID) is False

    def test_resave_replaces_owner_set(self, repository, organization, engine):
        """Owners dropped from the Organization lose their owner rows."""
        repository.save_organization(organization)
        organization.owners = {OTHER_ID, SECOND_ID}

        repository.save_organization(organization)

        assert repository.is_owner(ORG_ID, OWNER_ID) is False
        assert repository.is_owner(ORG_ID, OTHER_ID) is True
        with engine.connect() as connection:
            rows = connection.execute(select(OrganizationOwnerModel.owner_id)).scalars()
            assert sorted(rows) == [OTHER_ID, SECOND_ID]

    def test_owners_are_id_only_users(self, repository, organization):
        organization.owners = {SECOND_ID, OWNER_ID}
        repository.save_organization(organization)

        owners = repository.get_organization_owners(ORG_ID)

        assert owners == [User(user_id=OWNER_ID), User(user_id=SECOND_ID)]

    def test_owners_of_missing_organization_raise(self, repository):
        with pytest.raises(OrganizationDoesNotExistError):
            repository.get_organization_owners(MISSING_ID)

    def test_is_owner_false_for_missing_organization(self, repository):
        assert repository.is_owner(MISSING_ID, OWNER_ID) is False

    def test_search_is_case_insensitive_substring(self, repository, organization):
        repository.save_organization(organization)

        assert [o.organization_id for o in repository.search_by_name("ROMA")] == [ORG_ID]
        assert repository.search_by_name("nothing like it") == []

    def test_search_treats_wildcards_literally(self, repository, organization):
        repository.save_organization(organization)

        assert repository.search_by_name("%") == []

    def test_search_rejects_empty_term(self, repository):
        with pytest.raises(InvalidArgumentError):
            repository.search_by_name("")

    def test_members_round_trip(self, repository, member):
        """Members keep the denormalized User fields, roles included."""
        repository.save_member_in_organization(ORG_ID, member)

        assert repository.is_member_in_organization(ORG_ID, USER_ID) is True
        assert repository.get_organization_members(ORG_ID) == [member]

    def test_resaving_member_updates_copy(self, repository, member):
        repository.save_member_in_organization(ORG_ID, member)
        member.first_name = "Augusta"

        repository.save_member_in_organization(ORG_ID, member)

        members = repository.get_organization_members(ORG_ID)
        assert [m.first_name for m in members] == ["Augusta"]

    def test_delete_member(self, repository, member):
        repository.save_member_in_organization(ORG_ID, member)

        repository.delete_member(ORG_ID, USER_ID)
        repository.delete_member(ORG_ID, USER_ID)

        assert repository.is_member_in_organization(ORG_ID, USER_ID) is False

    def test_delete_all_members_leaves_other_organizations(self, repository, member):
        repository.save_member_in_organization(ORG_ID, member)
        repository.save_member_in_organization(OTHER_ID, member)

        repository.delete_all_members(ORG_ID)

        assert repository.get_organization_members(ORG_ID) == []
        assert repository.is_member_in_organization(OTHER_ID, USER_ID) is True

    def test_delete_organization_removes_members_and_owners(
        self, repository, organization, member, engine
    ):
        repository.save_organization(organization)
        repository.save_member_in_organization(ORG_ID, member)

        repository.delete_organization(ORG_ID)

        assert repository.contains_organization(ORG_ID) is False
        with engine.connect() as connection:
            assert connection.execute(select(OrganizationMemberModel)).first() is None
            assert connection.execute(select(OrganizationOwnerModel)).first() is None

    def test_delete_missing_organization_raises(self, repository, member):
        """Nothing is removed when the Organization does not exist."""
        repository.save_member_in_organization(MISSING_ID, member)

        with pytest.raises(OrganizationDoesNotExistError):
            repository.delete_organization(MISSING_ID)

        assert repository.is_member_in_organization(MISSING_ID, USER_ID) is True

    def test_invalid_org_id_reports_invalid_argument(self, repository, mock_probe):
        with pytest.raises(InvalidArgumentError):
            repository.get_organization_members("not-a-uuid")

        mock_probe.invalid_argument.assert_called_once()
