"""Cassandra implementation of IOrganizationRepository.

Owners are a set column on the Organization row. Members are a separate
partition per Organization holding denormalized copies of the Users.
"""

from __future__ import annotations

from aroma.domain.entities import Organization, User
from aroma.infrastructure.cassandra import statements
from aroma.infrastructure.cassandra.base import CassandraRepository
from aroma.infrastructure.cassandra.mappers import map_organization, map_user
from aroma.ports.assertions import (
    check_not_empty,
    check_org_id,
    check_organization,
    check_user,
    check_user_id,
)
from aroma.ports.exceptions import OrganizationDoesNotExistError
from aroma.ports.repositories import IOrganizationRepository


class CassandraOrganizationRepository(CassandraRepository, IOrganizationRepository):
    """Cassandra-backed repository for Organizations and their members."""

    entity = "organization"

    def save_organization(self, organization: Organization) -> None:
        with self._validating("save_organization"):
            check_organization(organization)

        org_id = organization.organization_id
        self._execute(
            statements.insert_organization(organization),
            "save_organization",
            organization_id=org_id,
        )
        self._probe.entity_saved(org_id, owners=len(organization.owners))

    def get_organization(self, organization_id: str) -> Organization:
        with self._validating("get_organization"):
            check_org_id(organization_id)

        row = self._one(
            statements.select_organization(organization_id),
            "get_organization",
            organization_id=organization_id,
        )
        if row is None:
            self._probe.entity_not_found(organization_id)
            raise OrganizationDoesNotExistError(
                f"Organization does not exist: {organization_id}"
            )

        self._probe.entity_retrieved(organization_id)
        return map_organization(row)

    def delete_organization(self, organization_id: str) -> None:
        """Delete all members, then the Organization row.

        The member partition may be large, so the two deletes are sent in
        sequence rather than batched.
        """
        with self._validating("delete_organization"):
            check_org_id(organization_id)

        if not self.contains_organization(organization_id):
            self._probe.entity_not_found(organization_id)
            raise OrganizationDoesNotExistError(
                f"Organization does not exist: {organization_id}"
            )

        self.delete_all_members(organization_id)
        self._execute(
            statements.delete_organization(organization_id),
            "delete_organization",
            organization_id=organization_id,
        )
        self._probe.entity_deleted(organization_id)

    def contains_organization(self, organization_id: str) -> bool:
        with self._validating("contains_organization"):
            check_org_id(organization_id)

        count = self._count(
            statements.count_organization(organization_id),
            "contains_organization",
            organization_id=organization_id,
        )
        return count > 0

    def search_by_name(self, search_term: str) -> list[Organization]:
        """Case-insensitive substring match over a bounded table scan."""
        with self._validating("search_by_name"):
            check_not_empty(search_term, "search_term")

        rows = self._execute(
            statements.scan_organizations(self._defaults.search_limit),
            "search_by_name",
            search_term=search_term,
        )
        term = search_term.lower()
        results = [
            organization
            for organization in map(map_organization, rows)
            if term in (organization.organization_name or "").lower()
        ]
        self._probe.entities_listed("search_by_name", search_term, len(results))
        return results

    def get_organization_owners(self, organization_id: str) -> list[User]:
        organization = self.get_organization(organization_id)
        return [User(user_id=owner) for owner in sorted(organization.owners)]

    def is_owner(self, organization_id: str, user_id: str) -> bool:
        """False when the Organization does not exist."""
        with self._validating("is_owner"):
            check_org_id(organization_id)
            check_user_id(user_id)

        row = self._one(
            statements.select_organization(organization_id),
            "is_owner",
            organization_id=organization_id,
        )
        if row is None:
            return False
        return user_id in map_organization(row).owners

    def save_member_in_organization(self, organization_id: str, user: User) -> None:
        with self._validating("save_member_in_organization"):
            check_org_id(organization_id)
            check_user(user)

        self._execute(
            statements.insert_member(organization_id, user),
            "save_member_in_organization",
            organization_id=organization_id,
            user_id=user.user_id,
        )
        self._probe.entity_saved(organization_id, member_id=user.user_id)

    def is_member_in_organization(self, organization_id: str, user_id: str) -> bool:
        with self._validating("is_member_in_organization"):
            check_org_id(organization_id)
            check_user_id(user_id)

        count = self._count(
            statements.count_member(organization_id, user_id),
            "is_member_in_organization",
            organization_id=organization_id,
            user_id=user_id,
        )
        return count > 0

    def get_organization_members(self, organization_id: str) -> list[User]:
        with self._validating("get_organization_members"):
            check_org_id(organization_id)

        rows = self._execute(
            statements.select_members(organization_id),
            "get_organization_members",
            organization_id=organization_id,
        )
        members = [map_user(row) for row in rows]
        self._probe.entities_listed("members", organization_id, len(members))
        return members

    def delete_member(self, organization_id: str, user_id: str) -> None:
        with self._validating("delete_member"):
            check_org_id(organization_id)
            check_user_id(user_id)

        self._execute(
            statements.delete_member(organization_id, user_id),
            "delete_member",
            organization_id=organization_id,
            user_id=user_id,
        )
        self._probe.entity_deleted(organization_id, member_id=user_id)

    def delete_all_members(self, organization_id: str) -> None:
        with self._validating("delete_all_members"):
            check_org_id(organization_id)

        self._execute(
            statements.delete_all_members(organization_id),
            "delete_all_members",
            organization_id=organization_id,
        )
        self._probe.entity_deleted(organization_id, members="all")
