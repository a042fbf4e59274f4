"""In-memory implementation of IOrganizationRepository."""

from __future__ import annotations

from aroma.domain.entities import Organization, User
from aroma.infrastructure.memory.base import InMemoryRepository
from aroma.ports.assertions import (
    check_not_empty,
    check_org_id,
    check_organization,
    check_user,
    check_user_id,
)
from aroma.ports.exceptions import OrganizationDoesNotExistError
from aroma.ports.repositories import IOrganizationRepository


class InMemoryOrganizationRepository(InMemoryRepository, IOrganizationRepository):
    """Organizations keyed by id, with a member map per Organization."""

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._organizations: dict[str, Organization] = {}
        self._members: dict[str, dict[str, User]] = {}

    def save_organization(self, organization: Organization) -> None:
        check_organization(organization)
        with self._lock:
            self._organizations[organization.organization_id] = self._copy(organization)

    def get_organization(self, organization_id: str) -> Organization:
        check_org_id(organization_id)
        with self._lock:
            organization = self._organizations.get(organization_id)
            if organization is None:
                raise OrganizationDoesNotExistError(
                    f"Organization does not exist: {organization_id}"
                )
            return self._copy(organization)

    def delete_organization(self, organization_id: str) -> None:
        check_org_id(organization_id)
        with self._lock:
            if organization_id not in self._organizations:
                raise OrganizationDoesNotExistError(
                    f"Organization does not exist: {organization_id}"
                )
            self._members.pop(organization_id, None)
            del self._organizations[organization_id]

    def contains_organization(self, organization_id: str) -> bool:
        check_org_id(organization_id)
        with self._lock:
            return organization_id in self._organizations

    def search_by_name(self, search_term: str) -> list[Organization]:
        check_not_empty(search_term, "search_term")
        term = search_term.lower()
        with self._lock:
            scanned = list(self._organizations.values())[: self._defaults.search_limit]
            return [
                self._copy(organization)
                for organization in scanned
                if term in (organization.organization_name or "").lower()
            ]

    def get_organization_owners(self, organization_id: str) -> list[User]:
        organization = self.get_organization(organization_id)
        return [User(user_id=owner) for owner in sorted(organization.owners)]

    def is_owner(self, organization_id: str, user_id: str) -> bool:
        check_org_id(organization_id)
        check_user_id(user_id)
        with self._lock:
            organization = self._organizations.get(organization_id)
            return organization is not None and user_id in organization.owners

    def save_member_in_organization(self, organization_id: str, user: User) -> None:
        check_org_id(organization_id)
        check_user(user)
        with self._lock:
            self._members.setdefault(organization_id, {})[user.user_id] = self._copy(user)

    def is_member_in_organization(self, organization_id: str, user_id: str) -> bool:
        check_org_id(organization_id)
        check_user_id(user_id)
        with self._lock:
            return user_id in self._members.get(organization_id, {})

    def get_organization_members(self, organization_id: str) -> list[User]:
        check_org_id(organization_id)
        with self._lock:
            members = self._members.get(organization_id, {})
            return [self._copy(members[user_id]) for user_id in sorted(members)]

    def delete_member(self, organization_id: str, user_id: str) -> None:
        check_org_id(organization_id)
        check_user_id(user_id)
        with self._lock:
            self._members.get(organization_id, {}).pop(user_id, None)

    def delete_all_members(self, organization_id: str) -> None:
        check_org_id(organization_id)
        with self._lock:
            self._members.pop(organization_id, None)
