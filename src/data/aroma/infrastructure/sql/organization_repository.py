"""SQLAlchemy implementation of IOrganizationRepository.

Owners are child rows of the Organization and are replaced as a set on
every save. Members are denormalized User rows keyed by
(organization_id, user_id).
"""

from __future__ import annotations

from sqlalchemy import delete, func, select
from sqlalchemy.orm import Session, sessionmaker

from aroma.domain.entities import Organization, User
from aroma.domain.value_objects import Industry, Role, Tier
from aroma.infrastructure.coding import enum_from_name, enum_names, enums_from_names
from aroma.infrastructure.observability import RepositoryProbe
from aroma.infrastructure.sql.base import SqlRepository
from aroma.infrastructure.sql.models import (
    OrganizationMemberModel,
    OrganizationModel,
    OrganizationOwnerModel,
)
from aroma.ports.assertions import (
    check_not_empty,
    check_org_id,
    check_organization,
    check_user,
    check_user_id,
)
from aroma.ports.exceptions import OrganizationDoesNotExistError
from aroma.ports.repositories import IOrganizationRepository
from infrastructure.settings import DataLayerDefaults, get_data_layer_defaults


def _to_domain(model: OrganizationModel) -> Organization:
    return Organization(
        organization_id=model.organization_id,
        organization_name=model.organization_name,
        owners={owner.owner_id for owner in model.owners},
        logo_link=model.logo_link,
        industry=enum_from_name(Industry, model.industry),
        organization_email=model.organization_email,
        github_profile=model.github_profile,
        stock_market_symbol=model.stock_market_symbol,
        tier=enum_from_name(Tier, model.tier),
        organization_description=model.organization_description,
        website=model.website,
    )


def _copy_fields(organization: Organization, model: OrganizationModel) -> None:
    model.organization_name = organization.organization_name
    model.logo_link = organization.logo_link
    model.industry = organization.industry.name if organization.industry else None
    model.organization_email = organization.organization_email
    model.github_profile = organization.github_profile
    model.stock_market_symbol = organization.stock_market_symbol
    model.tier = organization.tier.name if organization.tier else None
    model.organization_description = organization.organization_description
    model.website = organization.website


def _member_to_domain(model: OrganizationMemberModel) -> User:
    roles = model.roles.split(",") if model.roles else ()
    return User(
        user_id=model.user_id,
        email=model.email,
        first_name=model.first_name,
        middle_name=model.middle_name,
        last_name=model.last_name,
        roles=enums_from_names(Role, roles),
        profile_image_link=model.profile_image_link,
        github_profile=model.github_profile,
        birthday=model.birthday,
        time_user_joined=model.time_user_joined,
    )


def _member_values(user: User) -> dict:
    return {
        "email": user.email,
        "first_name": user.first_name,
        "middle_name": user.middle_name,
        "last_name": user.last_name,
        "roles": ",".join(sorted(enum_names(user.roles))) or None,
        "profile_image_link": user.profile_image_link,
        "github_profile": user.github_profile,
        "birthday": user.birthday,
        "time_user_joined": user.time_user_joined,
    }


class SqlOrganizationRepository(SqlRepository, IOrganizationRepository):
    """Relational repository for Organizations, their owners and members.

    Deleting an Organization removes its members, owners and row in one
    transaction.
    """

    entity = "organization"

    def __init__(
        self,
        session_factory: sessionmaker[Session],
        probe: RepositoryProbe | None = None,
        defaults: DataLayerDefaults | None = None,
    ) -> None:
        super().__init__(session_factory, probe)
        self._defaults = defaults or get_data_layer_defaults()

    def _not_found(self, organization_id: str) -> OrganizationDoesNotExistError:
        self._probe.entity_not_found(organization_id)
        return OrganizationDoesNotExistError(f"Organization does not exist: {organization_id}")

    def save_organization(self, organization: Organization) -> None:
        with self._validating("save_organization"):
            check_organization(organization)

        org_id = organization.organization_id
        with self._transaction("save_organization", organization_id=org_id) as session:
            model = session.get(OrganizationModel, org_id)
            if model is None:
                model = OrganizationModel(organization_id=org_id)
                session.add(model)
            _copy_fields(organization, model)

            kept = [owner for owner in model.owners if owner.owner_id in organization.owners]
            added = organization.owners - {owner.owner_id for owner in kept}
            model.owners = kept + [
                OrganizationOwnerModel(owner_id=owner_id) for owner_id in sorted(added)
            ]

        self._probe.entity_saved(org_id, owners=len(organization.owners))

    def get_organization(self, organization_id: str) -> Organization:
        with self._validating("get_organization"):
            check_org_id(organization_id)

        with self._transaction("get_organization", organization_id=organization_id) as session:
            model = session.get(OrganizationModel, organization_id)
            if model is None:
                raise self._not_found(organization_id)
            organization = _to_domain(model)

        self._probe.entity_retrieved(organization_id)
        return organization

    def delete_organization(self, organization_id: str) -> None:
        with self._validating("delete_organization"):
            check_org_id(organization_id)

        with self._transaction(
            "delete_organization", organization_id=organization_id
        ) as session:
            model = session.get(OrganizationModel, organization_id)
            if model is None:
                raise self._not_found(organization_id)
            session.execute(
                delete(OrganizationMemberModel).where(
                    OrganizationMemberModel.organization_id == organization_id
                )
            )
            session.delete(model)

        self._probe.entity_deleted(organization_id)

    def contains_organization(self, organization_id: str) -> bool:
        with self._validating("contains_organization"):
            check_org_id(organization_id)

        with self._transaction(
            "contains_organization", organization_id=organization_id
        ) as session:
            return session.get(OrganizationModel, organization_id) is not None

    def search_by_name(self, search_term: str) -> list[Organization]:
        """Case-insensitive substring match, bounded by the search limit."""
        with self._validating("search_by_name"):
            check_not_empty(search_term, "search_term")

        stmt = (
            select(OrganizationModel)
            .where(
                func.lower(OrganizationModel.organization_name).contains(
                    search_term.lower(), autoescape=True
                )
            )
            .order_by(OrganizationModel.organization_name)
            .limit(self._defaults.search_limit)
        )
        with self._transaction("search_by_name", search_term=search_term) as session:
            results = [_to_domain(model) for model in session.scalars(stmt)]

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

        with self._transaction(
            "is_owner", organization_id=organization_id, user_id=user_id
        ) as session:
            owner = session.get(OrganizationOwnerModel, (organization_id, user_id))
            return owner is not None

    def save_member_in_organization(self, organization_id: str, user: User) -> None:
        with self._validating("save_member_in_organization"):
            check_org_id(organization_id)
            check_user(user)

        with self._transaction(
            "save_member_in_organization",
            organization_id=organization_id,
            user_id=user.user_id,
        ) as session:
            key = (organization_id, user.user_id)
            model = session.get(OrganizationMemberModel, key)
            if model is None:
                model = OrganizationMemberModel(
                    organization_id=organization_id, user_id=user.user_id
                )
                session.add(model)
            for column, value in _member_values(user).items():
                setattr(model, column, value)

        self._probe.entity_saved(organization_id, member_id=user.user_id)

    def is_member_in_organization(self, organization_id: str, user_id: str) -> bool:
        with self._validating("is_member_in_organization"):
            check_org_id(organization_id)
            check_user_id(user_id)

        with self._transaction(
            "is_member_in_organization",
            organization_id=organization_id,
            user_id=user_id,
        ) as session:
            member = session.get(OrganizationMemberModel, (organization_id, user_id))
            return member is not None

    def get_organization_members(self, organization_id: str) -> list[User]:
        with self._validating("get_organization_members"):
            check_org_id(organization_id)

        stmt = (
            select(OrganizationMemberModel)
            .where(OrganizationMemberModel.organization_id == organization_id)
            .order_by(OrganizationMemberModel.user_id)
        )
        with self._transaction(
            "get_organization_members", organization_id=organization_id
        ) as session:
            members = [_member_to_domain(model) for model in session.scalars(stmt)]

        self._probe.entities_listed("members", organization_id, len(members))
        return members

    def delete_member(self, organization_id: str, user_id: str) -> None:
        with self._validating("delete_member"):
            check_org_id(organization_id)
            check_user_id(user_id)

        stmt = delete(OrganizationMemberModel).where(
            OrganizationMemberModel.organization_id == organization_id,
            OrganizationMemberModel.user_id == user_id,
        )
        with self._transaction(
            "delete_member", organization_id=organization_id, user_id=user_id
        ) as session:
            session.execute(stmt)

        self._probe.entity_deleted(organization_id, member_id=user_id)

    def delete_all_members(self, organization_id: str) -> None:
        with self._validating("delete_all_members"):
            check_org_id(organization_id)

        stmt = delete(OrganizationMemberModel).where(
            OrganizationMemberModel.organization_id == organization_id
        )
        with self._transaction(
            "delete_all_members", organization_id=organization_id
        ) as session:
            session.execute(stmt)

        self._probe.entity_deleted(organization_id, members="all")
