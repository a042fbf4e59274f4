"""Relational store implementations of the Aroma repositories."""

from aroma.infrastructure.sql.credential_repository import SqlCredentialRepository
from aroma.infrastructure.sql.models import (
    CredentialModel,
    OrganizationMemberModel,
    OrganizationModel,
    OrganizationOwnerModel,
    UserDeviceModel,
)
from aroma.infrastructure.sql.organization_repository import SqlOrganizationRepository
from aroma.infrastructure.sql.user_preferences_repository import (
    SqlUserPreferencesRepository,
)

__all__ = [
    "CredentialModel",
    "OrganizationMemberModel",
    "OrganizationModel",
    "OrganizationOwnerModel",
    "SqlCredentialRepository",
    "SqlOrganizationRepository",
    "SqlUserPreferencesRepository",
    "UserDeviceModel",
]
