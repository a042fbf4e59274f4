"""Ports (interfaces) for the Aroma data-access context.

Ports define the repository contracts, the typed failures they raise and
the request assertions every implementation applies before store I/O.
"""

from aroma.ports.exceptions import (
    ApplicationDoesNotExistError,
    DataAccessError,
    DoesNotExistError,
    EventDoesNotExistError,
    InvalidArgumentError,
    InvalidCredentialsError,
    MediaDoesNotExistError,
    MessageDoesNotExistError,
    OperationFailedError,
    OrganizationDoesNotExistError,
    UserDoesNotExistError,
)
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

__all__ = [
    "ApplicationDoesNotExistError",
    "DataAccessError",
    "DoesNotExistError",
    "EventDoesNotExistError",
    "IActivityRepository",
    "IApplicationRepository",
    "ICredentialRepository",
    "IFollowerRepository",
    "IInboxRepository",
    "IMediaRepository",
    "IMessageRepository",
    "IOrganizationRepository",
    "IReactionRepository",
    "ITokenRepository",
    "IUserPreferencesRepository",
    "IUserRepository",
    "InvalidArgumentError",
    "InvalidCredentialsError",
    "MediaDoesNotExistError",
    "MessageDoesNotExistError",
    "OperationFailedError",
    "OrganizationDoesNotExistError",
    "UserDoesNotExistError",
]
