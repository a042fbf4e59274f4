"""In-memory twin of every Aroma repository, for development and tests."""

from aroma.infrastructure.memory.activity_repository import InMemoryActivityRepository
from aroma.infrastructure.memory.application_repository import (
    InMemoryApplicationRepository,
)
from aroma.infrastructure.memory.credential_repository import (
    InMemoryCredentialRepository,
    InMemoryUserPreferencesRepository,
)
from aroma.infrastructure.memory.follower_repository import InMemoryFollowerRepository
from aroma.infrastructure.memory.inbox_repository import InMemoryInboxRepository
from aroma.infrastructure.memory.media_repository import InMemoryMediaRepository
from aroma.infrastructure.memory.message_repository import InMemoryMessageRepository
from aroma.infrastructure.memory.organization_repository import (
    InMemoryOrganizationRepository,
)
from aroma.infrastructure.memory.reactions_repository import InMemoryReactionRepository
from aroma.infrastructure.memory.token_repository import InMemoryTokenRepository
from aroma.infrastructure.memory.user_repository import InMemoryUserRepository

__all__ = [
    "InMemoryActivityRepository",
    "InMemoryApplicationRepository",
    "InMemoryCredentialRepository",
    "InMemoryFollowerRepository",
    "InMemoryInboxRepository",
    "InMemoryMediaRepository",
    "InMemoryMessageRepository",
    "InMemoryOrganizationRepository",
    "InMemoryReactionRepository",
    "InMemoryTokenRepository",
    "InMemoryUserPreferencesRepository",
    "InMemoryUserRepository",
]
