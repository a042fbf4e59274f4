"""Wide-column store implementations of the Aroma repositories."""

from aroma.infrastructure.cassandra.activity_repository import CassandraActivityRepository
from aroma.infrastructure.cassandra.application_repository import (
    CassandraApplicationRepository,
)
from aroma.infrastructure.cassandra.follower_repository import CassandraFollowerRepository
from aroma.infrastructure.cassandra.inbox_repository import CassandraInboxRepository
from aroma.infrastructure.cassandra.media_repository import CassandraMediaRepository
from aroma.infrastructure.cassandra.message_repository import CassandraMessageRepository
from aroma.infrastructure.cassandra.organization_repository import (
    CassandraOrganizationRepository,
)
from aroma.infrastructure.cassandra.reactions_repository import CassandraReactionRepository
from aroma.infrastructure.cassandra.tables import SCHEMA, create_schema
from aroma.infrastructure.cassandra.token_repository import CassandraTokenRepository
from aroma.infrastructure.cassandra.user_repository import CassandraUserRepository

__all__ = [
    "CassandraActivityRepository",
    "CassandraApplicationRepository",
    "CassandraFollowerRepository",
    "CassandraInboxRepository",
    "CassandraMediaRepository",
    "CassandraMessageRepository",
    "CassandraOrganizationRepository",
    "CassandraReactionRepository",
    "CassandraTokenRepository",
    "CassandraUserRepository",
    "SCHEMA",
    "create_schema",
]
