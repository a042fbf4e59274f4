"""Domain layer for the Aroma data-access context.

Entities and value objects only; nothing here knows about stores.
"""

from aroma.domain.entities import (
    Application,
    AuthenticationToken,
    Event,
    Image,
    Message,
    MobileDevice,
    Organization,
    Reaction,
    ReactionAction,
    ReactionMatcher,
    User,
)
from aroma.domain.value_objects import (
    ActionKind,
    DevicePlatform,
    Dimension,
    EventType,
    ImageType,
    Industry,
    LengthOfTime,
    MatcherKind,
    ProgrammingLanguage,
    Role,
    Tier,
    TimeUnit,
    TokenStatus,
    TokenType,
    Urgency,
)

__all__ = [
    "ActionKind",
    "Application",
    "AuthenticationToken",
    "DevicePlatform",
    "Dimension",
    "Event",
    "EventType",
    "Image",
    "ImageType",
    "Industry",
    "LengthOfTime",
    "MatcherKind",
    "Message",
    "MobileDevice",
    "Organization",
    "ProgrammingLanguage",
    "Reaction",
    "ReactionAction",
    "ReactionMatcher",
    "Role",
    "Tier",
    "TimeUnit",
    "TokenStatus",
    "TokenType",
    "Urgency",
    "User",
]
