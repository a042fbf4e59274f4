"""Entities stored by the Aroma data layer.

These mirror the wire structs callers exchange with the service tier. The
data layer only reads and writes their public fields, so every field is
optional here and validity is enforced by ``aroma.ports.assertions`` before
any store interaction.

Identifiers are canonical UUID strings and timestamps are milliseconds
since the Unix epoch. Set fields default to empty sets; a null set read
back from a store becomes an empty set.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from aroma.domain.value_objects import (
    ActionKind,
    DevicePlatform,
    Dimension,
    EventType,
    ImageType,
    Industry,
    MatcherKind,
    ProgrammingLanguage,
    Role,
    Tier,
    TokenStatus,
    TokenType,
    Urgency,
)


@dataclass
class User:
    """A person who follows Applications and receives their Messages."""

    user_id: str | None = None
    email: str | None = None
    first_name: str | None = None
    middle_name: str | None = None
    last_name: str | None = None
    roles: set[Role] = field(default_factory=set)
    profile_image_link: str | None = None
    github_profile: str | None = None
    birthday: int | None = None
    time_user_joined: int | None = None

    @property
    def display_name(self) -> str:
        """First and last name joined, skipping absent parts."""
        return " ".join(part for part in (self.first_name, self.last_name) if part)


@dataclass
class Application:
    """A logical producer of Messages, owned by one or more Users."""

    application_id: str | None = None
    name: str | None = None
    application_description: str | None = None
    organization_id: str | None = None
    application_icon_media_id: str | None = None
    owners: set[str] = field(default_factory=set)
    followers: set[str] = field(default_factory=set)
    time_of_provisioning: int | None = None
    time_of_token_expiration: int | None = None
    tier: Tier | None = None
    programming_language: ProgrammingLanguage | None = None


@dataclass
class Organization:
    """A grouping of Users that may collectively own Applications."""

    organization_id: str | None = None
    organization_name: str | None = None
    owners: set[str] = field(default_factory=set)
    logo_link: str | None = None
    industry: Industry | None = None
    organization_email: str | None = None
    github_profile: str | None = None
    stock_market_symbol: str | None = None
    tier: Tier | None = None
    organization_description: str | None = None
    website: str | None = None


@dataclass
class Message:
    """An operational message emitted by an Application."""

    message_id: str | None = None
    application_id: str | None = None
    title: str | None = None
    body: str | None = None
    urgency: Urgency | None = None
    hostname: str | None = None
    mac_address: str | None = None
    device_name: str | None = None
    time_of_creation: int | None = None
    time_message_received: int | None = None

    @property
    def sort_time(self) -> int:
        """Timestamp used to order Messages newest-first.

        Falls back to the received time, then to the epoch, so every Message
        has a stable position in per-application listings.
        """
        if self.time_of_creation is not None:
            return self.time_of_creation
        if self.time_message_received is not None:
            return self.time_message_received
        return 0


@dataclass
class AuthenticationToken:
    """An opaque credential with an owner and an expiry."""

    token_id: str | None = None
    owner_id: str | None = None
    organization_id: str | None = None
    token_type: TokenType | None = None
    status: TokenStatus | None = None
    time_of_creation: int | None = None
    time_of_expiration: int | None = None


@dataclass
class ReactionMatcher:
    """Predicate half of a Reaction."""

    kind: MatcherKind
    value: str | None = None


@dataclass
class ReactionAction:
    """Action half of a Reaction."""

    kind: ActionKind
    value: str | None = None


@dataclass
class Reaction:
    """A rule authored by a User or Application: when every matcher
    accepts a Message, every action is performed."""

    name: str | None = None
    matchers: list[ReactionMatcher] = field(default_factory=list)
    actions: list[ReactionAction] = field(default_factory=list)


@dataclass
class Event:
    """A single activity entry delivered to a User."""

    event_id: str | None = None
    user_id: str | None = None
    event_type: EventType | None = None
    application_id: str | None = None
    actor_id: str | None = None
    timestamp: int | None = None
    details: dict[str, str] = field(default_factory=dict)


@dataclass
class Image:
    """A small binary blob stored by the media repository."""

    image_type: ImageType | None = None
    data: bytes = b""
    dimension: Dimension | None = None


@dataclass(frozen=True)
class MobileDevice:
    """A device registered by a User for push notifications."""

    platform: DevicePlatform
    device_token: str
