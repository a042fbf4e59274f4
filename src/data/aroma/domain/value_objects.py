"""Value objects for the Aroma domain.

Enumerations are persisted by their textual name, so every member's value
equals its name. LengthOfTime and Dimension are immutable descriptors used
by TTL-aware and media operations.
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from enum import StrEnum


class Role(StrEnum):
    """Role a User plays within their team."""

    DEVELOPER = "DEVELOPER"
    OWNER = "OWNER"
    QA = "QA"
    MANAGER = "MANAGER"
    PRODUCT = "PRODUCT"
    REPORTER = "REPORTER"


class Tier(StrEnum):
    """Service tier of an Application or Organization."""

    FREE = "FREE"
    PAID = "PAID"
    ENTERPRISE = "ENTERPRISE"


class ProgrammingLanguage(StrEnum):
    """Language an Application is written in."""

    JAVA = "JAVA"
    KOTLIN = "KOTLIN"
    C = "C"
    CPP = "CPP"
    C_SHARP = "C_SHARP"
    OBJECTIVE_C = "OBJECTIVE_C"
    SWIFT = "SWIFT"
    GO = "GO"
    PYTHON = "PYTHON"
    RUBY = "RUBY"
    PHP = "PHP"
    JAVASCRIPT = "JAVASCRIPT"
    DOT_NET = "DOT_NET"
    OTHER = "OTHER"


class Industry(StrEnum):
    """Industry an Organization operates in."""

    BANKING = "BANKING"
    TECH = "TECH"
    CONSULTING = "CONSULTING"
    RETAIL = "RETAIL"
    HEALTHCARE = "HEALTHCARE"
    EDUCATION = "EDUCATION"
    ENTERTAINMENT = "ENTERTAINMENT"
    GOVERNMENT = "GOVERNMENT"
    OTHER = "OTHER"


class Urgency(StrEnum):
    """How urgent a Message is."""

    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"


class TokenType(StrEnum):
    """Kind of principal an AuthenticationToken was issued to."""

    USER = "USER"
    APPLICATION = "APPLICATION"


class TokenStatus(StrEnum):
    """Lifecycle status of an AuthenticationToken.

    Tokens move ACTIVE -> EXPIRED implicitly at their TTL and are then
    removed by the store. An expired token is never re-activated.
    """

    ACTIVE = "ACTIVE"
    EXPIRED = "EXPIRED"


class EventType(StrEnum):
    """Kind of activity an Event records."""

    APPLICATION_CREATED = "APPLICATION_CREATED"
    APPLICATION_DELETED = "APPLICATION_DELETED"
    APPLICATION_FOLLOWED = "APPLICATION_FOLLOWED"
    APPLICATION_UNFOLLOWED = "APPLICATION_UNFOLLOWED"
    APPLICATION_SENT_MESSAGE = "APPLICATION_SENT_MESSAGE"
    APPLICATION_TOKEN_RENEWED = "APPLICATION_TOKEN_RENEWED"
    APPLICATION_TOKEN_REGENERATED = "APPLICATION_TOKEN_REGENERATED"
    OWNER_ADDED = "OWNER_ADDED"
    OWNER_REMOVED = "OWNER_REMOVED"
    GENERAL = "GENERAL"


class ImageType(StrEnum):
    """Encoding of a stored media blob."""

    PNG = "PNG"
    JPEG = "JPEG"
    GIF = "GIF"
    WEBP = "WEBP"


class MatcherKind(StrEnum):
    """Predicate a Reaction applies to an incoming Message."""

    ALL = "ALL"
    APPLICATION_IS = "APPLICATION_IS"
    APPLICATION_IS_NOT = "APPLICATION_IS_NOT"
    TITLE_IS = "TITLE_IS"
    TITLE_CONTAINS = "TITLE_CONTAINS"
    BODY_CONTAINS = "BODY_CONTAINS"
    HOSTNAME_IS = "HOSTNAME_IS"
    URGENCY_EQUALS = "URGENCY_EQUALS"


class ActionKind(StrEnum):
    """Action a Reaction performs when its predicates match."""

    DONT_STORE_MESSAGE = "DONT_STORE_MESSAGE"
    SKIP_INBOX = "SKIP_INBOX"
    MARK_AS_READ = "MARK_AS_READ"
    FORWARD_TO_SLACK_CHANNEL = "FORWARD_TO_SLACK_CHANNEL"
    FORWARD_TO_SLACK_USER = "FORWARD_TO_SLACK_USER"
    SEND_EMAIL = "SEND_EMAIL"
    SEND_PUSH_NOTIFICATION = "SEND_PUSH_NOTIFICATION"
    RESPOND_WITH_MESSAGE = "RESPOND_WITH_MESSAGE"


class DevicePlatform(StrEnum):
    """Mobile platform a device is registered on."""

    IOS = "IOS"
    ANDROID = "ANDROID"


class TimeUnit(StrEnum):
    """Unit of a LengthOfTime.

    Months are counted as 30 days and years as 365 days.
    """

    SECONDS = "SECONDS"
    MINUTES = "MINUTES"
    HOURS = "HOURS"
    DAYS = "DAYS"
    WEEKS = "WEEKS"
    MONTHS = "MONTHS"
    YEARS = "YEARS"

    @property
    def seconds(self) -> int:
        """Number of seconds in one unit."""
        return _SECONDS_PER_UNIT[self]


_SECONDS_PER_UNIT: dict[TimeUnit, int] = {
    TimeUnit.SECONDS: 1,
    TimeUnit.MINUTES: 60,
    TimeUnit.HOURS: 60 * 60,
    TimeUnit.DAYS: 24 * 60 * 60,
    TimeUnit.WEEKS: 7 * 24 * 60 * 60,
    TimeUnit.MONTHS: 30 * 24 * 60 * 60,
    TimeUnit.YEARS: 365 * 24 * 60 * 60,
}


@dataclass(frozen=True)
class LengthOfTime:
    """A lifetime expressed as a value and a unit.

    Every lifetime passed into the data layer is one of these. Stores
    receive it as a whole number of seconds, rounded up.
    """

    value: float
    unit: TimeUnit

    def __str__(self) -> str:
        """Return string representation."""
        return f"{self.value} {self.unit.value}"

    def to_seconds(self) -> int:
        """Convert to whole seconds, rounding up."""
        return math.ceil(self.value * self.unit.seconds)

    def to_millis(self) -> int:
        """Convert to whole milliseconds, rounding up."""
        return math.ceil(self.value * self.unit.seconds * 1000)

    @classmethod
    def of_seconds(cls, seconds: float) -> LengthOfTime:
        """Create a LengthOfTime measured in seconds."""
        return cls(value=seconds, unit=TimeUnit.SECONDS)


_DIMENSION_PATTERN = re.compile(r"^(\d+)x(\d+)$")


@dataclass(frozen=True)
class Dimension:
    """Pixel size of an image; used as the key of a thumbnail variant."""

    width: int
    height: int

    def __str__(self) -> str:
        """Return the storage form, e.g. ``64x64``."""
        return f"{self.width}x{self.height}"

    @classmethod
    def from_string(cls, value: str) -> Dimension:
        """Parse the storage form produced by ``str()``.

        Raises:
            ValueError: If value is not of the form WIDTHxHEIGHT
        """
        match = _DIMENSION_PATTERN.match(value or "")
        if match is None:
            raise ValueError(f"Invalid Dimension: {value}")
        return cls(width=int(match.group(1)), height=int(match.group(2)))
