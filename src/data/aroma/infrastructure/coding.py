"""Column coding shared by every store mapping.

Symmetric rules between entity fields and store columns:

- UUID column <-> canonical string
- Enum column: written as the member name, read by resolving the name;
  an unresolved name leaves the field unset instead of failing the read
- Timestamp column <-> milliseconds since the Unix epoch
- Set column <-> set; a null set reads back as an empty set
"""

from __future__ import annotations

import uuid
from collections.abc import Iterable
from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import TypeVar

E = TypeVar("E", bound=Enum)

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def to_uuid(value: str | None) -> uuid.UUID | None:
    if value is None:
        return None
    return uuid.UUID(value)


def from_uuid(value: uuid.UUID | str | None) -> str | None:
    if value is None:
        return None
    return str(value)


def to_uuid_set(values: Iterable[str] | None) -> set[uuid.UUID]:
    return {uuid.UUID(value) for value in values or ()}


def from_uuid_set(values: Iterable[uuid.UUID | str] | None) -> set[str]:
    return {str(value) for value in values or ()}


def enum_name(member: Enum | None) -> str | None:
    if member is None:
        return None
    return member.name


def enum_from_name(enum_type: type[E], name: str | None) -> E | None:
    """Resolve a stored name to its member; None when it is unknown."""
    if name is None:
        return None
    try:
        return enum_type[name]
    except KeyError:
        return None


def enum_names(members: Iterable[Enum] | None) -> set[str]:
    return {member.name for member in members or ()}


def enums_from_names(enum_type: type[E], names: Iterable[str] | None) -> set[E]:
    """Resolve a set of stored names, dropping the ones that are unknown."""
    resolved = (enum_from_name(enum_type, name) for name in names or ())
    return {member for member in resolved if member is not None}


def millis_to_datetime(millis: int | None) -> datetime | None:
    if millis is None:
        return None
    return _EPOCH + timedelta(milliseconds=millis)


def datetime_to_millis(value: datetime | None) -> int | None:
    """Convert a store timestamp to epoch millis.

    Drivers hand back naive datetimes that are implicitly UTC.
    """
    if value is None:
        return None
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    delta = value - _EPOCH
    return (delta.days * 86_400 + delta.seconds) * 1000 + delta.microseconds // 1000
