"""Request assertions applied to every repository argument.

Each ``check_*`` function is a pure predicate over its argument: it
returns nothing when the argument is acceptable and raises
InvalidArgumentError naming the offending field otherwise. Repository
implementations call these before building any store statement, so a
failed check never reaches the store.
"""

from __future__ import annotations

import re
import uuid
from collections.abc import Iterable
from typing import Any

from aroma.domain.entities import (
    Application,
    AuthenticationToken,
    Event,
    Image,
    Message,
    MobileDevice,
    Organization,
    User,
)
from aroma.domain.value_objects import Dimension, LengthOfTime
from aroma.ports.exceptions import InvalidArgumentError

_CANONICAL_UUID = re.compile(
    r"^[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{12}$"
)


def is_null_or_empty(value: str | None) -> bool:
    """Return True when value is None or an empty string."""
    return value is None or value == ""


def is_valid_uuid(value: Any) -> bool:
    """Return True when value is a UUID in canonical 8-4-4-4-12 form."""
    if not isinstance(value, str) or not _CANONICAL_UUID.match(value):
        return False
    try:
        uuid.UUID(value)
    except ValueError:
        return False
    return True


def check_not_none(value: Any, field: str) -> None:
    if value is None:
        raise InvalidArgumentError(f"{field} is required")


def check_not_empty(value: str | None, field: str) -> None:
    if is_null_or_empty(value):
        raise InvalidArgumentError(f"{field} must not be empty")


def check_uuid(value: str | None, field: str) -> None:
    """Check that value is present and parseable as a canonical UUID."""
    check_not_empty(value, field)
    if not is_valid_uuid(value):
        raise InvalidArgumentError(f"{field} is not a valid UUID: {value!r}")


def check_user_id(user_id: str | None) -> None:
    check_uuid(user_id, "user_id")


def check_app_id(application_id: str | None) -> None:
    check_uuid(application_id, "application_id")


def check_org_id(organization_id: str | None) -> None:
    check_uuid(organization_id, "organization_id")


def check_message_id(message_id: str | None) -> None:
    check_uuid(message_id, "message_id")


def check_token_id(token_id: str | None) -> None:
    check_uuid(token_id, "token_id")


def check_event_id(event_id: str | None) -> None:
    check_uuid(event_id, "event_id")


def check_media_id(media_id: str | None) -> None:
    check_uuid(media_id, "media_id")


def check_owner_ids(owners: Iterable[str] | None, field: str = "owners") -> None:
    for owner in owners or ():
        check_uuid(owner, field)


def check_user(user: User | None) -> None:
    """A User must be present with a valid user_id."""
    check_not_none(user, "user")
    check_user_id(user.user_id)


def check_application(application: Application | None) -> None:
    """An Application needs a valid id, a name, and at least one valid owner."""
    check_not_none(application, "application")
    check_app_id(application.application_id)
    check_not_empty(application.name, "name")
    if not application.owners:
        raise InvalidArgumentError("owners must not be empty")
    check_owner_ids(application.owners)
    if application.organization_id is not None:
        check_org_id(application.organization_id)
    if application.application_icon_media_id is not None:
        check_uuid(application.application_icon_media_id, "application_icon_media_id")


def check_message(message: Message | None) -> None:
    """A Message needs valid message and application ids and a title."""
    check_not_none(message, "message")
    check_message_id(message.message_id)
    check_app_id(message.application_id)
    check_not_empty(message.title, "title")


def check_organization(organization: Organization | None) -> None:
    """An Organization needs a valid id, a name, and valid owner ids."""
    check_not_none(organization, "organization")
    check_org_id(organization.organization_id)
    check_not_empty(organization.organization_name, "organization_name")
    check_owner_ids(organization.owners)


def check_token_containing_owner_id(token: AuthenticationToken | None) -> None:
    check_not_none(token, "token")
    check_uuid(token.owner_id, "owner_id")


def check_token(token: AuthenticationToken | None) -> None:
    """A token must carry both a valid token_id and a valid owner_id."""
    check_token_containing_owner_id(token)
    check_token_id(token.token_id)
    if token.organization_id is not None:
        check_org_id(token.organization_id)


def check_event(event: Event | None) -> None:
    check_not_none(event, "event")
    check_event_id(event.event_id)


def check_lifetime(lifetime: LengthOfTime | None) -> None:
    """A lifetime must be present and strictly positive."""
    check_not_none(lifetime, "lifetime")
    if lifetime.value <= 0:
        raise InvalidArgumentError(f"lifetime must be positive: {lifetime}")


def check_image(image: Image | None, max_size_bytes: int) -> None:
    """An Image needs non-empty data no larger than max_size_bytes."""
    check_not_none(image, "image")
    if not image.data:
        raise InvalidArgumentError("image data must not be empty")
    if len(image.data) > max_size_bytes:
        raise InvalidArgumentError(
            f"image data exceeds {max_size_bytes} bytes: {len(image.data)}"
        )


def check_dimension(dimension: Dimension | None) -> None:
    check_not_none(dimension, "dimension")
    if dimension.width <= 0 or dimension.height <= 0:
        raise InvalidArgumentError(f"dimension must be positive: {dimension}")


def check_mobile_device(device: MobileDevice | None) -> None:
    check_not_none(device, "device")
    check_not_none(device.platform, "platform")
    check_not_empty(device.device_token, "device_token")
