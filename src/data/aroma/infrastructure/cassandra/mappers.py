"""Row mappers for the wide-column store.

Each mapper turns one result row (a dict keyed by column name) into a
fully populated entity. Missing columns leave the field absent and never
raise, so a mapper can read any projection that shares the column names
of its primary table.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from aroma.domain.entities import (
    Application,
    AuthenticationToken,
    Event,
    Image,
    Message,
    Organization,
    Reaction,
    User,
)
from aroma.domain.value_objects import (
    Dimension,
    EventType,
    ImageType,
    Industry,
    ProgrammingLanguage,
    Role,
    Tier,
    TokenStatus,
    TokenType,
    Urgency,
)
from aroma.infrastructure.cassandra.tables import (
    Activity,
    Applications,
    Media,
    Messages,
    Organizations,
    Reactions,
    Tokens,
    Users,
)
from aroma.infrastructure.coding import (
    datetime_to_millis,
    enum_from_name,
    enums_from_names,
    from_uuid,
    from_uuid_set,
)
from aroma.infrastructure.serialization import ReactionSerializer, deserialize_details

Row = Mapping[str, Any]


def map_application(row: Row) -> Application:
    return Application(
        application_id=from_uuid(row.get(Applications.APP_ID)),
        name=row.get(Applications.NAME),
        application_description=row.get(Applications.DESCRIPTION),
        organization_id=from_uuid(row.get(Applications.ORG_ID)),
        application_icon_media_id=from_uuid(row.get(Applications.ICON_MEDIA_ID)),
        owners=from_uuid_set(row.get(Applications.OWNERS)),
        followers=from_uuid_set(row.get(Applications.FOLLOWERS)),
        time_of_provisioning=datetime_to_millis(row.get(Applications.TIME_PROVISIONED)),
        time_of_token_expiration=datetime_to_millis(
            row.get(Applications.TIME_OF_TOKEN_EXPIRATION)
        ),
        tier=enum_from_name(Tier, row.get(Applications.TIER)),
        programming_language=enum_from_name(
            ProgrammingLanguage, row.get(Applications.PROGRAMMING_LANGUAGE)
        ),
    )


def map_user(row: Row) -> User:
    return User(
        user_id=from_uuid(row.get(Users.USER_ID)),
        email=row.get(Users.EMAIL),
        first_name=row.get(Users.FIRST_NAME),
        middle_name=row.get(Users.MIDDLE_NAME),
        last_name=row.get(Users.LAST_NAME),
        roles=enums_from_names(Role, row.get(Users.ROLES)),
        profile_image_link=row.get(Users.PROFILE_IMAGE_LINK),
        github_profile=row.get(Users.GITHUB_PROFILE),
        birthday=datetime_to_millis(row.get(Users.BIRTH_DATE)),
        time_user_joined=datetime_to_millis(row.get(Users.TIME_ACCOUNT_CREATED)),
    )


def map_organization(row: Row) -> Organization:
    return Organization(
        organization_id=from_uuid(row.get(Organizations.ORG_ID)),
        organization_name=row.get(Organizations.ORG_NAME),
        owners=from_uuid_set(row.get(Organizations.OWNERS)),
        logo_link=row.get(Organizations.ICON_LINK),
        industry=enum_from_name(Industry, row.get(Organizations.INDUSTRY)),
        organization_email=row.get(Organizations.EMAIL),
        github_profile=row.get(Organizations.GITHUB_PROFILE),
        stock_market_symbol=row.get(Organizations.STOCK_NAME),
        tier=enum_from_name(Tier, row.get(Organizations.TIER)),
        organization_description=row.get(Organizations.DESCRIPTION),
        website=row.get(Organizations.WEBSITE),
    )


def map_message(row: Row) -> Message:
    return Message(
        message_id=from_uuid(row.get(Messages.MESSAGE_ID)),
        application_id=from_uuid(row.get(Messages.APP_ID)),
        title=row.get(Messages.TITLE),
        body=row.get(Messages.BODY),
        urgency=enum_from_name(Urgency, row.get(Messages.URGENCY)),
        hostname=row.get(Messages.HOSTNAME),
        mac_address=row.get(Messages.MAC_ADDRESS),
        device_name=row.get(Messages.DEVICE_NAME),
        time_of_creation=datetime_to_millis(row.get(Messages.TIME_CREATED)),
        time_message_received=datetime_to_millis(row.get(Messages.TIME_RECEIVED)),
    )


def map_token(row: Row) -> AuthenticationToken:
    return AuthenticationToken(
        token_id=from_uuid(row.get(Tokens.TOKEN_ID)),
        owner_id=from_uuid(row.get(Tokens.OWNER_ID)),
        organization_id=from_uuid(row.get(Tokens.ORG_ID)),
        token_type=enum_from_name(TokenType, row.get(Tokens.TOKEN_TYPE)),
        status=enum_from_name(TokenStatus, row.get(Tokens.STATUS)),
        time_of_creation=datetime_to_millis(row.get(Tokens.TIME_CREATED)),
        time_of_expiration=datetime_to_millis(row.get(Tokens.TIME_EXPIRES)),
    )


def map_event(row: Row) -> Event:
    return Event(
        event_id=from_uuid(row.get(Activity.EVENT_ID)),
        user_id=from_uuid(row.get(Activity.USER_ID)),
        event_type=enum_from_name(EventType, row.get(Activity.EVENT_TYPE)),
        application_id=from_uuid(row.get(Activity.APP_ID)),
        actor_id=from_uuid(row.get(Activity.ACTOR_ID)),
        timestamp=datetime_to_millis(row.get(Activity.TIME_OF_EVENT)),
        details=deserialize_details(row.get(Activity.DETAILS)),
    )


def map_image(row: Row) -> Image:
    width = row.get(Media.WIDTH)
    height = row.get(Media.HEIGHT)
    dimension = None
    if width is not None and height is not None:
        dimension = Dimension(width=width, height=height)

    return Image(
        image_type=enum_from_name(ImageType, row.get(Media.MEDIA_TYPE)),
        data=bytes(row.get(Media.DATA) or b""),
        dimension=dimension,
    )


_reaction_serializer = ReactionSerializer()


def map_reactions(row: Row) -> list[Reaction]:
    return _reaction_serializer.deserialize_all(row.get(Reactions.SERIALIZED_REACTIONS))
