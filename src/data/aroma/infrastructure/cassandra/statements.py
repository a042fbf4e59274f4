"""CQL statement builders.

Builders are pure functions from entities and keys to ``CqlStatement``
values (query text plus positional parameters). They never touch a
session, so the exact CQL a repository sends can be asserted directly.
Mutations that span projections are returned as a ``CqlBatch`` and sent
as one logged batch.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any

from aroma.domain.entities import (
    Application,
    AuthenticationToken,
    Event,
    Image,
    Message,
    Organization,
    User,
)
from aroma.domain.value_objects import Dimension
from aroma.infrastructure.cassandra.tables import (
    RECENT_BUCKET,
    Activity,
    Applications,
    Follow,
    Inbox,
    Media,
    Messages,
    Organizations,
    Reactions,
    Tokens,
    Users,
)
from aroma.infrastructure.coding import (
    enum_name,
    enum_names,
    millis_to_datetime,
    to_uuid,
    to_uuid_set,
)
from aroma.infrastructure.serialization import serialize_details


@dataclass(frozen=True)
class CqlStatement:
    """A single CQL statement with positional ``%s`` parameters."""

    query: str
    parameters: tuple[Any, ...] = ()


@dataclass(frozen=True)
class CqlBatch:
    """Statements that must commit together."""

    statements: tuple[CqlStatement, ...]

    def __len__(self) -> int:
        return len(self.statements)


def _where(keys: Mapping[str, Any]) -> str:
    return " AND ".join(f"{column} = %s" for column in keys)


def _insert(
    table: str, values: Mapping[str, Any], ttl: int | None = None
) -> CqlStatement:
    columns = ", ".join(values)
    placeholders = ", ".join("%s" for _ in values)
    query = f"INSERT INTO {table} ({columns}) VALUES ({placeholders})"
    parameters = tuple(values.values())
    if ttl is not None:
        query += " USING TTL %s"
        parameters += (ttl,)
    return CqlStatement(query, parameters)


def _delete(table: str, keys: Mapping[str, Any]) -> CqlStatement:
    return CqlStatement(f"DELETE FROM {table} WHERE {_where(keys)}", tuple(keys.values()))


def _select(
    table: str,
    keys: Mapping[str, Any] | None = None,
    *,
    columns: str = "*",
    limit: int | None = None,
    allow_filtering: bool = False,
) -> CqlStatement:
    query = f"SELECT {columns} FROM {table}"
    parameters: tuple[Any, ...] = ()
    if keys:
        query += f" WHERE {_where(keys)}"
        parameters = tuple(keys.values())
    if limit is not None:
        query += " LIMIT %s"
        parameters += (limit,)
    if allow_filtering:
        query += " ALLOW FILTERING"
    return CqlStatement(query, parameters)


def _count(
    table: str, keys: Mapping[str, Any], allow_filtering: bool = False
) -> CqlStatement:
    return _select(table, keys, columns="COUNT(*)", allow_filtering=allow_filtering)


# Applications


def application_values(application: Application) -> dict[str, Any]:
    return {
        Applications.APP_ID: to_uuid(application.application_id),
        Applications.NAME: application.name,
        Applications.DESCRIPTION: application.application_description,
        Applications.ORG_ID: to_uuid(application.organization_id),
        Applications.ICON_MEDIA_ID: to_uuid(application.application_icon_media_id),
        Applications.OWNERS: to_uuid_set(application.owners),
        Applications.FOLLOWERS: to_uuid_set(application.followers),
        Applications.TIER: enum_name(application.tier),
        Applications.PROGRAMMING_LANGUAGE: enum_name(application.programming_language),
        Applications.TIME_PROVISIONED: millis_to_datetime(application.time_of_provisioning),
        Applications.TIME_OF_TOKEN_EXPIRATION: millis_to_datetime(
            application.time_of_token_expiration
        ),
    }


def _application_owner_key(owner_id: str, application_id: str) -> dict[str, Any]:
    return {Applications.OWNER: to_uuid(owner_id), Applications.APP_ID: to_uuid(application_id)}


def _application_org_key(application: Application) -> dict[str, Any]:
    return {
        Applications.ORG_ID: to_uuid(application.organization_id),
        Applications.APP_ID: to_uuid(application.application_id),
    }


def _application_recent_key(application: Application) -> dict[str, Any]:
    return {
        Applications.BUCKET: RECENT_BUCKET,
        Applications.TIME_PROVISIONED: millis_to_datetime(application.time_of_provisioning),
        Applications.APP_ID: to_uuid(application.application_id),
    }


def insert_application(
    application: Application, previous: Application | None = None
) -> CqlBatch:
    """Write the primary row and every projection of an Application.

    When ``previous`` is given, projection rows it occupied that the new
    version no longer does (a removed owner, a changed organization or
    provisioning time) are deleted in the same batch.
    """
    values = application_values(application)
    statements: list[CqlStatement] = []

    if previous is not None:
        for owner in sorted(previous.owners - application.owners):
            statements.append(
                _delete(
                    Applications.TABLE_NAME_BY_OWNER,
                    _application_owner_key(owner, application.application_id),
                )
            )
        if previous.organization_id and previous.organization_id != application.organization_id:
            statements.append(
                _delete(Applications.TABLE_NAME_BY_ORG, _application_org_key(previous))
            )
        if (
            previous.time_of_provisioning is not None
            and previous.time_of_provisioning != application.time_of_provisioning
        ):
            statements.append(
                _delete(
                    Applications.TABLE_NAME_RECENTLY_CREATED,
                    _application_recent_key(previous),
                )
            )

    statements.append(_insert(Applications.TABLE_NAME, values))
    for owner in sorted(application.owners):
        statements.append(
            _insert(
                Applications.TABLE_NAME_BY_OWNER,
                {Applications.OWNER: to_uuid(owner), **values},
            )
        )
    if application.organization_id:
        statements.append(_insert(Applications.TABLE_NAME_BY_ORG, values))
    if application.time_of_provisioning is not None:
        statements.append(
            _insert(
                Applications.TABLE_NAME_RECENTLY_CREATED,
                {Applications.BUCKET: RECENT_BUCKET, **values},
            )
        )
    return CqlBatch(tuple(statements))


def delete_application(application: Application) -> CqlBatch:
    """Remove an Application from its primary table and every projection."""
    statements = [
        _delete(
            Applications.TABLE_NAME,
            {Applications.APP_ID: to_uuid(application.application_id)},
        )
    ]
    for owner in sorted(application.owners):
        statements.append(
            _delete(
                Applications.TABLE_NAME_BY_OWNER,
                _application_owner_key(owner, application.application_id),
            )
        )
    if application.organization_id:
        statements.append(
            _delete(Applications.TABLE_NAME_BY_ORG, _application_org_key(application))
        )
    if application.time_of_provisioning is not None:
        statements.append(
            _delete(
                Applications.TABLE_NAME_RECENTLY_CREATED,
                _application_recent_key(application),
            )
        )
    return CqlBatch(tuple(statements))


def select_application(application_id: str) -> CqlStatement:
    return _select(Applications.TABLE_NAME, {Applications.APP_ID: to_uuid(application_id)})


def count_application(application_id: str) -> CqlStatement:
    return _count(Applications.TABLE_NAME, {Applications.APP_ID: to_uuid(application_id)})


def select_applications_by_owner(user_id: str) -> CqlStatement:
    return _select(Applications.TABLE_NAME_BY_OWNER, {Applications.OWNER: to_uuid(user_id)})


def select_applications_by_org(organization_id: str) -> CqlStatement:
    return _select(
        Applications.TABLE_NAME_BY_ORG, {Applications.ORG_ID: to_uuid(organization_id)}
    )


def select_recent_applications(limit: int) -> CqlStatement:
    return _select(
        Applications.TABLE_NAME_RECENTLY_CREATED,
        {Applications.BUCKET: RECENT_BUCKET},
        limit=limit,
    )


# Users


def user_values(user: User) -> dict[str, Any]:
    return {
        Users.USER_ID: to_uuid(user.user_id),
        Users.FIRST_NAME: user.first_name,
        Users.MIDDLE_NAME: user.middle_name,
        Users.LAST_NAME: user.last_name,
        Users.EMAIL: user.email,
        Users.ROLES: enum_names(user.roles),
        Users.PROFILE_IMAGE_LINK: user.profile_image_link,
        Users.GITHUB_PROFILE: user.github_profile,
        Users.BIRTH_DATE: millis_to_datetime(user.birthday),
        Users.TIME_ACCOUNT_CREATED: millis_to_datetime(user.time_user_joined),
    }


def _user_recent_key(user: User) -> dict[str, Any]:
    return {
        Users.BUCKET: RECENT_BUCKET,
        Users.TIME_ACCOUNT_CREATED: millis_to_datetime(user.time_user_joined),
        Users.USER_ID: to_uuid(user.user_id),
    }


def insert_user(user: User, previous: User | None = None) -> CqlBatch:
    """Write a User and the email, GitHub and recency projections it has.

    Projection rows left behind by ``previous`` under a different key are
    deleted in the same batch.
    """
    values = user_values(user)
    statements: list[CqlStatement] = []

    if previous is not None:
        if previous.email and previous.email != user.email:
            statements.append(_delete(Users.TABLE_NAME_BY_EMAIL, {Users.EMAIL: previous.email}))
        if previous.github_profile and previous.github_profile != user.github_profile:
            statements.append(
                _delete(
                    Users.TABLE_NAME_BY_GITHUB_PROFILE,
                    {Users.GITHUB_PROFILE: previous.github_profile},
                )
            )
        if (
            previous.time_user_joined is not None
            and previous.time_user_joined != user.time_user_joined
        ):
            statements.append(_delete(Users.TABLE_NAME_RECENT, _user_recent_key(previous)))

    statements.append(_insert(Users.TABLE_NAME, values))
    if user.email:
        statements.append(_insert(Users.TABLE_NAME_BY_EMAIL, values))
    if user.github_profile:
        statements.append(_insert(Users.TABLE_NAME_BY_GITHUB_PROFILE, values))
    if user.time_user_joined is not None:
        statements.append(
            _insert(Users.TABLE_NAME_RECENT, {Users.BUCKET: RECENT_BUCKET, **values})
        )
    return CqlBatch(tuple(statements))


def delete_user(user: User) -> CqlBatch:
    statements = [_delete(Users.TABLE_NAME, {Users.USER_ID: to_uuid(user.user_id)})]
    if user.email:
        statements.append(_delete(Users.TABLE_NAME_BY_EMAIL, {Users.EMAIL: user.email}))
    if user.github_profile:
        statements.append(
            _delete(
                Users.TABLE_NAME_BY_GITHUB_PROFILE,
                {Users.GITHUB_PROFILE: user.github_profile},
            )
        )
    if user.time_user_joined is not None:
        statements.append(_delete(Users.TABLE_NAME_RECENT, _user_recent_key(user)))
    return CqlBatch(tuple(statements))


def select_user(user_id: str) -> CqlStatement:
    return _select(Users.TABLE_NAME, {Users.USER_ID: to_uuid(user_id)})


def count_user(user_id: str) -> CqlStatement:
    return _count(Users.TABLE_NAME, {Users.USER_ID: to_uuid(user_id)})


def select_user_by_email(email: str) -> CqlStatement:
    return _select(Users.TABLE_NAME_BY_EMAIL, {Users.EMAIL: email})


def select_user_by_github_profile(github_profile: str) -> CqlStatement:
    return _select(
        Users.TABLE_NAME_BY_GITHUB_PROFILE, {Users.GITHUB_PROFILE: github_profile}
    )


def select_recent_users(limit: int) -> CqlStatement:
    return _select(Users.TABLE_NAME_RECENT, {Users.BUCKET: RECENT_BUCKET}, limit=limit)


# Organizations


def organization_values(organization: Organization) -> dict[str, Any]:
    return {
        Organizations.ORG_ID: to_uuid(organization.organization_id),
        Organizations.ORG_NAME: organization.organization_name,
        Organizations.OWNERS: to_uuid_set(organization.owners),
        Organizations.ICON_LINK: organization.logo_link,
        Organizations.INDUSTRY: enum_name(organization.industry),
        Organizations.EMAIL: organization.organization_email,
        Organizations.GITHUB_PROFILE: organization.github_profile,
        Organizations.STOCK_NAME: organization.stock_market_symbol,
        Organizations.TIER: enum_name(organization.tier),
        Organizations.DESCRIPTION: organization.organization_description,
        Organizations.WEBSITE: organization.website,
    }


def insert_organization(organization: Organization) -> CqlStatement:
    return _insert(Organizations.TABLE_NAME, organization_values(organization))


def select_organization(organization_id: str) -> CqlStatement:
    return _select(
        Organizations.TABLE_NAME, {Organizations.ORG_ID: to_uuid(organization_id)}
    )


def count_organization(organization_id: str) -> CqlStatement:
    return _count(Organizations.TABLE_NAME, {Organizations.ORG_ID: to_uuid(organization_id)})


def delete_organization(organization_id: str) -> CqlStatement:
    return _delete(Organizations.TABLE_NAME, {Organizations.ORG_ID: to_uuid(organization_id)})


def scan_organizations(limit: int) -> CqlStatement:
    return _select(Organizations.TABLE_NAME, limit=limit)


def insert_member(organization_id: str, user: User) -> CqlStatement:
    return _insert(
        Organizations.TABLE_NAME_MEMBERS,
        {Organizations.ORG_ID: to_uuid(organization_id), **user_values(user)},
    )


def _member_key(organization_id: str, user_id: str) -> dict[str, Any]:
    return {Organizations.ORG_ID: to_uuid(organization_id), Users.USER_ID: to_uuid(user_id)}


def count_member(organization_id: str, user_id: str) -> CqlStatement:
    return _count(Organizations.TABLE_NAME_MEMBERS, _member_key(organization_id, user_id))


def select_members(organization_id: str) -> CqlStatement:
    return _select(
        Organizations.TABLE_NAME_MEMBERS, {Organizations.ORG_ID: to_uuid(organization_id)}
    )


def delete_member(organization_id: str, user_id: str) -> CqlStatement:
    return _delete(Organizations.TABLE_NAME_MEMBERS, _member_key(organization_id, user_id))


def delete_all_members(organization_id: str) -> CqlStatement:
    return _delete(
        Organizations.TABLE_NAME_MEMBERS, {Organizations.ORG_ID: to_uuid(organization_id)}
    )


# Messages


def message_values(message: Message) -> dict[str, Any]:
    return {
        Messages.MESSAGE_ID: to_uuid(message.message_id),
        Messages.APP_ID: to_uuid(message.application_id),
        Messages.TITLE: message.title,
        Messages.BODY: message.body,
        Messages.URGENCY: enum_name(message.urgency),
        Messages.HOSTNAME: message.hostname,
        Messages.MAC_ADDRESS: message.mac_address,
        Messages.DEVICE_NAME: message.device_name,
        Messages.TIME_CREATED: millis_to_datetime(message.time_of_creation),
        Messages.TIME_RECEIVED: millis_to_datetime(message.time_message_received),
        Messages.SORT_TIME: millis_to_datetime(message.sort_time),
    }


def _message_app_key(message: Message) -> dict[str, Any]:
    return {
        Messages.APP_ID: to_uuid(message.application_id),
        Messages.SORT_TIME: millis_to_datetime(message.sort_time),
        Messages.MESSAGE_ID: to_uuid(message.message_id),
    }


def _message_hostname_key(message: Message) -> dict[str, Any]:
    return {
        Messages.HOSTNAME: message.hostname,
        Messages.SORT_TIME: millis_to_datetime(message.sort_time),
        Messages.MESSAGE_ID: to_uuid(message.message_id),
    }


def insert_message(message: Message, ttl: int, previous: Message | None = None) -> CqlBatch:
    """Write a Message to its primary table and listing projections.

    The hostname projection is skipped when the Message has no hostname.
    When ``previous`` is given, its projection rows under keys the new
    version no longer uses (another application, sort time or hostname)
    are deleted in the same batch.
    """
    values = message_values(message)
    statements: list[CqlStatement] = []

    if previous is not None:
        if _message_app_key(previous) != _message_app_key(message):
            statements.append(
                _delete(Messages.TABLE_NAME_BY_APP, _message_app_key(previous))
            )
        if previous.hostname and (
            _message_hostname_key(previous) != _message_hostname_key(message)
        ):
            statements.append(
                _delete(Messages.TABLE_NAME_BY_HOSTNAME, _message_hostname_key(previous))
            )

    statements.append(_insert(Messages.TABLE_NAME, values, ttl))
    statements.append(_insert(Messages.TABLE_NAME_BY_APP, values, ttl))
    if message.hostname:
        statements.append(_insert(Messages.TABLE_NAME_BY_HOSTNAME, values, ttl))
    return CqlBatch(tuple(statements))


def delete_message(message: Message) -> CqlBatch:
    statements = [
        _delete(Messages.TABLE_NAME, {Messages.MESSAGE_ID: to_uuid(message.message_id)}),
        _delete(Messages.TABLE_NAME_BY_APP, _message_app_key(message)),
    ]
    if message.hostname:
        statements.append(
            _delete(Messages.TABLE_NAME_BY_HOSTNAME, _message_hostname_key(message))
        )
    return CqlBatch(tuple(statements))


def select_message(message_id: str) -> CqlStatement:
    return _select(Messages.TABLE_NAME, {Messages.MESSAGE_ID: to_uuid(message_id)})


def count_message(application_id: str, message_id: str) -> CqlStatement:
    return _count(
        Messages.TABLE_NAME,
        {Messages.MESSAGE_ID: to_uuid(message_id), Messages.APP_ID: to_uuid(application_id)},
        allow_filtering=True,
    )


def select_messages_by_app(application_id: str, limit: int | None = None) -> CqlStatement:
    return _select(
        Messages.TABLE_NAME_BY_APP, {Messages.APP_ID: to_uuid(application_id)}, limit=limit
    )


def select_messages_by_hostname(hostname: str) -> CqlStatement:
    return _select(Messages.TABLE_NAME_BY_HOSTNAME, {Messages.HOSTNAME: hostname})


def select_messages_by_title(application_id: str, title: str) -> CqlStatement:
    return _select(
        Messages.TABLE_NAME_BY_APP,
        {Messages.APP_ID: to_uuid(application_id), Messages.TITLE: title},
        allow_filtering=True,
    )


def count_messages_by_app(application_id: str) -> CqlStatement:
    return _count(Messages.TABLE_NAME_BY_APP, {Messages.APP_ID: to_uuid(application_id)})


def delete_messages_by_app(application_id: str) -> CqlStatement:
    return _delete(Messages.TABLE_NAME_BY_APP, {Messages.APP_ID: to_uuid(application_id)})


# Inbox


def insert_inbox_message(user_id: str, message: Message, ttl: int) -> CqlStatement:
    return _insert(
        Inbox.TABLE_NAME,
        {Inbox.USER_ID: to_uuid(user_id), **message_values(message)},
        ttl,
    )


def _inbox_key(user_id: str, message_id: str) -> dict[str, Any]:
    return {Inbox.USER_ID: to_uuid(user_id), Messages.MESSAGE_ID: to_uuid(message_id)}


def select_inbox(user_id: str, application_id: str | None = None) -> CqlStatement:
    if application_id is None:
        return _select(Inbox.TABLE_NAME, {Inbox.USER_ID: to_uuid(user_id)})
    return _select(
        Inbox.TABLE_NAME,
        {Inbox.USER_ID: to_uuid(user_id), Messages.APP_ID: to_uuid(application_id)},
        allow_filtering=True,
    )


def count_inbox_message(user_id: str, message_id: str) -> CqlStatement:
    return _count(Inbox.TABLE_NAME, _inbox_key(user_id, message_id))


def count_inbox(user_id: str) -> CqlStatement:
    return _count(Inbox.TABLE_NAME, {Inbox.USER_ID: to_uuid(user_id)})


def delete_inbox_message(user_id: str, message_id: str) -> CqlStatement:
    return _delete(Inbox.TABLE_NAME, _inbox_key(user_id, message_id))


def delete_inbox(user_id: str) -> CqlStatement:
    return _delete(Inbox.TABLE_NAME, {Inbox.USER_ID: to_uuid(user_id)})


# Followers


def insert_following(user: User, application: Application) -> CqlBatch:
    """Write both sides of a following relation."""
    return CqlBatch(
        (
            _insert(
                Follow.TABLE_NAME_APP_FOLLOWERS,
                {Applications.APP_ID: to_uuid(application.application_id), **user_values(user)},
            ),
            _insert(
                Follow.TABLE_NAME_USER_FOLLOWING,
                {Users.USER_ID: to_uuid(user.user_id), **application_values(application)},
            ),
        )
    )


def _following_key(user_id: str, application_id: str) -> dict[str, Any]:
    return {Users.USER_ID: to_uuid(user_id), Applications.APP_ID: to_uuid(application_id)}


def delete_following(user_id: str, application_id: str) -> CqlBatch:
    key = _following_key(user_id, application_id)
    return CqlBatch(
        (
            _delete(
                Follow.TABLE_NAME_APP_FOLLOWERS,
                {Applications.APP_ID: key[Applications.APP_ID], Users.USER_ID: key[Users.USER_ID]},
            ),
            _delete(Follow.TABLE_NAME_USER_FOLLOWING, key),
        )
    )


def count_following(user_id: str, application_id: str) -> CqlStatement:
    return _count(Follow.TABLE_NAME_USER_FOLLOWING, _following_key(user_id, application_id))


def select_applications_followed_by(user_id: str) -> CqlStatement:
    return _select(Follow.TABLE_NAME_USER_FOLLOWING, {Users.USER_ID: to_uuid(user_id)})


def select_application_followers(application_id: str) -> CqlStatement:
    return _select(
        Follow.TABLE_NAME_APP_FOLLOWERS, {Applications.APP_ID: to_uuid(application_id)}
    )


# Tokens


def token_values(token: AuthenticationToken) -> dict[str, Any]:
    return {
        Tokens.TOKEN_ID: to_uuid(token.token_id),
        Tokens.OWNER_ID: to_uuid(token.owner_id),
        Tokens.ORG_ID: to_uuid(token.organization_id),
        Tokens.TOKEN_TYPE: enum_name(token.token_type),
        Tokens.STATUS: enum_name(token.status),
        Tokens.TIME_CREATED: millis_to_datetime(token.time_of_creation),
        Tokens.TIME_EXPIRES: millis_to_datetime(token.time_of_expiration),
    }


def _token_owner_key(owner_id: str, token_id: str) -> dict[str, Any]:
    return {Tokens.OWNER_ID: to_uuid(owner_id), Tokens.TOKEN_ID: to_uuid(token_id)}


def insert_token(
    token: AuthenticationToken, ttl: int, previous: AuthenticationToken | None = None
) -> CqlBatch:
    """Write a token and its owner projection with the same TTL.

    When ``previous`` belonged to another owner, that owner's projection
    row is deleted in the same batch.
    """
    values = token_values(token)
    statements: list[CqlStatement] = []
    if previous is not None and previous.owner_id and previous.owner_id != token.owner_id:
        statements.append(
            _delete(
                Tokens.TABLE_NAME_BY_OWNER,
                _token_owner_key(previous.owner_id, previous.token_id),
            )
        )
    statements.append(_insert(Tokens.TABLE_NAME, values, ttl))
    statements.append(_insert(Tokens.TABLE_NAME_BY_OWNER, values, ttl))
    return CqlBatch(tuple(statements))


def select_token(token_id: str) -> CqlStatement:
    return _select(Tokens.TABLE_NAME, {Tokens.TOKEN_ID: to_uuid(token_id)})


def count_token(token_id: str) -> CqlStatement:
    return _count(Tokens.TABLE_NAME, {Tokens.TOKEN_ID: to_uuid(token_id)})


def select_tokens_by_owner(owner_id: str) -> CqlStatement:
    return _select(Tokens.TABLE_NAME_BY_OWNER, {Tokens.OWNER_ID: to_uuid(owner_id)})


def delete_token(token_id: str, owner_id: str) -> CqlBatch:
    return CqlBatch(
        (
            _delete(Tokens.TABLE_NAME, {Tokens.TOKEN_ID: to_uuid(token_id)}),
            _delete(Tokens.TABLE_NAME_BY_OWNER, _token_owner_key(owner_id, token_id)),
        )
    )


def delete_tokens_by_owner(owner_id: str) -> CqlStatement:
    return _delete(Tokens.TABLE_NAME_BY_OWNER, {Tokens.OWNER_ID: to_uuid(owner_id)})


def delete_token_primaries(token_ids: Iterable[str]) -> CqlBatch:
    return CqlBatch(
        tuple(
            _delete(Tokens.TABLE_NAME, {Tokens.TOKEN_ID: to_uuid(token_id)})
            for token_id in token_ids
        )
    )


# Activity


def insert_event(user_id: str, event: Event, ttl: int) -> CqlStatement:
    return _insert(
        Activity.TABLE_NAME,
        {
            Activity.USER_ID: to_uuid(user_id),
            Activity.EVENT_ID: to_uuid(event.event_id),
            Activity.EVENT_TYPE: enum_name(event.event_type),
            Activity.APP_ID: to_uuid(event.application_id),
            Activity.ACTOR_ID: to_uuid(event.actor_id),
            Activity.TIME_OF_EVENT: millis_to_datetime(event.timestamp),
            Activity.DETAILS: serialize_details(event.details),
        },
        ttl,
    )


def _event_key(event_id: str, user_id: str) -> dict[str, Any]:
    return {Activity.USER_ID: to_uuid(user_id), Activity.EVENT_ID: to_uuid(event_id)}


def select_event(event_id: str, user_id: str) -> CqlStatement:
    return _select(Activity.TABLE_NAME, _event_key(event_id, user_id))


def count_event(event_id: str, user_id: str) -> CqlStatement:
    return _count(Activity.TABLE_NAME, _event_key(event_id, user_id))


def select_events(user_id: str) -> CqlStatement:
    return _select(Activity.TABLE_NAME, {Activity.USER_ID: to_uuid(user_id)})


def delete_event(event_id: str, user_id: str) -> CqlStatement:
    return _delete(Activity.TABLE_NAME, _event_key(event_id, user_id))


def delete_events(user_id: str) -> CqlStatement:
    return _delete(Activity.TABLE_NAME, {Activity.USER_ID: to_uuid(user_id)})


# Media


def _image_values(media_id: str, image: Image) -> dict[str, Any]:
    dimension = image.dimension
    return {
        Media.MEDIA_ID: to_uuid(media_id),
        Media.MEDIA_TYPE: enum_name(image.image_type),
        Media.DATA: image.data,
        Media.WIDTH: dimension.width if dimension else None,
        Media.HEIGHT: dimension.height if dimension else None,
    }


def _thumbnail_key(media_id: str, dimension: Dimension) -> dict[str, Any]:
    return {Media.MEDIA_ID: to_uuid(media_id), Media.DIMENSION: str(dimension)}


def insert_media(media_id: str, image: Image) -> CqlStatement:
    return _insert(Media.TABLE_NAME, _image_values(media_id, image))


def select_media(media_id: str) -> CqlStatement:
    return _select(Media.TABLE_NAME, {Media.MEDIA_ID: to_uuid(media_id)})


def count_media(media_id: str) -> CqlStatement:
    return _count(Media.TABLE_NAME, {Media.MEDIA_ID: to_uuid(media_id)})


def delete_media(media_id: str) -> CqlBatch:
    """Remove a blob and the whole partition of its thumbnails."""
    return CqlBatch(
        (
            _delete(Media.TABLE_NAME, {Media.MEDIA_ID: to_uuid(media_id)}),
            delete_all_thumbnails(media_id),
        )
    )


def insert_thumbnail(media_id: str, dimension: Dimension, image: Image) -> CqlStatement:
    values = _image_values(media_id, image)
    values[Media.DIMENSION] = str(dimension)
    values[Media.WIDTH] = dimension.width
    values[Media.HEIGHT] = dimension.height
    return _insert(Media.TABLE_NAME_THUMBNAILS, values)


def select_thumbnail(media_id: str, dimension: Dimension) -> CqlStatement:
    return _select(Media.TABLE_NAME_THUMBNAILS, _thumbnail_key(media_id, dimension))


def count_thumbnail(media_id: str, dimension: Dimension) -> CqlStatement:
    return _count(Media.TABLE_NAME_THUMBNAILS, _thumbnail_key(media_id, dimension))


def delete_thumbnail(media_id: str, dimension: Dimension) -> CqlStatement:
    return _delete(Media.TABLE_NAME_THUMBNAILS, _thumbnail_key(media_id, dimension))


def delete_all_thumbnails(media_id: str) -> CqlStatement:
    return _delete(Media.TABLE_NAME_THUMBNAILS, {Media.MEDIA_ID: to_uuid(media_id)})


# Reactions


def insert_reactions(owner_id: str, serialized_reactions: list[str]) -> CqlStatement:
    return _insert(
        Reactions.TABLE_NAME,
        {Reactions.OWNER_ID: to_uuid(owner_id), Reactions.SERIALIZED_REACTIONS: serialized_reactions},
    )


def select_reactions(owner_id: str) -> CqlStatement:
    return _select(Reactions.TABLE_NAME, {Reactions.OWNER_ID: to_uuid(owner_id)})


def delete_reactions(owner_id: str) -> CqlStatement:
    return _delete(Reactions.TABLE_NAME, {Reactions.OWNER_ID: to_uuid(owner_id)})
