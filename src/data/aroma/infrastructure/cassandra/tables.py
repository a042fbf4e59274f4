"""Physical layout of the Aroma keyspace.

Each class names one family of tables: the primary table and the
denormalized projections that serve a particular read path. Projections
reuse the primary's column names, so a single mapper reads any of them.

``SCHEMA`` holds the CQL DDL for development keyspaces.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from cassandra.cluster import Session

    from infrastructure.observability.probes import ConnectionProbe

RECENT_BUCKET = "all"


class Applications:
    TABLE_NAME = "Applications"
    TABLE_NAME_BY_OWNER = "Applications_By_Owner"
    TABLE_NAME_BY_ORG = "Applications_By_Org"
    TABLE_NAME_RECENTLY_CREATED = "Applications_Recently_Created"

    APP_ID = "app_id"
    NAME = "name"
    DESCRIPTION = "app_description"
    ORG_ID = "org_id"
    ICON_MEDIA_ID = "icon_media_id"
    OWNERS = "owners"
    OWNER = "owner_id"
    FOLLOWERS = "followers"
    TIER = "tier"
    PROGRAMMING_LANGUAGE = "programming_language"
    TIME_PROVISIONED = "time_provisioned"
    TIME_OF_TOKEN_EXPIRATION = "time_of_token_expiration"
    BUCKET = "bucket"


class Users:
    TABLE_NAME = "Users"
    TABLE_NAME_BY_EMAIL = "Users_By_Email"
    TABLE_NAME_BY_GITHUB_PROFILE = "Users_By_Github_Profile"
    TABLE_NAME_RECENT = "Users_Recent"

    USER_ID = "user_id"
    FIRST_NAME = "first_name"
    MIDDLE_NAME = "middle_name"
    LAST_NAME = "last_name"
    EMAIL = "email"
    ROLES = "roles"
    PROFILE_IMAGE_LINK = "profile_image_link"
    GITHUB_PROFILE = "github_profile"
    BIRTH_DATE = "birth_date"
    TIME_ACCOUNT_CREATED = "time_account_created"
    BUCKET = "bucket"


class Organizations:
    TABLE_NAME = "Organizations"
    TABLE_NAME_MEMBERS = "Organizations_Members"

    ORG_ID = "org_id"
    ORG_NAME = "org_name"
    OWNERS = "owners"
    ICON_LINK = "icon_link"
    INDUSTRY = "industry"
    EMAIL = "org_email"
    GITHUB_PROFILE = "github_profile"
    STOCK_NAME = "stock_name"
    TIER = "tier"
    DESCRIPTION = "org_description"
    WEBSITE = "website"


class Messages:
    TABLE_NAME = "Messages"
    TABLE_NAME_BY_APP = "Messages_By_App"
    TABLE_NAME_BY_HOSTNAME = "Messages_By_Hostname"

    MESSAGE_ID = "message_id"
    APP_ID = "app_id"
    TITLE = "title"
    BODY = "body"
    URGENCY = "urgency"
    HOSTNAME = "hostname"
    MAC_ADDRESS = "mac_address"
    DEVICE_NAME = "device_name"
    TIME_CREATED = "time_created"
    TIME_RECEIVED = "time_received"
    SORT_TIME = "sort_time"


class Inbox:
    TABLE_NAME = "Inbox"

    USER_ID = "user_id"


class Follow:
    TABLE_NAME_APP_FOLLOWERS = "Followers_Of_App"
    TABLE_NAME_USER_FOLLOWING = "Apps_Followed_By_User"


class Tokens:
    TABLE_NAME = "Tokens"
    TABLE_NAME_BY_OWNER = "Tokens_By_Owner"

    TOKEN_ID = "token_id"
    OWNER_ID = "owner_id"
    ORG_ID = "org_id"
    TOKEN_TYPE = "token_type"
    STATUS = "token_status"
    TIME_CREATED = "time_created"
    TIME_EXPIRES = "time_expires"


class Activity:
    TABLE_NAME = "Activity"

    USER_ID = "user_id"
    EVENT_ID = "event_id"
    EVENT_TYPE = "event_type"
    APP_ID = "app_id"
    ACTOR_ID = "actor_id"
    TIME_OF_EVENT = "time_of_event"
    DETAILS = "details"


class Media:
    TABLE_NAME = "Media"
    TABLE_NAME_THUMBNAILS = "Media_Thumbnails"

    MEDIA_ID = "media_id"
    MEDIA_TYPE = "media_type"
    DATA = "binary"
    WIDTH = "width"
    HEIGHT = "height"
    DIMENSION = "dimension"


class Reactions:
    TABLE_NAME = "Reactions"

    OWNER_ID = "owner_id"
    SERIALIZED_REACTIONS = "serialized_reactions"


_APPLICATION_COLUMNS = """
    app_id uuid,
    name text,
    app_description text,
    org_id uuid,
    icon_media_id uuid,
    owners set<uuid>,
    followers set<uuid>,
    tier text,
    programming_language text,
    time_provisioned timestamp,
    time_of_token_expiration timestamp"""

_USER_COLUMNS = """
    user_id uuid,
    first_name text,
    middle_name text,
    last_name text,
    email text,
    roles set<text>,
    profile_image_link text,
    github_profile text,
    birth_date timestamp,
    time_account_created timestamp"""

_MESSAGE_COLUMNS = """
    message_id uuid,
    app_id uuid,
    title text,
    body text,
    urgency text,
    hostname text,
    mac_address text,
    device_name text,
    time_created timestamp,
    time_received timestamp,
    sort_time timestamp"""

_TOKEN_COLUMNS = """
    token_id uuid,
    owner_id uuid,
    org_id uuid,
    token_type text,
    token_status text,
    time_created timestamp,
    time_expires timestamp"""

_MEDIA_COLUMNS = """
    media_id uuid,
    media_type text,
    binary blob,
    width int,
    height int"""

SCHEMA: tuple[str, ...] = (
    f"CREATE TABLE IF NOT EXISTS Applications ({_APPLICATION_COLUMNS},"
    "\n    PRIMARY KEY (app_id))",
    f"CREATE TABLE IF NOT EXISTS Applications_By_Owner (owner_id uuid,{_APPLICATION_COLUMNS},"
    "\n    PRIMARY KEY ((owner_id), app_id))",
    f"CREATE TABLE IF NOT EXISTS Applications_By_Org ({_APPLICATION_COLUMNS},"
    "\n    PRIMARY KEY ((org_id), app_id))",
    f"CREATE TABLE IF NOT EXISTS Applications_Recently_Created (bucket text,{_APPLICATION_COLUMNS},"
    "\n    PRIMARY KEY ((bucket), time_provisioned, app_id))"
    "\n    WITH CLUSTERING ORDER BY (time_provisioned DESC, app_id ASC)",
    f"CREATE TABLE IF NOT EXISTS Users ({_USER_COLUMNS},"
    "\n    PRIMARY KEY (user_id))",
    f"CREATE TABLE IF NOT EXISTS Users_By_Email ({_USER_COLUMNS},"
    "\n    PRIMARY KEY (email))",
    f"CREATE TABLE IF NOT EXISTS Users_By_Github_Profile ({_USER_COLUMNS},"
    "\n    PRIMARY KEY (github_profile))",
    f"CREATE TABLE IF NOT EXISTS Users_Recent (bucket text,{_USER_COLUMNS},"
    "\n    PRIMARY KEY ((bucket), time_account_created, user_id))"
    "\n    WITH CLUSTERING ORDER BY (time_account_created DESC, user_id ASC)",
    """CREATE TABLE IF NOT EXISTS Organizations (
    org_id uuid,
    org_name text,
    owners set<uuid>,
    icon_link text,
    industry text,
    org_email text,
    github_profile text,
    stock_name text,
    tier text,
    org_description text,
    website text,
    PRIMARY KEY (org_id))""",
    f"CREATE TABLE IF NOT EXISTS Organizations_Members (org_id uuid,{_USER_COLUMNS},"
    "\n    PRIMARY KEY ((org_id), user_id))",
    f"CREATE TABLE IF NOT EXISTS Messages ({_MESSAGE_COLUMNS},"
    "\n    PRIMARY KEY (message_id))",
    f"CREATE TABLE IF NOT EXISTS Messages_By_App ({_MESSAGE_COLUMNS},"
    "\n    PRIMARY KEY ((app_id), sort_time, message_id))"
    "\n    WITH CLUSTERING ORDER BY (sort_time DESC, message_id ASC)",
    f"CREATE TABLE IF NOT EXISTS Messages_By_Hostname ({_MESSAGE_COLUMNS},"
    "\n    PRIMARY KEY ((hostname), sort_time, message_id))"
    "\n    WITH CLUSTERING ORDER BY (sort_time DESC, message_id ASC)",
    f"CREATE TABLE IF NOT EXISTS Inbox (user_id uuid,{_MESSAGE_COLUMNS},"
    "\n    PRIMARY KEY ((user_id), message_id))",
    f"CREATE TABLE IF NOT EXISTS Followers_Of_App (app_id uuid,{_USER_COLUMNS},"
    "\n    PRIMARY KEY ((app_id), user_id))",
    f"CREATE TABLE IF NOT EXISTS Apps_Followed_By_User (user_id uuid,{_APPLICATION_COLUMNS},"
    "\n    PRIMARY KEY ((user_id), app_id))",
    f"CREATE TABLE IF NOT EXISTS Tokens ({_TOKEN_COLUMNS},"
    "\n    PRIMARY KEY (token_id))",
    f"CREATE TABLE IF NOT EXISTS Tokens_By_Owner ({_TOKEN_COLUMNS},"
    "\n    PRIMARY KEY ((owner_id), token_id))",
    """CREATE TABLE IF NOT EXISTS Activity (
    user_id uuid,
    event_id uuid,
    event_type text,
    app_id uuid,
    actor_id uuid,
    time_of_event timestamp,
    details text,
    PRIMARY KEY ((user_id), event_id))""",
    f"CREATE TABLE IF NOT EXISTS Media ({_MEDIA_COLUMNS},"
    "\n    PRIMARY KEY (media_id))",
    f"CREATE TABLE IF NOT EXISTS Media_Thumbnails (dimension text,{_MEDIA_COLUMNS},"
    "\n    PRIMARY KEY ((media_id), dimension))",
    """CREATE TABLE IF NOT EXISTS Reactions (
    owner_id uuid,
    serialized_reactions list<text>,
    PRIMARY KEY (owner_id))""",
)


def create_schema(session: Session, probe: ConnectionProbe | None = None) -> None:
    """Create every Aroma table in the session's keyspace if missing.

    Intended for development and test keyspaces only.
    """
    for statement in SCHEMA:
        session.execute(statement)
    if probe is not None:
        probe.schema_applied(store="cassandra", statement_count=len(SCHEMA))
