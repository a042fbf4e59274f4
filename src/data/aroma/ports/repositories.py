"""Repository protocols (ports) for the Aroma data layer.

Repository protocols define the contract every backing store honours. Two
families implement them: the wide-column store (Cassandra, with the
relational store for credentials and preferences) and the in-memory twin
used for development and tests. Both validate arguments with
``aroma.ports.assertions`` before touching state and raise the typed
failures in ``aroma.ports.exceptions``.

All operations are synchronous and may block on store I/O. ``contains_*``
operations never raise a DoesNotExistError.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from aroma.domain.entities import (
    Application,
    AuthenticationToken,
    Event,
    Image,
    Message,
    MobileDevice,
    Organization,
    Reaction,
    User,
)
from aroma.domain.value_objects import Dimension, LengthOfTime


@runtime_checkable
class IApplicationRepository(Protocol):
    """Repository for Applications and their owner, organization and
    recently-created projections."""

    def save_application(self, application: Application) -> None:
        """Upsert an Application and every projection it belongs to.

        The primary row and the per-owner, per-organization and recent rows
        are written atomically. The per-organization row is omitted when
        the Application has no organization.

        Args:
            application: The Application to persist

        Raises:
            InvalidArgumentError: If the Application fails validation
            OperationFailedError: If the store rejects the write
        """
        ...

    def delete_application(self, application_id: str) -> None:
        """Delete an Application from the primary table and every projection.

        Raises:
            InvalidArgumentError: If application_id is not a valid UUID
            ApplicationDoesNotExistError: If no such Application exists
            OperationFailedError: If the store fails
        """
        ...

    def get_by_id(self, application_id: str) -> Application:
        """Retrieve an Application by id.

        Raises:
            InvalidArgumentError: If application_id is not a valid UUID
            ApplicationDoesNotExistError: If no such Application exists
            OperationFailedError: If the store fails
        """
        ...

    def contains_application(self, application_id: str) -> bool:
        """Return whether an Application with this id exists."""
        ...

    def get_applications_owned_by(self, user_id: str) -> list[Application]:
        """List Applications for which user_id is an owner."""
        ...

    def get_applications_by_org(self, organization_id: str) -> list[Application]:
        """List Applications belonging to an Organization."""
        ...

    def search_by_name(self, search_term: str) -> list[Application]:
        """Best-effort, case-insensitive substring search over recently
        created Applications."""
        ...

    def get_recently_created(self) -> list[Application]:
        """List recently created Applications, newest first, bounded."""
        ...


@runtime_checkable
class IUserRepository(Protocol):
    """Repository for Users and their email, GitHub and recency projections.

    Re-saving the same User is idempotent and last-writer-wins per column.
    """

    def save_user(self, user: User) -> None:
        """Upsert a User and its lookup projections atomically.

        A User without a github_profile (or email) skips that projection.

        Raises:
            InvalidArgumentError: If the User fails validation
            OperationFailedError: If the store rejects the write
        """
        ...

    def get_user(self, user_id: str) -> User:
        """Retrieve a User by id.

        Raises:
            InvalidArgumentError: If user_id is not a valid UUID
            UserDoesNotExistError: If no such User exists
            OperationFailedError: If the store fails
        """
        ...

    def delete_user(self, user_id: str) -> None:
        """Delete a User and every projection row that refers to it."""
        ...

    def contains_user(self, user_id: str) -> bool:
        """Return whether a User with this id exists."""
        ...

    def get_user_by_email(self, email: str) -> User:
        """Retrieve a User through the email projection.

        Raises:
            InvalidArgumentError: If email is empty
            UserDoesNotExistError: If no User has this email
        """
        ...

    def find_by_github_profile(self, github_profile: str) -> User:
        """Retrieve a User through the GitHub profile projection.

        Raises:
            InvalidArgumentError: If github_profile is empty
            UserDoesNotExistError: If no User has this profile
        """
        ...

    def get_recently_created_users(self) -> list[User]:
        """List recently joined Users, newest first, bounded."""
        ...


@runtime_checkable
class IOrganizationRepository(Protocol):
    """Repository for Organizations and their member listings.

    Owners are read from the Organization's own owners column; the member
    table is a separate, denormalized listing of Users.
    """

    def save_organization(self, organization: Organization) -> None:
        """Upsert an Organization."""
        ...

    def get_organization(self, organization_id: str) -> Organization:
        """Retrieve an Organization by id.

        Raises:
            InvalidArgumentError: If organization_id is not a valid UUID
            OrganizationDoesNotExistError: If no such Organization exists
        """
        ...

    def delete_organization(self, organization_id: str) -> None:
        """Delete all members, then the Organization itself.

        The two steps run in sequence rather than as a batch. A failure
        between them leaves the Organization without members and should be
        treated by the caller as retryable.
        """
        ...

    def contains_organization(self, organization_id: str) -> bool:
        """Return whether an Organization with this id exists."""
        ...

    def search_by_name(self, search_term: str) -> list[Organization]:
        """Best-effort, case-insensitive substring search on names."""
        ...

    def get_organization_owners(self, organization_id: str) -> list[User]:
        """Return the owners recorded on the Organization as id-only Users.

        Raises:
            OrganizationDoesNotExistError: If no such Organization exists
        """
        ...

    def is_owner(self, organization_id: str, user_id: str) -> bool:
        """Return whether user_id is among the Organization's owners."""
        ...

    def save_member_in_organization(self, organization_id: str, user: User) -> None:
        """Add or update a User in the Organization's member listing."""
        ...

    def is_member_in_organization(self, organization_id: str, user_id: str) -> bool:
        """Return whether user_id is listed as a member."""
        ...

    def get_organization_members(self, organization_id: str) -> list[User]:
        """List the members of an Organization."""
        ...

    def delete_member(self, organization_id: str, user_id: str) -> None:
        """Remove a single member."""
        ...

    def delete_all_members(self, organization_id: str) -> None:
        """Remove every member of an Organization."""
        ...


@runtime_checkable
class IMessageRepository(Protocol):
    """Repository for Messages, written with a time-to-live.

    Per-application listings are returned newest first. Callers may receive
    fewer entries than requested because of TTL expiry.
    """

    def save_message(
        self, message: Message, lifetime: LengthOfTime | None = None
    ) -> None:
        """Persist a Message and its projections with a TTL.

        Args:
            message: The Message to persist
            lifetime: How long to keep it; the service-wide default when None

        Raises:
            InvalidArgumentError: If the Message or lifetime is invalid
            OperationFailedError: If the store rejects the write
        """
        ...

    def get_message(self, application_id: str, message_id: str) -> Message:
        """Retrieve a Message sent by the given Application.

        Raises:
            MessageDoesNotExistError: If absent or sent by another Application
        """
        ...

    def delete_message(self, application_id: str, message_id: str) -> None:
        """Delete a Message and its projections.

        Raises:
            MessageDoesNotExistError: If absent or sent by another Application
        """
        ...

    def contains_message(self, application_id: str, message_id: str) -> bool:
        """Return whether the Application has a live Message with this id."""
        ...

    def get_by_hostname(self, hostname: str) -> list[Message]:
        """List Messages sent from a host, newest first."""
        ...

    def get_by_application(
        self, application_id: str, limit: int | None = None
    ) -> list[Message]:
        """List an Application's Messages newest first, optionally bounded."""
        ...

    def get_by_title(self, application_id: str, title: str) -> list[Message]:
        """List an Application's Messages with exactly this title."""
        ...

    def get_count_by_application(self, application_id: str) -> int:
        """Count an Application's live Messages."""
        ...

    def delete_all_messages(self, application_id: str) -> None:
        """Delete every Message of an Application.

        Executed as a sequence of statements with at-least-once semantics;
        a partial failure is retryable.
        """
        ...


@runtime_checkable
class IInboxRepository(Protocol):
    """Repository for each User's transient inbox of Messages."""

    def save_message_for_user(
        self, user: User, message: Message, lifetime: LengthOfTime | None = None
    ) -> None:
        """Store a Message in a User's inbox with a TTL.

        Args:
            user: The recipient
            message: The Message to store
            lifetime: How long to keep it; the service-wide default when None
        """
        ...

    def get_messages_for_user(
        self, user_id: str, application_id: str | None = None
    ) -> list[Message]:
        """List a User's inbox, optionally filtered to one Application."""
        ...

    def contains_message_in_inbox(self, user_id: str, message: Message) -> bool:
        """Return whether the Message is live in the User's inbox."""
        ...

    def delete_message_for_user(self, user_id: str, message_id: str) -> None:
        """Remove one Message from a User's inbox."""
        ...

    def delete_all_messages_for_user(self, user_id: str) -> None:
        """Empty a User's inbox."""
        ...

    def count_inbox_for_user(self, user_id: str) -> int:
        """Count live (non-expired) Messages in a User's inbox."""
        ...


@runtime_checkable
class IFollowerRepository(Protocol):
    """Repository for the bidirectional User <-> Application following relation."""

    def save_following(self, user: User, application: Application) -> None:
        """Record that user follows application, on both sides atomically."""
        ...

    def delete_following(self, user_id: str, application_id: str) -> None:
        """Remove the relation from both sides atomically."""
        ...

    def following_exists(self, user_id: str, application_id: str) -> bool:
        """Return whether user_id follows application_id."""
        ...

    def get_applications_followed_by(self, user_id: str) -> list[Application]:
        """List the Applications a User follows."""
        ...

    def get_application_followers(self, application_id: str) -> list[User]:
        """List the Users following an Application."""
        ...


@runtime_checkable
class ITokenRepository(Protocol):
    """Repository for AuthenticationTokens, keyed by id and by owner.

    Every token row carries a TTL derived from its expiration time.
    """

    def save_token(self, token: AuthenticationToken) -> None:
        """Persist a token and its owner projection with a TTL.

        Raises:
            InvalidArgumentError: If the token is invalid or already expired
        """
        ...

    def get_token(self, token_id: str) -> AuthenticationToken:
        """Retrieve a token.

        Raises:
            InvalidCredentialsError: If the token does not exist
        """
        ...

    def contains_token(self, token_id: str) -> bool:
        """Return whether a live token with this id exists."""
        ...

    def does_token_belong_to(self, token_id: str, owner_id: str) -> bool:
        """Return whether the token exists and is owned by owner_id.

        Raises:
            InvalidCredentialsError: If the token does not exist
        """
        ...

    def get_tokens_belonging_to(self, owner_id: str) -> list[AuthenticationToken]:
        """List the live tokens owned by owner_id."""
        ...

    def delete_token(self, token_id: str) -> None:
        """Delete a token and its owner projection row."""
        ...

    def delete_tokens(self, owner_id: str) -> None:
        """Delete every token owned by owner_id."""
        ...


@runtime_checkable
class IActivityRepository(Protocol):
    """Repository for recent activity Events per User."""

    def save_event(
        self, event: Event, for_user: User, lifetime: LengthOfTime | None = None
    ) -> None:
        """Append an Event to a User's activity with a TTL."""
        ...

    def save_events(
        self, event: Event, users: list[User], lifetime: LengthOfTime | None = None
    ) -> None:
        """Append the same Event to several Users' activity."""
        ...

    def contains_event(self, event_id: str, user_id: str) -> bool:
        """Return whether the User has this live Event."""
        ...

    def get_event(self, event_id: str, user_id: str) -> Event:
        """Retrieve one Event.

        Raises:
            EventDoesNotExistError: If the User has no such Event
        """
        ...

    def get_all_events_for(self, user_id: str) -> list[Event]:
        """List every live Event for a User."""
        ...

    def delete_event(self, event_id: str, user_id: str) -> None:
        """Remove one Event."""
        ...

    def delete_all_events_for(self, user_id: str) -> None:
        """Remove every Event for a User."""
        ...


@runtime_checkable
class IMediaRepository(Protocol):
    """Repository for small binary blobs and their thumbnail variants."""

    def save_media(self, media_id: str, image: Image) -> None:
        """Store a blob under media_id."""
        ...

    def get_media(self, media_id: str) -> Image:
        """Retrieve a blob.

        Raises:
            MediaDoesNotExistError: If no such blob exists
        """
        ...

    def contains_media(self, media_id: str) -> bool:
        """Return whether a blob exists under media_id."""
        ...

    def delete_media(self, media_id: str) -> None:
        """Delete a blob and every thumbnail of it in one batch."""
        ...

    def save_thumbnail(self, media_id: str, dimension: Dimension, image: Image) -> None:
        """Store a thumbnail variant keyed by its dimension."""
        ...

    def get_thumbnail(self, media_id: str, dimension: Dimension) -> Image:
        """Retrieve a thumbnail variant.

        Raises:
            MediaDoesNotExistError: If no such thumbnail exists
        """
        ...

    def contains_thumbnail(self, media_id: str, dimension: Dimension) -> bool:
        """Return whether a thumbnail variant exists."""
        ...

    def delete_thumbnail(self, media_id: str, dimension: Dimension) -> None:
        """Delete one thumbnail variant."""
        ...

    def delete_all_thumbnails(self, media_id: str) -> None:
        """Delete every thumbnail variant of a blob."""
        ...


@runtime_checkable
class IReactionRepository(Protocol):
    """Repository for the list of Reactions authored by a User or Application.

    Lists are upserted as a whole; saving an empty list removes them.
    """

    def save_reactions_for_user(
        self, user_id: str, reactions: list[Reaction] | None
    ) -> None:
        ...

    def get_reactions_for_user(self, user_id: str) -> list[Reaction]:
        ...

    def save_reactions_for_application(
        self, application_id: str, reactions: list[Reaction] | None
    ) -> None:
        ...

    def get_reactions_for_application(self, application_id: str) -> list[Reaction]:
        ...


@runtime_checkable
class ICredentialRepository(Protocol):
    """Repository for already-hashed User passwords."""

    def save_encrypted_password(self, user_id: str, encrypted_password: str) -> None:
        ...

    def contains_encrypted_password(self, user_id: str) -> bool:
        ...

    def get_encrypted_password(self, user_id: str) -> str:
        """Retrieve the stored password hash.

        Raises:
            InvalidCredentialsError: If the User has no stored password
        """
        ...

    def delete_encrypted_password(self, user_id: str) -> None:
        ...


@runtime_checkable
class IUserPreferencesRepository(Protocol):
    """Repository for the mobile devices a User has registered."""

    def save_mobile_device(self, user_id: str, device: MobileDevice) -> None:
        """Add one device to the User's set."""
        ...

    def save_mobile_devices(self, user_id: str, devices: set[MobileDevice]) -> None:
        """Replace the User's whole set of devices."""
        ...

    def contains_mobile_device(self, user_id: str, device: MobileDevice) -> bool:
        ...

    def get_mobile_devices(self, user_id: str) -> set[MobileDevice]:
        """Return the User's devices; empty when none are registered."""
        ...

    def delete_mobile_device(self, user_id: str, device: MobileDevice) -> None:
        ...

    def delete_all_mobile_devices(self, user_id: str) -> None:
        ...
