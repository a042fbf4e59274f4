"""Typed failures raised by every repository implementation.

Three families exist: the caller supplied something invalid
(InvalidArgumentError, raised before any I/O), the requested entity is
absent (DoesNotExistError and its per-entity subclasses, raised only by
get and delete operations), or the store itself failed
(OperationFailedError, carrying the underlying message).

The data layer never retries. Callers decide whether an operation is safe
to repeat.
"""


class DataAccessError(Exception):
    """Base class for all data-layer failures."""

    pass


class InvalidArgumentError(DataAccessError):
    """Raised when a caller supplies a null required field, an unparseable
    id, an empty required string, or a non-positive lifetime.

    Always raised before the store is contacted.
    """

    pass


class OperationFailedError(DataAccessError):
    """Raised when the underlying store fails (timeout, unavailable,
    schema mismatch).

    Partial mutations already accepted by the store are not rolled back.
    """

    pass


class DoesNotExistError(DataAccessError):
    """Raised by get and delete operations when the primary row is absent.

    Contains operations never raise this; they return False instead.
    """

    pass


class UserDoesNotExistError(DoesNotExistError):
    """Raised when a User cannot be found."""

    pass


class ApplicationDoesNotExistError(DoesNotExistError):
    """Raised when an Application cannot be found."""

    pass


class OrganizationDoesNotExistError(DoesNotExistError):
    """Raised when an Organization cannot be found."""

    pass


class MessageDoesNotExistError(DoesNotExistError):
    """Raised when a Message cannot be found for the given Application."""

    pass


class InvalidCredentialsError(DoesNotExistError):
    """Raised when a token or stored password cannot be found."""

    pass


class MediaDoesNotExistError(DoesNotExistError):
    """Raised when a media blob or one of its thumbnails cannot be found."""

    pass


class EventDoesNotExistError(DoesNotExistError):
    """Raised when an activity Event cannot be found for a User."""

    pass
