"""Exceptions raised while bootstrapping store sessions."""


class DatabaseError(Exception):
    """Base exception for store session management."""

    pass


class DatabaseConnectionError(DatabaseError):
    """Raised when a store session or engine cannot be established."""

    pass
