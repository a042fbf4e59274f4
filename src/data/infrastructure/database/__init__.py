"""Relational store infrastructure: engine, declarative base and errors."""

from infrastructure.database.engines import (
    build_url,
    create_engine_from_settings,
    create_session_factory,
)
from infrastructure.database.exceptions import DatabaseConnectionError, DatabaseError
from infrastructure.database.models import Base, TimestampMixin

__all__ = [
    "Base",
    "DatabaseConnectionError",
    "DatabaseError",
    "TimestampMixin",
    "build_url",
    "create_engine_from_settings",
    "create_session_factory",
]
