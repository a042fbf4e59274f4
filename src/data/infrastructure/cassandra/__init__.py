"""Wide-column store session management."""

from infrastructure.cassandra.session import CassandraSessionFactory

__all__ = ["CassandraSessionFactory"]
