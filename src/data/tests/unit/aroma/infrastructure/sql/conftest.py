"""Fixtures for the relational repositories."""

import pytest
from sqlalchemy import create_engine

from infrastructure.database import Base, create_session_factory


@pytest.fixture
def engine():
    """Provide an in-memory SQLite engine with every table created."""
    engine = create_engine("sqlite://")
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    """Provide a sessionmaker bound to the in-memory engine."""
    return create_session_factory(engine)

