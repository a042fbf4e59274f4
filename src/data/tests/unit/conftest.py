"""Unit test fixtures shared across the data layer."""

from unittest.mock import MagicMock

import pytest

from aroma.domain.entities import Application, Message, User
from aroma.domain.value_objects import Urgency
from infrastructure.settings import DataLayerDefaults
from tests.unit.ids import (
    APP_ID,
    MESSAGE_ID,
    MISSING_ID,
    ORG_ID,
    OTHER_ID,
    OWNER_ID,
    START_MILLIS,
    USER_ID,
)


class FakeClock:
    """Clock whose time only moves when a test advances it."""

    def __init__(self, now_millis: int = START_MILLIS):
        self._now = now_millis

    def now_millis(self) -> int:
        return self._now

    def advance(self, seconds: float) -> None:
        self._now += int(seconds * 1000)


@pytest.fixture
def clock():
    """Provide a controllable clock."""
    return FakeClock()


@pytest.fixture
def defaults():
    """Provide data-layer defaults independent of the environment."""
    return DataLayerDefaults(
        recently_created_limit=50,
        search_limit=100,
        max_media_size_bytes=1024,
        max_thumbnail_size_bytes=256,
    )


@pytest.fixture
def mock_session():
    """Provide a mocked Cassandra session returning no rows."""
    session = MagicMock()
    session.execute.return_value = []
    return session


@pytest.fixture
def mock_probe():
    """Provide a mocked repository probe."""
    return MagicMock()


@pytest.fixture
def application():
    """Provide the Canary application."""
    return Application(
        application_id=APP_ID,
        name="Canary",
        owners={OWNER_ID},
        organization_id=ORG_ID,
        time_of_provisioning=START_MILLIS,
    )


@pytest.fixture
def user():
    """Provide a user with every projected field set."""
    return User(
        user_id=USER_ID,
        email="ada@example.com",
        first_name="Ada",
        last_name="Lovelace",
        github_profile="https://github.com/ada",
        time_user_joined=START_MILLIS,
    )


@pytest.fixture
def message():
    """Provide a message sent by the Canary application."""
    return Message(
        message_id=MESSAGE_ID,
        application_id=APP_ID,
        title="Disk almost full",
        body="Only 2% left on /var",
        urgency=Urgency.HIGH,
        hostname="db-01",
        time_of_creation=START_MILLIS,
    )
