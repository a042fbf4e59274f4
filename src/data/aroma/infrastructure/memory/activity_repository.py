"""In-memory implementation of IActivityRepository."""

from __future__ import annotations

from aroma.domain.entities import Event, User
from aroma.domain.value_objects import LengthOfTime
from aroma.infrastructure.memory.base import Expiring, InMemoryRepository
from aroma.ports.assertions import check_event, check_event_id, check_user, check_user_id
from aroma.ports.exceptions import EventDoesNotExistError, InvalidArgumentError
from aroma.ports.repositories import IActivityRepository


class InMemoryActivityRepository(InMemoryRepository, IActivityRepository):
    """One expiring Event map per User."""

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._activity: dict[str, dict[str, Expiring[Event]]] = {}

    def save_event(
        self, event: Event, for_user: User, lifetime: LengthOfTime | None = None
    ) -> None:
        self.save_events(event, [for_user], lifetime)

    def save_events(
        self, event: Event, users: list[User], lifetime: LengthOfTime | None = None
    ) -> None:
        check_event(event)
        if not users:
            raise InvalidArgumentError("users must not be empty")
        for user in users:
            check_user(user)
        expires_at = self._expires_at(lifetime, self._defaults.activity_lifetime)
        with self._lock:
            for user in users:
                events = self._activity.setdefault(user.user_id, {})
                events[event.event_id] = Expiring(self._copy(event), expires_at)

    def contains_event(self, event_id: str, user_id: str) -> bool:
        check_event_id(event_id)
        check_user_id(user_id)
        with self._lock:
            return event_id in self._live(self._activity.get(user_id, {}))

    def get_event(self, event_id: str, user_id: str) -> Event:
        check_event_id(event_id)
        check_user_id(user_id)
        with self._lock:
            event = self._live(self._activity.get(user_id, {})).get(event_id)
            if event is None:
                raise EventDoesNotExistError(
                    f"Event {event_id} does not exist for User {user_id}"
                )
            return self._copy(event)

    def get_all_events_for(self, user_id: str) -> list[Event]:
        check_user_id(user_id)
        with self._lock:
            events = self._live(self._activity.get(user_id, {}))
            return [self._copy(events[event_id]) for event_id in sorted(events)]

    def delete_event(self, event_id: str, user_id: str) -> None:
        with self._lock:
            self.get_event(event_id, user_id)
            del self._activity[user_id][event_id]

    def delete_all_events_for(self, user_id: str) -> None:
        check_user_id(user_id)
        with self._lock:
            self._activity.pop(user_id, None)
