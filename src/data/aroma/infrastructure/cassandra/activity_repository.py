"""Cassandra implementation of IActivityRepository."""

from __future__ import annotations

from aroma.domain.entities import Event, User
from aroma.domain.value_objects import LengthOfTime
from aroma.infrastructure.cassandra import statements
from aroma.infrastructure.cassandra.base import CassandraRepository
from aroma.infrastructure.cassandra.mappers import map_event
from aroma.ports.assertions import check_event, check_event_id, check_user, check_user_id
from aroma.ports.exceptions import EventDoesNotExistError, InvalidArgumentError
from aroma.ports.repositories import IActivityRepository


class CassandraActivityRepository(CassandraRepository, IActivityRepository):
    """Per-User activity partitions; every Event row carries a TTL."""

    entity = "event"

    def save_event(
        self, event: Event, for_user: User, lifetime: LengthOfTime | None = None
    ) -> None:
        self.save_events(event, [for_user], lifetime)

    def save_events(
        self, event: Event, users: list[User], lifetime: LengthOfTime | None = None
    ) -> None:
        with self._validating("save_events"):
            check_event(event)
            if not users:
                raise InvalidArgumentError("users must not be empty")
            for user in users:
                check_user(user)
            ttl = self._ttl_seconds(lifetime, self._defaults.activity_lifetime)

        for user in users:
            self._execute(
                statements.insert_event(user.user_id, event, ttl),
                "save_event",
                event_id=event.event_id,
                user_id=user.user_id,
            )
        self._probe.entity_saved(event.event_id, recipients=len(users), ttl=ttl)

    def contains_event(self, event_id: str, user_id: str) -> bool:
        with self._validating("contains_event"):
            check_event_id(event_id)
            check_user_id(user_id)

        count = self._count(
            statements.count_event(event_id, user_id),
            "contains_event",
            event_id=event_id,
            user_id=user_id,
        )
        return count > 0

    def get_event(self, event_id: str, user_id: str) -> Event:
        with self._validating("get_event"):
            check_event_id(event_id)
            check_user_id(user_id)

        row = self._one(
            statements.select_event(event_id, user_id),
            "get_event",
            event_id=event_id,
            user_id=user_id,
        )
        if row is None:
            self._probe.entity_not_found(event_id)
            raise EventDoesNotExistError(
                f"Event {event_id} does not exist for User {user_id}"
            )

        self._probe.entity_retrieved(event_id)
        return map_event(row)

    def get_all_events_for(self, user_id: str) -> list[Event]:
        with self._validating("get_all_events_for"):
            check_user_id(user_id)

        rows = self._execute(
            statements.select_events(user_id), "get_all_events_for", user_id=user_id
        )
        events = [map_event(row) for row in rows]
        self._probe.entities_listed("for_user", user_id, len(events))
        return events

    def delete_event(self, event_id: str, user_id: str) -> None:
        if not self.contains_event(event_id, user_id):
            self._probe.entity_not_found(event_id)
            raise EventDoesNotExistError(
                f"Event {event_id} does not exist for User {user_id}"
            )

        self._execute(
            statements.delete_event(event_id, user_id),
            "delete_event",
            event_id=event_id,
            user_id=user_id,
        )
        self._probe.entity_deleted(event_id, user_id=user_id)

    def delete_all_events_for(self, user_id: str) -> None:
        with self._validating("delete_all_events_for"):
            check_user_id(user_id)

        self._execute(
            statements.delete_events(user_id), "delete_all_events_for", user_id=user_id
        )
        self._probe.entity_deleted(user_id, events="all")
