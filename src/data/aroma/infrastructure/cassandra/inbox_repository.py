"""Cassandra implementation of IInboxRepository."""

from __future__ import annotations

from aroma.domain.entities import Message, User
from aroma.domain.value_objects import LengthOfTime
from aroma.infrastructure.cassandra import statements
from aroma.infrastructure.cassandra.base import CassandraRepository
from aroma.infrastructure.cassandra.mappers import map_message
from aroma.ports.assertions import (
    check_app_id,
    check_message,
    check_message_id,
    check_user,
    check_user_id,
)
from aroma.ports.repositories import IInboxRepository


class CassandraInboxRepository(CassandraRepository, IInboxRepository):
    """Cassandra-backed inbox: one partition per User, one row per Message.

    Rows expire with their TTL. Deletes are idempotent.
    """

    entity = "inbox_message"

    def save_message_for_user(
        self, user: User, message: Message, lifetime: LengthOfTime | None = None
    ) -> None:
        with self._validating("save_message_for_user"):
            check_user(user)
            check_message(message)
            ttl = self._ttl_seconds(lifetime, self._defaults.inbox_lifetime)

        self._execute(
            statements.insert_inbox_message(user.user_id, message, ttl),
            "save_message_for_user",
            user_id=user.user_id,
            message_id=message.message_id,
        )
        self._probe.entity_saved(message.message_id, user_id=user.user_id, ttl=ttl)

    def get_messages_for_user(
        self, user_id: str, application_id: str | None = None
    ) -> list[Message]:
        with self._validating("get_messages_for_user"):
            check_user_id(user_id)
            if application_id is not None:
                check_app_id(application_id)

        rows = self._execute(
            statements.select_inbox(user_id, application_id),
            "get_messages_for_user",
            user_id=user_id,
        )
        messages = [map_message(row) for row in rows]
        self._probe.entities_listed("inbox", user_id, len(messages))
        return messages

    def contains_message_in_inbox(self, user_id: str, message: Message) -> bool:
        with self._validating("contains_message_in_inbox"):
            check_user_id(user_id)
            check_message(message)

        count = self._count(
            statements.count_inbox_message(user_id, message.message_id),
            "contains_message_in_inbox",
            user_id=user_id,
        )
        return count > 0

    def delete_message_for_user(self, user_id: str, message_id: str) -> None:
        with self._validating("delete_message_for_user"):
            check_user_id(user_id)
            check_message_id(message_id)

        self._execute(
            statements.delete_inbox_message(user_id, message_id),
            "delete_message_for_user",
            user_id=user_id,
            message_id=message_id,
        )
        self._probe.entity_deleted(message_id, user_id=user_id)

    def delete_all_messages_for_user(self, user_id: str) -> None:
        with self._validating("delete_all_messages_for_user"):
            check_user_id(user_id)

        self._execute(
            statements.delete_inbox(user_id),
            "delete_all_messages_for_user",
            user_id=user_id,
        )
        self._probe.entity_deleted(user_id, messages="all")

    def count_inbox_for_user(self, user_id: str) -> int:
        with self._validating("count_inbox_for_user"):
            check_user_id(user_id)

        return self._count(
            statements.count_inbox(user_id), "count_inbox_for_user", user_id=user_id
        )
