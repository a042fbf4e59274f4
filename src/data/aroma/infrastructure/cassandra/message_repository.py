"""Cassandra implementation of IMessageRepository.

Messages are keyed by their own id in the primary table and listed through
per-application and per-hostname projections clustered newest first. All
rows are written with a TTL, so listings may shrink between calls.
"""

from __future__ import annotations

from aroma.domain.entities import Message
from aroma.domain.value_objects import LengthOfTime
from aroma.infrastructure.cassandra import statements
from aroma.infrastructure.cassandra.base import CassandraRepository
from aroma.infrastructure.cassandra.mappers import map_message
from aroma.ports.assertions import (
    check_app_id,
    check_message,
    check_message_id,
    check_not_empty,
)
from aroma.ports.exceptions import InvalidArgumentError, MessageDoesNotExistError
from aroma.ports.repositories import IMessageRepository


class CassandraMessageRepository(CassandraRepository, IMessageRepository):
    """Cassandra-backed repository for Messages."""

    entity = "message"

    def save_message(self, message: Message, lifetime: LengthOfTime | None = None) -> None:
        """Upsert a Message with a TTL.

        The stored version is read first so projection rows under its old
        sort time or hostname are removed along with the write.
        """
        with self._validating("save_message"):
            check_message(message)
            ttl = self._ttl_seconds(lifetime, self._defaults.message_lifetime)

        row = self._one(
            statements.select_message(message.message_id),
            "save_message",
            message_id=message.message_id,
        )
        previous = map_message(row) if row else None

        self._execute(
            statements.insert_message(message, ttl, previous),
            "save_message",
            message_id=message.message_id,
            application_id=message.application_id,
        )
        self._probe.entity_saved(
            message.message_id,
            application_id=message.application_id,
            ttl=ttl,
            updated=previous is not None,
        )

    def get_message(self, application_id: str, message_id: str) -> Message:
        with self._validating("get_message"):
            check_app_id(application_id)
            check_message_id(message_id)

        row = self._one(
            statements.select_message(message_id),
            "get_message",
            message_id=message_id,
        )
        message = map_message(row) if row else None
        if message is None or message.application_id != application_id:
            self._probe.entity_not_found(message_id)
            raise MessageDoesNotExistError(
                f"Message {message_id} does not exist for Application {application_id}"
            )

        self._probe.entity_retrieved(message_id)
        return message

    def delete_message(self, application_id: str, message_id: str) -> None:
        message = self.get_message(application_id, message_id)
        self._execute(
            statements.delete_message(message),
            "delete_message",
            message_id=message_id,
            application_id=application_id,
        )
        self._probe.entity_deleted(message_id, application_id=application_id)

    def contains_message(self, application_id: str, message_id: str) -> bool:
        with self._validating("contains_message"):
            check_app_id(application_id)
            check_message_id(message_id)

        count = self._count(
            statements.count_message(application_id, message_id),
            "contains_message",
            message_id=message_id,
        )
        return count > 0

    def get_by_hostname(self, hostname: str) -> list[Message]:
        with self._validating("get_by_hostname"):
            check_not_empty(hostname, "hostname")

        rows = self._execute(
            statements.select_messages_by_hostname(hostname),
            "get_by_hostname",
            hostname=hostname,
        )
        messages = [map_message(row) for row in rows]
        self._probe.entities_listed("by_hostname", hostname, len(messages))
        return messages

    def get_by_application(
        self, application_id: str, limit: int | None = None
    ) -> list[Message]:
        with self._validating("get_by_application"):
            check_app_id(application_id)
            if limit is not None and limit <= 0:
                raise InvalidArgumentError(f"limit must be positive: {limit}")

        rows = self._execute(
            statements.select_messages_by_app(application_id, limit),
            "get_by_application",
            application_id=application_id,
        )
        messages = [map_message(row) for row in rows]
        self._probe.entities_listed("by_application", application_id, len(messages))
        return messages

    def get_by_title(self, application_id: str, title: str) -> list[Message]:
        with self._validating("get_by_title"):
            check_app_id(application_id)
            check_not_empty(title, "title")

        rows = self._execute(
            statements.select_messages_by_title(application_id, title),
            "get_by_title",
            application_id=application_id,
        )
        messages = [map_message(row) for row in rows]
        self._probe.entities_listed("by_title", application_id, len(messages))
        return messages

    def get_count_by_application(self, application_id: str) -> int:
        with self._validating("get_count_by_application"):
            check_app_id(application_id)

        return self._count(
            statements.count_messages_by_app(application_id),
            "get_count_by_application",
            application_id=application_id,
        )

    def delete_all_messages(self, application_id: str) -> None:
        """Delete every Message of an Application.

        Each Message's rows are removed in its own batch and the
        per-application partition is dropped last. A failure part way
        through leaves the remaining Messages in place; repeating the call
        completes the deletion.
        """
        with self._validating("delete_all_messages"):
            check_app_id(application_id)

        rows = self._execute(
            statements.select_messages_by_app(application_id),
            "delete_all_messages",
            application_id=application_id,
        )
        for message in map(map_message, rows):
            self._execute(
                statements.delete_message(message),
                "delete_all_messages",
                application_id=application_id,
                message_id=message.message_id,
            )
        self._execute(
            statements.delete_messages_by_app(application_id),
            "delete_all_messages",
            application_id=application_id,
        )
        self._probe.entity_deleted(application_id, messages=len(rows))
