"""In-memory implementation of IMessageRepository."""

from __future__ import annotations

from aroma.domain.entities import Message
from aroma.domain.value_objects import LengthOfTime
from aroma.infrastructure.memory.base import Expiring, InMemoryRepository
from aroma.ports.assertions import (
    check_app_id,
    check_message,
    check_message_id,
    check_not_empty,
)
from aroma.ports.exceptions import InvalidArgumentError, MessageDoesNotExistError
from aroma.ports.repositories import IMessageRepository


def _newest_first(messages: list[Message]) -> list[Message]:
    messages.sort(key=lambda message: message.message_id)
    messages.sort(key=lambda message: message.sort_time, reverse=True)
    return messages


class InMemoryMessageRepository(InMemoryRepository, IMessageRepository):
    """Messages keyed by id, each stamped with its expiry."""

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._messages: dict[str, Expiring[Message]] = {}

    def save_message(self, message: Message, lifetime: LengthOfTime | None = None) -> None:
        check_message(message)
        expires_at = self._expires_at(lifetime, self._defaults.message_lifetime)
        with self._lock:
            self._messages[message.message_id] = Expiring(self._copy(message), expires_at)

    def get_message(self, application_id: str, message_id: str) -> Message:
        check_app_id(application_id)
        check_message_id(message_id)
        with self._lock:
            message = self._live(self._messages).get(message_id)
            if message is None or message.application_id != application_id:
                raise MessageDoesNotExistError(
                    f"Message {message_id} does not exist for Application {application_id}"
                )
            return self._copy(message)

    def delete_message(self, application_id: str, message_id: str) -> None:
        with self._lock:
            self.get_message(application_id, message_id)
            del self._messages[message_id]

    def contains_message(self, application_id: str, message_id: str) -> bool:
        check_app_id(application_id)
        check_message_id(message_id)
        with self._lock:
            message = self._live(self._messages).get(message_id)
            return message is not None and message.application_id == application_id

    def get_by_hostname(self, hostname: str) -> list[Message]:
        check_not_empty(hostname, "hostname")
        return self._select(lambda message: message.hostname == hostname)

    def get_by_application(
        self, application_id: str, limit: int | None = None
    ) -> list[Message]:
        check_app_id(application_id)
        if limit is not None and limit <= 0:
            raise InvalidArgumentError(f"limit must be positive: {limit}")
        messages = self._select(lambda message: message.application_id == application_id)
        return messages if limit is None else messages[:limit]

    def get_by_title(self, application_id: str, title: str) -> list[Message]:
        check_app_id(application_id)
        check_not_empty(title, "title")
        return self._select(
            lambda message: message.application_id == application_id
            and message.title == title
        )

    def get_count_by_application(self, application_id: str) -> int:
        check_app_id(application_id)
        return len(self._select(lambda message: message.application_id == application_id))

    def delete_all_messages(self, application_id: str) -> None:
        check_app_id(application_id)
        with self._lock:
            for message_id in [
                message_id
                for message_id, entry in self._messages.items()
                if entry.value.application_id == application_id
            ]:
                del self._messages[message_id]

    def _select(self, predicate) -> list[Message]:
        with self._lock:
            matches = [
                self._copy(message)
                for message in self._live(self._messages).values()
                if predicate(message)
            ]
        return _newest_first(matches)
