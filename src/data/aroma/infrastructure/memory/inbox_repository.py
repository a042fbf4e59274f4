"""In-memory implementation of IInboxRepository."""

from __future__ import annotations

from aroma.domain.entities import Message, User
from aroma.domain.value_objects import LengthOfTime
from aroma.infrastructure.memory.base import Expiring, InMemoryRepository
from aroma.ports.assertions import (
    check_app_id,
    check_message,
    check_message_id,
    check_user,
    check_user_id,
)
from aroma.ports.repositories import IInboxRepository


class InMemoryInboxRepository(InMemoryRepository, IInboxRepository):
    """One expiring message map per User."""

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._inboxes: dict[str, dict[str, Expiring[Message]]] = {}

    def save_message_for_user(
        self, user: User, message: Message, lifetime: LengthOfTime | None = None
    ) -> None:
        check_user(user)
        check_message(message)
        expires_at = self._expires_at(lifetime, self._defaults.inbox_lifetime)
        with self._lock:
            inbox = self._inboxes.setdefault(user.user_id, {})
            inbox[message.message_id] = Expiring(self._copy(message), expires_at)

    def get_messages_for_user(
        self, user_id: str, application_id: str | None = None
    ) -> list[Message]:
        check_user_id(user_id)
        if application_id is not None:
            check_app_id(application_id)
        with self._lock:
            messages = self._live(self._inboxes.get(user_id, {}))
            return [
                self._copy(messages[message_id])
                for message_id in sorted(messages)
                if application_id is None
                or messages[message_id].application_id == application_id
            ]

    def contains_message_in_inbox(self, user_id: str, message: Message) -> bool:
        check_user_id(user_id)
        check_message(message)
        with self._lock:
            return message.message_id in self._live(self._inboxes.get(user_id, {}))

    def delete_message_for_user(self, user_id: str, message_id: str) -> None:
        check_user_id(user_id)
        check_message_id(message_id)
        with self._lock:
            self._inboxes.get(user_id, {}).pop(message_id, None)

    def delete_all_messages_for_user(self, user_id: str) -> None:
        check_user_id(user_id)
        with self._lock:
            self._inboxes.pop(user_id, None)

    def count_inbox_for_user(self, user_id: str) -> int:
        check_user_id(user_id)
        with self._lock:
            return len(self._live(self._inboxes.get(user_id, {})))
