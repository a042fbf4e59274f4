"""In-memory implementation of IReactionRepository."""

from __future__ import annotations

from aroma.domain.entities import Reaction
from aroma.infrastructure.memory.base import InMemoryRepository
from aroma.ports.assertions import check_app_id, check_user_id
from aroma.ports.repositories import IReactionRepository


class InMemoryReactionRepository(InMemoryRepository, IReactionRepository):
    """Reaction lists keyed by owner id, shared by Users and Applications."""

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._reactions: dict[str, list[Reaction]] = {}

    def save_reactions_for_user(self, user_id: str, reactions: list[Reaction] | None) -> None:
        check_user_id(user_id)
        self._save(user_id, reactions)

    def get_reactions_for_user(self, user_id: str) -> list[Reaction]:
        check_user_id(user_id)
        return self._get(user_id)

    def save_reactions_for_application(
        self, application_id: str, reactions: list[Reaction] | None
    ) -> None:
        check_app_id(application_id)
        self._save(application_id, reactions)

    def get_reactions_for_application(self, application_id: str) -> list[Reaction]:
        check_app_id(application_id)
        return self._get(application_id)

    def _save(self, owner_id: str, reactions: list[Reaction] | None) -> None:
        with self._lock:
            if reactions:
                self._reactions[owner_id] = self._copy(list(reactions))
            else:
                self._reactions.pop(owner_id, None)

    def _get(self, owner_id: str) -> list[Reaction]:
        with self._lock:
            return self._copy(self._reactions.get(owner_id, []))
