"""Cassandra implementation of IReactionRepository.

Users and Applications share one table: each owner's Reactions are a
single row holding a list of JSON documents.
"""

from __future__ import annotations

from aroma.domain.entities import Reaction
from aroma.infrastructure.cassandra import statements
from aroma.infrastructure.cassandra.base import CassandraRepository
from aroma.infrastructure.cassandra.mappers import map_reactions
from aroma.infrastructure.serialization import ReactionSerializer
from aroma.ports.assertions import check_app_id, check_user_id
from aroma.ports.repositories import IReactionRepository

_serializer = ReactionSerializer()


class CassandraReactionRepository(CassandraRepository, IReactionRepository):
    """Cassandra-backed repository for Reactions."""

    entity = "reactions"

    def save_reactions_for_user(self, user_id: str, reactions: list[Reaction] | None) -> None:
        with self._validating("save_reactions_for_user"):
            check_user_id(user_id)
        self._save(user_id, reactions, "save_reactions_for_user")

    def get_reactions_for_user(self, user_id: str) -> list[Reaction]:
        with self._validating("get_reactions_for_user"):
            check_user_id(user_id)
        return self._get(user_id, "get_reactions_for_user")

    def save_reactions_for_application(
        self, application_id: str, reactions: list[Reaction] | None
    ) -> None:
        with self._validating("save_reactions_for_application"):
            check_app_id(application_id)
        self._save(application_id, reactions, "save_reactions_for_application")

    def get_reactions_for_application(self, application_id: str) -> list[Reaction]:
        with self._validating("get_reactions_for_application"):
            check_app_id(application_id)
        return self._get(application_id, "get_reactions_for_application")

    def _save(self, owner_id: str, reactions: list[Reaction] | None, operation: str) -> None:
        if not reactions:
            self._execute(statements.delete_reactions(owner_id), operation, owner_id=owner_id)
            self._probe.entity_deleted(owner_id)
            return

        serialized = _serializer.serialize_all(reactions)
        self._execute(
            statements.insert_reactions(owner_id, serialized), operation, owner_id=owner_id
        )
        self._probe.entity_saved(owner_id, count=len(serialized))

    def _get(self, owner_id: str, operation: str) -> list[Reaction]:
        row = self._one(statements.select_reactions(owner_id), operation, owner_id=owner_id)
        if row is None:
            self._probe.entities_listed(operation, owner_id, 0)
            return []

        reactions = map_reactions(row)
        self._probe.entities_listed(operation, owner_id, len(reactions))
        return reactions
