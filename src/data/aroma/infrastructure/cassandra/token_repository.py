"""Cassandra implementation of ITokenRepository.

Tokens are stored by id and by owner. Both rows carry a TTL equal to the
time remaining until the token expires, so the store drops them on their
own once they lapse.
"""

from __future__ import annotations

import math

from aroma.domain.entities import AuthenticationToken
from aroma.infrastructure.cassandra import statements
from aroma.infrastructure.cassandra.base import CassandraRepository
from aroma.infrastructure.cassandra.mappers import map_token
from aroma.ports.assertions import check_token, check_token_id, check_uuid
from aroma.ports.exceptions import InvalidArgumentError, InvalidCredentialsError
from aroma.ports.repositories import ITokenRepository


class CassandraTokenRepository(CassandraRepository, ITokenRepository):
    """Cassandra-backed repository for AuthenticationTokens."""

    entity = "token"

    def _token_ttl(self, token: AuthenticationToken) -> int:
        if token.time_of_expiration is None:
            return self._ttl_seconds(None, self._defaults.token_lifetime)

        remaining = token.time_of_expiration - self._clock.now_millis()
        ttl = math.ceil(remaining / 1000)
        if ttl <= 0:
            raise InvalidArgumentError(
                f"token has already expired: {token.time_of_expiration}"
            )
        return ttl

    def save_token(self, token: AuthenticationToken) -> None:
        with self._validating("save_token"):
            check_token(token)
            ttl = self._token_ttl(token)

        row = self._one(
            statements.select_token(token.token_id), "save_token", token_id=token.token_id
        )
        previous = map_token(row) if row else None

        self._execute(
            statements.insert_token(token, ttl, previous),
            "save_token",
            token_id=token.token_id,
            owner_id=token.owner_id,
        )
        self._probe.entity_saved(token.token_id, owner_id=token.owner_id, ttl=ttl)

    def get_token(self, token_id: str) -> AuthenticationToken:
        with self._validating("get_token"):
            check_token_id(token_id)

        row = self._one(statements.select_token(token_id), "get_token", token_id=token_id)
        if row is None:
            self._probe.entity_not_found(token_id)
            raise InvalidCredentialsError(f"Token does not exist: {token_id}")

        self._probe.entity_retrieved(token_id)
        return map_token(row)

    def contains_token(self, token_id: str) -> bool:
        with self._validating("contains_token"):
            check_token_id(token_id)

        count = self._count(
            statements.count_token(token_id), "contains_token", token_id=token_id
        )
        return count > 0

    def does_token_belong_to(self, token_id: str, owner_id: str) -> bool:
        with self._validating("does_token_belong_to"):
            check_token_id(token_id)
            check_uuid(owner_id, "owner_id")

        return self.get_token(token_id).owner_id == owner_id

    def get_tokens_belonging_to(self, owner_id: str) -> list[AuthenticationToken]:
        with self._validating("get_tokens_belonging_to"):
            check_uuid(owner_id, "owner_id")

        rows = self._execute(
            statements.select_tokens_by_owner(owner_id),
            "get_tokens_belonging_to",
            owner_id=owner_id,
        )
        tokens = [map_token(row) for row in rows]
        self._probe.entities_listed("by_owner", owner_id, len(tokens))
        return tokens

    def delete_token(self, token_id: str) -> None:
        token = self.get_token(token_id)
        self._execute(
            statements.delete_token(token_id, token.owner_id),
            "delete_token",
            token_id=token_id,
        )
        self._probe.entity_deleted(token_id, owner_id=token.owner_id)

    def _stored_owner(self, token_id: str) -> str | None:
        row = self._one(statements.select_token(token_id), "delete_tokens", token_id=token_id)
        return map_token(row).owner_id if row else None

    def delete_tokens(self, owner_id: str) -> None:
        """Delete every token of an owner.

        The owner's projection partition is removed with one range delete,
        then the primary rows it listed are removed in a batch. A primary
        row whose stored owner is no longer ``owner_id`` is kept.
        """
        tokens = [
            token
            for token in self.get_tokens_belonging_to(owner_id)
            if self._stored_owner(token.token_id) == owner_id
        ]
        self._execute(
            statements.delete_tokens_by_owner(owner_id),
            "delete_tokens",
            owner_id=owner_id,
        )
        if tokens:
            self._execute(
                statements.delete_token_primaries(token.token_id for token in tokens),
                "delete_tokens",
                owner_id=owner_id,
            )
        self._probe.entity_deleted(owner_id, tokens=len(tokens))
