"""In-memory implementation of ITokenRepository."""

from __future__ import annotations

import math

from aroma.domain.entities import AuthenticationToken
from aroma.infrastructure.memory.base import Expiring, InMemoryRepository
from aroma.ports.assertions import check_token, check_token_id, check_uuid
from aroma.ports.exceptions import InvalidArgumentError, InvalidCredentialsError
from aroma.ports.repositories import ITokenRepository


class InMemoryTokenRepository(InMemoryRepository, ITokenRepository):
    """Tokens keyed by id; each one disappears once it expires."""

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._tokens: dict[str, Expiring[AuthenticationToken]] = {}

    def _token_expiry(self, token: AuthenticationToken) -> int:
        if token.time_of_expiration is None:
            return self._expires_at(None, self._defaults.token_lifetime)

        now = self._clock.now_millis()
        ttl = math.ceil((token.time_of_expiration - now) / 1000)
        if ttl <= 0:
            raise InvalidArgumentError(
                f"token has already expired: {token.time_of_expiration}"
            )
        return now + ttl * 1000

    def save_token(self, token: AuthenticationToken) -> None:
        check_token(token)
        expires_at = self._token_expiry(token)
        with self._lock:
            self._tokens[token.token_id] = Expiring(self._copy(token), expires_at)

    def get_token(self, token_id: str) -> AuthenticationToken:
        check_token_id(token_id)
        with self._lock:
            token = self._live(self._tokens).get(token_id)
            if token is None:
                raise InvalidCredentialsError(f"Token does not exist: {token_id}")
            return self._copy(token)

    def contains_token(self, token_id: str) -> bool:
        check_token_id(token_id)
        with self._lock:
            return token_id in self._live(self._tokens)

    def does_token_belong_to(self, token_id: str, owner_id: str) -> bool:
        check_token_id(token_id)
        check_uuid(owner_id, "owner_id")
        return self.get_token(token_id).owner_id == owner_id

    def get_tokens_belonging_to(self, owner_id: str) -> list[AuthenticationToken]:
        check_uuid(owner_id, "owner_id")
        with self._lock:
            tokens = self._live(self._tokens)
            return [
                self._copy(tokens[token_id])
                for token_id in sorted(tokens)
                if tokens[token_id].owner_id == owner_id
            ]

    def delete_token(self, token_id: str) -> None:
        with self._lock:
            self.get_token(token_id)
            del self._tokens[token_id]

    def delete_tokens(self, owner_id: str) -> None:
        with self._lock:
            for token in self.get_tokens_belonging_to(owner_id):
                del self._tokens[token.token_id]
