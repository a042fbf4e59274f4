"""Cassandra implementation of IUserRepository."""

from __future__ import annotations

from dataclasses import replace

from aroma.domain.entities import User
from aroma.infrastructure.cassandra import statements
from aroma.infrastructure.cassandra.base import CassandraRepository
from aroma.infrastructure.cassandra.mappers import map_user
from aroma.ports.assertions import check_not_empty, check_user, check_user_id
from aroma.ports.exceptions import UserDoesNotExistError
from aroma.ports.repositories import IUserRepository


class CassandraUserRepository(CassandraRepository, IUserRepository):
    """Cassandra-backed repository for Users.

    Users are written to the primary table plus lookup projections by email
    and GitHub profile and a recently-joined listing. A User lacking one of
    those fields is simply absent from that projection.
    """

    entity = "user"

    def _claims(self, lookup: statements.CqlStatement, user_id: str, operation: str) -> bool:
        row = self._one(lookup, operation, user_id=user_id)
        return row is not None and map_user(row).user_id == user_id

    def _with_owned_lookups(self, user: User, operation: str) -> User:
        """Copy of ``user`` without lookup keys now claimed by another User.

        A lookup row is only ever deleted by the User it points at.
        """
        owned = replace(user)
        if user.email and not self._claims(
            statements.select_user_by_email(user.email), user.user_id, operation
        ):
            owned.email = None
        if user.github_profile and not self._claims(
            statements.select_user_by_github_profile(user.github_profile),
            user.user_id,
            operation,
        ):
            owned.github_profile = None
        return owned

    def save_user(self, user: User) -> None:
        with self._validating("save_user"):
            check_user(user)

        row = self._one(statements.select_user(user.user_id), "save_user", user_id=user.user_id)
        previous = map_user(row) if row else None
        if previous is not None and (
            previous.email != user.email or previous.github_profile != user.github_profile
        ):
            previous = self._with_owned_lookups(previous, "save_user")

        self._execute(statements.insert_user(user, previous), "save_user", user_id=user.user_id)
        self._probe.entity_saved(user.user_id, updated=previous is not None)

    def get_user(self, user_id: str) -> User:
        with self._validating("get_user"):
            check_user_id(user_id)

        row = self._one(statements.select_user(user_id), "get_user", user_id=user_id)
        if row is None:
            self._probe.entity_not_found(user_id)
            raise UserDoesNotExistError(f"User does not exist: {user_id}")

        self._probe.entity_retrieved(user_id)
        return map_user(row)

    def delete_user(self, user_id: str) -> None:
        with self._validating("delete_user"):
            check_user_id(user_id)

        user = self._with_owned_lookups(self.get_user(user_id), "delete_user")
        self._execute(statements.delete_user(user), "delete_user", user_id=user_id)
        self._probe.entity_deleted(user_id)

    def contains_user(self, user_id: str) -> bool:
        with self._validating("contains_user"):
            check_user_id(user_id)

        return self._count(statements.count_user(user_id), "contains_user", user_id=user_id) > 0

    def get_user_by_email(self, email: str) -> User:
        with self._validating("get_user_by_email"):
            check_not_empty(email, "email")

        row = self._one(statements.select_user_by_email(email), "get_user_by_email")
        if row is None:
            self._probe.entity_not_found(email)
            raise UserDoesNotExistError(f"No User with email: {email}")

        user = map_user(row)
        self._probe.entity_retrieved(user.user_id)
        return user

    def find_by_github_profile(self, github_profile: str) -> User:
        with self._validating("find_by_github_profile"):
            check_not_empty(github_profile, "github_profile")

        row = self._one(
            statements.select_user_by_github_profile(github_profile),
            "find_by_github_profile",
        )
        if row is None:
            self._probe.entity_not_found(github_profile)
            raise UserDoesNotExistError(f"No User with GitHub profile: {github_profile}")

        user = map_user(row)
        self._probe.entity_retrieved(user.user_id)
        return user

    def get_recently_created_users(self) -> list[User]:
        rows = self._execute(
            statements.select_recent_users(self._defaults.recently_created_limit),
            "get_recently_created_users",
        )
        users = [map_user(row) for row in rows]
        self._probe.entities_listed("recently_created", "all", len(users))
        return users
