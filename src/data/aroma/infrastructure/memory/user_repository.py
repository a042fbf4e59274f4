"""In-memory implementation of IUserRepository."""

from __future__ import annotations

from aroma.domain.entities import User
from aroma.infrastructure.memory.base import InMemoryRepository
from aroma.ports.assertions import check_not_empty, check_user, check_user_id
from aroma.ports.exceptions import UserDoesNotExistError
from aroma.ports.repositories import IUserRepository


class InMemoryUserRepository(InMemoryRepository, IUserRepository):
    """Users keyed by id, with email and GitHub indexes.

    The indexes behave like the store projections: the last User saved
    with a given email or profile owns that key.
    """

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._users: dict[str, User] = {}
        self._by_email: dict[str, str] = {}
        self._by_github_profile: dict[str, str] = {}

    def save_user(self, user: User) -> None:
        check_user(user)
        with self._lock:
            previous = self._users.get(user.user_id)
            if previous is not None:
                self._unindex(previous)
            self._users[user.user_id] = self._copy(user)
            if user.email:
                self._by_email[user.email] = user.user_id
            if user.github_profile:
                self._by_github_profile[user.github_profile] = user.user_id

    def get_user(self, user_id: str) -> User:
        check_user_id(user_id)
        with self._lock:
            user = self._users.get(user_id)
            if user is None:
                raise UserDoesNotExistError(f"User does not exist: {user_id}")
            return self._copy(user)

    def delete_user(self, user_id: str) -> None:
        check_user_id(user_id)
        with self._lock:
            user = self._users.pop(user_id, None)
            if user is None:
                raise UserDoesNotExistError(f"User does not exist: {user_id}")
            self._unindex(user)

    def contains_user(self, user_id: str) -> bool:
        check_user_id(user_id)
        with self._lock:
            return user_id in self._users

    def get_user_by_email(self, email: str) -> User:
        check_not_empty(email, "email")
        with self._lock:
            user_id = self._by_email.get(email)
            if user_id is None:
                raise UserDoesNotExistError(f"No User with email: {email}")
            return self._copy(self._users[user_id])

    def find_by_github_profile(self, github_profile: str) -> User:
        check_not_empty(github_profile, "github_profile")
        with self._lock:
            user_id = self._by_github_profile.get(github_profile)
            if user_id is None:
                raise UserDoesNotExistError(
                    f"No User with GitHub profile: {github_profile}"
                )
            return self._copy(self._users[user_id])

    def get_recently_created_users(self) -> list[User]:
        with self._lock:
            joined = [user for user in self._users.values() if user.time_user_joined is not None]
        joined.sort(key=lambda user: user.user_id)
        joined.sort(key=lambda user: user.time_user_joined, reverse=True)
        return [self._copy(user) for user in joined[: self._defaults.recently_created_limit]]

    def _unindex(self, user: User) -> None:
        if user.email and self._by_email.get(user.email) == user.user_id:
            del self._by_email[user.email]
        if user.github_profile and self._by_github_profile.get(user.github_profile) == user.user_id:
            del self._by_github_profile[user.github_profile]
