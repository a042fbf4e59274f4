"""In-memory implementation of IFollowerRepository."""

from __future__ import annotations

from aroma.domain.entities import Application, User
from aroma.infrastructure.memory.base import InMemoryRepository
from aroma.ports.assertions import check_app_id, check_application, check_user, check_user_id
from aroma.ports.repositories import IFollowerRepository


class InMemoryFollowerRepository(InMemoryRepository, IFollowerRepository):
    """Both sides of the following relation, updated under one lock."""

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._followed_by_user: dict[str, dict[str, Application]] = {}
        self._followers_of_app: dict[str, dict[str, User]] = {}

    def save_following(self, user: User, application: Application) -> None:
        check_user(user)
        check_application(application)
        with self._lock:
            self._followed_by_user.setdefault(user.user_id, {})[
                application.application_id
            ] = self._copy(application)
            self._followers_of_app.setdefault(application.application_id, {})[
                user.user_id
            ] = self._copy(user)

    def delete_following(self, user_id: str, application_id: str) -> None:
        check_user_id(user_id)
        check_app_id(application_id)
        with self._lock:
            self._followed_by_user.get(user_id, {}).pop(application_id, None)
            self._followers_of_app.get(application_id, {}).pop(user_id, None)

    def following_exists(self, user_id: str, application_id: str) -> bool:
        check_user_id(user_id)
        check_app_id(application_id)
        with self._lock:
            return application_id in self._followed_by_user.get(user_id, {})

    def get_applications_followed_by(self, user_id: str) -> list[Application]:
        check_user_id(user_id)
        with self._lock:
            followed = self._followed_by_user.get(user_id, {})
            return [self._copy(followed[app_id]) for app_id in sorted(followed)]

    def get_application_followers(self, application_id: str) -> list[User]:
        check_app_id(application_id)
        with self._lock:
            followers = self._followers_of_app.get(application_id, {})
            return [self._copy(followers[user_id]) for user_id in sorted(followers)]
