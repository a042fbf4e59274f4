"""Cassandra implementation of IFollowerRepository.

The relation is stored twice: under the Application (its followers) and
under the User (the Applications they follow). Both rows are written and
removed together in one batch.
"""

from __future__ import annotations

from aroma.domain.entities import Application, User
from aroma.infrastructure.cassandra import statements
from aroma.infrastructure.cassandra.base import CassandraRepository
from aroma.infrastructure.cassandra.mappers import map_application, map_user
from aroma.ports.assertions import check_app_id, check_application, check_user, check_user_id
from aroma.ports.repositories import IFollowerRepository


class CassandraFollowerRepository(CassandraRepository, IFollowerRepository):
    """Cassandra-backed repository for the following relation."""

    entity = "following"

    def save_following(self, user: User, application: Application) -> None:
        with self._validating("save_following"):
            check_user(user)
            check_application(application)

        self._execute(
            statements.insert_following(user, application),
            "save_following",
            user_id=user.user_id,
            application_id=application.application_id,
        )
        self._probe.entity_saved(
            application.application_id, follower_id=user.user_id
        )

    def delete_following(self, user_id: str, application_id: str) -> None:
        with self._validating("delete_following"):
            check_user_id(user_id)
            check_app_id(application_id)

        self._execute(
            statements.delete_following(user_id, application_id),
            "delete_following",
            user_id=user_id,
            application_id=application_id,
        )
        self._probe.entity_deleted(application_id, follower_id=user_id)

    def following_exists(self, user_id: str, application_id: str) -> bool:
        with self._validating("following_exists"):
            check_user_id(user_id)
            check_app_id(application_id)

        count = self._count(
            statements.count_following(user_id, application_id),
            "following_exists",
            user_id=user_id,
            application_id=application_id,
        )
        return count > 0

    def get_applications_followed_by(self, user_id: str) -> list[Application]:
        with self._validating("get_applications_followed_by"):
            check_user_id(user_id)

        rows = self._execute(
            statements.select_applications_followed_by(user_id),
            "get_applications_followed_by",
            user_id=user_id,
        )
        applications = [map_application(row) for row in rows]
        self._probe.entities_listed("followed_by", user_id, len(applications))
        return applications

    def get_application_followers(self, application_id: str) -> list[User]:
        with self._validating("get_application_followers"):
            check_app_id(application_id)

        rows = self._execute(
            statements.select_application_followers(application_id),
            "get_application_followers",
            application_id=application_id,
        )
        followers = [map_user(row) for row in rows]
        self._probe.entities_listed("followers", application_id, len(followers))
        return followers
