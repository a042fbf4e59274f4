"""Cassandra implementation of IApplicationRepository.

An Application lives in its primary table and in three projections: one
row per owner, one row under its organization, and one row in the
recently-created listing. Saves and deletes touch all of them in a single
logged batch.
"""

from __future__ import annotations

from aroma.domain.entities import Application
from aroma.infrastructure.cassandra import statements
from aroma.infrastructure.cassandra.base import CassandraRepository
from aroma.infrastructure.cassandra.mappers import map_application
from aroma.ports.assertions import (
    check_app_id,
    check_application,
    check_not_empty,
    check_org_id,
    check_user_id,
)
from aroma.ports.exceptions import ApplicationDoesNotExistError
from aroma.ports.repositories import IApplicationRepository


class CassandraApplicationRepository(CassandraRepository, IApplicationRepository):
    """Cassandra-backed repository for Applications."""

    entity = "application"

    def save_application(self, application: Application) -> None:
        """Upsert an Application and every projection it belongs to.

        The stored version is read first so that projection rows it no
        longer occupies (a removed owner, a moved organization) are removed
        in the same batch as the new rows are written.
        """
        with self._validating("save_application"):
            check_application(application)

        app_id = application.application_id
        row = self._one(
            statements.select_application(app_id), "save_application", application_id=app_id
        )
        previous = map_application(row) if row else None

        self._execute(
            statements.insert_application(application, previous),
            "save_application",
            application_id=app_id,
        )
        self._probe.entity_saved(
            app_id, owners=len(application.owners), updated=previous is not None
        )

    def delete_application(self, application_id: str) -> None:
        with self._validating("delete_application"):
            check_app_id(application_id)

        application = self.get_by_id(application_id)
        self._execute(
            statements.delete_application(application),
            "delete_application",
            application_id=application_id,
        )
        self._probe.entity_deleted(application_id)

    def get_by_id(self, application_id: str) -> Application:
        with self._validating("get_by_id"):
            check_app_id(application_id)

        row = self._one(
            statements.select_application(application_id),
            "get_by_id",
            application_id=application_id,
        )
        if row is None:
            self._probe.entity_not_found(application_id)
            raise ApplicationDoesNotExistError(
                f"Application does not exist: {application_id}"
            )

        self._probe.entity_retrieved(application_id)
        return map_application(row)

    def contains_application(self, application_id: str) -> bool:
        with self._validating("contains_application"):
            check_app_id(application_id)

        count = self._count(
            statements.count_application(application_id),
            "contains_application",
            application_id=application_id,
        )
        return count > 0

    def get_applications_owned_by(self, user_id: str) -> list[Application]:
        with self._validating("get_applications_owned_by"):
            check_user_id(user_id)

        rows = self._execute(
            statements.select_applications_by_owner(user_id),
            "get_applications_owned_by",
            user_id=user_id,
        )
        applications = [map_application(row) for row in rows]
        self._probe.entities_listed("owned_by", user_id, len(applications))
        return applications

    def get_applications_by_org(self, organization_id: str) -> list[Application]:
        with self._validating("get_applications_by_org"):
            check_org_id(organization_id)

        rows = self._execute(
            statements.select_applications_by_org(organization_id),
            "get_applications_by_org",
            organization_id=organization_id,
        )
        applications = [map_application(row) for row in rows]
        self._probe.entities_listed("by_org", organization_id, len(applications))
        return applications

    def search_by_name(self, search_term: str) -> list[Application]:
        """Case-insensitive substring match over the recently-created listing.

        The listing is read up to the configured search bound, so older
        Applications may be missed.
        """
        with self._validating("search_by_name"):
            check_not_empty(search_term, "search_term")

        rows = self._execute(
            statements.select_recent_applications(self._defaults.search_limit),
            "search_by_name",
            search_term=search_term,
        )
        term = search_term.lower()
        matches: dict[str, Application] = {}
        for row in rows:
            application = map_application(row)
            if term in (application.name or "").lower():
                matches.setdefault(application.application_id, application)

        results = list(matches.values())
        self._probe.entities_listed("search_by_name", search_term, len(results))
        return results

    def get_recently_created(self) -> list[Application]:
        """Newest first, bounded by the configured recently-created limit."""
        rows = self._execute(
            statements.select_recent_applications(self._defaults.recently_created_limit),
            "get_recently_created",
        )
        applications = [map_application(row) for row in rows]
        self._probe.entities_listed("recently_created", "all", len(applications))
        return applications
