"""In-memory implementation of IApplicationRepository."""

from __future__ import annotations

from aroma.domain.entities import Application
from aroma.infrastructure.memory.base import InMemoryRepository
from aroma.ports.assertions import (
    check_app_id,
    check_application,
    check_not_empty,
    check_org_id,
    check_user_id,
)
from aroma.ports.exceptions import ApplicationDoesNotExistError
from aroma.ports.repositories import IApplicationRepository


class InMemoryApplicationRepository(InMemoryRepository, IApplicationRepository):
    """Applications held in a dictionary keyed by id.

    Projections are computed from the primary map on each read, so they can
    never drift from it.
    """

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._applications: dict[str, Application] = {}

    def save_application(self, application: Application) -> None:
        check_application(application)
        with self._lock:
            self._applications[application.application_id] = self._copy(application)

    def delete_application(self, application_id: str) -> None:
        check_app_id(application_id)
        with self._lock:
            if self._applications.pop(application_id, None) is None:
                raise ApplicationDoesNotExistError(
                    f"Application does not exist: {application_id}"
                )

    def get_by_id(self, application_id: str) -> Application:
        check_app_id(application_id)
        with self._lock:
            application = self._applications.get(application_id)
            if application is None:
                raise ApplicationDoesNotExistError(
                    f"Application does not exist: {application_id}"
                )
            return self._copy(application)

    def contains_application(self, application_id: str) -> bool:
        check_app_id(application_id)
        with self._lock:
            return application_id in self._applications

    def get_applications_owned_by(self, user_id: str) -> list[Application]:
        check_user_id(user_id)
        return self._select(lambda app: user_id in app.owners)

    def get_applications_by_org(self, organization_id: str) -> list[Application]:
        check_org_id(organization_id)
        return self._select(lambda app: app.organization_id == organization_id)

    def search_by_name(self, search_term: str) -> list[Application]:
        check_not_empty(search_term, "search_term")
        term = search_term.lower()
        return [
            application
            for application in self._recent(self._defaults.search_limit)
            if term in (application.name or "").lower()
        ]

    def get_recently_created(self) -> list[Application]:
        return self._recent(self._defaults.recently_created_limit)

    def _select(self, predicate) -> list[Application]:
        with self._lock:
            matches = [app for app in self._applications.values() if predicate(app)]
        return [self._copy(app) for app in sorted(matches, key=lambda app: app.application_id)]

    def _recent(self, limit: int) -> list[Application]:
        with self._lock:
            provisioned = [
                app
                for app in self._applications.values()
                if app.time_of_provisioning is not None
            ]
        provisioned.sort(key=lambda app: app.application_id)
        provisioned.sort(key=lambda app: app.time_of_provisioning, reverse=True)
        return [self._copy(app) for app in provisioned[:limit]]
