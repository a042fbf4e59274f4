"""SQLAlchemy implementation of ICredentialRepository."""

from __future__ import annotations

from aroma.infrastructure.sql.base import SqlRepository
from aroma.infrastructure.sql.models import CredentialModel
from aroma.ports.assertions import check_not_empty, check_user_id
from aroma.ports.exceptions import InvalidCredentialsError
from aroma.ports.repositories import ICredentialRepository


class SqlCredentialRepository(SqlRepository, ICredentialRepository):
    """Relational repository for already-hashed User passwords."""

    entity = "credential"

    def save_encrypted_password(self, user_id: str, encrypted_password: str) -> None:
        """Store or replace the password hash of a User.

        Args:
            user_id: The owning User
            encrypted_password: The already-hashed password
        """
        with self._validating("save_encrypted_password"):
            check_user_id(user_id)
            check_not_empty(encrypted_password, "encrypted_password")

        with self._transaction("save_encrypted_password", user_id=user_id) as session:
            model = session.get(CredentialModel, user_id)
            if model:
                model.encrypted_password = encrypted_password
            else:
                session.add(
                    CredentialModel(user_id=user_id, encrypted_password=encrypted_password)
                )

        self._probe.entity_saved(user_id)

    def contains_encrypted_password(self, user_id: str) -> bool:
        with self._validating("contains_encrypted_password"):
            check_user_id(user_id)

        with self._transaction("contains_encrypted_password", user_id=user_id) as session:
            return session.get(CredentialModel, user_id) is not None

    def get_encrypted_password(self, user_id: str) -> str:
        with self._validating("get_encrypted_password"):
            check_user_id(user_id)

        with self._transaction("get_encrypted_password", user_id=user_id) as session:
            model = session.get(CredentialModel, user_id)
            password = model.encrypted_password if model else None

        if password is None:
            self._probe.entity_not_found(user_id)
            raise InvalidCredentialsError(f"No stored password for User: {user_id}")

        self._probe.entity_retrieved(user_id)
        return password

    def delete_encrypted_password(self, user_id: str) -> None:
        """Remove the stored hash; a User without one is left unchanged."""
        with self._validating("delete_encrypted_password"):
            check_user_id(user_id)

        with self._transaction("delete_encrypted_password", user_id=user_id) as session:
            model = session.get(CredentialModel, user_id)
            if model:
                session.delete(model)

        self._probe.entity_deleted(user_id)
