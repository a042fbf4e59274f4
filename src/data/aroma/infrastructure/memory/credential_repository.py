"""In-memory implementations of the credential and preference repositories."""

from __future__ import annotations

from aroma.domain.entities import MobileDevice
from aroma.infrastructure.memory.base import InMemoryRepository
from aroma.ports.assertions import (
    check_mobile_device,
    check_not_empty,
    check_not_none,
    check_user_id,
)
from aroma.ports.exceptions import InvalidCredentialsError
from aroma.ports.repositories import ICredentialRepository, IUserPreferencesRepository


class InMemoryCredentialRepository(InMemoryRepository, ICredentialRepository):
    """Password hashes keyed by user id."""

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._passwords: dict[str, str] = {}

    def save_encrypted_password(self, user_id: str, encrypted_password: str) -> None:
        check_user_id(user_id)
        check_not_empty(encrypted_password, "encrypted_password")
        with self._lock:
            self._passwords[user_id] = encrypted_password

    def contains_encrypted_password(self, user_id: str) -> bool:
        check_user_id(user_id)
        with self._lock:
            return user_id in self._passwords

    def get_encrypted_password(self, user_id: str) -> str:
        check_user_id(user_id)
        with self._lock:
            password = self._passwords.get(user_id)
        if password is None:
            raise InvalidCredentialsError(f"No stored password for User: {user_id}")
        return password

    def delete_encrypted_password(self, user_id: str) -> None:
        check_user_id(user_id)
        with self._lock:
            self._passwords.pop(user_id, None)


class InMemoryUserPreferencesRepository(InMemoryRepository, IUserPreferencesRepository):
    """Sets of mobile devices keyed by user id."""

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._devices: dict[str, set[MobileDevice]] = {}

    def save_mobile_device(self, user_id: str, device: MobileDevice) -> None:
        check_user_id(user_id)
        check_mobile_device(device)
        with self._lock:
            self._devices.setdefault(user_id, set()).add(device)

    def save_mobile_devices(self, user_id: str, devices: set[MobileDevice]) -> None:
        check_user_id(user_id)
        check_not_none(devices, "devices")
        for device in devices:
            check_mobile_device(device)
        with self._lock:
            self._devices[user_id] = set(devices)

    def contains_mobile_device(self, user_id: str, device: MobileDevice) -> bool:
        check_user_id(user_id)
        check_mobile_device(device)
        with self._lock:
            return device in self._devices.get(user_id, set())

    def get_mobile_devices(self, user_id: str) -> set[MobileDevice]:
        check_user_id(user_id)
        with self._lock:
            return set(self._devices.get(user_id, set()))

    def delete_mobile_device(self, user_id: str, device: MobileDevice) -> None:
        check_user_id(user_id)
        check_mobile_device(device)
        with self._lock:
            self._devices.get(user_id, set()).discard(device)

    def delete_all_mobile_devices(self, user_id: str) -> None:
        check_user_id(user_id)
        with self._lock:
            self._devices.pop(user_id, None)
