"""SQLAlchemy implementation of IUserPreferencesRepository.

Devices are stored one row per (User, device) with the device serialized
to canonical JSON, so the same device always maps to the same key.
"""

from __future__ import annotations

from sqlalchemy import delete, select

from aroma.domain.entities import MobileDevice
from aroma.infrastructure.serialization import MobileDeviceSerializer
from aroma.infrastructure.sql.base import SqlRepository
from aroma.infrastructure.sql.models import UserDeviceModel
from aroma.ports.assertions import check_mobile_device, check_not_none, check_user_id
from aroma.ports.repositories import IUserPreferencesRepository

_serializer = MobileDeviceSerializer()


class SqlUserPreferencesRepository(SqlRepository, IUserPreferencesRepository):
    """Relational repository for the mobile devices of each User."""

    entity = "mobile_device"

    def save_mobile_device(self, user_id: str, device: MobileDevice) -> None:
        with self._validating("save_mobile_device"):
            check_user_id(user_id)
            check_mobile_device(device)

        serialized = _serializer.serialize(device)
        with self._transaction("save_mobile_device", user_id=user_id) as session:
            if session.get(UserDeviceModel, (user_id, serialized)) is None:
                session.add(UserDeviceModel(user_id=user_id, serialized_device=serialized))

        self._probe.entity_saved(user_id, platform=device.platform.name)

    def save_mobile_devices(self, user_id: str, devices: set[MobileDevice]) -> None:
        """Replace every device of the User with the given set."""
        with self._validating("save_mobile_devices"):
            check_user_id(user_id)
            check_not_none(devices, "devices")
            for device in devices:
                check_mobile_device(device)

        serialized = {_serializer.serialize(device) for device in devices}
        with self._transaction("save_mobile_devices", user_id=user_id) as session:
            session.execute(delete(UserDeviceModel).where(UserDeviceModel.user_id == user_id))
            session.add_all(
                UserDeviceModel(user_id=user_id, serialized_device=payload)
                for payload in sorted(serialized)
            )

        self._probe.entity_saved(user_id, count=len(serialized))

    def contains_mobile_device(self, user_id: str, device: MobileDevice) -> bool:
        with self._validating("contains_mobile_device"):
            check_user_id(user_id)
            check_mobile_device(device)

        key = (user_id, _serializer.serialize(device))
        with self._transaction("contains_mobile_device", user_id=user_id) as session:
            return session.get(UserDeviceModel, key) is not None

    def get_mobile_devices(self, user_id: str) -> set[MobileDevice]:
        """Devices whose platform is no longer known are skipped."""
        with self._validating("get_mobile_devices"):
            check_user_id(user_id)

        stmt = select(UserDeviceModel.serialized_device).where(
            UserDeviceModel.user_id == user_id
        )
        with self._transaction("get_mobile_devices", user_id=user_id) as session:
            payloads = list(session.scalars(stmt))

        devices = {
            device
            for device in map(_serializer.deserialize, payloads)
            if device is not None
        }
        self._probe.entities_listed("by_user", user_id, len(devices))
        return devices

    def delete_mobile_device(self, user_id: str, device: MobileDevice) -> None:
        with self._validating("delete_mobile_device"):
            check_user_id(user_id)
            check_mobile_device(device)

        stmt = delete(UserDeviceModel).where(
            UserDeviceModel.user_id == user_id,
            UserDeviceModel.serialized_device == _serializer.serialize(device),
        )
        with self._transaction("delete_mobile_device", user_id=user_id) as session:
            session.execute(stmt)

        self._probe.entity_deleted(user_id, platform=device.platform.name)

    def delete_all_mobile_devices(self, user_id: str) -> None:
        with self._validating("delete_all_mobile_devices"):
            check_user_id(user_id)

        stmt = delete(UserDeviceModel).where(UserDeviceModel.user_id == user_id)
        with self._transaction("delete_all_mobile_devices", user_id=user_id) as session:
            session.execute(stmt)

        self._probe.entity_deleted(user_id, devices="all")
