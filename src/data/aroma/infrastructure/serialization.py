"""JSON serialization of nested structs stored in a single column.

Reactions, mobile devices and event details have no columns of their own;
they are converted to JSON text for storage and reconstructed on read.
Enum fields are stored by name, consistent with the column coding rules.
"""

from __future__ import annotations

import json
from dataclasses import asdict
from typing import Any

from aroma.domain.entities import MobileDevice, Reaction, ReactionAction, ReactionMatcher
from aroma.domain.value_objects import ActionKind, DevicePlatform, MatcherKind
from aroma.infrastructure.coding import enum_from_name


class ReactionSerializer:
    """Serializes Reactions to and from JSON text.

    A stored Reaction whose matcher or action kind is no longer known keeps
    its remaining parts; the unknown parts are dropped.
    """

    def serialize(self, reaction: Reaction) -> str:
        return json.dumps(asdict(reaction), sort_keys=True)

    def serialize_all(self, reactions: list[Reaction] | None) -> list[str]:
        return [self.serialize(reaction) for reaction in reactions or ()]

    def deserialize(self, payload: str) -> Reaction:
        """Reconstruct a Reaction.

        Raises:
            ValueError: If payload is not valid JSON
        """
        data: dict[str, Any] = json.loads(payload)
        matchers = []
        for item in data.get("matchers") or ():
            kind = enum_from_name(MatcherKind, item.get("kind"))
            if kind is not None:
                matchers.append(ReactionMatcher(kind=kind, value=item.get("value")))
        actions = []
        for item in data.get("actions") or ():
            kind = enum_from_name(ActionKind, item.get("kind"))
            if kind is not None:
                actions.append(ReactionAction(kind=kind, value=item.get("value")))
        return Reaction(name=data.get("name"), matchers=matchers, actions=actions)

    def deserialize_all(self, payloads: list[str] | None) -> list[Reaction]:
        """Reconstruct every non-empty payload, in stored order."""
        return [self.deserialize(payload) for payload in payloads or () if payload]


class MobileDeviceSerializer:
    """Serializes MobileDevices to and from JSON text."""

    def serialize(self, device: MobileDevice) -> str:
        return json.dumps(
            {"platform": device.platform.name, "device_token": device.device_token},
            sort_keys=True,
        )

    def deserialize(self, payload: str) -> MobileDevice | None:
        """Reconstruct a device; None when its platform is no longer known."""
        data: dict[str, Any] = json.loads(payload)
        platform = enum_from_name(DevicePlatform, data.get("platform"))
        if platform is None or not data.get("device_token"):
            return None
        return MobileDevice(platform=platform, device_token=data["device_token"])


def serialize_details(details: dict[str, str] | None) -> str | None:
    if not details:
        return None
    return json.dumps(details, sort_keys=True)


def deserialize_details(payload: str | None) -> dict[str, str]:
    if not payload:
        return {}
    return {str(key): str(value) for key, value in json.loads(payload).items()}
