"""
Hearth Data Models

Zones and devices, plus the patches used to partially update them.
"""

from dataclasses import asdict, dataclass
from typing import Any, ClassVar, Optional

from .exceptions import MalformedInputError
from .patch import UNSET, Patch

DEFAULT_SETPOINT = 16.0


def check_name(name: Any) -> str:
    """Validate a zone or device name."""
    if not isinstance(name, str):
        raise MalformedInputError(f"name must be a string, got {type(name).__name__}")
    return name


def check_setpoint(setpoint: Any) -> float:
    """Validate a setpoint and coerce it to float."""
    if isinstance(setpoint, bool) or not isinstance(setpoint, (int, float)):
        raise MalformedInputError(f"setpoint must be a number, got {type(setpoint).__name__}")
    return float(setpoint)


def check_zone_id(zone_id: Any) -> Optional[str]:
    """Validate a zone reference. Empty string means unassigned."""
    if zone_id is None or zone_id == "":
        return None
    if not isinstance(zone_id, str):
        raise MalformedInputError(f"zone_id must be a string or null, got {type(zone_id).__name__}")
    return zone_id


@dataclass
class Zone:
    """A heating zone."""

    id: str
    name: str
    setpoint: float = DEFAULT_SETPOINT

    def to_dict(self) -> dict:
        """JSON body for this zone (the id is carried separately)."""
        data = asdict(self)
        del data["id"]
        return data


@dataclass
class Device:
    """A device, optionally placed in a zone."""

    id: str
    name: str
    setpoint: float = DEFAULT_SETPOINT
    zone_id: Optional[str] = None  # May reference a zone that no longer exists

    def to_dict(self) -> dict:
        """JSON body for this device (the id is carried separately)."""
        data = asdict(self)
        del data["id"]
        return data


@dataclass
class ZonePatch(Patch):
    """Partial update for a zone."""

    name: Any = UNSET
    setpoint: Any = UNSET

    def __post_init__(self):
        if self.name is not UNSET and self.name is not None:
            self.name = check_name(self.name)
        if self.setpoint is not UNSET and self.setpoint is not None:
            self.setpoint = check_setpoint(self.setpoint)


@dataclass
class DevicePatch(Patch):
    """Partial update for a device.

    ``zone_id`` set to ``None`` (or ``""``) moves the device out of its
    zone; leaving it ``UNSET`` keeps the current assignment.
    """

    NULLABLE: ClassVar[frozenset[str]] = frozenset({"zone_id"})

    name: Any = UNSET
    setpoint: Any = UNSET
    zone_id: Any = UNSET

    @classmethod
    def from_dict(cls, data: dict) -> "DevicePatch":
        """Create from a decoded JSON body, accepting ``zone_uuid`` for ``zone_id``."""
        if "zone_uuid" in data and "zone_id" not in data:
            data = {**data, "zone_id": data["zone_uuid"]}
        return super().from_dict(data)

    def __post_init__(self):
        if self.name is not UNSET and self.name is not None:
            self.name = check_name(self.name)
        if self.setpoint is not UNSET and self.setpoint is not None:
            self.setpoint = check_setpoint(self.setpoint)
        if self.zone_id is not UNSET:
            self.zone_id = check_zone_id(self.zone_id)
