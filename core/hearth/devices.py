"""
Device Collection

Devices carry an optional zone reference. The reference is not checked
against the zone collection, so removing a zone leaves its devices
pointing at an id that no longer resolves.
"""

from typing import Optional

from .collection import EntityCollection
from .models import DEFAULT_SETPOINT, Device, check_name, check_setpoint, check_zone_id


class DeviceCollection(EntityCollection[Device]):
    """All devices known to the running process."""

    kind = "device"

    def add(
        self,
        name: str,
        zone_id: Optional[str] = None,
        setpoint: Optional[float] = None,
    ) -> str:
        """Create a device and return its id.

        Args:
            name: Device name (may be empty)
            zone_id: Zone the device belongs to; None or "" leaves it unassigned
            setpoint: Target temperature, defaults to 16.0
        """
        name = check_name(name)
        zone_id = check_zone_id(zone_id)
        setpoint = DEFAULT_SETPOINT if setpoint is None else check_setpoint(setpoint)
        return self._insert(
            lambda device_id: Device(id=device_id, name=name, setpoint=setpoint, zone_id=zone_id)
        )

    def list_by_zone(self, zone_id: str) -> Optional[dict[str, Device]]:
        """Get all devices assigned to a zone.

        Returns:
            Matching devices by id, or None when no device is in the zone.
            An unknown zone and a zone without devices look the same.
        """
        devices = self.filter(lambda device: device.zone_id == zone_id)
        return devices or None
