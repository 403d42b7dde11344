"""
Hearth Store

Holds the zone and device collections for one running application.
Construct one per app (or per test) and pass it down; nothing in the
core keeps a module-level instance.
"""

import logging

from .devices import DeviceCollection
from .settings import HearthSettings
from .zones import ZoneCollection

logger = logging.getLogger(__name__)


class Store:
    """The zone and device collections of one application."""

    def __init__(self, zones: ZoneCollection | None = None, devices: DeviceCollection | None = None):
        self.zones = zones if zones is not None else ZoneCollection()
        self.devices = devices if devices is not None else DeviceCollection()

    def seed(self, settings: HearthSettings) -> None:
        """Add the zones and devices listed in the settings.

        Devices nested under a zone are assigned to that zone's new id.
        """
        for zone_config in settings.zones:
            zone_id = self.zones.add(zone_config["name"], zone_config.get("setpoint"))
            for device_config in zone_config.get("devices", []):
                self.devices.add(device_config["name"], zone_id, device_config.get("setpoint"))

        for device_config in settings.devices:
            self.devices.add(device_config["name"], device_config.get("zone_id"), device_config.get("setpoint"))

        if settings.zones or settings.devices:
            logger.info(f"Seeded {len(self.zones)} zone(s) and {len(self.devices)} device(s)")
