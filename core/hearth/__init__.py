"""Hearth zone and device backend."""

__version__ = "0.1.0"

# Define public API
__all__ = [
    "Zone",
    "Device",
    "ZonePatch",
    "DevicePatch",
    "UNSET",
    "ZoneCollection",
    "DeviceCollection",
    "Store",
    "HearthSettings",
    "load_settings",
]

# Import models
from .models import Device, DevicePatch, Zone, ZonePatch
from .patch import UNSET

# Import collections
from .devices import DeviceCollection
from .store import Store
from .zones import ZoneCollection

# Import settings
from .settings import HearthSettings, load_settings
