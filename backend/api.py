"""
Hearth API Endpoints
"""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Request, Response
from fastapi.responses import PlainTextResponse
from loguru import logger
from pydantic import AliasChoices, BaseModel, Field

from core.hearth import __version__
from core.hearth.devices import DeviceCollection
from core.hearth.models import DevicePatch, ZonePatch
from core.hearth.store import Store
from core.hearth.zones import ZoneCollection

router = APIRouter()


def get_store(request: Request) -> Store:
    """Store of the application serving this request."""
    return request.app.state.store


def get_zones(store: Store = Depends(get_store)) -> ZoneCollection:
    return store.zones


def get_devices(store: Store = Depends(get_store)) -> DeviceCollection:
    return store.devices


ZONE_ID_ALIASES = AliasChoices("zone_id", "zone_uuid")


class ZoneCreateRequest(BaseModel):
    """Request body for creating a zone."""
    name: str
    setpoint: Optional[float] = None


class ZonePatchRequest(BaseModel):
    """Request body for partially updating a zone."""
    name: Optional[str] = None
    setpoint: Optional[float] = None

    def to_patch(self) -> ZonePatch:
        # Only keys present in the body take part in the merge
        return ZonePatch.from_dict({name: getattr(self, name) for name in self.model_fields_set})


class DeviceCreateRequest(BaseModel):
    """Request body for creating a device."""
    name: str
    setpoint: Optional[float] = None
    zone_id: Optional[str] = Field(None, validation_alias=ZONE_ID_ALIASES)


class DevicePatchRequest(BaseModel):
    """Request body for partially updating a device.

    An explicit ``"zone_id": null`` unassigns the device; leaving the key
    out keeps its zone.
    """
    name: Optional[str] = None
    setpoint: Optional[float] = None
    zone_id: Optional[str] = Field(None, validation_alias=ZONE_ID_ALIASES)

    def to_patch(self) -> DevicePatch:
        return DevicePatch.from_dict({name: getattr(self, name) for name in self.model_fields_set})


@router.get("/", response_class=PlainTextResponse)
async def index():
    """Index endpoint."""
    return "Hello, World!"


@router.get("/api/health")
async def health_check(store: Store = Depends(get_store)):
    """Health check endpoint."""
    return {
        "status": "healthy",
        "app": "Hearth",
        "version": __version__,
        "zones": len(store.zones),
        "devices": len(store.devices),
    }


# Zones


@router.get("/zones")
async def list_zones(zones: ZoneCollection = Depends(get_zones)):
    """Get all zones, keyed by id."""
    return {"zones": {zone_id: zone.to_dict() for zone_id, zone in zones.list().items()}}


@router.get("/zones/{zone_id}")
async def get_zone(zone_id: str, zones: ZoneCollection = Depends(get_zones)):
    """Get a single zone."""
    zone = zones.get(zone_id)
    if zone is None:
        raise HTTPException(status_code=404, detail=f"Zone not found: {zone_id}")
    logger.debug(f"Fetched zone {zone_id}")
    return zone.to_dict()


@router.post("/zones", status_code=201)
async def create_zone(
    body: ZoneCreateRequest,
    response: Response,
    zones: ZoneCollection = Depends(get_zones),
):
    """Create a zone. The new zone's URL is returned in the Location header."""
    zone_id = zones.add(body.name, body.setpoint)
    zone = zones.get(zone_id)
    response.headers["Location"] = f"/zones/{zone_id}"
    logger.info(f"Created zone {zone_id} ({zone.name!r})")
    return zone.to_dict()


@router.patch("/zones/{zone_id}")
async def patch_zone(
    zone_id: str,
    body: ZonePatchRequest,
    zones: ZoneCollection = Depends(get_zones),
):
    """Partially update a zone."""
    zone = zones.update(zone_id, body.to_patch())
    if zone is None:
        raise HTTPException(status_code=404, detail=f"Zone not found: {zone_id}")
    return zone.to_dict()


@router.delete("/zones/{zone_id}", status_code=204)
async def delete_zone(zone_id: str, zones: ZoneCollection = Depends(get_zones)):
    """Delete a zone. Devices in the zone keep their zone_id."""
    zones.remove(zone_id)
    return Response(status_code=204)


# Devices


@router.get("/devices")
async def list_devices(
    zone_id: Optional[str] = Query(None),
    zone_uuid: Optional[str] = Query(None),
    devices: DeviceCollection = Depends(get_devices),
):
    """Get all devices, or only those in a zone when zone_id is given."""
    zone_filter = zone_id if zone_id is not None else zone_uuid
    if zone_filter is None:
        found = devices.list()
    else:
        found = devices.list_by_zone(zone_filter)
        if found is None:
            raise HTTPException(status_code=404, detail=f"No devices in zone: {zone_filter}")

    return {"devices": {device_id: device.to_dict() for device_id, device in found.items()}}


@router.get("/devices/{device_id}")
async def get_device(device_id: str, devices: DeviceCollection = Depends(get_devices)):
    """Get a single device."""
    device = devices.get(device_id)
    if device is None:
        raise HTTPException(status_code=404, detail=f"Device not found: {device_id}")
    logger.debug(f"Fetched device {device_id}")
    return device.to_dict()


@router.post("/devices", status_code=201)
async def create_device(
    body: DeviceCreateRequest,
    response: Response,
    devices: DeviceCollection = Depends(get_devices),
):
    """Create a device. The zone is not checked for existence."""
    device_id = devices.add(body.name, body.zone_id, body.setpoint)
    device = devices.get(device_id)
    response.headers["Location"] = f"/devices/{device_id}"
    logger.info(f"Created device {device_id} ({device.name!r}, zone {device.zone_id})")
    return device.to_dict()


@router.patch("/devices/{device_id}")
async def patch_device(
    device_id: str,
    body: DevicePatchRequest,
    devices: DeviceCollection = Depends(get_devices),
):
    """Partially update a device."""
    device = devices.update(device_id, body.to_patch())
    if device is None:
        raise HTTPException(status_code=404, detail=f"Device not found: {device_id}")
    return device.to_dict()


@router.delete("/devices/{device_id}", status_code=204)
async def delete_device(device_id: str, devices: DeviceCollection = Depends(get_devices)):
    """Delete a device."""
    devices.remove(device_id)
    return Response(status_code=204)
