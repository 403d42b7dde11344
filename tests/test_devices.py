from __future__ import annotations

import pytest

from core.hearth.devices import DeviceCollection
from core.hearth.models import Device, DevicePatch
from core.hearth.store import Store


@pytest.fixture
def devices() -> DeviceCollection:
    return DeviceCollection()


def test_add_without_zone(devices: DeviceCollection) -> None:
    device_id = devices.add("Lamp")

    assert devices.get(device_id) == Device(id=device_id, name="Lamp", setpoint=16.0, zone_id=None)


def test_add_with_empty_zone_is_unassigned(devices: DeviceCollection) -> None:
    device_id = devices.add("Lamp", "")

    assert devices.get(device_id).zone_id is None


def test_update_null_zone_clears_and_absent_zone_keeps() -> None:
    cleared, kept = DeviceCollection(), DeviceCollection()
    cleared_id = cleared.add("Fridge", "z-1")
    kept_id = kept.add("Fridge", "z-1")

    cleared.update(cleared_id, DevicePatch.from_dict({"zone_id": None}))
    kept.update(kept_id, DevicePatch.from_dict({}))

    assert cleared.get(cleared_id).zone_id is None
    assert kept.get(kept_id).zone_id == "z-1"


def test_update_moves_device_to_other_zone(devices: DeviceCollection) -> None:
    device_id = devices.add("Fridge", "z-1")

    updated = devices.update(device_id, DevicePatch(zone_id="z-2"))

    assert updated.zone_id == "z-2"
    assert updated.name == "Fridge"


def test_update_name_only(devices: DeviceCollection) -> None:
    device_id = devices.add("Fridge", "z-1", 5.0)

    updated = devices.update(device_id, DevicePatch(name="Freezer"))

    assert updated == Device(id=device_id, name="Freezer", setpoint=5.0, zone_id="z-1")


def test_list_by_zone_returns_only_matching(devices: DeviceCollection) -> None:
    fridge = devices.add("Fridge", "z-1")
    oven = devices.add("Oven", "z-1")
    devices.add("Heater", "z-2")
    devices.add("Lamp")

    found = devices.list_by_zone("z-1")

    assert set(found) == {fridge, oven}
    assert len(devices) == 4


def test_list_by_zone_without_matches_is_none(devices: DeviceCollection) -> None:
    devices.add("Heater", "z-2")
    devices.add("Lamp")

    assert devices.list_by_zone("z-1") is None


def test_list_by_zone_on_empty_collection_is_none(devices: DeviceCollection) -> None:
    assert devices.list_by_zone("z-1") is None


def test_worked_example() -> None:
    store = Store()
    kitchen = store.zones.add("Kitchen")
    fridge = store.devices.add("Fridge", kitchen)
    store.devices.add("Lamp", None)

    in_kitchen = store.devices.list_by_zone(kitchen)
    assert list(in_kitchen) == [fridge]
    assert in_kitchen[fridge].name == "Fridge"

    store.devices.update(fridge, DevicePatch(setpoint=22.3))
    assert store.devices.get(fridge) == Device(id=fridge, name="Fridge", setpoint=22.3, zone_id=kitchen)


def test_removing_zone_leaves_device_reference() -> None:
    store = Store()
    kitchen = store.zones.add("Kitchen")
    fridge = store.devices.add("Fridge", kitchen)

    store.zones.remove(kitchen)

    assert store.zones.get(kitchen) is None
    assert store.devices.get(fridge).zone_id == kitchen
