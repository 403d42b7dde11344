from __future__ import annotations

import threading

import pytest

from core.hearth.exceptions import MalformedInputError
from core.hearth.models import Zone, ZonePatch
from core.hearth.zones import ZoneCollection


@pytest.fixture
def zones() -> ZoneCollection:
    return ZoneCollection()


def test_add_applies_default_setpoint(zones: ZoneCollection) -> None:
    zone_id = zones.add("Kitchen")

    assert zones.get(zone_id) == Zone(id=zone_id, name="Kitchen", setpoint=16.0)


def test_add_allows_empty_name(zones: ZoneCollection) -> None:
    zone_id = zones.add("")

    assert zones.get(zone_id).name == ""


def test_add_with_setpoint(zones: ZoneCollection) -> None:
    zone_id = zones.add("Bedroom", 18)

    assert zones.get(zone_id).setpoint == 18.0


def test_add_rejects_non_string_name(zones: ZoneCollection) -> None:
    with pytest.raises(MalformedInputError):
        zones.add(None)
    assert len(zones) == 0


def test_ids_are_unique(zones: ZoneCollection) -> None:
    ids = {zones.add("Zone") for _ in range(200)}

    assert len(ids) == 200
    assert len(zones) == 200


def test_id_collisions_are_retried() -> None:
    minted = iter(["a", "a", "b"])
    zones = ZoneCollection(id_factory=lambda: next(minted))

    assert zones.add("One") == "a"
    assert zones.add("Two") == "b"


def test_get_unknown_id_returns_none(zones: ZoneCollection) -> None:
    assert zones.get("missing") is None


def test_get_returns_a_copy(zones: ZoneCollection) -> None:
    zone_id = zones.add("Kitchen")

    zones.get(zone_id).name = "Changed"

    assert zones.get(zone_id).name == "Kitchen"


def test_empty_update_is_a_no_op(zones: ZoneCollection) -> None:
    zone_id = zones.add("Kitchen")
    before = zones.get(zone_id)

    after = zones.update(zone_id, ZonePatch())

    assert after == before
    assert zones.get(zone_id) == before


def test_update_name_keeps_setpoint(zones: ZoneCollection) -> None:
    zone_id = zones.add("Kitchen", 21.5)

    updated = zones.update(zone_id, ZonePatch(name="X"))

    assert updated == Zone(id=zone_id, name="X", setpoint=21.5)
    assert zones.get(zone_id) == updated


def test_update_unknown_id_returns_none(zones: ZoneCollection) -> None:
    assert zones.update("missing", ZonePatch(name="X")) is None
    assert len(zones) == 0


def test_remove_then_get_is_none(zones: ZoneCollection) -> None:
    zone_id = zones.add("Kitchen")

    zones.remove(zone_id)

    assert zones.get(zone_id) is None
    assert zone_id not in zones


def test_remove_unknown_id_is_a_no_op(zones: ZoneCollection) -> None:
    zone_id = zones.add("Kitchen")

    zones.remove("missing")
    zones.remove("missing")

    assert list(zones.list()) == [zone_id]


def test_list_returns_all_zones_by_id(zones: ZoneCollection) -> None:
    kitchen = zones.add("Kitchen")
    hall = zones.add("Hall")

    listed = zones.list()

    assert set(listed) == {kitchen, hall}
    assert listed[hall].name == "Hall"


def test_concurrent_adds_are_all_stored(zones: ZoneCollection) -> None:
    def add_many() -> None:
        for _ in range(100):
            zones.add("Zone")

    threads = [threading.Thread(target=add_many) for _ in range(8)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert len(zones) == 800
