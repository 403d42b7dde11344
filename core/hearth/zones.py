"""Zone collection."""

from typing import Optional

from .collection import EntityCollection
from .models import DEFAULT_SETPOINT, Zone, check_name, check_setpoint


class ZoneCollection(EntityCollection[Zone]):
    """All zones known to the running process."""

    kind = "zone"

    def add(self, name: str, setpoint: Optional[float] = None) -> str:
        """Create a zone and return its id.

        Args:
            name: Zone name (may be empty)
            setpoint: Target temperature, defaults to 16.0
        """
        name = check_name(name)
        setpoint = DEFAULT_SETPOINT if setpoint is None else check_setpoint(setpoint)
        return self._insert(lambda zone_id: Zone(id=zone_id, name=name, setpoint=setpoint))
