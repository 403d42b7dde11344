"""
Partial Update (PATCH) Support

A patch is a dataclass whose fields are each in one of three states:

- ``UNSET``: the key was not sent, leave the stored value alone
- a value: overwrite the stored value
- ``None``: the key was sent as null; clears the stored value for
  nullable fields and is ignored for the others
"""

from dataclasses import dataclass, fields
from typing import Any, ClassVar


class _Unset:
    """Marker for a field that is absent from a patch."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "UNSET"

    def __bool__(self) -> bool:
        return False


UNSET: Any = _Unset()


@dataclass
class Patch:
    """Base class for entity patches."""

    # Fields that may be cleared with an explicit null
    NULLABLE: ClassVar[frozenset[str]] = frozenset()

    @classmethod
    def from_dict(cls, data: dict) -> "Patch":
        """Create from a decoded JSON body.

        Keys that do not name a patch field are ignored.
        """
        known = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in data.items() if k in known})

    def changes(self) -> dict[str, Any]:
        """Fields this patch would write, by name."""
        result = {}
        for f in fields(self):
            value = getattr(self, f.name)
            if value is UNSET:
                continue
            if value is None and f.name not in self.NULLABLE:
                continue
            result[f.name] = value
        return result

    def is_empty(self) -> bool:
        return not self.changes()


def apply_patch(entity: Any, patch: Patch) -> Any:
    """Merge a patch into an entity in place and return the entity."""
    for name, value in patch.changes().items():
        setattr(entity, name, value)
    return entity
