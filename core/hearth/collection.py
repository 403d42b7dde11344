"""
Keyed Entity Collection

In-memory mapping of id -> entity guarded by a single lock. Every public
method takes the lock exactly once, so reads and writes serialize and no
operation ever waits on another collection.
"""

import copy
import logging
import threading
import uuid
from typing import Callable, Generic, Optional, TypeVar

from .patch import Patch, apply_patch

logger = logging.getLogger(__name__)

T = TypeVar("T")


def new_id() -> str:
    """Mint a random identifier (UUID4)."""
    return str(uuid.uuid4())


class EntityCollection(Generic[T]):
    """Thread-safe store of entities keyed by id, with merge-patch updates.

    Entities handed out are copies; callers cannot mutate stored state
    without going through :meth:`update`.
    """

    kind = "entity"

    def __init__(self, id_factory: Callable[[], str] = new_id):
        """Initialize an empty collection.

        Args:
            id_factory: Callable returning a fresh identifier
        """
        self._items: dict[str, T] = {}
        self._id_factory = id_factory
        self.lock = threading.Lock()

    def __len__(self) -> int:
        with self.lock:
            return len(self._items)

    def __contains__(self, entity_id: object) -> bool:
        with self.lock:
            return entity_id in self._items

    def _insert(self, build: Callable[[str], T]) -> str:
        """Mint an id, build the entity for it and store it."""
        with self.lock:
            entity_id = self._id_factory()
            while entity_id in self._items:
                entity_id = self._id_factory()
            self._items[entity_id] = build(entity_id)
        logger.info(f"Added {self.kind} {entity_id}")
        return entity_id

    def get(self, entity_id: str) -> Optional[T]:
        """Get an entity by id, or None if there is none."""
        with self.lock:
            entity = self._items.get(entity_id)
            return copy.copy(entity) if entity is not None else None

    def update(self, entity_id: str, patch: Patch) -> Optional[T]:
        """Merge a patch into a stored entity.

        Args:
            entity_id: Entity to update
            patch: Fields to overwrite; absent fields are left alone

        Returns:
            The updated entity, or None if the id is unknown
        """
        with self.lock:
            entity = self._items.get(entity_id)
            if entity is None:
                return None
            apply_patch(entity, patch)
            result = copy.copy(entity)
        logger.info(f"Updated {self.kind} {entity_id}: {patch.changes()}")
        return result

    def remove(self, entity_id: str) -> None:
        """Delete an entity. Unknown ids are ignored."""
        with self.lock:
            removed = self._items.pop(entity_id, None)
        if removed is not None:
            logger.info(f"Removed {self.kind} {entity_id}")

    def list(self) -> dict[str, T]:
        """All entities by id."""
        with self.lock:
            return {k: copy.copy(v) for k, v in self._items.items()}

    def filter(self, predicate: Callable[[T], bool]) -> dict[str, T]:
        """Entities matching a predicate, by id."""
        with self.lock:
            return {k: copy.copy(v) for k, v in self._items.items() if predicate(v)}
