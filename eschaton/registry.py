"""
Append-only entity registry.

Each world owns one registry. Entities are only ever appended; prior
entries keep their position and identity, ids grow monotonically.
"""

from typing import Iterator, List, Optional

from .entity import Entity, validate_name
from .errors import AllocationError, InvalidArgumentError


class EntityRegistry:
    """
    Growable, append-only sequence of entities owned by one world.

    Exposes read-only views (len, iteration, indexing, get); the only
    mutation is append(). When an owning world is given, append() refuses
    to grow the registry once that world has been released.
    """

    def __init__(self, owner=None):
        self._owner = owner
        self._entities: List[Entity] = []

    def append(self, name: str) -> Entity:
        """
        Create an entity and append it to the registry.

        The entity is fully built before the registry grows, so a failed
        call leaves the registry exactly as it was.

        Args:
            name: Entity name (non-empty, < MAX_NAME_LENGTH chars)

        Returns:
            The new Entity with entity_id == previous length + 1

        Raises:
            InvalidArgumentError: name missing, empty or too long
            LifecycleError: the owning world has been released
            AllocationError: the entity or the grown registry could not be allocated
        """
        if self._owner is not None:
            self._owner.ensure_live()
        validate_name(name)

        try:
            entity = Entity(entity_id=len(self._entities) + 1, name=name)
            self._entities.append(entity)
        except MemoryError as e:
            raise AllocationError(f"Cannot append entity '{name[:32]}'") from e

        return entity

    def get(self, entity_id: int) -> Optional[Entity]:
        """
        Look up an entity by id.

        Returns:
            Entity, or None if entity_id is not in this registry
        """
        # ids are dense and 1-based
        if isinstance(entity_id, int) and 1 <= entity_id <= len(self._entities):
            return self._entities[entity_id - 1]
        return None

    def __len__(self) -> int:
        return len(self._entities)

    def __iter__(self) -> Iterator[Entity]:
        return iter(tuple(self._entities))

    def __getitem__(self, index: int) -> Entity:
        return self._entities[index]

    def __contains__(self, entity) -> bool:
        return any(e is entity for e in self._entities)

    def to_list(self) -> List[dict]:
        """Serialize all entities in append order."""
        return [e.to_dict() for e in self._entities]


def append_entity(world, name: str) -> Entity:
    """
    Append a named entity to a world's registry.

    Requires exclusive access to the world for the duration of the call.

    Args:
        world: Live WorldState that will own the entity
        name: Entity name

    Returns:
        The new Entity

    Raises:
        InvalidArgumentError: world is None or name invalid
        LifecycleError: world has been released
        AllocationError: registry growth failed (registry unchanged)
    """
    if world is None:
        raise InvalidArgumentError("A world is required to append an entity")
    return world.add_entity(name)
