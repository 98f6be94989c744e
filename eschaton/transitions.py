"""
Transition engine.

Every transition builds a NEW world from a source world via
WorldState.clone() and adjusts the copy before handing it back. The
source is never written, and the result shares no arrays with it.

Entities are not carried forward: every derived world starts with an
empty registry.
"""

from typing import Optional

from .constants import (
    INTERVENTION_ENTROPY_FACTOR,
    GUIDANCE_ENTROPY_FACTOR,
    GUIDANCE_PHRASE,
    PETITION_LIFESPAN_INCREMENT,
    MAX_TERMINAL_DAYS,
)
from .entity import Entity
from .errors import InvalidArgumentError, AllocationError
from .world_state import WorldState


def _derive(world: Optional[WorldState]) -> WorldState:
    """Clone a source world, translating allocation failure."""
    if world is None:
        raise InvalidArgumentError("A source world is required")
    try:
        return world.clone()
    except MemoryError as e:
        if isinstance(e, AllocationError):
            raise
        raise AllocationError("Cannot allocate derived world") from e


def intervene(world: WorldState) -> WorldState:
    """
    Intervention: copy the world with entropy reduced by 10%.

    Args:
        world: Live source world

    Returns:
        New world, entropy_level == world.entropy_level * 0.9

    Raises:
        InvalidArgumentError: world is None
        LifecycleError: world has been released
        AllocationError: the copy could not be allocated
    """
    derived = _derive(world)
    derived.entropy_level *= INTERVENTION_ENTROPY_FACTOR
    return derived


def respond_to_petition(world: WorldState, entity: Entity, message: str) -> WorldState:
    """
    Respond to a petition from an entity.

    Performs an intervention, extends the lifespan by one day and, if the
    message asks for guidance ("guide me"), reduces entropy by a further 1%.
    The lifespan never grows past MAX_TERMINAL_DAYS.

    Args:
        world: Live source world
        entity: Petitioning entity
        message: Petition text (non-empty)

    Returns:
        New world with the adjustments applied

    Raises:
        InvalidArgumentError: any argument missing, entity not an Entity, or message empty
        LifecycleError: world has been released
        AllocationError: the copy could not be allocated
    """
    if world is None:
        raise InvalidArgumentError("A source world is required")
    if not isinstance(entity, Entity):
        raise InvalidArgumentError("A petitioning Entity is required")
    if not isinstance(message, str) or not message:
        raise InvalidArgumentError("Petition message must be a non-empty str")

    derived = intervene(world)
    # Saturates at the int64 bound WorldState accepts
    derived.lifespan_days = min(MAX_TERMINAL_DAYS, derived.lifespan_days + PETITION_LIFESPAN_INCREMENT)
    if GUIDANCE_PHRASE in message:
        derived.entropy_level *= GUIDANCE_ENTROPY_FACTOR
    return derived


def complete(world: WorldState) -> WorldState:
    """
    Teleological completion: intervene, then saturate entropy at max_entropy.

    Raises:
        InvalidArgumentError: world is None
        LifecycleError: world has been released
        AllocationError: the copy could not be allocated
    """
    derived = intervene(world)
    derived.entropy_level = derived.max_entropy
    return derived
