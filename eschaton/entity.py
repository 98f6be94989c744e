"""
Entity runtime representation.

Entities are named sub-records appended to exactly one world's registry.
Each entity has a sequential entity_id unique within its world.
"""

from dataclasses import dataclass

from .constants import (
    MAX_NAME_LENGTH,
    MAX_PETITION_LENGTH,
    PETITION_TEMPLATE,
    DEFAULT_CONSCIOUSNESS_LEVEL,
    DEFAULT_FREE_WILL_CAPACITY,
)
from .errors import InvalidArgumentError


def validate_name(name) -> str:
    """
    Check an entity name before it enters a registry.

    Raises:
        InvalidArgumentError: name is None, not a str, empty, or too long
    """
    if name is None:
        raise InvalidArgumentError("Entity name is required")
    if not isinstance(name, str):
        raise InvalidArgumentError(f"Entity name must be a str, got {type(name).__name__}")
    if not name:
        raise InvalidArgumentError("Entity name must not be empty")
    if len(name) >= MAX_NAME_LENGTH:
        raise InvalidArgumentError(
            f"Entity name too long ({len(name)} chars, limit {MAX_NAME_LENGTH - 1})"
        )
    return name


@dataclass(frozen=True)
class Entity:
    """
    Conscious entity owned by a world.

    Attributes:
        entity_id: Sequential id assigned at append time (1-based)
        name: Display name (1..255 chars)
        consciousness_level: Fixed at 1.0
        free_will_capacity: Fixed at 1.0
    """
    entity_id: int
    name: str
    consciousness_level: float = DEFAULT_CONSCIOUSNESS_LEVEL
    free_will_capacity: float = DEFAULT_FREE_WILL_CAPACITY

    def __post_init__(self):
        validate_name(self.name)

    def form_petition(self) -> str:
        """
        Form the petition this entity sends to the transition engine.

        Returns:
            Petition text, e.g. "Petition from Human1: Please guide me."

        Raises:
            InvalidArgumentError: the formed text would exceed MAX_PETITION_LENGTH
        """
        petition = PETITION_TEMPLATE.format(name=self.name)
        if len(petition) >= MAX_PETITION_LENGTH:
            raise InvalidArgumentError(
                f"Petition from entity {self.entity_id} exceeds {MAX_PETITION_LENGTH} chars"
            )
        return petition

    def make_choice(self, is_consistent: bool) -> bool:
        """Choose an option; only logically consistent options are taken."""
        return bool(is_consistent)

    def to_dict(self) -> dict:
        """
        Serialize entity to JSON-compatible dict.

        Returns:
            Dict with all entity fields
        """
        return {
            'entity_id': self.entity_id,
            'name': self.name,
            'consciousness_level': float(self.consciousness_level),
            'free_will_capacity': float(self.free_will_capacity),
        }

    @classmethod
    def from_dict(cls, data: dict) -> 'Entity':
        """
        Deserialize entity from dict.

        Args:
            data: Dict with entity fields

        Returns:
            Entity instance
        """
        return cls(
            entity_id=data['entity_id'],
            name=data['name'],
            consciousness_level=data.get('consciousness_level', DEFAULT_CONSCIOUSNESS_LEVEL),
            free_will_capacity=data.get('free_will_capacity', DEFAULT_FREE_WILL_CAPACITY),
        )
