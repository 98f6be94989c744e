"""
Data types mirroring YAML schema structures.

These dataclasses are populated by loader.py from YAML files.
"""

from dataclasses import dataclass, field
from typing import List, Optional

from .constants import (
    DEFAULT_NUM_CONSTANTS,
    DEFAULT_ENTROPY_LEVEL,
    DEFAULT_MAX_ENTROPY,
    DEFAULT_LIFESPAN_DAYS,
)


# ============================================================================
# Genesis Definition
# ============================================================================

@dataclass
class GenesisParameters:
    """Parameters a world is created from"""
    num_constants: int = DEFAULT_NUM_CONSTANTS
    entropy_level: float = DEFAULT_ENTROPY_LEVEL
    max_entropy: float = DEFAULT_MAX_ENTROPY
    lifespan_days: int = DEFAULT_LIFESPAN_DAYS


@dataclass
class GenesisConfig:
    """Complete genesis configuration: world parameters plus initial entities"""
    world_id: str
    name: str
    parameters: GenesisParameters
    entities: List[str] = field(default_factory=list)  # Entity names, appended in order
    description: Optional[str] = None
