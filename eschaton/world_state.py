"""
World state aggregate.

A WorldState owns its constants table, its spacetime/matter/energy
substructures and its entity registry. Nothing it owns is shared with
another world: derived worlds are built by clone(), which copies every
owned array.

Lifecycle:
    create_world() / WorldState(...)  -> live
    world.add_entity(name)            -> in-place growth (only mutation)
    transitions.*(world)              -> new live world, source untouched
    world.release() / leaving `with`  -> released (exactly once)
"""

import math
import time
from typing import Optional

import numpy as np

from .constants import (
    DEFAULT_NUM_CONSTANTS,
    DEFAULT_ENTROPY_LEVEL,
    DEFAULT_MAX_ENTROPY,
    DEFAULT_LIFESPAN_DAYS,
    DEFAULT_MATTER,
    DEFAULT_ENERGY,
    SPACETIME_DIMENSIONS,
    EVOLUTION_RATE,
    MAX_TERMINAL_DAYS,
)
from .errors import InvalidArgumentError, AllocationError, LifecycleError
from .lifecycle import LifecycleLedger
from .physical_constants import generate_constants
from .registry import EntityRegistry


def _readonly_copy(values, name: str, expected_len: Optional[int] = None) -> np.ndarray:
    """Copy values into an owned, read-only, finite float64 vector."""
    try:
        arr = np.array(values, dtype=np.float64, copy=True)
    except (TypeError, ValueError) as e:
        raise InvalidArgumentError(f"{name} must be numeric: {e}") from e

    if arr.ndim != 1 or arr.size == 0:
        raise InvalidArgumentError(f"{name} must be a non-empty 1-D sequence, got shape {arr.shape}")
    if expected_len is not None and arr.size != expected_len:
        raise InvalidArgumentError(f"{name} must have {expected_len} elements, got {arr.size}")
    if not np.all(np.isfinite(arr)):
        raise InvalidArgumentError(f"{name} must contain only finite values")

    arr.flags.writeable = False
    return arr


def _finite(value, name: str) -> float:
    if value is None:
        raise InvalidArgumentError(f"{name} is required")
    if isinstance(value, (str, bytes)):
        raise InvalidArgumentError(f"{name} must be a number, got {type(value).__name__}")
    try:
        value = float(value)
    except (TypeError, ValueError) as e:
        raise InvalidArgumentError(f"{name} must be a number: {e}") from e
    if not math.isfinite(value):
        raise InvalidArgumentError(f"{name} must be finite, got {value}")
    return value


def _non_negative(value, name: str) -> float:
    value = _finite(value, name)
    if value < 0.0:
        raise InvalidArgumentError(f"{name} must be >= 0, got {value}")
    return value


class WorldState:
    """
    Root aggregate modeling one simulated world.

    Attributes:
        entropy_level: Current entropy (>= 0, may exceed max_entropy)
        max_entropy: Entropy at heat death (>= 0; 0 is degenerate)
        lifespan_days: Total lifespan bound in days (>= 0)
        matter: Matter content scalar
        energy: Energy content scalar
        entities: Append-only EntityRegistry owned by this world (read-only;
            grow it with add_entity())
    """

    def __init__(
        self,
        constants,
        entropy_level: float,
        max_entropy: float,
        lifespan_days: int,
        creation_time: Optional[float] = None,
        spacetime=None,
        matter: float = DEFAULT_MATTER,
        energy: float = DEFAULT_ENERGY,
        ledger: Optional[LifecycleLedger] = None
    ):
        """
        Build a world. Either every field is valid and owned, or an error
        is raised and nothing is registered with the ledger.

        Args:
            constants: Sequence of finite floats (copied)
            entropy_level: Initial entropy
            max_entropy: Maximum entropy
            lifespan_days: Lifespan bound in days
            creation_time: POSIX timestamp (defaults to now)
            spacetime: 4 coordinates (defaults to zeros, copied)
            matter: Matter content
            energy: Energy content
            ledger: Optional release instrumentation

        Raises:
            InvalidArgumentError: any field missing or out of range
            AllocationError: owned arrays could not be allocated
        """
        if constants is None:
            raise InvalidArgumentError("constants are required")
        if isinstance(lifespan_days, bool) or not isinstance(lifespan_days, (int, np.integer)):
            raise InvalidArgumentError(f"lifespan_days must be an int, got {type(lifespan_days).__name__}")
        if not 0 <= lifespan_days <= MAX_TERMINAL_DAYS:
            raise InvalidArgumentError(f"lifespan_days must be in [0, {MAX_TERMINAL_DAYS}], got {lifespan_days}")

        try:
            self._constants = _readonly_copy(constants, "constants")
            if spacetime is None:
                spacetime = np.zeros(SPACETIME_DIMENSIONS, dtype=np.float64)
            self._spacetime = _readonly_copy(spacetime, "spacetime", SPACETIME_DIMENSIONS)
            self._entities = EntityRegistry(owner=self)
        except MemoryError as e:
            raise AllocationError("Cannot allocate world state") from e

        self.entropy_level: float = _non_negative(entropy_level, "entropy_level")
        self.max_entropy: float = _non_negative(max_entropy, "max_entropy")
        self.lifespan_days: int = int(lifespan_days)
        self.matter: float = _finite(matter, "matter")
        self.energy: float = _finite(energy, "energy")
        self._creation_time: float = _finite(
            time.time() if creation_time is None else creation_time, "creation_time")

        self._released: bool = False
        self._ledger = ledger

        # Register last: only fully built worlds are visible to the ledger
        if ledger is not None:
            ledger.acquire(self)

    # ------------------------------------------------------------------
    # Read-only views
    # ------------------------------------------------------------------

    @property
    def constants(self) -> np.ndarray:
        return self._constants

    @property
    def num_constants(self) -> int:
        return int(self._constants.size)

    @property
    def spacetime(self) -> np.ndarray:
        return self._spacetime

    @property
    def creation_time(self) -> float:
        return self._creation_time

    @property
    def entities(self) -> EntityRegistry:
        return self._entities

    @property
    def entity_count(self) -> int:
        return len(self._entities)

    @property
    def ledger(self) -> Optional[LifecycleLedger]:
        return self._ledger

    @property
    def released(self) -> bool:
        return self._released

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def ensure_live(self):
        """Raise LifecycleError if this world has been released."""
        if self._released:
            raise LifecycleError("World has already been released")

    def add_entity(self, name: str):
        """Append an entity to this world's registry (see EntityRegistry.append)."""
        self.ensure_live()
        return self._entities.append(name)

    def clone(self) -> 'WorldState':
        """
        Build a fully independent copy of this world.

        Every owned array is copied element-for-element. The copy starts
        with an EMPTY registry: entities are not carried forward. The copy
        shares this world's ledger.

        Raises:
            LifecycleError: this world was released
            AllocationError: the copy could not be allocated
        """
        self.ensure_live()
        return WorldState(
            constants=self._constants,
            entropy_level=self.entropy_level,
            max_entropy=self.max_entropy,
            lifespan_days=self.lifespan_days,
            creation_time=self._creation_time,
            spacetime=self._spacetime,
            matter=self.matter,
            energy=self.energy,
            ledger=self._ledger
        )

    def release(self):
        """
        Release this world and everything it owns. Must be called exactly once.

        Raises:
            LifecycleError: world already released
        """
        self.ensure_live()
        if self._ledger is not None:
            self._ledger.release(self)
        self._released = True

    def __enter__(self) -> 'WorldState':
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        if not self._released:
            self.release()
        return False

    # ------------------------------------------------------------------
    # Natural laws / serialization
    # ------------------------------------------------------------------

    def evolve(self, temporal_coordinate: float) -> float:
        """Natural-law evolution at a temporal coordinate (linear placeholder)."""
        return float(temporal_coordinate) * EVOLUTION_RATE

    def to_dict(self) -> dict:
        """
        Serialize world to JSON-compatible dict.
        Ensures no numpy types leak through.
        """
        return {
            'constants': self._constants.tolist(),
            'num_constants': self.num_constants,
            'entropy_level': float(self.entropy_level),
            'max_entropy': float(self.max_entropy),
            'lifespan_days': int(self.lifespan_days),
            'creation_time': float(self._creation_time),
            'spacetime': self._spacetime.tolist(),
            'matter': float(self.matter),
            'energy': float(self.energy),
            'entities': self.entities.to_list(),
        }

    def __repr__(self) -> str:
        state = "released" if self._released else "live"
        return (f"WorldState(num_constants={self.num_constants}, "
                f"entropy_level={self.entropy_level:.6g}, max_entropy={self.max_entropy:.6g}, "
                f"lifespan_days={self.lifespan_days}, entities={len(self.entities)}, {state})")


def create_world(
    num_constants: int = DEFAULT_NUM_CONSTANTS,
    entropy_level: float = DEFAULT_ENTROPY_LEVEL,
    max_entropy: float = DEFAULT_MAX_ENTROPY,
    lifespan_days: int = DEFAULT_LIFESPAN_DAYS,
    creation_time: Optional[float] = None,
    ledger: Optional[LifecycleLedger] = None
) -> WorldState:
    """
    Create a world from a generated constant table and explicit fields.

    Defaults reproduce the reference genesis: 30 constants, entropy 0.618
    of a maximum 1.0, and a lifespan of 5000 years.

    Example:
        with create_world(creation_time=t0) as world:
            world.add_entity("Human1")
    """
    constants = generate_constants(num_constants)
    return WorldState(
        constants=constants,
        entropy_level=entropy_level,
        max_entropy=max_entropy,
        lifespan_days=lifespan_days,
        creation_time=creation_time,
        ledger=ledger
    )
