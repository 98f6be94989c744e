"""
Release instrumentation for world states.

A LifecycleLedger records every world acquired through it and every
release. Tests use it to detect double releases (raised immediately)
and omitted releases (reported by outstanding()).
"""

from typing import Dict, List

from .errors import LifecycleError


class LifecycleLedger:
    """
    Tracks acquire/release pairs for world states.

    Worlds register themselves on construction and report back from
    release(). The ledger holds strong references to unreleased worlds
    only, so a leaked world stays visible until the ledger is inspected.
    """

    def __init__(self, name: str = "default"):
        self.name = name
        self._live: Dict[int, object] = {}
        self.acquired_count: int = 0
        self.released_count: int = 0

    def acquire(self, world) -> None:
        """Record a newly constructed world."""
        self._live[id(world)] = world
        self.acquired_count += 1

    def release(self, world) -> None:
        """
        Record the release of a world.

        Raises:
            LifecycleError: world was never acquired here or is already released
        """
        if self._live.pop(id(world), None) is None:
            raise LifecycleError(f"World {id(world):#x} is not live in ledger '{self.name}'")
        self.released_count += 1

    def outstanding(self) -> List[object]:
        """Worlds acquired but not yet released."""
        return list(self._live.values())

    def is_balanced(self) -> bool:
        return not self._live

    def get_stats(self) -> dict:
        return {
            'ledger': self.name,
            'acquired': self.acquired_count,
            'released': self.released_count,
            'outstanding': len(self._live),
        }
