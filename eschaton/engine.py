"""
World engine facade.

WorldEngine exposes the fixed operation set of the simulator (creation,
entity append, transitions, terminal-time prediction, release) as plain
methods over the module-level functions. It adds optional progress
output and transition timing; it holds no world state of its own.
"""

import os
import time
from typing import Dict, List, Optional, Tuple

from .constants import PROFILE_ENV_VAR
from .data_types import GenesisConfig
from .entity import Entity
from .lifecycle import LifecycleLedger
from .registry import append_entity
from .terminal_time import calculate_terminal_time
from .transitions import intervene, respond_to_petition, complete
from .world_state import WorldState, create_world


class TransitionProfile:
    """
    Per-transition samples collected while ESCHATON_PROFILE=1.

    Each sample records the transition name, its wall time and the entropy
    change it produced, so a breakdown shows cost and effect side by side.
    """

    def __init__(self, enabled: Optional[bool] = None):
        if enabled is None:
            enabled = os.getenv(PROFILE_ENV_VAR) == '1'
        self.enabled = enabled
        self.samples: List[Tuple[str, float, float]] = []  # (name, elapsed_ms, entropy_delta)

    def record(self, name: str, elapsed_ns: int, source: WorldState, derived: WorldState):
        if self.enabled:
            delta = derived.entropy_level - source.entropy_level
            self.samples.append((name, elapsed_ns / 1_000_000, delta))

    def summary(self) -> Dict[str, dict]:
        """
        Aggregate samples by transition name.

        Returns:
            {name: {'calls', 'total_ms', 'avg_ms', 'entropy_delta'}}
        """
        summary: Dict[str, dict] = {}
        for name, elapsed_ms, delta in self.samples:
            entry = summary.setdefault(name, {'calls': 0, 'total_ms': 0.0, 'entropy_delta': 0.0})
            entry['calls'] += 1
            entry['total_ms'] += elapsed_ms
            entry['entropy_delta'] += delta
        for entry in summary.values():
            entry['avg_ms'] = entry['total_ms'] / entry['calls']
        return summary

    def reset(self):
        self.samples.clear()


class WorldEngine:
    """
    Fixed interface over the world-state simulator.

    Every transition returns a new world owned by the caller; the caller
    releases each world exactly once (engine.release(world) or
    world.release()).
    """

    def __init__(self, ledger: Optional[LifecycleLedger] = None, verbose: bool = False):
        """
        Args:
            ledger: Release instrumentation attached to every created world
            verbose: Print one [OK] line per operation
        """
        self.ledger = ledger
        self.verbose = verbose
        self.transition_count: int = 0
        self.profile = TransitionProfile()

    def _log(self, message: str):
        if self.verbose:
            print(f"[OK] {message}")

    # ------------------------------------------------------------------
    # Creation
    # ------------------------------------------------------------------

    def create_world(self, creation_time: Optional[float] = None, **parameters) -> WorldState:
        """Create a world (keyword parameters as for world_state.create_world)."""
        world = create_world(creation_time=creation_time, ledger=self.ledger, **parameters)
        self._log(f"World created with {world.num_constants} physical constants")
        return world

    def create_world_from_genesis(self, genesis: GenesisConfig,
                                  creation_time: Optional[float] = None) -> WorldState:
        """
        Create a world from a loaded genesis config and append its entities.

        If any entity append fails the new world is released and the error
        re-raised, so the caller never sees a partially populated world.
        """
        p = genesis.parameters
        world = self.create_world(
            creation_time=creation_time,
            num_constants=p.num_constants,
            entropy_level=p.entropy_level,
            max_entropy=p.max_entropy,
            lifespan_days=p.lifespan_days
        )
        try:
            for name in genesis.entities:
                self.create_entity(world, name)
        except Exception:
            world.release()
            raise
        return world

    def create_entity(self, world: WorldState, name: str) -> Entity:
        entity = append_entity(world, name)
        self._log(f"Entity created: {entity.name} (id={entity.entity_id})")
        return entity

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------

    def _run(self, name: str, transition, world: WorldState, *args) -> WorldState:
        start = time.perf_counter_ns()
        derived = transition(world, *args)
        self.profile.record(name, time.perf_counter_ns() - start, world, derived)
        self.transition_count += 1
        return derived

    def intervene(self, world: WorldState) -> WorldState:
        derived = self._run('intervene', intervene, world)
        self._log(f"Intervention applied - entropy {world.entropy_level:.6f} -> {derived.entropy_level:.6f}")
        return derived

    def respond_to_petition(self, world: WorldState, entity: Entity, message: str) -> WorldState:
        derived = self._run('respond_to_petition', respond_to_petition, world, entity, message)
        self._log(f"Petition from {entity.name} answered - lifespan {derived.lifespan_days} days")
        return derived

    def complete(self, world: WorldState) -> WorldState:
        derived = self._run('complete', complete, world)
        self._log("World teleologically completed")
        return derived

    # ------------------------------------------------------------------
    # Prediction / release
    # ------------------------------------------------------------------

    def days_to_terminal_state(self, world: WorldState, now: Optional[float] = None) -> int:
        return calculate_terminal_time(world, now=now)

    def release(self, world: WorldState):
        world.release()

    # ------------------------------------------------------------------
    # Diagnostics
    # ------------------------------------------------------------------

    def get_stats(self) -> dict:
        """
        Get engine statistics.

        Returns:
            Dict with transition_count, the per-transition profile summary
            (empty unless profiling is enabled) and ledger stats when a
            ledger is attached
        """
        stats = {
            'transition_count': self.transition_count,
            'profile': self.profile.summary(),
        }
        if self.ledger is not None:
            stats['ledger'] = self.ledger.get_stats()
        return stats

    def print_perf_breakdown(self):
        """Print per-transition timing averages (requires ESCHATON_PROFILE=1)."""
        if not self.profile.enabled:
            print(f"[WARN] Profiling disabled (set {PROFILE_ENV_VAR}=1)")
            return

        print(f"\n[Perf Breakdown] {self.transition_count} transitions")
        for name, entry in self.profile.summary().items():
            print(f"  {name:20s} {entry['avg_ms']:8.4f} ms avg ({entry['calls']} calls, "
                  f"entropy {entry['entropy_delta']:+.6f})")
