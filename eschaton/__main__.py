"""
Demonstration entry point.

Creates the reference world, answers a petition, prints the terminal-time
prediction and completes the world. Run with: python -m eschaton
"""

import sys
from pathlib import Path
from typing import Optional

from .engine import WorldEngine
from .errors import WorldStateError, InvalidArgumentError
from .lifecycle import LifecycleLedger
from .loader import load_default_genesis

DEFAULT_DATA_ROOT = Path(__file__).parent.parent / "data"


def run(data_root: Optional[Path] = None) -> int:
    """Run the demonstration; returns a process exit status."""
    data_root = Path(data_root) if data_root is not None else DEFAULT_DATA_ROOT

    print("Starting world simulation...")
    ledger = LifecycleLedger("demo")
    engine = WorldEngine(ledger=ledger, verbose=True)

    try:
        genesis = load_default_genesis(data_root)
        print(f"Loaded genesis: {genesis.name} ({genesis.world_id})")

        with engine.create_world_from_genesis(genesis) as world:
            names = ", ".join(e.name for e in world.entities)
            print(f"Conscious entities: {names}")

            if not world.entities:
                raise InvalidArgumentError("Genesis defines no entities to petition")
            petitioner = world.entities[0]
            petition = petitioner.form_petition()
            print(f"Petition received: {petition}")

            with engine.respond_to_petition(world, petitioner, petition) as updated:
                days_remaining = engine.days_to_terminal_state(world)
                print()
                print("=" * 47)
                print("DAYS UNTIL TERMINAL STATE")
                print("=" * 47)
                print(f"{days_remaining} days")
                print("=" * 47)
                print()
                print(f"Updated world lifespan: {updated.lifespan_days} days")

                with engine.complete(world) as completed:
                    print(f"Completed world entropy: {completed.entropy_level:.3f}")

    except WorldStateError as e:
        print(f"[FAIL] {type(e).__name__}: {e}")
        return 1

    if not ledger.is_balanced():
        print(f"[FAIL] {len(ledger.outstanding())} worlds were never released")
        return 1

    print("[OK] World simulation completed successfully")
    return 0


def main() -> int:
    return run()


if __name__ == '__main__':
    sys.exit(main())
