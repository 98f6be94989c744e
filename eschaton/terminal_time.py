"""
Terminal-time calculator.

Derives the number of days remaining before a world reaches its terminal
state from its lifespan, entropy ratio, first constants and entity count.

Every contributing term is bounded:
- each constant is normalized into (-1, 1) by c / (|c| + 1)
- the physical influence is reduced modulo 100
- the consciousness influence is capped at 1000
- the result is floored at 0 and clamped to the int64 maximum
so the calculation never overflows or goes negative for a well-formed world.
"""

import time
from typing import Optional

from .constants import (
    SECONDS_PER_DAY,
    INFLUENCE_CONSTANT_LIMIT,
    PHYSICAL_INFLUENCE_MODULUS,
    CONSCIOUSNESS_INFLUENCE_FACTOR,
    CONSCIOUSNESS_INFLUENCE_CAP,
    MAX_TERMINAL_DAYS,
    TERMINAL_TIME_SENTINEL,
)
from .errors import DivisionByZeroError


def physical_influence(constants) -> float:
    """
    Bounded influence of the first INFLUENCE_CONSTANT_LIMIT constants.

    Returns:
        |sum(c_i / (|c_i| + 1) / (i + 1))| mod 100, in [0, 100)
    """
    total = 0.0
    for i, c in enumerate(constants[:INFLUENCE_CONSTANT_LIMIT]):
        c = float(c)
        total += (c / (abs(c) + 1.0)) / float(i + 1)
    return abs(total) % PHYSICAL_INFLUENCE_MODULUS


def consciousness_influence(entity_count: int) -> float:
    """Entity contribution, capped at CONSCIOUSNESS_INFLUENCE_CAP."""
    return min(CONSCIOUSNESS_INFLUENCE_CAP, entity_count * CONSCIOUSNESS_INFLUENCE_FACTOR)


def calculate_terminal_time(world, now: Optional[float] = None) -> int:
    """
    Days remaining until the world's terminal state.

    Args:
        world: WorldState to evaluate (None returns TERMINAL_TIME_SENTINEL)
        now: Evaluation time as POSIX timestamp (defaults to time.time())

    Returns:
        Non-negative int <= MAX_TERMINAL_DAYS, or -1 when world is None

    Raises:
        DivisionByZeroError: world.max_entropy == 0
        LifecycleError: world has been released
    """
    if world is None:
        return TERMINAL_TIME_SENTINEL
    world.ensure_live()

    if now is None:
        now = time.time()

    elapsed_days = (float(now) - world.creation_time) / SECONDS_PER_DAY
    days_remaining = max(0.0, world.lifespan_days - elapsed_days)

    if world.max_entropy == 0.0:
        raise DivisionByZeroError("max_entropy is zero; entropy ratio undefined")
    entropy_ratio = world.entropy_level / world.max_entropy

    physical = physical_influence(world.constants)
    conscious = consciousness_influence(world.entity_count)

    result = max(0.0,
                 days_remaining * (1.0 - entropy_ratio)
                 - physical * entropy_ratio
                 + conscious)

    # float(MAX_TERMINAL_DAYS) rounds up to 2**63, so compare before int()
    if result >= float(MAX_TERMINAL_DAYS):
        return MAX_TERMINAL_DAYS
    return int(result)
