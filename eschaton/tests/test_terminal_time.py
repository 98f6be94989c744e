"""
Tests for the terminal-time calculator.

Verifies the step-by-step formula against a hand evaluation, the bounding
of every term (non-negative, never above the int64 maximum) for adversarial
constants and entity counts, and the sentinel / division-by-zero contract.
"""

import math

import numpy as np
import pytest

from eschaton.terminal_time import (
    calculate_terminal_time,
    physical_influence,
    consciousness_influence,
)
from eschaton.world_state import WorldState, create_world
from eschaton.constants import (
    MAX_TERMINAL_DAYS,
    TERMINAL_TIME_SENTINEL,
    SECONDS_PER_DAY,
)
from eschaton.errors import DivisionByZeroError, LifecycleError

T0 = 1_700_000_000.0


def hand_terminal_time(constants, entropy_level, max_entropy, lifespan_days,
                       entity_count, elapsed_days=0.0) -> int:
    """Direct evaluation of the prediction formula with math only."""
    days_remaining = max(0.0, lifespan_days - elapsed_days)
    ratio = entropy_level / max_entropy
    total = 0.0
    for i in range(min(len(constants), 10)):
        c = float(constants[i])
        total += (c / (abs(c) + 1.0)) / (i + 1)
    physical = math.fmod(abs(total), 100.0)
    conscious = min(1000.0, entity_count * 0.12345)
    result = max(0.0, days_remaining * (1.0 - ratio) - physical * ratio + conscious)
    return int(result)


def test_end_to_end_reference_world():
    """30 constants, entropy 0.618/1.0, 1,825,000 days, 2 entities, elapsed ~0"""
    world = create_world(
        num_constants=30,
        entropy_level=0.618,
        max_entropy=1.0,
        lifespan_days=1_825_000,
        creation_time=T0
    )
    world.add_entity("Human1")
    world.add_entity("Human2")

    expected = hand_terminal_time(world.constants, 0.618, 1.0, 1_825_000, 2)
    assert calculate_terminal_time(world, now=T0) == expected
    # 1825000 * 0.382 - 1.1091... * 0.618 + 0.2469
    assert expected == 697149


def test_physical_influence_of_reference_constants():
    world = create_world(creation_time=T0)
    # c0 normalizes to ~1, c1..c3 are ~0, indices 4..9 telescope to 1/5 - 1/11
    assert physical_influence(world.constants) == pytest.approx(1.0 + 1 / 5 - 1 / 11, abs=1e-8)


def test_physical_influence_uses_first_ten_only():
    short = np.full(10, 5.0)
    long = np.concatenate([short, np.full(90, 1e12)])
    assert physical_influence(short) == physical_influence(long)


def test_physical_influence_bounded():
    rng = np.random.Generator(np.random.PCG64(1234))
    for _ in range(200):
        constants = rng.uniform(-1e300, 1e300, size=rng.integers(1, 40))
        value = physical_influence(constants)
        assert 0.0 <= value < 100.0


def test_consciousness_influence_capped():
    assert consciousness_influence(0) == 0.0
    assert consciousness_influence(2) == pytest.approx(0.2469)
    assert consciousness_influence(10**9) == 1000.0
    assert consciousness_influence(10**30) == 1000.0


def test_elapsed_time_reduces_remaining_days():
    world = WorldState(constants=[0.0], entropy_level=0.0, max_entropy=1.0,
                       lifespan_days=100, creation_time=T0)
    assert calculate_terminal_time(world, now=T0 + 10 * SECONDS_PER_DAY) == 90


def test_elapsed_beyond_lifespan_floors_at_zero():
    world = WorldState(constants=[0.0], entropy_level=0.0, max_entropy=1.0,
                       lifespan_days=100, creation_time=T0)
    assert calculate_terminal_time(world, now=T0 + 1000 * SECONDS_PER_DAY) == 0


def test_saturated_entropy_without_entities_is_zero():
    world = create_world(entropy_level=1.0, max_entropy=1.0, creation_time=T0)
    assert calculate_terminal_time(world, now=T0) == 0


def test_result_clamped_to_int64_max():
    world = WorldState(constants=[0.0], entropy_level=0.0, max_entropy=1.0,
                       lifespan_days=MAX_TERMINAL_DAYS, creation_time=T0)
    world.add_entity("Human1")
    result = calculate_terminal_time(world, now=T0)
    assert result == MAX_TERMINAL_DAYS
    assert isinstance(result, int)


def test_bounded_for_adversarial_inputs():
    """Non-negative and <= int64 max across entropy, constants and entity counts"""
    rng = np.random.Generator(np.random.PCG64(42))
    for trial in range(100):
        max_entropy = float(rng.uniform(1e-6, 1e6))
        entropy_level = float(rng.uniform(0.0, 1.0)) * max_entropy
        constants = rng.uniform(-1e300, 1e300, size=rng.integers(1, 30))
        lifespan = int(rng.integers(0, MAX_TERMINAL_DAYS, endpoint=True))
        world = WorldState(constants=constants, entropy_level=entropy_level,
                           max_entropy=max_entropy, lifespan_days=lifespan,
                           creation_time=T0)
        for i in range(int(rng.integers(0, 20))):
            world.add_entity(f"E{i}")

        result = calculate_terminal_time(world, now=T0 + float(rng.uniform(0, 1e9)))
        assert 0 <= result <= MAX_TERMINAL_DAYS, f"trial {trial}: {result}"


def test_entropy_overshoot_floors_at_zero():
    world = create_world(entropy_level=5.0, max_entropy=1.0, creation_time=T0)
    assert calculate_terminal_time(world, now=T0) == 0


def test_none_world_returns_sentinel():
    assert calculate_terminal_time(None) == TERMINAL_TIME_SENTINEL == -1


def test_zero_max_entropy_raises():
    world = create_world(entropy_level=0.0, max_entropy=0.0, creation_time=T0)
    with pytest.raises(DivisionByZeroError):
        calculate_terminal_time(world, now=T0)
    with pytest.raises(ZeroDivisionError):
        calculate_terminal_time(world, now=T0)


def test_released_world_rejected():
    world = create_world(creation_time=T0)
    world.release()
    with pytest.raises(LifecycleError):
        calculate_terminal_time(world, now=T0)


def test_defaults_to_current_time():
    world = create_world()
    # Freshly created: elapsed is a fraction of a second
    assert calculate_terminal_time(world) == hand_terminal_time(
        world.constants, world.entropy_level, world.max_entropy, world.lifespan_days, 0)
