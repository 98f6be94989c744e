"""
Tests for the WorldEngine facade and the demonstration entry point.
"""

from pathlib import Path

import numpy as np
import pytest

from eschaton.engine import WorldEngine, TransitionProfile
from eschaton.data_types import GenesisConfig, GenesisParameters
from eschaton.lifecycle import LifecycleLedger
from eschaton.loader import load_default_genesis
from eschaton.errors import InvalidArgumentError
from eschaton.__main__ import run

DATA_ROOT = Path(__file__).parent.parent.parent / "data"
T0 = 1_700_000_000.0


def test_engine_full_cycle():
    ledger = LifecycleLedger("engine")
    engine = WorldEngine(ledger=ledger)

    world = engine.create_world(creation_time=T0)
    human = engine.create_entity(world, "Human1")
    engine.create_entity(world, "Human2")

    answered = engine.respond_to_petition(world, human, human.form_petition())
    intervened = engine.intervene(world)
    completed = engine.complete(world)

    assert engine.transition_count == 3
    assert answered.lifespan_days == world.lifespan_days + 1
    assert np.isclose(intervened.entropy_level, world.entropy_level * 0.9)
    assert completed.entropy_level == completed.max_entropy
    assert engine.days_to_terminal_state(world, now=T0) == 697149

    for w in (answered, intervened, completed, world):
        engine.release(w)
    assert ledger.is_balanced()
    assert engine.get_stats()['ledger']['released'] == 4


def test_create_world_from_genesis():
    engine = WorldEngine()
    genesis = load_default_genesis(DATA_ROOT)
    world = engine.create_world_from_genesis(genesis, creation_time=T0)

    assert [e.name for e in world.entities] == ["Human1", "Human2"]
    assert [e.entity_id for e in world.entities] == [1, 2]
    assert world.num_constants == 30


def test_genesis_with_invalid_entity_releases_world():
    ledger = LifecycleLedger()
    engine = WorldEngine(ledger=ledger)
    genesis = GenesisConfig(
        world_id="bad",
        name="Bad",
        parameters=GenesisParameters(),
        entities=["Fine", "y" * 300],
    )

    with pytest.raises(InvalidArgumentError):
        engine.create_world_from_genesis(genesis)

    assert ledger.acquired_count == 1
    assert ledger.is_balanced()


def test_verbose_output(capsys):
    engine = WorldEngine(verbose=True)
    world = engine.create_world(creation_time=T0)
    engine.create_entity(world, "Human1")
    engine.complete(world)

    out = capsys.readouterr().out
    assert "[OK] World created with 30 physical constants" in out
    assert "[OK] Entity created: Human1 (id=1)" in out
    assert "[OK] World teleologically completed" in out


def test_quiet_by_default(capsys):
    engine = WorldEngine()
    engine.intervene(engine.create_world())
    assert capsys.readouterr().out == ""


def test_profiling_records_timings(monkeypatch, capsys):
    monkeypatch.setenv("ESCHATON_PROFILE", "1")
    engine = WorldEngine()
    world = engine.create_world()
    engine.intervene(world)
    engine.intervene(world)

    stats = engine.get_stats()
    assert stats['profile']['intervene']['calls'] == 2
    assert stats['profile']['intervene']['avg_ms'] >= 0.0
    # two 10% interventions on entropy 0.618
    assert stats['profile']['intervene']['entropy_delta'] == pytest.approx(-0.0618 * 2)

    engine.print_perf_breakdown()
    assert "intervene" in capsys.readouterr().out


def test_profiling_disabled_warns(monkeypatch, capsys):
    monkeypatch.delenv("ESCHATON_PROFILE", raising=False)
    engine = WorldEngine()
    engine.print_perf_breakdown()
    assert "[WARN]" in capsys.readouterr().out
    assert engine.get_stats()['profile'] == {}


def test_transition_profile_summary():
    profile = TransitionProfile(enabled=True)
    world = WorldEngine().create_world(creation_time=0.0)
    done = WorldEngine().complete(world)

    profile.record('complete', 2_000_000, world, done)
    profile.record('complete', 4_000_000, world, done)

    entry = profile.summary()['complete']
    assert entry['calls'] == 2
    assert entry['total_ms'] == pytest.approx(6.0)
    assert entry['avg_ms'] == pytest.approx(3.0)
    assert entry['entropy_delta'] == pytest.approx(2 * (1.0 - 0.618))

    profile.reset()
    assert profile.summary() == {}


def test_demo_run_succeeds(capsys):
    assert run(DATA_ROOT) == 0
    out = capsys.readouterr().out
    assert "Petition received: Petition from Human1: Please guide me." in out
    assert "DAYS UNTIL TERMINAL STATE" in out
    assert "[OK] World simulation completed successfully" in out


def test_demo_run_fails_without_data(tmp_path, capsys):
    assert run(tmp_path) == 1
    assert "[FAIL] DataLoadError" in capsys.readouterr().out
