"""
Tests for module selection.

Tests:
- Count per mode, no repeats
- Exactly one forced baseline, pool membership
- Determinism per seed
- Fallback when the pool is too small
"""

import pytest

from ..config import (
    BASELINE_TYPES,
    DIFFICULTY_RULES,
    MODE_RULES,
    Difficulty,
    DifficultyRules,
    GameMode,
    ModuleType,
)
from ..engine_core.rng import DeterministicRNG
from ..modules import selection
from ..modules.selection import select_module_types, weighted_pool


def test_weighted_pool_repeats_by_weight():
    pool = {ModuleType.WIRES: 2, ModuleType.MAZE: 1, ModuleType.MORSE: 0}
    assert weighted_pool(pool) == [ModuleType.WIRES, ModuleType.WIRES, ModuleType.MAZE]


@pytest.mark.parametrize("mode", list(GameMode))
@pytest.mark.parametrize("difficulty", list(Difficulty))
def test_selection_shape(mode, difficulty):
    pool = DIFFICULTY_RULES[difficulty].pool
    for i in range(25):
        types = select_module_types(DeterministicRNG(f"sel{i}"), mode, difficulty)

        assert len(types) == MODE_RULES[mode].module_count
        assert len(set(types)) == len(types)
        assert all(pool.get(t, 0) > 0 for t in types)
        assert types[0] in BASELINE_TYPES


def test_selection_deterministic():
    a = select_module_types(DeterministicRNG("ABC123_modules"), GameMode.FULL, Difficulty.EXPERT)
    b = select_module_types(DeterministicRNG("ABC123_modules"), GameMode.FULL, Difficulty.EXPERT)
    assert a == b


def test_novice_never_gets_expert_modules():
    for i in range(50):
        types = select_module_types(DeterministicRNG(f"nov{i}"), GameMode.FULL, Difficulty.NOVICE)
        assert ModuleType.CAPACITOR not in types
        assert ModuleType.SEQUENCE_WIRES not in types


def test_small_pool_returns_whole_pool(monkeypatch):
    small = {ModuleType.WIRES: 1, ModuleType.MAZE: 1}
    monkeypatch.setitem(
        selection.DIFFICULTY_RULES,
        Difficulty.NOVICE,
        DifficultyRules(time_penalty=0, pool=small),
    )
    types = select_module_types(DeterministicRNG("small"), GameMode.FULL, Difficulty.NOVICE)
    assert sorted(t.value for t in types) == ["maze", "wires"]


def test_attempt_cap_falls_back_to_pool_order(monkeypatch):
    monkeypatch.setattr(selection, "MAX_SELECTION_ATTEMPTS", 0)
    types = select_module_types(DeterministicRNG("cap"), GameMode.QUICK, Difficulty.NOVICE)

    eligible = list(DIFFICULTY_RULES[Difficulty.NOVICE].pool)
    assert len(types) == 3
    assert types[0] in BASELINE_TYPES
    assert types[1:] == [t for t in eligible if t != types[0]][:2]
