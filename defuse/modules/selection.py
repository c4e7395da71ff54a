"""
Module Selection - Which module types go on the device.

Mode fixes how many modules; difficulty fixes which types are eligible and
how likely each is. One baseline type (wires/button/symbols) is always
placed first, then weighted draws fill the rest without repeats.
"""

from __future__ import annotations
import logging

from ..config import (
    BASELINE_TYPES,
    DIFFICULTY_RULES,
    MAX_SELECTION_ATTEMPTS,
    MODE_RULES,
    Difficulty,
    GameMode,
    ModuleType,
)
from ..engine_core.rng import DeterministicRNG

logger = logging.getLogger(__name__)


def weighted_pool(pool: dict[ModuleType, int]) -> list[ModuleType]:
    """Each eligible type repeated by its weight, in pool order."""
    candidates: list[ModuleType] = []
    for module_type, weight in pool.items():
        candidates.extend([module_type] * weight)
    return candidates


def select_module_types(
    rng: DeterministicRNG,
    mode: GameMode,
    difficulty: Difficulty,
) -> list[ModuleType]:
    """
    Pick a non-repeating, ordered list of module types.

    Draws are capped at MAX_SELECTION_ATTEMPTS; if the cap is hit the
    remaining eligible types are taken in pool order. A pool smaller
    than the module count yields every eligible type.
    """
    count = MODE_RULES[mode].module_count
    pool = DIFFICULTY_RULES[difficulty].pool
    eligible = [t for t, weight in pool.items() if weight > 0]

    if len(eligible) < count:
        logger.warning(
            "Pool for %s has %d types, %s needs %d",
            difficulty.value, len(eligible), mode.value, count,
        )
        count = len(eligible)

    selected: list[ModuleType] = []

    baselines = [t for t in BASELINE_TYPES if t in eligible]
    if baselines and count > 0:
        selected.append(rng.choice(baselines))

    candidates = weighted_pool(pool)
    attempts = 0
    while len(selected) < count and attempts < MAX_SELECTION_ATTEMPTS:
        attempts += 1
        module_type = rng.choice(candidates)
        if module_type not in selected:
            selected.append(module_type)

    if len(selected) < count:
        logger.warning("Selection hit %d attempts; filling in pool order", attempts)
        for module_type in eligible:
            if len(selected) >= count:
                break
            if module_type not in selected:
                selected.append(module_type)

    return selected
