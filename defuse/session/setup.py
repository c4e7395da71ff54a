"""
Mission Setup - Creates the initial game state for a seed.

This module handles:
- Generating device globals from the seed
- Selecting module types for mode and difficulty
- Generating every module from its own sub-seed
- Mode rules (timer, strike limit)

(seed, mode, difficulty) fully determines the result.
"""

from __future__ import annotations

from ..config import MODE_RULES, Difficulty, GameMode, parse_difficulty, parse_mode
from ..engine_core.globals import generate_globals
from ..engine_core.rng import DeterministicRNG, generate_seed
from ..engine_core.state import GameState, GameStatus
from ..modules.registry import create_instances
from ..modules.selection import select_module_types

SELECTION_SUFFIX = "_modules"


def setup_mission(
    mode: GameMode | str = GameMode.QUICK,
    difficulty: Difficulty | str = Difficulty.NOVICE,
    seed: str | None = None,
) -> GameState:
    """
    Set up a new mission.

    Args:
        mode: quick or full
        difficulty: novice, pro or expert
        seed: Replay seed; a fresh one is generated when omitted

    Returns:
        Initial GameState in INTRO status
    """
    game_mode = parse_mode(mode)
    game_difficulty = parse_difficulty(difficulty)
    mission_seed = seed or generate_seed()
    rules = MODE_RULES[game_mode]

    globals = generate_globals(DeterministicRNG(mission_seed))
    module_types = select_module_types(
        DeterministicRNG(mission_seed + SELECTION_SUFFIX),
        game_mode,
        game_difficulty,
    )

    return GameState(
        seed=mission_seed,
        mode=game_mode,
        difficulty=game_difficulty,
        timer_seconds=rules.timer_seconds,
        max_strikes=rules.max_strikes,
        globals=globals,
        modules=create_instances(mission_seed, module_types, globals),
        status=GameStatus.INTRO,
    )
