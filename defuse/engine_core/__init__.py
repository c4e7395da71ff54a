"""
Engine Core - Deterministic generation primitives and session transitions.

The engine core:
1. Provides the seeded RNG every generator draws from
2. Generates device globals
3. Holds GameState and module instances
4. Defines module actions and results
5. Applies transitions via the reducer
"""

from .rng import DeterministicRNG, generate_seed
from .globals import GameGlobals, Indicator, generate_globals
from .state import GameState, GameStatus, ModuleInstance, TERMINAL_STATUSES, module_view, to_plain
from .action import (
    ActionOutcome,
    ActionPayload,
    ActionType,
    Direction,
    ModuleAction,
    ValidationResult,
)
from . import reducer

__all__ = [
    "DeterministicRNG",
    "generate_seed",
    "GameGlobals",
    "Indicator",
    "generate_globals",
    "GameState",
    "GameStatus",
    "ModuleInstance",
    "TERMINAL_STATUSES",
    "module_view",
    "to_plain",
    "ActionOutcome",
    "ActionPayload",
    "ActionType",
    "Direction",
    "ModuleAction",
    "ValidationResult",
    "reducer",
]
