"""
Configuration - Mission rules and environment overrides.

Two layers:
1. Static rules per mode and difficulty (timer, module count, strikes, pools)
2. Environment overrides read once at import time

Environment:
    DEFUSE_ENV               development | production
    DEFUSE_TICK_INTERVAL     Seconds between timer ticks (default 1.0)
    DEFUSE_CAPACITOR_POLICY  reach | exceed (capacitor overcharge boundary)
    ALLOWED_ORIGINS          Comma-separated CORS origins for the API
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
import os


class GameMode(Enum):
    """Mission length."""
    QUICK = "quick"
    FULL = "full"


class Difficulty(Enum):
    """Mission difficulty."""
    NOVICE = "novice"
    PRO = "pro"
    EXPERT = "expert"


class ModuleType(Enum):
    """The eleven puzzle module variants."""
    WIRES = "wires"
    BUTTON = "button"
    SYMBOLS = "symbols"
    MAZE = "maze"
    MORSE = "morse"
    PASSWORD = "password"
    SEQUENCE_WIRES = "sequenceWires"
    CAPACITOR = "capacitor"
    MEMORY = "memory"
    SIMON = "simon"
    WORD_PANEL = "wordPanel"


class CapacitorPolicy(Enum):
    """What happens when a charge tick lands exactly on the ceiling."""
    REACH = "reach"  # Reaching max charge strikes
    EXCEED = "exceed"  # Only going past max strikes; reaching it caps


# Environment configuration
DEFUSE_ENV = os.getenv("DEFUSE_ENV", "development")
TICK_INTERVAL = float(os.getenv("DEFUSE_TICK_INTERVAL", "1.0"))
CAPACITOR_POLICY = CapacitorPolicy(os.getenv("DEFUSE_CAPACITOR_POLICY", "reach"))
ALLOWED_ORIGINS = os.getenv("ALLOWED_ORIGINS", "*").split(",")


@dataclass(frozen=True)
class ModeRules:
    """Per-mode session parameters."""
    timer_seconds: int
    module_count: int
    max_strikes: int


@dataclass(frozen=True)
class DifficultyRules:
    """Per-difficulty parameters."""
    time_penalty: int  # Seconds removed per strike
    pool: dict[ModuleType, int] = field(default_factory=dict)  # type -> weight


MODE_RULES: dict[GameMode, ModeRules] = {
    GameMode.QUICK: ModeRules(timer_seconds=5 * 60, module_count=3, max_strikes=2),
    GameMode.FULL: ModeRules(timer_seconds=10 * 60, module_count=5, max_strikes=3),
}

DIFFICULTY_RULES: dict[Difficulty, DifficultyRules] = {
    Difficulty.NOVICE: DifficultyRules(
        time_penalty=0,
        pool={
            ModuleType.WIRES: 3,
            ModuleType.BUTTON: 3,
            ModuleType.SYMBOLS: 3,
            ModuleType.MAZE: 2,
            ModuleType.PASSWORD: 2,
            ModuleType.WORD_PANEL: 2,
            ModuleType.MORSE: 1,
        },
    ),
    Difficulty.PRO: DifficultyRules(
        time_penalty=10,
        pool={
            ModuleType.WIRES: 2,
            ModuleType.BUTTON: 2,
            ModuleType.SYMBOLS: 2,
            ModuleType.MAZE: 2,
            ModuleType.MORSE: 2,
            ModuleType.PASSWORD: 2,
            ModuleType.WORD_PANEL: 2,
            ModuleType.MEMORY: 2,
            ModuleType.SIMON: 2,
            ModuleType.SEQUENCE_WIRES: 1,
        },
    ),
    Difficulty.EXPERT: DifficultyRules(
        time_penalty=10,
        pool={
            ModuleType.WIRES: 1,
            ModuleType.BUTTON: 1,
            ModuleType.SYMBOLS: 1,
            ModuleType.MAZE: 2,
            ModuleType.MORSE: 2,
            ModuleType.PASSWORD: 2,
            ModuleType.WORD_PANEL: 2,
            ModuleType.MEMORY: 3,
            ModuleType.SIMON: 3,
            ModuleType.SEQUENCE_WIRES: 3,
            ModuleType.CAPACITOR: 3,
        },
    ),
}

# At least one of these is always on the device
BASELINE_TYPES: tuple[ModuleType, ...] = (
    ModuleType.WIRES,
    ModuleType.BUTTON,
    ModuleType.SYMBOLS,
)

# Cap on weighted draws before falling back to pool order
MAX_SELECTION_ATTEMPTS = 200


def parse_mode(value: str | GameMode) -> GameMode:
    """Parse a mode string ("quick"/"full")."""
    if isinstance(value, GameMode):
        return value
    try:
        return GameMode(value.lower())
    except ValueError:
        raise ValueError(f"Unknown game mode: {value!r}") from None


def parse_difficulty(value: str | Difficulty) -> Difficulty:
    """Parse a difficulty string ("novice"/"pro"/"expert")."""
    if isinstance(value, Difficulty):
        return value
    try:
        return Difficulty(value.lower())
    except ValueError:
        raise ValueError(f"Unknown difficulty: {value!r}") from None
