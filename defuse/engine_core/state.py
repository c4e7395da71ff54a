"""
Game State - Session state container for one mission.

Design principles:
- Immutable-friendly: transitions in the reducer return new state
- Serializable: snapshot() gives plain data for rendering and replays
- Reproducible: everything generated derives from (seed, mode, difficulty)
"""

from __future__ import annotations
from dataclasses import dataclass, field, fields, is_dataclass, replace
from enum import Enum
from typing import Any

from ..config import Difficulty, GameMode, ModuleType
from .globals import GameGlobals


class GameStatus(Enum):
    """Session lifecycle states."""
    INTRO = "intro"  # Generated, countdown not started
    ACTIVE = "active"  # Timer running, actions accepted
    WON = "won"  # Terminal
    EXPLODED = "exploded"  # Terminal


TERMINAL_STATUSES = frozenset({GameStatus.WON, GameStatus.EXPLODED})


@dataclass
class ModuleInstance:
    """
    One puzzle module on the device.

    Note: data is the module-type specific dataclass holding both the
    visible puzzle and its hidden solution.
    """
    id: str  # "<type>_<ordinal>", unique within the session
    type: ModuleType
    data: Any
    solved: bool = False

    def with_data(self, data: Any, solved: bool) -> ModuleInstance:
        """Return new instance; solved never reverts to False."""
        return replace(self, data=data, solved=self.solved or solved)


@dataclass(frozen=True)
class GameState:
    """
    Complete session state at a point in time.

    All transitions go through the reducer.
    """
    seed: str
    mode: GameMode
    difficulty: Difficulty
    timer_seconds: int
    max_strikes: int
    globals: GameGlobals
    strikes: int = 0
    modules: list[ModuleInstance] = field(default_factory=list)
    status: GameStatus = GameStatus.INTRO

    # Wall-clock markers, set once
    start_time: float | None = None
    end_time: float | None = None

    @property
    def is_active(self) -> bool:
        return self.status == GameStatus.ACTIVE

    @property
    def is_terminal(self) -> bool:
        return self.status in TERMINAL_STATUSES

    @property
    def all_solved(self) -> bool:
        return bool(self.modules) and all(m.solved for m in self.modules)

    @property
    def module_types(self) -> list[ModuleType]:
        return [m.type for m in self.modules]

    def get_module(self, module_id: str) -> ModuleInstance | None:
        """Get module by ID."""
        for m in self.modules:
            if m.id == module_id:
                return m
        return None

    def with_module(self, module: ModuleInstance) -> GameState:
        """Return new state with updated module."""
        new_modules = [module if m.id == module.id else m for m in self.modules]
        return self._copy_with(modules=new_modules)

    def _copy_with(self, **kwargs) -> GameState:
        """Create a copy with some fields replaced."""
        return replace(self, **kwargs)

    def snapshot(self, include_solutions: bool = False) -> dict[str, Any]:
        """Plain-data view of the session for renderers."""
        return {
            "seed": self.seed,
            "mode": self.mode.value,
            "difficulty": self.difficulty.value,
            "timer_seconds": self.timer_seconds,
            "strikes": self.strikes,
            "max_strikes": self.max_strikes,
            "status": self.status.value,
            "start_time": self.start_time,
            "end_time": self.end_time,
            "globals": to_plain(self.globals),
            "modules": [
                {
                    "id": m.id,
                    "type": m.type.value,
                    "solved": m.solved,
                    "data": module_view(m.data, include_solutions=include_solutions),
                }
                for m in self.modules
            ],
        }


def to_plain(value: Any) -> Any:
    """Recursively convert dataclasses, enums, and tuples to plain data."""
    if is_dataclass(value) and not isinstance(value, type):
        return {f.name: to_plain(getattr(value, f.name)) for f in fields(value)}
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, (list, tuple)):
        return [to_plain(v) for v in value]
    if isinstance(value, dict):
        return {str(k): to_plain(v) for k, v in value.items()}
    return value


def module_view(data: Any, include_solutions: bool = False) -> dict[str, Any]:
    """
    Plain-data view of module data.

    Fields listed in the data class's HIDDEN_FIELDS are the solution and
    are dropped unless include_solutions is set.
    """
    plain = to_plain(data)
    if include_solutions:
        return plain
    hidden = getattr(type(data), "HIDDEN_FIELDS", ())
    return {k: v for k, v in plain.items() if k not in hidden}
