"""
Action System - Module actions, payloads, and results.

Actions represent player input forwarded by the UI:
1. Wire cuts, button presses/holds/releases, symbol presses
2. Maze moves, frequency selection, password letters
3. Capacitor charge ticks and vents, memory/simon/word presses

Results come in two layers:
- ValidationResult: what a module validator decided
- ActionOutcome: what the session did with it (strike, solve, status)

Gameplay outcomes are never exceptions.
"""

from __future__ import annotations
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any

from ..config import ModuleType


class ActionType(Enum):
    """Types of module actions."""
    # Wires / sequence wires
    CUT_WIRE = "cut_wire"
    DECIDE_WIRE = "decide_wire"  # Sequence wires: cut or leave

    # Button
    PRESS = "press"
    HOLD = "hold"
    RELEASE = "release"  # Needs timer_seconds

    # Symbols
    PRESS_SYMBOL = "press_symbol"

    # Maze
    MOVE = "move"

    # Morse
    SELECT_FREQUENCY = "select_frequency"
    PLAY = "play"
    STOP = "stop"

    # Password
    SET_LETTER = "set_letter"
    SUBMIT = "submit"

    # Capacitor
    CHARGE = "charge"
    VENT = "vent"
    ARM = "arm"

    # Memory / simon / word panel
    PRESS_POSITION = "press_position"
    PRESS_COLOR = "press_color"
    PRESS_WORD = "press_word"


# Actions whose validation depends on the countdown value
TIMER_DEPENDENT_ACTIONS = frozenset({ActionType.RELEASE})


class Direction(Enum):
    """Maze movement directions."""
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"


@dataclass(frozen=True)
class ActionPayload:
    """
    Payload for a module action.

    Different action types use different fields.
    This is a generic container; validation happens in the module.
    """
    index: int | None = None  # Wire or button index
    symbol_id: int | None = None
    direction: Direction | None = None
    frequency: str | None = None
    column: int | None = None
    letter: str | None = None
    cut: bool | None = None
    charge: float | None = None
    position: int | None = None
    color: int | None = None

    # Injected by the session for timer-dependent actions
    timer_seconds: int | None = None


@dataclass(frozen=True)
class ModuleAction:
    """A single player action aimed at one module."""
    action_type: ActionType
    payload: ActionPayload = field(default_factory=ActionPayload)

    @property
    def needs_timer(self) -> bool:
        return (
            self.action_type in TIMER_DEPENDENT_ACTIONS
            and self.payload.timer_seconds is None
        )

    def with_timer(self, timer_seconds: int) -> ModuleAction:
        """Return a copy carrying the current countdown value."""
        return replace(self, payload=replace(self.payload, timer_seconds=timer_seconds))

    @classmethod
    def cut_wire(cls, index: int) -> ModuleAction:
        return cls(ActionType.CUT_WIRE, ActionPayload(index=index))

    @classmethod
    def decide_wire(cls, index: int, cut: bool) -> ModuleAction:
        return cls(ActionType.DECIDE_WIRE, ActionPayload(index=index, cut=cut))

    @classmethod
    def press(cls) -> ModuleAction:
        return cls(ActionType.PRESS)

    @classmethod
    def hold(cls) -> ModuleAction:
        return cls(ActionType.HOLD)

    @classmethod
    def release(cls, timer_seconds: int | None = None) -> ModuleAction:
        return cls(ActionType.RELEASE, ActionPayload(timer_seconds=timer_seconds))

    @classmethod
    def press_symbol(cls, symbol_id: int) -> ModuleAction:
        return cls(ActionType.PRESS_SYMBOL, ActionPayload(symbol_id=symbol_id))

    @classmethod
    def move(cls, direction: Direction | str) -> ModuleAction:
        return cls(ActionType.MOVE, ActionPayload(direction=Direction(direction)))

    @classmethod
    def select_frequency(cls, frequency: str) -> ModuleAction:
        return cls(ActionType.SELECT_FREQUENCY, ActionPayload(frequency=frequency))

    @classmethod
    def play(cls) -> ModuleAction:
        return cls(ActionType.PLAY)

    @classmethod
    def stop(cls) -> ModuleAction:
        return cls(ActionType.STOP)

    @classmethod
    def set_letter(cls, column: int, letter: str) -> ModuleAction:
        return cls(ActionType.SET_LETTER, ActionPayload(column=column, letter=letter))

    @classmethod
    def submit(cls) -> ModuleAction:
        return cls(ActionType.SUBMIT)

    @classmethod
    def charge_tick(cls) -> ModuleAction:
        return cls(ActionType.CHARGE)

    @classmethod
    def vent(cls, charge: float | None = None) -> ModuleAction:
        return cls(ActionType.VENT, ActionPayload(charge=charge))

    @classmethod
    def arm(cls) -> ModuleAction:
        return cls(ActionType.ARM)

    @classmethod
    def press_position(cls, position: int) -> ModuleAction:
        return cls(ActionType.PRESS_POSITION, ActionPayload(position=position))

    @classmethod
    def press_color(cls, color: int) -> ModuleAction:
        return cls(ActionType.PRESS_COLOR, ActionPayload(color=color))

    @classmethod
    def press_word(cls, index: int) -> ModuleAction:
        return cls(ActionType.PRESS_WORD, ActionPayload(index=index))


@dataclass
class ValidationResult:
    """
    Result of validating one action against one module.

    - valid: the action was well-formed for the current module state
    - strike: the action was a rule mismatch
    - solved: the module is now fully solved
    - new_state: the next module data (unchanged when invalid)
    """
    valid: bool
    new_state: Any
    strike: bool = False
    solved: bool = False

    @classmethod
    def invalid(cls, state: Any, strike: bool = False) -> ValidationResult:
        """Rejected input; state is returned unchanged."""
        return cls(valid=False, new_state=state, strike=strike)

    @classmethod
    def correct(cls, state: Any, solved: bool = False) -> ValidationResult:
        return cls(valid=True, new_state=state, solved=solved)

    @classmethod
    def mistake(cls, state: Any, solved: bool = False) -> ValidationResult:
        return cls(valid=True, new_state=state, strike=True, solved=solved)

    @classmethod
    def judged(cls, state: Any, is_correct: bool) -> ValidationResult:
        """Single-answer modules: correct solves, anything else strikes."""
        return cls(valid=True, new_state=state, strike=not is_correct, solved=is_correct)


@dataclass
class ActionOutcome:
    """
    Result of submitting an action to the session.

    accepted is False when the session ignored the action before it
    reached any module (not active, unknown module).
    """
    accepted: bool
    status: Any  # GameStatus
    module_id: str | None = None
    module_type: ModuleType | None = None
    valid: bool = False
    strike: bool = False
    solved: bool = False
    reason: str | None = None

    @classmethod
    def ignored(cls, status: Any, reason: str, module_id: str | None = None) -> ActionOutcome:
        return cls(accepted=False, status=status, module_id=module_id, reason=reason)

    @classmethod
    def transition(cls, before: Any, after: Any, reason: str | None = None) -> ActionOutcome:
        """Outcome of a session-level transition (start, tick, strike)."""
        return cls(
            accepted=after is not before,
            status=after.status,
            valid=after is not before,
            strike=after.strikes > before.strikes,
            reason=reason if after is before else None,
        )
