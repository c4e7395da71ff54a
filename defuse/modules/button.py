"""
Button - Tap it, or hold it and release on the right timer digit.

Hold-vs-tap rules are checked in priority order; the first match wins.
When holding, a colored strip lights up and names the last timer digit
at which to release.
"""

from __future__ import annotations
from dataclasses import dataclass, replace
from typing import ClassVar

from ..config import ModuleType
from ..engine_core.action import ActionType, ModuleAction, ValidationResult
from ..engine_core.globals import GameGlobals
from .base import PuzzleModule

BUTTON_COLORS = ["red", "blue", "yellow", "white"]
BUTTON_LABELS = ["PRESS", "ABORT", "HOLD", "DETONATE"]

RELEASE_DIGITS = {
    "blue": 4,
    "yellow": 5,
    "red": 1,
    "white": 0,
}


@dataclass
class ButtonData:
    HIDDEN_FIELDS: ClassVar[tuple[str, ...]] = ("should_hold", "strip_color", "release_digit")

    color: str
    label: str
    should_hold: bool
    held: bool = False
    strip_color: str | None = None
    release_digit: int | None = None
    lit_strip: str | None = None  # strip_color while held, else None


def determine_should_hold(color: str, label: str, globals: GameGlobals) -> bool:
    if color == "blue" and label == "ABORT":
        return True
    if globals.batteries > 1 and label == "DETONATE":
        return False
    if color == "white" and globals.has_lit_indicator("CAR"):
        return True
    if globals.batteries > 2 and globals.has_lit_indicator("FRK"):
        return False
    if color == "yellow":
        return True
    if color == "red" and label == "HOLD":
        return False
    return True


class ButtonModule(PuzzleModule):
    module_type = ModuleType.BUTTON

    def generate(self, seed: str, globals: GameGlobals) -> ButtonData:
        rng = self.rng(seed)
        color = rng.choice(BUTTON_COLORS)
        label = rng.choice(BUTTON_LABELS)
        should_hold = determine_should_hold(color, label, globals)

        strip_color = rng.choice(BUTTON_COLORS) if should_hold else None
        return ButtonData(
            color=color,
            label=label,
            should_hold=should_hold,
            strip_color=strip_color,
            release_digit=RELEASE_DIGITS[strip_color] if strip_color else None,
        )

    def handlers(self):
        return {
            ActionType.PRESS: self._press,
            ActionType.HOLD: self._hold,
            ActionType.RELEASE: self._release,
        }

    def unhandled(self, action, state, globals):
        # Any interaction the rules did not ask for is a mistake
        return ValidationResult.mistake(state)

    def _press(self, action: ModuleAction, state: ButtonData, globals: GameGlobals) -> ValidationResult:
        if state.should_hold or state.held:
            return ValidationResult.mistake(state)
        return ValidationResult.correct(state, solved=True)

    def _hold(self, action: ModuleAction, state: ButtonData, globals: GameGlobals) -> ValidationResult:
        if not state.should_hold or state.held:
            return ValidationResult.mistake(state)
        return ValidationResult.correct(replace(state, held=True, lit_strip=state.strip_color))

    def _release(self, action: ModuleAction, state: ButtonData, globals: GameGlobals) -> ValidationResult:
        timer_seconds = action.payload.timer_seconds
        if not state.held or state.release_digit is None or timer_seconds is None:
            return ValidationResult.mistake(state)

        released = replace(state, held=False, lit_strip=None)
        return ValidationResult.judged(released, timer_seconds % 10 == state.release_digit)
