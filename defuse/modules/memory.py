"""
Memory - Five stages of "press the right button", with a memory.

Each stage shows a number (1-4) and four labelled buttons. The correct
button depends on the stage and the number, and may refer back to the
position or label pressed in earlier stages. A mistake starts over.
"""

from __future__ import annotations
from dataclasses import dataclass, field, replace

from ..config import ModuleType
from ..engine_core.action import ActionType, ModuleAction, ValidationResult
from ..engine_core.globals import GameGlobals
from .base import PuzzleModule

STAGES = 5
BUTTON_LABELS = [1, 2, 3, 4]


@dataclass(frozen=True)
class Press:
    position: int
    label: int


@dataclass
class MemoryData:
    displays: list[int] = field(default_factory=list)
    buttons: list[list[int]] = field(default_factory=list)  # stage -> labels by position
    stage: int = 0
    history: list[Press] = field(default_factory=list)

    @property
    def current_display(self) -> int:
        return self.displays[self.stage] if self.stage < len(self.displays) else 0

    @property
    def current_buttons(self) -> list[int]:
        return self.buttons[self.stage] if self.stage < len(self.buttons) else []


# Rule kinds: ("position", p) fixed position, ("label", l) button showing l,
# ("same_position", s) position pressed at stage s, ("same_label", s) label
# pressed at stage s. Stages are 0-based.
MEMORY_RULES: list[dict[int, tuple[str, int]]] = [
    {1: ("position", 1), 2: ("position", 1), 3: ("position", 2), 4: ("position", 3)},
    {1: ("label", 4), 2: ("same_position", 0), 3: ("position", 0), 4: ("same_position", 0)},
    {1: ("same_label", 1), 2: ("same_label", 0), 3: ("position", 2), 4: ("label", 4)},
    {1: ("same_position", 0), 2: ("position", 0), 3: ("same_position", 1), 4: ("same_position", 1)},
    {1: ("same_label", 0), 2: ("same_label", 1), 3: ("same_label", 3), 4: ("same_label", 2)},
]


def correct_position(stage: int, display: int, buttons: list[int], history: list[Press]) -> int:
    """Position (0-3) to press for this stage."""
    kind, value = MEMORY_RULES[stage][display]
    if kind == "position":
        return value
    if kind == "label":
        return buttons.index(value)
    if kind == "same_position":
        return history[value].position
    return buttons.index(history[value].label)


class MemoryModule(PuzzleModule):
    module_type = ModuleType.MEMORY

    def generate(self, seed: str, globals: GameGlobals) -> MemoryData:
        rng = self.rng(seed)
        displays = []
        buttons = []
        for _ in range(STAGES):
            displays.append(rng.next_int(1, 4))
            buttons.append(rng.shuffle(BUTTON_LABELS))
        return MemoryData(displays=displays, buttons=buttons)

    def handlers(self):
        return {ActionType.PRESS_POSITION: self._press}

    def describe_solution(self, state: MemoryData, globals: GameGlobals) -> dict:
        """Positions to press from stage 0, replaying the correct history."""
        history: list[Press] = []
        positions = []
        for stage in range(STAGES):
            buttons = state.buttons[stage]
            position = correct_position(stage, state.displays[stage], buttons, history)
            history.append(Press(position=position, label=buttons[position]))
            positions.append(position)
        return {"positions": positions}

    def _press(self, action: ModuleAction, state: MemoryData, globals: GameGlobals) -> ValidationResult:
        position = action.payload.position
        if position is None or not 0 <= position < len(BUTTON_LABELS) or state.stage >= STAGES:
            return ValidationResult.invalid(state)

        buttons = state.buttons[state.stage]
        expected = correct_position(state.stage, state.displays[state.stage], buttons, state.history)

        if position != expected:
            return ValidationResult.mistake(replace(state, stage=0, history=[]))

        history = state.history + [Press(position=position, label=buttons[position])]
        stage = state.stage + 1
        return ValidationResult.correct(
            replace(state, stage=stage, history=history),
            solved=stage >= STAGES,
        )
