"""
Color Sequence - Repeat a growing color sequence through a remapping.

Colors: 0=red, 1=yellow, 2=green, 3=blue. The button the player presses is
remapped before comparison; the mapping depends on the serial vowel and on
whether this module has already struck. After the first strike the module
switches to the post-strike mapping for good.
"""

from __future__ import annotations
from dataclasses import dataclass, field, replace
from typing import ClassVar

from ..config import ModuleType
from ..engine_core.action import ActionType, ModuleAction, ValidationResult
from ..engine_core.globals import GameGlobals
from .base import PuzzleModule

SIMON_COLORS = ["red", "yellow", "green", "blue"]
SEQUENCE_LENGTH = 5

# (has_vowel, struck) -> pressed color index -> compared color
COLOR_MAPPINGS: dict[tuple[bool, bool], list[int]] = {
    (True, False): [0, 1, 3, 2],
    (True, True): [1, 3, 2, 0],
    (False, False): [1, 0, 2, 3],
    (False, True): [3, 2, 0, 1],
}


@dataclass
class SimonData:
    HIDDEN_FIELDS: ClassVar[tuple[str, ...]] = ("color_mapping",)

    sequence: list[int] = field(default_factory=list)
    has_vowel: bool = False
    color_mapping: list[int] = field(default_factory=list)
    player_input: list[int] = field(default_factory=list)
    stage: int = 0
    max_stages: int = SEQUENCE_LENGTH
    strikes: int = 0

    @property
    def visible_sequence(self) -> list[int]:
        """Flashes shown for the current stage."""
        return self.sequence[: self.stage + 1]


class SimonModule(PuzzleModule):
    module_type = ModuleType.SIMON

    def generate(self, seed: str, globals: GameGlobals) -> SimonData:
        rng = self.rng(seed)
        sequence = [rng.next_int(0, len(SIMON_COLORS) - 1) for _ in range(SEQUENCE_LENGTH)]
        return SimonData(
            sequence=sequence,
            has_vowel=globals.has_vowel,
            color_mapping=list(COLOR_MAPPINGS[(globals.has_vowel, False)]),
        )

    def handlers(self):
        return {ActionType.PRESS_COLOR: self._press}

    def _press(self, action: ModuleAction, state: SimonData, globals: GameGlobals) -> ValidationResult:
        color = action.payload.color
        if color is None or not 0 <= color < len(SIMON_COLORS) or state.stage >= state.max_stages:
            return ValidationResult.invalid(state)

        mapped = state.color_mapping[color]
        expected = state.sequence[len(state.player_input)]

        if mapped != expected:
            return ValidationResult.mistake(replace(
                state,
                player_input=[],
                strikes=state.strikes + 1,
                color_mapping=list(COLOR_MAPPINGS[(state.has_vowel, True)]),
            ))

        player_input = state.player_input + [mapped]
        if len(player_input) < state.stage + 1:
            return ValidationResult.correct(replace(state, player_input=player_input))

        stage = state.stage + 1
        solved = stage >= state.max_stages
        return ValidationResult.correct(
            replace(state, stage=stage, player_input=player_input if solved else []),
            solved=solved,
        )
