"""
Word Panel - Pick the right button for the displayed word.

The display word's position in its category picks a rule; each rule looks
at a different device fact to decide which of the six buttons is correct.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Callable, ClassVar

from ..config import ModuleType
from ..engine_core.action import ActionType, ModuleAction, ValidationResult
from ..engine_core.globals import GameGlobals
from .base import PuzzleModule

WORD_CATEGORIES: dict[str, dict[str, list[str]]] = {
    "COLORS": {
        "display": ["RED", "BLUE", "GREEN", "YELLOW", "ORANGE", "PURPLE"],
        "options": ["CRIMSON", "AZURE", "EMERALD", "GOLDEN", "AMBER", "VIOLET", "SCARLET", "NAVY"],
    },
    "ANIMALS": {
        "display": ["CAT", "DOG", "BIRD", "FISH", "HORSE", "BEAR"],
        "options": ["FELINE", "CANINE", "AVIAN", "AQUATIC", "EQUINE", "URSINE", "LUPINE", "BOVINE"],
    },
    "ACTIONS": {
        "display": ["RUN", "JUMP", "WALK", "SWIM", "FLY", "CLIMB"],
        "options": ["SPRINT", "LEAP", "STRIDE", "DIVE", "SOAR", "ASCEND", "DASH", "GLIDE"],
    },
    "OBJECTS": {
        "display": ["BOOK", "CHAIR", "TABLE", "LAMP", "DOOR", "WINDOW"],
        "options": ["TOME", "SEAT", "DESK", "LIGHT", "PORTAL", "PANE", "VOLUME", "BENCH"],
    },
}

NUM_BUTTONS = 6

# 1-based display index -> 1-based button position
POSITION_RULES: dict[int, Callable[[GameGlobals], int]] = {
    1: lambda g: 2 if g.batteries > 2 else 1,
    2: lambda g: 4 if g.any_lit_indicator else 2,
    3: lambda g: 3 if len(g.ports) > 1 else 5,
    4: lambda g: 1 if g.last_digit_odd else 4,
    5: lambda g: 2 if g.has_vowel else 6,
    6: lambda g: 3 if g.batteries == 0 else 6,
}


@dataclass
class WordPanelData:
    HIDDEN_FIELDS: ClassVar[tuple[str, ...]] = ("correct_button",)

    category: str
    display_word: str
    button_words: list[str] = field(default_factory=list)
    correct_button: int = 0


class WordPanelModule(PuzzleModule):
    module_type = ModuleType.WORD_PANEL

    def generate(self, seed: str, globals: GameGlobals) -> WordPanelData:
        rng = self.rng(seed)
        category = rng.choice(list(WORD_CATEGORIES))
        words = WORD_CATEGORIES[category]

        display_word = rng.choice(words["display"])
        display_index = words["display"].index(display_word)

        answer = words["options"][display_index]
        distractors = rng.shuffle([w for w in words["options"] if w != answer])[: NUM_BUTTONS - 1]
        button_words = rng.shuffle([answer] + distractors)

        rule_position = POSITION_RULES[display_index + 1](globals)
        return WordPanelData(
            category=category,
            display_word=display_word,
            button_words=button_words,
            correct_button=(rule_position - 1) % len(button_words),
        )

    def handlers(self):
        return {ActionType.PRESS_WORD: self._press}

    def _press(self, action: ModuleAction, state: WordPanelData, globals: GameGlobals) -> ValidationResult:
        index = action.payload.index
        if index is None or not 0 <= index < len(state.button_words):
            return ValidationResult.invalid(state)
        return ValidationResult.judged(state, index == state.correct_button)
