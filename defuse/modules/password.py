"""
Password - Spin letter columns until they spell the password, then submit.

Each column holds the target letter plus five distractors. Changing letters
is free; only a wrong submission strikes.
"""

from __future__ import annotations
from dataclasses import dataclass, field, replace
from string import ascii_uppercase
from typing import ClassVar

from ..config import ModuleType
from ..engine_core.action import ActionType, ModuleAction, ValidationResult
from ..engine_core.globals import GameGlobals
from .base import PuzzleModule

PASSWORD_WORDS = [
    "ABOUT", "AFTER", "AGAIN", "BELOW", "COULD", "EVERY", "FIRST", "FOUND",
    "GREAT", "GROUP", "HAND", "HELP", "HOUSE", "LARGE", "LAST", "LEFT",
    "LIFE", "LIGHT", "LIVED", "MADE", "MIGHT", "MOVE", "MUCH", "MUST",
    "NAME", "NEVER", "NEW", "NEWS", "NIGHT", "NUMBER", "OFTEN", "ORDER",
    "OTHER", "OWN", "PART", "PLACE", "POINT", "RIGHT", "SAID", "SAME",
    "SAW", "SEEMS", "SHALL", "SHE", "SHOULD", "SHOW", "SMALL", "SOUND",
    "STILL", "SUCH", "TAKE", "THAN", "THEM", "WELL", "WERE",
]

DISTRACTORS_PER_COLUMN = 5


@dataclass
class PasswordData:
    HIDDEN_FIELDS: ClassVar[tuple[str, ...]] = ("target_word",)

    target_word: str
    columns: list[list[str]] = field(default_factory=list)
    current_password: list[str] = field(default_factory=list)

    @property
    def current_word(self) -> str:
        return "".join(self.current_password)


class PasswordModule(PuzzleModule):
    module_type = ModuleType.PASSWORD

    def generate(self, seed: str, globals: GameGlobals) -> PasswordData:
        rng = self.rng(seed)
        target_word = rng.choice(PASSWORD_WORDS)

        columns = []
        for letter in target_word:
            pool = [c for c in ascii_uppercase if c != letter]
            distractors = rng.shuffle(pool)[:DISTRACTORS_PER_COLUMN]
            columns.append(rng.shuffle([letter] + distractors))

        return PasswordData(
            target_word=target_word,
            columns=columns,
            current_password=[column[0] for column in columns],
        )

    def handlers(self):
        return {
            ActionType.SET_LETTER: self._set_letter,
            ActionType.SUBMIT: self._submit,
        }

    def _set_letter(self, action: ModuleAction, state: PasswordData, globals: GameGlobals) -> ValidationResult:
        column = action.payload.column
        letter = action.payload.letter
        if column is None or not 0 <= column < len(state.columns):
            return ValidationResult.invalid(state)
        if letter not in state.columns[column]:
            return ValidationResult.invalid(state)

        new_password = list(state.current_password)
        new_password[column] = letter
        return ValidationResult.correct(replace(state, current_password=new_password))

    def _submit(self, action: ModuleAction, state: PasswordData, globals: GameGlobals) -> ValidationResult:
        return ValidationResult.judged(state, state.current_word == state.target_word)
