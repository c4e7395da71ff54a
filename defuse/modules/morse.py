"""
Morse Code - Decode a blinking word and tune to its frequency.

The light blinks one word from a fixed dictionary; the player picks the
matching frequency from six on offer.
"""

from __future__ import annotations
from dataclasses import dataclass, field, replace
from typing import ClassVar

from ..config import ModuleType
from ..engine_core.action import ActionType, ModuleAction, ValidationResult
from ..engine_core.globals import GameGlobals
from .base import PuzzleModule

MORSE_WORDS = {
    "SHELL": "3.505",
    "HALLS": "3.515",
    "SLICK": "3.522",
    "TRICK": "3.532",
    "BOXES": "3.535",
    "LEAKS": "3.542",
    "STROBE": "3.545",
    "BISTRO": "3.552",
    "FLICK": "3.555",
    "BOMBS": "3.565",
    "BREAK": "3.572",
    "BRICK": "3.575",
    "STEAK": "3.582",
    "STING": "3.592",
    "VECTOR": "3.595",
    "BEATS": "3.600",
}

MORSE_CODE = {
    "A": ".-", "B": "-...", "C": "-.-.", "D": "-..", "E": ".", "F": "..-.",
    "G": "--.", "H": "....", "I": "..", "J": ".---", "K": "-.-", "L": ".-..",
    "M": "--", "N": "-.", "O": "---", "P": ".--.", "Q": "--.-", "R": ".-.",
    "S": "...", "T": "-", "U": "..-", "V": "...-", "W": ".--", "X": "-..-",
    "Y": "-.--", "Z": "--..",
}

NUM_DISTRACTORS = 5
FAST_PLAYBACK = 1.5


def encode_morse(word: str) -> str:
    """Letters separated by spaces, with a trailing word gap."""
    return " ".join(MORSE_CODE[c] for c in word) + " "


@dataclass
class MorseData:
    HIDDEN_FIELDS: ClassVar[tuple[str, ...]] = ("target_word", "correct_frequency")

    target_word: str
    morse_sequence: str
    correct_frequency: str
    frequencies: list[str] = field(default_factory=list)
    is_playing: bool = False
    playback_speed: float = 1.0


class MorseModule(PuzzleModule):
    module_type = ModuleType.MORSE

    def generate(self, seed: str, globals: GameGlobals) -> MorseData:
        rng = self.rng(seed)
        target_word = rng.choice(list(MORSE_WORDS))
        correct_frequency = MORSE_WORDS[target_word]

        others = [f for f in MORSE_WORDS.values() if f != correct_frequency]
        distractors = rng.shuffle(others)[:NUM_DISTRACTORS]
        frequencies = rng.shuffle([correct_frequency] + distractors)

        fast = globals.has_lit_indicator("FRK") and globals.batteries > 2

        return MorseData(
            target_word=target_word,
            morse_sequence=encode_morse(target_word),
            correct_frequency=correct_frequency,
            frequencies=frequencies,
            playback_speed=FAST_PLAYBACK if fast else 1.0,
        )

    def handlers(self):
        return {
            ActionType.SELECT_FREQUENCY: self._select,
            ActionType.PLAY: self._play,
            ActionType.STOP: self._stop,
        }

    def _select(self, action: ModuleAction, state: MorseData, globals: GameGlobals) -> ValidationResult:
        frequency = action.payload.frequency
        if frequency not in state.frequencies:
            return ValidationResult.invalid(state)
        return ValidationResult.judged(state, frequency == state.correct_frequency)

    def _play(self, action: ModuleAction, state: MorseData, globals: GameGlobals) -> ValidationResult:
        return ValidationResult.correct(replace(state, is_playing=True))

    def _stop(self, action: ModuleAction, state: MorseData, globals: GameGlobals) -> ValidationResult:
        return ValidationResult.correct(replace(state, is_playing=False))
