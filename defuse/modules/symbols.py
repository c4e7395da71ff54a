"""
Symbols - Press four symbols in the order they appear in a column.

All four symbols come from one column of a fixed table. The correct order
is top-to-bottom within that column; the keypad shows them shuffled.
"""

from __future__ import annotations
from dataclasses import dataclass, field, replace
from typing import ClassVar

from ..config import ModuleType
from ..engine_core.action import ActionType, ModuleAction, ValidationResult
from ..engine_core.globals import GameGlobals
from .base import PuzzleModule

# Six columns of seven symbol ids, listed top to bottom
SYMBOL_COLUMNS = [
    [1, 2, 3, 4, 5, 6, 7],
    [8, 1, 7, 9, 10, 6, 11],
    [12, 13, 10, 2, 14, 3, 15],
    [16, 17, 12, 18, 8, 19, 15],
    [20, 16, 21, 14, 18, 11, 9],
    [6, 21, 17, 5, 20, 19, 13],
]

SYMBOL_GLYPHS = [
    "Ω", "Ѭ", "☆", "ټ", "ϕ", "∇", "※", "Ѯ", "Ϭ", "φ", "ʘ",
    "Җ", "ξ", "♦", "Ψ", "Ϩ", "Ѧ", "ƛ", "ϑ", "Ѣ", "₪",
]

SYMBOLS_PER_MODULE = 4


def symbol_glyph(symbol_id: int) -> str:
    """Display character for a symbol id (1-based)."""
    if 1 <= symbol_id <= len(SYMBOL_GLYPHS):
        return SYMBOL_GLYPHS[symbol_id - 1]
    return "?"


@dataclass
class SymbolsData:
    HIDDEN_FIELDS: ClassVar[tuple[str, ...]] = ("order",)

    symbols: list[int] = field(default_factory=list)  # Display order
    order: list[int] = field(default_factory=list)  # Correct press order
    pressed: list[int] = field(default_factory=list)


class SymbolsModule(PuzzleModule):
    module_type = ModuleType.SYMBOLS

    def generate(self, seed: str, globals: GameGlobals) -> SymbolsData:
        rng = self.rng(seed)
        column = SYMBOL_COLUMNS[rng.next_int(0, len(SYMBOL_COLUMNS) - 1)]

        rows = rng.shuffle(range(len(column)))[:SYMBOLS_PER_MODULE]
        symbols = [column[r] for r in rows]
        order = [column[r] for r in sorted(rows)]

        return SymbolsData(symbols=rng.shuffle(symbols), order=order)

    def handlers(self):
        return {ActionType.PRESS_SYMBOL: self._press}

    def _press(self, action: ModuleAction, state: SymbolsData, globals: GameGlobals) -> ValidationResult:
        symbol_id = action.payload.symbol_id
        if symbol_id not in state.symbols:
            return ValidationResult.invalid(state)

        expected = state.order[len(state.pressed)]
        if symbol_id != expected:
            # Wrong or repeated press: start over
            return ValidationResult.mistake(replace(state, pressed=[]))

        pressed = state.pressed + [symbol_id]
        return ValidationResult.correct(
            replace(state, pressed=pressed),
            solved=len(pressed) == len(state.order),
        )
