"""
Wires - Cut exactly one wire out of three to six.

The correct wire follows a fixed decision table per wire count,
keyed on color presence/counts and whether the serial's last digit is odd.
"""

from __future__ import annotations
from dataclasses import dataclass, field, replace
from typing import ClassVar

from ..config import ModuleType
from ..engine_core.action import ActionType, ModuleAction, ValidationResult
from ..engine_core.globals import GameGlobals
from .base import PuzzleModule

WIRE_COLORS = ["red", "blue", "yellow", "white", "black", "green"]
MIN_WIRES = 3
MAX_WIRES = 6


@dataclass(frozen=True)
class Wire:
    color: str
    cut: bool = False


@dataclass
class WiresData:
    HIDDEN_FIELDS: ClassVar[tuple[str, ...]] = ("correct_wire",)

    wires: list[Wire] = field(default_factory=list)
    correct_wire: int = 0


def _last_index(colors: list[str], color: str) -> int:
    return len(colors) - 1 - colors[::-1].index(color)


def determine_correct_wire(colors: list[str], globals: GameGlobals) -> int:
    """Index of the wire to cut."""
    count = len(colors)
    last = count - 1

    if count == 3:
        if colors[-1] == "white":
            return last
        if "red" not in colors:
            return 1
        if colors.count("blue") > 1:
            return _last_index(colors, "blue")
        return last

    if count == 4:
        if colors.count("red") > 1 and globals.last_digit_odd:
            return _last_index(colors, "red")
        if colors[-1] == "yellow" and "red" not in colors:
            return 0
        if colors.count("blue") == 1:
            return 0
        if colors.count("yellow") > 1:
            return last
        return 1

    if count == 5:
        if colors[-1] == "black" and globals.last_digit_odd:
            return 3
        if colors.count("red") == 1 and colors.count("yellow") > 1:
            return 0
        if "black" not in colors:
            return 1
        return 0

    if count == 6:
        if "yellow" not in colors and globals.last_digit_odd:
            return 2
        if colors.count("yellow") == 1 and colors.count("white") > 1:
            return 3
        if "red" not in colors:
            return last
        return 3

    return 0


class WiresModule(PuzzleModule):
    module_type = ModuleType.WIRES

    def generate(self, seed: str, globals: GameGlobals) -> WiresData:
        rng = self.rng(seed)
        num_wires = rng.next_int(MIN_WIRES, MAX_WIRES)
        wires = [Wire(color=rng.choice(WIRE_COLORS)) for _ in range(num_wires)]
        return WiresData(
            wires=wires,
            correct_wire=determine_correct_wire([w.color for w in wires], globals),
        )

    def handlers(self):
        return {ActionType.CUT_WIRE: self._cut}

    def _cut(self, action: ModuleAction, state: WiresData, globals: GameGlobals) -> ValidationResult:
        index = action.payload.index
        if index is None or not 0 <= index < len(state.wires) or state.wires[index].cut:
            return ValidationResult.invalid(state)

        new_wires = list(state.wires)
        new_wires[index] = replace(new_wires[index], cut=True)
        new_state = replace(state, wires=new_wires)

        return ValidationResult.judged(new_state, index == state.correct_wire)
