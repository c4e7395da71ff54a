"""
Sequence Wires - Four panels of three wires, each cut or left alone.

Whether a wire should be cut depends on its color, how many wires of that
color have appeared so far (including this one), and which terminal
(A/B/C) it runs to. Wires are decided in order.
"""

from __future__ import annotations
from dataclasses import dataclass, field, replace
from enum import Enum

from ..config import ModuleType
from ..engine_core.action import ActionType, ModuleAction, ValidationResult
from ..engine_core.globals import GameGlobals
from .base import PuzzleModule

SEQUENCE_COLORS = ["red", "blue", "black"]
DESTINATION_LABELS = {1: "A", 2: "B", 3: "C"}
STAGES = 4
WIRES_PER_STAGE = 3


class CutRule(Enum):
    """Terminals on which a wire must be cut."""
    A = frozenset({1})
    B = frozenset({2})
    C = frozenset({3})
    A_OR_C = frozenset({1, 3})
    B_OR_C = frozenset({2, 3})
    A_OR_B = frozenset({1, 2})
    NEVER = frozenset()


R = CutRule

# color -> rule for the 1st..9th occurrence
CUT_RULES: dict[str, list[CutRule]] = {
    "red": [R.C, R.B, R.A, R.A_OR_C, R.B, R.A_OR_C, R.NEVER, R.B, R.C],
    "blue": [R.B, R.A_OR_C, R.B, R.A, R.B, R.B_OR_C, R.C, R.A_OR_C, R.A],
    "black": [R.NEVER, R.A_OR_C, R.B, R.A_OR_C, R.B, R.B_OR_C, R.A_OR_B, R.C, R.C],
}


@dataclass(frozen=True)
class SequenceWire:
    color: str
    destination: int  # 1=A, 2=B, 3=C
    resolved: bool = False
    cut: bool = False

    @property
    def destination_label(self) -> str:
        return DESTINATION_LABELS[self.destination]


@dataclass
class SequenceWiresData:
    wires: list[SequenceWire] = field(default_factory=list)
    stage: int = 0
    max_stages: int = STAGES
    red_wires_cut: int = 0
    blue_wires_cut: int = 0
    black_wires_cut: int = 0

    @property
    def next_wire(self) -> int:
        """Index of the first undecided wire (len(wires) when done)."""
        for i, wire in enumerate(self.wires):
            if not wire.resolved:
                return i
        return len(self.wires)


def should_cut(wires: list[SequenceWire], index: int) -> bool:
    """Rule for the wire at index, given the wires before it."""
    wire = wires[index]
    occurrence = sum(1 for w in wires[: index + 1] if w.color == wire.color)
    rules = CUT_RULES[wire.color]
    # Past the 9th occurrence the wire is never cut
    rule = rules[occurrence - 1] if occurrence <= len(rules) else CutRule.NEVER
    return wire.destination in rule.value


class SequenceWiresModule(PuzzleModule):
    module_type = ModuleType.SEQUENCE_WIRES

    def generate(self, seed: str, globals: GameGlobals) -> SequenceWiresData:
        rng = self.rng(seed)
        wires = []
        for _ in range(STAGES * WIRES_PER_STAGE):
            color = rng.choice(SEQUENCE_COLORS)
            destination = rng.next_int(1, 3)
            wires.append(SequenceWire(color=color, destination=destination))
        return SequenceWiresData(wires=wires)

    def handlers(self):
        return {ActionType.DECIDE_WIRE: self._decide}

    def describe_solution(self, state: SequenceWiresData, globals: GameGlobals) -> dict:
        return {"cut": [should_cut(state.wires, i) for i in range(len(state.wires))]}

    def _decide(self, action: ModuleAction, state: SequenceWiresData, globals: GameGlobals) -> ValidationResult:
        index = action.payload.index
        cut = action.payload.cut
        if cut is None or index != state.next_wire or index >= len(state.wires):
            return ValidationResult.invalid(state)

        wire = state.wires[index]
        is_correct = cut == should_cut(state.wires, index)

        new_wires = list(state.wires)
        new_wires[index] = replace(wire, resolved=True, cut=cut)

        counters = {}
        if cut:
            attr = f"{wire.color}_wires_cut"
            counters[attr] = getattr(state, attr) + 1

        new_stage = (index + 1) // WIRES_PER_STAGE
        solved = new_stage >= state.max_stages
        new_state = replace(state, wires=new_wires, stage=new_stage, **counters)

        if is_correct:
            return ValidationResult.correct(new_state, solved=solved)
        return ValidationResult.mistake(new_state, solved=solved)
