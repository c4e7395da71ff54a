"""
Capacitor - Vent a charging capacitor inside five timing windows.

Charge climbs on every charge tick at a rate set by the battery count.
Venting is only safe while the charge sits inside the current window;
letting it hit the ceiling is a strike.

The ceiling boundary is a policy (see CapacitorPolicy): with REACH a tick
landing exactly on max_charge strikes, with EXCEED it just caps.
"""

from __future__ import annotations
from dataclasses import dataclass, field, replace

from ..config import CAPACITOR_POLICY, CapacitorPolicy, ModuleType
from ..engine_core.action import ActionType, ModuleAction, ValidationResult
from ..engine_core.globals import GameGlobals
from .base import PuzzleModule

BASE_CHARGE_RATE = 2.0
RATE_PER_BATTERY = 0.5
MAX_CHARGE = 100.0
NUM_WINDOWS = 5

WINDOW_FIRST_START = 20
WINDOW_SPACING = 12  # Last window still ends below MAX_CHARGE
WINDOW_JITTER = 5
WINDOW_DURATION = 20
SHORT_WINDOW_DURATION = 15


@dataclass(frozen=True)
class VentWindow:
    start: float
    end: float

    def contains(self, charge: float) -> bool:
        return self.start <= charge <= self.end


@dataclass
class CapacitorData:
    charge_rate: float
    vent_windows: list[VentWindow] = field(default_factory=list)
    charge_level: float = 0.0
    max_charge: float = MAX_CHARGE
    current_window: int = 0
    is_charging: bool = True
    vent_count: int = 0
    max_vents: int = NUM_WINDOWS
    overcharge_policy: CapacitorPolicy = CapacitorPolicy.REACH

    @property
    def active_window(self) -> VentWindow | None:
        if 0 <= self.current_window < len(self.vent_windows):
            return self.vent_windows[self.current_window]
        return None


def is_overcharged(state: CapacitorData) -> bool:
    """Whether the next charge tick breaks the ceiling under the policy."""
    raw = state.charge_level + state.charge_rate
    if state.overcharge_policy == CapacitorPolicy.EXCEED:
        return raw > state.max_charge
    return min(state.max_charge, raw) >= state.max_charge


class CapacitorModule(PuzzleModule):
    module_type = ModuleType.CAPACITOR

    def __init__(self, policy: CapacitorPolicy = CAPACITOR_POLICY):
        self.policy = policy

    def generate(self, seed: str, globals: GameGlobals) -> CapacitorData:
        rng = self.rng(seed)
        charge_rate = BASE_CHARGE_RATE + globals.batteries * RATE_PER_BATTERY

        short = globals.has_lit_indicator("CAR") or globals.has_lit_indicator("SND")
        duration = SHORT_WINDOW_DURATION if short else WINDOW_DURATION

        windows = []
        for i in range(NUM_WINDOWS):
            start = WINDOW_FIRST_START + i * WINDOW_SPACING + rng.next_int(-WINDOW_JITTER, WINDOW_JITTER)
            windows.append(VentWindow(start=start, end=start + duration))

        return CapacitorData(
            charge_rate=charge_rate,
            vent_windows=windows,
            overcharge_policy=self.policy,
        )

    def describe_solution(self, state: CapacitorData, globals: GameGlobals) -> dict:
        return {"vent_windows": [[w.start, w.end] for w in state.vent_windows]}

    def handlers(self):
        return {
            ActionType.CHARGE: self._charge,
            ActionType.VENT: self._vent,
            ActionType.ARM: self._arm,
        }

    def _charge(self, action: ModuleAction, state: CapacitorData, globals: GameGlobals) -> ValidationResult:
        if not state.is_charging:
            return ValidationResult.correct(state)

        if is_overcharged(state):
            return ValidationResult.mistake(replace(state, charge_level=0.0, is_charging=False))

        new_charge = min(state.max_charge, state.charge_level + state.charge_rate)
        return ValidationResult.correct(replace(state, charge_level=new_charge))

    def _vent(self, action: ModuleAction, state: CapacitorData, globals: GameGlobals) -> ValidationResult:
        window = state.active_window
        if window is None:
            return ValidationResult.invalid(state)

        charge = action.payload.charge
        if charge is None:
            charge = state.charge_level

        if not window.contains(charge):
            return ValidationResult.mistake(replace(state, charge_level=0.0))

        vent_count = state.vent_count + 1
        new_state = replace(
            state,
            charge_level=0.0,
            vent_count=vent_count,
            current_window=state.current_window + 1,
        )
        return ValidationResult.correct(new_state, solved=vent_count >= state.max_vents)

    def _arm(self, action: ModuleAction, state: CapacitorData, globals: GameGlobals) -> ValidationResult:
        """Restart charging after an overcharge."""
        if state.is_charging:
            return ValidationResult.invalid(state)
        return ValidationResult.correct(replace(state, is_charging=True))
