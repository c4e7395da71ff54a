"""
Pytest fixtures for Defuse tests.
"""

import pytest

from ..config import MODE_RULES, Difficulty, GameMode, ModuleType
from ..engine_core.globals import GameGlobals, Indicator
from ..engine_core.state import GameState, GameStatus, ModuleInstance
from ..modules.wires import Wire, WiresData
from ..session import MissionSession


@pytest.fixture
def make_globals():
    """Factory for hand-built device globals."""
    def _make(serial="BCD120", batteries=0, lit=(), unlit=(), ports=()):
        indicators = tuple(Indicator(label, True) for label in lit) + tuple(
            Indicator(label, False) for label in unlit
        )
        return GameGlobals.from_serial(
            serial, batteries=batteries, indicators=indicators, ports=tuple(ports)
        )
    return _make


@pytest.fixture
def plain_globals(make_globals) -> GameGlobals:
    """No vowel, even last digit, no batteries, indicators or ports."""
    return make_globals()


@pytest.fixture
def wires_instance() -> ModuleInstance:
    """The [blue, blue, white] module: cut the last wire."""
    return ModuleInstance(
        id="wires_0",
        type=ModuleType.WIRES,
        data=WiresData(
            wires=[Wire("blue"), Wire("blue"), Wire("white")],
            correct_wire=2,
        ),
    )


@pytest.fixture
def make_state(plain_globals):
    """Factory for an ACTIVE state around the given module instances."""
    def _make(modules, mode=GameMode.QUICK, difficulty=Difficulty.NOVICE, **overrides):
        rules = MODE_RULES[mode]
        fields = dict(
            seed="TEST01",
            mode=mode,
            difficulty=difficulty,
            timer_seconds=rules.timer_seconds,
            max_strikes=rules.max_strikes,
            globals=plain_globals,
            modules=list(modules),
            status=GameStatus.ACTIVE,
            start_time=0.0,
        )
        fields.update(overrides)
        return GameState(**fields)
    return _make


@pytest.fixture
def three_wires(wires_instance):
    """Three independent [blue, blue, white] wires modules."""
    return [
        ModuleInstance(id=f"wires_{i}", type=ModuleType.WIRES, data=wires_instance.data)
        for i in range(3)
    ]


@pytest.fixture
def quick_session() -> MissionSession:
    """The replay example: seed ABC123, quick, novice."""
    return MissionSession.create("quick", "novice", seed="ABC123")
