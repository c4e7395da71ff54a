"""
Tests for the reducer (session transitions).

Tests:
- intro/active/won/exploded transitions
- Strike handling and time penalties
- Module action routing and ignored actions
- Invariants: strike and solved monotonicity, timer floor, terminal exclusivity
"""

import pytest

from ..config import Difficulty, GameMode, ModuleType
from ..engine_core import reducer
from ..engine_core.action import ModuleAction
from ..engine_core.state import GameStatus, ModuleInstance
from ..modules.button import ButtonData
from ..modules.maze import MAZE_LAYOUTS, MazeData


class TestLifecycle:
    """Tests for start and tick."""

    def test_start_from_intro(self, make_state, three_wires):
        state = make_state(three_wires, status=GameStatus.INTRO, start_time=None)
        started = reducer.start(state, now=100.0)
        assert started.status == GameStatus.ACTIVE
        assert started.start_time == 100.0

    def test_start_is_noop_when_active(self, make_state, three_wires):
        state = make_state(three_wires)
        assert reducer.start(state) is state

    def test_tick_decrements(self, make_state, three_wires):
        state = make_state(three_wires, timer_seconds=10)
        assert reducer.tick(state).timer_seconds == 9

    def test_tick_ignored_in_intro(self, make_state, three_wires):
        state = make_state(three_wires, status=GameStatus.INTRO)
        assert reducer.tick(state) is state

    def test_timer_expiry_explodes(self, make_state, three_wires):
        state = make_state(three_wires, timer_seconds=1)
        exploded = reducer.tick(state, now=50.0)
        assert exploded.timer_seconds == 0
        assert exploded.status == GameStatus.EXPLODED
        assert exploded.end_time == 50.0

    def test_no_tick_after_explosion(self, make_state, three_wires):
        state = reducer.tick(make_state(three_wires, timer_seconds=1))
        assert reducer.tick(state) is state


class TestStrikes:
    """Tests for strike handling."""

    def test_novice_has_no_time_penalty(self, make_state, three_wires):
        state = make_state(three_wires, timer_seconds=100)
        struck = reducer.apply_strike(state)
        assert struck.strikes == 1
        assert struck.timer_seconds == 100

    def test_pro_penalty(self, make_state, three_wires):
        state = make_state(three_wires, difficulty=Difficulty.PRO, timer_seconds=100)
        assert reducer.apply_strike(state).timer_seconds == 90

    def test_penalty_floored_at_zero_explodes(self, make_state, three_wires):
        state = make_state(
            three_wires, mode=GameMode.FULL, difficulty=Difficulty.EXPERT, timer_seconds=4
        )
        struck = reducer.apply_strike(state)
        assert struck.timer_seconds == 0
        assert struck.status == GameStatus.EXPLODED

    def test_pro_last_strike_explodes_with_time_left(self, make_state, three_wires):
        """Pro, max 3 strikes, 2 already: the third explodes at 290 -> 280."""
        state = make_state(
            three_wires,
            mode=GameMode.FULL,
            difficulty=Difficulty.PRO,
            max_strikes=3,
            strikes=2,
            timer_seconds=290,
        )
        struck = reducer.apply_strike(state, now=10.0)
        assert struck.strikes == 3
        assert struck.timer_seconds == 280
        assert struck.status == GameStatus.EXPLODED
        assert struck.end_time == 10.0

    def test_strike_ignored_when_not_active(self, make_state, three_wires):
        state = make_state(three_wires, status=GameStatus.WON)
        assert reducer.apply_strike(state) is state


class TestModuleActions:
    """Tests for apply_module_action."""

    def test_wrong_cut_strikes_session(self, make_state, three_wires):
        state = make_state(three_wires)
        new_state, outcome = reducer.apply_module_action(state, "wires_0", ModuleAction.cut_wire(0))

        assert outcome.accepted and outcome.valid and outcome.strike
        assert not outcome.solved
        assert new_state.strikes == 1
        assert new_state.get_module("wires_0").data.wires[0].cut

    def test_correct_cut_solves_module(self, make_state, three_wires):
        state = make_state(three_wires)
        new_state, outcome = reducer.apply_module_action(state, "wires_1", ModuleAction.cut_wire(2))

        assert outcome.solved
        assert outcome.module_type == ModuleType.WIRES
        assert new_state.get_module("wires_1").solved
        assert new_state.status == GameStatus.ACTIVE

    def test_quick_session_won_on_last_solve(self, make_state, three_wires):
        state = make_state(three_wires)
        for i in range(3):
            assert state.status == GameStatus.ACTIVE
            state, outcome = reducer.apply_module_action(
                state, f"wires_{i}", ModuleAction.cut_wire(2), now=float(i)
            )
        assert state.status == GameStatus.WON
        assert state.end_time == 2.0
        assert outcome.status == GameStatus.WON

    def test_action_ignored_when_not_active(self, make_state, three_wires):
        for status in (GameStatus.INTRO, GameStatus.WON, GameStatus.EXPLODED):
            state = make_state(three_wires, status=status)
            new_state, outcome = reducer.apply_module_action(state, "wires_0", ModuleAction.cut_wire(0))
            assert new_state is state
            assert not outcome.accepted

    def test_unknown_module_ignored(self, make_state, three_wires):
        state = make_state(three_wires)
        new_state, outcome = reducer.apply_module_action(state, "nope_9", ModuleAction.cut_wire(0))
        assert new_state is state
        assert not outcome.accepted
        assert outcome.reason == "unknown module"

    def test_solved_module_stays_solved(self, make_state, three_wires):
        state = make_state(three_wires)
        state, _ = reducer.apply_module_action(state, "wires_0", ModuleAction.cut_wire(2))
        state, outcome = reducer.apply_module_action(state, "wires_0", ModuleAction.cut_wire(0))

        assert not outcome.valid
        assert not outcome.strike
        assert outcome.solved
        assert state.strikes == 0

    def test_maze_wall_strikes_session(self, make_state):
        layout = MAZE_LAYOUTS["A"][0]
        maze = ModuleInstance(
            id="maze_0",
            type=ModuleType.MAZE,
            data=MazeData(
                maze_set="A", maze_id=0, player_x=1, player_y=1, target_x=4, target_y=4,
                walls=[[cell == 1 for cell in row] for row in layout],
            ),
        )
        state = make_state([maze])
        new_state, outcome = reducer.apply_module_action(state, "maze_0", ModuleAction.move("up"))

        assert not outcome.valid
        assert outcome.strike
        assert new_state.strikes == 1

    def test_release_reads_session_timer(self, make_state):
        button = ModuleInstance(
            id="button_0",
            type=ModuleType.BUTTON,
            data=ButtonData(color="yellow", label="PRESS", should_hold=True, held=True,
                            strip_color="yellow", release_digit=5),
        )
        state = make_state([button], timer_seconds=125)
        new_state, outcome = reducer.apply_module_action(state, "button_0", ModuleAction.release())
        assert outcome.solved and not outcome.strike
        assert new_state.status == GameStatus.WON

    def test_release_on_wrong_timer_strikes(self, make_state):
        button = ModuleInstance(
            id="button_0",
            type=ModuleType.BUTTON,
            data=ButtonData(color="yellow", label="PRESS", should_hold=True, held=True,
                            strip_color="yellow", release_digit=5),
        )
        state = make_state([button], timer_seconds=127)
        _, outcome = reducer.apply_module_action(state, "button_0", ModuleAction.release())
        assert outcome.strike

    def test_input_state_not_mutated(self, make_state, three_wires):
        state = make_state(three_wires)
        reducer.apply_module_action(state, "wires_0", ModuleAction.cut_wire(0))
        assert state.strikes == 0
        assert not state.get_module("wires_0").data.wires[0].cut


class TestInvariants:
    """Properties that hold across action sequences."""

    ACTIONS = [
        ("wires_0", ModuleAction.cut_wire(0)),
        ("wires_1", ModuleAction.cut_wire(1)),
        ("wires_0", ModuleAction.cut_wire(2)),
        ("wires_2", ModuleAction.cut_wire(5)),
        ("wires_1", ModuleAction.cut_wire(2)),
        ("wires_2", ModuleAction.cut_wire(0)),
        ("wires_2", ModuleAction.cut_wire(2)),
    ]

    @pytest.mark.parametrize("difficulty", list(Difficulty))
    def test_monotonic_and_exclusive(self, make_state, three_wires, difficulty):
        state = make_state(three_wires, mode=GameMode.FULL, difficulty=difficulty,
                           max_strikes=3, timer_seconds=25)
        history = [state]
        for module_id, action in self.ACTIONS:
            state = reducer.tick(state)
            history.append(state)
            state, _ = reducer.apply_module_action(state, module_id, action)
            history.append(state)

        for before, after in zip(history, history[1:]):
            assert after.strikes >= before.strikes
            assert after.timer_seconds >= 0
            for m_before, m_after in zip(before.modules, after.modules):
                assert m_after.solved or not m_before.solved
            if before.is_terminal:
                assert after.status == before.status

        won = state.status == GameStatus.WON
        exploded = state.status == GameStatus.EXPLODED
        assert not (won and exploded)
        if exploded:
            assert state.strikes >= state.max_strikes or state.timer_seconds == 0
