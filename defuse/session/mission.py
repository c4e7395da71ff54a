"""
Mission Session - The session state machine behind one play-through.

    intro --start_game--> active --tick/strike--> exploded
                            |
                            +--all modules solved--> won

    any --reset--> new intro session

The session owns the current GameState and serializes every mutation
through one lock, so timer ticks and player actions coming from different
threads never interleave. It holds no timer handle; GameLoop (or any other
scheduler) calls tick().
"""

from __future__ import annotations
from typing import Any, Callable
import logging
import threading

from ..config import Difficulty, GameMode
from ..engine_core import reducer
from ..engine_core.action import ActionOutcome, ModuleAction
from ..engine_core.state import GameState, GameStatus
from .setup import setup_mission

logger = logging.getLogger(__name__)

StateListener = Callable[[GameState], None]


class MissionSession:
    """
    Mutable facade over the pure reducer.

    Usage:
        session = MissionSession.create("quick", "novice", seed="ABC123")
        session.start_game()
        session.tick()
        outcome = session.module_action("wires_0", ModuleAction.cut_wire(2))
    """

    def __init__(self, state: GameState):
        self._state = state
        self._lock = threading.RLock()
        self._listeners: list[StateListener] = []
        self._on_reset: list[Callable[[], None]] = []

    @classmethod
    def create(
        cls,
        mode: GameMode | str = GameMode.QUICK,
        difficulty: Difficulty | str = Difficulty.NOVICE,
        seed: str | None = None,
    ) -> MissionSession:
        session = cls(setup_mission(mode, difficulty, seed))
        logger.info(
            "Mission %s created (%s/%s): %s",
            session.seed, session.state.mode.value, session.state.difficulty.value,
            ", ".join(t.value for t in session.state.module_types),
        )
        return session

    # =========================================================================
    # Observation
    # =========================================================================

    @property
    def state(self) -> GameState:
        """Current state. Treat as read-only."""
        return self._state

    @property
    def seed(self) -> str:
        return self._state.seed

    @property
    def status(self) -> GameStatus:
        return self._state.status

    @property
    def lock(self) -> threading.RLock:
        """
        The lock serializing every mutation.

        Schedulers hold it to make their own bookkeeping atomic with a
        tick. Lock order is always session lock, then the scheduler's.
        """
        return self._lock

    def snapshot(self, include_solutions: bool = False) -> dict[str, Any]:
        with self._lock:
            return self._state.snapshot(include_solutions=include_solutions)

    def subscribe(self, listener: StateListener):
        """Call listener with the new state after every change."""
        self._listeners.append(listener)

    def on_reset(self, callback: Callable[[], None]):
        """Call callback, under the session lock, before a reset rebuilds the session."""
        self._on_reset.append(callback)

    # =========================================================================
    # Operations
    # =========================================================================

    def initialize_game(
        self,
        mode: GameMode | str,
        difficulty: Difficulty | str,
        seed: str | None = None,
    ) -> GameState:
        """Replace the session with a fresh INTRO mission."""
        new_state = setup_mission(mode, difficulty, seed)
        with self._lock:
            for callback in self._on_reset:
                callback()
            self._set_state(new_state)
            logger.info("Mission %s initialized", new_state.seed)
            return new_state

    def start_game(self) -> ActionOutcome:
        """intro -> active."""
        with self._lock:
            before = self._state
            after = reducer.start(before)
            if after is not before:
                logger.info("Mission %s started", after.seed)
            self._set_state(after)
            return ActionOutcome.transition(before, after, "session not in intro")

    def tick(self) -> ActionOutcome:
        """One second of countdown. No-op unless active."""
        with self._lock:
            before = self._state
            after = reducer.tick(before)
            self._set_state(after)
            return ActionOutcome.transition(before, after, "session not active")

    def strike(self) -> ActionOutcome:
        """Record a strike directly (e.g. from an external rule)."""
        with self._lock:
            before = self._state
            after = reducer.apply_strike(before)
            self._set_state(after)
            return ActionOutcome.transition(before, after, "session not active")

    def module_action(self, module_id: str, action: ModuleAction) -> ActionOutcome:
        """Route a player action to a module."""
        with self._lock:
            new_state, outcome = reducer.apply_module_action(self._state, module_id, action)
            self._set_state(new_state)
            return outcome

    def reset(self, seed: str | None = None) -> GameState:
        """New mission with the same mode and difficulty."""
        with self._lock:
            current = self._state
            return self.initialize_game(current.mode, current.difficulty, seed)

    def _set_state(self, new_state: GameState):
        # Listeners run under the lock and may call back into the session
        if new_state is self._state:
            return
        self._state = new_state
        for listener in list(self._listeners):
            listener(new_state)
