"""
Reducer - Applies session transitions to game state.

The reducer is the single point of state mutation.
All session changes (start, tick, strike, module action) go through here.

Design principles:
- Pure functions: (state, input) -> new_state
- Actions outside ACTIVE are ignored before reaching any module
- Module validators decide; the reducer applies strikes and outcomes
- Terminal states are final; only a new session leaves them
"""

from __future__ import annotations
import logging
import time

from ..config import DIFFICULTY_RULES, Difficulty
from .action import ActionOutcome, ModuleAction
from .state import GameState, GameStatus

logger = logging.getLogger(__name__)


def _now(now: float | None) -> float:
    return time.time() if now is None else now


def start(state: GameState, now: float | None = None) -> GameState:
    """intro -> active. No-op from any other status."""
    if state.status != GameStatus.INTRO:
        return state
    return state._copy_with(status=GameStatus.ACTIVE, start_time=_now(now))


def tick(state: GameState, now: float | None = None) -> GameState:
    """Advance the countdown by one second; explode at zero."""
    if not state.is_active:
        return state

    new_time = max(0, state.timer_seconds - 1)
    if new_time == 0:
        logger.info("Mission %s: timer expired", state.seed)
        return state._copy_with(
            timer_seconds=0,
            status=GameStatus.EXPLODED,
            end_time=_now(now),
        )
    return state._copy_with(timer_seconds=new_time)


def apply_strike(state: GameState, now: float | None = None) -> GameState:
    """
    Record a mistake.

    Non-novice difficulties also lose time_penalty seconds (floored at 0).
    Reaching max_strikes, or a penalty that empties the timer, explodes.
    """
    if not state.is_active:
        return state

    new_strikes = state.strikes + 1
    new_timer = state.timer_seconds
    if state.difficulty != Difficulty.NOVICE:
        penalty = DIFFICULTY_RULES[state.difficulty].time_penalty
        new_timer = max(0, state.timer_seconds - penalty)

    logger.debug(
        "Mission %s: strike %d/%d, timer %d",
        state.seed, new_strikes, state.max_strikes, new_timer,
    )

    if new_strikes >= state.max_strikes or new_timer == 0:
        logger.info("Mission %s: exploded on strike %d", state.seed, new_strikes)
        return state._copy_with(
            strikes=new_strikes,
            timer_seconds=new_timer,
            status=GameStatus.EXPLODED,
            end_time=_now(now),
        )
    return state._copy_with(strikes=new_strikes, timer_seconds=new_timer)


def apply_module_action(
    state: GameState,
    module_id: str,
    action: ModuleAction,
    now: float | None = None,
) -> tuple[GameState, ActionOutcome]:
    """
    Route an action to its module and apply the consequences.

    Returns (new_state, outcome). Ignored actions return the state unchanged.
    """
    from ..modules.registry import validate_module

    if not state.is_active:
        return state, ActionOutcome.ignored(state.status, "session not active", module_id)

    module = state.get_module(module_id)
    if module is None:
        return state, ActionOutcome.ignored(state.status, "unknown module", module_id)

    # Timer-dependent rules read the countdown from the payload only
    if action.needs_timer:
        action = action.with_timer(state.timer_seconds)

    result = validate_module(module, action, state.globals)

    new_state = state.with_module(module.with_data(result.new_state, result.solved))
    if result.strike:
        new_state = apply_strike(new_state, now)

    if new_state.is_active and new_state.all_solved:
        logger.info("Mission %s: all modules solved", state.seed)
        new_state = new_state._copy_with(status=GameStatus.WON, end_time=_now(now))

    logger.debug(
        "Mission %s: %s on %s -> valid=%s strike=%s solved=%s",
        state.seed, action.action_type.value, module_id,
        result.valid, result.strike, result.solved,
    )

    return new_state, ActionOutcome(
        accepted=True,
        status=new_state.status,
        module_id=module_id,
        module_type=module.type,
        valid=result.valid,
        strike=result.strike,
        solved=new_state.get_module(module_id).solved,
    )
