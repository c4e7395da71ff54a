"""
Game Loop - The countdown ticker driving a mission session.

The loop:
1. start() moves the session intro -> active
2. Every tick_interval seconds the session gets one tick()
3. The loop stops itself once the session is won or exploded
4. stop() cancels the pending tick; reset() stops before rebuilding

Each tick is a one-shot threading.Timer that schedules the next one.

Locking: the session lock is always taken before the loop lock, both by
the tick callback and by stop(). Session listeners may therefore stop or
reset the loop from inside a tick or an action.
"""

from __future__ import annotations
import logging
import threading

from ..config import TICK_INTERVAL
from ..engine_core.action import ActionOutcome
from ..engine_core.state import GameState
from .mission import MissionSession

logger = logging.getLogger(__name__)


class GameLoop:
    """
    External ticker for a MissionSession.

    Usage:
        loop = GameLoop(session)
        loop.start()
        ...
        loop.stop()

    stop() is idempotent; once it returns no further tick reaches the
    session.
    """

    def __init__(self, session: MissionSession, interval: float = TICK_INTERVAL):
        if interval <= 0:
            raise ValueError(f"Tick interval must be positive, got {interval}")
        self.session = session
        self.interval = interval
        self._lock = threading.Lock()
        self._timer: threading.Timer | None = None
        self._stopped = True
        # Bumped on every start/stop; a timer from an older chain is stale
        self._generation = 0
        self.ticks = 0

        session.on_reset(self.stop)

    @property
    def running(self) -> bool:
        with self._lock:
            return not self._stopped

    def start(self) -> ActionOutcome:
        """Start the mission and begin ticking."""
        with self.session.lock:
            outcome = self.session.start_game()
            if not self.session.state.is_active:
                return outcome

            with self._lock:
                if not self._stopped:
                    return outcome
                self._stopped = False
                self._generation += 1
                self._schedule(self._generation)
        logger.debug("Ticker started for %s every %.2fs", self.session.seed, self.interval)
        return outcome

    def stop(self):
        """Cancel the pending tick. Safe to call repeatedly, from any thread."""
        with self.session.lock:
            with self._lock:
                if self._stopped:
                    return
                self._halt()
        logger.debug("Ticker stopped for %s after %d ticks", self.session.seed, self.ticks)

    def reset(self, seed: str | None = None) -> GameState:
        """Stop ticking and rebuild the session (same mode and difficulty)."""
        self.stop()
        return self.session.reset(seed)

    def _is_current(self, generation: int) -> bool:
        # Caller holds self._lock
        return not self._stopped and generation == self._generation

    def _halt(self):
        # Caller holds self._lock
        self._stopped = True
        self._generation += 1
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    def _schedule(self, generation: int):
        # Caller holds self._lock
        timer = threading.Timer(self.interval, self._tick, args=(generation,))
        timer.daemon = True
        self._timer = timer
        timer.start()

    def _tick(self, generation: int):
        with self.session.lock:
            with self._lock:
                if not self._is_current(generation):
                    return
                self.ticks += 1

            # Listeners run here and may stop or reset this loop
            self.session.tick()

            with self._lock:
                if not self._is_current(generation):
                    return
                if self.session.state.is_terminal:
                    self._halt()
                    logger.info(
                        "Mission %s ended (%s), ticker stopped",
                        self.session.seed, self.session.status.value,
                    )
                    return
                self._schedule(generation)
