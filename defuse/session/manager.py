"""
Session Manager - Creates and tracks mission sessions.

Sessions are in-memory only:
- Created on request, keyed by a random mission id
- Each owns its MissionSession and, once started, its GameLoop
- Ending a mission stops its ticker and drops it

A mission is fully reconstructible from (seed, mode, difficulty), so
nothing is persisted.
"""

from __future__ import annotations
from dataclasses import dataclass
import logging
import threading
import time
import uuid

from ..config import TICK_INTERVAL, Difficulty, GameMode
from .game_loop import GameLoop
from .mission import MissionSession

logger = logging.getLogger(__name__)


@dataclass
class Mission:
    """A tracked session plus its optional ticker."""
    mission_id: str
    session: MissionSession
    created_at: float
    loop: GameLoop | None = None

    def is_active(self) -> bool:
        return not self.session.state.is_terminal


class SessionManager:
    """
    Manages mission sessions.

    Responsibilities:
    - Create sessions from (mode, difficulty, seed)
    - Optionally attach a real-time ticker
    - Clean up finished sessions
    """

    def __init__(self, tick_interval: float = TICK_INTERVAL, auto_tick: bool = True):
        self.tick_interval = tick_interval
        self.auto_tick = auto_tick
        self._missions: dict[str, Mission] = {}
        self._lock = threading.Lock()

    def create_mission(
        self,
        mode: GameMode | str = GameMode.QUICK,
        difficulty: Difficulty | str = Difficulty.NOVICE,
        seed: str | None = None,
    ) -> Mission:
        """
        Create a new mission in INTRO status.

        Raises:
            ValueError: Unknown mode or difficulty
        """
        session = MissionSession.create(mode, difficulty, seed)
        mission = Mission(
            mission_id=str(uuid.uuid4()),
            session=session,
            created_at=time.time(),
        )
        if self.auto_tick:
            mission.loop = GameLoop(session, interval=self.tick_interval)

        with self._lock:
            self._missions[mission.mission_id] = mission
        return mission

    def get_mission(self, mission_id: str) -> Mission | None:
        """Get a mission by ID."""
        with self._lock:
            return self._missions.get(mission_id)

    def end_mission(self, mission_id: str) -> bool:
        """Stop the mission's ticker and forget it. False if unknown."""
        with self._lock:
            mission = self._missions.pop(mission_id, None)
        if mission is None:
            return False
        if mission.loop is not None:
            mission.loop.stop()
        logger.info("Mission %s (%s) ended", mission_id, mission.session.seed)
        return True

    def list_missions(self, active_only: bool = False) -> list[Mission]:
        with self._lock:
            missions = list(self._missions.values())
        if active_only:
            missions = [m for m in missions if m.is_active()]
        return missions

    def cleanup_stale_missions(self, max_age_seconds: int = 3600) -> int:
        """
        End finished missions older than max_age_seconds.

        Returns the number removed.
        """
        current_time = time.time()
        stale = [
            m.mission_id for m in self.list_missions()
            if current_time - m.created_at > max_age_seconds and not m.is_active()
        ]
        for mission_id in stale:
            self.end_mission(mission_id)
        return len(stale)

    def shutdown(self):
        """Stop every ticker."""
        for mission in self.list_missions():
            self.end_mission(mission.mission_id)
