"""
Session Module - Runs mission play-throughs.

A session represents one mission:
- Set up from (seed, mode, difficulty)
- Holds the current game state behind a lock
- Ticked by an external GameLoop
- Reset in place or dropped by the SessionManager

Sessions are in-memory only; a seed replays a mission exactly.
"""

from .setup import setup_mission
from .mission import MissionSession
from .game_loop import GameLoop
from .manager import Mission, SessionManager

__all__ = [
    "setup_mission",
    "MissionSession",
    "GameLoop",
    "Mission",
    "SessionManager",
]
