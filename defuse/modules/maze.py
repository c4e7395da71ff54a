"""
Maze - Walk a marker to a target through an invisible 6x6 maze.

The serial picks the layout family (vowel -> A, otherwise B); the seed
picks one of two layouts inside it. Bumping a wall is a strike.
"""

from __future__ import annotations
from dataclasses import dataclass, field, replace
from typing import ClassVar

from ..config import ModuleType
from ..engine_core.action import ActionType, Direction, ModuleAction, ValidationResult
from ..engine_core.globals import GameGlobals
from .base import PuzzleModule

MAZE_SIZE = 6
MIN_TARGET_DISTANCE = 3

# 1 = wall, 0 = path; rows are y, columns are x
MAZE_LAYOUTS: dict[str, list[list[list[int]]]] = {
    "A": [
        [
            [1, 1, 1, 1, 1, 1],
            [1, 0, 0, 1, 0, 1],
            [1, 0, 1, 0, 0, 1],
            [1, 0, 1, 1, 0, 1],
            [1, 0, 0, 0, 0, 1],
            [1, 1, 1, 1, 1, 1],
        ],
        [
            [1, 1, 1, 1, 1, 1],
            [1, 0, 1, 0, 0, 1],
            [1, 0, 0, 0, 1, 1],
            [1, 1, 0, 1, 0, 1],
            [1, 0, 0, 0, 0, 1],
            [1, 1, 1, 1, 1, 1],
        ],
    ],
    "B": [
        [
            [1, 1, 1, 1, 1, 1],
            [1, 0, 0, 0, 1, 1],
            [1, 1, 0, 1, 0, 1],
            [1, 0, 0, 1, 0, 1],
            [1, 0, 1, 0, 0, 1],
            [1, 1, 1, 1, 1, 1],
        ],
        [
            [1, 1, 1, 1, 1, 1],
            [1, 0, 1, 0, 0, 1],
            [1, 0, 0, 1, 0, 1],
            [1, 1, 0, 0, 0, 1],
            [1, 0, 0, 1, 0, 1],
            [1, 1, 1, 1, 1, 1],
        ],
    ],
}

MOVES = {
    Direction.UP: (0, -1),
    Direction.DOWN: (0, 1),
    Direction.LEFT: (-1, 0),
    Direction.RIGHT: (1, 0),
}


@dataclass(frozen=True)
class Cell:
    x: int
    y: int

    def distance(self, other: Cell) -> int:
        return abs(self.x - other.x) + abs(self.y - other.y)


@dataclass
class MazeData:
    HIDDEN_FIELDS: ClassVar[tuple[str, ...]] = ("walls",)

    maze_set: str
    maze_id: int
    player_x: int
    player_y: int
    target_x: int
    target_y: int
    walls: list[list[bool]] = field(default_factory=list)
    circle_markers: list[Cell] = field(default_factory=list)


def open_cells(layout: list[list[int]]) -> list[Cell]:
    """Open cells inside the outer wall ring, row by row."""
    return [
        Cell(x, y)
        for y in range(1, MAZE_SIZE - 1)
        for x in range(1, MAZE_SIZE - 1)
        if layout[y][x] == 0
    ]


class MazeModule(PuzzleModule):
    module_type = ModuleType.MAZE

    def generate(self, seed: str, globals: GameGlobals) -> MazeData:
        rng = self.rng(seed)
        maze_set = "A" if globals.has_vowel else "B"
        maze_id = rng.next_int(0, 1)
        layout = MAZE_LAYOUTS[maze_set][maze_id]

        cells = open_cells(layout)
        starts = [
            c for c in cells
            if any(c.distance(t) >= MIN_TARGET_DISTANCE for t in cells)
        ]
        start = rng.choice(starts)
        target = rng.choice([t for t in cells if start.distance(t) >= MIN_TARGET_DISTANCE])

        # Cosmetic markers identifying the layout
        circle_markers = [
            Cell(rng.next_int(1, 4), rng.next_int(1, 4)),
            Cell(rng.next_int(1, 4), rng.next_int(1, 4)),
        ]

        return MazeData(
            maze_set=maze_set,
            maze_id=maze_id,
            player_x=start.x,
            player_y=start.y,
            target_x=target.x,
            target_y=target.y,
            walls=[[cell == 1 for cell in row] for row in layout],
            circle_markers=circle_markers,
        )

    def handlers(self):
        return {ActionType.MOVE: self._move}

    def _move(self, action: ModuleAction, state: MazeData, globals: GameGlobals) -> ValidationResult:
        direction = action.payload.direction
        if direction is None:
            return ValidationResult.invalid(state)

        dx, dy = MOVES[direction]
        new_x = state.player_x + dx
        new_y = state.player_y + dy

        # Out of bounds or into a wall: rejected, and it costs a strike
        if not (0 <= new_x < MAZE_SIZE and 0 <= new_y < MAZE_SIZE) or state.walls[new_y][new_x]:
            return ValidationResult.invalid(state, strike=True)

        new_state = replace(state, player_x=new_x, player_y=new_y)
        solved = new_x == state.target_x and new_y == state.target_y
        return ValidationResult.correct(new_state, solved=solved)
