# maze_game.py
"""
Player-side state for one maze: manual movement, the auto-solve walk and
retry / new maze handling. Scheduling (key repeat, auto-solve ticks) is left
to the caller, which calls `move`/`press` and `advance` on its own timer.
"""
import logging
import random
from collections import deque
from enum import Enum
from typing import Optional

from maze_config import Difficulty, as_difficulty, get_preset
from maze_gen import generate
from maze_grid import Position, is_passable
from maze_solver import solve

logger = logging.getLogger(__name__)


class Direction(Enum):
    UP = (0, -1)
    DOWN = (0, 1)
    LEFT = (-1, 0)
    RIGHT = (1, 0)


KEY_BINDINGS = {
    "w": Direction.UP,
    "arrowup": Direction.UP,
    "s": Direction.DOWN,
    "arrowdown": Direction.DOWN,
    "a": Direction.LEFT,
    "arrowleft": Direction.LEFT,
    "d": Direction.RIGHT,
    "arrowright": Direction.RIGHT,
}


def key_to_direction(key: str) -> Optional[Direction]:
    return KEY_BINDINGS.get(key.lower())


def step(position, direction: Direction) -> Position:
    dx, dy = direction.value
    return Position(position[0] + dx, position[1] + dy)


class MazeSession:
    START = Position(1, 1)

    def __init__(self, difficulty=Difficulty.MEDIUM, rng: Optional[random.Random] = None):
        self.rng = rng or random.Random()
        self.difficulty = as_difficulty(difficulty)
        self.new_maze()

    @property
    def preset(self):
        return get_preset(self.difficulty)

    def new_maze(self):
        preset = self.preset
        self.grid = generate(
            preset.size,
            preset.size,
            branches=preset.branches,
            branch_max_length=preset.branch_max_length,
            rng=self.rng,
        )
        self.end = Position(self.grid.width - 2, self.grid.height - 2)
        self.retry()

    def set_difficulty(self, difficulty):
        self.difficulty = as_difficulty(difficulty)
        self.new_maze()

    def retry(self):
        """Back to the start with an empty trail; the maze is kept."""
        self.player = self.START
        self.trail = set()
        self.auto_path = deque()
        self.auto_moving = False
        self.auto_finished = False

    def can_move(self, x, y) -> bool:
        return is_passable(self.grid, x, y)

    def move(self, direction: Direction) -> bool:
        if self.auto_moving:
            return False
        target = step(self.player, direction)
        if not self.can_move(*target):
            return False
        self.player = target
        return True

    def press(self, key: str) -> bool:
        direction = key_to_direction(key)
        if direction is None:
            return False
        return self.move(direction)

    def start_auto_solve(self) -> bool:
        if self.auto_moving:
            return False
        path = solve(self.grid, self.player, self.end)
        if not path:
            logger.warning("Auto-solve found no route from %s to %s", self.player, self.end)
            return False
        # first cell is where the player already stands
        self.auto_path = deque(path[1:])
        self.trail = {self.player}
        self.auto_finished = False
        self.auto_moving = True
        return True

    def advance(self) -> Optional[Position]:
        """One auto-solve tick. Returns the new position, or None once done."""
        if not self.auto_moving:
            return None
        if not self.auto_path:
            self.auto_moving = False
            self.auto_finished = True
            return None
        nxt = self.auto_path.popleft()
        self.player = nxt
        self.trail.add(nxt)
        return nxt

    @property
    def is_won(self) -> bool:
        return self.player == self.end

    @property
    def show_completion(self) -> bool:
        return self.auto_finished or self.is_won

    def to_dict(self):
        return {
            "difficulty": self.difficulty.value,
            "maze": self.grid.to_list(),
            "player": list(self.player),
            "end": list(self.end),
            "trail": sorted([list(p) for p in self.trail]),
            "auto_moving": self.auto_moving,
            "won": self.is_won,
        }
