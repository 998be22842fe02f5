# maze_config.py
"""
Runtime settings (read from the environment / a .env file) and the
difficulty presets offered to players.
"""
import os
from dataclasses import dataclass
from enum import Enum

from dotenv import load_dotenv

# Load .env file
load_dotenv()


def _env_bool(name, default=False):
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


HOST = os.environ.get("HOST", "0.0.0.0")
PORT = int(os.environ.get("PORT", 5000))
DEBUG = _env_bool("FLASK_DEBUG", False)
LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").upper()

# size limits for /api/generate_maze
MIN_SIZE = int(os.environ.get("MAZE_MIN_SIZE", 9))
MAX_SIZE = int(os.environ.get("MAZE_MAX_SIZE", 101))

MOVE_INTERVAL_MS = 70  # repeat rate while a direction key is held
AUTO_MOVE_MS = 80  # delay between steps of an auto-solve


class Difficulty(Enum):
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


@dataclass(frozen=True)
class DifficultyPreset:
    label: str
    size: int
    description: str
    branches: int
    branch_max_length: int

    def to_dict(self):
        return {
            "label": self.label,
            "size": self.size,
            "description": self.description,
            "branches": self.branches,
            "branch_max_length": self.branch_max_length,
        }


# bigger mazes get more and longer dead ends
DIFFICULTY_PRESETS = {
    Difficulty.EASY: DifficultyPreset(
        label="Easy",
        size=15,
        description="Small maze, good for beginners",
        branches=8,
        branch_max_length=3,
    ),
    Difficulty.MEDIUM: DifficultyPreset(
        label="Medium",
        size=21,
        description="Medium size with a moderate number of dead ends",
        branches=22,
        branch_max_length=4,
    ),
    Difficulty.HARD: DifficultyPreset(
        label="Hard",
        size=31,
        description="Large maze, many more dead ends",
        branches=40,
        branch_max_length=5,
    ),
}


def as_difficulty(name) -> Difficulty:
    """Accept an enum member or a case-insensitive name."""
    if isinstance(name, Difficulty):
        return name
    try:
        return Difficulty(str(name).lower())
    except ValueError:
        raise ValueError(f"unknown difficulty: {name}") from None


def get_preset(name) -> DifficultyPreset:
    return DIFFICULTY_PRESETS[as_difficulty(name)]
