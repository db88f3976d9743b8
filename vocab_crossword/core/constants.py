"""Shared constants and enumerations for the crossword engine."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, FrozenSet, Tuple


class CellType(str, Enum):
    """All supported cell types in the grid."""

    EMPTY = "empty"
    FILLED = "filled"
    START = "start"
    SPACE = "space"
    PLACEHOLDER = "placeholder"


class Direction(str, Enum):
    """Word directions supported by the grid."""

    ACROSS = "across"
    DOWN = "down"

    @property
    def step(self) -> Tuple[int, int]:
        return (0, 1) if self is Direction.ACROSS else (1, 0)

    def opposite(self) -> "Direction":
        return Direction.DOWN if self is Direction.ACROSS else Direction.ACROSS


class ArrowKey(str, Enum):
    """Arrow keys understood by the puzzle session."""

    LEFT = "ArrowLeft"
    RIGHT = "ArrowRight"
    UP = "ArrowUp"
    DOWN = "ArrowDown"

    @property
    def step(self) -> Tuple[int, int]:
        return ARROW_STEPS[self]

    @property
    def direction(self) -> Direction:
        if self in (ArrowKey.LEFT, ArrowKey.RIGHT):
            return Direction.ACROSS
        return Direction.DOWN


ARROW_STEPS: Dict[ArrowKey, Tuple[int, int]] = {
    ArrowKey.LEFT: (0, -1),
    ArrowKey.RIGHT: (0, 1),
    ArrowKey.UP: (-1, 0),
    ArrowKey.DOWN: (1, 0),
}


class PlaceholderPosition(str, Enum):
    """Where the decorative image block is laid out."""

    CENTER = "center"
    TOP_RIGHT = "top-right"


LETTER_TYPES: FrozenSet[CellType] = frozenset({CellType.FILLED, CellType.START})
BLOCKED_TYPES: FrozenSet[CellType] = frozenset(
    {CellType.EMPTY, CellType.SPACE, CellType.PLACEHOLDER}
)

DEFAULT_GRID_SIZE = 40
DEFAULT_MAX_ATTEMPTS = 200
MIN_CANDIDATES = 3
MIN_WORD_LENGTH = 3
MAX_WORD_LENGTH = 20


@dataclass(frozen=True)
class DifficultyLevel:
    level: int
    name: str
    reveal_percent: int


DIFFICULTY_LEVELS: Tuple[DifficultyLevel, ...] = (
    DifficultyLevel(1, "Beginner", 80),
    DifficultyLevel(2, "Easy", 60),
    DifficultyLevel(3, "Medium", 40),
    DifficultyLevel(4, "Hard", 20),
    DifficultyLevel(5, "Expert", 0),
)


@dataclass(frozen=True)
class Bounds:
    """Simple rectangle bounds helper."""

    rows: int
    cols: int

    def contains(self, row: int, col: int) -> bool:
        return 0 <= row < self.rows and 0 <= col < self.cols
