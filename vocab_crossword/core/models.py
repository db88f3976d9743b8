"""Data models supporting the crossword engine.

All models are frozen: every operation that changes a puzzle builds a new
``Puzzle`` that shares the untouched rows with the previous one, so a
renderer can detect changes by identity.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Dict, Iterator, List, Mapping, Optional, Tuple

from .constants import BLOCKED_TYPES, LETTER_TYPES, Bounds, CellType, Direction


@dataclass(frozen=True)
class Candidate:
    """A ``{word, clue}`` pair offered by a word source."""

    word: str
    clue: str
    source: str = "unknown"


@dataclass(frozen=True)
class Cell:
    """Represents a grid cell with metadata."""

    row: int
    col: int
    letter: str = ""
    value: str = ""
    type: CellType = CellType.EMPTY
    word_id: Optional[str] = None
    direction: Optional[Direction] = None
    number: Optional[int] = None

    def is_blocked(self) -> bool:
        return self.type in BLOCKED_TYPES

    def is_letter(self) -> bool:
        return self.type in LETTER_TYPES

    def is_locked(self) -> bool:
        """A letter cell whose value already matches the correct letter."""
        return self.is_letter() and self.value != "" and self.value == self.letter

    def with_value(self, value: str) -> "Cell":
        return replace(self, value=value)

    def moved_to(self, row: int, col: int) -> "Cell":
        return replace(self, row=row, col=col)


def empty_cell(row: int, col: int) -> Cell:
    return Cell(row=row, col=col)


def placeholder_cell(row: int, col: int) -> Cell:
    return Cell(row=row, col=col, type=CellType.PLACEHOLDER)


@dataclass(frozen=True)
class Word:
    """A placed word and its clue."""

    id: str
    word: str
    clue: str
    direction: Direction
    start_row: int
    start_col: int
    number: int

    @property
    def length(self) -> int:
        return len(self.word)

    def positions(self) -> List[Tuple[int, int, str]]:
        """Every ``(row, col, char)`` the word spans, spaces included."""
        dr, dc = self.direction.step
        return [
            (self.start_row + dr * i, self.start_col + dc * i, char)
            for i, char in enumerate(self.word)
        ]

    def letter_positions(self) -> List[Tuple[int, int]]:
        return [(row, col) for row, col, char in self.positions() if char != " "]

    def covers(self, row: int, col: int) -> bool:
        return (row, col) in self.letter_positions()

    def shifted(self, d_row: int, d_col: int) -> "Word":
        return replace(self, start_row=self.start_row + d_row, start_col=self.start_col + d_col)


@dataclass(frozen=True)
class Puzzle:
    """Grid of cells plus the words laid onto it."""

    grid: Tuple[Tuple[Cell, ...], ...]
    words: Tuple[Word, ...]
    size: Bounds

    @classmethod
    def from_rows(cls, rows: List[List[Cell]], words: List[Word]) -> "Puzzle":
        grid = tuple(tuple(row) for row in rows)
        cols = len(grid[0]) if grid else 0
        return cls(grid=grid, words=tuple(words), size=Bounds(rows=len(grid), cols=cols))

    def cell(self, row: int, col: int) -> Cell:
        return self.grid[row][col]

    def cells(self) -> Iterator[Cell]:
        for row in self.grid:
            yield from row

    def words_at(self, row: int, col: int) -> List[Word]:
        return [word for word in self.words if word.covers(row, col)]

    def word_by_id(self, word_id: str) -> Optional[Word]:
        for word in self.words:
            if word.id == word_id:
                return word
        return None

    def with_values(self, values: Mapping[Tuple[int, int], str]) -> "Puzzle":
        """Return a new puzzle with ``values`` applied; untouched rows are shared."""

        if not values:
            return self
        by_row: Dict[int, Dict[int, str]] = {}
        for (row, col), value in values.items():
            by_row.setdefault(row, {})[col] = value
        grid = list(self.grid)
        for row, updates in by_row.items():
            cells = list(grid[row])
            for col, value in updates.items():
                cells[col] = cells[col].with_value(value)
            grid[row] = tuple(cells)
        return replace(self, grid=tuple(grid))

    def with_value(self, row: int, col: int, value: str) -> "Puzzle":
        return self.with_values({(row, col): value})

    # ------------------------------------------------------------------
    # Serialization helpers
    # ------------------------------------------------------------------
    def to_jsonable(self) -> dict:
        return {
            "size": {"rows": self.size.rows, "cols": self.size.cols},
            "grid": [
                [
                    {
                        "row": cell.row,
                        "col": cell.col,
                        "letter": cell.letter,
                        "value": cell.value,
                        "type": cell.type.value,
                        "word_id": cell.word_id,
                        "direction": cell.direction.value if cell.direction else None,
                        "number": cell.number,
                    }
                    for cell in row
                ]
                for row in self.grid
            ],
            "words": [
                {
                    "id": word.id,
                    "word": word.word,
                    "clue": word.clue,
                    "direction": word.direction.value,
                    "start": [word.start_row, word.start_col],
                    "number": word.number,
                }
                for word in self.words
            ],
        }


@dataclass
class BuildResult:
    """Outcome of a build: the puzzle (or ``None``) and every dropped candidate."""

    puzzle: Optional[Puzzle]
    dropped: List[Candidate] = field(default_factory=list)

    @property
    def placed_count(self) -> int:
        return len(self.puzzle.words) if self.puzzle else 0
