"""Deterministic structural validation for generated puzzles."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Tuple

from ..core.constants import CellType
from ..core.exceptions import ValidationError
from ..core.models import Puzzle
from ..utils.logger import get_logger


LOGGER = get_logger(__name__)


@dataclass
class ValidationResult:
    ok: bool
    messages: List[str]


class PuzzleValidator:
    """Runs the layout invariant checks over a finished puzzle."""

    def __init__(self, require_minimal_bounds: bool = True) -> None:
        self.require_minimal_bounds = require_minimal_bounds

    def validate(self, puzzle: Puzzle) -> ValidationResult:
        try:
            self._check_spelling(puzzle)
            self._check_intersections(puzzle)
            self._check_letter_types(puzzle)
            self._check_numbering(puzzle)
            if self.require_minimal_bounds:
                self._check_minimal_bounds(puzzle)
        except ValidationError as exc:
            LOGGER.error("Validation failed: %s", exc)
            return ValidationResult(ok=False, messages=[str(exc)])
        return ValidationResult(ok=True, messages=[])

    def _check_spelling(self, puzzle: Puzzle) -> None:
        for word in puzzle.words:
            chars = []
            for row, col, char in word.positions():
                if not puzzle.size.contains(row, col):
                    raise ValidationError(f"Word {word.id!r} leaves the grid at ({row},{col})")
                cell = puzzle.cell(row, col)
                if char == " ":
                    if cell.type not in (CellType.SPACE, CellType.PLACEHOLDER):
                        raise ValidationError(
                            f"Word {word.id!r} expects a separator at ({row},{col})"
                        )
                    chars.append(" ")
                else:
                    chars.append(cell.letter)
            if "".join(chars) != word.word:
                raise ValidationError(f"Word {word.id!r} reads {''.join(chars)!r} on the grid")

    def _check_intersections(self, puzzle: Puzzle) -> None:
        claimed: Dict[Tuple[int, int], Tuple[str, str]] = {}
        for word in puzzle.words:
            for row, col, char in word.positions():
                if char == " ":
                    continue
                previous = claimed.get((row, col))
                if previous is not None and previous[1] != char:
                    raise ValidationError(
                        f"Words {previous[0]!r} and {word.id!r} disagree at ({row},{col})"
                    )
                claimed[(row, col)] = (word.id, char)

    def _check_letter_types(self, puzzle: Puzzle) -> None:
        for cell in puzzle.cells():
            if bool(cell.letter) != cell.is_letter():
                raise ValidationError(
                    f"Cell ({cell.row},{cell.col}) of type {cell.type.value} has letter {cell.letter!r}"
                )

    def _check_numbering(self, puzzle: Puzzle) -> None:
        starts = set()
        for word in puzzle.words:
            row, col = word.letter_positions()[0]
            cell = puzzle.cell(row, col)
            if cell.type != CellType.START or cell.number != word.number:
                raise ValidationError(
                    f"Word {word.id!r} starts at ({row},{col}) without clue number {word.number}"
                )
            starts.add((row, col))
        for cell in puzzle.cells():
            if cell.number is not None and (cell.row, cell.col) not in starts:
                raise ValidationError(f"Cell ({cell.row},{cell.col}) numbered but starts no word")

    def _check_minimal_bounds(self, puzzle: Puzzle) -> None:
        rows, cols = puzzle.size.rows, puzzle.size.cols
        edges = {
            "top row": puzzle.grid[0],
            "bottom row": puzzle.grid[rows - 1],
            "left column": [puzzle.cell(r, 0) for r in range(rows)],
            "right column": [puzzle.cell(r, cols - 1) for r in range(rows)],
        }
        for name, cells in edges.items():
            if all(cell.type == CellType.EMPTY for cell in cells):
                raise ValidationError(f"Grid is not trimmed: {name} is empty")
