"""Bounding-box trimming of the working grid."""

from __future__ import annotations

from typing import List, Optional, Tuple

from ..core.constants import CellType, PlaceholderPosition
from ..core.models import Cell, Puzzle, empty_cell, placeholder_cell
from ..utils.logger import get_logger
from .placeholder import PlaceholderSpec


LOGGER = get_logger(__name__)


class GridTrimmer:
    """Crops a puzzle to its occupied cells and re-indexes coordinates."""

    def trim(self, puzzle: Puzzle, placeholder: Optional[PlaceholderSpec] = None) -> Puzzle:
        bounds = self.bounding_box(puzzle)
        if bounds is None:
            LOGGER.warning("Nothing to trim: grid has no occupied cells")
            trimmed = puzzle
        else:
            min_row, min_col, max_row, max_col = bounds
            rows = [
                [
                    puzzle.cell(r, c).moved_to(r - min_row, c - min_col)
                    for c in range(min_col, max_col + 1)
                ]
                for r in range(min_row, max_row + 1)
            ]
            words = [word.shifted(-min_row, -min_col) for word in puzzle.words]
            trimmed = Puzzle.from_rows(rows, words)
            LOGGER.info(
                "Trimmed grid from %sx%s to %sx%s",
                puzzle.size.rows,
                puzzle.size.cols,
                trimmed.size.rows,
                trimmed.size.cols,
            )

        if placeholder is not None and placeholder.position == PlaceholderPosition.TOP_RIGHT:
            return self.expand_with_top_right_placeholder(trimmed, placeholder)
        return trimmed

    @staticmethod
    def bounding_box(puzzle: Puzzle) -> Optional[Tuple[int, int, int, int]]:
        """``(min_row, min_col, max_row, max_col)`` over every non-empty cell."""

        occupied = [cell for cell in puzzle.cells() if cell.type != CellType.EMPTY]
        if not occupied:
            return None
        return (
            min(cell.row for cell in occupied),
            min(cell.col for cell in occupied),
            max(cell.row for cell in occupied),
            max(cell.col for cell in occupied),
        )

    @staticmethod
    def expand_with_top_right_placeholder(puzzle: Puzzle, placeholder: PlaceholderSpec) -> Puzzle:
        """Append a placeholder block to the right of the grid, top-aligned.

        The crossword keeps its coordinates in the top-left, so words need no
        re-indexing.
        """

        base_rows, base_cols = puzzle.size.rows, puzzle.size.cols
        rows = max(base_rows, placeholder.rows)
        cols = base_cols + placeholder.cols
        block_col = cols - placeholder.cols

        grid: List[List[Cell]] = []
        for r in range(rows):
            row: List[Cell] = []
            for c in range(cols):
                if c >= block_col and r < placeholder.rows:
                    row.append(placeholder_cell(r, c))
                elif r < base_rows and c < base_cols:
                    row.append(puzzle.cell(r, c))
                else:
                    row.append(empty_cell(r, c))
            grid.append(row)

        LOGGER.debug("Expanded grid to %sx%s with top-right placeholder", rows, cols)
        return Puzzle.from_rows(grid, list(puzzle.words))
