"""Working grid used while laying words out."""

from __future__ import annotations

from dataclasses import replace
from typing import List

from ..core.constants import Bounds, CellType, Direction
from ..core.exceptions import SlotPlacementError
from ..core.models import Cell, Puzzle, Word, empty_cell, placeholder_cell
from ..utils.logger import get_logger
from .placeholder import PlaceholderSpec


LOGGER = get_logger(__name__)


class WorkingGrid:
    """Square scratch canvas with placement helpers.

    Cells are frozen, so every write swaps the cell object in place in the
    canvas. The canvas is private to a single build and frozen into a
    :class:`Puzzle` by :meth:`to_puzzle`.
    """

    def __init__(self, size: int) -> None:
        self.bounds = Bounds(rows=size, cols=size)
        self.cells: List[List[Cell]] = [
            [empty_cell(r, c) for c in range(size)] for r in range(size)
        ]
        self.words: List[Word] = []
        self._next_number = 1

    @property
    def size(self) -> int:
        return self.bounds.rows

    # ------------------------------------------------------------------
    # Initialization helpers
    # ------------------------------------------------------------------
    def stamp_placeholder(self, spec: PlaceholderSpec) -> None:
        """Reserve a centred ``spec.rows x spec.cols`` block, clipped to the grid."""

        start_row, start_col = spec.origin_in(self.size)
        LOGGER.debug(
            "Stamping placeholder at (%s,%s) size %sx%s", start_row, start_col, spec.rows, spec.cols
        )
        for r in range(start_row, start_row + spec.rows):
            for c in range(start_col, start_col + spec.cols):
                if self.bounds.contains(r, c):
                    self.cells[r][c] = placeholder_cell(r, c)

    # ------------------------------------------------------------------
    # Word placement
    # ------------------------------------------------------------------
    def can_place(self, word: str, start_row: int, start_col: int, direction: Direction) -> bool:
        dr, dc = direction.step
        end_row = start_row + dr * (len(word) - 1)
        end_col = start_col + dc * (len(word) - 1)
        if not (self.bounds.contains(start_row, start_col) and self.bounds.contains(end_row, end_col)):
            return False

        for index, char in enumerate(word):
            cell = self.cells[start_row + dr * index][start_col + dc * index]
            if cell.type == CellType.EMPTY:
                continue
            if cell.type in (CellType.SPACE, CellType.PLACEHOLDER):
                if char != " ":
                    return False
                continue
            if cell.letter != char:
                return False
        return True

    def place_word(
        self,
        word: str,
        clue: str,
        start_row: int,
        start_col: int,
        direction: Direction,
    ) -> Word:
        if not self.can_place(word, start_row, start_col, direction):
            raise SlotPlacementError(
                f"Cannot place {word!r} at ({start_row},{start_col}) {direction.value}"
            )

        dr, dc = direction.step
        first_index = next((i for i, char in enumerate(word) if char != " "), None)
        if first_index is None:
            raise SlotPlacementError(f"{word!r} has no letters to place")
        number = self._number_start(start_row + dr * first_index, start_col + dc * first_index)

        for index, char in enumerate(word):
            row, col = start_row + dr * index, start_col + dc * index
            existing = self.cells[row][col]
            if existing.type == CellType.PLACEHOLDER:
                continue
            if char == " ":
                if existing.type == CellType.EMPTY:
                    self.cells[row][col] = Cell(row=row, col=col, type=CellType.SPACE)
                continue
            if existing.type == CellType.EMPTY:
                is_start = index == first_index
                self.cells[row][col] = Cell(
                    row=row,
                    col=col,
                    letter=char,
                    type=CellType.START if is_start else CellType.FILLED,
                    word_id=word,
                    direction=direction,
                    number=number if is_start else None,
                )

        placed = Word(
            id=word,
            word=word,
            clue=clue,
            direction=direction,
            start_row=start_row,
            start_col=start_col,
            number=number,
        )
        self.words.append(placed)
        return placed

    def _number_start(self, row: int, col: int) -> int:
        """Clue number for a word whose first letter lands on ``(row, col)``.

        Crossing an already numbered cell shares its number. Crossing an
        unnumbered letter promotes that cell to a START cell.
        """

        existing = self.cells[row][col]
        if existing.number is not None:
            return existing.number
        number = self._take_number()
        if existing.type != CellType.EMPTY:
            self.cells[row][col] = replace(existing, type=CellType.START, number=number)
        return number

    def _take_number(self) -> int:
        number = self._next_number
        self._next_number += 1
        return number

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    def cell(self, row: int, col: int) -> Cell:
        return self.cells[row][col]

    def to_puzzle(self) -> Puzzle:
        return Puzzle.from_rows(self.cells, self.words)
