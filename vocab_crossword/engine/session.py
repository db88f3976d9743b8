"""Interactive fill-in session over a generated puzzle."""

from __future__ import annotations

import math
from typing import FrozenSet, List, Optional, Set, Tuple, Union

from ..core.constants import ArrowKey, Direction
from ..core.models import Cell, Puzzle, Word
from ..utils.logger import get_logger


LOGGER = get_logger(__name__)

Position = Tuple[int, int]


class PuzzleSession:
    """Selection, caret movement, letter entry and completion tracking.

    The session never touches the layout; it only swaps in new puzzle
    snapshots with updated cell values. Every mutating call returns the
    current snapshot. Invalid operations are silent no-ops.
    """

    def __init__(self, puzzle: Puzzle, direction: Direction = Direction.ACROSS) -> None:
        self.puzzle = puzzle
        self.selected_cell: Optional[Position] = None
        self.current_direction = direction
        self._completed: Set[str] = set()
        for word in puzzle.words:
            if self._is_word_complete(word):
                self._completed.add(word.id)

    # ------------------------------------------------------------------
    # Derived state
    # ------------------------------------------------------------------
    @property
    def completed_word_ids(self) -> FrozenSet[str]:
        return frozenset(self._completed)

    @property
    def progress_percent(self) -> int:
        total = len(self.puzzle.words)
        if not total:
            return 0
        return math.floor(100 * len(self._completed) / total + 0.5)

    @property
    def is_solved(self) -> bool:
        return bool(self.puzzle.words) and len(self._completed) == len(self.puzzle.words)

    @property
    def active_word(self) -> Optional[Word]:
        if self.selected_cell is None:
            return None
        row, col = self.selected_cell
        for word in self.puzzle.words:
            if word.direction == self.current_direction and word.covers(row, col):
                return word
        return None

    def clue_list(self, direction: Direction) -> List[Word]:
        return sorted(
            (word for word in self.puzzle.words if word.direction == direction),
            key=lambda word: word.number,
        )

    # ------------------------------------------------------------------
    # Selection and navigation
    # ------------------------------------------------------------------
    def select_cell(self, row: int, col: int) -> Puzzle:
        cell = self._playable_cell(row, col)
        if cell is None:
            return self.puzzle
        if self.selected_cell == (row, col):
            self.current_direction = self.current_direction.opposite()
        else:
            self.selected_cell = (row, col)
            if cell.direction is not None:
                self.current_direction = cell.direction
        LOGGER.debug("Selected (%s,%s) %s", row, col, self.current_direction.value)
        return self.puzzle

    def move(self, key: Union[ArrowKey, str]) -> Puzzle:
        try:
            arrow = ArrowKey(key)
        except ValueError:
            return self.puzzle
        if self.selected_cell is None:
            return self.puzzle

        self.current_direction = arrow.direction
        dr, dc = arrow.step
        row, col = self.selected_cell
        row, col = row + dr, col + dc
        while self.puzzle.size.contains(row, col):
            if not self.puzzle.cell(row, col).is_blocked():
                self.selected_cell = (row, col)
                break
            row, col = row + dr, col + dc
        return self.puzzle

    # ------------------------------------------------------------------
    # Letter entry
    # ------------------------------------------------------------------
    def input_letter(self, char: str) -> Puzzle:
        if self.selected_cell is None or not _is_letter_key(char):
            return self.puzzle
        row, col = self.selected_cell
        cell = self._editable_cell(row, col)
        if cell is None:
            return self.puzzle

        value = char.upper()
        self._write(row, col, value)
        if value == cell.letter:
            self._advance(row, col)
        return self.puzzle

    def drop_letter(self, row: int, col: int, char: str) -> Puzzle:
        """Place a dragged letter onto ``(row, col)`` without moving the caret."""

        if not _is_letter_key(char) or self._editable_cell(row, col) is None:
            return self.puzzle
        self._write(row, col, char.upper())
        return self.puzzle

    def backspace(self) -> Puzzle:
        if self.selected_cell is None:
            return self.puzzle
        row, col = self.selected_cell
        if self._editable_cell(row, col) is None:
            return self.puzzle

        self.puzzle = self.puzzle.with_value(row, col, "")
        dr, dc = self.current_direction.step
        prev_row, prev_col = row - dr, col - dc
        if self.puzzle.size.contains(prev_row, prev_col) and not self.puzzle.cell(prev_row, prev_col).is_blocked():
            self.selected_cell = (prev_row, prev_col)
        return self.puzzle

    def clear(self) -> Puzzle:
        if self.selected_cell is None:
            return self.puzzle
        row, col = self.selected_cell
        if self._editable_cell(row, col) is not None:
            self.puzzle = self.puzzle.with_value(row, col, "")
        return self.puzzle

    def hint(self) -> Puzzle:
        if self.selected_cell is None:
            return self.puzzle
        return self.reveal_cell(*self.selected_cell)

    def reveal_cell(self, row: int, col: int) -> Puzzle:
        cell = self._playable_cell(row, col)
        if cell is None or cell.is_locked():
            return self.puzzle
        self._write(row, col, cell.letter)
        return self.puzzle

    # ------------------------------------------------------------------
    # Completion
    # ------------------------------------------------------------------
    def check_word_completion(self, row: int, col: int) -> List[str]:
        """Record words through ``(row, col)`` that are now fully correct."""

        newly_completed: List[str] = []
        for word in self.puzzle.words_at(row, col):
            if word.id in self._completed or not self._is_word_complete(word):
                continue
            self._completed.add(word.id)
            newly_completed.append(word.id)
            LOGGER.debug("Word %r completed", word.id)
        if newly_completed and self.is_solved:
            LOGGER.info("Puzzle solved: %s words", len(self.puzzle.words))
        return newly_completed

    def _is_word_complete(self, word: Word) -> bool:
        return all(
            self.puzzle.cell(row, col).value == self.puzzle.cell(row, col).letter
            for row, col in word.letter_positions()
        )

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    def _playable_cell(self, row: int, col: int) -> Optional[Cell]:
        if not self.puzzle.size.contains(row, col):
            return None
        cell = self.puzzle.cell(row, col)
        return None if cell.is_blocked() else cell

    def _editable_cell(self, row: int, col: int) -> Optional[Cell]:
        cell = self._playable_cell(row, col)
        if cell is None or cell.is_locked():
            return None
        return cell

    def _write(self, row: int, col: int, value: str) -> None:
        self.puzzle = self.puzzle.with_value(row, col, value)
        self.check_word_completion(row, col)

    def _advance(self, row: int, col: int) -> None:
        """Move past ``(row, col)`` to the next unsolved playable cell; stops at the grid edge."""

        dr, dc = self.current_direction.step
        row, col = row + dr, col + dc
        while self.puzzle.size.contains(row, col):
            cell = self.puzzle.cell(row, col)
            if not cell.is_blocked() and not cell.is_locked():
                self.selected_cell = (row, col)
                return
            row, col = row + dr, col + dc


def _is_letter_key(char: str) -> bool:
    return len(char) == 1 and char.isascii() and char.isalpha()
