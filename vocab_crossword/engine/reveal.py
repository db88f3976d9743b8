"""Difficulty-driven pre-reveal of letters."""

from __future__ import annotations

import math
import random
from typing import Dict, Optional, Set, Tuple

from ..core.constants import DIFFICULTY_LEVELS, DifficultyLevel
from ..core.models import Puzzle
from ..utils.logger import get_logger


LOGGER = get_logger(__name__)

Position = Tuple[int, int]


def difficulty_level(level: int) -> Optional[DifficultyLevel]:
    for entry in DIFFICULTY_LEVELS:
        if entry.level == level:
            return entry
    return None


class RevealPlanner:
    """Pre-fills a share of every word's letters, always keeping one hidden."""

    def __init__(self, rng: Optional[random.Random] = None) -> None:
        self.rng = rng or random.Random()

    def apply_reveal(self, puzzle: Puzzle, reveal_percent: float) -> Puzzle:
        """Return ``puzzle`` with revealed cells' ``value`` set to their letter.

        Per word, ``floor(n * percent / 100)`` letters are revealed, capped at
        ``n - 1``. A position is skipped when revealing it would leave some
        word through that cell with no hidden letter.
        """

        if not 0 <= reveal_percent <= 100:
            raise ValueError(f"reveal_percent must be within 0..100, got {reveal_percent}")
        if reveal_percent == 0:
            return puzzle

        revealed: Set[Position] = {
            (cell.row, cell.col) for cell in puzzle.cells() if cell.is_letter() and cell.value
        }
        values: Dict[Position, str] = {}

        for word in puzzle.words:
            positions = word.letter_positions()
            budget = min(math.floor(len(positions) * reveal_percent / 100), len(positions) - 1)
            if budget <= 0:
                continue

            shuffled = list(positions)
            self.rng.shuffle(shuffled)
            taken = 0
            for position in shuffled:
                if taken >= budget:
                    break
                if position in revealed:
                    taken += 1
                    continue
                if self._would_complete_a_word(puzzle, position, revealed):
                    continue
                row, col = position
                values[position] = puzzle.cell(row, col).letter
                revealed.add(position)
                taken += 1

        LOGGER.info("Revealed %s letters at %s%%", len(values), reveal_percent)
        return puzzle.with_values(values)

    def apply_difficulty_reveal(self, puzzle: Puzzle, level: int) -> Puzzle:
        entry = difficulty_level(level)
        if entry is None:
            LOGGER.warning("Unknown difficulty level %s, nothing revealed", level)
            return puzzle
        LOGGER.debug("Difficulty %s (%s) reveals %s%%", entry.level, entry.name, entry.reveal_percent)
        return self.apply_reveal(puzzle, entry.reveal_percent)

    @staticmethod
    def _would_complete_a_word(puzzle: Puzzle, position: Position, revealed: Set[Position]) -> bool:
        row, col = position
        for word in puzzle.words_at(row, col):
            positions = word.letter_positions()
            if len(positions) < 2:
                continue
            hidden = [p for p in positions if p not in revealed and p != position]
            if not hidden:
                return True
        return False


def apply_reveal(puzzle: Puzzle, reveal_percent: float, rng: Optional[random.Random] = None) -> Puzzle:
    return RevealPlanner(rng).apply_reveal(puzzle, reveal_percent)


def apply_difficulty_reveal(puzzle: Puzzle, level: int, rng: Optional[random.Random] = None) -> Puzzle:
    return RevealPlanner(rng).apply_difficulty_reveal(puzzle, level)
