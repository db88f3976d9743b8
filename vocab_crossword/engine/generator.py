"""Crossword layout orchestration.

Words are laid out greedily:
  1. The longest candidate anchors the grid horizontally near the centre.
  2. Every other candidate is crossed over a randomly chosen placed word,
     trying every pair of matching letters, for a bounded number of attempts.
Candidates that never find a valid crossing are dropped and reported.
"""

from __future__ import annotations

import random
from dataclasses import dataclass
from typing import List, Optional, Sequence, Set, Tuple

from ..core.constants import (DEFAULT_GRID_SIZE, DEFAULT_MAX_ATTEMPTS, MAX_WORD_LENGTH,
                              MIN_CANDIDATES, MIN_WORD_LENGTH, Direction, PlaceholderPosition)
from ..core.models import BuildResult, Candidate, Puzzle
from ..data.normalization import is_valid_word
from ..utils.logger import get_logger
from .grid import WorkingGrid
from .placeholder import PlaceholderSpec
from .trimmer import GridTrimmer


LOGGER = get_logger(__name__)

Placement = Tuple[int, int, Direction]


@dataclass
class GeneratorConfig:
    grid_size: int = DEFAULT_GRID_SIZE
    placeholder: Optional[PlaceholderSpec] = None
    max_attempts: int = DEFAULT_MAX_ATTEMPTS
    min_candidates: int = MIN_CANDIDATES
    min_word_length: int = MIN_WORD_LENGTH
    max_word_length: int = MAX_WORD_LENGTH
    seed: Optional[int] = None

    def __post_init__(self) -> None:
        if self.grid_size < self.min_word_length:
            raise ValueError(
                f"Grid size {self.grid_size} cannot hold words of {self.min_word_length} letters"
            )
        if self.max_attempts < 1:
            raise ValueError("max_attempts must be positive")

    def make_rng(self) -> random.Random:
        return random.Random(self.seed)


class GridBuilder:
    """Lays candidates onto an oversized working grid."""

    def __init__(self, config: Optional[GeneratorConfig] = None, rng: Optional[random.Random] = None) -> None:
        self.config = config or GeneratorConfig()
        self.rng = rng or self.config.make_rng()

    # ------------------------------------------------------------------
    # Public entrypoint
    # ------------------------------------------------------------------
    def build(
        self,
        candidates: Sequence[Candidate],
        grid_size: Optional[int] = None,
        placeholder: Optional[PlaceholderSpec] = None,
    ) -> BuildResult:
        size = grid_size or self.config.grid_size
        placeholder = placeholder or self.config.placeholder

        accepted, dropped = self._select_candidates(candidates)
        if len(accepted) < self.config.min_candidates:
            LOGGER.info(
                "Insufficient content: %s usable candidates (minimum %s)",
                len(accepted),
                self.config.min_candidates,
            )
            return BuildResult(puzzle=None, dropped=list(candidates))

        grid = WorkingGrid(size)
        center_placeholder = placeholder is not None and placeholder.position == PlaceholderPosition.CENTER
        if center_placeholder:
            grid.stamp_placeholder(placeholder)

        anchor, rest = accepted[0], accepted[1:]
        if not self._place_anchor(grid, anchor, placeholder if center_placeholder else None):
            LOGGER.warning("Anchor word %r does not fit a %sx%s grid", anchor.word, size, size)
            return BuildResult(puzzle=None, dropped=list(candidates))

        for candidate in rest:
            placement = self._find_placement(grid, candidate.word)
            if placement is None:
                LOGGER.debug("Dropping %r: no valid crossing found", candidate.word)
                dropped.append(candidate)
                continue
            row, col, direction = placement
            grid.place_word(candidate.word, candidate.clue, row, col, direction)
            LOGGER.debug("Placed %r at (%s,%s) %s", candidate.word, row, col, direction.value)

        LOGGER.info(
            "Placed %s/%s candidates (%s dropped)",
            len(grid.words),
            len(candidates),
            len(dropped),
        )
        return BuildResult(puzzle=grid.to_puzzle(), dropped=dropped)

    # ------------------------------------------------------------------
    # Candidate selection
    # ------------------------------------------------------------------
    def _select_candidates(
        self, candidates: Sequence[Candidate]
    ) -> Tuple[List[Candidate], List[Candidate]]:
        accepted: List[Candidate] = []
        dropped: List[Candidate] = []
        seen: Set[str] = set()
        for candidate in candidates:
            word = candidate.word
            if not is_valid_word(word, self.config.min_word_length, self.config.max_word_length):
                dropped.append(candidate)
                continue
            if word in seen:
                LOGGER.warning("Duplicate word %r ignored (first clue kept)", word)
                dropped.append(candidate)
                continue
            seen.add(word)
            accepted.append(candidate)
        # Longer words anchor more intersections; sort is stable for ties.
        accepted.sort(key=lambda item: len(item.word), reverse=True)
        return accepted, dropped

    # ------------------------------------------------------------------
    # Placement
    # ------------------------------------------------------------------
    def _place_anchor(
        self,
        grid: WorkingGrid,
        anchor: Candidate,
        placeholder: Optional[PlaceholderSpec],
    ) -> bool:
        size = grid.size
        start_col = (size - len(anchor.word)) // 2
        start_row = size // 2
        if placeholder is not None:
            placeholder_row, _ = placeholder.origin_in(size)
            start_row = max(0, placeholder_row - 2)

        rows = [start_row] + [r for r in range(size) if r != start_row]
        for row in rows:
            if grid.can_place(anchor.word, row, start_col, Direction.ACROSS):
                grid.place_word(anchor.word, anchor.clue, row, start_col, Direction.ACROSS)
                return True
        return False

    def _find_placement(self, grid: WorkingGrid, word: str) -> Optional[Placement]:
        for _ in range(self.config.max_attempts):
            existing = self.rng.choice(grid.words)
            direction = existing.direction.opposite()
            dr, dc = direction.step
            for cross_row, cross_col, existing_char in existing.positions():
                if existing_char == " ":
                    continue
                for index, char in enumerate(word):
                    if char != existing_char:
                        continue
                    start_row = cross_row - dr * index
                    start_col = cross_col - dc * index
                    if grid.can_place(word, start_row, start_col, direction):
                        return start_row, start_col, direction
        return None


def generate_puzzle_with_report(
    candidates: Sequence[Candidate],
    grid_size: int = DEFAULT_GRID_SIZE,
    placeholder: Optional[PlaceholderSpec] = None,
    rng: Optional[random.Random] = None,
) -> BuildResult:
    """Build and trim a puzzle, keeping the list of dropped candidates."""

    config = GeneratorConfig(grid_size=grid_size, placeholder=placeholder)
    result = GridBuilder(config, rng=rng).build(candidates)
    if result.puzzle is None:
        return result
    trimmed = GridTrimmer().trim(result.puzzle, placeholder)
    return BuildResult(puzzle=trimmed, dropped=result.dropped)


def generate_puzzle(
    candidates: Sequence[Candidate],
    grid_size: int = DEFAULT_GRID_SIZE,
    placeholder: Optional[PlaceholderSpec] = None,
    rng: Optional[random.Random] = None,
) -> Optional[Puzzle]:
    """Return a trimmed puzzle, or ``None`` when there is not enough content."""

    return generate_puzzle_with_report(candidates, grid_size, placeholder, rng).puzzle
