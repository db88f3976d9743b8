"""Pretty-print helpers for crossword puzzles."""

from __future__ import annotations

import sys
from collections import Counter
from typing import TYPE_CHECKING, List, Optional, Sequence, Tuple

from ..core.constants import CellType, Direction
from ..data.normalization import letter_count

if TYPE_CHECKING:
    from ..core.models import BuildResult, Cell, Puzzle, Word


SYMBOLS = {
    CellType.EMPTY: " ",
    CellType.SPACE: "#",
    CellType.PLACEHOLDER: "X",
}


def cell_symbol(cell: "Cell", show_solution: bool = False) -> str:
    if cell.is_letter():
        if show_solution:
            return cell.letter
        return cell.value or "."
    return SYMBOLS.get(cell.type, " ")


def format_puzzle(
    puzzle: "Puzzle",
    *,
    show_solution: bool = False,
    cursor: Optional[Tuple[int, int]] = None,
) -> str:
    width = puzzle.size.cols
    header_cells = [f"{c:>2}" for c in range(width)]
    lines = ["    " + " ".join(header_cells)]
    lines.append("    " + "-" * (3 * width - 1))
    for r in range(puzzle.size.rows):
        rendered = []
        for c in range(width):
            symbol = cell_symbol(puzzle.cell(r, c), show_solution)
            rendered.append(f"[{symbol}" if cursor == (r, c) else f"{symbol:>2}")
        lines.append(f"{r:>2} | {' '.join(rendered)}")
    return "\n".join(lines)


def format_clues(words: Sequence["Word"], direction: Direction) -> str:
    selected = sorted((w for w in words if w.direction == direction), key=lambda w: w.number)
    lines = [direction.value.capitalize()]
    for word in selected:
        lines.append(f"  {word.number:>2}. {word.clue} ({letter_count(word.word)})")
    return "\n".join(lines)


def pretty_print_puzzle(puzzle: "Puzzle", *, label: str | None = None, stream=None) -> None:
    """Print the puzzle grid and clue lists in a human-friendly format."""

    stream = stream or sys.stdout
    if label:
        print(label, file=stream)
    print(format_puzzle(puzzle), file=stream)
    print(file=stream)
    print(format_clues(puzzle.words, Direction.ACROSS), file=stream)
    print(format_clues(puzzle.words, Direction.DOWN), file=stream)


def print_puzzle_stats(result: "BuildResult", *, stream=None) -> None:
    """Print grid geometry, word stats and dropped candidates."""

    stream = stream or sys.stdout
    puzzle = result.puzzle
    if puzzle is None:
        print("Not enough content to build a puzzle.", file=stream)
        return

    counts = Counter(cell.type for cell in puzzle.cells())
    total_cells = puzzle.size.rows * puzzle.size.cols
    letter_cells = counts[CellType.FILLED] + counts[CellType.START]
    revealed = sum(1 for cell in puzzle.cells() if cell.is_letter() and cell.value)

    print("--- Grid ---", file=stream)
    print(f"  Size:          {puzzle.size.rows} x {puzzle.size.cols} ({total_cells} cells)", file=stream)
    print(f"  Letters:       {letter_cells} ({letter_cells / total_cells * 100:.0f}%)", file=stream)
    print(f"  Separators:    {counts[CellType.SPACE]}", file=stream)
    print(f"  Placeholder:   {counts[CellType.PLACEHOLDER]}", file=stream)
    if revealed:
        print(f"  Pre-revealed:  {revealed}", file=stream)

    lengths: List[int] = [letter_count(word.word) for word in puzzle.words]
    across = sum(1 for word in puzzle.words if word.direction == Direction.ACROSS)
    print(file=stream)
    print("--- Words ---", file=stream)
    print(f"  Placed:        {result.placed_count} ({across} across, {result.placed_count - across} down)", file=stream)
    if lengths:
        print(f"  Length range:  {min(lengths)}-{max(lengths)} (avg {sum(lengths) / len(lengths):.1f})", file=stream)
    if result.dropped:
        print(f"  Dropped:       {', '.join(c.word or '<blank>' for c in result.dropped)}", file=stream)
