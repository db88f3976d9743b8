import io
import unittest

from vocab_crossword.core.constants import Direction
from vocab_crossword.core.models import BuildResult, Candidate
from vocab_crossword.engine.grid import WorkingGrid
from vocab_crossword.engine.trimmer import GridTrimmer
from vocab_crossword.utils.pretty import format_clues, format_puzzle, print_puzzle_stats


def small_puzzle():
    grid = WorkingGrid(8)
    grid.place_word("MAE GERI", "Front kick", 0, 0, Direction.ACROSS)
    grid.place_word("AGE", "Raise", 0, 1, Direction.DOWN)
    return GridTrimmer().trim(grid.to_puzzle())


class PrettyTests(unittest.TestCase):
    def test_format_puzzle_hides_letters_until_solved(self) -> None:
        puzzle = small_puzzle()
        hidden = format_puzzle(puzzle)
        self.assertNotIn("M", hidden.splitlines()[2])
        self.assertIn("#", hidden)
        solution = format_puzzle(puzzle, show_solution=True)
        self.assertIn("M", solution.splitlines()[2])

    def test_format_clues_counts_letters_only(self) -> None:
        text = format_clues(small_puzzle().words, Direction.ACROSS)
        self.assertIn("1. Front kick (7)", text)

    def test_stats_report_revealed_and_dropped_candidates(self) -> None:
        puzzle = small_puzzle().with_value(0, 0, "M")
        stream = io.StringIO()
        dropped = [Candidate("XYZ", "Nothing"), Candidate("", "Blank entry")]
        print_puzzle_stats(BuildResult(puzzle=puzzle, dropped=dropped), stream=stream)
        output = stream.getvalue()
        self.assertIn("Pre-revealed:  1", output)
        self.assertIn("Placed:        2 (1 across, 1 down)", output)
        self.assertIn("Dropped:       XYZ, <blank>", output)
        self.assertNotIn("''", output)

    def test_stats_without_puzzle(self) -> None:
        stream = io.StringIO()
        print_puzzle_stats(BuildResult(puzzle=None), stream=stream)
        self.assertIn("Not enough content", stream.getvalue())


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
