import random
import unittest

from vocab_crossword.core.constants import CellType, Direction, PlaceholderPosition
from vocab_crossword.core.exceptions import SlotPlacementError
from vocab_crossword.core.models import Candidate
from vocab_crossword.data.sources import SampleWordSource
from vocab_crossword.engine.generator import (GeneratorConfig, GridBuilder, generate_puzzle,
                                              generate_puzzle_with_report)
from vocab_crossword.engine.grid import WorkingGrid
from vocab_crossword.engine.placeholder import PlaceholderSpec
from vocab_crossword.engine.session import PuzzleSession
from vocab_crossword.engine.validator import PuzzleValidator


def _candidates(*words: str):
    return [Candidate(word=w, clue=f"Clue for {w}") for w in words]


def _spell(puzzle, word) -> str:
    chars = []
    for row, col, char in word.positions():
        cell = puzzle.cell(row, col)
        chars.append(" " if char == " " else cell.letter)
    return "".join(chars)


SAMPLE = SampleWordSource("techniques", seed=0).fetch() + SampleWordSource("dojo", seed=0).fetch()


class WorkingGridTests(unittest.TestCase):
    def test_letters_cross_only_on_identical_letters(self) -> None:
        grid = WorkingGrid(10)
        grid.place_word("SEIKEN", "Fore fist", 3, 0, Direction.ACROSS)
        self.assertTrue(grid.can_place("UKE", 2, 3, Direction.DOWN))
        self.assertFalse(grid.can_place("UKE", 3, 3, Direction.DOWN))

    def test_bounds_are_enforced(self) -> None:
        grid = WorkingGrid(5)
        self.assertFalse(grid.can_place("SEIKEN", 0, 0, Direction.ACROSS))
        self.assertFalse(grid.can_place("UKE", -1, 0, Direction.DOWN))
        self.assertTrue(grid.can_place("UKE", 2, 4, Direction.DOWN))

    def test_placeholder_rejects_letters_but_accepts_spaces(self) -> None:
        grid = WorkingGrid(9)
        grid.stamp_placeholder(PlaceholderSpec(3, 1))
        # Placeholder occupies rows 3..5 of column 4.
        self.assertEqual(grid.cell(4, 4).type, CellType.PLACEHOLDER)
        self.assertFalse(grid.can_place("ABCDEFG", 4, 0, Direction.ACROSS))
        self.assertTrue(grid.can_place("ABCD EFG", 4, 0, Direction.ACROSS))

    def test_space_cells_accept_only_spaces(self) -> None:
        grid = WorkingGrid(10)
        grid.place_word("MAE GERI", "Front kick", 0, 0, Direction.ACROSS)
        self.assertEqual(grid.cell(0, 3).type, CellType.SPACE)
        self.assertFalse(grid.can_place("ABC", 0, 3, Direction.DOWN))
        self.assertTrue(grid.can_place("AE GE", 0, 1, Direction.ACROSS))

    def test_phrase_space_may_sit_inside_placeholder(self) -> None:
        grid = WorkingGrid(9)
        grid.stamp_placeholder(PlaceholderSpec(3, 1))
        word = grid.place_word("ABCD EFG", "Phrase", 4, 0, Direction.ACROSS)
        self.assertEqual(grid.cell(4, 4).type, CellType.PLACEHOLDER)
        self.assertEqual(grid.cell(4, 4).letter, "")
        self.assertEqual(_spell(grid.to_puzzle(), word), "ABCD EFG")
        result = PuzzleValidator(require_minimal_bounds=False).validate(grid.to_puzzle())
        self.assertTrue(result.ok, result.messages)

    def test_word_without_letters_is_rejected(self) -> None:
        grid = WorkingGrid(9)
        with self.assertRaises(SlotPlacementError):
            grid.place_word("   ", "Blank", 0, 0, Direction.ACROSS)
        self.assertEqual(grid.words, [])

    def test_first_word_gets_number_one_and_start_cell(self) -> None:
        grid = WorkingGrid(10)
        word = grid.place_word("SEIKEN", "Fore fist", 0, 0, Direction.ACROSS)
        self.assertEqual(word.number, 1)
        self.assertEqual(grid.cell(0, 0).type, CellType.START)
        self.assertEqual(grid.cell(0, 0).number, 1)
        self.assertEqual(grid.cell(0, 1).type, CellType.FILLED)
        self.assertIsNone(grid.cell(0, 1).number)

    def test_shared_start_cell_shares_number(self) -> None:
        grid = WorkingGrid(10)
        grid.place_word("SEIKEN", "Fore fist", 0, 0, Direction.ACROSS)
        down = grid.place_word("SHUTO", "Knife hand", 0, 0, Direction.DOWN)
        self.assertEqual(down.number, 1)
        self.assertEqual(grid.cell(0, 0).number, 1)
        third = grid.place_word("NUKITE", "Spear hand", 0, 5, Direction.DOWN)
        self.assertEqual(third.number, 2)

    def test_crossing_on_unnumbered_first_letter_promotes_to_start(self) -> None:
        grid = WorkingGrid(10)
        grid.place_word("SEIKEN", "Fore fist", 0, 0, Direction.ACROSS)
        word = grid.place_word("KIAI", "Spirit shout", 0, 3, Direction.DOWN)
        cell = grid.cell(0, 3)
        self.assertEqual(cell.type, CellType.START)
        self.assertEqual(cell.number, word.number)
        self.assertEqual(cell.direction, Direction.ACROSS)

    def test_invalid_placement_raises(self) -> None:
        grid = WorkingGrid(10)
        grid.place_word("SEIKEN", "Fore fist", 0, 0, Direction.ACROSS)
        with self.assertRaises(SlotPlacementError):
            grid.place_word("URAKEN", "Back fist", 0, 0, Direction.DOWN)


class GridBuilderTests(unittest.TestCase):
    def test_insufficient_candidates_returns_none(self) -> None:
        self.assertIsNone(generate_puzzle(_candidates("AB")))
        self.assertIsNone(generate_puzzle(_candidates("SEIKEN", "UKE", "AB")))

    def test_three_candidate_scenario(self) -> None:
        puzzle = generate_puzzle(_candidates("SEIKEN", "MAE GERI", "UKE"), 40, rng=random.Random(7))
        assert puzzle is not None
        self.assertEqual(len(puzzle.words), 3)
        self.assertTrue(all(cell.value == "" for cell in puzzle.cells()))
        self.assertEqual(PuzzleSession(puzzle).progress_percent, 0)

    def test_longest_candidate_anchors_across_with_number_one(self) -> None:
        puzzle = generate_puzzle(_candidates("UKE", "SEIKEN", "MAE GERI"), rng=random.Random(1))
        assert puzzle is not None
        anchor = puzzle.words[0]
        self.assertEqual(anchor.word, "MAE GERI")
        self.assertEqual(anchor.direction, Direction.ACROSS)
        self.assertEqual(anchor.number, 1)

    def test_generated_puzzles_satisfy_layout_invariants(self) -> None:
        validator = PuzzleValidator()
        for seed in range(5):
            puzzle = generate_puzzle(SAMPLE, rng=random.Random(seed))
            assert puzzle is not None
            result = validator.validate(puzzle)
            self.assertTrue(result.ok, result.messages)
            for word in puzzle.words:
                self.assertEqual(_spell(puzzle, word), word.word)

    def test_crossing_words_agree_on_shared_cells(self) -> None:
        puzzle = generate_puzzle(SAMPLE, rng=random.Random(11))
        assert puzzle is not None
        letters = {}
        for word in puzzle.words:
            for row, col, char in word.positions():
                if char == " ":
                    continue
                self.assertEqual(letters.setdefault((row, col), char), char)

    def test_trimmed_grid_has_no_empty_edges(self) -> None:
        puzzle = generate_puzzle(SAMPLE, rng=random.Random(3))
        assert puzzle is not None
        rows, cols = puzzle.size.rows, puzzle.size.cols
        edges = [
            puzzle.grid[0],
            puzzle.grid[rows - 1],
            [puzzle.cell(r, 0) for r in range(rows)],
            [puzzle.cell(r, cols - 1) for r in range(rows)],
        ]
        for edge in edges:
            self.assertTrue(any(cell.type != CellType.EMPTY for cell in edge))

    def test_unplaceable_words_are_dropped_and_reported(self) -> None:
        result = GridBuilder(GeneratorConfig(grid_size=20), rng=random.Random(0)).build(
            _candidates("AAAA", "BBB", "CCC")
        )
        assert result.puzzle is not None
        self.assertEqual([w.word for w in result.puzzle.words], ["AAAA"])
        self.assertEqual(sorted(c.word for c in result.dropped), ["BBB", "CCC"])

    def test_invalid_and_duplicate_candidates_are_filtered(self) -> None:
        candidates = _candidates("SEIKEN", "seiken", "SEIKEN", "A" * 21, "UKE", "KIAI", " UKE")
        result = generate_puzzle_with_report(candidates, rng=random.Random(2))
        assert result.puzzle is not None
        dropped = [c.word for c in result.dropped]
        self.assertIn("seiken", dropped)
        self.assertIn("A" * 21, dropped)
        self.assertIn(" UKE", dropped)
        self.assertEqual(dropped.count("SEIKEN"), 1)
        self.assertEqual(len({w.id for w in result.puzzle.words}), len(result.puzzle.words))

    def test_center_placeholder_is_kept_free_of_letters(self) -> None:
        spec = PlaceholderSpec(4, 4)
        puzzle = generate_puzzle(SAMPLE, 40, spec, rng=random.Random(5))
        assert puzzle is not None
        placeholders = [cell for cell in puzzle.cells() if cell.type == CellType.PLACEHOLDER]
        self.assertEqual(len(placeholders), 16)
        self.assertTrue(all(cell.letter == "" for cell in placeholders))
        self.assertTrue(PuzzleValidator().validate(puzzle).ok)

    def test_top_right_placeholder_is_appended_after_trimming(self) -> None:
        spec = PlaceholderSpec(3, 5, PlaceholderPosition.TOP_RIGHT)
        puzzle = generate_puzzle(SAMPLE, 40, spec, rng=random.Random(5))
        assert puzzle is not None
        cols = puzzle.size.cols
        for r in range(3):
            for c in range(cols - 5, cols):
                self.assertEqual(puzzle.cell(r, c).type, CellType.PLACEHOLDER)
        result = PuzzleValidator(require_minimal_bounds=False).validate(puzzle)
        self.assertTrue(result.ok, result.messages)

    def test_later_matching_pair_is_tried_when_first_does_not_fit(self) -> None:
        grid = WorkingGrid(6)
        grid.place_word("SEIKEN", "Fore fist", 0, 0, Direction.ACROSS)
        builder = GridBuilder(GeneratorConfig(grid_size=6, max_attempts=1), rng=random.Random(0))
        # KEN crossing at its E would start above the grid; crossing at its K fits.
        self.assertEqual(builder._find_placement(grid, "KEN"), (0, 3, Direction.DOWN))

    def test_anchor_moves_above_centre_placeholder(self) -> None:
        spec = PlaceholderSpec(6, 6)
        config = GeneratorConfig(grid_size=40, placeholder=spec)
        result = GridBuilder(config, rng=random.Random(0)).build(_candidates("SEIKEN", "UKE", "KIAI"))
        assert result.puzzle is not None
        origin_row, _ = spec.origin_in(40)
        anchor = result.puzzle.words[0]
        self.assertEqual(anchor.word, "SEIKEN")
        self.assertEqual(anchor.start_row, origin_row - 2)
        self.assertEqual(anchor.start_col, (40 - 6) // 2)
        self.assertEqual(result.puzzle.cell(origin_row, origin_row).type, CellType.PLACEHOLDER)

    def test_seeded_builds_are_reproducible(self) -> None:
        first = generate_puzzle(SAMPLE, rng=random.Random(42))
        second = generate_puzzle(SAMPLE, rng=random.Random(42))
        self.assertEqual(first, second)

    def test_config_rejects_tiny_grid(self) -> None:
        with self.assertRaises(ValueError):
            GeneratorConfig(grid_size=2)


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
