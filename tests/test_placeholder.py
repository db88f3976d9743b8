import unittest

from vocab_crossword.core.constants import Bounds, PlaceholderPosition
from vocab_crossword.engine.placeholder import (DESKTOP_LIMITS, MOBILE_LIMITS, PlaceholderSpec,
                                                compute_placeholder_size)


class ComputePlaceholderSizeTests(unittest.TestCase):
    def test_landscape_image_fills_width(self) -> None:
        spec = compute_placeholder_size(1600, 900, DESKTOP_LIMITS)
        self.assertEqual((spec.rows, spec.cols), (6, 12))

    def test_portrait_image_is_capped_by_height(self) -> None:
        spec = compute_placeholder_size(900, 1600, DESKTOP_LIMITS)
        self.assertEqual((spec.rows, spec.cols), (12, 6))

    def test_mobile_limits(self) -> None:
        spec = compute_placeholder_size(500, 500, MOBILE_LIMITS, PlaceholderPosition.TOP_RIGHT)
        self.assertEqual((spec.rows, spec.cols), (8, 8))
        self.assertEqual(spec.position, PlaceholderPosition.TOP_RIGHT)

    def test_extreme_aspect_keeps_at_least_one_cell(self) -> None:
        spec = compute_placeholder_size(5000, 10, Bounds(rows=4, cols=4))
        self.assertEqual((spec.rows, spec.cols), (1, 4))

    def test_invalid_dimensions(self) -> None:
        with self.assertRaises(ValueError):
            compute_placeholder_size(0, 100)


class PlaceholderSpecTests(unittest.TestCase):
    def test_rejects_empty_block(self) -> None:
        with self.assertRaises(ValueError):
            PlaceholderSpec(0, 3)

    def test_origin_is_centred(self) -> None:
        self.assertEqual(PlaceholderSpec(4, 6).origin_in(40), (18, 17))


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
