"""Placeholder block sizing and lookup helpers."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional, Tuple

from ..core.constants import Bounds, CellType, PlaceholderPosition
from ..core.models import Puzzle


@dataclass(frozen=True)
class PlaceholderSpec:
    """Size and layout mode of the reserved image block."""

    rows: int
    cols: int
    position: PlaceholderPosition = PlaceholderPosition.CENTER

    def __post_init__(self) -> None:
        if self.rows < 1 or self.cols < 1:
            raise ValueError(f"Placeholder must be at least 1x1, got {self.rows}x{self.cols}")

    def origin_in(self, grid_size: int) -> Tuple[int, int]:
        """Top-left corner of a block centred in a square grid."""
        return (grid_size - self.rows) // 2, (grid_size - self.cols) // 2


DESKTOP_LIMITS = Bounds(rows=12, cols=12)
MOBILE_LIMITS = Bounds(rows=8, cols=8)


def compute_placeholder_size(
    image_width: int,
    image_height: int,
    limits: Bounds = DESKTOP_LIMITS,
    position: PlaceholderPosition = PlaceholderPosition.CENTER,
) -> PlaceholderSpec:
    """Largest block within ``limits`` that keeps the image aspect ratio."""

    if image_width <= 0 or image_height <= 0:
        raise ValueError("Image dimensions must be positive")
    aspect = image_width / image_height

    cols = limits.cols
    rows = math.floor(cols / aspect)
    if rows > limits.rows:
        rows = limits.rows
        cols = math.floor(rows * aspect)

    return PlaceholderSpec(rows=max(1, rows), cols=max(1, cols), position=position)


def placeholder_bounds(puzzle: Puzzle) -> Optional[Tuple[int, int, int, int]]:
    """Return ``(min_row, min_col, max_row, max_col)`` of placeholder cells, if any."""

    rows = [cell.row for cell in puzzle.cells() if cell.type == CellType.PLACEHOLDER]
    if not rows:
        return None
    cols = [cell.col for cell in puzzle.cells() if cell.type == CellType.PLACEHOLDER]
    return min(rows), min(cols), max(rows), max(cols)
