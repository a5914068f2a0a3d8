"""
Grid helpers shared by the validator, the hint engine and the game session.

Grids are numpy boolean arrays of shape (rows, cols); True means filled.
"""

import logging
from typing import Iterable, List, NamedTuple

import numpy as np

logger = logging.getLogger(__name__)


class Pixel(NamedTuple):
    """A non-white picture cell: grid coordinates plus #RRGGBB color."""
    row: int
    col: int
    color: str


def empty_grid(rows: int, cols: int) -> np.ndarray:
    """Create an all-empty boolean grid."""
    return np.zeros((rows, cols), dtype=bool)


def in_bounds(row: int, col: int, rows: int, cols: int) -> bool:
    return 0 <= row < rows and 0 <= col < cols


def build_grid(pixels: Iterable[Pixel], rows: int, cols: int) -> np.ndarray:
    """
    Build a boolean occupancy grid from pixel coordinates.

    Out-of-bounds coordinates are skipped with a warning.

    Args:
        pixels: Iterable of (row, col, color) triples
        rows: Grid height
        cols: Grid width

    Returns:
        Boolean array of shape (rows, cols)
    """
    grid = empty_grid(rows, cols)
    for row, col, _color in pixels:
        if in_bounds(row, col, rows, cols):
            grid[row, col] = True
        else:
            logger.warning(f"Skipping out-of-bounds pixel [{row}, {col}] for a {rows}x{cols} grid")
    return grid


def grid_to_strings(grid: np.ndarray, filled: str = "#", empty: str = ".") -> List[str]:
    """Render a grid as one string per row."""
    return ["".join(filled if cell else empty for cell in row) for row in grid]


def grid_from_strings(lines: List[str], filled: str = "#") -> np.ndarray:
    """
    Parse rows of characters back into a boolean grid.

    Raises:
        ValueError: If the rows have different lengths
    """
    widths = {len(line) for line in lines}
    if len(widths) > 1:
        raise ValueError(f"Grid rows have different lengths: {sorted(widths)}")
    return np.array([[ch == filled for ch in line] for line in lines], dtype=bool).reshape(
        len(lines), widths.pop() if widths else 0
    )
