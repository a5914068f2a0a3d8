"""
Full-line density check.

A row or column with every cell filled gives the player a free line, so a
picture may only contain a limited share of them. The allowed share depends
on difficulty (see config.FULL_LINE_THRESHOLDS).
"""

import logging
import math
from typing import Sequence, Tuple

import numpy as np

from ..config import get_full_line_threshold
from .grid import Pixel, build_grid

logger = logging.getLogger(__name__)


def count_full_lines(grid: np.ndarray) -> Tuple[int, int]:
    """
    Count completely filled rows and columns.

    Returns:
        (full_rows, full_cols)
    """
    if grid.size == 0:
        return 0, 0
    return int(grid.all(axis=1).sum()), int(grid.all(axis=0).sum())


def full_line_limits(rows: int, cols: int, difficulty: int) -> Tuple[int, int]:
    """
    Get the maximum number of full rows and full columns allowed.

    Limits are rounded up: a 10x10 grid at 20% allows 2 of each.
    """
    threshold = get_full_line_threshold(difficulty)
    # Round before ceil so 10 * 0.3 stays 3 instead of 3.0000000000000004
    return (
        math.ceil(round(rows * threshold, 9)),
        math.ceil(round(cols * threshold, 9)),
    )


def has_too_many_full_lines(
    pixels: Sequence[Pixel],
    rows: int,
    cols: int,
    difficulty: int,
) -> bool:
    """
    Check whether a pixel set fills too many complete rows or columns.

    Args:
        pixels: Non-white pixels; out-of-bounds ones are ignored with a warning
        rows: Grid height
        cols: Grid width
        difficulty: Difficulty level selecting the allowed share

    Returns:
        True if full rows exceed the row limit or full columns exceed the
        column limit
    """
    if not pixels:
        return False

    grid = build_grid(pixels, rows, cols)
    full_rows, full_cols = count_full_lines(grid)
    row_limit, col_limit = full_line_limits(rows, cols, difficulty)

    if full_rows > row_limit or full_cols > col_limit:
        logger.warning(
            f"Validation failed: found {full_rows} full rows (limit {row_limit}) "
            f"and {full_cols} full columns (limit {col_limit})"
        )
        return True

    return False
