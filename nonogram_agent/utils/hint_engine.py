"""
Hint Engine for nonogram boards.

Computes the row and column clues shown next to the grid: for every line,
the lengths of its runs of consecutive filled cells.
"""

from dataclasses import dataclass
from typing import Iterable, List

import numpy as np


@dataclass
class BoardHints:
    """Clues for a whole board."""
    row_hints: List[List[int]]
    col_hints: List[List[int]]


def calculate_line_hints(line: Iterable) -> List[int]:
    """
    Compute the run lengths of filled cells in one row or column.

    Args:
        line: Cells in reading order; truthy means filled

    Returns:
        Run lengths in order, or [0] for a line with no filled cell
    """
    hints: List[int] = []
    count = 0
    for cell in line:
        if cell:
            count += 1
        elif count:
            hints.append(count)
            count = 0
    if count:
        hints.append(count)
    return hints or [0]


def calculate_hints(grid: np.ndarray) -> BoardHints:
    """
    Compute clues for every row (left to right) and column (top to bottom).

    Args:
        grid: Boolean solution grid of shape (rows, cols)

    Returns:
        BoardHints with one hint sequence per row and per column
    """
    grid = np.asarray(grid, dtype=bool)
    if grid.ndim != 2 or grid.size == 0:
        return BoardHints(row_hints=[], col_hints=[])

    return BoardHints(
        row_hints=[calculate_line_hints(row) for row in grid],
        col_hints=[calculate_line_hints(col) for col in grid.T],
    )
