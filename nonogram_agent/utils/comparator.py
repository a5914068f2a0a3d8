"""
Solution comparison.

A player cell is correct when it agrees with the solution on being filled.
Errors are reported per row and column rather than per cell: a wrong cell
marks both of its lines, which is how the clue highlighting works.
"""

from dataclasses import dataclass, field
from typing import Set

import numpy as np


@dataclass
class ErrorReport:
    """Rows and columns that contain at least one wrong cell."""
    rows: Set[int] = field(default_factory=set)
    cols: Set[int] = field(default_factory=set)

    @property
    def has_errors(self) -> bool:
        return bool(self.rows or self.cols)


def _mismatches(player: np.ndarray, solution: np.ndarray) -> np.ndarray:
    player = np.asarray(player, dtype=bool)
    solution = np.asarray(solution, dtype=bool)
    if player.shape != solution.shape:
        raise ValueError(
            f"Player grid shape {player.shape} does not match solution shape {solution.shape}"
        )
    return player != solution


def is_solved(player: np.ndarray, solution: np.ndarray) -> bool:
    """
    Check whether the player grid matches the solution on every cell.

    Raises:
        ValueError: If the grids have different shapes
    """
    return not _mismatches(player, solution).any()


def locate_errors(player: np.ndarray, solution: np.ndarray) -> ErrorReport:
    """
    Collect the rows and columns holding wrong cells.

    Args:
        player: Player grid
        solution: Solution grid of the same shape

    Returns:
        ErrorReport with offending row and column indices

    Raises:
        ValueError: If the grids have different shapes
    """
    wrong_rows, wrong_cols = np.nonzero(_mismatches(player, solution))
    return ErrorReport(
        rows={int(r) for r in wrong_rows},
        cols={int(c) for c in wrong_cols},
    )
