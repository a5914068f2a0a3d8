"""
Unit tests for nonogram clue calculation.
"""

import numpy as np

from nonogram_agent.utils.hint_engine import calculate_hints, calculate_line_hints


class TestLineHints:
    """Test clues for a single line."""

    def test_empty_line(self):
        assert calculate_line_hints([0] * 7) == [0]

    def test_zero_length_line(self):
        assert calculate_line_hints([]) == [0]

    def test_example_pattern(self):
        assert calculate_line_hints([1, 1, 0, 1, 1, 1, 0, 1]) == [2, 3, 1]

    def test_full_line(self):
        assert calculate_line_hints([True] * 5) == [5]

    def test_runs_at_edges(self):
        assert calculate_line_hints([1, 0, 0, 1]) == [1, 1]

    def test_numpy_bools(self):
        assert calculate_line_hints(np.array([False, True, True, False])) == [2]


class TestBoardHints:
    """Test clues for a whole grid."""

    def test_rows_and_columns(self):
        grid = np.array([
            [1, 1, 0],
            [0, 0, 0],
            [1, 0, 1],
        ], dtype=bool)
        hints = calculate_hints(grid)

        assert hints.row_hints == [[2], [0], [1, 1]]
        assert hints.col_hints == [[1, 1], [1], [1]]

    def test_non_square(self):
        grid = np.zeros((2, 4), dtype=bool)
        grid[:, 3] = True
        hints = calculate_hints(grid)

        assert hints.row_hints == [[1], [1]]
        assert hints.col_hints == [[0], [0], [0], [2]]

    def test_empty_grid(self):
        hints = calculate_hints(np.zeros((0, 0), dtype=bool))
        assert hints.row_hints == []
        assert hints.col_hints == []

    def test_hint_values_are_plain_ints(self):
        hints = calculate_hints(np.ones((2, 2), dtype=bool))
        assert all(type(n) is int for line in hints.row_hints for n in line)
