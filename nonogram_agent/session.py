"""
Game Session

Holds the state of one nonogram game: the solution derived from the
generated pixels, the player's grid, the clues and what has been revealed.
Adapters (the HTTP API and the console game) drive it through plain method
calls.
"""

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

import numpy as np

from .config import get_fill_percentage, validate_difficulty, validate_dimensions
from .errors import GameStateError
from .generator import GeneratedPuzzle, PixelArtGenerator
from .utils.comparator import ErrorReport, is_solved, locate_errors
from .utils.grid import Pixel, build_grid, empty_grid, grid_to_strings, in_bounds
from .utils.hint_engine import BoardHints, calculate_hints
from .utils.response_parser import clean_description

logger = logging.getLogger(__name__)


@dataclass
class Reveal:
    """Solution colors and cleaned description shown once a game is over."""
    colors: List[Pixel] = field(default_factory=list)
    description: str = ""


@dataclass
class CheckResult:
    solved: bool
    reveal: Optional[Reveal] = None


class GameSession:
    """State of the current game, replaced on every new puzzle."""

    def __init__(self):
        self.rows = 0
        self.cols = 0
        self.difficulty = 0
        self.description = ""
        self.pixels: List[Pixel] = []
        self.solution: Optional[np.ndarray] = None
        self.player: Optional[np.ndarray] = None
        self.hints = BoardHints(row_hints=[], col_hints=[])
        self.interaction_enabled = False
        self.error_report: Optional[ErrorReport] = None
        self.reveal: Optional[Reveal] = None
        self._generation_lock = asyncio.Lock()

    @property
    def has_puzzle(self) -> bool:
        return self.solution is not None

    @property
    def is_generating(self) -> bool:
        return self._generation_lock.locked()

    async def new_game(
        self,
        generator: PixelArtGenerator,
        rows: int,
        cols: int,
        difficulty: int,
    ) -> GeneratedPuzzle:
        """
        Generate a puzzle and start a new game with it.

        Only one generation may run at a time. The current game is kept if
        generation fails.

        Raises:
            ValueError: If dimensions or difficulty are out of range
            GameStateError: If a generation is already running
            GenerationExhausted: If the generator gave up
        """
        validate_dimensions(rows, cols)
        validate_difficulty(difficulty)
        if self.is_generating:
            raise GameStateError("A puzzle is already being generated")

        async with self._generation_lock:
            fill_percentage = get_fill_percentage(difficulty)
            logger.info(f"Generating a {rows}x{cols} board with difficulty {difficulty}...")
            puzzle = await generator.generate(rows, cols, fill_percentage, difficulty)

        self.load_puzzle(rows, cols, difficulty, puzzle)
        return puzzle

    def load_puzzle(self, rows: int, cols: int, difficulty: int, puzzle: GeneratedPuzzle) -> None:
        """Replace the current game with a generated puzzle and an empty player grid."""
        self.rows = rows
        self.cols = cols
        self.difficulty = difficulty
        self.description = puzzle.description
        self.pixels = [Pixel(*p) for p in puzzle.pixels]
        self.solution = build_grid(self.pixels, rows, cols)
        self.solution.flags.writeable = False
        self.player = empty_grid(rows, cols)
        self.hints = calculate_hints(self.solution)
        self.interaction_enabled = True
        self.error_report = None
        self.reveal = None

        logger.debug("Generated solution board:\n" + "\n".join(grid_to_strings(self.solution)))

    def _require_puzzle(self) -> None:
        if not self.has_puzzle:
            raise GameStateError("No puzzle has been generated yet")

    def toggle(self, row: int, col: int) -> bool:
        """
        Flip one player cell between empty and filled.

        Clears any error highlighting.

        Returns:
            The new state of the cell (True = filled)

        Raises:
            GameStateError: If there is no puzzle or the board is locked
            ValueError: If the cell is outside the grid
        """
        self._require_puzzle()
        if not self.interaction_enabled:
            raise GameStateError("The board is locked; start a new game")
        if not in_bounds(row, col, self.rows, self.cols):
            raise ValueError(f"Cell ({row}, {col}) is outside the {self.rows}x{self.cols} grid")

        self.error_report = None
        self.player[row, col] = not self.player[row, col]
        logger.debug(f"Cell ({row}, {col}) toggled to {'filled' if self.player[row, col] else 'empty'}")
        return bool(self.player[row, col])

    def check(self) -> CheckResult:
        """
        Compare the player grid with the solution.

        A solved board reveals the picture and locks the board.
        """
        self._require_puzzle()
        if is_solved(self.player, self.solution):
            logger.info("Puzzle solved")
            return CheckResult(solved=True, reveal=self.show_solution())

        self.reveal = None
        return CheckResult(solved=False)

    def highlight_errors(self) -> ErrorReport:
        """Find the rows and columns whose clues should be highlighted."""
        self._require_puzzle()
        self.error_report = locate_errors(self.player, self.solution)
        return self.error_report

    def show_solution(self) -> Reveal:
        """Reveal the colored picture and its description, locking the board."""
        self._require_puzzle()
        self.error_report = None
        self.interaction_enabled = False
        self.reveal = Reveal(colors=self.solution_colors(), description=clean_description(self.description))
        return self.reveal

    def solution_colors(self) -> List[Pixel]:
        """
        Colors to paint when the picture is revealed.

        Only cells that are filled in the solution get a color, which skips
        any out-of-bounds coordinate.
        """
        self._require_puzzle()
        colors = []
        for pixel in self.pixels:
            if in_bounds(pixel.row, pixel.col, self.rows, self.cols) and self.solution[pixel.row, pixel.col]:
                colors.append(pixel)
            else:
                logger.warning(f"Skipping color for [{pixel.row}, {pixel.col}]: not a filled solution cell")
        return colors

    def board_state(self) -> Dict[str, Any]:
        """Snapshot of everything a board view needs to render."""
        state: Dict[str, Any] = {
            "has_puzzle": self.has_puzzle,
            "generating": self.is_generating,
        }
        if not self.has_puzzle:
            return state

        state.update({
            "rows": self.rows,
            "cols": self.cols,
            "difficulty": self.difficulty,
            "row_hints": self.hints.row_hints,
            "col_hints": self.hints.col_hints,
            "player": self.player.astype(int).tolist(),
            "interaction_enabled": self.interaction_enabled,
            "error_rows": sorted(self.error_report.rows) if self.error_report else [],
            "error_cols": sorted(self.error_report.cols) if self.error_report else [],
        })
        return state
