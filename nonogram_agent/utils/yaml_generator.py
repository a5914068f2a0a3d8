"""
YAML Puzzle Export

Serializes a generated nonogram (clues, solution and colors) to YAML so it
can be saved, shared or replayed, and reads such documents back.
"""

from typing import Any, Dict, List

import numpy as np
import yaml

from .grid import Pixel, build_grid, grid_from_strings, grid_to_strings, in_bounds
from .hint_engine import calculate_hints


def create_puzzle_yaml(
    rows: int,
    cols: int,
    difficulty: int,
    description: str,
    pixels: List[Pixel],
) -> str:
    """
    Create a YAML document for a puzzle.

    Args:
        rows: Grid height
        cols: Grid width
        difficulty: Difficulty level the puzzle was generated at
        description: Picture description
        pixels: Non-white pixels of the picture

    Returns:
        YAML string with size, clues, solution rows ('#' filled, '.' empty)
        and pixel colors
    """
    pixels = [Pixel(*p) for p in pixels]
    solution = build_grid(pixels, rows, cols)
    hints = calculate_hints(solution)

    document = {
        "size": {"rows": rows, "cols": cols},
        "difficulty": difficulty,
        "description": description,
        "hints": {
            "rows": hints.row_hints,
            "cols": hints.col_hints,
        },
        "solution": grid_to_strings(solution),
        "pixels": [[p.row, p.col, p.color] for p in pixels if in_bounds(p.row, p.col, rows, cols)],
    }

    return yaml.safe_dump(document, sort_keys=False, default_flow_style=None)


def load_puzzle_yaml(yaml_text: str) -> Dict[str, Any]:
    """
    Read a puzzle exported by create_puzzle_yaml.

    Returns:
        Dict with rows, cols, difficulty, description, pixels (as Pixel)
        and solution (numpy boolean grid)

    Raises:
        ValueError: If required fields are missing or the solution does not
            match the declared size or the pixels
    """
    data = yaml.safe_load(yaml_text)
    if not isinstance(data, dict):
        raise ValueError("Puzzle YAML must be a mapping")

    try:
        rows = int(data["size"]["rows"])
        cols = int(data["size"]["cols"])
        solution = grid_from_strings(list(data["solution"]))
        pixels = [Pixel(int(r), int(c), str(color)) for r, c, color in data.get("pixels", [])]
    except (KeyError, TypeError) as e:
        raise ValueError(f"Invalid puzzle YAML: missing or malformed field {e}") from e

    if solution.shape != (rows, cols):
        raise ValueError(f"Solution shape {solution.shape} does not match size {rows}x{cols}")
    if not np.array_equal(build_grid(pixels, rows, cols), solution):
        raise ValueError("Pixels do not match the solution grid")

    return {
        "rows": rows,
        "cols": cols,
        "difficulty": int(data.get("difficulty", 0)),
        "description": str(data.get("description", "")),
        "pixels": pixels,
        "solution": solution,
    }
