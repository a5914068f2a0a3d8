"""
Utility modules for nonogram-agent.
"""

from .comparator import ErrorReport, is_solved, locate_errors
from .grid import Pixel, build_grid
from .hint_engine import BoardHints, calculate_hints, calculate_line_hints
from .line_density import has_too_many_full_lines
from .response_parser import ParsedResponse, parse_ai_response

__all__ = [
    "BoardHints",
    "ErrorReport",
    "ParsedResponse",
    "Pixel",
    "build_grid",
    "calculate_hints",
    "calculate_line_hints",
    "has_too_many_full_lines",
    "is_solved",
    "locate_errors",
    "parse_ai_response",
]
