"""
Centralized Configuration Module

This module defines the difficulty tables, grid bounds and runtime settings
used by the generator, the game session and the entry points.

Difficulty meanings:
- 1: easiest, densest picture (70% fill) and the most tolerant full-line check
- 3: medium (50% fill), the default
- 5: hardest, sparsest picture (30% fill)

Runtime settings come from the environment (optionally a .env file loaded
with python-dotenv by the entry points).
"""

import logging
import os
from dataclasses import dataclass
from typing import Dict, Optional


# Grid dimension bounds (inclusive)
MIN_GRID_SIZE = 5
MAX_GRID_SIZE = 25

# Difficulty levels (inclusive)
MIN_DIFFICULTY = 1
MAX_DIFFICULTY = 5
DEFAULT_DIFFICULTY = 3

# Target share of non-white pixels per difficulty
# Higher percentage = easier puzzle
FILL_PERCENTAGES: Dict[int, float] = {
    1: 0.70,  # Easiest (densest)
    2: 0.60,
    3: 0.50,  # Medium
    4: 0.40,
    5: 0.30,  # Hardest (sparsest)
}
DEFAULT_FILL_PERCENTAGE = 0.50

# Share of rows/columns allowed to be completely filled
FULL_LINE_THRESHOLDS: Dict[int, float] = {
    1: 0.40,
    2: 0.30,
}
DEFAULT_FULL_LINE_THRESHOLD = 0.20

# Generation retry budget and accepted fill ratio drift
MAX_ATTEMPTS = 5
FILL_TOLERANCE = 0.10

# Maximum temperature: varied subjects are wanted
DEFAULT_TEMPERATURE = 1.0
DEFAULT_MODEL = "claude-sonnet-4-5"
DEFAULT_MAX_TOKENS = 8192

PROVIDERS = ("anthropic", "agent")


def get_fill_percentage(difficulty: int) -> float:
    """
    Get the target fill ratio for a difficulty level.

    Args:
        difficulty: Difficulty level (1-5)

    Returns:
        Fill ratio in (0, 1]; 0.50 for unmapped values
    """
    return FILL_PERCENTAGES.get(difficulty, DEFAULT_FILL_PERCENTAGE)


def get_full_line_threshold(difficulty: int) -> float:
    """
    Get the share of rows/columns that may be completely filled.

    Args:
        difficulty: Difficulty level

    Returns:
        0.40 for difficulty 1, 0.30 for difficulty 2, 0.20 otherwise
    """
    return FULL_LINE_THRESHOLDS.get(difficulty, DEFAULT_FULL_LINE_THRESHOLD)


def validate_dimensions(rows: int, cols: int) -> None:
    """
    Check grid dimensions against the supported bounds.

    Raises:
        ValueError: If rows or cols is outside [MIN_GRID_SIZE, MAX_GRID_SIZE]
    """
    for name, value in (("rows", rows), ("cols", cols)):
        if not MIN_GRID_SIZE <= value <= MAX_GRID_SIZE:
            raise ValueError(
                f"{name} must be between {MIN_GRID_SIZE} and {MAX_GRID_SIZE}, got {value}"
            )


def validate_difficulty(difficulty: int) -> None:
    """
    Raises:
        ValueError: If difficulty is outside [MIN_DIFFICULTY, MAX_DIFFICULTY]
    """
    if not MIN_DIFFICULTY <= difficulty <= MAX_DIFFICULTY:
        raise ValueError(
            f"difficulty must be between {MIN_DIFFICULTY} and {MAX_DIFFICULTY}, got {difficulty}"
        )


@dataclass
class Settings:
    """Runtime settings read from the environment."""
    api_key: Optional[str] = None
    provider: str = "anthropic"
    model: str = DEFAULT_MODEL
    temperature: float = DEFAULT_TEMPERATURE
    max_tokens: int = DEFAULT_MAX_TOKENS
    max_attempts: int = MAX_ATTEMPTS
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "Settings":
        """
        Build settings from environment variables.

        Raises:
            ValueError: If NONOGRAM_PROVIDER names an unknown provider
        """
        provider = os.getenv("NONOGRAM_PROVIDER", "anthropic").strip().lower()
        if provider not in PROVIDERS:
            raise ValueError(
                f"Unknown provider: {provider}. Valid providers: {list(PROVIDERS)}"
            )

        return cls(
            api_key=os.getenv("ANTHROPIC_API_KEY") or None,
            provider=provider,
            model=os.getenv("NONOGRAM_MODEL", DEFAULT_MODEL),
            temperature=float(os.getenv("NONOGRAM_TEMPERATURE", DEFAULT_TEMPERATURE)),
            max_tokens=int(os.getenv("NONOGRAM_MAX_TOKENS", DEFAULT_MAX_TOKENS)),
            max_attempts=int(os.getenv("NONOGRAM_MAX_ATTEMPTS", MAX_ATTEMPTS)),
            log_level=os.getenv("NONOGRAM_LOG_LEVEL", "INFO").upper(),
        )


def configure_logging(level: str = "INFO") -> None:
    """Configure root logging for the entry points."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
