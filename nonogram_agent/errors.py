"""
Error types for puzzle generation and play.

Only GenerationExhausted is meant to reach the player; the other generation
errors are caught inside a single attempt and turned into a retry.
"""

from typing import Optional


class NonogramError(Exception):
    """Base class for all nonogram agent errors."""


class MalformedResponse(NonogramError):
    """The AI response had no usable JSON pixel array."""


class LineDensityViolation(NonogramError):
    """The generated picture had too many completely filled rows/columns."""


class ProviderError(NonogramError):
    """The text generation provider call failed."""


class GenerationExhausted(NonogramError):
    """Every generation attempt failed."""

    def __init__(self, message: str, last_error: Optional[BaseException] = None):
        super().__init__(message)
        self.last_error = last_error


class GameStateError(NonogramError):
    """A game action is not allowed in the current session state."""
