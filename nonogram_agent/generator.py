"""
Pixel Art Generator

Asks a text provider for a kid-friendly pixel art picture and keeps trying
until the answer is usable as a nonogram solution.

Attempt flow (at most MAX_ATTEMPTS attempts, no delay between them):
1. ATTEMPTING: send the initial prompt for a random subject
2. VALIDATING: parse the answer and check full-line density
3. ACCEPTED if the fill ratio is within FILL_TOLERANCE of the target
4. CORRECTING otherwise: send one follow-up prompt, parse and check
   full-line density again, then accept without re-checking the fill ratio

Any failure inside an attempt moves on to the next attempt. When every
attempt fails the generator ends in EXHAUSTED and raises GenerationExhausted.
"""

import logging
import random
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional

from .config import FILL_TOLERANCE, MAX_ATTEMPTS, validate_difficulty, validate_dimensions
from .errors import GenerationExhausted, LineDensityViolation, MalformedResponse, ProviderError
from .providers import TextProvider
from .utils.grid import Pixel
from .utils.line_density import has_too_many_full_lines
from .utils.prompts import Subject, build_follow_up_prompt, build_initial_prompt, pick_subject
from .utils.response_parser import ParsedResponse, parse_ai_response

logger = logging.getLogger(__name__)


class GenerationState(Enum):
    IDLE = "idle"
    ATTEMPTING = "attempting"
    VALIDATING = "validating"
    CORRECTING = "correcting"
    ACCEPTED = "accepted"
    EXHAUSTED = "exhausted"


@dataclass
class GeneratedPuzzle:
    """A validated picture ready to become a nonogram solution."""
    description: str
    pixels: List[Pixel]
    attempts: int = 1
    corrected: bool = False


class PixelArtGenerator:
    """Retrying generator turning provider text into validated pixel art."""

    def __init__(
        self,
        provider: TextProvider,
        max_attempts: int = MAX_ATTEMPTS,
        fill_tolerance: float = FILL_TOLERANCE,
        rng: Optional[random.Random] = None,
    ):
        self.provider = provider
        self.max_attempts = max_attempts
        self.fill_tolerance = fill_tolerance
        self.rng = rng or random.Random()
        self.state = GenerationState.IDLE

    async def generate(
        self,
        rows: int,
        cols: int,
        fill_percentage: float,
        difficulty: int,
    ) -> GeneratedPuzzle:
        """
        Generate a validated picture for a rows x cols board.

        Args:
            rows: Grid height (5-25)
            cols: Grid width (5-25)
            fill_percentage: Target share of non-white pixels, in (0, 1]
            difficulty: Difficulty level (1-5), selects the full-line limit

        Returns:
            GeneratedPuzzle with description and non-white pixels

        Raises:
            ValueError: If an argument is out of range
            GenerationExhausted: If every attempt failed
        """
        validate_dimensions(rows, cols)
        validate_difficulty(difficulty)
        if not 0 < fill_percentage <= 1:
            raise ValueError(f"fill_percentage must be in (0, 1], got {fill_percentage}")

        logger.info(
            f"Generating pixel art for a {rows}x{cols} grid "
            f"with target fill ~{fill_percentage * 100:.1f}% (difficulty {difficulty})"
        )

        last_error: Optional[Exception] = None
        for attempt in range(1, self.max_attempts + 1):
            self.state = GenerationState.ATTEMPTING
            logger.info(f"--- Starting generation attempt {attempt}/{self.max_attempts} ---")
            try:
                puzzle = await self._attempt(rows, cols, fill_percentage, difficulty)
            except (ProviderError, MalformedResponse, LineDensityViolation) as e:
                last_error = e
                logger.error(f"Generation attempt {attempt} failed: {e}")
                continue

            puzzle.attempts = attempt
            self.state = GenerationState.ACCEPTED
            return puzzle

        self.state = GenerationState.EXHAUSTED
        reason = str(last_error) if last_error else "Unknown error during generation"
        logger.error(f"All {self.max_attempts} retries failed for pixel art generation")
        raise GenerationExhausted(
            f"AI API Error after {self.max_attempts} retries: {reason}",
            last_error=last_error,
        )

    async def _attempt(
        self,
        rows: int,
        cols: int,
        fill_percentage: float,
        difficulty: int,
    ) -> GeneratedPuzzle:
        subject = pick_subject(self.rng)
        prompt = build_initial_prompt(rows, cols, fill_percentage, subject)
        logger.debug(f"Initial prompt:\n{prompt}")

        parsed = await self._request(prompt)
        self._check_line_density(
            parsed, rows, cols, difficulty, "Generated image had too many full rows/columns."
        )

        actual_fill = len(parsed.pixels) / (rows * cols)
        difference = abs(actual_fill - fill_percentage)
        logger.info(
            f"Target fill: {fill_percentage * 100:.1f}%, actual non-white fill: "
            f"{actual_fill * 100:.1f}%, difference: {difference * 100:.1f}%"
        )

        if round(difference, 9) <= self.fill_tolerance:
            return GeneratedPuzzle(description=parsed.description, pixels=parsed.pixels)

        return await self._correct(parsed, subject, rows, cols, fill_percentage, actual_fill, difficulty)

    async def _correct(
        self,
        parsed: ParsedResponse,
        subject: Subject,
        rows: int,
        cols: int,
        fill_percentage: float,
        actual_fill: float,
        difficulty: int,
    ) -> GeneratedPuzzle:
        self.state = GenerationState.CORRECTING
        logger.warning(
            f"Fill difference exceeds {self.fill_tolerance * 100:.0f}%, requesting a correction"
        )

        prompt = build_follow_up_prompt(
            rows, cols, fill_percentage, actual_fill, parsed.description, subject
        )
        logger.debug(f"Follow-up prompt:\n{prompt}")

        corrected = await self._request(prompt)
        self._check_line_density(
            corrected, rows, cols, difficulty, "Corrected image had too many full rows/columns."
        )

        # Fill ratio is not re-checked: at most two provider calls per attempt
        logger.info("Accepting corrected picture")
        return GeneratedPuzzle(
            description=corrected.description,
            pixels=corrected.pixels,
            corrected=True,
        )

    async def _request(self, prompt: str) -> ParsedResponse:
        try:
            response_text = await self.provider.generate_text(prompt)
        except ProviderError:
            raise
        except Exception as e:
            raise ProviderError(f"Provider call failed: {e}") from e

        self.state = GenerationState.VALIDATING
        return parse_ai_response(response_text)

    @staticmethod
    def _check_line_density(
        parsed: ParsedResponse,
        rows: int,
        cols: int,
        difficulty: int,
        message: str,
    ) -> None:
        if has_too_many_full_lines(parsed.pixels, rows, cols, difficulty):
            raise LineDensityViolation(message)
