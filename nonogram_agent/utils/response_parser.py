"""
AI Response Parser

Turns a free-form AI answer into a description plus a list of non-white
pixels. The answer is expected to end with a JSON array of
[row, column, "#RRGGBB"] triples, possibly wrapped in a markdown code fence
and sprinkled with // comments.
"""

import json
import logging
import re
from dataclasses import dataclass
from typing import Any, List

from ..errors import MalformedResponse
from .grid import Pixel

logger = logging.getLogger(__name__)

# Bracketed structure running to the last ']' of the text
JSON_ARRAY_PATTERN = re.compile(r"(\[[\s\S]*\])[^\]]*$")
LINE_COMMENT_PATTERN = re.compile(r"//[^\n\r]*[\n\r]?")
CODE_FENCE_PATTERN = re.compile(r"```(?:json)?", re.IGNORECASE)
HEX_COLOR_PATTERN = re.compile(r"^#[0-9a-fA-F]{6}$")

WHITE = "#FFFFFF"


@dataclass
class ParsedResponse:
    """Description and non-white pixels extracted from one AI response."""
    description: str
    pixels: List[Pixel]


def _as_coordinate(value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise MalformedResponse(f"Pixel coordinate is not a number: {value!r}")
    if isinstance(value, float):
        if not value.is_integer():
            raise MalformedResponse(f"Pixel coordinate is not a whole number: {value!r}")
        value = int(value)
    return value


def _as_pixel(item: Any) -> Pixel:
    if not isinstance(item, list) or len(item) != 3:
        raise MalformedResponse(f"Pixel is not a [row, col, hex_color] triple: {item!r}")

    row, col, color = item
    if not isinstance(color, str) or not HEX_COLOR_PATTERN.match(color):
        raise MalformedResponse(f"Pixel color is not a 6-digit hex code: {color!r}")

    return Pixel(_as_coordinate(row), _as_coordinate(col), color)


def parse_ai_response(response_text: str) -> ParsedResponse:
    """
    Split an AI response into its description and pixel list.

    White pixels are dropped since the background is white.

    Args:
        response_text: Raw text returned by the provider

    Returns:
        ParsedResponse with the text before the array and the non-white pixels

    Raises:
        MalformedResponse: If no array is found or it is not a list of
            [number, number, "#RRGGBB"] triples
    """
    logger.debug(f"Parsing AI response (length: {len(response_text)})")

    match = JSON_ARRAY_PATTERN.search(response_text)
    if not match:
        logger.error("No JSON pixel array found in AI response")
        raise MalformedResponse(
            "AI response did not contain a recognizable JSON array of pixels at the end."
        )

    description = response_text[:match.start()].strip()

    pixels_text = LINE_COMMENT_PATTERN.sub("", match.group(1))
    pixels_text = CODE_FENCE_PATTERN.sub("", pixels_text).strip()

    try:
        data = json.loads(pixels_text)
    except (ValueError, RecursionError) as e:
        # JSONDecodeError, oversized integers and very deep nesting
        logger.error(f"JSON parse error: {e}; text starts with {pixels_text[:200]!r}")
        raise MalformedResponse(f"Could not parse pixel JSON: {e}") from e

    if not isinstance(data, list):
        raise MalformedResponse("Parsed JSON data is not an array.")

    pixels = [_as_pixel(item) for item in data]

    non_white = [p for p in pixels if p.color.upper() != WHITE]
    removed = len(pixels) - len(non_white)
    if removed:
        logger.info(f"Filtered out {removed} white pixels")

    logger.info(f"Parsed description {description!r} and {len(non_white)} non-white pixels")
    return ParsedResponse(description=description, pixels=non_white)


def clean_description(description: str) -> str:
    """
    Tidy an AI description for display.

    Removes a leading "Description:" label, a trailing "JSON Data:" section,
    markdown emphasis/backtick characters and a dangling "json" word.
    """
    text = description or ""
    text = re.sub(r"^.*?description\s*[:\-–—]?\s*", "", text, flags=re.IGNORECASE)
    text = re.sub(r"\s*JSON Data:.*$", "", text, flags=re.IGNORECASE | re.DOTALL)
    text = re.sub(r"[*_`]", "", text)
    text = re.sub(r"\s*json$", "", text, flags=re.IGNORECASE)
    return text.strip()
