"""
Shared test helpers: a scripted text provider and pixel set builders.
"""

import json
from typing import List, Sequence, Tuple, Union


class FakeProvider:
    """Text provider returning scripted responses in order."""

    def __init__(self, responses: Sequence[Union[str, Exception]]):
        self.responses = list(responses)
        self.prompts: List[str] = []

    async def generate_text(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if not self.responses:
            raise AssertionError("FakeProvider ran out of scripted responses")
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response

    @property
    def calls(self) -> int:
        return len(self.prompts)


def make_response(description: str, pixels: Sequence[Tuple[int, int, str]]) -> str:
    """Build a provider answer: description line followed by the JSON array."""
    return f"{description}\n{json.dumps([list(p) for p in pixels])}"


def checkerboard_pixels(rows: int = 10, cols: int = 10, color: str = "#FF0000"):
    """Half of the cells, no full line."""
    return [(r, c, color) for r in range(rows) for c in range(cols) if (r + c) % 2 == 0]


def block_pixels(rows: int, cols: int, color: str = "#00AA00"):
    """Top-left rows x cols block."""
    return [(r, c, color) for r in range(rows) for c in range(cols)]
