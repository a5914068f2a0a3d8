"""
Text generation providers.

The generator only needs "prompt in, text out". Two backends are available:
- AnthropicProvider: Messages API, temperature configurable (1.0 by default)
- ClaudeAgentProvider: one-shot Claude Agent SDK query without tools
"""

import logging
from typing import Optional, Protocol

import anthropic
from claude_agent_sdk import AssistantMessage, ClaudeAgentOptions, TextBlock, query

from .config import DEFAULT_MAX_TOKENS, DEFAULT_MODEL, DEFAULT_TEMPERATURE, Settings
from .errors import ProviderError

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = """You are a pixel artist designing nonogram puzzles for children.
Answer with one short sentence describing the picture, followed by a JSON array
of [row, column, "#RRGGBB"] entries for the non-white pixels. Do not use tools."""


class TextProvider(Protocol):
    """Anything that turns a prompt into free text."""

    async def generate_text(self, prompt: str) -> str:
        ...


class AnthropicProvider:
    """Provider backed by the Anthropic Messages API."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: str = DEFAULT_MODEL,
        temperature: float = DEFAULT_TEMPERATURE,
        max_tokens: int = DEFAULT_MAX_TOKENS,
        client: Optional[anthropic.AsyncAnthropic] = None,
    ):
        self.model = model
        self.temperature = temperature
        self.max_tokens = max_tokens
        self.client = client or anthropic.AsyncAnthropic(api_key=api_key)

    async def generate_text(self, prompt: str) -> str:
        try:
            response = await self.client.messages.create(
                model=self.model,
                max_tokens=self.max_tokens,
                temperature=self.temperature,
                system=SYSTEM_PROMPT,
                messages=[{"role": "user", "content": prompt}],
            )
        except anthropic.APIError as e:
            raise ProviderError(f"Anthropic API call failed: {e}") from e

        text = "".join(block.text for block in response.content if block.type == "text")
        logger.debug(f"Anthropic response: {len(text)} characters, stop_reason={response.stop_reason}")
        return text


class ClaudeAgentProvider:
    """
    Provider backed by the Claude Agent SDK.

    The SDK does not expose sampling temperature, so the model default is used.
    """

    def __init__(self, model: Optional[str] = None):
        self.options = ClaudeAgentOptions(
            system_prompt=SYSTEM_PROMPT,
            model=model,
            allowed_tools=[],
            max_turns=1,
        )

    async def generate_text(self, prompt: str) -> str:
        response_text = []
        try:
            async for message in query(prompt=prompt, options=self.options):
                if isinstance(message, AssistantMessage):
                    for block in message.content:
                        if isinstance(block, TextBlock):
                            response_text.append(block.text)
        except Exception as e:
            raise ProviderError(f"Claude agent query failed: {e}") from e

        return "".join(response_text)


def create_provider(settings: Settings) -> TextProvider:
    """
    Create the provider selected by settings.provider.

    Raises:
        ValueError: If the provider name is unknown
    """
    if settings.provider == "anthropic":
        return AnthropicProvider(
            api_key=settings.api_key,
            model=settings.model,
            temperature=settings.temperature,
            max_tokens=settings.max_tokens,
        )
    if settings.provider == "agent":
        return ClaudeAgentProvider(model=settings.model)
    raise ValueError(f"Unknown provider: {settings.provider}")
