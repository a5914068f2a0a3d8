"""
Tests for the retrying pixel art generator.

A scripted FakeProvider stands in for the AI so every scenario is
deterministic:
- first attempt accepted
- fill ratio correction (exactly one follow-up)
- retries after provider, parse and density failures
- exhaustion
"""

import random
import sys

import pytest

from nonogram_agent.errors import GenerationExhausted, LineDensityViolation, MalformedResponse, ProviderError
from nonogram_agent.generator import GenerationState, PixelArtGenerator

from conftest import FakeProvider, block_pixels, checkerboard_pixels, make_response


def make_generator(provider):
    return PixelArtGenerator(provider, rng=random.Random(0))


# =============================================================================
# Successful generation
# =============================================================================

class TestFirstAttemptSuccess:

    @pytest.mark.asyncio
    async def test_returns_exact_pixels_and_description(self):
        """50 valid pixels at 50% target are accepted on the first call."""
        pixels = checkerboard_pixels()
        provider = FakeProvider([make_response("A happy puppy jumping.", pixels)])
        generator = make_generator(provider)

        result = await generator.generate(10, 10, 0.5, 3)

        assert result.pixels == pixels
        assert result.description == "A happy puppy jumping."
        assert result.attempts == 1
        assert result.corrected is False
        assert provider.calls == 1
        assert generator.state == GenerationState.ACCEPTED

    @pytest.mark.asyncio
    async def test_fill_within_tolerance_boundary(self):
        """40 pixels for a 50% target (10% off) needs no correction."""
        provider = FakeProvider([make_response("A bug.", block_pixels(4, 10)[:40])])
        # 4 full rows would violate difficulty 3, use difficulty 1 (limit 4)
        result = await make_generator(provider).generate(10, 10, 0.5, 1)

        assert provider.calls == 1
        assert result.corrected is False

    @pytest.mark.asyncio
    async def test_initial_prompt_content(self):
        provider = FakeProvider([make_response("A cloud.", checkerboard_pixels())])
        await make_generator(provider).generate(10, 10, 0.5, 3)

        prompt = provider.prompts[0]
        assert "10x10" in prompt
        assert "50%" in prompt
        assert "background is white" in prompt
        assert "completely filled" in prompt


class TestFollowUpCorrection:

    @pytest.mark.asyncio
    async def test_single_follow_up_accepted_regardless_of_fill(self):
        """30% vs 50% triggers one follow-up, which is accepted even at 10%."""
        first = block_pixels(6, 5)  # 30 pixels, no full line
        second = block_pixels(2, 5)  # 10 pixels
        provider = FakeProvider([
            make_response("A tiny robot waving.", first),
            make_response("A tiny robot waving, corrected.", second),
        ])
        generator = make_generator(provider)

        result = await generator.generate(10, 10, 0.5, 3)

        assert provider.calls == 2
        assert result.pixels == second
        assert result.description == "A tiny robot waving, corrected."
        assert result.corrected is True
        assert result.attempts == 1

    @pytest.mark.asyncio
    async def test_follow_up_prompt_mentions_measurements(self):
        provider = FakeProvider([
            make_response("A tiny robot waving.", block_pixels(6, 5)),
            make_response("A tiny robot waving.", checkerboard_pixels()),
        ])
        await make_generator(provider).generate(10, 10, 0.5, 3)

        follow_up = provider.prompts[1]
        assert '"A tiny robot waving."' in follow_up
        assert "actually 30%" in follow_up
        assert "target of 50%" in follow_up

    @pytest.mark.asyncio
    async def test_follow_up_density_violation_starts_new_attempt(self):
        provider = FakeProvider([
            make_response("Attempt one.", block_pixels(6, 5)),
            make_response("Attempt one corrected.", block_pixels(3, 10)),  # 3 full rows
            make_response("Attempt two.", checkerboard_pixels()),
        ])

        result = await make_generator(provider).generate(10, 10, 0.5, 3)

        assert provider.calls == 3
        assert result.description == "Attempt two."
        assert result.attempts == 2


# =============================================================================
# Retries and exhaustion
# =============================================================================

class TestRetries:

    @pytest.mark.asyncio
    async def test_provider_error_retried(self):
        provider = FakeProvider([
            ProviderError("rate limited"),
            make_response("A lucky duck.", checkerboard_pixels()),
        ])
        result = await make_generator(provider).generate(10, 10, 0.5, 3)

        assert result.attempts == 2
        assert provider.calls == 2

    @pytest.mark.asyncio
    async def test_unexpected_provider_exception_retried(self):
        """Any exception from the provider counts as a failed attempt."""
        provider = FakeProvider([
            RuntimeError("connection reset"),
            make_response("A lucky duck.", checkerboard_pixels()),
        ])
        result = await make_generator(provider).generate(10, 10, 0.5, 3)

        assert result.attempts == 2

    @pytest.mark.asyncio
    async def test_density_violation_retried_without_follow_up(self):
        provider = FakeProvider([
            make_response("Too many lines.", block_pixels(5, 10)),
            make_response("Better.", checkerboard_pixels()),
        ])
        result = await make_generator(provider).generate(10, 10, 0.5, 3)

        assert provider.calls == 2
        assert result.description == "Better."

    @pytest.mark.asyncio
    @pytest.mark.parametrize("bad_response", [
        pytest.param(
            '[[' + '9' * 5000 + ', 0, "#FF0000"]]',
            marks=pytest.mark.skipif(not hasattr(sys, "set_int_max_str_digits"), reason="no integer digit limit"),
        ),
        '[' * 100000 + ']' * 100000,
    ])
    async def test_undecodable_json_retried(self, bad_response):
        """Oversized numbers and runaway nesting fail the attempt only."""
        provider = FakeProvider([
            bad_response,
            make_response("A lucky duck.", checkerboard_pixels()),
        ])
        result = await make_generator(provider).generate(10, 10, 0.5, 3)

        assert result.attempts == 2
        assert result.description == "A lucky duck."


class TestExhaustion:

    @pytest.mark.asyncio
    async def test_unparsable_responses_exhaust_budget(self):
        provider = FakeProvider(["I would rather not."] * 5)
        generator = make_generator(provider)

        with pytest.raises(GenerationExhausted) as exc_info:
            await generator.generate(10, 10, 0.5, 3)

        assert "after 5 retries" in str(exc_info.value)
        assert str(exc_info.value).startswith("AI API Error after 5 retries: ")
        assert isinstance(exc_info.value.last_error, MalformedResponse)
        assert provider.calls == 5
        assert generator.state == GenerationState.EXHAUSTED

    @pytest.mark.asyncio
    async def test_last_error_message_is_reported(self):
        provider = FakeProvider(
            ["no json"] * 4 + [make_response("Lines.", block_pixels(5, 10))]
        )
        with pytest.raises(GenerationExhausted) as exc_info:
            await make_generator(provider).generate(10, 10, 0.5, 3)

        assert isinstance(exc_info.value.last_error, LineDensityViolation)
        assert "too many full rows/columns" in str(exc_info.value)


class TestArgumentValidation:

    @pytest.mark.asyncio
    @pytest.mark.parametrize("rows,cols,fill,difficulty", [
        (4, 10, 0.5, 3),
        (10, 26, 0.5, 3),
        (10, 10, 0.0, 3),
        (10, 10, 1.5, 3),
        (10, 10, 0.5, 6),
    ])
    async def test_invalid_arguments_rejected_before_calling_provider(self, rows, cols, fill, difficulty):
        provider = FakeProvider([])
        with pytest.raises(ValueError):
            await make_generator(provider).generate(rows, cols, fill, difficulty)
        assert provider.calls == 0
