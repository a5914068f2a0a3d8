"""
Tests for difficulty tables, bounds checks and environment settings.
"""

import pytest

from nonogram_agent.config import (
    FILL_PERCENTAGES,
    Settings,
    get_fill_percentage,
    get_full_line_threshold,
    validate_difficulty,
    validate_dimensions,
)


class TestDifficultyTables:

    def test_fill_percentages(self):
        assert FILL_PERCENTAGES == {1: 0.70, 2: 0.60, 3: 0.50, 4: 0.40, 5: 0.30}

    def test_fill_default(self):
        assert get_fill_percentage(9) == 0.50

    def test_fill_decreases_with_difficulty(self):
        values = [get_fill_percentage(d) for d in range(1, 6)]
        assert values == sorted(values, reverse=True)

    @pytest.mark.parametrize("difficulty,expected", [(1, 0.40), (2, 0.30), (3, 0.20), (5, 0.20), (42, 0.20)])
    def test_full_line_thresholds(self, difficulty, expected):
        assert get_full_line_threshold(difficulty) == expected


class TestBounds:

    def test_valid_dimensions(self):
        validate_dimensions(5, 25)

    @pytest.mark.parametrize("rows,cols", [(4, 10), (10, 26), (0, 0)])
    def test_invalid_dimensions(self, rows, cols):
        with pytest.raises(ValueError):
            validate_dimensions(rows, cols)

    def test_invalid_difficulty(self):
        with pytest.raises(ValueError):
            validate_difficulty(0)


class TestSettings:

    def test_defaults(self, monkeypatch):
        for name in ("ANTHROPIC_API_KEY", "NONOGRAM_PROVIDER", "NONOGRAM_TEMPERATURE", "NONOGRAM_MAX_ATTEMPTS"):
            monkeypatch.delenv(name, raising=False)
        settings = Settings.from_env()

        assert settings.api_key is None
        assert settings.provider == "anthropic"
        assert settings.temperature == 1.0
        assert settings.max_attempts == 5

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("ANTHROPIC_API_KEY", "test-key")
        monkeypatch.setenv("NONOGRAM_PROVIDER", "Agent")
        monkeypatch.setenv("NONOGRAM_LOG_LEVEL", "debug")
        settings = Settings.from_env()

        assert settings.api_key == "test-key"
        assert settings.provider == "agent"
        assert settings.log_level == "DEBUG"

    def test_unknown_provider(self, monkeypatch):
        monkeypatch.setenv("NONOGRAM_PROVIDER", "gemini")
        with pytest.raises(ValueError):
            Settings.from_env()
