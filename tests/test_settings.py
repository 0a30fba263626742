"""Tests for settings."""

import pytest
from pydantic import ValidationError

from statewalk.settings import StatewalkSettings, get_settings


class TestSettings:
    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("STATEWALK_COLOR", raising=False)
        settings = StatewalkSettings()
        assert settings.color == "auto"
        assert settings.max_states == 10_000

    def test_from_environment(self, monkeypatch):
        monkeypatch.setenv("STATEWALK_COLOR", "always")
        monkeypatch.setenv("STATEWALK_MAX_STATES", "50")
        settings = StatewalkSettings()
        assert settings.color == "always"
        assert settings.max_states == 50

    def test_invalid_color(self, monkeypatch):
        monkeypatch.setenv("STATEWALK_COLOR", "sometimes")
        with pytest.raises(ValidationError):
            StatewalkSettings()

    def test_max_states_must_be_positive(self):
        with pytest.raises(ValidationError):
            StatewalkSettings(max_states=0)

    def test_cached(self):
        assert get_settings() is get_settings()
