"""Tests for package settings."""

from shapediff.config import ExcessKeyPolicy, Settings


class TestSettings:
    """Tests for environment-driven settings."""

    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("SHAPEDIFF_JSON_ALLOW_NAN", raising=False)
        monkeypatch.delenv("SHAPEDIFF_EXCESS_KEY_POLICY", raising=False)
        settings = Settings(_env_file=None)
        assert settings.json_allow_nan is False
        assert settings.excess_key_policy == ExcessKeyPolicy.ERROR

    def test_environment_overrides(self, monkeypatch):
        monkeypatch.setenv("SHAPEDIFF_JSON_ALLOW_NAN", "true")
        monkeypatch.setenv("SHAPEDIFF_EXCESS_KEY_POLICY", "drop")
        settings = Settings(_env_file=None)
        assert settings.json_allow_nan is True
        assert settings.excess_key_policy == ExcessKeyPolicy.DROP
