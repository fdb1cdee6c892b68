"""Tests for configuration settings."""

from __future__ import annotations

from trparser.config import Settings, get_settings


class TestSettings:
    """Tests for Settings loaded from the environment."""

    def test_defaults(self, monkeypatch):
        """Without environment variables the defaults apply."""
        for name in ("LOG_LEVEL", "LOG_JSON_FORMAT", "HTTP_TIMEOUT", "IGNORE_ERROR_COUNT"):
            monkeypatch.delenv(f"TRPARSER_{name}", raising=False)

        settings = Settings(_env_file=None)

        assert settings.log_level == "WARNING"
        assert settings.log_json_format is False
        assert settings.http_timeout == 30.0
        assert settings.ignore_error_count is False

    def test_environment_overrides(self, monkeypatch):
        """TRPARSER_* variables override the defaults."""
        monkeypatch.setenv("TRPARSER_LOG_LEVEL", "DEBUG")
        monkeypatch.setenv("TRPARSER_HTTP_TIMEOUT", "5")
        monkeypatch.setenv("TRPARSER_IGNORE_ERROR_COUNT", "1")

        settings = Settings(_env_file=None)

        assert settings.log_level == "DEBUG"
        assert settings.http_timeout == 5.0
        assert settings.ignore_error_count is True

    def test_unrelated_variables_are_ignored(self, monkeypatch):
        """Variables without the prefix do not leak in."""
        monkeypatch.setenv("LOG_LEVEL", "ERROR")
        monkeypatch.delenv("TRPARSER_LOG_LEVEL", raising=False)

        assert Settings(_env_file=None).log_level == "WARNING"

    def test_get_settings_is_cached(self):
        """get_settings returns the same instance until the cache is cleared."""
        assert get_settings() is get_settings()
