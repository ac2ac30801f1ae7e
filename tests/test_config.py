"""Tests for settings parsing and logging configuration."""
import pytest
import structlog
from pydantic import ValidationError

from persona_engine.config import Settings, get_settings
from persona_engine.logging_config import configure_logging
from persona_engine.services.report_service import ReportService


@pytest.fixture(autouse=True)
def _fresh_settings():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


class TestSettings:
    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("PERSONA_REQUIRE_COMPLETE_ANSWERS", raising=False)
        settings = Settings(_env_file=None)
        assert settings.REQUIRE_COMPLETE_ANSWERS is False
        assert settings.QUESTION_BANK_PATH is None
        assert settings.is_production is False

    def test_log_level_normalised(self, monkeypatch):
        monkeypatch.setenv("PERSONA_LOG_LEVEL", "debug")
        assert Settings(_env_file=None).LOG_LEVEL == "DEBUG"

    def test_unknown_log_level_rejected(self, monkeypatch):
        monkeypatch.setenv("PERSONA_LOG_LEVEL", "chatty")
        with pytest.raises(ValidationError):
            Settings(_env_file=None)

    def test_unknown_log_format_rejected(self):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, LOG_FORMAT="xml")

    def test_production_flag(self, monkeypatch):
        monkeypatch.setenv("PERSONA_ENVIRONMENT", "production")
        assert Settings(_env_file=None).is_production is True

    def test_get_settings_cached(self):
        assert get_settings() is get_settings()

    def test_strict_mode_from_environment(self, monkeypatch):
        monkeypatch.setenv("PERSONA_REQUIRE_COMPLETE_ANSWERS", "true")
        assert get_settings().REQUIRE_COMPLETE_ANSWERS is True

    def test_engine_ignores_strict_setting(self, monkeypatch):
        monkeypatch.setenv("PERSONA_REQUIRE_COMPLETE_ANSWERS", "true")
        assert ReportService().require_complete_answers is False


class TestConfigureLogging:
    @pytest.mark.parametrize("fmt", ["json", "console"])
    def test_configures_structlog(self, fmt):
        configure_logging(Settings(_env_file=None, LOG_FORMAT=fmt, LOG_LEVEL="WARNING"))
        try:
            config = structlog.get_config()
            renderer = config["processors"][-1]
            expected = (
                structlog.processors.JSONRenderer
                if fmt == "json"
                else structlog.dev.ConsoleRenderer
            )
            assert isinstance(renderer, expected)
        finally:
            structlog.reset_defaults()
