"""Tests for configuration settings."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from fuzzy_dates.config.settings import FuzzyDateSettings, get_settings


@pytest.fixture(autouse=True)
def clear_settings_cache():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


def test_settings_has_defaults(monkeypatch):
    """Test that settings has sensible defaults."""
    for name in ("FUZZY_DATE_TIMEZONE", "FUZZY_DATE_HOLIDAYS_FILE", "LOG_LEVEL", "LOG_FORMAT"):
        monkeypatch.delenv(name, raising=False)

    settings = FuzzyDateSettings(_env_file=None)

    assert settings.timezone == "Europe/Berlin"
    assert settings.holidays_file is None
    assert settings.log_level == "INFO"
    assert settings.log_format == "console"


def test_settings_loads_from_env(monkeypatch, tmp_path: Path):
    """Test that settings loads from environment variables."""
    holidays_file = tmp_path / "holidays.yaml"
    monkeypatch.setenv("FUZZY_DATE_TIMEZONE", "Europe/Vienna")
    monkeypatch.setenv("FUZZY_DATE_HOLIDAYS_FILE", str(holidays_file))
    monkeypatch.setenv("LOG_LEVEL", "DEBUG")
    monkeypatch.setenv("LOG_FORMAT", "json")

    settings = get_settings()

    assert settings.timezone == "Europe/Vienna"
    assert settings.holidays_file == holidays_file
    assert settings.log_level == "DEBUG"
    assert settings.log_format == "json"


def test_invalid_timezone_rejected(monkeypatch):
    """Test unknown time zones fail validation."""
    monkeypatch.setenv("FUZZY_DATE_TIMEZONE", "Mars/Olympus_Mons")

    with pytest.raises(ValidationError):
        FuzzyDateSettings(_env_file=None)


def test_settings_are_cached():
    """Test that get_settings returns cached instance."""
    settings1 = get_settings()
    settings2 = get_settings()

    assert settings1 is settings2
