"""Configuration settings for fuzzy date resolution."""

from functools import lru_cache
from pathlib import Path
from typing import Literal
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class FuzzyDateSettings(BaseSettings):
    """Flat settings read from environment variables or a .env file."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Clock
    timezone: str = Field(
        default="Europe/Berlin",
        validation_alias="FUZZY_DATE_TIMEZONE",
        description="IANA time zone used to determine today's civil date",
    )

    # Holiday table (None = bundled holidays.yaml)
    holidays_file: Path | None = Field(
        default=None, validation_alias="FUZZY_DATE_HOLIDAYS_FILE"
    )

    # Logging
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO", validation_alias="LOG_LEVEL"
    )
    log_format: Literal["json", "console"] = Field(
        default="console", validation_alias="LOG_FORMAT"
    )

    @field_validator("timezone")
    @classmethod
    def _validate_timezone(cls, value: str) -> str:
        try:
            ZoneInfo(value)
        except (ZoneInfoNotFoundError, ValueError) as exc:
            raise ValueError(f"Unknown time zone {value!r}") from exc
        return value


@lru_cache
def get_settings() -> FuzzyDateSettings:
    """Get cached settings instance."""
    return FuzzyDateSettings()
