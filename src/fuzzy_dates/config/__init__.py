"""Configuration module for the fuzzy date engine."""

from fuzzy_dates.config.logging import configure_logging, get_logger
from fuzzy_dates.config.settings import FuzzyDateSettings, get_settings

__all__ = ["FuzzyDateSettings", "get_settings", "configure_logging", "get_logger"]
