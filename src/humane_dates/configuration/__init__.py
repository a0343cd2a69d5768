"""Configuration loading utilities for humane-dates."""

from .settings import (
    DEFAULT_CONFIG_PATH,
    ParserSettings,
    Settings,
    SuggestionSettings,
    bootstrap_settings,
    load_settings,
    save_settings,
)

__all__ = [
    "DEFAULT_CONFIG_PATH",
    "ParserSettings",
    "Settings",
    "SuggestionSettings",
    "bootstrap_settings",
    "load_settings",
    "save_settings",
]
