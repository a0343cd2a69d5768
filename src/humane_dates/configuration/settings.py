"""Typed settings for the humane-dates parser and CLI.

Settings are Pydantic models so the CLI and library callers can rely on
validated values. The library itself never touches the filesystem or the
environment: only :func:`bootstrap_settings` (used by the CLI) reads the
JSON config file and ``HUMANE_DATES_*`` variables.
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field, ValidationError, field_validator

from humane_dates.errors import InvalidConfigError, MissingConfigError

DEFAULT_CONFIG_PATH = Path.home() / ".humane_dates" / "config.json"

LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


class ParserSettings(BaseModel):
    """Limits applied while matching the grammar."""

    max_steps: Optional[int] = Field(
        10_000,
        ge=1,
        description="Leaf match attempts allowed per expression; null disables the limit",
    )


class SuggestionSettings(BaseModel):
    """Shape of completion and keyword suggestions."""

    limit: int = Field(20, ge=1, le=500, description="Maximum suggestions returned")
    year_range: int = Field(5, ge=1, le=50, description="Years offered either side of the parsed year")
    minutes_interval: int = Field(5, ge=1, le=30, description="Step between suggested minutes")

    @field_validator("minutes_interval")
    def _validate_minutes_interval(cls, value: int) -> int:
        if 60 % value != 0:
            raise ValueError("minutes_interval must divide 60")
        return value


class Settings(BaseModel):
    """Root configuration state."""

    parser: ParserSettings = Field(default_factory=ParserSettings)
    suggestions: SuggestionSettings = Field(default_factory=SuggestionSettings)
    log_level: str = Field("WARNING", description="Logging level used by the CLI")

    @field_validator("log_level")
    def _validate_log_level(cls, value: str) -> str:
        level = value.upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(LOG_LEVELS)}")
        return level

    @property
    def numeric_log_level(self) -> int:
        return getattr(logging, self.log_level)


def load_settings(path: Path = DEFAULT_CONFIG_PATH) -> Settings:
    """Load settings from disk or raise if missing or invalid."""

    if not path.exists():
        raise MissingConfigError(
            f"Settings file not found at {path}", details={"path": str(path)}
        )
    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise InvalidConfigError(
            f"Settings file {path} is not valid JSON: {exc}", details={"path": str(path)}
        ) from exc
    return validate_settings(payload)


def validate_settings(payload: Dict[str, Any]) -> Settings:
    try:
        return Settings.model_validate(payload)
    except ValidationError as exc:
        raise InvalidConfigError(f"Invalid configuration: {exc}") from exc


def save_settings(settings: Settings, path: Path = DEFAULT_CONFIG_PATH) -> None:
    """Persist settings to disk as indented JSON."""

    payload = settings.model_dump(mode="json")
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(payload, indent=2), encoding="utf-8")


def bootstrap_settings(
    *,
    path: Path = DEFAULT_CONFIG_PATH,
    overrides: Optional[Dict[str, Any]] = None,
    persist: bool = True,
) -> Settings:
    """Create or load settings, then apply overrides and environment variables.

    Precedence, lowest first: file (or defaults), ``overrides``, environment.
    """

    overrides = overrides or {}

    if path.exists():
        settings = load_settings(path)
    else:
        settings = Settings()
        if persist:
            save_settings(settings, path)

    merged = settings.model_dump(mode="python")
    merged = _apply_overrides(merged, overrides)
    merged = _apply_env_overrides(merged)

    resolved = validate_settings(merged)
    if persist and overrides:
        save_settings(resolved, path)
    return resolved


def _apply_overrides(base: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
    merged = base.copy()
    for key, value in overrides.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _apply_overrides(merged[key], value)
        else:
            merged[key] = value
    return merged


def _apply_env_overrides(data: Dict[str, Any]) -> Dict[str, Any]:
    parser = data.setdefault("parser", {})
    _set_env_override(parser, "max_steps", "HUMANE_DATES_MAX_STEPS", cast_int=True)

    suggestions = data.setdefault("suggestions", {})
    _set_env_override(suggestions, "limit", "HUMANE_DATES_SUGGESTION_LIMIT", cast_int=True)

    _set_env_override(data, "log_level", "HUMANE_DATES_LOG_LEVEL")
    return data


def _set_env_override(
    mapping: Dict[str, Any],
    key: str,
    env_name: str,
    *,
    cast_int: bool = False,
) -> None:
    raw = os.getenv(env_name)
    if raw is None:
        return
    if cast_int:
        try:
            mapping[key] = int(raw)
        except ValueError as exc:
            raise InvalidConfigError(
                f"{env_name} must be an integer, got {raw!r}", details={env_name: raw}
            ) from exc
    else:
        mapping[key] = raw
