"""CLI commands for managing humane-dates settings."""

from __future__ import annotations

import json
from pathlib import Path

import typer

from humane_dates.configuration.settings import (
    DEFAULT_CONFIG_PATH,
    Settings,
    bootstrap_settings,
    load_settings,
    save_settings,
    validate_settings,
)
from humane_dates.errors import ConfigurationError, format_error_for_cli


config_app = typer.Typer(help="Manage humane-dates configuration")


@config_app.command("init")
def init_config(
    config_path: Path = typer.Option(DEFAULT_CONFIG_PATH, help="Path to config file"),
    force: bool = typer.Option(False, "--force", help="Overwrite an existing file with defaults"),
) -> None:
    """Initialize the settings file."""

    if force or not config_path.exists():
        save_settings(Settings(), config_path)
    settings = bootstrap_settings(path=config_path, persist=False)
    typer.echo(f"Configuration initialized at {config_path}")
    typer.echo(_summarize_settings(settings))


@config_app.command("show")
def show_config(config_path: Path = typer.Option(DEFAULT_CONFIG_PATH, help="Path to config")) -> None:
    """Display the effective configuration."""

    try:
        settings = bootstrap_settings(path=config_path, persist=False)
    except ConfigurationError as exc:
        typer.echo(format_error_for_cli(exc), err=True)
        raise typer.Exit(code=1)
    typer.echo(_summarize_settings(settings))


@config_app.command("set")
def set_config(
    key: str = typer.Argument(..., help="Configuration key, e.g. suggestions.limit"),
    value: str = typer.Argument(..., help="New value"),
    config_path: Path = typer.Option(DEFAULT_CONFIG_PATH, help="Path to config"),
) -> None:
    """Update a configuration value."""

    try:
        settings = load_settings(config_path) if config_path.exists() else Settings()
        payload = settings.model_dump(mode="python")
        _assign(payload, key.split("."), value)
        updated = validate_settings(payload)
    except ConfigurationError as exc:
        typer.echo(format_error_for_cli(exc), err=True)
        raise typer.Exit(code=1)
    save_settings(updated, config_path)
    typer.echo(f"Updated {key}")


@config_app.command("validate")
def validate_config(
    config_path: Path = typer.Option(DEFAULT_CONFIG_PATH, help="Path to config file"),
) -> None:
    """Validate configuration file for correctness."""

    try:
        settings = load_settings(config_path)
    except ConfigurationError as exc:
        typer.echo(f"Configuration invalid: {exc}", err=True)
        raise typer.Exit(code=1)
    typer.echo(f"Configuration valid at {config_path}")
    typer.echo(f"   Max steps: {settings.parser.max_steps}")
    typer.echo(f"   Suggestion limit: {settings.suggestions.limit}")
    typer.echo(f"   Log level: {settings.log_level}")


def _summarize_settings(settings: Settings) -> str:
    data = settings.model_dump(mode="json")
    return json.dumps(data, indent=2)


def _assign(payload: dict, keys: list[str], value: str) -> None:
    current = payload
    for key in keys[:-1]:
        if not isinstance(current.get(key), dict):
            raise ConfigurationError(f"Unknown configuration section {key!r}")
        current = current[key]
    if keys[-1] not in current:
        raise ConfigurationError(f"Unknown configuration key {'.'.join(keys)!r}")
    current[keys[-1]] = None if value.lower() in {"null", "none"} else value
