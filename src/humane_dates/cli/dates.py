"""Date parsing CLI commands.

Commands:
    humane-dates parse "lunch tomorrow at noon" --reference 2024-01-15T10:00
    humane-dates suggest "next fr" --limit 5 --json
    humane-dates tokens "jan 5th, 2024"
"""

from __future__ import annotations

import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Optional

import typer
from dateutil import parser as dateutil_parser
from rich.console import Console
from rich.table import Table

from humane_dates.configuration.settings import DEFAULT_CONFIG_PATH, Settings, bootstrap_settings
from humane_dates.en.api import parse
from humane_dates.en.suggest import suggest_for
from humane_dates.en.tokenizer import tokenize
from humane_dates.errors import HumaneDatesError, InvalidReferenceDateError, format_error_for_cli

logger = logging.getLogger(__name__)

console = Console()

SPECIFIED_COLUMNS = ("year", "month", "day", "hours", "minutes", "seconds")


def _parse_reference(raw: Optional[str]) -> datetime:
    if raw is None:
        return datetime.now()
    try:
        return dateutil_parser.isoparse(raw)
    except (ValueError, OverflowError) as exc:
        raise InvalidReferenceDateError(raw) from exc


def _load_settings(
    ctx: typer.Context,
    config_path: Path,
    overrides: Optional[dict] = None,
) -> Settings:
    """Effective settings for a command; applies their log level unless ``--log-level`` was given."""
    settings = bootstrap_settings(path=config_path, overrides=overrides, persist=False)
    if not (ctx.obj or {}).get("log_level_explicit"):
        logging.getLogger().setLevel(settings.numeric_log_level)
    return settings


def _fail(error: HumaneDatesError) -> None:
    typer.echo(format_error_for_cli(error), err=True)
    raise typer.Exit(code=1)


def parse_command(
    ctx: typer.Context,
    text: str = typer.Argument(..., help="Text containing date or time phrases"),
    reference: Optional[str] = typer.Option(
        None, "--reference", "-r", help="ISO 8601 reference instant (default: now)"
    ),
    json_output: bool = typer.Option(False, "--json", help="Emit JSON output"),
    config_path: Path = typer.Option(DEFAULT_CONFIG_PATH, "--config", help="Path to config file"),
) -> None:
    """Find and resolve every date/time phrase in TEXT."""
    try:
        reference_time = _parse_reference(reference)
        results = parse(text, reference_time, settings=_load_settings(ctx, config_path))
    except HumaneDatesError as exc:
        _fail(exc)
        return

    if json_output:
        typer.echo(json.dumps([result.to_dict() for result in results], indent=2))
        return

    if not results:
        console.print("[yellow]No dates found[/yellow]")
        return

    table = Table(title=f"Dates ({len(results)} found)")
    table.add_column("Phrase", style="cyan")
    table.add_column("Span", justify="right")
    table.add_column("Date", style="green")
    table.add_column("Specified", style="magenta")

    for result in results:
        flags = result.specified.to_dict()
        specified = ", ".join(name for name in SPECIFIED_COLUMNS if flags[name]) or "-"
        table.add_row(
            result.text,
            f"{result.span[0]}-{result.span[1]}",
            result.date.isoformat(sep=" "),
            specified,
        )

    console.print(table)


def suggest_command(
    ctx: typer.Context,
    text: str = typer.Argument(..., help="Partially typed phrase"),
    reference: Optional[str] = typer.Option(
        None, "--reference", "-r", help="ISO 8601 reference instant (default: now)"
    ),
    limit: Optional[int] = typer.Option(None, "--limit", "-n", min=1, help="Maximum suggestions"),
    json_output: bool = typer.Option(False, "--json", help="Emit JSON output"),
    config_path: Path = typer.Option(DEFAULT_CONFIG_PATH, "--config", help="Path to config file"),
) -> None:
    """Suggest complete phrases for TEXT."""
    try:
        reference_time = _parse_reference(reference)
        overrides = {"suggestions": {"limit": limit}} if limit is not None else None
        settings = _load_settings(ctx, config_path, overrides)
        suggestions = suggest_for(text, reference_time, settings=settings)
    except HumaneDatesError as exc:
        _fail(exc)
        return

    if json_output:
        typer.echo(json.dumps(suggestions, indent=2))
        return

    if not suggestions:
        console.print("[yellow]No suggestions[/yellow]")
        return

    for suggestion in suggestions:
        typer.echo(suggestion)


def tokens_command(
    text: str = typer.Argument(..., help="Text to tokenize"),
    json_output: bool = typer.Option(False, "--json", help="Emit JSON output"),
) -> None:
    """Show the token stream the grammar sees."""
    tokens = tokenize(text)

    if json_output:
        typer.echo(json.dumps([token.to_dict() for token in tokens], indent=2))
        return

    table = Table(title=f"Tokens ({len(tokens)} total)")
    table.add_column("#", justify="right")
    table.add_column("Tag", style="cyan")
    table.add_column("Value", style="green")
    table.add_column("Span", justify="right")

    for index, token in enumerate(tokens):
        table.add_row(str(index), token.tag, repr(token.value), f"{token.start}-{token.end}")

    console.print(table)
