"""Command line entry points for humane-dates."""

import logging
from typing import Optional

import typer
from typer import Typer

from ..configuration.cli import config_app
from ..configuration.settings import LOG_LEVELS, bootstrap_settings
from ..errors import ConfigurationError
from .dates import parse_command, suggest_command, tokens_command


cli = Typer(help="Parse English date and time phrases")
cli.command("parse")(parse_command)
cli.command("suggest")(suggest_command)
cli.command("tokens")(tokens_command)
cli.add_typer(config_app, name="config")


def _configured_level() -> str:
    try:
        return bootstrap_settings(persist=False).log_level
    except ConfigurationError:
        return "WARNING"


@cli.callback()
def main(
    ctx: typer.Context,
    log_level: Optional[str] = typer.Option(
        None, "--log-level", help=f"Logging level ({', '.join(LOG_LEVELS)})"
    ),
) -> None:
    """Parse English date and time phrases."""
    level = (log_level or _configured_level()).upper()
    if level not in LOG_LEVELS:
        raise typer.BadParameter(f"must be one of {', '.join(LOG_LEVELS)}", param_hint="--log-level")
    logging.basicConfig(
        level=getattr(logging, level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logging.getLogger().setLevel(getattr(logging, level))
    # Commands reading another config file may still adjust an implicit level.
    ctx.obj = {"log_level_explicit": log_level is not None}


__all__ = ["cli", "config_app"]
