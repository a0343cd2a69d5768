"""Tests for the date parsing CLI commands."""

import json
import logging

import pytest
from typer.testing import CliRunner

from humane_dates.cli import cli

REFERENCE = "2024-01-15T10:00:00"


@pytest.fixture
def runner():
    """Create CLI test runner."""
    return CliRunner()


def test_parse_json(runner, config_path):
    result = runner.invoke(
        cli,
        ["parse", "lunch tomorrow at noon", "-r", REFERENCE, "--json", "--config", str(config_path)],
    )

    assert result.exit_code == 0
    data = json.loads(result.stdout)
    assert len(data) == 1
    assert data[0]["text"] == "tomorrow at noon"
    assert data[0]["date"] == "2024-01-16T12:00:00"
    assert data[0]["span"] == [6, 22]
    assert not config_path.exists()


def test_parse_table(runner, config_path):
    result = runner.invoke(
        cli, ["parse", "next friday", "--reference", REFERENCE, "--config", str(config_path)]
    )

    assert result.exit_code == 0
    assert "Dates (1 found)" in result.output
    assert "2024-01-19 10:00:00" in result.output


def test_parse_nothing_found(runner, config_path):
    result = runner.invoke(cli, ["parse", "hello there", "--config", str(config_path)])

    assert result.exit_code == 0
    assert "No dates found" in result.output


def test_parse_bad_reference(runner, config_path):
    result = runner.invoke(
        cli, ["parse", "tomorrow", "-r", "someday", "--config", str(config_path)]
    )

    assert result.exit_code == 1
    assert "INVALID_REFERENCE_DATE" in result.output


def test_parse_uses_config_file(runner, config_path):
    config_path.write_text(json.dumps({"parser": {"max_steps": 1}}), encoding="utf-8")
    result = runner.invoke(
        cli, ["parse", "tomorrow", "-r", REFERENCE, "--json", "--config", str(config_path)]
    )

    assert result.exit_code == 0
    assert json.loads(result.stdout) == []


def test_parse_invalid_config(runner, config_path):
    config_path.write_text("{broken", encoding="utf-8")
    result = runner.invoke(cli, ["parse", "tomorrow", "--config", str(config_path)])

    assert result.exit_code == 1
    assert "INVALID_CONFIG" in result.output


def test_suggest_completes(runner, config_path):
    result = runner.invoke(
        cli,
        ["suggest", "at 3pm", "-r", REFERENCE, "--limit", "2", "--json", "--config", str(config_path)],
    )

    assert result.exit_code == 0
    assert json.loads(result.stdout) == ["at 3:00 pm", "at 3:05 pm"]


def test_suggest_plain_output(runner, config_path):
    result = runner.invoke(cli, ["suggest", "tom", "--config", str(config_path)])

    assert result.exit_code == 0
    assert result.stdout.strip() == "Tomorrow"


def test_tokens_json(runner):
    result = runner.invoke(cli, ["tokens", "jan 5th", "--json"])

    assert result.exit_code == 0
    data = json.loads(result.stdout)
    assert [token["value"] for token in data] == ["jan", " ", "5", "th"]
    assert data[2] == {"tag": "number", "value": "5", "start": 4, "end": 5}


def test_tokens_table(runner):
    result = runner.invoke(cli, ["tokens", "3pm"])

    assert result.exit_code == 0
    assert "Tokens (2 total)" in result.output


def test_invalid_log_level(runner):
    result = runner.invoke(cli, ["--log-level", "chatty", "tokens", "x"])

    assert result.exit_code != 0


def test_log_level_from_command_config(runner, config_path):
    config_path.write_text(json.dumps({"log_level": "ERROR"}), encoding="utf-8")
    result = runner.invoke(cli, ["parse", "tomorrow", "--json", "--config", str(config_path)])

    assert result.exit_code == 0
    assert logging.getLogger().level == logging.ERROR


def test_explicit_log_level_wins_over_config(runner, config_path):
    config_path.write_text(json.dumps({"log_level": "ERROR"}), encoding="utf-8")
    result = runner.invoke(
        cli, ["--log-level", "INFO", "suggest", "tom", "--json", "--config", str(config_path)]
    )

    assert result.exit_code == 0
    assert logging.getLogger().level == logging.INFO
