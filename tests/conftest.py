"""Shared test configuration and fixtures."""

from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path

import pytest

from humane_dates.core.matcher import MaybeNode, Node

ENV_VARS = (
    "HUMANE_DATES_MAX_STEPS",
    "HUMANE_DATES_SUGGESTION_LIMIT",
    "HUMANE_DATES_LOG_LEVEL",
)

# Monday
REFERENCE = datetime(2024, 1, 15, 10, 0, 0)


@pytest.fixture(autouse=True)
def _clean_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture(autouse=True)
def _restore_root_log_level():
    root = logging.getLogger()
    level = root.level
    yield
    root.setLevel(level)


@pytest.fixture
def reference() -> datetime:
    return REFERENCE


@pytest.fixture
def config_path(tmp_path: Path) -> Path:
    return tmp_path / "config.json"


def _shape(node: Node) -> tuple:
    """Tag structure of a tree without offsets, for comparing parses."""
    if isinstance(node, MaybeNode):
        return ("maybe", _shape(node.child) if node.child is not None else None)
    return (node.tag, tuple(_shape(child) for child in node.children))


@pytest.fixture
def tree_shape():
    return _shape
