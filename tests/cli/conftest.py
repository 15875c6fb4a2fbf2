"""Shared fixtures for CLI tests.

Plugin and repository YAML files come from the ``write_inputs`` factory
in the top-level conftest.
"""

from __future__ import annotations

import logging
from typing import Iterator

import pytest
from click.testing import CliRunner
from rich.logging import RichHandler


@pytest.fixture
def runner() -> CliRunner:
    """Create a Click CliRunner for invoking commands."""
    return CliRunner()


@pytest.fixture(autouse=True)
def restore_root_logger() -> Iterator[None]:
    """Commands install a Rich handler on the root logger; drop it after each test."""
    root = logging.getLogger()
    level = root.level
    yield
    for handler in list(root.handlers):
        if isinstance(handler, RichHandler):
            root.removeHandler(handler)
    root.setLevel(level)
