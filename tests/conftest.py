"""Shared pytest fixtures for Tabula tests."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest
from click.testing import CliRunner

from shared.logger import ROOT_LOGGER_NAME


def _reset_tabula_logging() -> None:
    root = logging.getLogger(ROOT_LOGGER_NAME)
    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()
    root.setLevel(logging.NOTSET)
    root.propagate = True


@pytest.fixture(autouse=True)
def _isolated_logging() -> None:
    """Undo handler wiring done by the CLI or configure_logging."""
    _reset_tabula_logging()
    yield
    _reset_tabula_logging()


@pytest.fixture
def cli_runner() -> CliRunner:
    """Click CLI test runner with a wide terminal so Rich does not wrap."""
    return CliRunner(env={"COLUMNS": "200"})


@pytest.fixture
def unicode_text() -> str:
    """Mixed-script sample whose UTF-8 form has 1-, 2- and 3-byte characters."""
    return "Привет, мир! Hello, 世界. Ünïcödé ~ ÿ"


@pytest.fixture
def text_file(tmp_path: Path, unicode_text: str) -> Path:
    path = tmp_path / "plain.txt"
    path.write_bytes(unicode_text.encode("utf-8"))
    return path
