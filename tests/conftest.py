"""Shared pytest fixtures and test helpers for guardedbuild tests."""

from __future__ import annotations

import logging
from collections.abc import Generator
from pathlib import Path

import pytest
from click.testing import CliRunner


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture(autouse=True)
def _restore_logging() -> Generator[None]:
    """Undo the root-logger changes ``configure_logging`` makes."""
    root = logging.getLogger()
    original_handlers = root.handlers[:]
    original_level = root.level
    pkg = logging.getLogger("guardedbuild")
    pkg_level = pkg.level
    yield
    root.handlers = original_handlers
    root.setLevel(original_level)
    pkg.setLevel(pkg_level)


@pytest.fixture
def workdir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Empty working directory with no config file and no config env vars.

    Use via ``@pytest.mark.usefixtures("workdir")`` on CLI test classes.
    """
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("GUARDEDBUILD_CONFIG", raising=False)
    monkeypatch.delenv("GUARDEDBUILD_JSON_OUTPUT", raising=False)
    monkeypatch.delenv("GUARDEDBUILD_QUIET", raising=False)
    return tmp_path
