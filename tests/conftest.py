"""Shared test fixtures for atproto_openapi.

Provides the lexicon fixture tree, builders for ad-hoc lexicon files,
isolated config environments, output state management, and a CLI runner.
These fixtures are automatically discovered by pytest and available to
all test modules without explicit imports.
"""

from __future__ import annotations

import json
import logging
import shutil
from pathlib import Path
from typing import Any, Callable

import pytest

from atproto_openapi.models import LexiconDefinition
from atproto_openapi.output import OutputFormat, OutputManager, reset_output, set_output


FIXTURES_DIR = Path(__file__).parent / "fixtures"
LEXICONS_DIR = FIXTURES_DIR / "lexicons"


# ---------------------------------------------------------------------------
# Auto-reset global output and logging state between tests
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _reset_output_between_tests() -> None:
    """Reset the global OutputManager and package logger after every test.

    The CLI callback binds a RichHandler to the stderr stream Typer's
    CliRunner provides; once the test ends that stream is closed. Resetting
    also restores propagation so ``caplog`` sees package log records.
    """
    yield
    reset_output()
    logger = logging.getLogger("atproto_openapi")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)
    logger.propagate = True


# ---------------------------------------------------------------------------
# Lexicon fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def lexicons_dir(tmp_path: Path) -> Path:
    """A private copy of the fixture lexicon tree."""
    target = tmp_path / "lexicons"
    shutil.copytree(LEXICONS_DIR, target)
    return target


@pytest.fixture
def write_lexicon(tmp_path: Path) -> Callable[..., Path]:
    """Return a helper that writes a lexicon document under ``tmp_path/lexicons``.

    Usage::

        path = write_lexicon("com.example.getThing", {"main": {"type": "query"}})
    """
    root = tmp_path / "lexicons"

    def _write(document_id: str, defs: dict[str, Any], name: str | None = None) -> Path:
        path = root / (name or (document_id.replace(".", "/") + ".json"))
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(
            json.dumps({"lexicon": 1, "id": document_id, "defs": defs}, indent=2),
            encoding="utf-8",
        )
        return path

    return _write


def make_definition(**fields: Any) -> LexiconDefinition:
    """Build a :class:`LexiconDefinition` from keyword fields."""
    return LexiconDefinition.model_validate(fields)


@pytest.fixture
def definition() -> Callable[..., LexiconDefinition]:
    """Factory fixture for :class:`LexiconDefinition` objects."""
    return make_definition


# ---------------------------------------------------------------------------
# Config isolation fixture
# ---------------------------------------------------------------------------


@pytest.fixture
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Isolate configuration to a temporary working directory.

    Clears all ATPROTO_OPENAPI_* environment variables and changes the
    working directory to tmp_path so no project config leaks in.

    Returns:
        The tmp_path root directory for additional file creation.
    """
    for var in [
        "ATPROTO_OPENAPI_LEXICONS",
        "ATPROTO_OPENAPI_OUTPUT",
        "ATPROTO_OPENAPI_FORMAT",
        "ATPROTO_OPENAPI_WORKERS",
    ]:
        monkeypatch.delenv(var, raising=False)

    monkeypatch.chdir(tmp_path)
    return tmp_path


# ---------------------------------------------------------------------------
# Output fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def quiet_output() -> OutputManager:
    """Install a PLAIN-format, quiet OutputManager as the global output."""
    output = OutputManager(format=OutputFormat.PLAIN, quiet=True)
    set_output(output)
    yield output
    reset_output()


# ---------------------------------------------------------------------------
# CLI runner fixture
# ---------------------------------------------------------------------------


@pytest.fixture
def cli_runner():
    """Typer CLI test runner."""
    from typer.testing import CliRunner

    return CliRunner()
