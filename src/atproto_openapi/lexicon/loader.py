"""Discover and load lexicon files from disk.

This module handles all I/O for the lexicon side of the pipeline:

* :func:`discover_lexicons` -- Recursively list every ``*.json`` file under a
  lexicon root.
* :func:`load_lexicon` -- Read one file and validate it into a
  :class:`~atproto_openapi.models.LexiconDocument`.

Any problem with a single file is fatal for the whole build and surfaces as
:class:`~atproto_openapi.exceptions.MalformedLexiconError`.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from atproto_openapi.exceptions import ConfigError, MalformedLexiconError
from atproto_openapi.models import LexiconDocument


def discover_lexicons(root: str | Path) -> list[Path]:
    """Return every ``*.json`` file below *root*, sorted by path.

    Sorting keeps the build reproducible: the order decides which file wins
    when two lexicons declare the same id.

    Args:
        root: The lexicon root directory.

    Returns:
        A sorted list of file paths.

    Raises:
        ConfigError: If *root* is not a directory.
    """
    root_path = Path(root)
    if not root_path.is_dir():
        raise ConfigError(f"Lexicon directory not found: {root}")
    return sorted(p for p in root_path.rglob("*.json") if p.is_file())


def load_lexicon(path: str | Path) -> LexiconDocument:
    """Load and validate a single lexicon file.

    Args:
        path: Path to the lexicon JSON file.

    Returns:
        The parsed :class:`~atproto_openapi.models.LexiconDocument`.

    Raises:
        MalformedLexiconError: If the file cannot be read, is not valid JSON,
            is not a JSON object, or lacks a usable ``id`` or ``defs``.
    """
    file_path = Path(path)
    try:
        content = file_path.read_text(encoding="utf-8")
    except OSError as exc:
        raise MalformedLexiconError(f"Failed to read lexicon: {exc}", str(path)) from exc

    try:
        raw = json.loads(content)
    except json.JSONDecodeError as exc:
        raise MalformedLexiconError(f"Invalid JSON: {exc}", str(path)) from exc

    return parse_lexicon(raw, source=str(path))


def parse_lexicon(raw: Any, source: str | None = None) -> LexiconDocument:  # noqa: ANN401
    """Validate an already-decoded lexicon into a :class:`LexiconDocument`.

    Args:
        raw: The decoded JSON value.
        source: Optional file name used in error messages.

    Raises:
        MalformedLexiconError: If the value does not have the lexicon shape.
    """
    if not isinstance(raw, dict):
        raise MalformedLexiconError(
            f"Lexicon must be a JSON object (got {type(raw).__name__})", source
        )
    for required in ("id", "defs"):
        if required not in raw:
            raise MalformedLexiconError(f"Missing required field '{required}'", source)

    try:
        return LexiconDocument.model_validate(raw)
    except ValidationError as exc:
        raise MalformedLexiconError(_summarise(exc), source) from exc


def _summarise(exc: ValidationError) -> str:
    """Condense a pydantic error into one line per failing location."""
    parts = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err["loc"])
        parts.append(f"{loc}: {err['msg']}")
    return "Invalid lexicon: " + "; ".join(parts)
