"""Serialise the generated OpenAPI document and write it to disk.

JSON output matches what downstream doc tooling expects: two-space
indentation, keys in the order the assembler produced them, and a trailing
newline. YAML output keeps the same key order.

Writes are atomic (temp file in the target directory, then rename), so an
interrupted build never leaves a truncated artifact behind.
"""

from __future__ import annotations

import json
import os
import stat
import tempfile
from pathlib import Path
from typing import Any, Optional

import yaml

from atproto_openapi.exceptions import OutputWriteError
from atproto_openapi.models import OutputFileFormat


def serialize_document(
    document: dict[str, Any], fmt: OutputFileFormat = OutputFileFormat.JSON
) -> str:
    """Render *document* as JSON or YAML text ending in a newline."""
    if fmt == OutputFileFormat.YAML:
        return yaml.safe_dump(
            document, sort_keys=False, allow_unicode=True, default_flow_style=False
        )
    return json.dumps(document, indent=2, ensure_ascii=False) + "\n"


def write_document(
    document: dict[str, Any],
    path: str | Path,
    fmt: OutputFileFormat = OutputFileFormat.JSON,
) -> Path:
    """Serialise *document* and atomically write it to *path*.

    Parent directories are created as needed.

    Returns:
        The path written.

    Raises:
        OutputWriteError: If the file cannot be written.
    """
    target = Path(path)
    try:
        atomic_write(target, serialize_document(document, fmt))
    except OSError as exc:
        raise OutputWriteError(f"Failed to write {target}: {exc}") from exc
    return target


def atomic_write(path: Path, data: str) -> None:
    """Write data to file atomically using temp file + rename.

    The temporary file is created in the same directory as *path* so that
    ``os.replace`` is an atomic rename on POSIX systems. On any failure the
    temp file is cleaned up.

    The result keeps the mode of the file it replaces, or gets the usual
    umask-derived mode when *path* is new.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    mode = _target_mode(path)

    fd = None
    tmp_path: Optional[str] = None
    try:
        fd = tempfile.NamedTemporaryFile(
            mode="w",
            dir=path.parent,
            prefix=f".{path.name}.",
            suffix=".tmp",
            delete=False,
            encoding="utf-8",
        )
        tmp_path = fd.name
        fd.write(data)
        fd.flush()
        os.fsync(fd.fileno())
        fd.close()
        fd = None  # prevent double-close below
        os.chmod(tmp_path, mode)
        os.replace(tmp_path, path)
    except BaseException:
        if fd is not None:
            fd.close()
        if tmp_path is not None:
            try:
                os.unlink(tmp_path)
            except OSError:
                pass
        raise


def _target_mode(path: Path) -> int:
    """Permission bits for *path*: its current mode, or ``0o666`` minus the umask."""
    try:
        return stat.S_IMODE(path.stat().st_mode)
    except FileNotFoundError:
        umask = os.umask(0)
        os.umask(umask)
        return 0o666 & ~umask
