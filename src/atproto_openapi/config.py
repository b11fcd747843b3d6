"""Build configuration with precedence resolution.

The effective :class:`~atproto_openapi.models.BuildConfig` for a run is
layered from, high to low:

1. CLI flags passed to :func:`resolve_config`.
2. Environment variables (``ATPROTO_OPENAPI_LEXICONS``,
   ``ATPROTO_OPENAPI_OUTPUT``, ``ATPROTO_OPENAPI_FORMAT``,
   ``ATPROTO_OPENAPI_WORKERS``).
3. Project config (``./atproto-openapi.json``).
4. Defaults declared on the model.

Every layer is validated through the same Pydantic model, so a bad value
in any of them raises :class:`~atproto_openapi.exceptions.ConfigError`.
"""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Optional

from pydantic import ValidationError

from atproto_openapi.exceptions import ConfigError
from atproto_openapi.models import BuildConfig

PROJECT_CONFIG_FILENAME = "atproto-openapi.json"

_ENV_VARS = {
    "lexicon_dir": "ATPROTO_OPENAPI_LEXICONS",
    "output": "ATPROTO_OPENAPI_OUTPUT",
    "format": "ATPROTO_OPENAPI_FORMAT",
    "workers": "ATPROTO_OPENAPI_WORKERS",
}


def load_project_config(directory: Optional[Path] = None) -> Optional[dict[str, Any]]:
    """Load project-local configuration from ``./atproto-openapi.json``.

    Args:
        directory: Directory to look in. Defaults to the working directory.

    Returns:
        The parsed JSON as a dict, or ``None`` if the file does not exist.

    Raises:
        ConfigError: If the file exists but is not a JSON object.
    """
    path = (directory or Path.cwd()) / PROJECT_CONFIG_FILENAME
    if not path.is_file():
        return None
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (json.JSONDecodeError, OSError) as exc:
        raise ConfigError(f"Invalid project config at {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigError(f"Invalid project config at {path}: expected a JSON object")
    return data


def _env_overrides() -> dict[str, str]:
    overrides: dict[str, str] = {}
    for key, var in _ENV_VARS.items():
        value = os.environ.get(var)
        if value:
            overrides[key] = value
    return overrides


def resolve_config(
    cli_lexicon_dir: Optional[str] = None,
    cli_output: Optional[str] = None,
    cli_format: Optional[str] = None,
    cli_workers: Optional[int] = None,
) -> BuildConfig:
    """Resolve the build config with the full precedence chain.

    Returns:
        The validated :class:`~atproto_openapi.models.BuildConfig`.

    Raises:
        ConfigError: If any layer supplies an invalid value.
    """
    # 4 + 3. Defaults, then project config
    merged: dict[str, Any] = dict(load_project_config() or {})

    # 2. Environment
    merged.update(_env_overrides())

    # 1. CLI flags
    cli = {
        "lexicon_dir": cli_lexicon_dir,
        "output": cli_output,
        "format": cli_format,
        "workers": cli_workers,
    }
    merged.update({k: v for k, v in cli.items() if v is not None})

    try:
        return BuildConfig.model_validate(merged)
    except ValidationError as exc:
        raise ConfigError(f"Invalid configuration: {exc}") from exc
