"""Parser configuration with project files, environment variables, and precedence resolution.

This module resolves the effective :class:`~ramlkit.models.ParserConfig`:

* **Project-local config** -- an optional ``./ramlkit.json`` holding any
  :class:`~ramlkit.models.ParserConfig` field. See :func:`load_project_config`.
* **Environment** -- ``RAMLKIT_BASE_DIR``, ``RAMLKIT_ENCODING`` and
  ``RAMLKIT_NO_EXPAND``.
* **Precedence resolution** -- :func:`resolve_config` layers CLI flags over
  the environment, the project file, and the model defaults.
"""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Optional

from pydantic import ValidationError as PydanticValidationError

from ramlkit.exceptions import ConfigError
from ramlkit.models import ParserConfig

_PROJECT_CONFIG_FILENAME = "ramlkit.json"

_TRUTHY = {"1", "true", "yes", "on"}
_FALSY = {"0", "false", "no", "off", ""}


def load_project_config() -> Optional[dict[str, Any]]:
    """Load project-local configuration from ``./ramlkit.json``.

    Returns:
        The parsed JSON as a dict, or ``None`` if the file does not exist.

    Raises:
        ConfigError: If the file exists but is not a JSON object.
    """
    path = Path.cwd() / _PROJECT_CONFIG_FILENAME
    if not path.is_file():
        return None
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (json.JSONDecodeError, ValueError) as exc:
        raise ConfigError(f"Invalid project config at {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigError(f"Invalid project config at {path}: expected a JSON object")
    return data


def _env_flag(name: str) -> Optional[bool]:
    value = os.environ.get(name)
    if value is None:
        return None
    lowered = value.strip().lower()
    if lowered in _TRUTHY:
        return True
    if lowered in _FALSY:
        return False
    raise ConfigError(f"Environment variable {name} must be a boolean (got {value!r})")


def resolve_config(
    cli_base_dir: Optional[Path] = None,
    cli_encoding: Optional[str] = None,
    cli_expand: Optional[bool] = None,
) -> ParserConfig:
    """Resolve config with full precedence chain.

    Precedence (high to low):
        1. CLI flags (``cli_base_dir``, ``cli_encoding``, ``cli_expand``)
        2. Environment variables (``RAMLKIT_BASE_DIR``, ``RAMLKIT_ENCODING``,
           ``RAMLKIT_NO_EXPAND``)
        3. Project config (``./ramlkit.json``)
        4. Defaults

    Raises:
        ConfigError: If the project file or an environment value is invalid.
    """
    # 3. Project-local config over the model defaults
    values: dict[str, Any] = dict(load_project_config() or {})

    # 2. Environment variables
    env_base_dir = os.environ.get("RAMLKIT_BASE_DIR")
    if env_base_dir:
        values["base_dir"] = env_base_dir
    env_encoding = os.environ.get("RAMLKIT_ENCODING")
    if env_encoding:
        values["encoding"] = env_encoding
    no_expand = _env_flag("RAMLKIT_NO_EXPAND")
    if no_expand is not None:
        values["expand"] = not no_expand

    # 1. CLI flags
    if cli_base_dir is not None:
        values["base_dir"] = cli_base_dir
    if cli_encoding is not None:
        values["encoding"] = cli_encoding
    if cli_expand is not None:
        values["expand"] = cli_expand

    try:
        return ParserConfig.model_validate(values)
    except PydanticValidationError as exc:
        raise ConfigError(f"Invalid configuration: {exc}") from exc
