"""Configuration loading with XDG paths and precedence resolution.

The hosting application usually calls :func:`load_defaults` once and hands
the result to :meth:`~meshclient.builder.ClientBuilder.from_defaults`.

Precedence (high to low):

1. Explicit ``overrides`` passed by the caller
2. Environment variables (``MESHCLIENT_TIMEOUT``, ``MESHCLIENT_VERIFY_SSL``,
   ``MESHCLIENT_USER_AGENT``, ``MESHCLIENT_WIRETAP_LOGGER``,
   ``MESHCLIENT_WIRETAP_LEVEL``)
3. Config file (``$MESHCLIENT_CONFIG`` or ``<config_dir>/config.json``)
4. Model defaults
"""

from __future__ import annotations

import json
import os
import platform
from pathlib import Path
from typing import Any, Optional

from pydantic import ValidationError

from meshclient.exceptions import ConfigError
from meshclient.models import ClientDefaults

_APP_NAME = "meshclient"
_CONFIG_FILENAME = "config.json"
_CONFIG_ENV = "MESHCLIENT_CONFIG"

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


# --- XDG path resolution ---


def _is_xdg_platform() -> bool:
    """Return True if the platform supports XDG Base Directory spec (Linux/FreeBSD)."""
    return platform.system() == "Linux" or platform.system().endswith("BSD")


def get_config_dir() -> Path:
    """Return the configuration directory. It is not created.

    On Linux/BSD: ``$XDG_CONFIG_HOME/meshclient/`` (default ``~/.config/meshclient/``).
    On macOS/Windows: ``~/.meshclient/``.
    """
    if _is_xdg_platform():
        env_value = os.environ.get("XDG_CONFIG_HOME", "")
        base = Path(env_value) if env_value else Path.home() / ".config"
        return base / _APP_NAME
    return Path.home() / f".{_APP_NAME}"


def config_file_path() -> Path:
    """Return the config file in use: ``$MESHCLIENT_CONFIG`` or the default location."""
    env_path = os.environ.get(_CONFIG_ENV)
    if env_path:
        return Path(env_path)
    return get_config_dir() / _CONFIG_FILENAME


# --- Loading ---


def _read_config_file(path: Path) -> dict[str, Any]:
    if not path.is_file():
        return {}
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (json.JSONDecodeError, ValueError) as exc:
        raise ConfigError(f"Invalid config at {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigError(f"Invalid config at {path}: expected a JSON object")
    return data


def _parse_bool(name: str, value: str) -> bool:
    lowered = value.strip().lower()
    if lowered in _TRUE_VALUES:
        return True
    if lowered in _FALSE_VALUES:
        return False
    raise ConfigError(f"{name} must be a boolean, got {value!r}")


def _env_overrides() -> dict[str, Any]:
    """Collect overrides from ``MESHCLIENT_*`` environment variables."""
    data: dict[str, Any] = {}
    wiretap: dict[str, Any] = {}

    timeout = os.environ.get("MESHCLIENT_TIMEOUT")
    if timeout:
        try:
            data["timeout"] = float(timeout)
        except ValueError as exc:
            raise ConfigError(f"MESHCLIENT_TIMEOUT must be a number, got {timeout!r}") from exc

    verify = os.environ.get("MESHCLIENT_VERIFY_SSL")
    if verify:
        data["verify_ssl"] = _parse_bool("MESHCLIENT_VERIFY_SSL", verify)

    user_agent = os.environ.get("MESHCLIENT_USER_AGENT")
    if user_agent:
        data["user_agent"] = user_agent

    logger_name = os.environ.get("MESHCLIENT_WIRETAP_LOGGER")
    if logger_name:
        wiretap["logger_name"] = logger_name
    level = os.environ.get("MESHCLIENT_WIRETAP_LEVEL")
    if level:
        wiretap["level"] = level

    if wiretap:
        data["wiretap"] = wiretap
    return data


def _merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Merge *override* into a copy of *base*, descending into nested dicts."""
    merged = dict(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def load_defaults(
    path: Optional[Path] = None,
    overrides: Optional[dict[str, Any]] = None,
) -> ClientDefaults:
    """Resolve :class:`~meshclient.models.ClientDefaults` through the precedence chain.

    Args:
        path: Config file to read. Defaults to :func:`config_file_path`.
            A missing file is not an error.
        overrides: Highest-precedence values, e.g. from CLI flags.

    Returns:
        The validated defaults.

    Raises:
        ConfigError: If the file contains invalid JSON, an environment
            variable cannot be parsed, or the merged values fail validation.
    """
    config_path = path if path is not None else config_file_path()
    data = _read_config_file(config_path)
    data = _merge(data, _env_overrides())
    data = _merge(data, overrides or {})
    try:
        return ClientDefaults.model_validate(data)
    except ValidationError as exc:
        raise ConfigError(f"Invalid client configuration: {exc}") from exc
