"""Config utility for persistent ShelfScan settings.

Settings are read from ~/.config/shelfscan/config.toml (or
$XDG_CONFIG_HOME/shelfscan/config.toml) using tomli, and can be overridden by
SHELFSCAN_* environment variables and CLI options.

Example config.toml::

    [scan]
    extensions = [".mkv", ".mp4", ".avi", ".m4v"]
    excluded_folders = ["Plex Versions", "@eaDir"]

    [movie]
    embedded_tags = true

    [report]
    all_diagnostics = false
"""

import contextlib
import os
from pathlib import Path
from typing import Any, TypeVar, cast

import tomli

# Determine config directory respecting XDG_CONFIG_HOME if set.
_xdg_config_home = Path(os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config"))
# Path like ~/.config/shelfscan or $XDG_CONFIG_HOME/shelfscan
CONFIG_DIR = _xdg_config_home / "shelfscan"
CONFIG_FILE = CONFIG_DIR / "config.toml"

_TRUTHY = {"1", "true", "yes", "on"}

T = TypeVar("T")


def _read_config_file() -> dict[str, Any]:
    """Read the TOML config file if it exists, returning a (nested) dict."""

    if not CONFIG_FILE.exists():
        return {}
    with CONFIG_FILE.open("rb") as f:
        return tomli.load(f)


def _lookup_nested(data: dict[str, Any], dotted_key: str) -> Any | None:
    """Retrieve a nested value from *data* given a dotted key path.

    Example: dotted_key="scan.extensions" will attempt
    ``data["scan"]["extensions"]`` returning None if any level is missing.
    """

    keys = dotted_key.split(".")
    current: Any = data
    for part in keys:
        if not isinstance(current, dict):
            return None
        current = current.get(part)
        if current is None:
            return None
    return current


def _make_env_var_name(dotted_key: str, prefix: str = "SHELFSCAN_") -> str:
    """Convert a dotted key path to an uppercase ENV var name.

    Example: "scan.extensions" -> "SHELFSCAN_SCAN_EXTENSIONS".
    """

    return prefix + dotted_key.replace(".", "_").upper()


def _coerce(value: Any, default: T) -> T:
    """Coerce *value* to the type of *default*, falling back to *default*."""
    if isinstance(default, bool):
        if isinstance(value, bool):
            return cast(T, value)
        if isinstance(value, str):
            return cast(T, value.lower() in _TRUTHY)
        return default
    if isinstance(default, int):
        if isinstance(value, int):
            return cast(T, value)
        if isinstance(value, str):
            with contextlib.suppress(ValueError):
                return cast(T, int(value))
        return default
    if isinstance(default, (list, tuple)):
        # Env vars carry lists as comma separated strings.
        if isinstance(value, str):
            return cast(T, [item.strip() for item in value.split(",") if item.strip()])
        if isinstance(value, (list, tuple)):
            return cast(T, [str(item) for item in value])
        return default
    return cast(T, value)


def resolve_setting(
    key: str,
    *,
    default: T,
    cli_value: T | None = None,
) -> T:
    """Resolve a configuration *key* using precedence CLI > env > config > default.

    Args:
        key: Dotted key path, e.g. ``"scan.extensions"``.
        default: Value to fall back to when no overrides found.
        cli_value: Value passed from CLI option (may be ``None`` when not provided).

    Returns:
        The resolved value with type matching *default* (or *cli_value*).
    """

    # 1. CLI value wins if provided (and not ``None`` to mimic Typer semantics).
    if cli_value is not None:
        return cli_value

    # 2. Environment variable
    env_var = _make_env_var_name(key)
    if env_var in os.environ:
        return _coerce(os.environ[env_var], default)

    # 3. Config file lookup
    file_val = _lookup_nested(_read_config_file(), key)
    if file_val is not None:
        return _coerce(file_val, default)

    # 4. Default
    return default
