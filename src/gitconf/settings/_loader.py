# pyright: reportAny=false, reportUnknownVariableType=false, reportUnknownArgumentType=false
"""TOML settings file loading and environment overrides."""

import os
import tomllib
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Final

from gitconf.exceptions import SettingsLoadError
from gitconf.utils import toml_error_position

ENV_PREFIX: Final = "GITCONF_"

# Variables read by the logging utilities, never settings overrides.
_RESERVED_ENV_VARS: Final = frozenset({"GITCONF_DEBUG", "GITCONF_LOG_LEVEL"})

_MISSING: Final = object()


def read_toml_file(path: Path) -> dict[str, Any]:  # pyright: ignore[reportExplicitAny]
    """Read and parse a TOML file.

    Args:
        path: Path to the TOML file.

    Returns:
        Parsed TOML content as dictionary.

    Raises:
        FileNotFoundError: If the file does not exist.
        SettingsLoadError: If the file cannot be parsed.
    """
    try:
        with path.open("rb") as f:
            return tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        msg = f"Failed to parse TOML file: {e}"
        line, column = toml_error_position(e)
        raise SettingsLoadError(msg, path=path, line=line, column=column) from e


def deep_merge(
    base: Mapping[str, Any],  # pyright: ignore[reportExplicitAny]
    override: Mapping[str, Any],  # pyright: ignore[reportExplicitAny]
) -> dict[str, Any]:  # pyright: ignore[reportExplicitAny]
    """Layer environment overrides on top of file settings.

    Returns a new dictionary; neither input is modified. Tables merge key by
    key, so ``GITCONF_USER__PASSWORD`` replaces only ``user.password``. Any
    other value, arrays included, is replaced as a whole.
    """
    result: dict[str, Any] = {}  # pyright: ignore[reportExplicitAny]

    for key in (*base.keys(), *(k for k in override if k not in base)):
        if key not in override:
            result[key] = copy_value(base[key])
        elif key not in base:
            result[key] = copy_value(override[key])
        else:
            base_val = base[key]
            override_val = override[key]

            if isinstance(base_val, Mapping) and isinstance(override_val, Mapping):
                result[key] = deep_merge(base_val, override_val)
            else:
                result[key] = copy_value(override_val)

    return result


def copy_value(value: Any) -> Any:  # pyright: ignore[reportExplicitAny]
    """Create a deep copy of a settings value."""
    if isinstance(value, Mapping):
        return {k: copy_value(v) for k, v in value.items()}
    if isinstance(value, list):
        return [copy_value(item) for item in value]
    return value


def parse_env_vars(
    prefix: str = ENV_PREFIX,
    environ: Mapping[str, str] | None = None,
) -> dict[str, Any]:  # pyright: ignore[reportExplicitAny]
    """Parse environment variables into a nested settings dictionary.

    Values are kept as strings; the validator coerces the few
    non-string fields.

    Args:
        prefix: Environment variable prefix (default: "GITCONF_").
        environ: Environment mapping to read (default: ``os.environ``).

    Returns:
        Dictionary of override values with nested structure.

    Environment variable naming:
        - Add prefix (GITCONF_)
        - Convert to uppercase
        - Replace dots with double underscores and dashes with underscores
        - Example: ssh-rsa.private-key -> GITCONF_SSH_RSA__PRIVATE_KEY
    """
    if environ is None:
        environ = os.environ

    result: dict[str, Any] = {}  # pyright: ignore[reportExplicitAny]

    for key, value in environ.items():
        if not key.startswith(prefix) or key in _RESERVED_ENV_VARS:
            continue

        settings_key = key[len(prefix) :]
        if not settings_key:
            continue

        # GITCONF_SSH_RSA__PRIVATE_KEY -> ssh-rsa.private-key
        key_path = settings_key.lower().replace("__", ".").replace("_", "-")
        set_nested_key(result, key_path, value)

    return result


def set_nested_key(
    d: dict[str, Any],  # pyright: ignore[reportExplicitAny]
    key_path: str,
    value: Any,  # pyright: ignore[reportExplicitAny]
) -> None:
    """Set a value at a dotted key path in a nested dictionary.

    Creates intermediate dictionaries as needed.

    Example:
        >>> d = {}
        >>> set_nested_key(d, "user.login", "octocat")
        >>> d
        {'user': {'login': 'octocat'}}
    """
    parts = key_path.split(".")
    current = d

    for part in parts[:-1]:
        if part not in current or not isinstance(current[part], dict):
            current[part] = {}
        current = current[part]

    if parts:
        current[parts[-1]] = value


def get_nested_key(
    d: Mapping[str, Any],  # pyright: ignore[reportExplicitAny]
    key_path: str,
    default: Any = None,  # pyright: ignore[reportExplicitAny]
) -> Any:  # pyright: ignore[reportExplicitAny]
    """Look up a dotted key path in a settings mapping.

    A literal dotted key (``{"user.login": ...}``) takes precedence over
    the nested form (``{"user": {"login": ...}}``).

    Example:
        >>> get_nested_key({"user": {"login": "octocat"}}, "user.login")
        'octocat'
    """
    value = d.get(key_path, _MISSING)
    if value is not _MISSING:
        return value

    current: Any = d  # pyright: ignore[reportExplicitAny]
    for part in key_path.split("."):
        if not isinstance(current, Mapping) or part not in current:
            return default
        current = current[part]
    return current


def read_settings_file(
    path: Path,
    *,
    section: str = "git",
    include_env: bool = True,
) -> dict[str, Any]:  # pyright: ignore[reportExplicitAny]
    """Read the provider settings section from a TOML file.

    Args:
        path: Path to the TOML settings file.
        section: Dotted name of the table holding the provider settings.
        include_env: Merge ``GITCONF_*`` environment overrides on top.

    Returns:
        The settings section as a dictionary (empty if the table is absent).

    Raises:
        FileNotFoundError: If the file does not exist.
        SettingsLoadError: If the file cannot be parsed or the section is
            not a table.
    """
    document = read_toml_file(path)
    values = get_nested_key(document, section, default={}) if section else document
    if not isinstance(values, Mapping):
        msg = f"Settings section [{section}] is not a table"
        raise SettingsLoadError(msg, path=path)

    if include_env:
        return deep_merge(values, parse_env_vars())
    return copy_value(values)
