# pyright: reportAny=false, reportExplicitAny=false
"""Provider settings validation.

Validation is pure and runs before any network activity: every field the
selected mode needs is checked for presence and shape, and the first
violation is raised as a ``ConfigurationError`` naming the field.
"""

import math
from collections.abc import Mapping
from typing import Any, Final, assert_never

from pydantic import ValidationError

from gitconf.exceptions import InvalidFieldError, MissingFieldError
from gitconf.settings._loader import get_nested_key
from gitconf.settings._models import (
    AnonymousSettings,
    AuthMode,
    LoggingConfig,
    ProviderSettings,
    SshKeySettings,
    UserSettings,
)

MODE: Final = "mode"
URI: Final = "uri"
FILEPATH: Final = "filepath"
TIMEOUT: Final = "timeout"
USER_LOGIN: Final = "user.login"
USER_PASSWORD: Final = "user.password"
SSH_PRIVATE_KEY: Final = "ssh-rsa.private-key"
SSH_PASSPHRASE: Final = "ssh-rsa.password"

_REQUIRED_FIELDS: Final = (MODE, URI, FILEPATH)
_URI_PREFIXES: Final = {AuthMode.USER: "http", AuthMode.SSH_KEY: "git@"}


def _get_string(section: Mapping[str, Any], key: str) -> str | None:
    value = get_nested_key(section, key)
    if value is None:
        return None
    return str(value).strip()


def _require(section: Mapping[str, Any], key: str) -> str:
    value = _get_string(section, key)
    if not value:
        raise MissingFieldError(key)
    return value


def _parse_timeout(section: Mapping[str, Any]) -> float | None:
    raw = get_nested_key(section, TIMEOUT)
    if raw is None or (isinstance(raw, str) and not raw.strip()):
        return None
    if isinstance(raw, bool):
        raise InvalidFieldError(TIMEOUT, "must be a positive number of seconds")
    try:
        timeout = float(raw)
    except (TypeError, ValueError) as e:
        raise InvalidFieldError(TIMEOUT, "must be a positive number of seconds") from e
    if not math.isfinite(timeout) or timeout <= 0:
        raise InvalidFieldError(TIMEOUT, "must be a positive number of seconds")
    return timeout


def _parse_mode(section: Mapping[str, Any]) -> AuthMode:
    raw = _require(section, MODE)
    mode = AuthMode.parse(raw)
    if mode is None:
        choices = ", ".join(m.value for m in AuthMode)
        reason = f"unknown mode {raw!r}, expected one of: {choices}"
        raise InvalidFieldError(MODE, reason)
    return mode


def validate_settings(section: Mapping[str, Any]) -> None:
    """Check that a settings section is complete for its mode.

    Args:
        section: The provider settings section, with nested fields given
            either as tables or as dotted keys.

    Raises:
        MissingFieldError: If a field required by the mode is absent or blank.
        InvalidFieldError: If the mode is unknown, the URI scheme does not
            match the mode, or the timeout is not a positive number.
    """
    for key in _REQUIRED_FIELDS:
        _ = _require(section, key)

    mode = _parse_mode(section)
    uri = _require(section, URI)

    match mode:
        case AuthMode.NONE:
            pass
        case AuthMode.USER:
            _check_uri_prefix(mode, uri)
            _ = _require(section, USER_LOGIN)
            _ = _require(section, USER_PASSWORD)
        case AuthMode.SSH_KEY:
            _check_uri_prefix(mode, uri)
            _ = _require(section, SSH_PRIVATE_KEY)
        case _:
            assert_never(mode)

    _ = _parse_timeout(section)


def _check_uri_prefix(mode: AuthMode, uri: str) -> None:
    if not uri.startswith(_URI_PREFIXES[mode]):
        raise InvalidFieldError(MODE, f"Invalid repository URI for {mode} mode.")


def load_settings(section: Mapping[str, Any]) -> ProviderSettings:
    """Validate a settings section and build its typed variant.

    Args:
        section: The provider settings section.

    Returns:
        The frozen settings model matching the section's mode.

    Raises:
        MissingFieldError: If a field required by the mode is absent or blank.
        InvalidFieldError: If a field holds an unusable value.
    """
    validate_settings(section)

    mode = _parse_mode(section)
    common: dict[str, Any] = {
        "uri": _require(section, URI),
        "filepath": _require(section, FILEPATH),
        "timeout": _parse_timeout(section),
    }

    match mode:
        case AuthMode.NONE:
            return AnonymousSettings(**common)
        case AuthMode.USER:
            return UserSettings(
                **common,
                login=_require(section, USER_LOGIN),
                password=_require(section, USER_PASSWORD),
            )
        case AuthMode.SSH_KEY:
            return SshKeySettings(
                **common,
                private_key=_require(section, SSH_PRIVATE_KEY),
                passphrase=_get_string(section, SSH_PASSPHRASE) or None,
            )
        case _:
            assert_never(mode)


def load_logging_config(document: Mapping[str, Any]) -> LoggingConfig:
    """Build the logging configuration from a settings document.

    Args:
        document: The full settings document; its ``logging`` table is used.

    Returns:
        The logging configuration, with defaults for absent keys.

    Raises:
        InvalidFieldError: If the ``logging`` table holds invalid values.
    """
    values = document.get("logging", {})
    if not isinstance(values, Mapping):
        raise InvalidFieldError("logging", "must be a table")
    try:
        return LoggingConfig.model_validate(values)
    except ValidationError as e:
        error = e.errors()[0]
        field = ".".join(("logging", *(str(part) for part in error["loc"])))
        raise InvalidFieldError(field, error["msg"]) from e
