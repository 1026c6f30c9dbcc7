"""gitconf provider settings.

This package validates the provider settings section and turns it into a
typed, frozen settings model. Settings may come from any mapping supplied
by the host, or from a TOML file with ``GITCONF_*`` environment overrides.

Example:
    >>> from gitconf.settings import load_settings
    >>> settings = load_settings(
    ...     {
    ...         "mode": "none",
    ...         "uri": "https://example.com/conf.git",
    ...         "filepath": "app.toml",
    ...     }
    ... )
    >>> settings.mode
    <AuthMode.NONE: 'none'>
"""

from gitconf.exceptions import (
    ConfigurationError,
    InvalidFieldError,
    MissingFieldError,
    SettingsLoadError,
)

from ._loader import (
    ENV_PREFIX,
    deep_merge,
    get_nested_key,
    parse_env_vars,
    read_settings_file,
    read_toml_file,
    set_nested_key,
)
from ._models import (
    AnonymousSettings,
    AuthMode,
    LogFormat,
    LoggingConfig,
    LogLevel,
    ProviderSettings,
    SshKeySettings,
    UserSettings,
)
from ._validation import load_logging_config, load_settings, validate_settings

__all__ = [
    "ENV_PREFIX",
    "AnonymousSettings",
    "AuthMode",
    "ConfigurationError",
    "InvalidFieldError",
    "LogFormat",
    "LogLevel",
    "LoggingConfig",
    "MissingFieldError",
    "ProviderSettings",
    "SettingsLoadError",
    "SshKeySettings",
    "UserSettings",
    "deep_merge",
    "get_nested_key",
    "load_logging_config",
    "load_settings",
    "parse_env_vars",
    "read_settings_file",
    "read_toml_file",
    "set_nested_key",
    "validate_settings",
]
