"""gitconf: configuration from a file in a Git repository.

A configuration provider that clones a repository, reads one TOML file
from its default branch and hands every leaf key to the host, either as
a literal key/value entry or as a file reference.

Example:
    >>> from gitconf import GitProvider, RecordingSink
    >>> sink = RecordingSink()
    >>> GitProvider().load_data(
    ...     {
    ...         "mode": "none",
    ...         "uri": "https://example.com/conf.git",
    ...         "filepath": "app.toml",
    ...     },
    ...     sink,
    ... )  # doctest: +SKIP
"""

from gitconf.entries import ConfigEntry, FileEntry, KeyValueEntry, classify
from gitconf.exceptions import (
    AuthenticationError,
    ConfigFileNotFoundError,
    ConfigurationError,
    FetchError,
    GitConfError,
    InvalidFieldError,
    MissingFieldError,
    ParseError,
    RetrievalError,
    SettingsLoadError,
)
from gitconf.provider import (
    CallbackSink,
    EntrySink,
    GitProvider,
    Provider,
    RecordingSink,
    TomlDocumentSink,
)
from gitconf.settings import AuthMode, ProviderSettings, load_settings

__all__ = [
    "AuthMode",
    "AuthenticationError",
    "CallbackSink",
    "ConfigEntry",
    "ConfigFileNotFoundError",
    "ConfigurationError",
    "EntrySink",
    "FetchError",
    "FileEntry",
    "GitConfError",
    "GitProvider",
    "InvalidFieldError",
    "KeyValueEntry",
    "MissingFieldError",
    "ParseError",
    "Provider",
    "ProviderSettings",
    "RecordingSink",
    "RetrievalError",
    "SettingsLoadError",
    "TomlDocumentSink",
    "classify",
    "load_settings",
]
