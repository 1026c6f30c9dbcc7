"""The git configuration provider and its host interfaces.

Classes:
    GitProvider: Retrieves configuration from a file in a Git repository.
    Provider: Runtime-checkable protocol of the provider contract.
    EntrySink: Runtime-checkable protocol of the host's entry receiver.
    CallbackSink: Sink forwarding to two host callbacks.
    RecordingSink: Sink keeping received entries, for tests and tools.
    TomlDocumentSink: Sink rendering received entries as a TOML document.

Example:
    >>> from gitconf.provider import CallbackSink, GitProvider
    >>> provider = GitProvider()
    >>> sink = CallbackSink(on_key_value=print, on_file=print)
    >>> provider.load_data(section, sink)  # doctest: +SKIP
"""

from gitconf.provider._protocol import EntrySink, Provider
from gitconf.provider._provider import (
    CONFIGURATION_OBJECT_NAME,
    PROVIDER_NAME,
    GitProvider,
    get_provider_version,
)
from gitconf.provider._sinks import (
    CallbackSink,
    RecordingSink,
    TomlDocumentSink,
    emit_entries,
)

__all__ = [
    "CONFIGURATION_OBJECT_NAME",
    "PROVIDER_NAME",
    "CallbackSink",
    "EntrySink",
    "GitProvider",
    "Provider",
    "RecordingSink",
    "TomlDocumentSink",
    "emit_entries",
    "get_provider_version",
]
