"""Entry sinks: adapters between the provider and its host."""

import tomllib
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from typing import Any, assert_never

import tomli_w

from gitconf.entries import ConfigEntry, FileEntry, KeyValueEntry, entries_to_document
from gitconf.provider._protocol import EntrySink


def emit_entries(entries: Iterable[ConfigEntry], sink: EntrySink) -> int:
    """Dispatch each entry to the matching sink method.

    Args:
        entries: Entries in document order.
        sink: Receiver of the entries.

    Returns:
        Number of entries emitted.
    """
    count = 0
    for entry in entries:
        match entry:
            case KeyValueEntry():
                sink.accept_key_value(entry)
            case FileEntry():
                sink.accept_file(entry)
            case _:
                assert_never(entry)
        count += 1
    return count


@dataclass(frozen=True, slots=True)
class CallbackSink:
    """Sink forwarding entries to two host callbacks."""

    on_key_value: Callable[[KeyValueEntry], None]
    on_file: Callable[[FileEntry], None]

    def accept_key_value(self, entry: KeyValueEntry) -> None:
        self.on_key_value(entry)

    def accept_file(self, entry: FileEntry) -> None:
        self.on_file(entry)


@dataclass(slots=True)
class RecordingSink:
    """Sink keeping every entry it receives, in order."""

    entries: list[ConfigEntry] = field(default_factory=list)

    def accept_key_value(self, entry: KeyValueEntry) -> None:
        self.entries.append(entry)

    def accept_file(self, entry: FileEntry) -> None:
        self.entries.append(entry)

    @property
    def key_values(self) -> list[KeyValueEntry]:
        return [e for e in self.entries if isinstance(e, KeyValueEntry)]

    @property
    def files(self) -> list[FileEntry]:
        return [e for e in self.entries if isinstance(e, FileEntry)]


@dataclass(slots=True)
class TomlDocumentSink(RecordingSink):
    """Sink collecting entries into a TOML document.

    File entries are kept as their path strings.

    Example:
        >>> sink = TomlDocumentSink()
        >>> sink.accept_key_value(KeyValueEntry("application.five", "5"))
        >>> print(sink.dumps(), end="")
        [application]
        five = 5
    """

    def to_dict(self) -> dict[str, Any]:  # pyright: ignore[reportExplicitAny]
        """Rebuild the nested document from the collected entries."""
        return tomllib.loads(entries_to_document(self.entries))

    def dumps(self) -> str:
        """Render the collected entries as a TOML document."""
        return tomli_w.dumps(self.to_dict())
