"""Configuration entry models.

This module defines the two entry kinds handed to the host: literal
key/value pairs and file references.
"""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class KeyValueEntry:
    """A leaf key whose value is a literal.

    Attributes:
        key: Dotted leaf key (e.g., "application.hello").
        value: The value rendered as a TOML literal (e.g., '"world"', "5").
    """

    key: str
    value: str

    def render(self) -> str:
        """Render the entry as a TOML ``key = value`` line."""
        return f"{self.key} = {self.value}"


@dataclass(frozen=True, slots=True)
class FileEntry:
    """A leaf key whose value names a file for the host to materialize.

    Attributes:
        key: Dotted leaf key.
        value: The file path, unquoted.
    """

    key: str
    value: str


type ConfigEntry = KeyValueEntry | FileEntry
