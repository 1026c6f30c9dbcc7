"""Host-facing protocols.

The host application defines the provider contract; these runtime-checkable
protocols describe it so hosts, collectors and test harnesses can be
swapped without touching the provider.
"""

from collections.abc import Mapping
from typing import Any, Protocol, runtime_checkable

from gitconf.entries import FileEntry, KeyValueEntry


@runtime_checkable
class EntrySink(Protocol):
    """Receiver of classified entries.

    The provider calls exactly one method per leaf key, synchronously and
    in document order.
    """

    def accept_key_value(self, entry: KeyValueEntry) -> None:
        """Receive a literal key/value entry."""
        ...

    def accept_file(self, entry: FileEntry) -> None:
        """Receive a file entry."""
        ...


@runtime_checkable
class Provider(Protocol):
    """Contract every configuration provider fulfils.

    Example:
        >>> def load_all(providers: list[Provider], config, sink) -> None:
        ...     for provider in providers:
        ...         section = config[provider.configuration_object_name]
        ...         provider.load_data(section, sink)
    """

    @property
    def name(self) -> str:
        """Human-readable provider name."""
        ...

    @property
    def version(self) -> str:
        """Provider version string."""
        ...

    @property
    def configuration_object_name(self) -> str:
        """Name of the host settings section read by this provider."""
        ...

    def load_data(
        self,
        section: Mapping[str, Any],  # pyright: ignore[reportExplicitAny]
        sink: EntrySink,
    ) -> int:
        """Retrieve the remote configuration and emit its entries.

        Args:
            section: The provider's settings section.
            sink: Receiver of the classified entries.

        Returns:
            Number of entries emitted.
        """
        ...
