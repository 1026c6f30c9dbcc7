# pyright: reportExplicitAny=false
"""Git configuration provider.

Retrieves a TOML configuration document hosted in a Git repository. Three
authentication modes are supported:

1. none    (public repositories);
2. user    (private repositories over HTTPS with login and password);
3. ssh-key (private repositories over SSH with a private key file).

Every retrieval validates the settings, clones the repository in full into
a fresh temporary directory, reads the file from the default branch tip,
removes the clone and only then hands the entries to the sink.
"""

import functools
from collections.abc import Mapping
from importlib.metadata import PackageNotFoundError, version
from pathlib import Path
from typing import Any, Final

from structlog.typing import FilteringBoundLogger

from gitconf.auth import build_auth_context
from gitconf.entries import ConfigEntry, classify
from gitconf.exceptions import GitConfError
from gitconf.git import (
    RawFileContent,
    clone_repository,
    read_file,
    resolve_default_branch,
)
from gitconf.provider._protocol import EntrySink
from gitconf.provider._sinks import RecordingSink, emit_entries
from gitconf.settings import ProviderSettings, load_settings
from gitconf.utils import create_logger

PROVIDER_NAME: Final = "Git"
CONFIGURATION_OBJECT_NAME: Final = "git"
DISTRIBUTION_NAME: Final = "gitconf"
UNKNOWN_VERSION: Final = "unknown"


@functools.cache
def get_provider_version() -> str:
    """Read the provider version from the installed distribution metadata.

    Returns:
        The version string, or "unknown" when the package is not installed.
    """
    try:
        return version(DISTRIBUTION_NAME)
    except PackageNotFoundError:
        return UNKNOWN_VERSION


class GitProvider:
    """Configuration provider backed by a file in a Git repository.

    Example:
        >>> provider = GitProvider()
        >>> sink = RecordingSink()
        >>> provider.load_data(
        ...     {
        ...         "mode": "none",
        ...         "uri": "https://github.com/example/config.git",
        ...         "filepath": "application.toml",
        ...     },
        ...     sink,
        ... )  # doctest: +SKIP
        3
    """

    __slots__ = ("_base_dir", "_logger")

    def __init__(
        self,
        *,
        logger: FilteringBoundLogger | None = None,
        base_dir: Path | None = None,
    ) -> None:
        """Initialize the provider.

        Args:
            logger: Logger for retrieval events. If None, a stderr logger
                is created at WARNING unless GITCONF_DEBUG or
                GITCONF_LOG_LEVEL ask for more.
            base_dir: Parent directory for temporary clones, or None for
                the system temp directory.
        """
        if logger is None:
            logger = create_logger(default_level="warning")
        self._logger: FilteringBoundLogger = logger.bind(provider=PROVIDER_NAME)
        self._base_dir: Path | None = base_dir

    @property
    def name(self) -> str:
        return PROVIDER_NAME

    @property
    def version(self) -> str:
        return get_provider_version()

    @property
    def configuration_object_name(self) -> str:
        return CONFIGURATION_OBJECT_NAME

    def fetch(
        self,
        settings: ProviderSettings,
        *,
        logger: FilteringBoundLogger | None = None,
    ) -> RawFileContent:
        """Clone the repository and read the configuration file.

        The clone is removed before this method returns or raises.

        Args:
            settings: Validated provider settings.
            logger: Logger bound with retrieval context, defaults to the
                provider's logger.

        Returns:
            The raw content of the configuration file.

        Raises:
            AuthenticationError: If the credentials are rejected.
            FetchError: If the repository cannot be cloned.
            ConfigFileNotFoundError: If the file is absent from the default
                branch.
        """
        log = logger if logger is not None else self._logger
        auth = build_auth_context(settings)

        log.debug("clone_started", timeout=settings.timeout)
        with clone_repository(
            settings.uri,
            auth,
            timeout=settings.timeout,
            base_dir=self._base_dir,
        ) as handle:
            snapshot = resolve_default_branch(handle)
            log.debug("clone_finished", commit=snapshot.sha, branch=snapshot.branch)
            content = read_file(handle, settings.filepath, snapshot)

        log.debug("file_read", size=len(content.data), commit=content.commit)
        return content

    def load_data(
        self,
        section: Mapping[str, Any],
        sink: EntrySink,
    ) -> int:
        """Retrieve the remote configuration and emit its entries.

        Nothing is emitted unless the settings are valid, the file was read
        and the whole document parsed.

        Args:
            section: The provider's settings section.
            sink: Receiver of the classified entries.

        Returns:
            Number of entries emitted.

        Raises:
            MissingFieldError: If a field required by the mode is missing.
            InvalidFieldError: If a field holds an unusable value.
            AuthenticationError: If the credentials are rejected.
            FetchError: If the repository cannot be cloned.
            ConfigFileNotFoundError: If the file is absent from the default
                branch.
            ParseError: If the file is not a valid TOML document.
        """
        log = self._logger
        try:
            settings = load_settings(section)
            log = log.bind(mode=settings.mode.value, filepath=settings.filepath)
            log.debug("settings_validated")

            content = self.fetch(settings, logger=log)
            entries = classify(content)
        except GitConfError as e:
            log.error("retrieval_failed", error=str(e), error_type=type(e).__name__)
            raise

        count = emit_entries(entries, sink)
        log.info("entries_emitted", count=count)
        return count

    def retrieve(self, section: Mapping[str, Any]) -> list[ConfigEntry]:
        """Retrieve the remote configuration as a list of entries."""
        sink = RecordingSink()
        _ = self.load_data(section, sink)
        return sink.entries
