"""gitconf exceptions."""

from pathlib import Path


class GitConfError(Exception):
    """Base exception for gitconf errors."""


# =============================================================================
# Configuration Exceptions
# =============================================================================


class ConfigurationError(GitConfError):
    """Base exception for provider settings errors.

    Attributes:
        field: Dotted name of the offending settings field.
    """

    def __init__(self, message: str, *, field: str) -> None:
        """Initialize with error message and field context.

        Args:
            message: Human-readable error message.
            field: Dotted name of the offending settings field.
        """
        super().__init__(message)
        self.field: str = field


class MissingFieldError(ConfigurationError):
    """Raised when a required settings field is absent or blank."""

    def __init__(self, field: str) -> None:
        """Initialize with the name of the missing field."""
        super().__init__(f"Missing required setting: {field}", field=field)


class InvalidFieldError(ConfigurationError):
    """Raised when a settings field holds a value unusable for the mode.

    Attributes:
        field: Dotted name of the offending settings field.
        reason: Why the value was rejected.
    """

    def __init__(self, field: str, reason: str) -> None:
        """Initialize with field name and rejection reason."""
        super().__init__(f"Invalid setting {field}: {reason}", field=field)
        self.reason: str = reason


class SettingsLoadError(GitConfError):
    """Raised when a settings file cannot be read or parsed."""

    def __init__(
        self,
        message: str,
        *,
        path: Path | None = None,
        line: int | None = None,
        column: int | None = None,
    ) -> None:
        """Initialize with error message and optional location context."""
        super().__init__(message)
        self.path: Path | None = path
        self.line: int | None = line
        self.column: int | None = column


# =============================================================================
# Retrieval Exceptions
# =============================================================================


class RetrievalError(GitConfError):
    """Base exception for failures after settings were accepted.

    Attributes:
        uri: Repository URI of the failed retrieval.
        cause: The underlying exception, if any.
    """

    def __init__(
        self,
        message: str,
        *,
        uri: str | None = None,
        cause: BaseException | None = None,
    ) -> None:
        """Initialize with error message and retrieval context.

        Args:
            message: Human-readable error message.
            uri: Repository URI of the failed retrieval.
            cause: The underlying exception, if any.
        """
        super().__init__(message)
        self.uri: str | None = uri
        self.cause: BaseException | None = cause

    @property
    def cause_type(self) -> str | None:
        """Qualified class name of the underlying cause."""
        if self.cause is None:
            return None
        cls = type(self.cause)
        return f"{cls.__module__}.{cls.__qualname__}"


class AuthenticationError(RetrievalError):
    """Raised when the remote rejects the credentials or the key is unusable."""


class FetchError(RetrievalError):
    """Raised when the repository cannot be cloned.

    Covers malformed URIs, unreachable hosts, protocol errors and
    faults inside the git library.
    """


class ConfigFileNotFoundError(RetrievalError, FileNotFoundError):
    """Raised when the configuration file is absent from the default branch.

    Attributes:
        path: The repository-relative path that was looked up.
    """

    def __init__(self, path: str, *, uri: str | None = None) -> None:
        """Initialize with the path that was not found."""
        super().__init__(f"Filepath ({path}) not found.", uri=uri)
        self.path: str = path


class ParseError(RetrievalError):
    """Raised when the configuration document is not valid TOML.

    Attributes:
        location: Origin of the document, usually its repository path.
        line: 1-based line of the syntax error, when known.
        column: 1-based column of the syntax error, when known.
    """

    def __init__(
        self,
        message: str,
        *,
        location: str,
        line: int | None = None,
        column: int | None = None,
        cause: BaseException | None = None,
    ) -> None:
        """Initialize with error message and document location."""
        super().__init__(message, cause=cause)
        self.location: str = location
        self.line: int | None = line
        self.column: int | None = column
