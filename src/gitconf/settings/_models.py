"""Provider settings models.

This module defines the frozen Pydantic models for the provider settings
section. The authentication mode is a closed tagged union: each variant
carries exactly the fields its mode requires.
"""

from enum import StrEnum
from typing import Annotated, ClassVar, Literal

from pydantic import BaseModel, ConfigDict, Field, PositiveFloat


class AuthMode(StrEnum):
    """Authentication mode selector values."""

    NONE = "none"
    USER = "user"
    SSH_KEY = "ssh-key"

    @classmethod
    def parse(cls, value: str) -> "AuthMode | None":  # noqa: UP037
        """Return the mode named by ``value``, or None if unknown.

        ``ssh-rsa`` is accepted as an alias of ``ssh-key``.
        """
        normalized = value.strip().lower()
        if normalized == "ssh-rsa":
            return cls.SSH_KEY
        try:
            return cls(normalized)
        except ValueError:
            return None


class LogLevel(StrEnum):
    """Log level threshold values."""

    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class LogFormat(StrEnum):
    """Log output format values."""

    JSON = "json"
    TEXT = "text"


class LoggingConfig(BaseModel):
    """Logging configuration section.

    Attributes:
        level: Log level threshold.
        format: Log output format.
        file: Path to log file (empty writes to stderr).
    """

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True, extra="ignore")

    level: LogLevel = LogLevel.INFO
    format: LogFormat = LogFormat.JSON
    file: str = ""


class _BaseSettings(BaseModel):
    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True, extra="ignore")

    uri: str
    filepath: str
    timeout: PositiveFloat | None = None


class AnonymousSettings(_BaseSettings):
    """Settings for public repositories (no credentials)."""

    mode: Literal[AuthMode.NONE] = AuthMode.NONE


class UserSettings(_BaseSettings):
    """Settings for private repositories over HTTPS with login and password."""

    mode: Literal[AuthMode.USER] = AuthMode.USER
    login: str
    password: str = Field(repr=False)


class SshKeySettings(_BaseSettings):
    """Settings for private repositories over SSH with a private key file."""

    mode: Literal[AuthMode.SSH_KEY] = AuthMode.SSH_KEY
    private_key: str
    passphrase: str | None = Field(default=None, repr=False)


type ProviderSettings = Annotated[
    AnonymousSettings | UserSettings | SshKeySettings,
    Field(discriminator="mode"),
]
