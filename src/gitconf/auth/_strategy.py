"""Authentication strategies for repository cloning.

Each strategy turns the credentials of one settings variant into the
keyword arguments dulwich's transport factory (``get_transport_and_path``)
understands. A context is built for a single retrieval and never reused.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Final, Protocol, assert_never, runtime_checkable

from dulwich.contrib.paramiko_vendor import ParamikoSSHVendor
from paramiko import (
    ECDSAKey,
    Ed25519Key,
    PasswordRequiredException,
    PKey,
    RSAKey,
    SSHException,
)

from gitconf.exceptions import AuthenticationError
from gitconf.settings import (
    AnonymousSettings,
    ProviderSettings,
    SshKeySettings,
    UserSettings,
)


def is_http_uri(uri: str) -> bool:
    """Return True if the URI is served by dulwich's HTTP client."""
    return uri.lower().startswith(("http://", "https://"))


@runtime_checkable
class AuthContext(Protocol):
    """Transport configuration for a single clone."""

    def transport_kwargs(
        self, uri: str, *, timeout: float | None = None
    ) -> dict[str, Any]:  # pyright: ignore[reportExplicitAny]
        """Keyword arguments for dulwich's transport factory.

        Args:
            uri: The repository URI being cloned.
            timeout: Network timeout in seconds, or None for the
                transport default.

        Returns:
            Arguments passed through ``porcelain.clone`` to the git client.
        """
        ...


def _http_timeout_kwargs(uri: str, timeout: float | None) -> dict[str, Any]:  # pyright: ignore[reportExplicitAny]
    if timeout is None or not is_http_uri(uri):
        return {}
    return {"timeout": timeout}


@dataclass(frozen=True, slots=True)
class AnonymousAuth:
    """No credentials; relies on anonymous HTTPS or git-protocol access."""

    def transport_kwargs(
        self, uri: str, *, timeout: float | None = None
    ) -> dict[str, Any]:  # pyright: ignore[reportExplicitAny]
        return _http_timeout_kwargs(uri, timeout)


@dataclass(frozen=True, slots=True)
class UserPasswordAuth:
    """Login and password handed to the HTTP client."""

    login: str
    password: str = field(repr=False)

    def transport_kwargs(
        self, uri: str, *, timeout: float | None = None
    ) -> dict[str, Any]:  # pyright: ignore[reportExplicitAny]
        return {
            "username": self.login,
            "password": self.password,
            **_http_timeout_kwargs(uri, timeout),
        }


# Key types paramiko's client tries for a key file, in its order.
_KEY_CLASSES: Final = (RSAKey, ECDSAKey, Ed25519Key)


def load_private_key(path: Path, passphrase: str | None = None) -> PKey:
    """Load an SSH private key file, trying each supported key type.

    Raises:
        PasswordRequiredException: If the key is encrypted and no
            passphrase was given.
        SSHException: If no key type can read the file.
    """
    error = SSHException(f"Unsupported private key format: {path}")
    for key_class in _KEY_CLASSES:
        try:
            return key_class.from_private_key_file(str(path), password=passphrase)
        except PasswordRequiredException:
            raise
        except SSHException as e:
            error = e
    raise error


@dataclass(frozen=True, slots=True)
class SshKeyAuth:
    """Private key identity for SSH remotes.

    The clone runs through a dedicated paramiko SSH vendor instead of the
    system ``ssh`` binary, with agent lookup and default key discovery
    disabled: only the configured key is ever offered. The key is loaded
    when the clone starts, so a key paramiko cannot read is reported as an
    authentication failure rather than a transport one.
    """

    private_key: str
    passphrase: str | None = field(default=None, repr=False)

    def create_vendor(self, *, timeout: float | None = None) -> ParamikoSSHVendor:
        """Build the SSH vendor installed in place of the system default."""
        connect_kwargs: dict[str, Any] = {  # pyright: ignore[reportExplicitAny]
            "allow_agent": False,
            "look_for_keys": False,
        }
        if self.passphrase:
            connect_kwargs["passphrase"] = self.passphrase
        if timeout is not None:
            connect_kwargs["timeout"] = timeout
        return ParamikoSSHVendor(**connect_kwargs)

    def transport_kwargs(
        self, uri: str, *, timeout: float | None = None
    ) -> dict[str, Any]:  # pyright: ignore[reportExplicitAny]
        key_path = Path(self.private_key).expanduser()
        if not key_path.is_file():
            msg = f"Private key file not found: {key_path}"
            raise AuthenticationError(msg, uri=uri)
        try:
            _ = load_private_key(key_path, self.passphrase or None)
        except (SSHException, OSError) as e:
            msg = f"Private key cannot be loaded from {key_path}: {e}"
            raise AuthenticationError(msg, uri=uri, cause=e) from e
        return {
            "vendor": self.create_vendor(timeout=timeout),
            "key_filename": str(key_path),
        }


def build_auth_context(settings: ProviderSettings) -> AuthContext:
    """Build the authentication context for a settings variant.

    Args:
        settings: Validated provider settings.

    Returns:
        A fresh context to be consumed by one clone.
    """
    match settings:
        case AnonymousSettings():
            return AnonymousAuth()
        case UserSettings(login=login, password=password):
            return UserPasswordAuth(login=login, password=password)
        case SshKeySettings(private_key=private_key, passphrase=passphrase):
            return SshKeyAuth(private_key=private_key, passphrase=passphrase)
        case _:
            assert_never(settings)
