"""Repository fetching into ephemeral working directories.

A retrieval clones the remote repository in full into a freshly created
temporary directory and works on the local object store. The directory is
owned by the returned ``RepositoryHandle`` and removed when the handle is
closed, or immediately when the clone fails.
"""

import io
import shutil
import tempfile
import time
from pathlib import Path
from types import TracebackType
from typing import Final, Self

from dulwich import porcelain
from dulwich.client import HTTPProxyUnauthorized, HTTPUnauthorized
from dulwich.repo import Repo
from paramiko import AuthenticationException

from gitconf.auth import AuthContext
from gitconf.exceptions import AuthenticationError, FetchError, GitConfError

TEMP_DIR_PREFIX: Final = "gitconf-"

# Name of the bare clone inside the temporary working directory.
_CLONE_DIR_NAME: Final = "repo.git"


class RepositoryHandle:
    """A cloned repository scoped to one retrieval.

    The handle implements the context manager protocol. Closing it releases
    the dulwich Repo and deletes the temporary working directory; closing
    twice is a no-op.

    Attributes:
        uri: The URI the repository was cloned from.
        workdir: The temporary directory holding the clone.
    """

    __slots__ = ("_closed", "_repo", "_uri", "_workdir")

    def __init__(self, repo: Repo, workdir: Path, *, uri: str) -> None:
        self._repo: Repo = repo
        self._workdir: Path = workdir
        self._uri: str = uri
        self._closed: bool = False

    def __enter__(self) -> Self:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        # Cleanup failures must not replace an error leaving the block.
        self.close(ignore_errors=exc_val is not None)

    def __repr__(self) -> str:
        state = "closed" if self._closed else "open"
        return (
            f"RepositoryHandle(uri={self._uri!r}, workdir={self._workdir!r}, {state})"
        )

    @property
    def repo(self) -> Repo:
        """The cloned dulwich repository."""
        if self._closed:
            msg = "Repository handle is closed"
            raise ValueError(msg)
        return self._repo

    @property
    def uri(self) -> str:
        return self._uri

    @property
    def workdir(self) -> Path:
        return self._workdir

    @property
    def closed(self) -> bool:
        return self._closed

    def close(self, *, ignore_errors: bool = False) -> None:
        """Close the repository and remove the working directory.

        Args:
            ignore_errors: Suppress OSErrors raised while releasing the
                repository or removing the directory.
        """
        if self._closed:
            return
        self._closed = True
        try:
            self._repo.close()
        except OSError:
            if not ignore_errors:
                raise
        finally:
            shutil.rmtree(self._workdir, ignore_errors=ignore_errors)


def create_workdir(base_dir: Path | None = None) -> Path:
    """Create a uniquely named temporary working directory.

    The name combines the current time in nanoseconds with the random
    suffix chosen by ``tempfile.mkdtemp``.

    Args:
        base_dir: Parent directory, or None for the system temp directory.

    Returns:
        Path to the new, empty directory.
    """
    prefix = f"{TEMP_DIR_PREFIX}{time.time_ns()}-"
    return Path(tempfile.mkdtemp(prefix=prefix, dir=base_dir))


def clone_repository(
    uri: str,
    auth: AuthContext,
    *,
    timeout: float | None = None,
    base_dir: Path | None = None,
) -> RepositoryHandle:
    """Clone a repository in full into a new temporary directory.

    Args:
        uri: Repository URI (HTTPS, SSH, git protocol or local path).
        auth: Authentication context for this clone.
        timeout: Network timeout in seconds, or None for the transport default.
        base_dir: Parent of the temporary directory, or None for the
            system temp directory.

    Returns:
        A handle owning the clone and its working directory.

    Raises:
        AuthenticationError: If the remote rejects the credentials or the
            SSH key cannot be used.
        FetchError: If the URI is malformed, the remote is unreachable or
            the clone fails for any other transport or library reason.
    """
    workdir = create_workdir(base_dir)
    try:
        repo = _clone(uri, workdir / _CLONE_DIR_NAME, auth, timeout)
    except BaseException:
        shutil.rmtree(workdir, ignore_errors=True)
        raise
    return RepositoryHandle(repo, workdir, uri=uri)


def _clone(uri: str, target: Path, auth: AuthContext, timeout: float | None) -> Repo:
    try:
        return porcelain.clone(
            uri,
            str(target),
            bare=True,
            checkout=False,
            errstream=io.BytesIO(),
            **auth.transport_kwargs(uri, timeout=timeout),
        )
    except (HTTPUnauthorized, HTTPProxyUnauthorized) as e:
        msg = f"Authentication failed for {uri}"
        raise AuthenticationError(msg, uri=uri, cause=e) from e
    except AuthenticationException as e:
        msg = f"SSH authentication failed for {uri}: {e}"
        raise AuthenticationError(msg, uri=uri, cause=e) from e
    except GitConfError:
        raise
    except Exception as e:
        # Anything else dulwich or its transports raise, including mid-transfer.
        msg = f"Failed to clone {uri}: {type(e).__name__}: {e}"
        raise FetchError(msg, uri=uri, cause=e) from e
