"""Reading a single file from the default branch of a cloned repository."""

import stat
from dataclasses import dataclass
from typing import Final

from dulwich.errors import NotTreeError
from dulwich.object_store import tree_lookup_path
from dulwich.objects import Blob, Commit

from gitconf.exceptions import ConfigFileNotFoundError, FetchError, ParseError
from gitconf.git._common import decode_bytes, strip_refs_heads
from gitconf.git._fetcher import RepositoryHandle

DEFAULT_CHARSET: Final = "utf-8"

_HEAD: Final = b"HEAD"


@dataclass(frozen=True, slots=True)
class CommitSnapshot:
    """The default branch tip at clone time.

    Attributes:
        sha: Commit SHA hex string.
        tree: SHA hex string of the commit's root tree.
        branch: Name of the default branch, or None if HEAD was detached.
    """

    sha: str
    tree: str
    branch: str | None


@dataclass(frozen=True, slots=True)
class RawFileContent:
    """Bytes of the configuration file as stored in the repository.

    Attributes:
        path: Repository-relative path of the file.
        data: The blob content.
        commit: SHA of the commit the file was read from.
        charset: Character set used to decode ``data``.
    """

    path: str
    data: bytes
    commit: str
    charset: str = DEFAULT_CHARSET

    @property
    def text(self) -> str:
        """The content decoded with ``charset``.

        Raises:
            ParseError: If the content is not valid in ``charset``.
        """
        try:
            return self.data.decode(self.charset)
        except UnicodeDecodeError as e:
            msg = f"{self.path} is not valid {self.charset}: {e.reason}"
            raise ParseError(msg, location=self.path, cause=e) from e


def resolve_default_branch(handle: RepositoryHandle) -> CommitSnapshot:
    """Resolve HEAD of a fresh clone to its commit.

    After a clone, HEAD is a symbolic reference to the remote's default
    branch.

    Args:
        handle: The cloned repository.

    Returns:
        Snapshot of the default branch tip.

    Raises:
        FetchError: If the repository has no commit on its default branch.
    """
    repo = handle.repo
    refnames, sha = repo.refs.follow(_HEAD)
    if sha is None:
        msg = f"Repository {handle.uri} has no commits on its default branch"
        raise FetchError(msg, uri=handle.uri)

    commit = repo[sha]
    if not isinstance(commit, Commit):
        msg = f"HEAD of {handle.uri} does not point to a commit"
        raise FetchError(msg, uri=handle.uri)

    branch = refnames[-1] if refnames and refnames[-1] != _HEAD else None
    return CommitSnapshot(
        sha=decode_bytes(commit.id),
        tree=decode_bytes(commit.tree),
        branch=strip_refs_heads(branch),
    )


def _is_exact_path(path: str) -> bool:
    return all(part not in {"", ".", ".."} for part in path.split("/"))


def read_file(
    handle: RepositoryHandle,
    path: str,
    snapshot: CommitSnapshot | None = None,
) -> RawFileContent:
    """Read a file from the default branch tip.

    The path must match the tree entry exactly: separators are ``/``,
    casing is significant and no normalization or globbing is applied.

    Args:
        handle: The cloned repository.
        path: Repository-relative path of the file.
        snapshot: Commit to read from; resolved from HEAD if None.

    Returns:
        The raw file content.

    Raises:
        ConfigFileNotFoundError: If no regular file exists at the path.
        FetchError: If the repository has no default branch commit.
    """
    if snapshot is None:
        snapshot = resolve_default_branch(handle)

    if not _is_exact_path(path):
        raise ConfigFileNotFoundError(path, uri=handle.uri)

    repo = handle.repo
    try:
        mode, sha = tree_lookup_path(
            repo.__getitem__, snapshot.tree.encode("ascii"), path.encode()
        )
    except (KeyError, NotTreeError) as e:
        raise ConfigFileNotFoundError(path, uri=handle.uri) from e

    if not stat.S_ISREG(mode):
        raise ConfigFileNotFoundError(path, uri=handle.uri)

    blob = repo[sha]
    if not isinstance(blob, Blob):
        raise ConfigFileNotFoundError(path, uri=handle.uri)

    return RawFileContent(path=path, data=blob.as_raw_string(), commit=snapshot.sha)
