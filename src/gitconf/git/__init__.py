"""Git access for gitconf.

This package clones remote repositories into ephemeral directories and
reads single files from their default branch.
"""

from gitconf.git._common import decode_bytes, strip_refs_heads
from gitconf.git._extractor import (
    DEFAULT_CHARSET,
    CommitSnapshot,
    RawFileContent,
    read_file,
    resolve_default_branch,
)
from gitconf.git._fetcher import (
    TEMP_DIR_PREFIX,
    RepositoryHandle,
    clone_repository,
    create_workdir,
)

__all__ = [
    "DEFAULT_CHARSET",
    "TEMP_DIR_PREFIX",
    "CommitSnapshot",
    "RawFileContent",
    "RepositoryHandle",
    "clone_repository",
    "create_workdir",
    "decode_bytes",
    "read_file",
    "resolve_default_branch",
    "strip_refs_heads",
]
