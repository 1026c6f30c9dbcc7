"""Shared test fixtures for gitconf tests."""

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import pytest
from dulwich import porcelain

_AUTHOR = b"Test User <test@example.com>"

APPLICATION_TOML = """\
application.five = 5
application.hello = "world"
application.is-enabled = true
"""


@dataclass(frozen=True, slots=True)
class ConfigRepo:
    """A local repository holding configuration files."""

    path: Path
    commit: str

    @property
    def uri(self) -> str:
        return str(self.path)

    def section(
        self, filepath: str = "conf/application.toml", **extra: Any
    ) -> dict[str, Any]:
        """Provider settings pointing at this repository."""
        return {"mode": "none", "uri": self.uri, "filepath": filepath, **extra}


MakeConfigRepo = Callable[..., ConfigRepo]


@pytest.fixture(autouse=True)
def _isolate_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Remove GITCONF_* variables inherited from the developer's shell."""
    import os

    for key in list(os.environ):
        if key.startswith("GITCONF_"):
            monkeypatch.delenv(key)


@pytest.fixture
def make_config_repo(tmp_path: Path) -> MakeConfigRepo:
    """Return a factory committing files to a fresh local repository."""
    counter = 0

    def _make(
        files: Mapping[str, str | bytes] | None = None,
        *,
        name: str | None = None,
    ) -> ConfigRepo:
        nonlocal counter
        counter += 1
        if files is None:
            files = {"conf/application.toml": APPLICATION_TOML}

        repo_path = tmp_path / (name or f"origin-{counter}")
        repo_path.mkdir()
        repo = porcelain.init(str(repo_path))

        added: list[str] = []
        for rel_path, content in files.items():
            file_path = repo_path / rel_path
            file_path.parent.mkdir(parents=True, exist_ok=True)
            if isinstance(content, bytes):
                _ = file_path.write_bytes(content)
            else:
                _ = file_path.write_text(content, encoding="utf-8")
            added.append(str(file_path))

        porcelain.add(repo, paths=added)
        sha = porcelain.commit(
            repo,
            message=b"Add configuration",
            author=_AUTHOR,
            committer=_AUTHOR,
        )
        repo.close()
        return ConfigRepo(path=repo_path, commit=sha.decode("ascii"))

    return _make


@pytest.fixture
def config_repo(make_config_repo: MakeConfigRepo) -> ConfigRepo:
    """A repository with conf/application.toml holding three leaves."""
    return make_config_repo(name="origin")


@pytest.fixture
def clone_base_dir(tmp_path: Path) -> Path:
    """Parent directory for temporary clones, for leak checks."""
    base = tmp_path / "clones"
    base.mkdir()
    return base
