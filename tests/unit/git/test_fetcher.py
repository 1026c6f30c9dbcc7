"""Unit tests for repository fetching."""

from pathlib import Path
from typing import Any

import pytest
from dulwich.client import HTTPUnauthorized
from dulwich.errors import (
    ChecksumMismatch,
    GitProtocolError,
    NotGitRepository,
    ObjectFormatException,
)
from dulwich.repo import Repo
from paramiko import (
    AuthenticationException,
    PasswordRequiredException,
    SSHException,
)
from pytest_mock import MockerFixture
from urllib3.exceptions import ProtocolError, ReadTimeoutError

from gitconf.auth import AnonymousAuth, UserPasswordAuth
from gitconf.exceptions import AuthenticationError, FetchError
from gitconf.git import (
    TEMP_DIR_PREFIX,
    RepositoryHandle,
    clone_repository,
    create_workdir,
)

CLONE = "gitconf.git._fetcher.porcelain.clone"
HTTPS_URI = "https://example.com/org/config.git"


def _leftovers(base_dir: Path) -> list[Path]:
    return list(base_dir.glob(f"{TEMP_DIR_PREFIX}*"))


def _failing_rmtree(path: Path, *, ignore_errors: bool = False) -> None:
    if not ignore_errors:
        raise OSError(f"in use: {path}")


class TestCreateWorkdir:
    def test_creates_prefixed_directory(self, clone_base_dir: Path) -> None:
        workdir = create_workdir(clone_base_dir)

        assert workdir.is_dir()
        assert workdir.parent == clone_base_dir
        assert workdir.name.startswith(TEMP_DIR_PREFIX)

    def test_names_are_unique(self, clone_base_dir: Path) -> None:
        names = {create_workdir(clone_base_dir).name for _ in range(20)}

        assert len(names) == 20


class TestCloneRepository:
    def test_clones_bare_into_workdir(
        self, mocker: MockerFixture, clone_base_dir: Path
    ) -> None:
        repo = mocker.MagicMock(spec=Repo)
        mock_clone = mocker.patch(CLONE, return_value=repo)

        handle = clone_repository(
            HTTPS_URI,
            UserPasswordAuth(login="octocat", password="pw"),
            timeout=9.0,
            base_dir=clone_base_dir,
        )

        args, kwargs = mock_clone.call_args
        assert args[0] == HTTPS_URI
        assert Path(args[1]).parent == handle.workdir
        assert kwargs["bare"] is True
        assert kwargs["checkout"] is False
        assert kwargs["username"] == "octocat"
        assert kwargs["password"] == "pw"
        assert kwargs["timeout"] == 9.0
        assert handle.repo is repo
        handle.close()

    @pytest.mark.parametrize(
        "error",
        [
            HTTPUnauthorized("Basic", HTTPS_URI),
            AuthenticationException("denied"),
            PasswordRequiredException("Private key file is encrypted"),
        ],
    )
    def test_auth_failures(
        self, mocker: MockerFixture, clone_base_dir: Path, error: Exception
    ) -> None:
        _ = mocker.patch(CLONE, side_effect=error)

        with pytest.raises(AuthenticationError) as exc_info:
            _ = clone_repository(HTTPS_URI, AnonymousAuth(), base_dir=clone_base_dir)

        assert exc_info.value.uri == HTTPS_URI
        assert exc_info.value.cause is error
        assert _leftovers(clone_base_dir) == []

    @pytest.mark.parametrize(
        "error",
        [
            GitProtocolError("unexpected response"),
            NotGitRepository("no repo"),
            ConnectionRefusedError("refused"),
            ValueError("malformed url"),
            SSHException("Error reading SSH protocol banner"),
            ChecksumMismatch(b"a" * 40, b"b" * 40),
            ObjectFormatException("invalid tree"),
            ReadTimeoutError(None, HTTPS_URI, "Read timed out."),  # pyright: ignore[reportArgumentType]
            ProtocolError("Connection broken: IncompleteRead"),
        ],
    )
    def test_fetch_failures(
        self, mocker: MockerFixture, clone_base_dir: Path, error: Exception
    ) -> None:
        _ = mocker.patch(CLONE, side_effect=error)

        with pytest.raises(FetchError) as exc_info:
            _ = clone_repository(HTTPS_URI, AnonymousAuth(), base_dir=clone_base_dir)

        assert str(exc_info.value).startswith(f"Failed to clone {HTTPS_URI}: ")
        assert type(error).__name__ in str(exc_info.value)
        assert exc_info.value.cause is error
        assert _leftovers(clone_base_dir) == []

    def test_unexpected_error_propagates_after_cleanup(
        self, mocker: MockerFixture, clone_base_dir: Path
    ) -> None:
        _ = mocker.patch(CLONE, side_effect=KeyboardInterrupt)

        with pytest.raises(KeyboardInterrupt):
            _ = clone_repository(HTTPS_URI, AnonymousAuth(), base_dir=clone_base_dir)

        assert _leftovers(clone_base_dir) == []

    def test_auth_context_errors_clean_up(
        self, mocker: MockerFixture, clone_base_dir: Path
    ) -> None:
        auth: Any = mocker.MagicMock()
        auth.transport_kwargs.side_effect = AuthenticationError("no key")
        mock_clone = mocker.patch(CLONE)

        with pytest.raises(AuthenticationError):
            _ = clone_repository(HTTPS_URI, auth, base_dir=clone_base_dir)

        mock_clone.assert_not_called()
        assert _leftovers(clone_base_dir) == []


class TestRepositoryHandle:
    def test_close_removes_workdir(self, mocker: MockerFixture, tmp_path: Path) -> None:
        workdir = tmp_path / "work"
        workdir.mkdir()
        repo = mocker.MagicMock(spec=Repo)

        handle = RepositoryHandle(repo, workdir, uri="u")
        handle.close()

        repo.close.assert_called_once()
        assert not workdir.exists()
        assert handle.closed

    def test_close_is_idempotent(self, mocker: MockerFixture, tmp_path: Path) -> None:
        workdir = tmp_path / "work"
        workdir.mkdir()
        repo = mocker.MagicMock(spec=Repo)
        handle = RepositoryHandle(repo, workdir, uri="u")

        handle.close()
        handle.close()

        repo.close.assert_called_once()

    def test_workdir_removed_when_repo_close_fails(
        self, mocker: MockerFixture, tmp_path: Path
    ) -> None:
        workdir = tmp_path / "work"
        workdir.mkdir()
        repo = mocker.MagicMock(spec=Repo)
        repo.close.side_effect = OSError("busy")

        with pytest.raises(OSError, match="busy"):
            RepositoryHandle(repo, workdir, uri="u").close()

        assert not workdir.exists()

    def test_context_manager_closes_on_error(
        self, mocker: MockerFixture, tmp_path: Path
    ) -> None:
        workdir = tmp_path / "work"
        workdir.mkdir()
        handle = RepositoryHandle(mocker.MagicMock(spec=Repo), workdir, uri="u")

        with pytest.raises(RuntimeError), handle:
            raise RuntimeError

        assert handle.closed
        assert not workdir.exists()

    def test_repo_unavailable_after_close(
        self, mocker: MockerFixture, tmp_path: Path
    ) -> None:
        workdir = tmp_path / "work"
        workdir.mkdir()
        handle = RepositoryHandle(mocker.MagicMock(spec=Repo), workdir, uri="u")
        handle.close()

        with pytest.raises(ValueError, match="closed"):
            _ = handle.repo

    def test_cleanup_failure_does_not_mask_error(
        self, mocker: MockerFixture, tmp_path: Path
    ) -> None:
        workdir = tmp_path / "work"
        workdir.mkdir()
        repo = mocker.MagicMock(spec=Repo)
        repo.close.side_effect = OSError("busy")
        rmtree = mocker.patch(
            "gitconf.git._fetcher.shutil.rmtree", side_effect=_failing_rmtree
        )
        handle = RepositoryHandle(repo, workdir, uri="u")

        with pytest.raises(FetchError, match="missing"), handle:
            raise FetchError("missing")

        assert handle.closed
        assert rmtree.call_args.kwargs == {"ignore_errors": True}

    def test_cleanup_failure_raised_on_clean_exit(
        self, mocker: MockerFixture, tmp_path: Path
    ) -> None:
        workdir = tmp_path / "work"
        workdir.mkdir()
        _ = mocker.patch(
            "gitconf.git._fetcher.shutil.rmtree", side_effect=_failing_rmtree
        )

        with (
            pytest.raises(OSError, match="in use"),
            RepositoryHandle(mocker.MagicMock(spec=Repo), workdir, uri="u"),
        ):
            pass
