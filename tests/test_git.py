"""
Tests for the git executor.

subprocess is patched; no git binary is required.
"""

import subprocess
from pathlib import Path
from unittest.mock import patch

import pytest

from superclone.exceptions import ExecutionError, GitNotInstalledError, GitTimeoutError
from superclone.git import GitExecutor


def completed(returncode: int = 0, stderr: str = "") -> subprocess.CompletedProcess:
    return subprocess.CompletedProcess(args=[], returncode=returncode, stdout="", stderr=stderr)


def test_clone_invokes_git_clone(tmp_path: Path) -> None:
    git = GitExecutor(timeout=120)
    destination = tmp_path / "octocat" / "hello"

    with patch("superclone.git.subprocess.run", return_value=completed()) as run:
        git.clone("https://github.com/octocat/hello.git", destination)

    cmd = run.call_args.args[0]
    assert cmd == ["git", "clone", "https://github.com/octocat/hello.git", str(destination)]
    assert run.call_args.kwargs["timeout"] == 120
    assert run.call_args.kwargs["capture_output"] is True
    assert run.call_args.kwargs["env"]["GIT_TERMINAL_PROMPT"] == "0"


def test_pull_runs_in_working_copy(tmp_path: Path) -> None:
    git = GitExecutor()
    with patch("superclone.git.subprocess.run", return_value=completed()) as run:
        git.pull(tmp_path)

    assert run.call_args.args[0] == ["git", "-C", str(tmp_path), "pull"]
    assert run.call_args.kwargs["timeout"] is None


def test_non_zero_exit_surfaces_stderr(tmp_path: Path) -> None:
    git = GitExecutor()
    failure = completed(128, "fatal: repository 'https://github.com/o/r.git/' not found\n")

    with patch("superclone.git.subprocess.run", return_value=failure):
        with pytest.raises(ExecutionError) as exc_info:
            git.clone("https://github.com/o/r.git", tmp_path / "r")

    assert exc_info.value.exit_code == 128
    assert exc_info.value.stderr == "fatal: repository 'https://github.com/o/r.git/' not found"
    assert "not found" in exc_info.value.message


def test_stderr_credentials_are_masked(tmp_path: Path) -> None:
    git = GitExecutor()
    failure = completed(128, "fatal: Authentication failed for 'https://ghp_secret@github.com/o/r.git/'")

    with patch("superclone.git.subprocess.run", return_value=failure):
        with pytest.raises(ExecutionError) as exc_info:
            git.clone("https://ghp_secret@github.com/o/r.git", tmp_path / "r")

    assert "ghp_secret" not in exc_info.value.stderr
    assert "ghp_secret" not in str(exc_info.value)


def test_timeout_is_distinct_failure(tmp_path: Path) -> None:
    git = GitExecutor(timeout=5)
    with patch(
        "superclone.git.subprocess.run",
        side_effect=subprocess.TimeoutExpired(cmd=["git"], timeout=5),
    ):
        with pytest.raises(GitTimeoutError) as exc_info:
            git.pull(tmp_path)

    assert exc_info.value.code == "TIMEOUT"
    assert exc_info.value.timeout == 5
    assert isinstance(exc_info.value, ExecutionError)


def test_missing_binary(tmp_path: Path) -> None:
    git = GitExecutor(git_binary="definitely-not-git")
    with patch("superclone.git.subprocess.run", side_effect=FileNotFoundError("no such file")):
        with pytest.raises(GitNotInstalledError):
            git.clone("https://github.com/o/r.git", tmp_path / "r")


def test_is_installed() -> None:
    git = GitExecutor(git_binary="definitely-not-git")
    with patch("superclone.git.shutil.which", return_value=None):
        assert git.is_installed() is False

    with patch("superclone.git.shutil.which", return_value="/usr/bin/git"):
        with patch("superclone.git.subprocess.run", return_value=completed()):
            assert git.is_installed() is True
        with patch("superclone.git.subprocess.run", return_value=completed(1)):
            assert git.is_installed() is False


def test_is_working_copy(tmp_path: Path) -> None:
    assert GitExecutor.is_working_copy(tmp_path) is False
    (tmp_path / ".git").mkdir()
    assert GitExecutor.is_working_copy(tmp_path) is True
