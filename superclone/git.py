"""
Git command execution.

Wraps the ``git`` binary for the two operations the sync pipeline needs,
clone and pull, and classifies failures into typed exceptions.
"""

import os
import shutil
import subprocess
from pathlib import Path

from superclone.exceptions import ExecutionError, GitNotInstalledError, GitTimeoutError
from superclone.logging import log_git_command, mask_sensitive_data


class GitExecutor:
    """
    Runs git clone/pull as blocking subprocesses.

    Each call captures stderr so failures can be reported per repository.
    Interactive credential prompts are disabled: a missing or wrong token
    makes git fail instead of waiting on a terminal.

    Example:
        ```python
        from superclone.git import GitExecutor

        git = GitExecutor(timeout=300)
        git.clone("https://github.com/octocat/Hello-World.git", "./Hello-World")
        git.pull("./Hello-World")
        ```
    """

    def __init__(self, git_binary: str = "git", timeout: float | None = None) -> None:
        """
        Initialize the executor.

        Args:
            git_binary: Name or path of the git executable
            timeout: Deadline in seconds for each clone/pull (None for no limit)
        """
        self.git_binary = git_binary
        self.timeout = timeout

    def is_installed(self) -> bool:
        """Check whether git can be executed."""
        if shutil.which(self.git_binary) is None:
            return False
        try:
            result = subprocess.run(
                [self.git_binary, "--version"],
                capture_output=True,
                text=True,
            )
        except OSError:
            return False
        return result.returncode == 0

    @staticmethod
    def is_working_copy(path: str | Path) -> bool:
        """A directory is a working copy when it holds git metadata."""
        return (Path(path) / ".git").exists()

    def clone(self, url: str, destination: str | Path) -> None:
        """
        Clone a repository.

        Args:
            url: Clone URL, possibly with embedded credentials
            destination: Directory to clone into (must not exist)

        Raises:
            ExecutionError: If git exits non-zero
            GitTimeoutError: If the clone exceeds the deadline
            GitNotInstalledError: If git is missing
        """
        self._run("clone", [self.git_binary, "clone", url, str(destination)])

    def pull(self, path: str | Path) -> None:
        """
        Pull the current branch of a working copy.

        Raises:
            ExecutionError: If git exits non-zero
            GitTimeoutError: If the pull exceeds the deadline
            GitNotInstalledError: If git is missing
        """
        self._run("pull", [self.git_binary, "-C", str(path), "pull"])

    def _run(self, operation: str, cmd: list[str]) -> None:
        log_git_command(cmd)

        try:
            result = subprocess.run(
                cmd,
                capture_output=True,
                text=True,
                timeout=self.timeout,
                env=self._get_git_env(),
            )
        except FileNotFoundError as e:
            raise GitNotInstalledError(self.git_binary) from e
        except subprocess.TimeoutExpired as e:
            raise GitTimeoutError(operation, e.timeout) from e

        if result.returncode != 0:
            stderr = mask_sensitive_data(result.stderr.strip())
            raise ExecutionError(
                f"Git {operation} failed: {stderr}",
                exit_code=result.returncode,
                stderr=stderr,
            )

    def _get_git_env(self) -> dict[str, str]:
        env = os.environ.copy()
        env["GIT_TERMINAL_PROMPT"] = "0"
        return env
