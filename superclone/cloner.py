"""Clone/pull of individual repository records into the local tree."""

import shutil
from collections.abc import Mapping
from pathlib import Path

from superclone.credentials import clone_url_for
from superclone.exceptions import ExecutionError, NotFoundError, PathConflictError
from superclone.git import GitExecutor
from superclone.logging import get_logger
from superclone.types.repos import Provider, Repository

logger = get_logger("git")


class RepositoryCloner:
    """
    Places repositories at ``<base_path>/<owner>/<name>``.

    Cloning is idempotent: an existing working copy at the destination is
    reported as success without running git. Anything else already at the
    destination is left untouched and reported as a conflict.
    """

    def __init__(
        self,
        base_path: str | Path,
        git: GitExecutor | None = None,
        tokens: Mapping[Provider, str | None] | None = None,
        use_ssh: bool = False,
    ) -> None:
        """
        Args:
            base_path: Root directory for clones
            git: Executor used for git invocations (default: GitExecutor())
            tokens: Access token per provider, for private HTTPS clones
            use_ssh: Default transport when ``clone`` is not told otherwise
        """
        self.base_path = Path(base_path).expanduser()
        self.git = git or GitExecutor()
        self.tokens = dict(tokens or {})
        self.use_ssh = use_ssh

    def repo_path(self, repo: Repository) -> Path:
        return self.base_path / repo.owner / repo.name

    def clone(self, repo: Repository, use_ssh: bool | None = None) -> Path:
        """
        Clone ``repo`` unless it is already present.

        Args:
            repo: Record to clone
            use_ssh: Override the default transport

        Returns:
            Path of the working copy

        Raises:
            PathConflictError: If the destination, or its parent, exists and is not
                a directory git can clone into
            ExecutionError: If git fails or the parent cannot be created
        """
        destination = self.repo_path(repo)

        if destination.exists():
            if self.git.is_working_copy(destination):
                logger.debug(f"{repo.full_name} already cloned at {destination}")
                return destination
            raise PathConflictError(destination)

        try:
            destination.parent.mkdir(parents=True, exist_ok=True)
        except (FileExistsError, NotADirectoryError) as e:
            raise PathConflictError(destination.parent) from e
        except OSError as e:
            raise ExecutionError(f"Cannot create {destination.parent}: {e}") from e

        ssh = self.use_ssh if use_ssh is None else use_ssh
        url = clone_url_for(repo, self.tokens.get(repo.provider), use_ssh=ssh)
        try:
            self.git.clone(url, destination)
        except ExecutionError:
            # The destination did not exist before this call; a killed or failed
            # clone must not leave a .git behind that looks like a working copy.
            self._discard(destination)
            raise
        return destination

    def _discard(self, destination: Path) -> None:
        if not destination.exists():
            return
        try:
            shutil.rmtree(destination)
        except OSError as e:
            logger.warning(f"Could not remove partial clone at {destination}: {e}")

    def pull(self, path: str | Path) -> None:
        """
        Pull an existing working copy.

        Raises:
            NotFoundError: If ``path`` does not exist
            ExecutionError: If git fails
        """
        path = Path(path)
        if not path.exists():
            raise NotFoundError(f"Repository path does not exist: {path}")
        self.git.pull(path)
