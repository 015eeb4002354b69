"""
superclone main client.

Wires configuration, providers, store, git and the sync service together.
"""

from typing import Any

from superclone.cloner import RepositoryCloner
from superclone.config import SuperCloneConfig
from superclone.exceptions import GitNotInstalledError
from superclone.git import GitExecutor
from superclone.providers import RepositoryProvider, create_provider
from superclone.store import RepositoryStore, SQLiteRepositoryStore
from superclone.sync import SyncService
from superclone.transport import RetryConfig
from superclone.types.repos import Provider


class SuperCloneClient:
    """
    Main entry point for discovering and syncing repositories.

    Example:
        ```python
        from superclone import DiscoveryScope, Provider, SuperCloneClient

        with SuperCloneClient.from_env() as client:
            summary = client.sync.sync(DiscoveryScope.user(Provider.GITHUB, "octocat"))
            print(f"{len(summary.succeeded)} cloned, {len(summary.failed)} failed")

            client.sync.pull_all()
        ```
    """

    def __init__(
        self,
        config: SuperCloneConfig,
        store: RepositoryStore | None = None,
        providers: dict[Provider, RepositoryProvider] | None = None,
        git: GitExecutor | None = None,
        retry_config: RetryConfig | None = None,
    ) -> None:
        """
        Initialize the client.

        Args:
            config: Resolved configuration
            store: Repository store (default: SQLite at ``config.database_path``)
            providers: Provider clients (default: GitHub and GitLab from ``config``)
            git: Git executor (default: ``git`` on PATH with ``config.git_timeout``)
            retry_config: Retry behavior for provider API calls (optional)
        """
        self.config = config
        self.store = store if store is not None else SQLiteRepositoryStore(config.database_path)
        self.providers = providers or {
            provider: create_provider(provider, config, retry_config)
            for provider in Provider
        }
        self.git = git if git is not None else GitExecutor(timeout=config.git_timeout)
        self.cloner = RepositoryCloner(
            base_path=config.clone_base_path,
            git=self.git,
            tokens=config.tokens,
            use_ssh=config.use_ssh,
        )
        self.sync = SyncService(
            store=self.store,
            providers=self.providers,
            cloner=self.cloner,
            max_workers=config.max_workers,
            use_ssh=config.use_ssh,
        )

    @classmethod
    def from_env(
        cls,
        retry_config: RetryConfig | None = None,
        **overrides: Any,
    ) -> "SuperCloneClient":
        """
        Create a client from environment variables.

        See ``SuperCloneConfig.from_env`` for the variables read.

        Raises:
            ConfigurationError: If the environment holds invalid values
        """
        return cls(SuperCloneConfig.from_env(**overrides), retry_config=retry_config)

    @property
    def github(self) -> RepositoryProvider:
        return self.sync.provider(Provider.GITHUB)

    @property
    def gitlab(self) -> RepositoryProvider:
        return self.sync.provider(Provider.GITLAB)

    def ensure_git_installed(self) -> None:
        """Raise GitNotInstalledError unless git can be executed."""
        if not self.git.is_installed():
            raise GitNotInstalledError(self.git.git_binary)

    def close(self) -> None:
        """Close provider HTTP clients and the store."""
        for provider in self.providers.values():
            provider.close()
        self.store.close()

    def __enter__(self) -> "SuperCloneClient":
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()
