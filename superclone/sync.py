"""
Repository synchronization pipeline.

discover -> reconcile against the store -> clone each known record ->
record the outcome. Per-repository failures are collected into the summary;
store and discovery failures abort the batch.
"""

from collections.abc import Callable, Mapping
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import TypeVar

from superclone.cloner import RepositoryCloner
from superclone.exceptions import (
    ConfigurationError,
    NotFoundError,
    PersistenceError,
    SuperCloneError,
)
from superclone.logging import get_logger
from superclone.providers import RepositoryProvider
from superclone.store.base import RepositoryStore
from superclone.types.repos import CloneStatus, Provider, Repository
from superclone.types.sync import (
    DiscoveryScope,
    RepoOutcome,
    ScopeKind,
    SyncAction,
    SyncSummary,
)

logger = get_logger("sync")

T = TypeVar("T")
R = TypeVar("R")


class SyncService:
    """
    Drives discovery, reconciliation and clone/pull batches.

    Clones and pulls for different repositories run on a bounded thread
    pool; results are always reported in input order.

    Example:
        ```python
        service = SyncService(store, {Provider.GITHUB: GitHubClient(token)}, cloner)
        summary = service.sync(DiscoveryScope.org(Provider.GITHUB, "python"))
        for outcome in summary.failed:
            print(outcome.full_name, outcome.error)
        ```
    """

    def __init__(
        self,
        store: RepositoryStore,
        providers: Mapping[Provider, RepositoryProvider],
        cloner: RepositoryCloner,
        max_workers: int = 4,
        use_ssh: bool = False,
    ) -> None:
        """
        Args:
            store: Record persistence
            providers: Configured provider clients
            cloner: Clone/pull executor
            max_workers: Upper bound on concurrent git and discovery calls
            use_ssh: Clone over SSH instead of HTTPS
        """
        if max_workers < 1:
            raise ConfigurationError("max_workers must be at least 1")
        self.store = store
        self.providers = dict(providers)
        self.cloner = cloner
        self.max_workers = max_workers
        self.use_ssh = use_ssh

    def provider(self, provider: Provider) -> RepositoryProvider:
        try:
            return self.providers[provider]
        except KeyError:
            raise ConfigurationError(f"No client configured for {provider.value}") from None

    def discover(self, scope: DiscoveryScope) -> list[Repository]:
        """
        Fetch every repository in ``scope``.

        Raises:
            DiscoveryError: On API or credential errors
            ConfigurationError: If the scope's provider is not configured
        """
        client = self.provider(scope.provider)

        if scope.kind == ScopeKind.USER:
            return client.discover_user_repos(scope.name)
        if scope.kind == ScopeKind.ORG:
            return client.discover_org_repos(scope.name)
        if scope.kind == ScopeKind.SELF:
            username = client.get_authenticated_user()
            logger.info(f"Authenticated as {username}")
            return client.discover_user_repos(username)

        orgs = client.list_accessible_organizations()
        logger.info(f"Found {len(orgs)} organizations with access")
        per_org = self._map_concurrently(client.discover_org_repos, orgs)

        repos: list[Repository] = []
        seen: set[str] = set()
        for org, org_repos in zip(orgs, per_org):
            logger.info(f"Found {len(org_repos)} repositories in {org}")
            for repo in org_repos:
                if repo.full_name not in seen:
                    seen.add(repo.full_name)
                    repos.append(repo)
        return repos

    def reconcile(self, discovered: list[Repository]) -> tuple[list[Repository], int]:
        """
        Merge discovered repositories into the store.

        New full names are inserted as not-cloned records; existing rows are
        kept as they are, local state included.

        Returns:
            The stored records in discovery order, and how many were created

        Raises:
            PersistenceError: If the store fails
        """
        records: list[Repository] = []
        created = 0

        for repo in discovered:
            if self.store.create_if_absent(repo):
                created += 1
            stored = self.store.find_by_full_name(repo.full_name)
            if stored is None:
                raise PersistenceError(f"Record for {repo.full_name} vanished after insert")
            records.append(stored)

        return records, created

    def sync(self, scope: DiscoveryScope) -> SyncSummary:
        """
        Discover ``scope``, store new repositories and clone all of them.

        Returns:
            Summary with one clone outcome per repository in scope

        Raises:
            DiscoveryError: If discovery fails (nothing is stored)
            PersistenceError: If the store fails
        """
        logger.info(f"Discovering repositories for {scope.describe()}")
        discovered = self.discover(scope)
        logger.info(f"Found {len(discovered)} repositories")

        records, created = self.reconcile(discovered)
        outcomes = self._map_concurrently(self._clone_record, records)

        return SyncSummary(
            scope=scope,
            discovered=len(discovered),
            created=created,
            outcomes=outcomes,
        )

    def clone_repository(self, full_name: str) -> RepoOutcome:
        """
        Clone one known repository by full name.

        Raises:
            NotFoundError: If no record has this full name
        """
        repo = self.store.find_by_full_name(full_name)
        if repo is None:
            raise NotFoundError(
                f"Repository not found: {full_name}. "
                "Discover it first with clone-user or clone-org."
            )
        return self._clone_record(repo)

    def clone_pending(self) -> SyncSummary:
        """Retry every record that is not cloned yet or failed last time."""
        records = self.store.find_by_status(CloneStatus.NOT_CLONED)
        records += self.store.find_by_status(CloneStatus.ERROR)
        records.sort(key=lambda r: r.full_name)
        return SyncSummary(
            outcomes=self._map_concurrently(self._clone_record, records)
        )

    def pull_all(self) -> SyncSummary:
        """
        Pull every cloned repository.

        Success refreshes ``last_pulled_at``. Failures are only reported in the
        summary; the record keeps its status.

        Raises:
            PersistenceError: If the store fails
        """
        records = self.store.find_by_status(CloneStatus.CLONED)
        logger.info(f"Pulling updates for {len(records)} repositories")
        return SyncSummary(
            discovered=len(records),
            outcomes=self._map_concurrently(self._pull_record, records),
        )

    def _clone_record(self, repo: Repository) -> RepoOutcome:
        try:
            path = self.cloner.clone(repo, use_ssh=self.use_ssh)
        except PersistenceError:
            raise
        except SuperCloneError as e:
            repo.record_clone_failure()
            self.store.update(repo)
            logger.warning(f"Failed to clone {repo.full_name}: {e.message}")
            return RepoOutcome(
                repo.full_name,
                SyncAction.CLONE,
                success=False,
                error=e.message,
                error_kind=e.code,
            )

        repo.record_clone_success(str(path))
        self.store.update(repo)
        logger.info(f"Cloned {repo.full_name} to {path}")
        return RepoOutcome(repo.full_name, SyncAction.CLONE, success=True, path=path)

    def _pull_record(self, repo: Repository) -> RepoOutcome:
        if not repo.local_path:
            return RepoOutcome(
                repo.full_name,
                SyncAction.PULL,
                success=False,
                error="Repository has no local path",
                error_kind="NOT_FOUND",
            )

        try:
            self.cloner.pull(repo.local_path)
        except PersistenceError:
            raise
        except SuperCloneError as e:
            logger.warning(f"Failed to pull {repo.full_name}: {e.message}")
            return RepoOutcome(
                repo.full_name,
                SyncAction.PULL,
                success=False,
                path=Path(repo.local_path),
                error=e.message,
                error_kind=e.code,
            )

        repo.mark_pulled()
        self.store.update(repo)
        logger.info(f"Pulled {repo.full_name}")
        return RepoOutcome(
            repo.full_name,
            SyncAction.PULL,
            success=True,
            path=Path(repo.local_path),
        )

    def _map_concurrently(self, fn: Callable[[T], R], items: list[T]) -> list[R]:
        """Apply ``fn`` on the worker pool, returning results in input order."""
        if not items:
            return []
        if self.max_workers == 1 or len(items) == 1:
            return [fn(item) for item in items]
        with ThreadPoolExecutor(max_workers=min(self.max_workers, len(items))) as pool:
            return list(pool.map(fn, items))
