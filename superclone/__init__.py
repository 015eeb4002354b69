"""superclone - discover, clone and keep GitHub/GitLab repositories up to date."""

__version__ = "0.1.0"

from superclone.client import SuperCloneClient  # noqa: E402
from superclone.cloner import RepositoryCloner  # noqa: E402
from superclone.config import SuperCloneConfig  # noqa: E402
from superclone.credentials import build_clone_url, clone_url_for, inject_credentials  # noqa: E402
from superclone.exceptions import (  # noqa: E402
    AuthenticationError,
    AuthenticationRequiredError,
    ConfigurationError,
    DiscoveryError,
    ExecutionError,
    GitNotInstalledError,
    GitTimeoutError,
    NotFoundError,
    PathConflictError,
    PersistenceError,
    RateLimitedError,
    RemoteNotFoundError,
    ResponseParseError,
    ServerError,
    SuperCloneError,
)
from superclone.git import GitExecutor  # noqa: E402
from superclone.logging import configure_logging, get_logger  # noqa: E402
from superclone.providers import (  # noqa: E402
    GitHubClient,
    GitLabClient,
    RepositoryProvider,
    create_provider,
)
from superclone.store import RepositoryStore, SQLiteRepositoryStore  # noqa: E402
from superclone.sync import SyncService  # noqa: E402
from superclone.transport import HTTPTransport, RetryConfig  # noqa: E402
from superclone.types import (  # noqa: E402
    CloneStatus,
    DiscoveryScope,
    Provider,
    RepoOutcome,
    Repository,
    ScopeKind,
    SyncAction,
    SyncSummary,
)

__all__ = [
    "__version__",
    # Main Client
    "SuperCloneClient",
    "SuperCloneConfig",
    # Pipeline
    "SyncService",
    "RepositoryCloner",
    "GitExecutor",
    # Providers
    "RepositoryProvider",
    "GitHubClient",
    "GitLabClient",
    "create_provider",
    # Credentials
    "build_clone_url",
    "clone_url_for",
    "inject_credentials",
    # Store
    "RepositoryStore",
    "SQLiteRepositoryStore",
    # Types
    "Provider",
    "CloneStatus",
    "Repository",
    "DiscoveryScope",
    "ScopeKind",
    "SyncAction",
    "RepoOutcome",
    "SyncSummary",
    # Exceptions
    "SuperCloneError",
    "ConfigurationError",
    "DiscoveryError",
    "AuthenticationError",
    "AuthenticationRequiredError",
    "RemoteNotFoundError",
    "RateLimitedError",
    "ServerError",
    "ResponseParseError",
    "PersistenceError",
    "PathConflictError",
    "ExecutionError",
    "GitNotInstalledError",
    "GitTimeoutError",
    "NotFoundError",
    # Transport
    "HTTPTransport",
    "RetryConfig",
    # Logging
    "configure_logging",
    "get_logger",
]
