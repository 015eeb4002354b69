"""Provider clients for repository discovery."""

from typing import Protocol

from superclone.config import SuperCloneConfig
from superclone.providers.github import GitHubClient
from superclone.providers.gitlab import GitLabClient
from superclone.providers.pagination import PER_PAGE, fetch_all_pages
from superclone.transport import RetryConfig
from superclone.types.repos import Provider, Repository


class RepositoryProvider(Protocol):
    """The four discovery capabilities every provider client offers."""

    def discover_user_repos(self, username: str) -> list[Repository]: ...

    def discover_org_repos(self, org: str) -> list[Repository]: ...

    def get_authenticated_user(self) -> str: ...

    def list_accessible_organizations(self) -> list[str]: ...

    def close(self) -> None: ...


def create_provider(
    provider: Provider,
    config: SuperCloneConfig,
    retry_config: RetryConfig | None = None,
) -> RepositoryProvider:
    """Build the client for ``provider`` from explicit configuration."""
    if provider == Provider.GITHUB:
        return GitHubClient(
            token=config.github_token,
            api_url=config.github_api_url,
            timeout=config.http_timeout,
            retry_config=retry_config,
        )
    return GitLabClient(
        token=config.gitlab_token,
        base_url=config.gitlab_base_url,
        timeout=config.http_timeout,
        retry_config=retry_config,
    )


__all__ = [
    "RepositoryProvider",
    "GitHubClient",
    "GitLabClient",
    "create_provider",
    "fetch_all_pages",
    "PER_PAGE",
]
