"""
Helper functions and pytest fixtures for superclone tests.
"""

import uuid
from collections.abc import Iterator
from pathlib import Path
from typing import Any

import pytest

from superclone.cloner import RepositoryCloner
from superclone.store.sqlite import SQLiteRepositoryStore
from superclone.sync import SyncService
from superclone.testing.mock import InMemoryRepositoryStore, MockGitExecutor, MockProvider
from superclone.types.repos import Provider, Repository


# ============================================================================
# Helper Functions
# ============================================================================


def create_mock_repository(
    name: str | None = None,
    owner: str = "mock-owner",
    provider: Provider = Provider.GITHUB,
    is_private: bool = False,
    description: str | None = None,
) -> Repository:
    """
    Create a not-yet-cloned repository record with consistent URLs.

    Args:
        name: Repository name (default: random)
        owner: Owner login or namespace path
        provider: Platform (default: GitHub)
        is_private: Privacy flag
        description: Optional description

    Returns:
        Repository instance
    """
    name = name or f"repo-{uuid.uuid4().hex[:8]}"
    host = "github.com" if provider == Provider.GITHUB else "gitlab.com"
    return Repository.new(
        name=name,
        full_name=f"{owner}/{name}",
        owner=owner,
        provider=provider,
        clone_url_https=f"https://{host}/{owner}/{name}.git",
        clone_url_ssh=f"git@{host}:{owner}/{name}.git",
        description=description,
        is_private=is_private,
    )


def create_github_repo_payload(
    name: str,
    owner: str = "octocat",
    private: bool = False,
    description: str | None = None,
) -> dict[str, Any]:
    """Build one item of GitHub's ``/users/{name}/repos`` response."""
    return {
        "id": abs(hash((owner, name))),
        "name": name,
        "full_name": f"{owner}/{name}",
        "owner": {"login": owner, "type": "User"},
        "clone_url": f"https://github.com/{owner}/{name}.git",
        "ssh_url": f"git@github.com:{owner}/{name}.git",
        "description": description,
        "private": private,
    }


def create_gitlab_project_payload(
    name: str,
    namespace: str = "gitlab-org",
    visibility: str = "public",
    description: str | None = None,
) -> dict[str, Any]:
    """Build one item of GitLab's ``/groups/{name}/projects`` response."""
    return {
        "id": abs(hash((namespace, name))),
        "name": name,
        "path_with_namespace": f"{namespace}/{name}",
        "namespace": {"path": namespace, "kind": "group"},
        "http_url_to_repo": f"https://gitlab.com/{namespace}/{name}.git",
        "ssh_url_to_repo": f"git@gitlab.com:{namespace}/{name}.git",
        "description": description,
        "visibility": visibility,
    }


# ============================================================================
# Pytest Fixtures
# ============================================================================


@pytest.fixture
def mock_store() -> InMemoryRepositoryStore:
    return InMemoryRepositoryStore()


@pytest.fixture
def sqlite_store(tmp_path: Path) -> Iterator[SQLiteRepositoryStore]:
    store = SQLiteRepositoryStore(tmp_path / "repositories.db")
    yield store
    store.close()


@pytest.fixture
def mock_git() -> MockGitExecutor:
    return MockGitExecutor()


@pytest.fixture
def mock_github() -> MockProvider:
    return MockProvider(Provider.GITHUB, token="ghp_mocktoken")


@pytest.fixture
def mock_gitlab() -> MockProvider:
    return MockProvider(Provider.GITLAB, token="glpat-mocktoken")


@pytest.fixture
def clone_root(tmp_path: Path) -> Path:
    root = tmp_path / "repositories"
    root.mkdir()
    return root


@pytest.fixture
def cloner(clone_root: Path, mock_git: MockGitExecutor) -> RepositoryCloner:
    return RepositoryCloner(
        base_path=clone_root,
        git=mock_git,
        tokens={Provider.GITHUB: "ghp_mocktoken", Provider.GITLAB: "glpat-mocktoken"},
    )


@pytest.fixture
def sync_service(
    mock_store: InMemoryRepositoryStore,
    mock_github: MockProvider,
    mock_gitlab: MockProvider,
    cloner: RepositoryCloner,
) -> SyncService:
    return SyncService(
        store=mock_store,
        providers={Provider.GITHUB: mock_github, Provider.GITLAB: mock_gitlab},
        cloner=cloner,
        max_workers=4,
    )


@pytest.fixture
def sample_repository() -> Repository:
    return create_mock_repository(name="hello-world", owner="octocat")


@pytest.fixture
def sample_private_repository() -> Repository:
    return create_mock_repository(name="secret", owner="octocat", is_private=True)
