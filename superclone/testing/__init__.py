"""superclone testing utilities.

Provides in-memory collaborators and fixtures for testing code built on
superclone without network, git or a database file.
"""

from superclone.testing.fixtures import (
    create_github_repo_payload,
    create_gitlab_project_payload,
    create_mock_repository,
)
from superclone.testing.mock import (
    InMemoryRepositoryStore,
    MockCall,
    MockGitExecutor,
    MockProvider,
)

__all__ = [
    # Test doubles
    "MockProvider",
    "MockGitExecutor",
    "InMemoryRepositoryStore",
    "MockCall",
    # Helper functions
    "create_mock_repository",
    "create_github_repo_payload",
    "create_gitlab_project_payload",
]
