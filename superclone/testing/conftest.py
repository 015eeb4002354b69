"""
Pytest plugin for superclone testing fixtures.

To use these fixtures in your tests, add this to your conftest.py:

    pytest_plugins = ["superclone.testing.conftest"]
"""

from superclone.testing.fixtures import (
    clone_root,
    cloner,
    mock_git,
    mock_github,
    mock_gitlab,
    mock_store,
    sample_private_repository,
    sample_repository,
    sqlite_store,
    sync_service,
)

__all__ = [
    "mock_store",
    "sqlite_store",
    "mock_git",
    "mock_github",
    "mock_gitlab",
    "clone_root",
    "cloner",
    "sync_service",
    "sample_repository",
    "sample_private_repository",
]
