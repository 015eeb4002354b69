"""Repository persistence."""

from superclone.store.base import RepositoryStore
from superclone.store.sqlite import SQLiteRepositoryStore

__all__ = [
    "RepositoryStore",
    "SQLiteRepositoryStore",
]
