"""Repository store interface."""

from typing import Protocol

from superclone.types.repos import CloneStatus, Provider, Repository


class RepositoryStore(Protocol):
    """
    Persistence for repository records.

    Implementations must enforce ``full_name`` uniqueness and raise
    ``PersistenceError`` for I/O failures. Writes are keyed by row, so
    concurrent writers to different records never conflict.
    """

    def create(self, repo: Repository) -> None: ...

    def create_if_absent(self, repo: Repository) -> bool:
        """Insert unless ``full_name`` exists. Returns True when a row was added."""
        ...

    def update(self, repo: Repository) -> None:
        """Replace the stored record with the same id."""
        ...

    def delete(self, repo_id: str) -> None: ...

    def get(self, repo_id: str) -> Repository | None: ...

    def find_by_full_name(self, full_name: str) -> Repository | None: ...

    def find_all(self) -> list[Repository]: ...

    def find_by_status(self, status: CloneStatus) -> list[Repository]: ...

    def find_by_provider(self, provider: Provider) -> list[Repository]: ...

    def find_by_owner(self, owner: str) -> list[Repository]: ...

    def clear(self) -> None: ...

    def close(self) -> None: ...
