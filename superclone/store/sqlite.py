"""SQLite-backed repository store."""

import sqlite3
import threading
from collections.abc import Iterator
from contextlib import contextmanager
from datetime import datetime
from pathlib import Path
from typing import Any

from superclone.exceptions import NotFoundError, PersistenceError
from superclone.types.repos import CloneStatus, Provider, Repository

_COLUMNS = (
    "id",
    "name",
    "full_name",
    "owner",
    "provider",
    "clone_url_https",
    "clone_url_ssh",
    "description",
    "is_private",
    "local_path",
    "status",
    "last_pulled_at",
    "created_at",
    "updated_at",
)

_SCHEMA = """
CREATE TABLE IF NOT EXISTS repositories (
    id TEXT PRIMARY KEY,
    name TEXT NOT NULL,
    full_name TEXT NOT NULL UNIQUE,
    owner TEXT NOT NULL,
    provider TEXT NOT NULL,
    clone_url_https TEXT NOT NULL,
    clone_url_ssh TEXT NOT NULL,
    description TEXT,
    is_private INTEGER NOT NULL DEFAULT 0,
    local_path TEXT,
    status TEXT NOT NULL DEFAULT 'not_cloned',
    last_pulled_at TEXT,
    created_at TEXT NOT NULL,
    updated_at TEXT NOT NULL
);
CREATE INDEX IF NOT EXISTS idx_repositories_status ON repositories(status);
"""

_SELECT = f"SELECT {', '.join(_COLUMNS)} FROM repositories"


def _to_row(repo: Repository) -> tuple[Any, ...]:
    return (
        repo.id,
        repo.name,
        repo.full_name,
        repo.owner,
        repo.provider.value,
        repo.clone_url_https,
        repo.clone_url_ssh,
        repo.description,
        int(repo.is_private),
        repo.local_path,
        repo.status.value,
        repo.last_pulled_at.isoformat() if repo.last_pulled_at else None,
        repo.created_at.isoformat(),
        repo.updated_at.isoformat(),
    )


def _from_row(row: sqlite3.Row) -> Repository:
    last_pulled = row["last_pulled_at"]
    return Repository(
        id=row["id"],
        name=row["name"],
        full_name=row["full_name"],
        owner=row["owner"],
        provider=Provider(row["provider"]),
        clone_url_https=row["clone_url_https"],
        clone_url_ssh=row["clone_url_ssh"],
        description=row["description"],
        is_private=bool(row["is_private"]),
        local_path=row["local_path"],
        status=CloneStatus(row["status"]),
        last_pulled_at=datetime.fromisoformat(last_pulled) if last_pulled else None,
        created_at=datetime.fromisoformat(row["created_at"]),
        updated_at=datetime.fromisoformat(row["updated_at"]),
    )


class SQLiteRepositoryStore:
    """
    Repository store on a single SQLite database file.

    One connection is shared across threads and guarded by a lock, so the
    sync service's worker threads can record outcomes for different
    repositories while a batch runs.
    """

    def __init__(self, db_path: Path | str = ":memory:") -> None:
        self.db_path = str(db_path)
        try:
            if self.db_path != ":memory:":
                Path(self.db_path).expanduser().parent.mkdir(parents=True, exist_ok=True)
                self.db_path = str(Path(self.db_path).expanduser())
            self.conn = sqlite3.connect(self.db_path, check_same_thread=False)
        except (OSError, sqlite3.Error) as e:
            raise PersistenceError(f"Cannot open database {self.db_path}: {e}") from e

        self.conn.row_factory = sqlite3.Row
        self._lock = threading.RLock()
        with self._transaction() as conn:
            if self.db_path != ":memory:":
                conn.execute("PRAGMA journal_mode=WAL")
            conn.execute("PRAGMA busy_timeout=5000")
            conn.executescript(_SCHEMA)

    @contextmanager
    def _transaction(self) -> Iterator[sqlite3.Connection]:
        with self._lock:
            try:
                with self.conn:
                    yield self.conn
            except sqlite3.Error as e:
                raise PersistenceError(str(e)) from e

    def create(self, repo: Repository) -> None:
        placeholders = ", ".join("?" for _ in _COLUMNS)
        with self._transaction() as conn:
            conn.execute(
                f"INSERT INTO repositories ({', '.join(_COLUMNS)}) VALUES ({placeholders})",
                _to_row(repo),
            )

    def create_if_absent(self, repo: Repository) -> bool:
        placeholders = ", ".join("?" for _ in _COLUMNS)
        with self._transaction() as conn:
            cursor = conn.execute(
                f"INSERT OR IGNORE INTO repositories ({', '.join(_COLUMNS)}) "
                f"VALUES ({placeholders})",
                _to_row(repo),
            )
            return cursor.rowcount == 1

    def update(self, repo: Repository) -> None:
        assignments = ", ".join(f"{column} = ?" for column in _COLUMNS[1:] if column != "created_at")
        values = [
            value
            for column, value in zip(_COLUMNS, _to_row(repo))
            if column not in ("id", "created_at")
        ]
        with self._transaction() as conn:
            cursor = conn.execute(
                f"UPDATE repositories SET {assignments} WHERE id = ?",
                (*values, repo.id),
            )
            if cursor.rowcount == 0:
                raise NotFoundError(f"Repository not found: {repo.id}")

    def delete(self, repo_id: str) -> None:
        with self._transaction() as conn:
            cursor = conn.execute("DELETE FROM repositories WHERE id = ?", (repo_id,))
            if cursor.rowcount == 0:
                raise NotFoundError(f"Repository not found: {repo_id}")

    def get(self, repo_id: str) -> Repository | None:
        return self._fetch_one(f"{_SELECT} WHERE id = ?", (repo_id,))

    def find_by_full_name(self, full_name: str) -> Repository | None:
        return self._fetch_one(f"{_SELECT} WHERE full_name = ?", (full_name,))

    def find_all(self) -> list[Repository]:
        return self._fetch_all(f"{_SELECT} ORDER BY full_name ASC", ())

    def find_by_status(self, status: CloneStatus) -> list[Repository]:
        return self._fetch_all(
            f"{_SELECT} WHERE status = ? ORDER BY full_name ASC", (status.value,)
        )

    def find_by_provider(self, provider: Provider) -> list[Repository]:
        return self._fetch_all(
            f"{_SELECT} WHERE provider = ? ORDER BY full_name ASC", (provider.value,)
        )

    def find_by_owner(self, owner: str) -> list[Repository]:
        return self._fetch_all(
            f"{_SELECT} WHERE owner = ? ORDER BY full_name ASC", (owner,)
        )

    def clear(self) -> None:
        with self._transaction() as conn:
            conn.execute("DELETE FROM repositories")

    def close(self) -> None:
        with self._lock:
            self.conn.close()

    def __enter__(self) -> "SQLiteRepositoryStore":
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    def _fetch_one(self, sql: str, params: tuple[Any, ...]) -> Repository | None:
        with self._transaction() as conn:
            row = conn.execute(sql, params).fetchone()
        return _from_row(row) if row else None

    def _fetch_all(self, sql: str, params: tuple[Any, ...]) -> list[Repository]:
        with self._transaction() as conn:
            rows = conn.execute(sql, params).fetchall()
        return [_from_row(row) for row in rows]
