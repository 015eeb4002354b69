"""Repository record and status models."""

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

from superclone.exceptions import ConfigurationError


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Provider(str, Enum):
    """Hosted platform a repository was discovered on."""

    GITHUB = "github"
    GITLAB = "gitlab"

    @classmethod
    def parse(cls, value: "str | Provider") -> "Provider":
        """Parse a provider name case-insensitively."""
        if isinstance(value, Provider):
            return value
        try:
            return cls(value.strip().lower())
        except ValueError:
            raise ConfigurationError(
                f"Invalid provider: {value}. Must be 'github' or 'gitlab'"
            ) from None

    def __str__(self) -> str:
        return self.value


class CloneStatus(str, Enum):
    """Local sync state of a repository.

    CLONING, UPDATE_AVAILABLE and UPDATING are reserved values kept for
    compatibility with existing databases; the pipeline never writes them.
    """

    NOT_CLONED = "not_cloned"
    CLONING = "cloning"
    CLONED = "cloned"
    UPDATE_AVAILABLE = "update_available"
    UPDATING = "updating"
    ERROR = "error"

    def __str__(self) -> str:
        return self.value


@dataclass
class Repository:
    """A discovered remote repository and its local sync state."""

    id: str
    name: str
    full_name: str
    owner: str
    provider: Provider
    clone_url_https: str
    clone_url_ssh: str
    description: str | None
    is_private: bool
    local_path: str | None = None
    status: CloneStatus = CloneStatus.NOT_CLONED
    last_pulled_at: datetime | None = None
    created_at: datetime = field(default_factory=utcnow)
    updated_at: datetime = field(default_factory=utcnow)

    @classmethod
    def new(
        cls,
        name: str,
        full_name: str,
        owner: str,
        provider: Provider,
        clone_url_https: str,
        clone_url_ssh: str,
        description: str | None = None,
        is_private: bool = False,
    ) -> "Repository":
        """Create a fresh, not yet cloned record with a new id."""
        now = utcnow()
        return cls(
            id=str(uuid.uuid4()),
            name=name,
            full_name=full_name,
            owner=owner,
            provider=provider,
            clone_url_https=clone_url_https,
            clone_url_ssh=clone_url_ssh,
            description=description,
            is_private=is_private,
            created_at=now,
            updated_at=now,
        )

    def touch(self) -> None:
        self.updated_at = utcnow()

    def update_status(self, status: CloneStatus) -> None:
        self.status = status
        self.touch()

    def set_local_path(self, path: str) -> None:
        self.local_path = path
        self.touch()

    def mark_pulled(self) -> None:
        self.last_pulled_at = utcnow()
        self.touch()

    def record_clone_success(self, path: str) -> None:
        """NotCloned/Error -> Cloned, with the working copy location."""
        self.set_local_path(path)
        self.update_status(CloneStatus.CLONED)

    def record_clone_failure(self) -> None:
        """Any failed clone attempt ends in Error; local_path is kept."""
        self.update_status(CloneStatus.ERROR)

    @property
    def is_cloned(self) -> bool:
        return self.status == CloneStatus.CLONED
