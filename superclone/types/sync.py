"""Discovery scopes and sync result models."""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from superclone.exceptions import ConfigurationError
from superclone.types.repos import Provider


class ScopeKind(str, Enum):
    USER = "user"
    ORG = "org"
    SELF = "self"
    ALL_ORGS = "all_orgs"


@dataclass(frozen=True)
class DiscoveryScope:
    """What to discover: a user, an organization/group, yourself, or all your orgs."""

    provider: Provider
    kind: ScopeKind
    name: str | None = None

    def __post_init__(self) -> None:
        if self.kind in (ScopeKind.USER, ScopeKind.ORG) and not self.name:
            raise ConfigurationError(f"A name is required for a {self.kind.value} scope")

    @classmethod
    def user(cls, provider: Provider, name: str) -> "DiscoveryScope":
        return cls(provider, ScopeKind.USER, name)

    @classmethod
    def org(cls, provider: Provider, name: str) -> "DiscoveryScope":
        return cls(provider, ScopeKind.ORG, name)

    @classmethod
    def self_(cls, provider: Provider) -> "DiscoveryScope":
        return cls(provider, ScopeKind.SELF)

    @classmethod
    def all_orgs(cls, provider: Provider) -> "DiscoveryScope":
        return cls(provider, ScopeKind.ALL_ORGS)

    def describe(self) -> str:
        if self.name:
            return f"{self.provider.value} {self.kind.value} {self.name}"
        return f"{self.provider.value} {self.kind.value}"


class SyncAction(str, Enum):
    CLONE = "clone"
    PULL = "pull"


@dataclass
class RepoOutcome:
    """Result of one clone or pull attempt."""

    full_name: str
    action: SyncAction
    success: bool
    path: Path | None = None
    error: str | None = None
    error_kind: str | None = None  # SuperCloneError.code


@dataclass
class SyncSummary:
    """Ordered per-repository outcomes of a batch."""

    scope: DiscoveryScope | None = None
    discovered: int = 0
    created: int = 0
    outcomes: list[RepoOutcome] = field(default_factory=list)

    @property
    def succeeded(self) -> list[RepoOutcome]:
        return [o for o in self.outcomes if o.success]

    @property
    def failed(self) -> list[RepoOutcome]:
        return [o for o in self.outcomes if not o.success]

    @property
    def ok(self) -> bool:
        return not self.failed
