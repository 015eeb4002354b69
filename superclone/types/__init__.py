"""superclone type definitions."""

from superclone.types.repos import CloneStatus, Provider, Repository
from superclone.types.sync import (
    DiscoveryScope,
    RepoOutcome,
    ScopeKind,
    SyncAction,
    SyncSummary,
)

__all__ = [
    # Records
    "Provider",
    "CloneStatus",
    "Repository",
    # Sync
    "DiscoveryScope",
    "ScopeKind",
    "SyncAction",
    "RepoOutcome",
    "SyncSummary",
]
