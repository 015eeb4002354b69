"""
Runtime configuration.

Tokens and paths are resolved once, here, and passed explicitly to the
providers, cloner and sync service. Nothing below this module reads the
process environment.
"""

import os
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any

from superclone.exceptions import ConfigurationError
from superclone.types.repos import Provider

DEFAULT_GITHUB_API_URL = "https://api.github.com"
DEFAULT_GITLAB_URL = "https://gitlab.com"

_TRUTHY = {"1", "true", "yes", "on"}


def _default_clone_path() -> Path:
    return Path.home() / "repositories"


def _default_database_path() -> Path:
    return Path.home() / ".superclone" / "repositories.db"


@dataclass(frozen=True)
class SuperCloneConfig:
    """Configuration shared by every superclone component."""

    github_token: str | None = None
    gitlab_token: str | None = None
    github_api_url: str = DEFAULT_GITHUB_API_URL
    gitlab_base_url: str = DEFAULT_GITLAB_URL
    clone_base_path: Path = field(default_factory=_default_clone_path)
    database_path: Path | str = field(default_factory=_default_database_path)
    use_ssh: bool = False
    max_workers: int = 4
    git_timeout: float | None = 600.0
    http_timeout: float = 30.0

    def __post_init__(self) -> None:
        if self.max_workers < 1:
            raise ConfigurationError("max_workers must be at least 1")
        if self.git_timeout is not None and self.git_timeout <= 0:
            raise ConfigurationError("git_timeout must be positive")

    @classmethod
    def from_env(cls, **overrides: Any) -> "SuperCloneConfig":
        """
        Create a configuration from environment variables.

        Environment variables:
            GITHUB_TOKEN: GitHub access token (optional)
            GITLAB_TOKEN: GitLab personal access token (optional)
            GITHUB_API_URL: GitHub API root (optional, default: https://api.github.com)
            GITLAB_URL: GitLab instance URL (optional, default: https://gitlab.com)
            SUPERCLONE_CLONE_PATH: Base directory for clones (optional, default: ~/repositories)
            SUPERCLONE_DATABASE: SQLite database file (optional, default: ~/.superclone/repositories.db)
            SUPERCLONE_USE_SSH: Clone over SSH when truthy (optional)
            SUPERCLONE_MAX_WORKERS: Concurrent clone/pull limit (optional, default: 4)
            SUPERCLONE_GIT_TIMEOUT: Per clone/pull deadline in seconds (optional, default: 600)

        Args:
            **overrides: Explicit values (e.g. from command line flags). ``None``
                values are ignored so unset flags fall back to the environment.

        Returns:
            Configured SuperCloneConfig instance

        Raises:
            ConfigurationError: If a numeric variable cannot be parsed
        """
        env = os.environ
        values: dict[str, Any] = {
            "github_token": env.get("GITHUB_TOKEN") or None,
            "gitlab_token": env.get("GITLAB_TOKEN") or None,
            "github_api_url": env.get("GITHUB_API_URL", DEFAULT_GITHUB_API_URL),
            "gitlab_base_url": env.get("GITLAB_URL", DEFAULT_GITLAB_URL),
            "use_ssh": env.get("SUPERCLONE_USE_SSH", "").lower() in _TRUTHY,
        }

        clone_path = env.get("SUPERCLONE_CLONE_PATH")
        if clone_path:
            values["clone_base_path"] = Path(clone_path).expanduser()

        database = env.get("SUPERCLONE_DATABASE")
        if database:
            values["database_path"] = database

        workers = env.get("SUPERCLONE_MAX_WORKERS")
        if workers:
            values["max_workers"] = _parse_number(
                "SUPERCLONE_MAX_WORKERS", workers, int
            )

        timeout = env.get("SUPERCLONE_GIT_TIMEOUT")
        if timeout:
            values["git_timeout"] = _parse_number(
                "SUPERCLONE_GIT_TIMEOUT", timeout, float
            )

        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)

    def with_overrides(self, **overrides: Any) -> "SuperCloneConfig":
        return replace(self, **{k: v for k, v in overrides.items() if v is not None})

    def token_for(self, provider: Provider) -> str | None:
        if provider == Provider.GITHUB:
            return self.github_token
        return self.gitlab_token

    def require_token(self, provider: Provider) -> str:
        """Return the provider's token or raise ConfigurationError."""
        token = self.token_for(provider)
        if not token:
            env_var = "GITHUB_TOKEN" if provider == Provider.GITHUB else "GITLAB_TOKEN"
            raise ConfigurationError(
                f"{provider.value} token is required for this command. "
                f"Set {env_var} or use --{provider.value}-token."
            )
        return token

    @property
    def tokens(self) -> dict[Provider, str | None]:
        return {
            Provider.GITHUB: self.github_token,
            Provider.GITLAB: self.gitlab_token,
        }


def _parse_number(name: str, raw: str, kind: type) -> Any:
    try:
        return kind(raw)
    except ValueError:
        raise ConfigurationError(f"Invalid {name}: {raw!r}") from None
