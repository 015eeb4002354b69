"""GitLab provider client."""

from typing import Any
from urllib.parse import quote

from superclone.exceptions import AuthenticationRequiredError, ResponseParseError
from superclone.providers.pagination import USER_AGENT, fetch_all_pages
from superclone.transport import HTTPTransport, RetryConfig
from superclone.types.repos import Provider, Repository

# Guest and above: every group the user can see projects in.
MIN_ACCESS_LEVEL = 10


def _parse_project(data: dict[str, Any]) -> Repository:
    # Only "public" is public; "internal" needs credentials like "private".
    return Repository.new(
        name=data["name"],
        full_name=data["path_with_namespace"],
        owner=data["namespace"]["path"],
        provider=Provider.GITLAB,
        clone_url_https=data["http_url_to_repo"],
        clone_url_ssh=data["ssh_url_to_repo"],
        description=data.get("description"),
        is_private=data["visibility"] != "public",
    )


def _parse_group(data: dict[str, Any]) -> str:
    return data["full_path"]


class GitLabClient:
    """Client for GitLab project discovery."""

    DEFAULT_BASE_URL = "https://gitlab.com"

    def __init__(
        self,
        token: str | None = None,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = 30.0,
        retry_config: RetryConfig | None = None,
    ) -> None:
        """
        Initialize the GitLab client.

        Args:
            token: Personal access token, sent as ``Private-Token``
            base_url: Instance URL, for self-managed GitLab (default: https://gitlab.com)
            timeout: Request timeout in seconds
            retry_config: Configuration for retry behavior (optional)
        """
        self.token = token
        headers = {"User-Agent": USER_AGENT}
        if token:
            headers["Private-Token"] = token

        self.transport = HTTPTransport(
            base_url=f"{base_url.rstrip('/')}/api/v4",
            headers=headers,
            timeout=timeout,
            retry_config=retry_config,
        )

    @property
    def provider(self) -> Provider:
        return Provider.GITLAB

    def discover_user_repos(self, username: str) -> list[Repository]:
        """List every project of a user."""
        return fetch_all_pages(
            self.transport, f"/users/{quote(username, safe='')}/projects", _parse_project
        )

    def discover_org_repos(self, group: str) -> list[Repository]:
        """List every project of a group. Nested groups use their full path."""
        return fetch_all_pages(
            self.transport, f"/groups/{quote(group, safe='')}/projects", _parse_project
        )

    def get_authenticated_user(self) -> str:
        self._require_token()
        data = self.transport.get_json("/user")
        if not isinstance(data, dict) or "username" not in data:
            raise ResponseParseError("GitLab /user response has no username")
        return data["username"]

    def list_accessible_organizations(self) -> list[str]:
        self._require_token()
        return fetch_all_pages(
            self.transport,
            "/groups",
            _parse_group,
            params={"min_access_level": MIN_ACCESS_LEVEL},
        )

    def close(self) -> None:
        self.transport.close()

    def _require_token(self) -> None:
        if not self.token:
            raise AuthenticationRequiredError(Provider.GITLAB.value)
