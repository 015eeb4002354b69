"""GitHub provider client."""

from typing import Any
from urllib.parse import quote

from superclone.exceptions import AuthenticationRequiredError, ResponseParseError
from superclone.providers.pagination import USER_AGENT, fetch_all_pages
from superclone.transport import HTTPTransport, RetryConfig
from superclone.types.repos import Provider, Repository


def _parse_repository(data: dict[str, Any]) -> Repository:
    return Repository.new(
        name=data["name"],
        full_name=data["full_name"],
        owner=data["owner"]["login"],
        provider=Provider.GITHUB,
        clone_url_https=data["clone_url"],
        clone_url_ssh=data["ssh_url"],
        description=data.get("description"),
        is_private=bool(data["private"]),
    )


def _parse_org(data: dict[str, Any]) -> str:
    return data["login"]


class GitHubClient:
    """Client for GitHub repository discovery."""

    DEFAULT_API_URL = "https://api.github.com"

    def __init__(
        self,
        token: str | None = None,
        api_url: str = DEFAULT_API_URL,
        timeout: float = 30.0,
        retry_config: RetryConfig | None = None,
    ) -> None:
        """
        Initialize the GitHub client.

        Args:
            token: Personal access token; public data is reachable without one
            api_url: API root, for GitHub Enterprise (default: https://api.github.com)
            timeout: Request timeout in seconds
            retry_config: Configuration for retry behavior (optional)
        """
        self.token = token
        headers = {
            "User-Agent": USER_AGENT,
            "Accept": "application/vnd.github+json",
        }
        if token:
            headers["Authorization"] = f"Bearer {token}"

        self.transport = HTTPTransport(
            base_url=api_url,
            headers=headers,
            timeout=timeout,
            retry_config=retry_config,
        )

    @property
    def provider(self) -> Provider:
        return Provider.GITHUB

    def discover_user_repos(self, username: str) -> list[Repository]:
        """
        List every repository of a user.

        Args:
            username: GitHub login

        Returns:
            All repositories visible to the caller

        Raises:
            DiscoveryError: On API errors
        """
        return fetch_all_pages(
            self.transport, f"/users/{quote(username, safe='')}/repos", _parse_repository
        )

    def discover_org_repos(self, org: str) -> list[Repository]:
        """
        List every repository of an organization.

        Args:
            org: Organization login

        Returns:
            All repositories visible to the caller

        Raises:
            DiscoveryError: On API errors
        """
        return fetch_all_pages(
            self.transport, f"/orgs/{quote(org, safe='')}/repos", _parse_repository
        )

    def get_authenticated_user(self) -> str:
        """
        Resolve the login the token belongs to.

        Raises:
            AuthenticationRequiredError: If no token is configured
            DiscoveryError: On API errors
        """
        self._require_token()
        data = self.transport.get_json("/user")
        if not isinstance(data, dict) or "login" not in data:
            raise ResponseParseError("GitHub /user response has no login")
        return data["login"]

    def list_accessible_organizations(self) -> list[str]:
        """
        List the organizations the token's user belongs to.

        Raises:
            AuthenticationRequiredError: If no token is configured
            DiscoveryError: On API errors
        """
        self._require_token()
        return fetch_all_pages(self.transport, "/user/orgs", _parse_org)

    def close(self) -> None:
        self.transport.close()

    def _require_token(self) -> None:
        if not self.token:
            raise AuthenticationRequiredError(Provider.GITHUB.value)
