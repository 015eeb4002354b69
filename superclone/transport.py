"""
HTTP transport for provider APIs.

Handles HTTP communication with optional retry logic, header-based
authentication and error handling.
"""

import random
import time
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

import httpx

from superclone.exceptions import (
    AuthenticationError,
    DiscoveryError,
    RateLimitedError,
    RemoteNotFoundError,
    ResponseParseError,
    ServerError,
)
from superclone.logging import log_http_request, log_http_response

# Response bodies are attached to errors; keep them readable.
_MAX_ERROR_BODY = 2000


@dataclass
class RetryConfig:
    """Configuration for automatic retry behavior.

    Retries are off by default; set ``max_retries`` to opt in.
    """

    max_retries: int = 0
    backoff_factor: float = 2.0
    retry_on: list[int] = field(default_factory=lambda: [429, 500, 502, 503])
    respect_retry_after: bool = True
    max_backoff: float = 60.0  # Maximum backoff time in seconds
    jitter: float = 0.1  # Jitter factor (0.1 = ±10%)


class HTTPTransport:
    """
    HTTP transport layer shared by the provider clients.

    Handles:
    - Default headers (user agent, accept, credential) on every request
    - Optional exponential backoff with jitter for retries
    - Retry-After header respect for rate limiting
    - Error response parsing into typed exceptions
    """

    def __init__(
        self,
        base_url: str,
        headers: dict[str, str] | None = None,
        timeout: float = 30.0,
        retry_config: RetryConfig | None = None,
    ) -> None:
        """
        Initialize HTTP transport.

        Args:
            base_url: Base URL for API requests (e.g., "https://api.github.com")
            headers: Headers attached to every request, credentials included
            timeout: Request timeout in seconds
            retry_config: Configuration for retry behavior
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.retry_config = retry_config or RetryConfig()
        self.headers = dict(headers or {})

        self._client = httpx.Client(
            base_url=self.base_url,
            timeout=timeout,
            headers=self.headers,
        )

    def close(self) -> None:
        """Close the HTTP client."""
        self._client.close()

    def __enter__(self) -> "HTTPTransport":
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    def get_json(self, path: str, params: dict[str, Any] | None = None) -> Any:
        """
        Make a GET request and decode the JSON payload.

        Args:
            path: API path (e.g., "/users/octocat/repos")
            params: Query parameters

        Returns:
            Decoded JSON value (usually a list or a dict)

        Raises:
            DiscoveryError: On API errors
            ResponseParseError: If the body is not JSON
        """
        def make_request() -> httpx.Response:
            log_http_request("GET", f"{self.base_url}{path}", self.headers, params)
            return self._client.request("GET", path, params=params)

        response = self._execute_with_retry(make_request)

        try:
            data = response.json()
        except ValueError as e:
            raise ResponseParseError(
                f"Failed to parse response from {path}: {e}",
                body=_truncate(response.text),
            ) from e

        log_http_response(
            response.status_code,
            f"{self.base_url}{path}",
            item_count=len(data) if isinstance(data, list) else None,
        )
        return data

    def _execute_with_retry(
        self, request_fn: Callable[[], httpx.Response]
    ) -> httpx.Response:
        """
        Execute a request, retrying retryable failures per ``retry_config``.

        Args:
            request_fn: Function that makes the HTTP request

        Returns:
            The successful response

        Raises:
            DiscoveryError: On non-retryable errors or after max retries
        """
        last_error: DiscoveryError | None = None

        for attempt in range(self.retry_config.max_retries + 1):
            try:
                response = request_fn()
            except httpx.RequestError as e:
                last_error = DiscoveryError("CONNECTION_ERROR", str(e))
                if attempt >= self.retry_config.max_retries:
                    raise last_error from e
                time.sleep(self._get_backoff_time(attempt, None))
                continue

            if response.status_code < 400:
                return response

            error = self._parse_error_response(response)

            if not self._should_retry(response.status_code, attempt):
                raise error

            last_error = error
            retry_after = response.headers.get("Retry-After")
            time.sleep(self._get_backoff_time(attempt, retry_after))

        if last_error:
            raise last_error

        raise DiscoveryError("UNKNOWN_ERROR", "Request failed with no error details")

    def _should_retry(self, status_code: int, attempt: int) -> bool:
        """
        Determine if a request should be retried.

        Args:
            status_code: HTTP status code
            attempt: Current attempt number (0-indexed)

        Returns:
            True if the request should be retried
        """
        if attempt >= self.retry_config.max_retries:
            return False

        return status_code in self.retry_config.retry_on

    def _get_backoff_time(
        self, attempt: int, retry_after: str | None
    ) -> float:
        """
        Calculate backoff time for retry.

        Uses exponential backoff with jitter, respecting Retry-After header
        if present.

        Args:
            attempt: Current attempt number (0-indexed)
            retry_after: Value of Retry-After header (if present)

        Returns:
            Time to wait in seconds
        """
        if retry_after and self.retry_config.respect_retry_after:
            try:
                return min(float(retry_after), self.retry_config.max_backoff)
            except ValueError:
                pass  # Fall through to exponential backoff

        base_wait = self.retry_config.backoff_factor ** attempt

        jitter_range = base_wait * self.retry_config.jitter
        jitter = random.uniform(-jitter_range, jitter_range)
        wait_time = base_wait + jitter

        return min(wait_time, self.retry_config.max_backoff)

    def _parse_error_response(self, response: httpx.Response) -> DiscoveryError:
        """
        Parse an error response into a typed exception.

        The status code and (truncated) body are always preserved.

        Args:
            response: HTTP response with error status

        Returns:
            Appropriate DiscoveryError subclass
        """
        status_code = response.status_code
        body = _truncate(response.text)
        message = f"API error: {status_code} - {body}"

        if status_code in (401, 403):
            return AuthenticationError("AUTHENTICATION_FAILED", message, status_code, body)
        elif status_code == 404:
            return RemoteNotFoundError("REMOTE_NOT_FOUND", message, status_code, body)
        elif status_code == 429:
            retry_after_str = response.headers.get("Retry-After", "60")
            try:
                retry_after = int(retry_after_str)
            except ValueError:
                retry_after = 60
            return RateLimitedError("RATE_LIMITED", message, retry_after, status_code, body)
        elif status_code >= 500:
            return ServerError("SERVER_ERROR", message, status_code, body)
        else:
            return DiscoveryError("HTTP_ERROR", message, status_code, body)


def _truncate(text: str) -> str:
    if len(text) <= _MAX_ERROR_BODY:
        return text
    return text[:_MAX_ERROR_BODY] + "..."
