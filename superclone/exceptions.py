"""superclone exception classes."""

from pathlib import Path


class SuperCloneError(Exception):
    """Base exception for all superclone errors."""

    def __init__(self, code: str, message: str) -> None:
        self.code = code
        self.message = message
        super().__init__(f"[{code}] {message}")


class ConfigurationError(SuperCloneError):
    """Raised when configuration is invalid or missing."""

    def __init__(self, message: str) -> None:
        super().__init__("CONFIGURATION_ERROR", message)


class DiscoveryError(SuperCloneError):
    """Raised when a provider API call fails."""

    def __init__(
        self,
        code: str,
        message: str,
        status_code: int | None = None,
        body: str | None = None,
    ) -> None:
        super().__init__(code, message)
        self.status_code = status_code
        self.body = body


class AuthenticationError(DiscoveryError):
    """Raised when the provider rejects the credential (401/403)."""

    pass


class AuthenticationRequiredError(DiscoveryError):
    """Raised when an operation needs a token and none is configured."""

    def __init__(self, provider: str) -> None:
        super().__init__(
            "AUTHENTICATION_REQUIRED",
            f"A {provider} token is required for this operation",
        )
        self.provider = provider


class RemoteNotFoundError(DiscoveryError):
    """Raised when the user, organization or group does not exist (404)."""

    pass


class RateLimitedError(DiscoveryError):
    """Raised when rate limited."""

    def __init__(
        self,
        code: str,
        message: str,
        retry_after: int,
        status_code: int | None = 429,
        body: str | None = None,
    ) -> None:
        super().__init__(code, message, status_code, body)
        self.retry_after = retry_after


class ServerError(DiscoveryError):
    """Raised on server errors (5xx)."""

    pass


class ResponseParseError(DiscoveryError):
    """Raised when a provider response is not the expected JSON shape."""

    def __init__(self, message: str, body: str | None = None) -> None:
        super().__init__("PARSE_ERROR", message, body=body)


class PersistenceError(SuperCloneError):
    """Raised when the repository store fails. Aborts the current batch."""

    def __init__(self, message: str) -> None:
        super().__init__("PERSISTENCE_ERROR", message)


class PathConflictError(SuperCloneError):
    """Raised when a clone destination exists but is not a git working copy."""

    def __init__(self, path: Path) -> None:
        super().__init__(
            "PATH_CONFLICT",
            f"Directory exists but is not a git repository: {path}",
        )
        self.path = path


class ExecutionError(SuperCloneError):
    """Raised when the git binary fails."""

    def __init__(
        self,
        message: str,
        exit_code: int | None = None,
        stderr: str = "",
        code: str = "EXECUTION_ERROR",
    ) -> None:
        super().__init__(code, message)
        self.exit_code = exit_code
        self.stderr = stderr


class GitNotInstalledError(ExecutionError):
    """Raised when git cannot be found on PATH."""

    def __init__(self, git_binary: str = "git") -> None:
        super().__init__(
            f"Git is not installed or not in PATH ({git_binary})",
            code="GIT_NOT_INSTALLED",
        )


class GitTimeoutError(ExecutionError):
    """Raised when a clone or pull exceeds its deadline."""

    def __init__(self, operation: str, timeout: float) -> None:
        super().__init__(
            f"git {operation} timed out after {timeout:g}s",
            code="TIMEOUT",
        )
        self.timeout = timeout


class NotFoundError(SuperCloneError):
    """Raised when a requested repository record or path is absent."""

    def __init__(self, message: str) -> None:
        super().__init__("NOT_FOUND", message)
