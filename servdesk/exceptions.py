"""Custom exception hierarchy for servdesk.

Exception Hierarchy:
    ServdeskError (base)
    ├── ApiError - backend gateway calls
    │   ├── ApiConnectionError (retryable)
    │   ├── ApiRateLimitError (retryable)
    │   └── ApiAuthenticationError
    ├── ConfigurationError - Settings/configuration issues
    └── SessionError - Session file read/write

Usage:
    from servdesk.exceptions import ApiError

    try:
        page = await customers.search_customers("acme")
    except httpx.RequestError as e:
        raise ApiConnectionError("Customer search failed", service="customer") from e
"""

from typing import Any, Optional


class ServdeskError(Exception):
    """Base exception for all servdesk errors.

    Attributes:
        message: Human-readable error description
        context: Additional context about the error (e.g., status codes, paths)
        retryable: Whether this error might succeed on retry
    """

    def __init__(
        self,
        message: str,
        *,
        retryable: bool = False,
        **context: Any,
    ) -> None:
        self.message = message
        self.context = context
        self.retryable = retryable
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format the error message with context."""
        if self.context:
            context_str = ", ".join(f"{k}={v!r}" for k, v in self.context.items())
            return f"{self.message} ({context_str})"
        return self.message


# =============================================================================
# API Errors
# =============================================================================


class ApiError(ServdeskError):
    """A backend service answered with an error."""

    def __init__(
        self,
        message: str = "API request failed",
        *,
        service: Optional[str] = None,
        status_code: Optional[int] = None,
        retryable: bool = False,
        **context: Any,
    ) -> None:
        if service:
            context["service"] = service
        if status_code is not None:
            context["status_code"] = status_code
        self.status_code = status_code
        super().__init__(message, retryable=retryable, **context)


class ApiConnectionError(ApiError):
    """Could not reach the gateway - typically retryable."""

    def __init__(
        self,
        message: str = "API connection failed",
        *,
        service: Optional[str] = None,
        **context: Any,
    ) -> None:
        super().__init__(message, service=service, retryable=True, **context)


class ApiRateLimitError(ApiError):
    """Hit the gateway rate limit - retryable with backoff."""

    def __init__(
        self,
        message: str = "API rate limit exceeded",
        *,
        service: Optional[str] = None,
        retry_after: Optional[float] = None,
        **context: Any,
    ) -> None:
        if retry_after is not None:
            context["retry_after"] = retry_after
        super().__init__(message, service=service, status_code=429, retryable=True, **context)


class ApiAuthenticationError(ApiError):
    """The access token was missing, expired or rejected."""

    def __init__(
        self,
        message: str = "API authentication failed",
        *,
        service: Optional[str] = None,
        **context: Any,
    ) -> None:
        super().__init__(message, service=service, status_code=401, **context)


# =============================================================================
# Configuration Errors
# =============================================================================


class ConfigurationError(ServdeskError):
    """Configuration or settings error."""

    def __init__(
        self,
        message: str = "Configuration error",
        *,
        setting: Optional[str] = None,
        **context: Any,
    ) -> None:
        if setting:
            context["setting"] = setting
        super().__init__(message, **context)


# =============================================================================
# Session Errors
# =============================================================================


class SessionError(ServdeskError):
    """Reading or writing the local session failed."""

    def __init__(
        self,
        message: str = "Session error",
        *,
        path: Optional[str] = None,
        **context: Any,
    ) -> None:
        if path:
            context["path"] = path
        super().__init__(message, **context)
