"""LinkedIn API error classes.

Every failure surfaced by a remote call is represented by exactly one of
the ``LinkedInApiError`` family; ``ValidationError`` is reserved for shape
violations detected locally and is never produced by the remote service.
"""

from typing import Any, Optional


class LinkedInAdsError(Exception):
    """Base exception for all classified linkedin-ads-mcp errors."""

    def to_user_message(self) -> str:
        """Human-readable summary suitable for returning to an agent."""
        return str(self)


class LinkedInApiError(LinkedInAdsError):
    """Error returned by the LinkedIn REST API.

    Attributes:
        message: Message from the response body or transport
        status_code: HTTP status code of the failed response
        error_code: Service error code from the response body, if any
        details: Raw response body for debugging
    """

    def __init__(
        self,
        message: str,
        status_code: int,
        error_code: Optional[str] = None,
        details: Any = None,
    ):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.error_code = error_code
        self.details = details

    def to_user_message(self) -> str:
        if self.status_code == 401:
            return (
                "Authentication failed. Your access token may be expired or invalid. "
                "Please generate a new token."
            )
        if self.status_code == 403:
            return "Permission denied. Ensure your app has the required scopes (rw_ads, r_ads_reporting)."
        if self.status_code == 404:
            return f"Resource not found. {self.message}"
        if self.status_code == 429:
            return "Rate limit exceeded. Please wait before making more requests."
        return self.message


class AuthenticationError(LinkedInApiError):
    """Access token is missing, invalid, or expired (HTTP 401)."""

    def __init__(self, message: str, details: Any = None):
        super().__init__(message, 401, "AUTHENTICATION_ERROR", details)


class PermissionDeniedError(LinkedInApiError):
    """Access token lacks a required scope or role (HTTP 403)."""

    def __init__(self, message: str, details: Any = None):
        super().__init__(message, 403, "PERMISSION_ERROR", details)


class RateLimitError(LinkedInApiError):
    """Caller exceeded the allowed call rate (HTTP 429).

    Attributes:
        retry_after: Server-supplied delay in seconds before retrying, if sent.
    """

    def __init__(
        self,
        message: str,
        retry_after: Optional[int] = None,
        details: Any = None,
    ):
        super().__init__(message, 429, "RATE_LIMIT_ERROR", details)
        self.retry_after = retry_after


class ValidationError(LinkedInAdsError):
    """Input or response shape violation detected by this server."""

    def __init__(self, message: str, field: Optional[str] = None, details: Any = None):
        super().__init__(message)
        self.message = message
        self.field = field
        self.details = details

    def to_user_message(self) -> str:
        if self.field:
            return f"Invalid input for '{self.field}': {self.message}"
        return f"Invalid input: {self.message}"


class ConfigurationError(LinkedInAdsError):
    """Server configuration is missing or invalid."""
