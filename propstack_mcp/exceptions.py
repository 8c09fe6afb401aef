"""Exception hierarchy for the PropStack MCP server."""

from typing import Optional


class PropStackError(Exception):
    """Base exception for all PropStack errors."""


class ConfigurationError(PropStackError):
    """Raised when required configuration (the API key) is missing."""


class SecurityError(PropStackError):
    """Raised when the upstream base URL is not HTTPS."""


class ApiError(PropStackError):
    """Raised when the upstream API answers with a non-2xx status or cannot be reached."""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        reason: Optional[str] = None,
    ):
        super().__init__(message)
        self.status_code = status_code
        self.reason = reason

    @classmethod
    def from_status(cls, status_code: int, reason: str) -> "ApiError":
        return cls(
            f"PropStack API error: {status_code} {reason}",
            status_code=status_code,
            reason=reason,
        )


class NotFoundError(PropStackError):
    """Raised when a lookup by unit_id returns no records."""


class UnexpectedFormatError(PropStackError):
    """Raised when the upstream response has neither known shape."""
