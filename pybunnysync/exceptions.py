"""Exceptions raised by pybunnysync."""

from typing import Optional


class BunnySyncError(Exception):
    """Base exception for all pybunnysync errors."""


class BunnyConfigError(BunnySyncError):
    """Raised when the configuration is missing or malformed."""


class BunnyFilesystemError(BunnySyncError):
    """Raised when a local path is missing or cannot be read or written."""


class BunnyAPIError(BunnySyncError):
    """Raised when the storage API returns an unexpected response.

    Args:
        message: Human-readable error message
        status_code: HTTP status code of the failed request, if any
    """

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class BunnyAuthenticationError(BunnyAPIError):
    """Raised on HTTP 401 (invalid or missing access key)."""


class BunnyPermissionError(BunnyAPIError):
    """Raised on HTTP 403."""


class BunnyNotFoundError(BunnyAPIError):
    """Raised on HTTP 404."""


class BunnyNetworkError(BunnyAPIError):
    """Raised when the request could not be sent or the connection failed."""


class BunnyInvalidResponseError(BunnyAPIError):
    """Raised when a listing response is not the expected JSON."""
