"""pybunnysync - sync a local directory with a bunny.net storage zone."""

__version__ = "0.1.0"

from .api import BunnyStorageClient  # noqa: E402
from .exceptions import (  # noqa: E402
    BunnyAPIError,
    BunnyAuthenticationError,
    BunnyConfigError,
    BunnyFilesystemError,
    BunnyInvalidResponseError,
    BunnyNetworkError,
    BunnyNotFoundError,
    BunnyPermissionError,
    BunnySyncError,
)
from .models import StorageObject  # noqa: E402

__all__ = [
    "__version__",
    "BunnyStorageClient",
    "BunnyAPIError",
    "BunnyAuthenticationError",
    "BunnyConfigError",
    "BunnyFilesystemError",
    "BunnyInvalidResponseError",
    "BunnyNetworkError",
    "BunnyNotFoundError",
    "BunnyPermissionError",
    "BunnySyncError",
    "StorageObject",
]
