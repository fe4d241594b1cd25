"""Utility functions for pybunnysync."""

import re
from datetime import datetime, timezone
from typing import Optional

# =============================================================================
# Constants
# =============================================================================

ZONE_SCHEME: str = "zone://"

PROJECT_CONFIG_FILE: str = ".bunnysync"

DEFAULT_REGION: str = "de"

# Request timeout for storage API calls (seconds)
DEFAULT_TIMEOUT: float = 60.0

_FRACTION_RE = re.compile(r"\.(\d+)")


# =============================================================================
# Timestamp utilities
# =============================================================================


def parse_storage_timestamp(timestamp_str: Optional[str]) -> Optional[datetime]:
    """Parse a timestamp from the storage API.

    The storage API returns naive ISO timestamps such as
    ``2025-02-03T21:26:21.866``. They carry no timezone and are UTC.

    Args:
        timestamp_str: Timestamp string from an API record

    Returns:
        Timezone-aware datetime in UTC, or None if the string is empty

    Raises:
        ValueError: If the string is not an ISO timestamp
    """
    if not timestamp_str:
        return None

    if timestamp_str.endswith("Z"):
        timestamp_str = timestamp_str[:-1]

    # Normalize the fraction to microseconds for fromisoformat()
    match = _FRACTION_RE.search(timestamp_str)
    if match:
        fraction = match.group(1)[:6].ljust(6, "0")
        timestamp_str = (
            f"{timestamp_str[: match.start()]}.{fraction}"
            f"{timestamp_str[match.end() :]}"
        )

    dt = datetime.fromisoformat(timestamp_str)
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def timestamp_to_utc(timestamp: float) -> datetime:
    """Convert a Unix timestamp (e.g. ``st_mtime``) to an aware UTC datetime."""
    return datetime.fromtimestamp(timestamp, tz=timezone.utc)


# =============================================================================
# Size formatting utilities
# =============================================================================


def format_size(size_bytes: int) -> str:
    """Format file size in human-readable format.

    Args:
        size_bytes: Size in bytes

    Returns:
        Human-readable size string (e.g., "1.5 MB")
    """
    if size_bytes < 1024:
        return f"{size_bytes} B"
    elif size_bytes < 1024 * 1024:
        return f"{size_bytes / 1024:.1f} KB"
    elif size_bytes < 1024 * 1024 * 1024:
        return f"{size_bytes / (1024 * 1024):.1f} MB"
    else:
        return f"{size_bytes / (1024 * 1024 * 1024):.1f} GB"
