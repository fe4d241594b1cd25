"""Data models for storage API responses."""

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Optional

from .exceptions import BunnyInvalidResponseError
from .utils import parse_storage_timestamp


@dataclass(frozen=True)
class StorageObject:
    """A single object or pseudo-directory returned by a storage listing.

    Field names follow the JSON record of the storage API, for example::

        {"Guid": "33ea1f9b-...", "StorageZoneName": "my-storage-zone",
         "Path": "/my-storage-zone/", "ObjectName": "404.html",
         "Length": 11720, "LastChanged": "2025-02-03T21:26:21.866",
         "IsDirectory": false, "DateCreated": "2025-02-03T21:26:21.866", ...}
    """

    guid: str
    """Unique identifier of the object"""

    storage_zone_name: str
    """Name of the storage zone the object lives in"""

    path: str
    """Pseudo-directory containing the object, e.g. ``/zone/sub/``"""

    object_name: str
    """Leaf name of the object"""

    length: int
    """Size in bytes (0 for directories)"""

    last_changed: datetime
    """Last modification time (UTC)"""

    is_directory: bool
    """Whether this entry is a pseudo-directory"""

    date_created: Optional[datetime] = None
    """Creation time (UTC) if reported"""

    @classmethod
    def from_api_response(cls, data: dict[str, Any]) -> "StorageObject":
        """Create a StorageObject from one JSON record.

        Unknown keys (``ServerId``, ``Checksum``, ``ReplicatedZones``...) are
        ignored.

        Raises:
            BunnyInvalidResponseError: If a required key is missing or invalid
        """
        try:
            last_changed = parse_storage_timestamp(data["LastChanged"])
            if last_changed is None:
                raise ValueError("LastChanged is empty")
            return cls(
                guid=data.get("Guid") or "",
                storage_zone_name=data["StorageZoneName"],
                path=data["Path"],
                object_name=data["ObjectName"],
                length=int(data.get("Length") or 0),
                last_changed=last_changed,
                is_directory=bool(data["IsDirectory"]),
                date_created=parse_storage_timestamp(data.get("DateCreated")),
            )
        except (KeyError, TypeError, ValueError) as e:
            raise BunnyInvalidResponseError(
                f"Invalid storage object record: {e}"
            ) from e

    @property
    def full_path(self) -> str:
        """Path of the object within the storage namespace."""
        return f"{self.path}{self.object_name}"


def parse_listing(payload: Any) -> list[StorageObject]:
    """Parse a directory listing response body.

    Args:
        payload: Decoded JSON body of a listing request

    Returns:
        List of StorageObject instances

    Raises:
        BunnyInvalidResponseError: If the payload is not a list of records
    """
    if not isinstance(payload, list):
        raise BunnyInvalidResponseError(
            f"Expected a JSON array from listing, got {type(payload).__name__}"
        )
    return [StorageObject.from_api_response(record) for record in payload]
