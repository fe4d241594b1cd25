"""File comparison logic for sync operations."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union

from .modes import SyncDirection
from .scanner import LocalFile, RemoteFile


class SyncAction(str, Enum):
    """Actions that can be taken during sync."""

    UPLOAD = "upload"
    """Upload local file to remote"""

    DOWNLOAD = "download"
    """Download remote file to local"""

    DELETE_LOCAL = "delete_local"
    """Delete local file"""

    DELETE_REMOTE = "delete_remote"
    """Delete remote file"""

    SKIP = "skip"
    """Skip file (no action needed)"""


@dataclass(frozen=True)
class SyncDecision:
    """Represents a decision about how to sync a file."""

    action: SyncAction
    """Action to take"""

    reason: str
    """Human-readable reason for this decision"""

    key: str
    """Sync key of the file (``/zone/relative/path``)"""

    local_file: Optional[LocalFile]
    """Local file (if exists)"""

    remote_file: Optional[RemoteFile]
    """Remote file (if exists)"""


def is_in_sync(
    source: Union[LocalFile, RemoteFile],
    destination: Union[LocalFile, RemoteFile],
) -> bool:
    """Check whether the destination copy can be left alone.

    Two copies are in sync when the destination is no older than the
    source and both have the same length. Content is never compared, so a
    newer destination of the same length is kept even if its bytes differ.
    """
    return (
        destination.modified_at >= source.modified_at
        and source.length == destination.length
    )


class FileComparator:
    """Compares local and remote files to determine sync actions."""

    def __init__(self, direction: SyncDirection, delete: bool = False):
        """Initialize file comparator.

        Args:
            direction: Which side is the source
            delete: Whether destination files missing at the source are deleted
        """
        self.direction = direction
        self.delete = delete

    def compare_files(
        self,
        local_files: dict[str, LocalFile],
        remote_files: dict[str, RemoteFile],
    ) -> list[SyncDecision]:
        """Compare local and remote files and determine sync actions.

        Transfers come first, then deletions. Keys are processed in sorted
        order so that plans are reproducible.

        Args:
            local_files: Dictionary mapping sync key to LocalFile
            remote_files: Dictionary mapping sync key to RemoteFile

        Returns:
            List of SyncDecision objects, one per key on either side
        """
        if self.direction == SyncDirection.PUSH:
            return self._compare_push(local_files, remote_files)
        return self._compare_pull(local_files, remote_files)

    def _compare_push(
        self,
        local_files: dict[str, LocalFile],
        remote_files: dict[str, RemoteFile],
    ) -> list[SyncDecision]:
        decisions: list[SyncDecision] = []

        for key in sorted(local_files):
            local_file = local_files[key]
            remote_file = remote_files.get(key)

            if remote_file is None:
                action, reason = SyncAction.UPLOAD, "New local file"
            elif is_in_sync(local_file, remote_file):
                action, reason = SyncAction.SKIP, "Remote copy is up to date"
            else:
                action, reason = SyncAction.UPLOAD, "Local file changed"
            decisions.append(
                SyncDecision(action, reason, key, local_file, remote_file)
            )

        for key in sorted(remote_files.keys() - local_files.keys()):
            decisions.append(
                self._handle_destination_only(key, None, remote_files[key])
            )

        return decisions

    def _compare_pull(
        self,
        local_files: dict[str, LocalFile],
        remote_files: dict[str, RemoteFile],
    ) -> list[SyncDecision]:
        decisions: list[SyncDecision] = []

        for key in sorted(remote_files):
            remote_file = remote_files[key]
            local_file = local_files.get(key)

            if local_file is None:
                action, reason = SyncAction.DOWNLOAD, "New remote file"
            elif is_in_sync(remote_file, local_file):
                action, reason = SyncAction.SKIP, "Local copy is up to date"
            else:
                action, reason = SyncAction.DOWNLOAD, "Remote file changed"
            decisions.append(
                SyncDecision(action, reason, key, local_file, remote_file)
            )

        for key in sorted(local_files.keys() - remote_files.keys()):
            decisions.append(
                self._handle_destination_only(key, local_files[key], None)
            )

        return decisions

    def _handle_destination_only(
        self,
        key: str,
        local_file: Optional[LocalFile],
        remote_file: Optional[RemoteFile],
    ) -> SyncDecision:
        """Handle a file that exists only at the destination."""
        if not self.delete:
            return SyncDecision(
                action=SyncAction.SKIP,
                reason="Not present at source (delete disabled)",
                key=key,
                local_file=local_file,
                remote_file=remote_file,
            )

        if self.direction == SyncDirection.PUSH:
            action = SyncAction.DELETE_REMOTE
            reason = "File deleted locally"
        else:
            action = SyncAction.DELETE_LOCAL
            reason = "File deleted from storage zone"

        return SyncDecision(
            action=action,
            reason=reason,
            key=key,
            local_file=local_file,
            remote_file=remote_file,
        )
