"""Directory scanning utilities for sync operations."""

import logging
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import TYPE_CHECKING

from ..exceptions import BunnyFilesystemError
from ..models import StorageObject
from ..utils import timestamp_to_utc

if TYPE_CHECKING:
    from ..api import BunnyStorageClient

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LocalFile:
    """Represents a local file or directory with metadata."""

    path: Path
    """Absolute path to the file"""

    relative_path: str
    """Relative path (using forward slashes for cross-platform compatibility)"""

    is_directory: bool
    """Whether the entry is a directory"""

    modified_at: datetime
    """Last modification time (UTC)"""

    length: int
    """File size in bytes (0 for directories)"""

    @property
    def name(self) -> str:
        """Base name of the file."""
        return self.path.name

    @classmethod
    def from_path(cls, file_path: Path, base_path: Path) -> "LocalFile":
        """Create LocalFile from a path.

        Args:
            file_path: Absolute path to the file
            base_path: Base path for calculating relative paths

        Returns:
            LocalFile instance

        A dangling symlink is reported with the link's own metadata.

        Raises:
            OSError: If the path cannot be stat'ed
        """
        try:
            stat = file_path.stat()
        except FileNotFoundError:
            if not file_path.is_symlink():
                raise
            stat = file_path.lstat()
        is_directory = file_path.is_dir()
        return cls(
            path=file_path,
            # Use as_posix() to ensure forward slashes on all platforms
            relative_path=file_path.relative_to(base_path).as_posix(),
            is_directory=is_directory,
            modified_at=timestamp_to_utc(stat.st_mtime),
            length=0 if is_directory else stat.st_size,
        )


@dataclass(frozen=True)
class RemoteFile:
    """Represents a remote object or pseudo-directory with metadata."""

    entry: StorageObject
    """Storage object from the API listing"""

    @property
    def zone(self) -> str:
        """Storage zone name."""
        return self.entry.storage_zone_name

    @property
    def container_path(self) -> str:
        """Pseudo-directory containing the entry (ends with a slash)."""
        return self.entry.path

    @property
    def name(self) -> str:
        """Leaf name."""
        return self.entry.object_name

    @property
    def length(self) -> int:
        """File size in bytes."""
        return self.entry.length

    @property
    def modified_at(self) -> datetime:
        """Last modification time (UTC)."""
        return self.entry.last_changed

    @property
    def is_directory(self) -> bool:
        return self.entry.is_directory

    @property
    def key(self) -> str:
        """Unique path of the entry in the remote namespace."""
        return self.entry.full_path


class DirectoryScanner:
    """Builds file lists for the local tree and the remote zone.

    Both scans are complete: nothing is filtered here, exclusion patterns
    are applied later when the sync maps are built.

    Examples:
        >>> scanner = DirectoryScanner()
        >>> local_files = scanner.scan_local(Path("/srv/site"))
        >>> remote_files = scanner.scan_remote(client, "my-zone/")
    """

    def scan_local(self, directory: Path) -> list[LocalFile]:
        """Recursively scan a local directory.

        Every file and directory below ``directory`` is returned. Symlinked
        directories are reported but not descended into.

        Args:
            directory: Directory to scan

        Returns:
            List of LocalFile objects (order unspecified)

        Raises:
            BunnyFilesystemError: If the root is missing or any entry
                cannot be listed or stat'ed
        """
        if not directory.exists():
            raise BunnyFilesystemError(f"Path does not exist: {directory}")
        if not directory.is_dir():
            raise BunnyFilesystemError(f"Path is not a directory: {directory}")

        base_path = directory.absolute()
        files: list[LocalFile] = []
        pending = [base_path]

        while pending:
            current = pending.pop()
            try:
                children = list(current.iterdir())
            except OSError as e:
                raise BunnyFilesystemError(f"Cannot list {current}: {e}") from e

            for item in children:
                try:
                    local_file = LocalFile.from_path(item, base_path)
                except OSError as e:
                    raise BunnyFilesystemError(f"Cannot stat {item}: {e}") from e
                files.append(local_file)

                if local_file.is_directory and not item.is_symlink():
                    pending.append(item)

        logger.debug(f"Scanned {len(files)} local entries under {base_path}")
        return files

    def scan_remote(
        self, client: "BunnyStorageClient", root_path: str
    ) -> list[RemoteFile]:
        """Recursively list a remote pseudo-directory.

        The storage API only lists one level at a time, so directories are
        walked with an explicit stack of pending paths.

        Args:
            client: Storage API client
            root_path: Directory to start from, e.g. ``my-zone/site``

        Returns:
            List of RemoteFile objects, files and directories alike

        Raises:
            BunnyAPIError: If any listing fails (nothing partial is returned)
        """
        if not root_path.endswith("/"):
            root_path = f"{root_path}/"

        remote_files: list[RemoteFile] = []
        pending = [root_path]
        listings = 0

        while pending:
            path = pending.pop()
            entries = client.list_objects(path)
            listings += 1
            logger.debug(f"Listed {path}: {len(entries)} entries")

            for entry in entries:
                if entry.is_directory:
                    pending.append(f"{entry.path}{entry.object_name}/")
                remote_files.append(RemoteFile(entry=entry))

        logger.debug(
            f"Scanned {len(remote_files)} remote entries "
            f"with {listings} listing call(s)"
        )
        return remote_files
