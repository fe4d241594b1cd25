"""Sync operations wrapper for unified upload/download interface."""

import logging
from pathlib import Path

from ..api import BunnyStorageClient
from ..exceptions import BunnyFilesystemError
from .scanner import LocalFile, RemoteFile

logger = logging.getLogger(__name__)


class SyncOperations:
    """Transfer and delete primitives used by the sync engine.

    Files are moved whole: uploads read the entire file into memory and
    downloads buffer the entire object before writing it.
    """

    def __init__(self, client: BunnyStorageClient):
        """Initialize sync operations.

        Args:
            client: Storage API client
        """
        self.client = client

    def upload_file(self, local_file: LocalFile, remote_path: str) -> None:
        """Upload a local file to remote storage.

        Args:
            local_file: Local file to upload
            remote_path: Storage path to write to

        Raises:
            BunnyFilesystemError: If the local file cannot be read
            BunnyAPIError: If the upload fails
        """
        try:
            data = local_file.path.read_bytes()
        except OSError as e:
            raise BunnyFilesystemError(f"Cannot read {local_file.path}: {e}") from e

        logger.debug(f"Uploading {len(data)} bytes to {remote_path}")
        self.client.put_object(remote_path, data)

    def download_file(self, remote_file: RemoteFile, local_path: Path) -> Path:
        """Download a remote file to local storage.

        Args:
            remote_file: Remote file to download
            local_path: Local path where file should be saved

        Returns:
            Path where file was saved

        Raises:
            BunnyAPIError: If the download fails
            BunnyFilesystemError: If the file cannot be written
        """
        data = self.client.get_object(remote_file.key)

        try:
            # Ensure parent directory exists
            local_path.parent.mkdir(parents=True, exist_ok=True)
            local_path.write_bytes(data)
        except OSError as e:
            raise BunnyFilesystemError(f"Cannot write {local_path}: {e}") from e

        return local_path

    def delete_remote(self, remote_file: RemoteFile) -> None:
        """Delete a remote file."""
        self.client.delete_object(remote_file.key)

    def delete_local(self, local_file: LocalFile) -> None:
        """Delete a local file.

        Raises:
            BunnyFilesystemError: If the file cannot be removed
        """
        try:
            local_file.path.unlink()
        except OSError as e:
            raise BunnyFilesystemError(
                f"Cannot delete {local_file.path}: {e}"
            ) from e
