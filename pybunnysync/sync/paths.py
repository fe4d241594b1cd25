"""Translation between storage zone paths and local filesystem paths."""

from pathlib import Path, PurePath, PurePosixPath
from typing import Union

from ..utils import ZONE_SCHEME


def is_zone(location: str) -> bool:
    """Check whether a source/destination argument names a storage zone.

    Examples:
        >>> is_zone("zone://my-zone/site")
        True
        >>> is_zone("./site")
        False
    """
    return location.startswith(ZONE_SCHEME)


def strip_zone_prefix(location: str) -> str:
    """Remove the ``zone://`` scheme from a location, if present.

    Examples:
        >>> strip_zone_prefix("zone://test/path")
        'test/path'
        >>> strip_zone_prefix("test/path")
        'test/path'
    """
    if location.startswith(ZONE_SCHEME):
        return location[len(ZONE_SCHEME) :]
    return location


def zone_name(remote: str) -> str:
    """Return the storage zone name, the first non-empty path segment.

    Examples:
        >>> zone_name("/test/foo/bar/")
        'test'
        >>> zone_name("")
        ''
    """
    for part in remote.split("/"):
        if part:
            return part
    return ""


def to_local_path(
    local_base: Union[str, Path], zone: str, remote_path: str
) -> Path:
    """Map a remote path onto the local tree rooted at ``local_base``.

    A single leading ``/zone/`` segment is stripped from ``remote_path`` and
    the remainder appended to ``local_base``. ``.`` segments are dropped and
    ``..`` segments are kept as they are. The result is resolved when it
    exists on disk, otherwise returned as the plain concatenation.

    Args:
        local_base: Local directory that mirrors the zone root
        zone: Storage zone name
        remote_path: Remote path, e.g. ``/my-zone/path/to/file.txt``

    Returns:
        Local path for the remote entry

    Examples:
        >>> to_local_path("/local/base", "myzone", "/myzone/path/to/file")
        PosixPath('/local/base/path/to/file')
        >>> to_local_path("/local/base", "myzone", "/myzone/myzone/file")
        PosixPath('/local/base/myzone/file')
    """
    parts = PurePosixPath(remote_path).parts
    if parts[:2] == ("/", zone):
        parts = parts[2:]
    elif parts[:1] == ("/",):
        parts = parts[1:]

    local_path = Path(local_base).joinpath(*parts)
    try:
        return local_path.resolve(strict=True)
    except (OSError, RuntimeError):
        return local_path


def to_sync_key(zone: str, relative_path: Union[str, PurePath]) -> str:
    """Build the sync key of a local file relative to the scan root.

    The key uses forward slashes on every platform so that it compares
    equal to the key of the matching remote object.

    Examples:
        >>> to_sync_key("myzone", "sub/file.txt")
        '/myzone/sub/file.txt'
    """
    if isinstance(relative_path, PurePath):
        relative_path = relative_path.as_posix()
    return f"/{zone}/{relative_path}"
