"""Sync engine for pybunnysync - one-way sync between a directory and a zone."""

from .comparator import FileComparator, SyncAction, SyncDecision, is_in_sync
from .engine import SyncEngine
from .exclude import expand_braces, is_excluded
from .modes import SyncDirection
from .operations import SyncOperations
from .pair import SyncPair
from .paths import is_zone, strip_zone_prefix, to_local_path, to_sync_key, zone_name
from .scanner import DirectoryScanner, LocalFile, RemoteFile

__all__ = [
    "SyncEngine",
    "SyncDirection",
    "SyncPair",
    "SyncOperations",
    "DirectoryScanner",
    "FileComparator",
    "SyncAction",
    "SyncDecision",
    "LocalFile",
    "RemoteFile",
    "expand_braces",
    "is_excluded",
    "is_in_sync",
    "is_zone",
    "strip_zone_prefix",
    "to_local_path",
    "to_sync_key",
    "zone_name",
]
