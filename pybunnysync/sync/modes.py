"""Sync directions."""

from enum import Enum


class SyncDirection(str, Enum):
    """Direction of a sync run, fixed once per invocation."""

    PUSH = "push"
    """Local directory is the source, the storage zone the destination"""

    PULL = "pull"
    """Storage zone is the source, the local directory the destination"""
