"""Sync pair: the local directory and storage zone path of one run."""

from dataclasses import dataclass
from pathlib import Path

from .modes import SyncDirection
from .paths import is_zone, strip_zone_prefix, zone_name


@dataclass
class SyncPair:
    """A local directory paired with a remote zone path.

    Examples:
        >>> pair = SyncPair.from_arguments("./site", "zone://my-zone/")
        >>> pair.direction
        <SyncDirection.PUSH: 'push'>
        >>> pair.zone
        'my-zone'
    """

    local: Path
    """Local directory"""

    remote: str
    """Remote path without the ``zone://`` scheme, e.g. ``my-zone/site``"""

    direction: SyncDirection
    """Which side is the source"""

    def __post_init__(self) -> None:
        if isinstance(self.local, str):
            self.local = Path(self.local)
        if isinstance(self.direction, str):
            self.direction = SyncDirection(self.direction)
        self.remote = strip_zone_prefix(self.remote)
        if not zone_name(self.remote):
            raise ValueError(f"Remote path has no storage zone: '{self.remote}'")

    @property
    def zone(self) -> str:
        """Storage zone name (first segment of the remote path)."""
        return zone_name(self.remote)

    @property
    def source(self) -> str:
        """Source location as given on the command line."""
        if self.direction == SyncDirection.PUSH:
            return str(self.local)
        return f"zone://{self.remote}"

    @property
    def destination(self) -> str:
        """Destination location as given on the command line."""
        if self.direction == SyncDirection.PUSH:
            return f"zone://{self.remote}"
        return str(self.local)

    @classmethod
    def from_arguments(cls, source: str, destination: str) -> "SyncPair":
        """Create a sync pair from SOURCE and DESTINATION arguments.

        Exactly one of the two must carry the ``zone://`` scheme; that side
        is remote and decides the direction.

        Raises:
            ValueError: If neither or both arguments are zones
        """
        source_is_zone = is_zone(source)
        destination_is_zone = is_zone(destination)

        if destination_is_zone and not source_is_zone:
            return cls(
                local=Path(source),
                remote=destination,
                direction=SyncDirection.PUSH,
            )
        if source_is_zone and not destination_is_zone:
            return cls(
                local=Path(destination),
                remote=source,
                direction=SyncDirection.PULL,
            )
        raise ValueError(
            "Invalid source and destination: exactly one must be a storage "
            "zone (zone://<zone>/<path>)"
        )
