"""Configuration management for pybunnysync.

Settings come from three places, in order of precedence:

1. A ``.bunnysync`` project file (TOML) in the working directory
2. Command line options (and their environment variables)
3. Built-in defaults
"""

import logging
import os
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

from .exceptions import BunnyConfigError
from .utils import DEFAULT_REGION, PROJECT_CONFIG_FILE

logger = logging.getLogger(__name__)

API_KEY_ENV = "BUNNYSYNC_API_KEY"
REGION_ENV = "BUNNYSYNC_REGION"

# Region code -> storage endpoint host
REGION_HOSTS: dict[str, str] = {
    "": "storage.bunnycdn.com",
    "de": "storage.bunnycdn.com",
    "uk": "uk.storage.bunnycdn.com",
    "ny": "ny.storage.bunnycdn.com",
    "us_ny": "ny.storage.bunnycdn.com",
    "la": "la.storage.bunnycdn.com",
    "us_la": "la.storage.bunnycdn.com",
    "sg": "sg.storage.bunnycdn.com",
    "se": "se.storage.bunnycdn.com",
    "br": "br.storage.bunnycdn.com",
    "sa": "ja.storage.bunnycdn.com",
    "au": "syd.storage.bunnycdn.com",
    "au_syd": "syd.storage.bunnycdn.com",
    "syd": "syd.storage.bunnycdn.com",
}

REGIONS: list[str] = [region for region in REGION_HOSTS if region]


def base_url(region: str) -> str:
    """Return the storage API base URL for a region.

    Args:
        region: Region code (e.g. "de", "uk", "ny")

    Returns:
        HTTPS base URL without trailing slash

    Raises:
        BunnyConfigError: If the region is unknown

    Examples:
        >>> base_url("uk")
        'https://uk.storage.bunnycdn.com'
        >>> base_url("de")
        'https://storage.bunnycdn.com'
    """
    host = REGION_HOSTS.get(region)
    if host is None:
        raise BunnyConfigError(
            f"Invalid region '{region}'. Valid regions: {', '.join(REGIONS)}"
        )
    return f"https://{host}"


@dataclass
class ProjectConfig:
    """Settings read from a ``.bunnysync`` project file."""

    api_key: Optional[str] = None
    region: Optional[str] = None
    exclude: Optional[list[str]] = None
    path: Optional[Path] = None
    """File the settings were read from"""

    @classmethod
    def from_dict(cls, data: dict[str, Any], path: Optional[Path] = None):
        """Create ProjectConfig from parsed TOML data.

        Raises:
            BunnyConfigError: If a value has the wrong type
        """
        api_key = data.get("api_key")
        region = data.get("region")
        exclude = data.get("exclude")

        if api_key is not None and not isinstance(api_key, str):
            raise BunnyConfigError("'api_key' must be a string")
        if region is not None and not isinstance(region, str):
            raise BunnyConfigError("'region' must be a string")
        if exclude is not None and (
            not isinstance(exclude, list)
            or not all(isinstance(p, str) for p in exclude)
        ):
            raise BunnyConfigError("'exclude' must be a list of strings")

        return cls(api_key=api_key, region=region, exclude=exclude, path=path)


def load_project_config(directory: Optional[Path] = None) -> Optional[ProjectConfig]:
    """Load the ``.bunnysync`` file from a directory if it exists.

    Args:
        directory: Directory to look in (defaults to the working directory)

    Returns:
        ProjectConfig, or None when there is no project file

    Raises:
        BunnyConfigError: If the file cannot be read or parsed
    """
    config_path = (directory or Path.cwd()) / PROJECT_CONFIG_FILE
    if not config_path.is_file():
        logger.debug(f"No project config at {config_path}")
        return None

    try:
        with open(config_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise BunnyConfigError(f"Invalid {PROJECT_CONFIG_FILE} file: {e}") from e
    except OSError as e:
        raise BunnyConfigError(f"Cannot read {config_path}: {e}") from e

    logger.debug(f"Loaded project config from {config_path}")
    return ProjectConfig.from_dict(data, path=config_path)


@dataclass
class Settings:
    """Effective settings for one run after merging all sources."""

    api_key: Optional[str] = None
    region: str = DEFAULT_REGION
    exclude: list[str] = field(default_factory=list)

    @property
    def base_url(self) -> str:
        """Storage API base URL for the configured region."""
        return base_url(self.region)


def merge_settings(
    api_key: Optional[str],
    region: Optional[str],
    exclude: Optional[list[str]],
    project: Optional[ProjectConfig],
) -> Settings:
    """Merge command line values with a project file.

    Every key present in the project file overrides the command line (and
    environment) value. An ``exclude`` list in the project file replaces
    the command line patterns and always gains ``.bunnysync`` itself.

    Args:
        api_key: API key from the command line or environment
        region: Region from the command line or environment
        exclude: Exclusion patterns from the command line
        project: Parsed project file, if any

    Returns:
        Merged Settings

    Examples:
        >>> project = ProjectConfig(region="uk", exclude=["*.log"])
        >>> merge_settings("key", "de", ["*.tmp"], project)
        Settings(api_key='key', region='uk', exclude=['*.log', '.bunnysync'])
    """
    settings = Settings(
        api_key=api_key,
        region=region if region is not None else DEFAULT_REGION,
        exclude=list(exclude or []),
    )

    if project is None:
        return settings

    if project.api_key is not None:
        settings.api_key = project.api_key
    if project.region is not None:
        settings.region = project.region
    if project.exclude is not None:
        settings.exclude = [*project.exclude, PROJECT_CONFIG_FILE]

    return settings


class Config:
    """Environment-backed configuration."""

    @property
    def api_key(self) -> Optional[str]:
        """API key from the environment, if set."""
        return os.environ.get(API_KEY_ENV) or None

    @property
    def region(self) -> str:
        """Region from the environment, defaulting to Falkenstein (de)."""
        return os.environ.get(REGION_ENV) or DEFAULT_REGION

    def is_configured(self) -> bool:
        """Check whether an API key is available from the environment."""
        return self.api_key is not None


config = Config()
