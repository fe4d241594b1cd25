"""CLI interface for pybunnysync."""

import logging
from typing import Any, Optional

import click

from . import __version__
from .api import BunnyStorageClient
from .config import (
    API_KEY_ENV,
    REGION_ENV,
    REGIONS,
    load_project_config,
    merge_settings,
)
from .exceptions import BunnyConfigError, BunnySyncError
from .output import OutputFormatter
from .sync import SyncDirection, SyncEngine, SyncPair

logger = logging.getLogger(__name__)


def split_patterns(values: tuple[str, ...]) -> list[str]:
    """Flatten repeated and comma separated ``--exclude`` values.

    Commas inside ``{...}`` belong to the pattern and do not split it.

    Examples:
        >>> split_patterns(("*.log,*.tmp", ".DS_Store"))
        ['*.log', '*.tmp', '.DS_Store']
        >>> split_patterns(("*.{log,tmp},.git",))
        ['*.{log,tmp}', '.git']
    """
    patterns = []
    for value in values:
        depth = 0
        current = ""
        for char in value:
            if char == "{":
                depth += 1
            elif char == "}" and depth > 0:
                depth -= 1
            elif char == "," and depth == 0:
                patterns.append(current)
                current = ""
                continue
            current += char
        patterns.append(current)
    return [p.strip() for p in patterns if p.strip()]


@click.command()
@click.argument("source")
@click.argument("destination")
@click.option(
    "--api-key",
    "-k",
    envvar=API_KEY_ENV,
    help="Storage zone password. Use of the environment variable is recommended",
)
@click.option(
    "--region",
    "-r",
    envvar=REGION_ENV,
    type=click.Choice(REGIONS),
    default=None,
    help="Storage region of the zone (default: de)",
)
@click.option(
    "--dryrun",
    "--dry-run",
    "dry_run",
    is_flag=True,
    help="Show what would be synced without syncing",
)
@click.option(
    "--delete",
    is_flag=True,
    help="Delete files that are not in the source",
)
@click.option(
    "--exclude",
    "-e",
    multiple=True,
    help="Exclude files matching a pattern (*, ? and {a,b}; comma separated)",
)
@click.option(
    "--workers",
    type=click.IntRange(min=1),
    default=1,
    help="Number of parallel workers for transfers (default: 1)",
)
@click.option(
    "--json", "json_output", is_flag=True, help="Print sync statistics as JSON"
)
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-essential output")
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Enable verbose/debug logging output",
)
@click.version_option(version=__version__, prog_name="bunnysync")
@click.pass_context
def main(
    ctx: Any,
    source: str,
    destination: str,
    api_key: Optional[str],
    region: Optional[str],
    dry_run: bool,
    delete: bool,
    exclude: tuple[str, ...],
    workers: int,
    json_output: bool,
    quiet: bool,
    verbose: bool,
) -> None:
    """Sync a local directory with a bunny.net storage zone.

    SOURCE and DESTINATION are a local directory and a storage zone path;
    storage zones have the prefix zone://. The side carrying the prefix
    decides the direction.

    Examples:

        # Upload ./public to the root of my-zone
        bunnysync ./public zone://my-zone/

        # Preview downloading my-zone into ./backup, deleting stale files
        bunnysync zone://my-zone/ ./backup --delete --dryrun

        # Skip logs and temporary files
        bunnysync ./public zone://my-zone/ --exclude "*.log,*.tmp"
    """
    # Configure logging based on verbose flag
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            datefmt="%H:%M:%S",
        )
        logging.getLogger("pybunnysync").setLevel(logging.DEBUG)
    else:
        logging.basicConfig(level=logging.WARNING)

    # JSON mode keeps stdout parseable
    out = OutputFormatter(json_output=json_output, quiet=quiet or json_output)

    try:
        project = load_project_config()
    except BunnyConfigError as e:
        out.error(f"Configuration error: {e}")
        ctx.exit(1)
        return  # Unreachable, but helps type checker

    settings = merge_settings(
        api_key=api_key,
        region=region,
        exclude=split_patterns(exclude),
        project=project,
    )

    if not settings.api_key:
        out.error(f"Please provide an API key (--api-key or {API_KEY_ENV})")
        ctx.exit(1)

    try:
        pair = SyncPair.from_arguments(source, destination)
    except ValueError as e:
        out.error(str(e))
        ctx.exit(1)
        return  # Unreachable, but helps type checker

    if not pair.local.exists():
        side = "Source" if pair.direction == SyncDirection.PUSH else "Destination"
        out.error(f"{side} path does not exist: {pair.local}")
        ctx.exit(1)

    logger.debug(f"Exclude patterns: {settings.exclude}")

    try:
        with BunnyStorageClient(
            api_key=settings.api_key, api_url=settings.base_url
        ) as client:
            engine = SyncEngine(client, out)
            stats = engine.sync_pair(
                pair,
                dry_run=dry_run,
                delete=delete,
                exclude=settings.exclude,
                max_workers=workers,
            )
    except KeyboardInterrupt:
        out.warning("\nSync cancelled by user")
        ctx.exit(130)
        return  # Unreachable, but helps type checker
    except BunnySyncError as e:
        out.error(f"Error: {e}")
        ctx.exit(1)
        return  # Unreachable, but helps type checker

    if out.json_output:
        out.output_json({"dry_run": dry_run, **stats})
    else:
        out.success("Sync complete")


if __name__ == "__main__":
    main()
