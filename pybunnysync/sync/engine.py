"""Core sync engine for executing sync operations."""

import logging
import time
from concurrent.futures import ThreadPoolExecutor, as_completed
from pathlib import Path
from typing import Optional

from rich.progress import Progress, SpinnerColumn, TextColumn

from ..api import BunnyStorageClient
from ..exceptions import BunnyFilesystemError
from ..output import OutputFormatter
from ..utils import format_size
from .comparator import FileComparator, SyncAction, SyncDecision
from .exclude import is_excluded
from .modes import SyncDirection
from .operations import SyncOperations
from .pair import SyncPair
from .paths import to_local_path, to_sync_key
from .scanner import DirectoryScanner, LocalFile, RemoteFile

logger = logging.getLogger(__name__)


class SyncEngine:
    """Core sync engine that orchestrates file synchronization."""

    def __init__(
        self,
        client: BunnyStorageClient,
        output: Optional[OutputFormatter] = None,
    ):
        """Initialize sync engine.

        Args:
            client: Storage API client
            output: Output formatter for displaying progress/status
        """
        self.client = client
        self.output = output or OutputFormatter()
        self.operations = SyncOperations(client)
        self.scanner = DirectoryScanner()

    def sync_pair(
        self,
        pair: SyncPair,
        dry_run: bool = False,
        delete: bool = False,
        exclude: Optional[list[str]] = None,
        max_workers: int = 1,
    ) -> dict:
        """Sync a single sync pair in the pair's direction.

        Both sides are scanned and every decision is made before the first
        transfer starts. Execution stops at the first failing action; the
        error propagates and actions completed before it stay applied.

        Args:
            pair: Sync pair to synchronize
            dry_run: If True, only show what would be done without actually syncing
            delete: Delete destination files that are missing at the source
            exclude: Glob patterns matched against file names
            max_workers: Number of parallel workers for transfers (default: 1)

        Returns:
            Dictionary with sync statistics

        Raises:
            BunnyFilesystemError: If the local side is missing or unreadable
            BunnyAPIError: If a storage call fails

        Examples:
            >>> engine = SyncEngine(client)
            >>> pair = SyncPair.from_arguments("./site", "zone://my-zone/")
            >>> stats = engine.sync_pair(pair, dry_run=True)
            >>> print(f"Would upload {stats['uploads']} files")
        """
        # Validate local directory exists
        if not pair.local.exists():
            raise BunnyFilesystemError(f"Local directory does not exist: {pair.local}")
        if not pair.local.is_dir():
            raise BunnyFilesystemError(f"Local path is not a directory: {pair.local}")

        exclude = list(exclude or [])

        if not self.output.quiet:
            self.output.info(f"Syncing: {pair.source} -> {pair.destination}")
            if dry_run:
                self.output.info("Dry run: No changes will be made")
            self.output.print("")

        # Step 1: Scan both sides
        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            transient=True,
            disable=self.output.quiet,
        ) as progress:
            task = progress.add_task("Scanning storage zone...", total=None)
            remote_map = self._build_remote_map(pair, exclude)
            progress.update(
                task, description=f"Found {len(remote_map)} remote file(s)"
            )

            task = progress.add_task("Scanning local directory...", total=None)
            local_map = self._build_local_map(pair, exclude)
            progress.update(task, description=f"Found {len(local_map)} local file(s)")

        # Step 2: Compare files and determine actions
        comparator = FileComparator(pair.direction, delete=delete)
        decisions = comparator.compare_files(local_map, remote_map)

        # Step 3: Display plan
        stats = self._categorize_decisions(decisions)
        self._display_sync_plan(stats, decisions)
        self._check_fixed_destination(pair, stats)

        actionable = [d for d in decisions if d.action != SyncAction.SKIP]

        # Step 4: Execute actions
        if dry_run:
            for decision in actionable:
                self.output.action(self._describe(decision, pair, dry_run=True))
        elif actionable:
            if max_workers > 1 and len(actionable) > 1:
                completed = self._execute_decisions_parallel(
                    actionable, pair, max_workers
                )
            else:
                completed = self._execute_decisions(actionable, pair)
            stats = self._categorize_decisions(
                completed + [d for d in decisions if d.action == SyncAction.SKIP]
            )

        # Step 5: Display summary
        if not self.output.quiet:
            self._display_summary(stats, dry_run)

        return stats

    def _build_remote_map(
        self, pair: SyncPair, exclude: list[str]
    ) -> dict[str, RemoteFile]:
        """List the remote side and key it by sync key.

        Directories and excluded names are dropped.
        """
        scan_start = time.time()
        remote_files = self.scanner.scan_remote(self.client, pair.remote)
        logger.debug(
            f"Remote scan took {time.time() - scan_start:.2f}s "
            f"for {len(remote_files)} entries"
        )
        return {
            f.key: f
            for f in remote_files
            if not f.is_directory and not is_excluded(f.name, exclude)
        }

    def _build_local_map(
        self, pair: SyncPair, exclude: list[str]
    ) -> dict[str, LocalFile]:
        """Scan the local side and key it by sync key.

        Directories and excluded names are dropped.
        """
        scan_start = time.time()
        local_files = self.scanner.scan_local(pair.local)
        logger.debug(
            f"Local scan took {time.time() - scan_start:.2f}s "
            f"for {len(local_files)} entries"
        )
        return {
            to_sync_key(pair.zone, f.relative_path): f
            for f in local_files
            if not f.is_directory and not is_excluded(f.name, exclude)
        }

    def _check_fixed_destination(self, pair: SyncPair, stats: dict) -> None:
        """Warn when several uploads are about to target the same object.

        Uploads are written to the destination path given for the run, not
        to a path derived from each file's sync key.
        """
        if pair.direction == SyncDirection.PUSH and stats["uploads"] > 1:
            logger.warning(
                f"{stats['uploads']} files will be uploaded to the same "
                f"destination path '{pair.remote}'"
            )

    def _local_target(self, decision: SyncDecision, pair: SyncPair) -> Path:
        """Local path a download for ``decision`` is written to."""
        return to_local_path(pair.local, pair.zone, decision.key)

    def _describe(
        self, decision: SyncDecision, pair: SyncPair, dry_run: bool
    ) -> str:
        """Build the action log line for a decision."""
        if decision.action == SyncAction.UPLOAD and decision.local_file:
            target = str(decision.local_file.path)
            verb = "update"
        elif decision.action == SyncAction.DOWNLOAD:
            target = f"{decision.key} -> {self._local_target(decision, pair)}"
            verb = "update"
        elif decision.action == SyncAction.DELETE_LOCAL and decision.local_file:
            target = str(decision.local_file.path)
            verb = "delete"
        else:
            target = decision.key
            verb = "delete"

        if dry_run:
            return f"Would {verb}: {target}"
        return f"{verb.capitalize()}d: {target}"

    def _categorize_decisions(self, decisions: list[SyncDecision]) -> dict:
        """Categorize decisions into statistics.

        Args:
            decisions: List of sync decisions

        Returns:
            Dictionary with statistics
        """
        stats = {
            "uploads": 0,
            "downloads": 0,
            "deletes_local": 0,
            "deletes_remote": 0,
            "skips": 0,
        }

        for decision in decisions:
            if decision.action == SyncAction.UPLOAD:
                stats["uploads"] += 1
            elif decision.action == SyncAction.DOWNLOAD:
                stats["downloads"] += 1
            elif decision.action == SyncAction.DELETE_LOCAL:
                stats["deletes_local"] += 1
            elif decision.action == SyncAction.DELETE_REMOTE:
                stats["deletes_remote"] += 1
            elif decision.action == SyncAction.SKIP:
                stats["skips"] += 1

        return stats

    def _display_sync_plan(
        self, stats: dict, decisions: list[SyncDecision]
    ) -> None:
        """Display sync plan to user.

        Args:
            stats: Statistics dictionary
            decisions: List of sync decisions
        """
        if self.output.quiet:
            return

        self.output.info("Sync plan:")
        if stats["uploads"] > 0:
            self.output.info(f"  ↑ Upload: {stats['uploads']} file(s)")
        if stats["downloads"] > 0:
            self.output.info(f"  ↓ Download: {stats['downloads']} file(s)")
        if stats["deletes_local"] > 0:
            self.output.info(f"  ✗ Delete local: {stats['deletes_local']} file(s)")
        if stats["deletes_remote"] > 0:
            self.output.info(f"  ✗ Delete remote: {stats['deletes_remote']} file(s)")
        if stats["skips"] > 0:
            self.output.info(f"  = Skip: {stats['skips']} file(s)")

        transfer_bytes = 0
        for decision in decisions:
            if decision.action == SyncAction.UPLOAD and decision.local_file:
                transfer_bytes += decision.local_file.length
            elif decision.action == SyncAction.DOWNLOAD and decision.remote_file:
                transfer_bytes += decision.remote_file.length
        if transfer_bytes > 0:
            self.output.info(f"  Transfer size: {format_size(transfer_bytes)}")
        self.output.print("")

    def _execute_decisions(
        self, decisions: list[SyncDecision], pair: SyncPair
    ) -> list[SyncDecision]:
        """Execute sync decisions one at a time, in order.

        Args:
            decisions: Actionable sync decisions
            pair: Sync pair configuration

        Returns:
            The decisions that completed (all of them, unless an error is raised)
        """
        completed: list[SyncDecision] = []
        for decision in decisions:
            self._execute_single_decision(decision, pair)
            completed.append(decision)
        return completed

    def _execute_single_decision(self, decision: SyncDecision, pair: SyncPair) -> None:
        """Execute a single sync decision and log it.

        Args:
            decision: Sync decision to execute
            pair: Sync pair configuration
        """
        action_start = time.time()

        if decision.action == SyncAction.UPLOAD and decision.local_file:
            self.operations.upload_file(decision.local_file, pair.remote)

        elif decision.action == SyncAction.DOWNLOAD and decision.remote_file:
            self.operations.download_file(
                decision.remote_file, self._local_target(decision, pair)
            )

        elif decision.action == SyncAction.DELETE_REMOTE and decision.remote_file:
            self.operations.delete_remote(decision.remote_file)

        elif decision.action == SyncAction.DELETE_LOCAL and decision.local_file:
            self.operations.delete_local(decision.local_file)

        logger.debug(
            f"{decision.action.value} of {decision.key} "
            f"took {time.time() - action_start:.2f}s"
        )
        self.output.action(self._describe(decision, pair, dry_run=False))

    def _execute_decisions_parallel(
        self,
        decisions: list[SyncDecision],
        pair: SyncPair,
        max_workers: int,
    ) -> list[SyncDecision]:
        """Execute sync decisions in parallel using ThreadPoolExecutor.

        The first failure cancels every action that has not started yet,
        waits for running ones and is then re-raised.

        Args:
            decisions: Actionable sync decisions
            pair: Sync pair configuration
            max_workers: Number of parallel workers

        Returns:
            The decisions that completed
        """
        logger.debug(f"Executing {len(decisions)} actions with {max_workers} workers")

        completed: list[SyncDecision] = []
        executor = ThreadPoolExecutor(max_workers=max_workers)
        try:
            futures = {
                executor.submit(self._execute_single_decision, decision, pair): decision
                for decision in decisions
            }
            for future in as_completed(futures):
                future.result()
                completed.append(futures[future])
        finally:
            executor.shutdown(wait=True, cancel_futures=True)

        return completed

    def _display_summary(self, stats: dict, dry_run: bool) -> None:
        """Display sync summary.

        Args:
            stats: Statistics dictionary
            dry_run: Whether this was a dry run
        """
        self.output.print("")
        if dry_run:
            self.output.success("Dry run complete!")

        total_actions = (
            stats["uploads"]
            + stats["downloads"]
            + stats["deletes_local"]
            + stats["deletes_remote"]
        )

        if total_actions > 0:
            self.output.info(f"Total actions: {total_actions}")
            if stats["uploads"] > 0:
                self.output.info(f"  Uploaded: {stats['uploads']}")
            if stats["downloads"] > 0:
                self.output.info(f"  Downloaded: {stats['downloads']}")
            if stats["deletes_local"] > 0:
                self.output.info(f"  Deleted locally: {stats['deletes_local']}")
            if stats["deletes_remote"] > 0:
                self.output.info(f"  Deleted remotely: {stats['deletes_remote']}")
        else:
            self.output.info("No changes needed - everything is in sync!")
