"""Console output formatting for the CLI and the sync engine."""

import json
import sys
from typing import Any, Optional

from rich.console import Console


class OutputFormatter:
    """Formats user-facing output with rich.

    Informational messages are suppressed in quiet mode; errors and the
    sync action log are always shown.
    """

    def __init__(
        self,
        json_output: bool = False,
        quiet: bool = False,
        console: Optional[Console] = None,
        err_console: Optional[Console] = None,
    ):
        """Initialize output formatter.

        Args:
            json_output: Whether to emit JSON instead of text summaries
            quiet: Suppress non-essential output
            console: Console for regular output (defaults to stdout)
            err_console: Console for errors (defaults to stderr)
        """
        self.json_output = json_output
        self.quiet = quiet
        self.console = console or Console(
            file=sys.stdout, highlight=False, soft_wrap=True
        )
        self.err_console = err_console or Console(
            file=sys.stderr, highlight=False, soft_wrap=True
        )

    def print(self, message: str = "") -> None:
        """Print a plain line (suppressed in quiet mode)."""
        if not self.quiet:
            self.console.print(message, markup=False)

    def info(self, message: str) -> None:
        """Print an informational message."""
        if not self.quiet:
            self.console.print(message, markup=False)

    def success(self, message: str) -> None:
        """Print a success message."""
        if not self.quiet:
            self.console.print(message, style="green", markup=False)

    def warning(self, message: str) -> None:
        """Print a warning message."""
        if not self.quiet:
            self.err_console.print(message, style="yellow", markup=False)

    def error(self, message: str) -> None:
        """Print an error message to stderr (never suppressed)."""
        self.err_console.print(message, style="bold red", markup=False)

    def action(self, message: str) -> None:
        """Print one line of the sync action log.

        Shown even in quiet mode; only JSON output replaces it.
        """
        if not self.json_output:
            self.console.print(message, markup=False)

    def output_json(self, data: Any) -> None:
        """Print data as JSON."""
        self.console.print(json.dumps(data, indent=2, default=str), markup=False)
