"""Terminal output handling using Rich library.

This module provides the OutputHandler class for all CLI terminal output.
Uses Rich library for spinners, colored output, and formatted summaries.
Supports verbosity levels and --no-color flag.
"""

from contextlib import contextmanager
from typing import Dict, Iterator, List, Optional

from rich.console import Console
from rich.live import Live
from rich.markup import escape
from rich.spinner import Spinner

from .models import ChangeStats, SyncMode


class OutputHandler:
    """Handles all terminal output using Rich library.

    Provides methods for displaying messages, spinners and push/pull
    summaries with color coding and verbosity level control.

    Attributes:
        verbosity: Verbosity level (0=summary, 1=info, 2=debug)
        console: Rich Console instance for output

    Example:
        >>> handler = OutputHandler(verbosity=1, no_color=False)
        >>> handler.success("Translations pushed")
        >>> with handler.spinner("Reading sheet..."):
        ...     # Do work
        ...     pass
    """

    def __init__(self, verbosity: int = 0, no_color: bool = False, console: Optional[Console] = None):
        """Initialize output handler.

        Args:
            verbosity: Verbosity level (0=summary, 1=info, 2=debug)
            no_color: Disable color output if True
            console: Console to print to (a new one is created if omitted)
        """
        self.verbosity = verbosity
        self.no_color = no_color
        self.console = console or Console(
            no_color=no_color,
            highlight=False,
        )

    def success(self, message: str) -> None:
        """Display success message in green."""
        self.console.print(f"[green]✓[/green] {escape(message)}")

    def error(self, message: str) -> None:
        """Display error message in red."""
        self.console.print(f"[red]✗[/red] {escape(message)}", style="red")

    def warning(self, message: str) -> None:
        """Display warning message in yellow."""
        self.console.print(f"[yellow]⚠[/yellow] {escape(message)}", style="yellow")

    def info(self, message: str) -> None:
        """Display info message (only if verbosity >= 1)."""
        if self.verbosity >= 1:
            self.console.print(escape(message))

    def debug(self, message: str) -> None:
        """Display debug message (only if verbosity >= 2)."""
        if self.verbosity >= 2:
            self.console.print(f"[dim]{escape(message)}[/dim]")

    def print(self, message: str) -> None:
        """Display message without formatting."""
        self.console.print(escape(message))

    @contextmanager
    def spinner(self, message: str) -> Iterator[None]:
        """Display spinner for single operations.

        Args:
            message: Message to display with spinner

        Example:
            >>> with handler.spinner("Writing to Google Sheets..."):
            ...     api.update_values("A1", rows)
        """
        if not self.console.is_terminal:
            yield
            return
        spinner = Spinner("dots", text=message)
        with Live(spinner, console=self.console, refresh_per_second=10, transient=True):
            yield

    def _print_key_list(self, title: str, keys: List[str]) -> None:
        if keys and self.verbosity >= 1:
            self.console.print(f"\n[dim]{title}:[/dim]")
            for key in keys:
                self.console.print(f"  • {escape(key)}")

    def print_push_summary(
        self,
        stats: ChangeStats,
        mode: SyncMode,
        removed_keys: Optional[List[str]] = None,
    ) -> None:
        """Display push summary with color coding.

        Args:
            stats: Counts from reconciliation
            mode: Whether the push was initial or a diff
            removed_keys: Keys dropped from the sheet (listed at verbosity >= 1)
        """
        self.console.print("\n[bold]Push Summary:[/bold]")

        if mode == SyncMode.INITIAL:
            self.console.print(f"  [green]+[/green] Initial push: {stats.new} key(s)")
        else:
            if stats.new > 0:
                self.console.print(f"  [green]+[/green] New: {stats.new} key(s) added")
            if stats.changed > 0:
                self.console.print(f"  [blue]~[/blue] Changed: {stats.changed} key(s) updated")
            if stats.removed > 0:
                self.console.print(f"  [red]-[/red] Removed: {stats.removed} key(s) no longer in catalog")
            if stats.unchanged > 0:
                self.console.print(f"  [dim]─[/dim] Unchanged: {stats.unchanged} key(s)")

        self._print_key_list("Removed keys", removed_keys or [])

        if mode == SyncMode.DIFF and stats.new == 0 and stats.changed == 0 and stats.removed == 0:
            self.console.print("\n[green]Sheet already up to date.[/green]")
        else:
            self.console.print("\n[green]Translations pushed successfully[/green]")

    def print_pull_summary(
        self,
        stats: ChangeStats,
        files_written: List[str],
        removed_keys: Optional[List[str]] = None,
    ) -> None:
        """Display pull summary with color coding.

        Args:
            stats: Counts from merging sheet values into the catalog
            files_written: Catalog files that were written
            removed_keys: Catalog keys missing from the sheet (listed at verbosity >= 1)
        """
        self.console.print("\n[bold]Pull Summary:[/bold]")

        if stats.new > 0:
            self.console.print(f"  [green]+[/green] New: {stats.new} key(s) added to catalog")
        if stats.changed > 0:
            self.console.print(f"  [blue]~[/blue] Changed: {stats.changed} key(s) updated")
        if stats.removed > 0:
            self.console.print(f"  [yellow]![/yellow] Not in sheet: {stats.removed} key(s) kept")
        if stats.unchanged > 0:
            self.console.print(f"  [dim]─[/dim] Unchanged: {stats.unchanged} key(s)")

        self._print_key_list("Keys not in sheet", removed_keys or [])

        if files_written:
            self.console.print(f"\n[green]Wrote {len(files_written)} file(s)[/green]")
            for file_path in files_written:
                self.info(f"  • {file_path}")
        else:
            self.console.print("\n[green]Catalog already up to date.[/green]")

    def print_dryrun_summary(self, group_counts: Dict[str, int]) -> None:
        """Display dry run preview of a pull.

        Args:
            group_counts: Number of translations per top-level group
        """
        self.console.print("\n[bold]Dry Run - Translations per group in the resulting files:[/bold]")

        for group, count in group_counts.items():
            self.console.print(f"  • {escape(group)}: {count}")

        total = sum(group_counts.values())
        self.console.print(
            f"\n[dim]{total} translation(s) in {len(group_counts)} group(s), "
            "including catalog keys kept from disk. No files written.[/dim]"
        )
