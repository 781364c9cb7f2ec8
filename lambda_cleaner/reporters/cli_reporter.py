"""
CLI Reporter Module
===================

Rich terminal output for a cleanup run: mode banners, per-function
progress lines, per-version outcomes and the final summary table.

Classes
-------
CLIReporter
    Main reporter class for terminal output.

Example
-------
>>> from io import StringIO
>>> from rich.console import Console
>>> reporter = CLIReporter(Console(file=StringIO()))
>>> reporter.print_targets(3)

See Also
--------
rich : Python library for rich text and formatting.
JSONReporter : For machine-readable export.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, List, Optional

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

if TYPE_CHECKING:
    from lambda_cleaner.cleaners.version_cleaner import (
        DeleteResult,
        FunctionResult,
        RetentionDecision,
        RunSummary,
    )
    from lambda_cleaner.core.inventory import FunctionDescriptor

# Module logger
logger = logging.getLogger(__name__)

STATUS_ICONS = {
    "success": "[green]✓[/green]",
    "failed": "[red]✗[/red]",
    "dry_run": "[yellow]~[/yellow]",
}


class CLIReporter:
    """
    Reporter for displaying cleanup progress in the terminal.

    Parameters
    ----------
    console : Console, optional
        Rich Console instance. If not provided, creates a new one.

    Examples
    --------
    With a captured console (useful in tests):

    >>> from io import StringIO
    >>> buffer = StringIO()
    >>> reporter = CLIReporter(Console(file=buffer, width=120))
    >>> reporter.print_cancelled()
    >>> "cancelled" in buffer.getvalue()
    True
    """

    def __init__(self, console: Optional[Console] = None) -> None:
        """Initialize the CLI reporter with a Rich Console."""
        self.console = console or Console()
        logger.debug("Initialized CLIReporter")

    # =========================================================================
    # Run-level messages
    # =========================================================================

    def print_header(self, region: str) -> None:
        """Print the tool banner."""
        self.console.print("[blue bold]AWS Lambda Version Cleaner[/blue bold]")
        self.console.print(
            f"[dim]Deleting old Lambda function versions in {escape(region)}[/dim]\n"
        )

    def print_mode_banner(self, dry_run: bool, force: bool) -> None:
        """Print a panel announcing dry-run or force mode."""
        if dry_run:
            self.console.print(
                Panel(
                    "[yellow bold]DRY-RUN MODE[/yellow bold]\n"
                    "No versions will actually be deleted.",
                    border_style="yellow",
                )
            )
        elif force:
            self.console.print(
                Panel(
                    "[red bold]FORCE MODE[/red bold]\n"
                    "Versions will be deleted WITHOUT confirmation!",
                    border_style="red",
                )
            )

    def print_cancelled(self) -> None:
        self.console.print("[yellow]Operation cancelled by user.[/yellow]")

    def print_no_functions(self, name_filter: Optional[str] = None) -> None:
        """Print the message for an empty function set."""
        if name_filter:
            self.console.print(
                f"[yellow]No functions matching '{escape(name_filter)}' to clean.[/yellow]"
            )
        else:
            self.console.print("[yellow]No functions to clean.[/yellow]")

    def print_targets(self, count: int) -> None:
        self.console.print(f"\n[blue]Functions to clean: {count}[/blue]")

    # =========================================================================
    # Per-function messages
    # =========================================================================

    def print_function_start(
        self,
        function: FunctionDescriptor,
        index: int,
        total: int,
    ) -> None:
        """Print the line announcing analysis of one function."""
        self.console.print(
            f"\n[cyan][{index}/{total}] Analyzing {escape(function.name)}...[/cyan]"
        )

    def print_decision(self, decision: RetentionDecision) -> None:
        """Print version counts and the version being kept."""
        keep = decision.to_keep
        self.console.print(
            f"    [dim]{decision.numbered_count} versions found[/dim]"
        )
        if keep is not None:
            modified = f" ({escape(keep.last_modified)})" if keep.last_modified else ""
            self.console.print(
                f"    [dim]Keeping version {escape(keep.version)}{modified}[/dim]"
            )
        self.console.print(
            f"    [dim]Versions to delete: {len(decision.to_delete)}[/dim]"
        )

    def print_skipped_versions(self, versions: List[str]) -> None:
        self.console.print(
            f"    [yellow]Ignoring non-numeric versions: "
            f"{escape(', '.join(versions))}[/yellow]"
        )

    def print_deletion(self, result: DeleteResult) -> None:
        """Print the outcome of one version delete."""
        status = result.status.value
        icon = STATUS_ICONS.get(status, "?")
        version = escape(result.version)

        if status == "dry_run":
            text = f"[DRY RUN] Would delete version {version}"
        elif status == "success":
            text = f"Deleted version {version}"
        else:
            text = f"Failed to delete version {version}: {escape(result.error_message or '')}"

        self.console.print(f"    {icon} {text}", markup=True, highlight=False)

    def print_function_result(self, result: FunctionResult, dry_run: bool = False) -> None:
        """Print the per-function totals."""
        if result.deleted > 0:
            self.console.print(f"  [green]{result.deleted} version(s) deleted[/green]")
        elif dry_run and result.would_delete > 0:
            self.console.print(
                f"  [yellow]{result.would_delete} version(s) would be deleted[/yellow]"
            )
        else:
            self.console.print("  [yellow]No versions deleted[/yellow]")

        if result.failed > 0:
            self.console.print(f"  [red]{result.failed} deletion(s) failed[/red]")

        if result.saved > 0:
            self.console.print(f"  [blue]{result.saved} version(s) preserved[/blue]")

    def print_function_error(self, function_name: str, message: str) -> None:
        self.console.print(
            f"  [red bold]Error cleaning {escape(function_name)}:[/red bold] "
            f"{escape(message)}"
        )

    # =========================================================================
    # Summary
    # =========================================================================

    def print_summary(self, summary: RunSummary) -> None:
        """Print the final run summary."""
        table = Table(show_header=False, box=None, padding=(0, 2))
        table.add_column("Metric", style="cyan")
        table.add_column("Value", style="white")

        table.add_row(
            "Functions processed:",
            f"{summary.functions_processed}/{summary.functions_total}",
        )
        table.add_row("Versions deleted:", f"[green]{summary.versions_deleted}[/]")
        table.add_row("Versions preserved:", f"[blue]{summary.versions_preserved}[/]")

        if summary.dry_run:
            table.add_row("Would delete:", f"[yellow]{summary.would_delete}[/]")
        if summary.delete_failures:
            table.add_row("Failed deletions:", f"[red]{summary.delete_failures}[/]")
        if summary.errors:
            table.add_row("Functions with errors:", f"[red]{summary.errors}[/]")

        title = "Cleanup stopped" if summary.halted else "Cleanup complete!"
        style = "yellow" if summary.halted else "green"
        self.console.print(f"\n[bold {style}]{title}[/bold {style}]")
        self.console.print(table)

        if summary.dry_run:
            self.console.print(
                "\n[yellow]Dry-run mode: no versions were actually deleted.[/yellow]"
            )

    def print_error(self, message: str) -> None:
        """Print a fatal error message."""
        self.console.print(f"\n[red bold]Error:[/red bold] {escape(message)}")

    def print_export(self, path: str) -> None:
        self.console.print(f"\n[dim]Summary written to {escape(path)}[/dim]")
