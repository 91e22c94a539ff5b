"""Rich display functions for discovery and removal results.

Provides the peek report, the size summary and the deletion results
table shown by the rmapp command.
"""

from rich.table import Table

from rmapp.deleter.models import DeletionMode, DeletionReport, DeletionStatus
from rmapp.finder.models import MatchRecord
from rmapp.utils.formatting import console, format_size_markup


def sort_by_size(matches: list[MatchRecord]) -> list[MatchRecord]:
    """Order matches largest first, ties broken by path."""
    return sorted(matches, key=lambda m: (-m.size_bytes, m.path))


def create_matches_table(matches: list[MatchRecord], app_name: str) -> Table:
    """Create a Rich table listing matched paths.

    Symlinks are labelled separately from regular matches.

    Args:
        matches: Matches to display, already in display order.
        app_name: Application the matches belong to.

    Returns:
        Rich Table configured for match display.
    """
    table = Table(
        title=f"Files for {app_name}",
        show_header=True,
        header_style="heading",
        border_style="border",
    )
    table.add_column("Kind", width=8)
    table.add_column("Path", overflow="fold")
    table.add_column("Size", justify="right")

    for match in matches:
        kind = "[symlink]symlink[/]" if match.is_symlink else "[app]match[/]"
        table.add_row(kind, f"[path]{match.path}[/]", format_size_markup(match.size_bytes))

    return table


def print_peek_report(matches: list[MatchRecord], app_name: str) -> None:
    """Print every match with its size and the total that would be freed."""
    if not matches:
        console.print(f"Found 0 files for [app]{app_name}[/]")
        return

    ordered = sort_by_size(matches)
    console.print(f"\nFound [path]{len(ordered)}[/] files for [app]{app_name}[/]")
    console.print(create_matches_table(ordered, app_name))

    total = sum(m.size_bytes for m in ordered)
    console.print(f"→ Total: {format_size_markup(total)} would be freed\n")
    console.print(
        "[muted]Run again without -p/--peek to Trash files "
        "or with -f/--force to delete files[/]"
    )


def print_size_report(matches: list[MatchRecord], app_name: str) -> None:
    """Print the total size of an application's data."""
    total = sum(m.size_bytes for m in matches)
    console.print(
        f"[app]{app_name}[/] uses {format_size_markup(total)} across {len(matches)} path(s)"
    )


def create_results_table(report: DeletionReport) -> Table:
    """Create a Rich table with one row per removed path.

    Args:
        report: Deletion report to display.

    Returns:
        Rich Table configured for results display.
    """
    done_label = "trashed" if report.mode == DeletionMode.TRASH else "deleted"

    table = Table(
        title="Results",
        show_header=True,
        header_style="heading",
        border_style="border",
    )
    table.add_column("Status", width=10)
    table.add_column("Path", overflow="fold")
    table.add_column("Details", style="muted")

    for outcome in report.outcomes:
        if outcome.status == DeletionStatus.SUCCEEDED:
            status = f"[success]{done_label}[/]"
            detail = "with elevated privileges" if outcome.escalated else ""
        elif outcome.status == DeletionStatus.SKIPPED:
            status = "[muted]skipped[/]"
            detail = outcome.error or ""
        else:
            status = "[error]failed[/]"
            detail = outcome.error or "Unknown error"
        table.add_row(status, f"[path]{outcome.path}[/]", detail)

    return table


def print_deletion_summary(report: DeletionReport) -> None:
    """Print the freed total, unless a privileged batch failed."""
    if not report.show_total:
        return
    console.print(f"Total: {format_size_markup(report.bytes_freed)} has been freed\n")
