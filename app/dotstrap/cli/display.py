"""Shared Rich display functions for setup runs.

Provides the results table, the run summary and the completion banner
printed at the end of `dotstrap setup`.
"""

from rich.markup import escape
from rich.table import Table

from dotstrap.core.runner import RunReport
from dotstrap.models.step import StepResult, StepStatus
from dotstrap.utils.formatting import console, print_info, print_success

_STATUS_MARKUP: dict[StepStatus, str] = {
    StepStatus.DONE: "[done]done[/done]",
    StepStatus.ALREADY_INSTALLED: "[present]present[/present]",
    StepStatus.DRY_RUN: "[dry_run]dry-run[/dry_run]",
    StepStatus.SKIPPED: "[skipped]skipped[/skipped]",
    StepStatus.FAILED: "[error]FAIL[/error]",
}


def create_results_table(results: list[StepResult], dry_run: bool = False) -> Table:
    """Create a Rich table displaying step results.

    Args:
        results: Step results in execution order.
        dry_run: Whether this is a dry-run (changes table title).

    Returns:
        Rich Table configured for results display.
    """
    title = "Setup Steps (Dry Run)" if dry_run else "Setup Steps"

    table = Table(
        title=title,
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("Status", width=10, justify="center")
    table.add_column("Step", no_wrap=True)
    table.add_column("Details")

    for result in results:
        details = result.message or ""
        if result.backups:
            backup_note = "backup: " + ", ".join(result.backups)
            details = f"{details}\n{backup_note}" if details else backup_note
        table.add_row(
            _STATUS_MARKUP[result.status],
            escape(result.name),
            f"[muted]{escape(details)}[/muted]",
        )

    return table


def print_run_summary(report: RunReport) -> None:
    """Print counts of changed, present and skipped steps.

    Args:
        report: Report of the finished run.
    """
    parts: list[str] = []
    done = report.count(StepStatus.DONE)
    present = report.count(StepStatus.ALREADY_INSTALLED)
    planned = report.count(StepStatus.DRY_RUN)
    skipped = report.count(StepStatus.SKIPPED)

    if done:
        parts.append(f"[done]{done} changed[/done]")
    if planned:
        parts.append(f"[dry_run]{planned} would change[/dry_run]")
    if present:
        parts.append(f"[present]{present} already installed[/present]")
    if skipped:
        parts.append(f"[skipped]{skipped} skipped[/skipped]")
    if report.error is not None:
        parts.append("[error]1 failed[/error]")

    if parts:
        console.print(f"\nSummary: {', '.join(parts)}")


def print_completion(report: RunReport) -> None:
    """Print the closing banner of a successful run.

    Args:
        report: Report of the finished run.
    """
    if report.variant == "container":
        print_info("Container test setup completed successfully!")
        print_info("To test your dotfiles in this container, run:")
        console.print("   chsh -s $(which zsh)", markup=False)
        console.print("   zsh", markup=False)
        console.print("   source ~/.zshrc", markup=False)
    else:
        print_info("Setup completed successfully!")
        print_info("run 'source ~/.zshrc' to apply changes")

    if report.dry_run:
        console.print("[dry_run]\\[DRY RUN] No changes were actually made[/]")

    if report.variant == "container":
        print_success("Container test environment is ready!")
    else:
        print_success("We Are all Set Up Now!")
