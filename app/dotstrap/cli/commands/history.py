"""History command for viewing past setup runs."""

import json
from datetime import datetime
from typing import Annotated

import typer
from rich.markup import escape
from rich.table import Table

from dotstrap.core.state import StateManager
from dotstrap.models.history import RunRecord
from dotstrap.models.step import StepStatus
from dotstrap.utils.formatting import console, print_info

app = typer.Typer(
    name="history",
    help="View history of setup runs.",
    invoke_without_command=True,
)


@app.callback(invoke_without_command=True)
def history(
    ctx: typer.Context,
    limit: Annotated[
        int,
        typer.Option(
            "--limit",
            "-n",
            help="Maximum number of runs to show.",
        ),
    ] = 20,
    json_output: Annotated[
        bool,
        typer.Option(
            "--json",
            help="Output as JSON.",
        ),
    ] = False,
) -> None:
    """Show history of setup runs.

    Dry runs are not recorded.

    Examples:
        dotstrap history            # Show last 20 runs
        dotstrap history -n 5       # Show last 5 runs
        dotstrap history --json     # JSON output for scripting
    """
    if ctx.invoked_subcommand is not None:
        return

    records = StateManager().get_history(limit=limit)

    if not records:
        print_info("No history entries found.")
        return

    if json_output:
        _print_json(records)
    else:
        _print_table(records)


def _print_table(records: list[RunRecord]) -> None:
    table = Table(
        title="Setup History",
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("ID", style="muted")
    table.add_column("Timestamp", style="info")
    table.add_column("Variant")
    table.add_column("Changed", justify="right")
    table.add_column("Result")

    for record in records:
        if record.success:
            outcome = "[success]ok[/]"
        else:
            failed = next((s.name for s in record.steps if s.status == StepStatus.FAILED), "?")
            outcome = f"[error]failed at {escape(failed)}[/]"
        table.add_row(
            record.id[:8],
            _format_timestamp(record.timestamp),
            record.variant,
            str(record.changed_count),
            outcome,
        )

    console.print(table)


def _format_timestamp(iso_timestamp: str) -> str:
    """Format an ISO 8601 timestamp as YYYY-MM-DD HH:MM."""
    dt = datetime.fromisoformat(iso_timestamp.replace("Z", "+00:00"))
    return dt.strftime("%Y-%m-%d %H:%M")


def _print_json(records: list[RunRecord]) -> None:
    output = [record.to_dict() for record in records]
    console.print_json(json.dumps(output))
