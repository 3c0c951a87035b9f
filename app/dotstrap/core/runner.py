"""Sequential execution of a step plan and run history recording.

Steps run strictly in order. The first failing step stops the run: the
remaining steps are not attempted, matching a shell script running under
``set -euo pipefail``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from dotstrap import __version__
from dotstrap.core.state import StateManager
from dotstrap.models.history import create_run_record
from dotstrap.models.step import StepResult, StepStatus
from dotstrap.steps.base import Step, StepContext, StepError
from dotstrap.utils.formatting import (
    end_progress_line,
    print_progress,
    print_step_status,
    print_warning,
)

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class RunReport:
    """Outcome of running a plan.

    Attributes:
        variant: Setup variant that ran.
        dry_run: Whether the run was simulated.
        results: Results of the steps that were attempted, in order.
        error: The error that stopped the run, if any.
    """

    variant: str
    dry_run: bool
    results: list[StepResult] = field(default_factory=list)
    error: StepError | None = None

    @property
    def success(self) -> bool:
        return self.error is None

    @property
    def backups(self) -> list[str]:
        """All backup paths created (or planned) during the run."""
        return [path for result in self.results for path in result.backups]

    def count(self, status: StepStatus) -> int:
        return sum(1 for r in self.results if r.status == status)


def run_plan(steps: list[Step], ctx: StepContext) -> RunReport:
    """Run steps in order, printing a progress line for each.

    Args:
        steps: Ordered steps from :func:`~dotstrap.steps.plan.build_plan`.
        ctx: Shared run context.

    Returns:
        RunReport; ``report.error`` is set when a step failed.
    """
    report = RunReport(variant=ctx.variant, dry_run=ctx.dry_run)

    for step in steps:
        print_progress(step.description)
        if ctx.verbose:
            end_progress_line()

        try:
            result = step.run(ctx)
        except StepError as e:
            e.step = step.name
            logger.debug("Step %s failed: %s", step.name, e)
            result = step.result(StepStatus.FAILED, str(e))
            report.results.append(result)
            report.error = e
            print_step_status(result.status.value, result.status.label)
            break

        report.results.append(result)
        print_step_status(result.status.value, result.status.label)

    return report


def record_run(report: RunReport, command: str = "dotstrap setup") -> None:
    """Append a real run to the history file.

    Dry runs are never recorded. Errors during history recording are
    logged but do **not** interrupt the calling command's flow.

    Args:
        report: Report returned by :func:`run_plan`.
        command: Command string stored in the record metadata.
    """
    if report.dry_run or not report.results:
        return

    try:
        record = create_run_record(
            variant=report.variant,
            results=report.results,
            success=report.success,
            metadata={"command": command, "version": __version__},
        )
        StateManager().record_run(record)
        logger.debug("Recorded run %s to history", record.id)
    except (OSError, RuntimeError) as e:
        logger.warning("Failed to record run to history: %s", str(e))
        print_warning(f"Could not record run to history: {e}")
