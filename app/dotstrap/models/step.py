"""Step result models.

This module defines data structures for representing the outcome of a
single provisioning step (install a package, clone a plugin, copy a
config file).
"""

from dataclasses import dataclass, field
from enum import Enum


class StepStatus(Enum):
    """Outcome of running a provisioning step.

    Attributes:
        DONE: The side effect was performed.
        ALREADY_INSTALLED: The target already existed; nothing was done.
        DRY_RUN: The step would have run but dry-run mode is active.
        SKIPPED: The step does not apply to this run (e.g. container mode).
        FAILED: An external command failed; the run stops here.
    """

    DONE = "done"
    ALREADY_INSTALLED = "already_installed"
    DRY_RUN = "dry_run"
    SKIPPED = "skipped"
    FAILED = "failed"

    @property
    def label(self) -> str:
        """Short human-readable word printed after the progress line."""
        return _STATUS_LABELS[self]


_STATUS_LABELS: dict[StepStatus, str] = {
    StepStatus.DONE: "Done",
    StepStatus.ALREADY_INSTALLED: "Already installed",
    StepStatus.DRY_RUN: "[DRY RUN]",
    StepStatus.SKIPPED: "Skipped",
    StepStatus.FAILED: "Failed",
}


@dataclass(frozen=True, slots=True)
class StepResult:
    """Result of running a single step.

    Attributes:
        name: Stable step identifier (e.g. "package:zsh", "clone:tpm").
        description: Progress text shown to the user.
        status: Outcome of the step.
        message: Optional detail (skip reason, error output).
        backups: Backup copies created (or planned, in dry-run) by the step.
    """

    name: str
    description: str
    status: StepStatus
    message: str | None = None
    backups: tuple[str, ...] = field(default=())

    def __post_init__(self) -> None:
        """Validate result data after initialization."""
        if not self.name:
            msg = "Step name cannot be empty"
            raise ValueError(msg)
