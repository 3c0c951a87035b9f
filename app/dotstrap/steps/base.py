"""Abstract base class for provisioning steps.

Every step follows the same shape: check whether its target (a binary,
a directory, a config file) is already present, and only if it is not,
perform the side effect that creates it. Steps are independent of one
another apart from their order in the plan.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass

from dotstrap.models.profile import Profile, Variant
from dotstrap.models.step import StepResult, StepStatus
from dotstrap.operators.apt import AptOperator
from dotstrap.utils.shell import CommandResult, run_external

logger = logging.getLogger(__name__)


class StepError(Exception):
    """Raised when a step's external command fails.

    Attributes:
        step: Name of the failing step, filled in by the runner.
    """

    def __init__(self, message: str, step: str | None = None) -> None:
        super().__init__(message)
        self.step = step


@dataclass(slots=True)
class StepContext:
    """Options and collaborators shared by all steps of a run.

    Attributes:
        profile: Package names and upstream URLs.
        apt: Package manager operator.
        variant: "host" or "container".
        dry_run: Report what would happen without changing anything.
        backup: Back up existing configs before overwriting them.
        verbose: Stream external command output to the terminal.
    """

    profile: Profile
    apt: AptOperator
    variant: Variant = "host"
    dry_run: bool = False
    backup: bool = True
    verbose: bool = False

    def run(
        self,
        args: list[str],
        *,
        cwd: str | None = None,
        env: dict[str, str] | None = None,
        input: str | None = None,
        capture: bool = False,
    ) -> CommandResult:
        """Run an external command, raising StepError if it fails.

        Args:
            args: Command and arguments.
            cwd: Working directory.
            env: Extra environment variables.
            input: Text for the command's standard input.
            capture: Capture output even in verbose mode.

        Returns:
            CommandResult of the successful command.

        Raises:
            StepError: If the command exits non-zero or cannot be started.
        """
        logger.debug("Running %s", " ".join(args))
        try:
            result = run_external(
                args,
                stream=self.verbose and not capture,
                cwd=cwd,
                env=env,
                input=input,
            )
        except OSError as e:
            msg = f"Cannot run {args[0]}: {e}"
            raise StepError(msg) from e
        check_result(result, args)
        return result


def check_result(result: CommandResult, args: list[str]) -> None:
    """Raise StepError for a failed command.

    Args:
        result: Result to check.
        args: The command that produced it, for the error message.

    Raises:
        StepError: If the command failed.
    """
    if result.success:
        return
    detail = result.stderr.strip() or result.stdout.strip()
    msg = f"Command failed with exit code {result.returncode}: {' '.join(args)}"
    if detail:
        msg = f"{msg}\n{detail}"
    raise StepError(msg)


class Step(ABC):
    """Abstract base class for all provisioning steps.

    Subclasses provide a stable ``name``, the progress ``description``,
    a read-only :meth:`is_satisfied` check and the :meth:`apply` side effect.

    Example:
        >>> step = PackageStep("tmux")
        >>> result = step.run(ctx)
        >>> print(result.status.label)
    """

    #: Set on steps that do not apply to this run (e.g. heavy builds in containers).
    skip_reason: str | None = None

    @property
    @abstractmethod
    def name(self) -> str:
        """Stable identifier used in history records."""

    @property
    @abstractmethod
    def description(self) -> str:
        """Progress text, e.g. "Installing zsh"."""

    @abstractmethod
    def is_satisfied(self, ctx: StepContext) -> bool:
        """Check whether the step's target is already present.

        Must not modify the system.
        """

    @abstractmethod
    def apply(self, ctx: StepContext) -> None:
        """Perform the side effect.

        Raises:
            StepError: If an external command fails.
        """

    def run(self, ctx: StepContext) -> StepResult:
        """Run the step: skip, report present, simulate or apply.

        Args:
            ctx: Shared run context.

        Returns:
            StepResult describing what happened.

        Raises:
            StepError: If applying the step fails.
        """
        if self.skip_reason:
            return self.result(StepStatus.SKIPPED, self.skip_reason)

        if self.is_satisfied(ctx):
            logger.debug("%s: already present", self.name)
            return self.result(StepStatus.ALREADY_INSTALLED)

        if ctx.dry_run:
            return self.result(StepStatus.DRY_RUN)

        self.apply(ctx)
        return self.result(StepStatus.DONE)

    def result(
        self,
        status: StepStatus,
        message: str | None = None,
        backups: tuple[str, ...] = (),
    ) -> StepResult:
        """Build a StepResult for this step."""
        return StepResult(
            name=self.name,
            description=self.description,
            status=status,
            message=message,
            backups=backups,
        )

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.name}>"
