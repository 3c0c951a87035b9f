"""Unit tests for the step base class and run context."""

from unittest.mock import MagicMock, patch

import pytest
from dotstrap.models.step import StepStatus
from dotstrap.steps.base import Step, StepContext, StepError, check_result
from dotstrap.utils.shell import CommandResult


class MarkerStep(Step):
    def __init__(self, satisfied: bool = False, skip_reason: str | None = None) -> None:
        self.satisfied = satisfied
        self.skip_reason = skip_reason
        self.applied = 0

    @property
    def name(self) -> str:
        return "marker"

    @property
    def description(self) -> str:
        return "Creating marker"

    def is_satisfied(self, ctx: StepContext) -> bool:
        return self.satisfied

    def apply(self, ctx: StepContext) -> None:
        self.applied += 1


class TestStepRun:
    """Tests for Step.run."""

    def test_applies_when_missing(self, step_ctx: StepContext) -> None:
        step = MarkerStep()

        result = step.run(step_ctx)

        assert result.status == StepStatus.DONE
        assert step.applied == 1

    def test_already_present(self, step_ctx: StepContext) -> None:
        step = MarkerStep(satisfied=True)

        assert step.run(step_ctx).status == StepStatus.ALREADY_INSTALLED
        assert step.applied == 0

    def test_dry_run(self, dry_ctx: StepContext) -> None:
        step = MarkerStep()

        assert step.run(dry_ctx).status == StepStatus.DRY_RUN
        assert step.applied == 0

    def test_dry_run_reports_present(self, dry_ctx: StepContext) -> None:
        assert MarkerStep(satisfied=True).run(dry_ctx).status == StepStatus.ALREADY_INSTALLED

    def test_skip_reason(self, step_ctx: StepContext) -> None:
        result = MarkerStep(skip_reason="container mode").run(step_ctx)

        assert result.status == StepStatus.SKIPPED
        assert result.message == "container mode"

    def test_repr(self) -> None:
        assert repr(MarkerStep()) == "<MarkerStep marker>"


class TestCheckResult:
    """Tests for check_result."""

    def test_success_passes(self) -> None:
        check_result(CommandResult(stdout="", stderr="", returncode=0), ["true"])

    def test_failure_includes_stderr(self) -> None:
        result = CommandResult(stdout="", stderr="fatal: repository not found\n", returncode=128)

        with pytest.raises(StepError, match="exit code 128: git clone x") as exc_info:
            check_result(result, ["git", "clone", "x"])
        assert "repository not found" in str(exc_info.value)


class TestStepContextRun:
    """Tests for StepContext.run."""

    @patch("dotstrap.steps.base.run_external")
    def test_captures_by_default(self, mock_run: MagicMock, step_ctx: StepContext) -> None:
        mock_run.return_value = CommandResult(stdout="ok", stderr="", returncode=0)

        assert step_ctx.run(["git", "--version"]).stdout == "ok"
        assert mock_run.call_args.kwargs["stream"] is False

    @patch("dotstrap.steps.base.run_external")
    def test_verbose_streams_unless_capture(
        self, mock_run: MagicMock, step_ctx: StepContext
    ) -> None:
        mock_run.return_value = CommandResult(stdout="", stderr="", returncode=0)
        step_ctx.verbose = True

        step_ctx.run(["make"])
        assert mock_run.call_args.kwargs["stream"] is True

        step_ctx.run(["curl", "-fsSL", "x"], capture=True)
        assert mock_run.call_args.kwargs["stream"] is False

    @patch("dotstrap.steps.base.run_external", side_effect=FileNotFoundError("git"))
    def test_missing_executable(self, _run: MagicMock, step_ctx: StepContext) -> None:
        with pytest.raises(StepError, match="Cannot run git"):
            step_ctx.run(["git", "clone", "x"])

    @patch("dotstrap.steps.base.run_external")
    def test_nonzero_exit(self, mock_run: MagicMock, step_ctx: StepContext) -> None:
        mock_run.return_value = CommandResult(stdout="", stderr="", returncode=2)

        with pytest.raises(StepError, match="exit code 2"):
            step_ctx.run(["make"])
