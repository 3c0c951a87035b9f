"""Unit tests for installer-script steps."""

from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest
from dotstrap.models.step import StepStatus
from dotstrap.steps.base import StepContext, StepError
from dotstrap.steps.installers import NodeStep, OhMyZshStep, RustStep, fetch_script
from dotstrap.utils.shell import CommandResult

SCRIPT = CommandResult(stdout="#!/bin/sh\necho install\n", stderr="", returncode=0)


class TestFetchScript:
    """Tests for fetch_script."""

    @patch("dotstrap.steps.base.run_external", return_value=SCRIPT)
    def test_returns_script_text(self, mock_run: MagicMock, step_ctx: StepContext) -> None:
        step_ctx.verbose = True

        assert fetch_script(step_ctx, "https://example.invalid/i.sh") == SCRIPT.stdout
        assert mock_run.call_args.args[0] == ["curl", "-fsSL", "https://example.invalid/i.sh"]
        assert mock_run.call_args.kwargs["stream"] is False

    @patch("dotstrap.steps.base.run_external")
    def test_download_failure(self, mock_run: MagicMock, step_ctx: StepContext) -> None:
        mock_run.return_value = CommandResult(stdout="", stderr="curl: (6)", returncode=6)

        with pytest.raises(StepError, match="curl"):
            fetch_script(step_ctx, "https://example.invalid/i.sh")


class TestOhMyZshStep:
    """Tests for OhMyZshStep."""

    def test_present(self, step_ctx: StepContext, home: Path) -> None:
        (home / ".oh-my-zsh").mkdir()

        assert OhMyZshStep().run(step_ctx).status == StepStatus.ALREADY_INSTALLED

    @patch("dotstrap.steps.base.run_external", return_value=SCRIPT)
    def test_unattended_install(self, mock_run: MagicMock, step_ctx: StepContext) -> None:
        OhMyZshStep().run(step_ctx)

        args = mock_run.call_args.args[0]
        assert args[:2] == ["sh", "-c"]
        assert args[-1] == "--unattended"
        assert mock_run.call_args.kwargs["env"] == {"RUNZSH": "no", "CHSH": "no"}

    @patch("dotstrap.steps.base.run_external", return_value=SCRIPT)
    def test_container_sets_zsh_version(self, mock_run: MagicMock, step_ctx: StepContext) -> None:
        step_ctx.variant = "container"

        OhMyZshStep().run(step_ctx)

        assert mock_run.call_args.kwargs["env"]["ZSH_VERSION"] == "5.8"


class TestNodeStep:
    """Tests for NodeStep."""

    def test_present_via_nvm(self, step_ctx: StepContext, home: Path) -> None:
        (home / ".nvm" / "versions" / "node" / "v20.11.0").mkdir(parents=True)

        with patch("dotstrap.steps.installers.command_exists", return_value=False):
            assert NodeStep().run(step_ctx).status == StepStatus.ALREADY_INSTALLED

    @patch("dotstrap.steps.base.run_external", return_value=SCRIPT)
    def test_installs_nvm_then_lts(
        self, mock_run: MagicMock, step_ctx: StepContext, home: Path
    ) -> None:
        with patch("dotstrap.steps.installers.command_exists", return_value=False):
            result = NodeStep().run(step_ctx)

        assert result.status == StepStatus.DONE
        calls = mock_run.call_args_list
        assert calls[1].args[0] == ["bash"]
        assert calls[1].kwargs["input"] == SCRIPT.stdout
        assert "nvm install --lts" in calls[2].args[0][-1]
        assert calls[2].kwargs["env"] == {"NVM_DIR": str(home / ".nvm")}


class TestRustStep:
    """Tests for RustStep."""

    def test_present_in_cargo_bin(self, step_ctx: StepContext, home: Path) -> None:
        cargo_bin = home / ".cargo" / "bin"
        cargo_bin.mkdir(parents=True)
        (cargo_bin / "rustc").touch()

        with patch("dotstrap.steps.installers.command_exists", return_value=False):
            assert RustStep().run(step_ctx).status == StepStatus.ALREADY_INSTALLED

    @patch("dotstrap.steps.base.run_external", return_value=SCRIPT)
    def test_rustup_non_interactive(self, mock_run: MagicMock, step_ctx: StepContext) -> None:
        with patch("dotstrap.steps.installers.command_exists", return_value=False):
            RustStep().run(step_ctx)

        curl = mock_run.call_args_list[0].args[0]
        assert "--proto" in curl and "--tlsv1.2" in curl
        assert mock_run.call_args.args[0] == ["sh", "-s", "--", "-y"]
