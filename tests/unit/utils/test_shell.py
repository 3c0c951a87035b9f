"""Unit tests for shell execution utilities."""

import os
from unittest.mock import MagicMock, patch

import pytest
from dotstrap.utils.shell import (
    CommandResult,
    command_exists,
    run_command,
    run_external,
    run_interactive,
    run_streaming,
)


class TestCommandResult:
    """Tests for CommandResult."""

    def test_success_on_zero(self) -> None:
        assert CommandResult(stdout="", stderr="", returncode=0).success is True

    def test_failure_on_nonzero(self) -> None:
        assert CommandResult(stdout="", stderr="boom", returncode=100).success is False


class TestRunCommand:
    """Tests for run_command."""

    @patch("dotstrap.utils.shell.subprocess.run")
    def test_captures_output(self, mock_run: MagicMock) -> None:
        """run_command captures stdout and stderr."""
        mock_run.return_value = MagicMock(stdout="out", stderr="err", returncode=0)

        result = run_command(["echo", "hi"])

        assert result == CommandResult(stdout="out", stderr="err", returncode=0)
        assert mock_run.call_args.kwargs["capture_output"] is True
        assert mock_run.call_args.kwargs["timeout"] == 60.0

    @patch("dotstrap.utils.shell.subprocess.run")
    def test_passes_input(self, mock_run: MagicMock) -> None:
        """run_command feeds input to stdin."""
        mock_run.return_value = MagicMock(stdout="", stderr="", returncode=0)

        run_command(["bash"], input="echo hi")

        assert mock_run.call_args.kwargs["input"] == "echo hi"

    @patch("dotstrap.utils.shell.subprocess.run")
    def test_env_is_merged(self, mock_run: MagicMock) -> None:
        """Extra env vars are merged into the inherited environment."""
        mock_run.return_value = MagicMock(stdout="", stderr="", returncode=0)

        run_command(["env"], env={"DOTSTRAP_TEST": "1"})

        env = mock_run.call_args.kwargs["env"]
        assert env["DOTSTRAP_TEST"] == "1"
        assert env["HOME"] == os.environ["HOME"]

    @patch("dotstrap.utils.shell.subprocess.run")
    def test_no_env_inherits(self, mock_run: MagicMock) -> None:
        """Without extra env vars the environment is inherited unchanged."""
        mock_run.return_value = MagicMock(stdout="", stderr="", returncode=0)

        run_command(["true"])

        assert mock_run.call_args.kwargs["env"] is None


class TestRunStreaming:
    """Tests for run_streaming."""

    @patch("dotstrap.utils.shell.subprocess.run")
    def test_does_not_capture_output(self, mock_run: MagicMock) -> None:
        """run_streaming leaves stdout/stderr attached to the terminal."""
        mock_run.return_value = MagicMock(returncode=3)

        result = run_streaming(["make"])

        assert result.returncode == 3
        assert result.stdout == ""
        assert "capture_output" not in mock_run.call_args.kwargs
        assert "stdout" not in mock_run.call_args.kwargs


class TestRunExternal:
    """Tests for run_external."""

    @patch("dotstrap.utils.shell.run_streaming")
    @patch("dotstrap.utils.shell.run_command")
    def test_captures_without_timeout(self, mock_cmd: MagicMock, mock_stream: MagicMock) -> None:
        """Non-streaming runs capture output and never time out."""
        run_external(["git", "clone", "x"])

        mock_stream.assert_not_called()
        assert mock_cmd.call_args.kwargs["timeout"] is None

    @patch("dotstrap.utils.shell.run_streaming")
    @patch("dotstrap.utils.shell.run_command")
    def test_streams_when_requested(self, mock_cmd: MagicMock, mock_stream: MagicMock) -> None:
        run_external(["git", "clone", "x"], stream=True, cwd="/tmp")

        mock_cmd.assert_not_called()
        assert mock_stream.call_args.kwargs["cwd"] == "/tmp"


class TestCommandExists:
    """Tests for command_exists."""

    def test_found(self) -> None:
        with patch("dotstrap.utils.shell.shutil.which", return_value="/usr/bin/git"):
            assert command_exists("git") is True

    def test_missing(self) -> None:
        with patch("dotstrap.utils.shell.shutil.which", return_value=None):
            assert command_exists("nvim") is False


class TestRunInteractive:
    """Tests for run_interactive."""

    @patch("dotstrap.utils.shell.subprocess.run")
    def test_returns_exit_code(self, mock_run: MagicMock) -> None:
        mock_run.return_value = MagicMock(returncode=1)

        assert run_interactive(["docker", "build", "."]) == 1
        assert "PATH" in mock_run.call_args.kwargs["env"]

    def test_raises_file_not_found(self) -> None:
        with pytest.raises(FileNotFoundError):
            run_interactive(["definitely-not-a-real-command-xyz"])
