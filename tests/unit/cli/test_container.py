"""Unit tests for the container command."""

from pathlib import Path
from unittest.mock import MagicMock, patch

from dotstrap.cli.main import app
from dotstrap.core.container import ContainerError
from typer.testing import CliRunner

runner = CliRunner()


class TestContainerCommand:
    """Tests for dotstrap container."""

    @patch("dotstrap.cli.commands.container.run_container_test", return_value=0)
    def test_success(self, mock_test: MagicMock, tmp_path: Path) -> None:
        result = runner.invoke(app, ["container", "-c", str(tmp_path), "-t", "mine"])

        assert result.exit_code == 0
        mock_test.assert_called_once_with(tmp_path, "mine")

    @patch("dotstrap.cli.commands.container.run_container_test", return_value=0)
    def test_warns_without_host_zsh(self, _test: MagicMock) -> None:
        with patch("dotstrap.cli.commands.container.command_exists", return_value=False):
            result = runner.invoke(app, ["container"])

        assert result.exit_code == 0
        assert "zsh is not installed on the host" in result.output

    @patch(
        "dotstrap.cli.commands.container.run_container_test",
        side_effect=ContainerError("Docker is not installed."),
    )
    def test_missing_docker(self, _test: MagicMock) -> None:
        result = runner.invoke(app, ["container"])

        assert result.exit_code == 1
        assert "Docker is not installed" in result.output

    @patch("dotstrap.cli.commands.container.run_container_test", return_value=125)
    def test_propagates_exit_code(self, _test: MagicMock) -> None:
        result = runner.invoke(app, ["container"])

        assert result.exit_code == 125
