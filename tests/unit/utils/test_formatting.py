"""Unit tests for console formatting helpers."""

import logging

import pytest
from dotstrap.utils.formatting import (
    configure_logging,
    print_error,
    print_info,
    print_progress,
    print_step_status,
)
from rich.logging import RichHandler


class TestPrintHelpers:
    """Tests for the tagged print helpers."""

    def test_info_is_tagged(self, capsys: pytest.CaptureFixture[str]) -> None:
        print_info("Starting environment setup...")

        assert "[INFO] Starting environment setup..." in capsys.readouterr().out

    def test_error_goes_to_stderr(self, capsys: pytest.CaptureFixture[str]) -> None:
        print_error("This script should not be run as root")

        captured = capsys.readouterr()
        assert "[ERROR] This script should not be run as root" in captured.err
        assert captured.out == ""

    def test_markup_in_message_is_escaped(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Brackets in external output are printed literally."""
        print_info("E: [bold]not markup[/bold]")

        assert "[bold]not markup[/bold]" in capsys.readouterr().out

    def test_progress_line_then_status(self, capsys: pytest.CaptureFixture[str]) -> None:
        print_progress("Installing zsh")
        print_step_status("already_installed", "Already installed")

        assert "Installing zsh... Already installed" in capsys.readouterr().out

    def test_info_ends_open_progress_line(self, capsys: pytest.CaptureFixture[str]) -> None:
        print_progress("Setting up dotfiles")
        print_info("Backing up /home/u/.zshrc")
        print_step_status("done", "Done")

        lines = capsys.readouterr().out.splitlines()
        assert [line.rstrip() for line in lines] == [
            "Setting up dotfiles...",
            "[INFO] Backing up /home/u/.zshrc",
            "Done",
        ]

    def test_dry_run_label_printed_literally(self, capsys: pytest.CaptureFixture[str]) -> None:
        print_step_status("dry_run", "[DRY RUN]")

        assert "[DRY RUN]" in capsys.readouterr().out


class TestConfigureLogging:
    """Tests for configure_logging."""

    def test_verbose_sets_debug(self) -> None:
        configure_logging(verbose=True)

        root = logging.getLogger()
        assert root.level == logging.DEBUG
        assert sum(isinstance(h, RichHandler) for h in root.handlers) == 1

    def test_reconfigure_replaces_handler(self) -> None:
        configure_logging(verbose=True)
        configure_logging(verbose=False)

        root = logging.getLogger()
        assert root.level == logging.WARNING
        assert sum(isinstance(h, RichHandler) for h in root.handlers) == 1
