"""Rich console formatting utilities.

Provides consistent formatting for CLI output using Rich.
"""

from __future__ import annotations

import logging
import sys

from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from dotstrap.core.theme import get_theme


def _detect_color_system() -> str | None:
    """Detect the best color system for the current terminal.

    Returns "truecolor" for interactive terminals to enable full hex color support,
    None otherwise to let Rich auto-detect.
    """
    if sys.stdout.isatty():
        return "truecolor"
    return None


# Shared console instances (theme loaded once at import)
console = Console(theme=get_theme(), color_system=_detect_color_system())
err_console = Console(theme=get_theme(), stderr=True, color_system=_detect_color_system())


def configure_logging(verbose: bool = False) -> None:
    """Route log records to stderr through Rich.

    Verbose runs show everything down to DEBUG; otherwise only warnings and
    errors reach the terminal. Calling this more than once replaces the
    previously installed handler.

    Args:
        verbose: Enable DEBUG level logging.
    """
    root = logging.getLogger()
    for handler in list(root.handlers):
        if isinstance(handler, RichHandler):
            root.removeHandler(handler)

    handler = RichHandler(console=err_console, show_path=False, markup=False)
    root.addHandler(handler)
    root.setLevel(logging.DEBUG if verbose else logging.WARNING)


_progress_open = False


def end_progress_line() -> None:
    """Terminate a pending progress line so the next output starts on its own line."""
    global _progress_open
    if _progress_open:
        console.print()
        _progress_open = False


def print_info(message: str) -> None:
    """Print an info message."""
    end_progress_line()
    console.print(f"[info]\\[INFO][/] {escape(message)}")


def print_warning(message: str) -> None:
    """Print a warning message."""
    end_progress_line()
    err_console.print(f"[warning]\\[WARN][/] {escape(message)}")


def print_error(message: str) -> None:
    """Print an error message."""
    end_progress_line()
    err_console.print(f"[error]\\[ERROR][/] {escape(message)}")


def print_success(message: str) -> None:
    """Print a success message."""
    console.print(f"[success]{escape(message)}[/]")


def print_progress(message: str) -> None:
    """Print a pending progress line, completed later with the step status."""
    global _progress_open
    console.print(f"{escape(message)}... ", end="")
    _progress_open = True


_STATUS_STYLES: dict[str, str] = {
    "done": "done",
    "already_installed": "present",
    "dry_run": "dry_run",
    "skipped": "skipped",
    "failed": "error",
}


def print_step_status(status: str, label: str) -> None:
    """Complete a progress line with a styled status word.

    Args:
        status: Status value (selects the style).
        label: Text to print, e.g. "Done".
    """
    global _progress_open
    _progress_open = False
    style = _STATUS_STYLES.get(status, "text")
    console.print(f"[{style}]{escape(label)}[/]")
