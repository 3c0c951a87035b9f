"""Utility modules for dotstrap.

This module exports commonly used utility functions.
"""

from dotstrap.utils.formatting import (
    configure_logging,
    console,
    err_console,
    print_error,
    print_info,
    print_progress,
    print_step_status,
    print_success,
    print_warning,
)
from dotstrap.utils.shell import (
    CommandResult,
    command_exists,
    run_command,
    run_external,
    run_interactive,
    run_streaming,
)

__all__ = [
    "CommandResult",
    "command_exists",
    "configure_logging",
    "console",
    "err_console",
    "print_error",
    "print_info",
    "print_progress",
    "print_step_status",
    "print_success",
    "print_warning",
    "run_command",
    "run_external",
    "run_interactive",
    "run_streaming",
]
