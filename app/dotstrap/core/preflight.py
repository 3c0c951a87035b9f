"""Environment checks run before any step touches the system.

Both checks are read-only. A failure raises PreflightError, which the
CLI turns into exit code 1 before anything has been installed, cloned
or copied.
"""

import logging
import os

from dotstrap.utils.shell import command_exists

logger = logging.getLogger(__name__)

# Preferred first: apt-get has a stable interface for scripts.
SUPPORTED_PACKAGE_MANAGERS: tuple[str, ...] = ("apt-get", "apt")


class PreflightError(Exception):
    """Raised when the environment cannot run the setup."""


def is_root() -> bool:
    """Check whether the current process runs with an effective UID of 0."""
    return os.geteuid() == 0


def check_not_root() -> None:
    """Refuse to run as root.

    The setup writes into the invoking user's home directory and
    escalates with sudo only for package installation.

    Raises:
        PreflightError: If running as root.
    """
    if is_root():
        msg = "This script should not be run as root"
        raise PreflightError(msg)


def detect_package_manager() -> str:
    """Find a supported package manager.

    Returns:
        Command name of the first supported package manager found.

    Raises:
        PreflightError: If neither apt-get nor apt is available.
    """
    for candidate in SUPPORTED_PACKAGE_MANAGERS:
        if command_exists(candidate):
            logger.debug("Using package manager %s", candidate)
            return candidate
    msg = "This script only works on Debian-based distros (apt or apt-get required)"
    raise PreflightError(msg)


def run_preflight() -> str:
    """Run all preflight checks in order.

    Returns:
        The package manager command to use.

    Raises:
        PreflightError: On the first failed check.
    """
    check_not_root()
    return detect_package_manager()
