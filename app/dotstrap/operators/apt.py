"""APT package operator implementation.

Refreshes package lists, upgrades the system and installs packages
using apt-get (or apt where apt-get is missing).
"""

import logging

from dotstrap.utils.shell import CommandResult, run_external

logger = logging.getLogger(__name__)


class AptOperator:
    """Operator for APT packages.

    Every command runs through sudo and non-interactively, so a run never
    stops at a debconf prompt. DEBIAN_FRONTEND is set with `env` inside the
    sudo command line because sudo resets the caller's environment.

    Attributes:
        command: Package manager executable ("apt-get" or "apt").
        verbose: If True, package manager output goes to the terminal.

    Example:
        >>> operator = AptOperator("apt-get")
        >>> result = operator.install(["tmux", "tree"])
        >>> print(result.success)
    """

    def __init__(self, command: str = "apt-get", verbose: bool = False) -> None:
        """Initialize the operator.

        Args:
            command: Package manager executable to drive.
            verbose: Stream package manager output instead of capturing it.
        """
        self._command = command
        self._verbose = verbose

    @property
    def command(self) -> str:
        """Package manager executable this operator drives."""
        return self._command

    @property
    def verbose(self) -> bool:
        return self._verbose

    def update(self) -> CommandResult:
        """Refresh the package lists.

        Returns:
            CommandResult of the update.
        """
        return self._run(["update"])

    def upgrade(self) -> CommandResult:
        """Upgrade all installed packages.

        Returns:
            CommandResult of the upgrade.
        """
        return self._run(["upgrade", "-y"])

    def install(self, packages: list[str]) -> CommandResult:
        """Install packages in a single transaction.

        Args:
            packages: List of package names to install.

        Returns:
            CommandResult of the install.

        Raises:
            ValueError: If no packages are given.
        """
        if not packages:
            msg = "No packages to install"
            raise ValueError(msg)

        logger.info("Installing with %s: %s", self._command, ", ".join(packages))
        return self._run(["install", "-y", *packages])

    def _run(self, args: list[str]) -> CommandResult:
        """Run the package manager with sudo.

        Args:
            args: Subcommand and arguments.

        Returns:
            CommandResult of the invocation.
        """
        full_args = ["sudo", "env", "DEBIAN_FRONTEND=noninteractive", self._command, *args]
        logger.debug("Running %s", " ".join(full_args))
        try:
            return run_external(full_args, stream=self._verbose)
        except OSError as e:
            logger.warning("Failed to run %s: %s", self._command, e)
            return CommandResult(stdout="", stderr=str(e), returncode=127)
