"""APT-backed steps: system update and single-package installs."""

from __future__ import annotations

import logging

from dotstrap.models.profile import Variant
from dotstrap.steps.base import Step, StepContext, check_result
from dotstrap.utils.shell import command_exists

logger = logging.getLogger(__name__)


class SystemUpdateStep(Step):
    """Refresh package lists, and upgrade installed packages on hosts.

    The container variant only refreshes the lists: upgrading a throwaway
    test image buys nothing and takes minutes.
    """

    def __init__(self, variant: Variant = "host") -> None:
        self._upgrade = variant == "host"

    @property
    def name(self) -> str:
        return "system:update"

    @property
    def description(self) -> str:
        if self._upgrade:
            return "Updating system packages"
        return "Updating package lists"

    def is_satisfied(self, ctx: StepContext) -> bool:
        return False

    def apply(self, ctx: StepContext) -> None:
        check_result(ctx.apt.update(), [ctx.apt.command, "update"])
        if self._upgrade:
            check_result(ctx.apt.upgrade(), [ctx.apt.command, "upgrade", "-y"])


class PackageStep(Step):
    """Install one APT package unless one of its commands is on PATH.

    Args:
        package: APT package name.
        commands: Executables whose presence means the package is installed.
            Defaults to the package name itself.
    """

    def __init__(self, package: str, commands: list[str] | None = None) -> None:
        if not package:
            msg = "Package name cannot be empty"
            raise ValueError(msg)
        self.package = package
        self.commands = commands or [package]

    @property
    def name(self) -> str:
        return f"package:{self.package}"

    @property
    def description(self) -> str:
        return f"Installing {self.package}"

    def is_satisfied(self, ctx: StepContext) -> bool:
        return any(command_exists(cmd) for cmd in self.commands)

    def apply(self, ctx: StepContext) -> None:
        result = ctx.apt.install([self.package])
        check_result(result, [ctx.apt.command, "install", "-y", self.package])


def package_steps(packages: list[str], commands: dict[str, list[str]]) -> list[Step]:
    """Build one PackageStep per package, preserving order.

    Args:
        packages: Package names.
        commands: Package name -> executables mapping from the profile.
    """
    return [PackageStep(pkg, commands.get(pkg)) for pkg in packages]
