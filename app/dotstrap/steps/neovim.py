"""Build and install neovim from source."""

from __future__ import annotations

import logging
import tempfile
from pathlib import Path

from dotstrap.core.paths import ensure_cache_dir
from dotstrap.steps.base import Step, StepContext, StepError, check_result
from dotstrap.utils.shell import command_exists

logger = logging.getLogger(__name__)


class NeovimBuildStep(Step):
    """Install the build toolchain, then build and install neovim.

    The source tree is a shallow clone in a scratch directory under the
    cache dir and is removed afterwards, whether the build succeeded or not.

    Args:
        skip_reason: When set, the step is reported as skipped.
    """

    def __init__(self, skip_reason: str | None = None) -> None:
        self.skip_reason = skip_reason

    @property
    def name(self) -> str:
        return "neovim"

    @property
    def description(self) -> str:
        return "Building neovim"

    def is_satisfied(self, ctx: StepContext) -> bool:
        return command_exists("nvim")

    def apply(self, ctx: StepContext) -> None:
        deps = ctx.profile.packages.build_deps
        if deps:
            check_result(ctx.apt.install(deps), [ctx.apt.command, "install", "-y", *deps])

        try:
            cache_dir = ensure_cache_dir()
        except RuntimeError as e:
            raise StepError(str(e)) from e

        with tempfile.TemporaryDirectory(
            prefix="neovim-", dir=cache_dir, ignore_cleanup_errors=True
        ) as scratch:
            src = Path(scratch) / "neovim"
            ctx.run(["git", "clone", "--depth", "1", ctx.profile.sources.neovim, str(src)])
            ctx.run(["make", "CMAKE_BUILD_TYPE=Release"], cwd=str(src))
            ctx.run(["sudo", "make", "install"], cwd=str(src))
            logger.debug("neovim installed from %s", src)
