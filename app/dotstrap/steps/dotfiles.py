"""Install the shell and tmux configuration files into the home directory.

On hosts the files come from the dotfiles git repository, cloned into a
scratch directory that is removed afterwards. In the container variant
they are copied from the project checkout mounted at ``~/dotfiles``.

Targets whose content already matches the source are left untouched;
any other existing target is backed up first when backups are enabled.
"""

from __future__ import annotations

import filecmp
import logging
import shutil
import tempfile
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

from dotstrap.core.backup import BackupError, backup_config
from dotstrap.core.paths import ensure_cache_dir, expand_user_path
from dotstrap.models.step import StepResult, StepStatus
from dotstrap.steps.base import Step, StepContext, StepError

logger = logging.getLogger(__name__)


class DotfilesStep(Step):
    """Copy .zshrc and .tmux.conf into place."""

    @property
    def name(self) -> str:
        return "dotfiles"

    @property
    def description(self) -> str:
        return "Setting up dotfiles"

    def targets(self, ctx: StepContext) -> dict[str, Path]:
        """Map each source file name to its absolute target path."""
        files = self._files(ctx)
        return {source: Path.home() / target for source, target in files.items()}

    def is_satisfied(self, ctx: StepContext) -> bool:
        # Content can only be compared once the source has been fetched.
        return False

    def apply(self, ctx: StepContext) -> None:
        self._install(ctx)

    def run(self, ctx: StepContext) -> StepResult:
        """Fetch the dotfiles and copy every changed file into place.

        A dry run on a host cannot see the repository contents, so every
        existing target is reported as a planned backup. In the container
        variant the local sources are compared like in a real run.

        Raises:
            StepError: If the source cannot be fetched, a source file is
                missing, or a backup or copy fails.
        """
        if ctx.dry_run:
            return self._plan(ctx)

        changed, backups = self._install(ctx)
        if not changed:
            return self.result(StepStatus.ALREADY_INSTALLED)
        return self.result(StepStatus.DONE, backups=tuple(backups))

    def _plan(self, ctx: StepContext) -> StepResult:
        targets = self.targets(ctx)
        if ctx.variant == "container":
            with self._source_dir(ctx) as src_dir:
                targets = {
                    name: target
                    for name, target in targets.items()
                    if not self._up_to_date(src_dir, name, target)
                }
            if not targets:
                return self.result(StepStatus.ALREADY_INSTALLED)

        planned: list[str] = []
        if ctx.backup:
            for target in targets.values():
                dest = backup_config(target, dry_run=True)
                if dest is not None:
                    planned.append(str(dest))
        return self.result(StepStatus.DRY_RUN, backups=tuple(planned))

    @staticmethod
    def _up_to_date(src_dir: Path, source_name: str, target: Path) -> bool:
        """Check that the target holds the same content as its source.

        Raises:
            StepError: If the source file is missing.
        """
        source = src_dir / source_name
        if not source.is_file():
            msg = f"Dotfile {source_name} not found in {src_dir}"
            raise StepError(msg)
        return target.is_file() and filecmp.cmp(source, target, shallow=False)

    def _files(self, ctx: StepContext) -> dict[str, str]:
        if ctx.variant == "container":
            return ctx.profile.dotfiles.local_files
        return ctx.profile.dotfiles.repo_files

    @contextmanager
    def _source_dir(self, ctx: StepContext) -> Iterator[Path]:
        """Yield a directory holding the dotfiles sources."""
        if ctx.variant == "container":
            yield expand_user_path(ctx.profile.dotfiles.local_dir)
            return

        try:
            cache_dir = ensure_cache_dir()
        except RuntimeError as e:
            raise StepError(str(e)) from e

        with tempfile.TemporaryDirectory(prefix="dotfiles-", dir=cache_dir) as scratch:
            checkout = Path(scratch) / "dotfiles"
            ctx.run(["git", "clone", "--depth", "1", ctx.profile.dotfiles.repo, str(checkout)])
            yield checkout

    def _install(self, ctx: StepContext) -> tuple[list[str], list[str]]:
        """Copy changed files; return (changed targets, backups written)."""
        changed: list[str] = []
        backups: list[str] = []

        with self._source_dir(ctx) as src_dir:
            for source_name, target in self.targets(ctx).items():
                source = src_dir / source_name
                if self._up_to_date(src_dir, source_name, target):
                    logger.debug("%s is up to date", target)
                    continue

                if ctx.backup:
                    try:
                        dest = backup_config(target)
                    except BackupError as e:
                        raise StepError(str(e)) from e
                    if dest is not None:
                        backups.append(str(dest))

                try:
                    target.parent.mkdir(parents=True, exist_ok=True)
                    if target.is_symlink():
                        target.unlink()
                    shutil.copyfile(source, target)
                except OSError as e:
                    msg = f"Failed to copy {source} to {target}: {e}"
                    raise StepError(msg) from e
                changed.append(str(target))

        return changed, backups
