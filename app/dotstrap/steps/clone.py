"""Steps that clone git repositories into the home directory."""

from __future__ import annotations

import logging
from pathlib import Path

from dotstrap.core.paths import get_tmux_conf_path
from dotstrap.steps.base import Step, StepContext
from dotstrap.utils.shell import command_exists

logger = logging.getLogger(__name__)


class GitCloneStep(Step):
    """Clone a repository unless its destination directory exists.

    Args:
        key: Short identifier, used in the step name ("clone:<key>").
        url: Repository URL.
        dest: Destination directory.
        label: Progress text.
    """

    def __init__(self, key: str, url: str, dest: Path, label: str) -> None:
        self.key = key
        self.url = url
        self.dest = dest
        self._label = label

    @property
    def name(self) -> str:
        return f"clone:{self.key}"

    @property
    def description(self) -> str:
        return self._label

    def is_satisfied(self, ctx: StepContext) -> bool:
        return self.dest.is_dir()

    def apply(self, ctx: StepContext) -> None:
        self.dest.parent.mkdir(parents=True, exist_ok=True)
        ctx.run(["git", "clone", self.url, str(self.dest)])


class TpmStep(GitCloneStep):
    """Clone the Tmux Plugin Manager and install the configured plugins.

    Plugin installation needs a running tmux server that has sourced
    ~/.tmux.conf, so a detached session is started for the duration of
    the install and the server is killed afterwards. When tmux or the
    config is missing, only the clone happens.
    """

    SESSION = "dotstrap-tpm"

    def __init__(self, url: str, dest: Path) -> None:
        super().__init__("tpm", url, dest, "Installing Tpm for tmux")

    def apply(self, ctx: StepContext) -> None:
        super().apply(ctx)

        tmux_conf = get_tmux_conf_path()
        if not command_exists("tmux"):
            logger.warning("tmux not found, skipping TPM plugin installation")
            return
        if not tmux_conf.exists():
            logger.warning("%s not found, skipping TPM plugin installation", tmux_conf)
            return

        install_script = self.dest / "scripts" / "install_plugins.sh"
        ctx.run(["tmux", "start-server"])
        ctx.run(["tmux", "new-session", "-d", "-s", self.SESSION])
        try:
            ctx.run(["tmux", "source-file", str(tmux_conf)])
            ctx.run(["tmux", "run-shell", str(install_script)])
        finally:
            ctx.run(["tmux", "kill-server"])
